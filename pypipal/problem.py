import abc
import numbers
from typing import Tuple, Union

import numpy as np
import scipy as sp

Matrix = Union[np.ndarray, sp.sparse.spmatrix]


class ConfigurationError(ValueError):
    """
    Error signaling that a problem was created with an invalid
    floating point type or invalid dimensions
    """

    pass


def _check_dim(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(
            f"Dimension '{name}' must be an integer, got {value!r}"
        )

    if value <= 0:
        raise ConfigurationError(f"Dimension '{name}' must be positive, got {value}")

    return int(value)


def _check_dtype(dtype) -> np.dtype:
    # np.dtype(None) silently yields float64
    if dtype is None:
        raise ConfigurationError("No floating point type given")

    try:
        dtype = np.dtype(dtype)
    except TypeError as err:
        raise ConfigurationError(f"Invalid floating point type {dtype!r}") from err

    if not np.issubdtype(dtype, np.floating):
        raise ConfigurationError(f"Type {dtype} is not a floating point type")

    return dtype


class Problem(abc.ABC):
    """
    Base class used to formulate the problem of minimizing a smooth objective
    :math:`f : \\mathbb{R}^{n} \\to \\mathbb{R}`
    subject to smooth nonlinear constraints
    :math:`g : \\mathbb{R}^{n} \\to \\mathbb{R}^{m}`.

    The Lagrangian of this problem is given by
     .. math::
        \\mathcal{L}(x, z) = f(x) + z^{T} g(x),

    where :math:`z \\in \\mathbb{R}^{m}` is a vector of Lagrange multipliers.

    The dimensions :math:`n` and :math:`m` as well as the floating point
    type are fixed when the problem is created. Implementations provide
    all six evaluation methods, which must neither modify their arguments
    nor depend on the order in which they are called.
    """

    def __init__(self, num_vars: int, num_cons: int, dtype=np.float64) -> None:
        """
        Creates the problem

        Parameters
        ----------
        num_vars : int
            The number :math:`n > 0` of primal variables
        num_cons : int
            The number :math:`m > 0` of constraints (and dual variables)
        dtype : np.dtype, optional
            The floating point type of all vectors and matrices,
            defaults to ``np.float64``

        Raises
        ------
        ConfigurationError
            If either dimension is not a positive integer or
            ``dtype`` is not a floating point type
        """
        self._num_vars = _check_dim("num_vars", num_vars)
        self._num_cons = _check_dim("num_cons", num_cons)
        self._dtype = _check_dtype(dtype)

    @property
    def num_vars(self) -> int:
        """
        The number of primal variables in the problem
        """
        return self._num_vars

    @property
    def num_cons(self) -> int:
        """
        The number of constraints (equivalently, dual variables) in the problem
        """
        return self._num_cons

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def primal_shape(self) -> Tuple[int]:
        return (self.num_vars,)

    @property
    def dual_shape(self) -> Tuple[int]:
        return (self.num_cons,)

    @property
    def hessian_shape(self) -> Tuple[int, int]:
        return (self.num_vars, self.num_vars)

    @property
    def jacobian_shape(self) -> Tuple[int, int]:
        return (self.num_cons, self.num_vars)

    @abc.abstractmethod
    def objective(self, x: np.ndarray) -> float:
        """
        Parameters
        ----------
        x : np.ndarray
            The primal point :math:`x \\in \\mathbb{R}^{n}` at which
            to evaluate the objective function

        Returns
        -------
        float
            The objective function value :math:`f(x)` at the given primal point :math:`x`
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def objective_gradient(self, x: np.ndarray) -> np.ndarray:
        """
        Parameters
        ----------
        x : np.ndarray
           The primal point :math:`x \\in \\mathbb{R}^{n}` at which to
           evaluate the objective function gradient

        Returns
        -------
        np.ndarray
            The objective function gradient :math:`\\nabla f(x) \\in \\mathbb{R}^{n}`
            at the given primal point :math:`x`
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def objective_hessian(self, x: np.ndarray) -> Matrix:
        """
        Parameters
        ----------
        x : np.ndarray
           The primal point :math:`x \\in \\mathbb{R}^{n}` at which to
           evaluate the objective function Hessian

        Returns
        -------
        np.ndarray or sp.sparse.spmatrix
            The (symmetric) matrix
            :math:`\\nabla^{2} f(x) \\in \\mathbb{R}^{n \\times n}`
            at the given primal point :math:`x`
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def constraints(self, x: np.ndarray) -> np.ndarray:
        """
        Parameters
        ----------
        x : np.ndarray
           The primal point :math:`x \\in \\mathbb{R}^{n}` at which to
           evaluate the constraint function :math:`g`

        Returns
        -------
        np.ndarray
            The constraint value :math:`g(x) \\in \\mathbb{R}^{m}`
            at the given primal point :math:`x`
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def constraints_jacobian(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        """
        Parameters
        ----------
        x, z : np.ndarray
           The primal / dual points :math:`x \\in \\mathbb{R}^{n}` and
           :math:`z \\in \\mathbb{R}^{m}` at which to
           evaluate the constraint Jacobian :math:`J_g`. The dual point
           is available to implementations evaluating a dual-weighted
           Jacobian and may be ignored otherwise

        Returns
        -------
        np.ndarray or sp.sparse.spmatrix
            The constraint Jacobian :math:`J_g(x) \\in \\mathbb{R}^{m \\times n}`
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def lagrangian_hessian(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        """
        Parameters
        ----------
        x, z : np.ndarray
           The primal / dual points :math:`x \\in \\mathbb{R}^{n}` and
           :math:`z \\in \\mathbb{R}^{m}` at which to
           evaluate the Hessian :math:`\\nabla_{xx} \\mathcal{L}(x, z)`

        Returns
        -------
        np.ndarray or sp.sparse.spmatrix
            The (symmetric) matrix
            :math:`\\nabla_{xx} \\mathcal{L}(x, z) \\in \\mathbb{R}^{n \\times n}`
            at the given primal / dual points :math:`x` / :math:`z`
        """
        raise NotImplementedError()
