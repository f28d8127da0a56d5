from typing import Callable, Optional

import numpy as np

from pypipal.log import logger
from pypipal.problem import Matrix, Problem

ObjectiveFunc = Callable[[np.ndarray], float]
ObjectiveGradientFunc = Callable[[np.ndarray], np.ndarray]
ObjectiveHessianFunc = Callable[[np.ndarray], Matrix]
ConstraintsFunc = Callable[[np.ndarray], np.ndarray]
ConstraintsJacobianFunc = Callable[[np.ndarray, np.ndarray], Matrix]
LagrangianHessianFunc = Callable[[np.ndarray, np.ndarray], Matrix]


class MissingCallableError(NotImplementedError):
    """
    Error signaling that an operation of a :py:class:`ProblemWrapper`
    was evaluated without a callable being set for it
    """

    def __init__(self, role: str) -> None:
        self.role = role
        super().__init__(f"No callable set for '{role}'")


def _check_callable(role: str, func) -> None:
    if not callable(func):
        raise TypeError(f"Callable expected for '{role}', got {type(func).__name__}")


class ProblemWrapper(Problem):
    """
    A :py:class:`pypipal.problem.Problem` defined through function handles
    rather than through a dedicated subclass.

    Each evaluation is forwarded unchanged to the corresponding callable.
    The callables can be inspected and replaced after construction via
    the ``*_func`` properties. Replacing callables while a solver is
    evaluating the problem is not synchronized.

    The objective Hessian is optional, since many solvers only ever
    require the Hessian of the Lagrangian. Evaluating it without
    a callable being set raises a :py:class:`MissingCallableError`.
    """

    def __init__(
        self,
        num_vars: int,
        num_cons: int,
        objective: ObjectiveFunc,
        objective_gradient: ObjectiveGradientFunc,
        constraints: ConstraintsFunc,
        constraints_jacobian: ConstraintsJacobianFunc,
        lagrangian_hessian: LagrangianHessianFunc,
        objective_hessian: Optional[ObjectiveHessianFunc] = None,
        dtype=np.float64,
    ) -> None:
        """
        Creates the problem

        Parameters
        ----------
        num_vars, num_cons : int
            The (positive) numbers of primal variables and of constraints
        objective : callable
            The objective :math:`x \\mapsto f(x)`
        objective_gradient : callable
            The gradient :math:`x \\mapsto \\nabla f(x)`
        constraints : callable
            The constraints :math:`x \\mapsto g(x)`
        constraints_jacobian : callable
            The Jacobian :math:`(x, z) \\mapsto J_g(x)`
        lagrangian_hessian : callable
            The Hessian :math:`(x, z) \\mapsto \\nabla_{xx} \\mathcal{L}(x, z)`
        objective_hessian : callable, optional
            The Hessian :math:`x \\mapsto \\nabla^{2} f(x)`, left unset
            if not given
        dtype : np.dtype, optional
            The floating point type, defaults to ``np.float64``
        """
        super().__init__(num_vars, num_cons, dtype)

        _check_callable("objective", objective)
        _check_callable("objective_gradient", objective_gradient)
        _check_callable("constraints", constraints)
        _check_callable("constraints_jacobian", constraints_jacobian)
        _check_callable("lagrangian_hessian", lagrangian_hessian)

        if objective_hessian is not None:
            _check_callable("objective_hessian", objective_hessian)

        self._objective = objective
        self._objective_gradient = objective_gradient
        self._objective_hessian = objective_hessian
        self._constraints = constraints
        self._constraints_jacobian = constraints_jacobian
        self._lagrangian_hessian = lagrangian_hessian

    @classmethod
    def with_objective_hessian(
        cls,
        num_vars: int,
        num_cons: int,
        objective: ObjectiveFunc,
        objective_gradient: ObjectiveGradientFunc,
        objective_hessian: ObjectiveHessianFunc,
        constraints: ConstraintsFunc,
        constraints_jacobian: ConstraintsJacobianFunc,
        lagrangian_hessian: LagrangianHessianFunc,
        dtype=np.float64,
    ) -> "ProblemWrapper":
        """
        Creates the problem from all six callables, including
        the Hessian of the objective
        """
        _check_callable("objective_hessian", objective_hessian)

        return cls(
            num_vars,
            num_cons,
            objective,
            objective_gradient,
            constraints,
            constraints_jacobian,
            lagrangian_hessian,
            objective_hessian=objective_hessian,
            dtype=dtype,
        )

    @property
    def objective_func(self) -> ObjectiveFunc:
        return self._objective

    @objective_func.setter
    def objective_func(self, func: ObjectiveFunc) -> None:
        _check_callable("objective", func)
        logger.debug("Replacing objective")
        self._objective = func

    @property
    def objective_gradient_func(self) -> ObjectiveGradientFunc:
        return self._objective_gradient

    @objective_gradient_func.setter
    def objective_gradient_func(self, func: ObjectiveGradientFunc) -> None:
        _check_callable("objective_gradient", func)
        logger.debug("Replacing objective gradient")
        self._objective_gradient = func

    @property
    def objective_hessian_func(self) -> Optional[ObjectiveHessianFunc]:
        """
        The Hessian of the objective, ``None`` if unset
        """
        return self._objective_hessian

    @objective_hessian_func.setter
    def objective_hessian_func(self, func: Optional[ObjectiveHessianFunc]) -> None:
        if func is None:
            logger.debug("Clearing objective Hessian")
        else:
            _check_callable("objective_hessian", func)
            logger.debug("Replacing objective Hessian")

        self._objective_hessian = func

    @property
    def has_objective_hessian(self) -> bool:
        return self._objective_hessian is not None

    @property
    def constraints_func(self) -> ConstraintsFunc:
        return self._constraints

    @constraints_func.setter
    def constraints_func(self, func: ConstraintsFunc) -> None:
        _check_callable("constraints", func)
        logger.debug("Replacing constraints")
        self._constraints = func

    @property
    def constraints_jacobian_func(self) -> ConstraintsJacobianFunc:
        return self._constraints_jacobian

    @constraints_jacobian_func.setter
    def constraints_jacobian_func(self, func: ConstraintsJacobianFunc) -> None:
        _check_callable("constraints_jacobian", func)
        logger.debug("Replacing constraint Jacobian")
        self._constraints_jacobian = func

    @property
    def lagrangian_hessian_func(self) -> LagrangianHessianFunc:
        return self._lagrangian_hessian

    @lagrangian_hessian_func.setter
    def lagrangian_hessian_func(self, func: LagrangianHessianFunc) -> None:
        _check_callable("lagrangian_hessian", func)
        logger.debug("Replacing Lagrangian Hessian")
        self._lagrangian_hessian = func

    def objective(self, x: np.ndarray) -> float:
        return self._objective(x)

    def objective_gradient(self, x: np.ndarray) -> np.ndarray:
        return self._objective_gradient(x)

    def objective_hessian(self, x: np.ndarray) -> Matrix:
        if self._objective_hessian is None:
            raise MissingCallableError("objective_hessian")

        return self._objective_hessian(x)

    def constraints(self, x: np.ndarray) -> np.ndarray:
        return self._constraints(x)

    def constraints_jacobian(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        return self._constraints_jacobian(x, z)

    def lagrangian_hessian(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        return self._lagrangian_hessian(x, z)
