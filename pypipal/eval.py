import abc
from enum import Enum, auto

import numpy as np
import scipy as sp

from pypipal.log import logger
from pypipal.params import Params
from pypipal.problem import ConfigurationError, Matrix, Problem


def astype(array, dtype):
    if not hasattr(array, "dtype"):
        array = np.asarray(array)

    if array.dtype == dtype:
        return array
    else:
        return array.astype(dtype)


class EvalError(ValueError):
    def __init__(self, msg, x):
        self.x = x
        super().__init__(msg)


def warn_once(*args):
    has_warned = [False]

    def warn():
        if not has_warned[0]:
            logger.warning(*args)
            has_warned[0] = True

    return warn


class Component(Enum):
    Obj = auto()
    ObjGrad = auto()
    ObjHess = auto()
    Cons = auto()
    ConsJac = auto()
    LagHess = auto()

    def display_name(self):
        return {
            Component.Obj: "Objective",
            Component.ObjGrad: "Objective Gradient",
            Component.ObjHess: "Objective Hessian",
            Component.Cons: "Constraints",
            Component.ConsJac: "Constraint Jacobian",
            Component.LagHess: "Lagrangian Hessian",
        }[self]


class Evaluator(abc.ABC):
    """
    Solver-facing view of a :py:class:`pypipal.problem.Problem`.
    Counts the evaluations of each component. Results are never
    cached, each call is forwarded to the problem.
    """

    def __init__(self, problem: Problem, params: Params):
        self.problem = problem
        self.dtype = problem.dtype

        if params.dtype is not None and params.dtype != self.dtype:
            raise ConfigurationError(
                f"Precision {params.precision.name} does not match "
                f"problem type {self.dtype}"
            )

        self.reset_num_evals()

    def reset_num_evals(self):
        self.num_evals = {comp: 0 for comp in Component}

    def objective(self, x: np.ndarray) -> float:
        self.num_evals[Component.Obj] += 1
        return self._eval_obj(x)

    def objective_gradient(self, x: np.ndarray) -> np.ndarray:
        self.num_evals[Component.ObjGrad] += 1
        return self._eval_obj_grad(x)

    def objective_hessian(self, x: np.ndarray) -> Matrix:
        self.num_evals[Component.ObjHess] += 1
        return self._eval_obj_hess(x)

    def constraints(self, x: np.ndarray) -> np.ndarray:
        self.num_evals[Component.Cons] += 1
        return self._eval_cons(x)

    def constraints_jacobian(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        self.num_evals[Component.ConsJac] += 1
        return self._eval_cons_jac(x, z)

    def lagrangian_hessian(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        self.num_evals[Component.LagHess] += 1
        return self._eval_lag_hess(x, z)

    @abc.abstractmethod
    def _eval_obj(self, x: np.ndarray) -> float:
        raise NotImplementedError()

    @abc.abstractmethod
    def _eval_obj_grad(self, x: np.ndarray) -> np.ndarray:
        raise NotImplementedError()

    @abc.abstractmethod
    def _eval_obj_hess(self, x: np.ndarray) -> Matrix:
        raise NotImplementedError()

    @abc.abstractmethod
    def _eval_cons(self, x: np.ndarray) -> np.ndarray:
        raise NotImplementedError()

    @abc.abstractmethod
    def _eval_cons_jac(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        raise NotImplementedError()

    @abc.abstractmethod
    def _eval_lag_hess(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        raise NotImplementedError()


class SimpleEvaluator(Evaluator):
    def _eval_obj(self, x: np.ndarray) -> float:
        return self.problem.objective(x)

    def _eval_obj_grad(self, x: np.ndarray) -> np.ndarray:
        return astype(self.problem.objective_gradient(x), self.dtype)

    def _eval_obj_hess(self, x: np.ndarray) -> Matrix:
        return astype(self.problem.objective_hessian(x), self.dtype)

    def _eval_cons(self, x: np.ndarray) -> np.ndarray:
        return astype(self.problem.constraints(x), self.dtype)

    def _eval_cons_jac(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        return astype(self.problem.constraints_jacobian(x, z), self.dtype)

    def _eval_lag_hess(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        return astype(self.problem.lagrangian_hessian(x, z), self.dtype)


class ValidatingEvaluator(Evaluator):
    """
    Checks the shapes of all arguments and results against the
    dimensions of the problem, raising an :py:class:`EvalError`
    on mismatch. Non-symmetric Hessians are reported once per
    evaluator. Non-finite values are passed on unchanged.
    """

    def __init__(self, problem: Problem, params: Params):
        super().__init__(problem, params)
        self.symmetry_tol = params.symmetry_tol

        self.warn_hessian_pattern = warn_once("Unsymmetric Hessian pattern")
        self.warn_hessian_values = warn_once("Hessian not numerically symmetric")

    def _check_primal(self, x: np.ndarray) -> None:
        if np.shape(x) != self.problem.primal_shape:
            raise EvalError("Invalid shape of primal point", x)

    def _check_dual(self, x: np.ndarray, z: np.ndarray) -> None:
        if np.shape(z) != self.problem.dual_shape:
            raise EvalError("Invalid shape of dual point", x)

    def _check_symmetric(self, hess: Matrix) -> None:
        tol = self.symmetry_tol

        if not sp.sparse.issparse(hess):
            hess = np.asarray(hess)
            if not np.allclose(hess, hess.T, rtol=0.0, atol=tol, equal_nan=True):
                self.warn_hessian_values()
            return

        coo_hess = hess.tocoo()

        orig_pattern = set(zip(coo_hess.row, coo_hess.col))
        trans_pattern = set(zip(coo_hess.col, coo_hess.row))

        same_pattern = orig_pattern == trans_pattern

        if not same_pattern:
            self.warn_hessian_pattern()
        else:
            diff = (coo_hess - coo_hess.T).tocoo()
            if diff.nnz > 0 and np.abs(diff.data).max() > tol:
                self.warn_hessian_values()

    def _eval_obj(self, x: np.ndarray) -> float:
        self._check_primal(x)

        obj = self.problem.objective(x)

        if np.ndim(obj) != 0:
            raise EvalError("Objective is not a scalar", x)

        return obj

    def _eval_obj_grad(self, x: np.ndarray) -> np.ndarray:
        self._check_primal(x)

        grad = self.problem.objective_gradient(x)

        if np.shape(grad) != self.problem.primal_shape:
            raise EvalError("Invalid shape of gradient", x)

        return astype(grad, self.dtype)

    def _eval_obj_hess(self, x: np.ndarray) -> Matrix:
        self._check_primal(x)

        obj_hess = self.problem.objective_hessian(x)

        if np.shape(obj_hess) != self.problem.hessian_shape:
            raise EvalError("Invalid shape of objective Hessian", x)

        self._check_symmetric(obj_hess)

        return astype(obj_hess, self.dtype)

    def _eval_cons(self, x: np.ndarray) -> np.ndarray:
        self._check_primal(x)

        cons = self.problem.constraints(x)

        if np.shape(cons) != self.problem.dual_shape:
            raise EvalError("Invalid shape of constraints", x)

        return astype(cons, self.dtype)

    def _eval_cons_jac(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        self._check_primal(x)
        self._check_dual(x, z)

        cons_jac = self.problem.constraints_jacobian(x, z)

        if np.shape(cons_jac) != self.problem.jacobian_shape:
            raise EvalError("Invalid shape of Jacobian", x)

        return astype(cons_jac, self.dtype)

    def _eval_lag_hess(self, x: np.ndarray, z: np.ndarray) -> Matrix:
        self._check_primal(x)
        self._check_dual(x, z)

        lag_hess = self.problem.lagrangian_hessian(x, z)

        if np.shape(lag_hess) != self.problem.hessian_shape:
            raise EvalError("Invalid shape of Lagrangian Hessian", x)

        self._check_symmetric(lag_hess)

        return astype(lag_hess, self.dtype)


def create_evaluator(problem: Problem, params: Params) -> Evaluator:
    if params.validate_input:
        return ValidatingEvaluator(problem, params)
    else:
        return SimpleEvaluator(problem, params)
