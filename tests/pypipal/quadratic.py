import numpy as np

from pypipal.problem import Problem
from pypipal.wrapper import ProblemWrapper


def objective(x):
    return x[0] ** 2 + x[1] ** 2


def objective_gradient(x):
    return np.array([2 * x[0], 2 * x[1]])


def objective_hessian(x):
    return 2.0 * np.eye(2)


def constraints(x):
    return np.array([x[0] + x[1] - 1.0])


def constraints_jacobian(x, z):
    return np.array([[1.0, 1.0]])


def lagrangian_hessian(x, z):
    return 2.0 * np.eye(2)


def quadratic_wrapper(with_objective_hessian=False, dtype=np.float64):
    """
    Minimize :math:`x_0^2 + x_1^2` subject to :math:`x_0 + x_1 = 1`
    """
    if with_objective_hessian:
        return ProblemWrapper.with_objective_hessian(
            2,
            1,
            objective,
            objective_gradient,
            objective_hessian,
            constraints,
            constraints_jacobian,
            lagrangian_hessian,
            dtype=dtype,
        )

    return ProblemWrapper(
        2,
        1,
        objective,
        objective_gradient,
        constraints,
        constraints_jacobian,
        lagrangian_hessian,
        dtype=dtype,
    )


class Quadratic(Problem):
    def __init__(self):
        super().__init__(2, 1)

    def objective(self, x):
        return objective(x)

    def objective_gradient(self, x):
        return objective_gradient(x)

    def objective_hessian(self, x):
        return objective_hessian(x)

    def constraints(self, x):
        return constraints(x)

    def constraints_jacobian(self, x, z):
        return constraints_jacobian(x, z)

    def lagrangian_hessian(self, x, z):
        return lagrangian_hessian(x, z)
