import logging

import numpy as np

from pypipal.eval import create_evaluator
from pypipal.params import Params
from pypipal.wrapper import ProblemWrapper

logging.basicConfig(level=logging.DEBUG)

problem = ProblemWrapper(
    2,
    1,
    objective=lambda x: x[0] ** 2 + x[1] ** 2,
    objective_gradient=lambda x: 2.0 * x,
    constraints=lambda x: np.array([x[0] + x[1] - 1.0]),
    constraints_jacobian=lambda x, z: np.array([[1.0, 1.0]]),
    lagrangian_hessian=lambda x, z: 2.0 * np.eye(2),
)

evaluator = create_evaluator(problem, Params(validate_input=True))

x = np.array([1.0, 0.0])
z = np.array([0.0])

print(evaluator.objective(x))
print(evaluator.lagrangian_hessian(x, z))

# Supply the objective Hessian after construction
problem.objective_hessian_func = lambda x: 2.0 * np.eye(2)

print(evaluator.objective_hessian(x))
