from pypipal.problem import ConfigurationError, Problem
from pypipal.wrapper import MissingCallableError, ProblemWrapper

__all__ = [
    "ConfigurationError",
    "MissingCallableError",
    "Problem",
    "ProblemWrapper",
]
