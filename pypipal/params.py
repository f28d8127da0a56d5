import dataclasses
import enum
import typing
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np


class Precision(Enum):
    """
    Precision to be used when evaluating a problem
    """

    Single = auto()
    """
    Single precision (32 bit)
    """
    Double = auto()
    """
    Double precision (64 bit)
    """


@dataclass
class Params:
    """
    Parameters controlling how a :py:class:`pypipal.problem.Problem`
    is evaluated by a :py:class:`pypipal.eval.Evaluator`
    """

    # Expected precision of the problem, any if unset
    precision: Optional[Precision] = None

    # Check shapes of all evaluations against the problem dimensions
    validate_input: bool = False

    symmetry_tol: float = 1e-8

    def __post_init__(self):
        # Convert enum strings to enum values
        for key, attr in self.annotations():
            if typing.get_origin(attr) is typing.Union:
                (attr, _) = typing.get_args(attr)
            if isinstance(attr, enum.EnumMeta):
                val = getattr(self, key)
                if isinstance(val, str):
                    setattr(self, key, attr[val])

    @property
    def dtype(self):
        if self.precision is None:
            return None
        return np.float32 if self.precision == Precision.Single else np.float64

    def write(self, filename):
        import yaml

        class Dumper(yaml.SafeDumper):
            def represent_data(self, data):
                if isinstance(data, Enum):
                    return self.represent_data(data.name)
                return super().represent_data(data)

        with open(filename, "w") as f:
            yaml.dump(dataclasses.asdict(self), f, Dumper=Dumper)

    def annotations(self):
        return type(self).__annotations__.items()

    @staticmethod
    def read(filename):
        import yaml

        with open(filename, "r") as f:
            data = yaml.safe_load(f)
            return Params(**data)
