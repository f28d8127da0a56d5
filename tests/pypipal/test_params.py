import tempfile

import numpy as np

from pypipal.params import Params, Precision


def test_roundtrip():
    params = Params(precision=Precision.Single, validate_input=True, symmetry_tol=1e-6)

    with tempfile.TemporaryDirectory() as tmp:
        filename = tmp + "/params.yml"
        params.write(filename)
        read_params = Params.read(filename)
        assert params == read_params


def test_enum_from_string():
    params = Params(precision="Single")

    assert params.precision == Precision.Single
    assert params.dtype == np.float32


def test_defaults():
    params = Params()

    assert params.precision is None
    assert params.dtype is None
    assert not params.validate_input


def test_roundtrip_without_precision():
    params = Params(validate_input=True)

    with tempfile.TemporaryDirectory() as tmp:
        filename = tmp + "/params.yml"
        params.write(filename)
        assert Params.read(filename) == params
