import numpy as np
import pytest
from underbar.core.types import strict_equal, strict_type


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (1, 1, True),
        (1, 1.0, True),
        (2.5, 2.5, True),
        ("a", "a", True),
        ([1, 2], [1, 2], True),
        (None, None, True),
        (True, True, True),
        (1, True, False),
        (0.0, False, False),
        ("1", 1, False),
        (0, None, False),
    ],
)
def test_strict_equal(a, b, expected):
    assert strict_equal(a, b) is expected


def test_strict_type_groups_numbers():
    assert strict_type(1) is strict_type(1.0) is float
    assert strict_type(True) is bool
    assert strict_type("x") is str


def test_nan_never_equals_itself():
    nan = float("nan")
    assert not strict_equal(nan, nan)
    assert not strict_equal(nan, float("nan"))


def test_arrays_compare_by_identity():
    arr = np.array([1, 2])
    assert strict_equal(arr, arr)
    assert not strict_equal(arr, np.array([1, 2]))
