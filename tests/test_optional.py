from dataclasses import dataclass
from typing import Optional

import pytest

from kubeutil.optional import all_optional_fields_none, deref, optional_equal


@dataclass
class Empty:
    pass


@dataclass
class PlainInt:
    foo: int


@dataclass
class OptInt:
    foo: Optional[int]


@dataclass
class Mixed:
    foo: int
    bar: Optional[int]


@dataclass
class TwoOpt:
    foo: Optional[int]
    bar: Optional[int]


@pytest.mark.parametrize(
    "obj, expected",
    [
        (Empty(), True),
        (PlainInt(12345), True),
        (OptInt(None), True),
        (Mixed(12345, None), True),
        (TwoOpt(None, None), True),
        (OptInt(0), False),
        (TwoOpt(None, 0), False),
        (TwoOpt(1, None), False),
        (None, True),
    ],
)
def test_all_optional_fields_none(obj, expected):
    assert all_optional_fields_none(obj) is expected


def test_all_optional_fields_none_rejects_non_dataclass():
    with pytest.raises(TypeError):
        all_optional_fields_none(42)


def test_all_optional_fields_none_rejects_dataclass_type():
    with pytest.raises(TypeError):
        all_optional_fields_none(TwoOpt)


@pytest.mark.parametrize(
    "value, default, expected",
    [
        (1, 0, 1),
        (None, 0, 0),
        (True, False, True),
        (None, False, False),
        (False, True, False),
        ("a", "", "a"),
        (None, "", ""),
        (0.1, 0.0, 0.1),
        (None, 0.0, 0.0),
    ],
)
def test_deref(value, default, expected):
    assert deref(value, default) == expected


@pytest.mark.parametrize(
    "same, other",
    [(123, 456), (True, False), ("abc", "def"), (1.25, 4.5)],
)
def test_optional_equal(same, other):
    assert optional_equal(None, None) is True
    assert optional_equal(same, same) is True
    assert optional_equal(None, same) is False
    assert optional_equal(same, None) is False
    assert optional_equal(same, other) is False


def test_optional_equal_distinguishes_zero_from_none():
    assert optional_equal(0, None) is False
    assert optional_equal(0, 0) is True