import dataclasses

import pytest

from tagcheck.checks import has_not_zero_value, has_value, wrap_func


class FakeLevel:
    def __init__(self, value, pointer=False):
        self._value = value
        self.fld_is_pointer = pointer

    def field(self):
        return self._value


@dataclasses.dataclass
class Point:
    x: int = 0
    y: int = 0


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        (0, False),
        (7, True),
        (0.0, False),
        ("", False),
        ("a", True),
        (False, False),
        (True, True),
        ([], True),
        ({}, True),
        (Point(), False),
        (Point(1, 0), True),
    ],
)
def test_has_value(value, expected):
    assert has_value(FakeLevel(value)) is expected


def test_pointer_to_zero_has_value_but_is_zero():
    fl = FakeLevel(0, pointer=True)
    assert has_value(fl) is True
    assert has_not_zero_value(fl) is False


def test_pointer_to_non_zero():
    fl = FakeLevel("x", pointer=True)
    assert has_value(fl) is True
    assert has_not_zero_value(fl) is True


@pytest.mark.parametrize("value", [0, "", None, Point(), (0, "")])
def test_has_not_zero_value_false_for_zero(value):
    assert has_not_zero_value(FakeLevel(value)) is False


@pytest.mark.parametrize("value", [1, "x", [], Point(0, 2), (0, 1)])
def test_has_not_zero_value_true_for_set_values(value):
    assert has_not_zero_value(FakeLevel(value)) is True


def test_wrap_func_none():
    assert wrap_func(None) is None


def test_wrap_func_passes_field_level_through():
    seen = []

    def check(fl):
        seen.append(fl)
        return fl.field() == 3

    wrapped = wrap_func(check)
    fl = FakeLevel(3)
    assert wrapped(object(), fl) is True
    assert seen == [fl]
    assert wrapped(None, FakeLevel(4)) is False