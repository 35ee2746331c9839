"""Presence checks shared by the built-in tags and the field walker."""

from __future__ import annotations

import dataclasses
import datetime
import numbers
from typing import Any, Callable, Optional

Func = Callable[[Any], bool]
FuncCtx = Callable[[Any, Any], bool]

# Values that behave like references: they are "set" as soon as they exist.
_REFERENCE_TYPES = (list, dict, set, frozenset, bytearray)


def wrap_func(fn: Optional[Func]) -> Optional[FuncCtx]:
    """Adapt a check taking only a field level to one that also takes a context."""
    if fn is None:
        return None

    def wrapped(ctx: Any, fl: Any) -> bool:
        return fn(fl)

    return wrapped


def _is_reference(value: Any) -> bool:
    if isinstance(value, _REFERENCE_TYPES):
        return True
    return callable(value) and not isinstance(value, type) and not dataclasses.is_dataclass(value)


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (numbers.Number, str, bytes, datetime.timedelta)):
        return not value
    if isinstance(value, tuple):
        return all(_is_zero(item) for item in value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(_is_zero(getattr(value, f.name)) for f in dataclasses.fields(value))
    return False


def has_value(fl: Any) -> bool:
    """Return True when the current field is not its default value."""
    value = fl.field()
    if value is None:
        return False
    if _is_reference(value):
        return True
    if getattr(fl, "fld_is_pointer", False):
        return True
    return not _is_zero(value)


def has_not_zero_value(fl: Any) -> bool:
    """Return True when the current field is not the zero value for its type."""
    value = fl.field()
    if value is None:
        return False
    if _is_reference(value):
        return True
    return not _is_zero(value)