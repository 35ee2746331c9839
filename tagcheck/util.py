"""Value inspection helpers: kinds, unwrapping, namespace lookup and parameter parsing."""

from __future__ import annotations

import dataclasses
import datetime
import enum
import math
import numbers
import re
from collections.abc import Mapping, Sequence, Set
from fractions import Fraction
from typing import Any, Callable, Mapping as MappingType, Optional, Tuple

from .tags import LEFT_BRACKET, NAMESPACE_SEPARATOR, RIGHT_BRACKET

CustomFuncs = Optional[MappingType[type, Callable[[Any], Any]]]

TIME_TYPES = (datetime.datetime, datetime.date, datetime.time)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


class Kind(enum.Enum):
    """The broad category of a value, as seen by the validator."""

    INVALID = "invalid"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    ARRAY = "array"
    SLICE = "slice"
    MAP = "map"
    SET = "set"
    STRUCT = "struct"
    PTR = "ptr"
    INTERFACE = "interface"
    FUNC = "func"


class _Missing:
    """Marker for a value that does not exist at all."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def kind_of(value: Any) -> Kind:
    """Return the kind of ``value``; None is a nil reference."""
    if value is MISSING:
        return Kind.INVALID
    if value is None:
        return Kind.PTR
    if isinstance(value, enum.Enum) and not isinstance(value, (int, float, str)):
        return kind_of(value.value)
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, (datetime.timedelta, numbers.Integral)):
        return Kind.INT
    if isinstance(value, numbers.Real):
        return Kind.FLOAT
    if isinstance(value, numbers.Complex):
        return Kind.COMPLEX
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (bytes, bytearray, memoryview, list)):
        return Kind.SLICE
    if isinstance(value, tuple):
        return Kind.ARRAY
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, Set):
        return Kind.SET
    if isinstance(value, TIME_TYPES):
        return Kind.STRUCT
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Kind.STRUCT
    if isinstance(value, type) or callable(value):
        return Kind.FUNC
    if isinstance(value, Sequence):
        return Kind.SLICE
    return Kind.STRUCT


def extract_type(value: Any, custom_funcs: CustomFuncs = None) -> Tuple[Any, Kind, bool]:
    """Unwrap ``value`` through registered custom type functions.

    Returns ``(value, kind, nullable)``; ``nullable`` is True for nil values.
    """
    nullable = False
    while True:
        kind = kind_of(value)
        if kind is Kind.PTR:
            return value, Kind.PTR, True
        if kind is Kind.INVALID:
            return value, Kind.INVALID, nullable
        if custom_funcs:
            fn = custom_funcs.get(type(value))
            if fn is not None:
                value = fn(value)
                continue
        return value, kind, nullable


def _parse_go_bool(text: str) -> Optional[bool]:
    if text in ("1", "t", "T", "TRUE", "true", "True"):
        return True
    if text in ("0", "f", "F", "FALSE", "false", "False"):
        return False
    return None


def _map_key(mapping: Mapping, key: str) -> Any:
    sample = next(iter(mapping), None)
    if isinstance(sample, bool):
        return bool(_parse_go_bool(key))
    if isinstance(sample, numbers.Integral):
        try:
            return int(key, 10)
        except ValueError:
            return 0
    if isinstance(sample, numbers.Real):
        try:
            return float(key)
        except ValueError:
            return 0.0
    return key


def get_struct_field(
    value: Any, namespace: str, custom_funcs: CustomFuncs = None
) -> Tuple[Any, Kind, bool, bool]:
    """Follow ``namespace`` (``A.B[0].C``, ``M[key]``) from ``value``.

    Returns ``(value, kind, nullable, found)``. ``found`` is False when a
    step does not exist; raises ``ValueError`` when the namespace goes
    deeper than the value allows.
    """
    while True:
        current, kind, nullable = extract_type(value, custom_funcs)
        if kind is Kind.INVALID:
            return current, kind, nullable, False
        if namespace == "":
            return current, kind, nullable, True

        if kind in (Kind.PTR, Kind.INTERFACE):
            return current, kind, nullable, False

        if kind is Kind.STRUCT and not isinstance(current, TIME_TYPES):
            idx = namespace.find(NAMESPACE_SEPARATOR)
            if idx != -1:
                fld, rest = namespace[:idx], namespace[idx + 1:]
            else:
                fld, rest = namespace, ""
            bracket = fld.find(LEFT_BRACKET)
            if bracket != -1:
                fld = fld[:bracket]
                rest = namespace[bracket:]
            value = getattr(current, fld, MISSING) if fld else MISSING
            namespace = rest
            continue

        if kind in (Kind.ARRAY, Kind.SLICE):
            idx = namespace.find(LEFT_BRACKET)
            idx2 = namespace.find(RIGHT_BRACKET)
            try:
                arr_idx = int(namespace[idx + 1:idx2], 10)
            except ValueError:
                arr_idx = 0
            if arr_idx >= len(current):
                return current, kind, nullable, False
            if arr_idx < 0:
                raise IndexError(f"index out of range [{arr_idx}]")
            start = idx2 + 1
            if start < len(namespace) and namespace[start] == NAMESPACE_SEPARATOR:
                start += 1
            value = current[arr_idx]
            namespace = namespace[start:]
            continue

        if kind is Kind.MAP:
            idx = namespace.find(LEFT_BRACKET) + 1
            idx2 = namespace.find(RIGHT_BRACKET)
            end = idx2
            if end + 1 < len(namespace) and namespace[end + 1] == NAMESPACE_SEPARATOR:
                end += 1
            key = _map_key(current, namespace[idx:idx2])
            value = current.get(key, MISSING)
            namespace = namespace[end + 1:]
            continue

        raise ValueError("Invalid field namespace")


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or value is MISSING:
        return "<invalid Value>"
    if type(value).__str__ is not object.__str__:
        return str(value)
    return f"<{type(value).__name__} Value>"


def field_matches_regex(pattern_fn: Callable[[], Any], fl: Any) -> bool:
    """Search the current field's text with the pattern from ``pattern_fn``.

    Strings are used as they are; other values through their own ``__str__``
    when they define one.
    """
    return pattern_fn().search(_as_text(fl.field())) is not None


_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_DURATION_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration(text: str) -> int:
    """Parse a duration such as ``1h30m`` or ``-1.5s`` into nanoseconds."""
    original = text
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return 0
    if not text:
        raise ValueError(f'invalid duration "{original}"')

    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_COMPONENT.match(text, pos)
        whole, frac, unit = match.group(1), match.group(2) or "", match.group(3)
        if not whole and not frac:
            raise ValueError(f'invalid duration "{original}"')
        if not unit:
            raise ValueError(f'missing unit in duration "{original}"')
        scale = _DURATION_UNITS.get(unit)
        if scale is None:
            raise ValueError(f'unknown unit "{unit}" in duration "{original}"')
        amount = Fraction(int(whole or "0"))
        if frac:
            amount += Fraction(int(frac), 10 ** len(frac))
        total += amount * scale
        pos = match.end()

    nanos = int(total)
    if nanos > (_INT64_MAX + 1 if negative else _INT64_MAX):
        raise ValueError(f'invalid duration "{original}"')
    return -nanos if negative else nanos


def _syntax_error(param: str) -> ValueError:
    return ValueError(f'parsing "{param}": invalid syntax')


def _range_error(param: str) -> ValueError:
    return ValueError(f'parsing "{param}": value out of range')


def _parse_base0(param: str, signed: bool) -> int:
    body = param
    sign = 1
    if signed and body and body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if (
        not body
        or not body.isascii()
        or body[0] in "+-_"
        or any(c.isspace() for c in body)
    ):
        raise _syntax_error(param)
    try:
        if body.lower().startswith(("0x", "0o", "0b")):
            number = int(body, 0)
        elif len(body) > 1 and body[0] == "0":
            number = int("0o" + body[1:], 0)
        else:
            number = int(body, 10)
    except ValueError:
        raise _syntax_error(param) from None
    return sign * number


def as_int(param: str) -> int:
    """Parse ``param`` as a signed 64-bit integer, honouring base prefixes."""
    number = _parse_base0(param, signed=True)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise _range_error(param)
    return number


def as_int_from_duration(param: str) -> int:
    """Parse ``param`` as a duration in nanoseconds, or as a plain integer."""
    try:
        return parse_duration(param)
    except ValueError:
        return as_int(param)


def as_int_from_type(typ: Any, param: str) -> int:
    """Parse ``param`` as an integer suited to a field of type ``typ``."""
    if typ is datetime.timedelta:
        return as_int_from_duration(param)
    return as_int(param)


def as_uint(param: str) -> int:
    """Parse ``param`` as an unsigned 64-bit integer, honouring base prefixes."""
    number = _parse_base0(param, signed=False)
    if number > _UINT64_MAX:
        raise _range_error(param)
    return number


def as_bool(param: str) -> bool:
    """Parse ``param`` as a boolean (1, t, true, 0, f, false and friends)."""
    result = _parse_go_bool(param)
    if result is None:
        raise _syntax_error(param)
    return result


def as_float(param: str) -> float:
    """Parse ``param`` as a 64-bit float, accepting inf, nan and hex forms."""
    text = param
    if not text or not text.isascii() or any(c.isspace() for c in text):
        raise _syntax_error(param)
    lowered = text.lower()
    is_hex = lowered.lstrip("+-").startswith("0x")
    if "_" in text and not is_hex:
        raise _syntax_error(param)
    try:
        result = float.fromhex(text.replace("_", "")) if is_hex else float(text)
    except (ValueError, OverflowError):
        raise _syntax_error(param) from None
    if math.isinf(result) and "inf" not in lowered:
        raise _range_error(param)
    return result