"""Errors produced by validation."""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Iterator

FIELD_ERROR_MESSAGE = "Key: '{}' Error:Field validation for '{}' failed on the '{}' tag"


@dataclasses.dataclass(eq=False)
class FieldError(Exception):
    """A single field's validation failure.

    ``tag`` is the tag as written (an alias name when an alias failed);
    ``actual_tag`` is the underlying tag that failed.  ``namespace`` uses the
    custom field names, ``struct_namespace`` the attribute names.
    """

    tag: str = ""
    actual_tag: str = ""
    namespace: str = ""
    struct_namespace: str = ""
    field_len: int = 0
    struct_field_len: int = 0
    value: Any = None
    param: str = ""
    kind: Any = None
    type: Any = None
    validator: Any = dataclasses.field(default=None, repr=False)

    @property
    def field(self) -> str:
        """The field's name, custom name taking precedence."""
        return self.namespace[len(self.namespace) - self.field_len:]

    @property
    def struct_field(self) -> str:
        """The field's actual attribute name."""
        return self.struct_namespace[len(self.struct_namespace) - self.struct_field_len:]

    def __str__(self) -> str:
        return FIELD_ERROR_MESSAGE.format(self.namespace, self.field, self.tag)


class ValidationErrors(ValueError):
    """A sequence of field errors raised after validation."""

    def __init__(self, errors: Iterable[FieldError] = ()) -> None:
        self.errors: list[FieldError] = list(errors)
        super().__init__(self.errors)

    def __str__(self) -> str:
        return "\n".join(str(error) for error in self.errors).strip()

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return ValidationErrors(self.errors[index])
        return self.errors[index]


class InvalidValidationError(ValueError):
    """An invalid argument was passed to a validation entry point."""

    def __init__(self, type: Any = None) -> None:
        self.type = type
        super().__init__(type)

    def __str__(self) -> str:
        if self.type is None:
            return "validator: (nil)"
        name = getattr(self.type, "__qualname__", None) or str(self.type)
        return f"validator: (nil {name})"