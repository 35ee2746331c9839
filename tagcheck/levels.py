"""What a check sees while it runs: field-level and struct-level views."""

from __future__ import annotations

import abc
from typing import Any, Callable, Iterable, Optional, Set

from .errors import FieldError
from .tags import CField, CTag
from .util import Kind, extract_type, get_struct_field


class FieldLevel(abc.ABC):
    """Information and helpers available to a field check."""

    @abc.abstractmethod
    def top(self) -> Any:
        """The top-level structure, if any."""

    @abc.abstractmethod
    def parent(self) -> Any:
        """The structure holding the current field."""

    @abc.abstractmethod
    def field(self) -> Any:
        """The current field's value."""

    @abc.abstractmethod
    def field_name(self) -> str:
        """The field's name, custom name taking precedence."""

    @abc.abstractmethod
    def struct_field_name(self) -> str:
        """The field's attribute name."""

    @abc.abstractmethod
    def param(self) -> str:
        """The parameter of the running check."""

    @abc.abstractmethod
    def get_tag(self) -> str:
        """The name of the running check."""

    @abc.abstractmethod
    def extract_type(self, value: Any) -> tuple:
        """Unwrap ``value``; return ``(value, kind, nullable)``."""

    @abc.abstractmethod
    def get_struct_field(self) -> tuple:
        """Look up the field named by the parameter, starting at the parent."""

    @abc.abstractmethod
    def get_struct_field_advanced(self, value: Any, namespace: str) -> tuple:
        """Look up ``namespace`` starting at ``value``."""


class StructLevel(abc.ABC):
    """Information and helpers available to a struct-level check."""

    @abc.abstractmethod
    def validator(self) -> Any:
        """The validator running the check."""

    @abc.abstractmethod
    def top(self) -> Any:
        """The top-level structure."""

    @abc.abstractmethod
    def parent(self) -> Any:
        """The structure holding the current one."""

    @abc.abstractmethod
    def current(self) -> Any:
        """The structure being checked."""

    @abc.abstractmethod
    def extract_type(self, value: Any) -> tuple:
        """Unwrap ``value``; return ``(value, kind, nullable)``."""

    @abc.abstractmethod
    def report_error(self, field, field_name, struct_field_name, tag, param) -> None:
        """Record an error for a field below the current namespace."""

    @abc.abstractmethod
    def report_validation_errors(
        self, relative_namespace, relative_struct_namespace, errs
    ) -> None:
        """Record existing errors below the current namespace."""


class ValidationState(FieldLevel, StructLevel):
    """Mutable state of one validation run, shared with the checks it calls."""

    def __init__(self, validator: Any = None, top: Any = None) -> None:
        self.instance = validator
        self.top_value = top
        self.ns = ""
        self.actual_ns = ""
        self.errs: list[FieldError] = []
        self.include_exclude: Set[str] = set()
        self.ffn: Optional[Callable[[str], bool]] = None
        self.slfl_parent: Any = None
        self.sl_current: Any = None
        self.fl_field: Any = None
        self.cf: Optional[CField] = None
        self.ct: Optional[CTag] = None
        self.fld_is_pointer = False
        self.is_partial = False
        self.has_excludes = False

    def _custom_funcs(self):
        return getattr(self.instance, "custom_funcs", None)

    def _has_tag_name_func(self) -> bool:
        return bool(getattr(self.instance, "has_tag_name_func", False))

    def param(self) -> str:
        return self.ct.param

    def field(self) -> Any:
        return self.fl_field

    def field_name(self) -> str:
        return self.cf.alt_name

    def struct_field_name(self) -> str:
        return self.cf.name

    def get_tag(self) -> str:
        return self.ct.tag

    def top(self) -> Any:
        return self.top_value

    def parent(self) -> Any:
        return self.slfl_parent

    def current(self) -> Any:
        return self.sl_current

    def validator(self) -> Any:
        return self.instance

    def extract_type(self, value: Any) -> tuple:
        return extract_type(value, self._custom_funcs())

    def get_struct_field(self) -> tuple:
        return get_struct_field(self.slfl_parent, self.ct.param, self._custom_funcs())

    def get_struct_field_advanced(self, value: Any, namespace: str) -> tuple:
        return get_struct_field(value, namespace, self._custom_funcs())

    def report_error(self, field, field_name, struct_field_name, tag, param) -> None:
        value, kind, _ = self.extract_type(field)
        if not struct_field_name:
            struct_field_name = field_name

        namespace = self.ns + field_name
        if self._has_tag_name_func() or field_name != struct_field_name:
            struct_namespace = self.actual_ns + struct_field_name
        else:
            struct_namespace = namespace

        valid = kind is not Kind.INVALID
        self.errs.append(
            FieldError(
                tag=tag,
                actual_tag=tag,
                namespace=namespace,
                struct_namespace=struct_namespace,
                field_len=len(field_name),
                struct_field_len=len(struct_field_name),
                value=value if valid else None,
                param=param,
                kind=kind,
                type=type(value) if valid else None,
                validator=self.instance,
            )
        )

    def report_validation_errors(
        self,
        relative_namespace: str,
        relative_struct_namespace: str,
        errs: Iterable[FieldError],
    ) -> None:
        for err in errs:
            err.namespace = self.ns + relative_namespace + err.namespace
            err.struct_namespace = (
                self.actual_ns + relative_struct_namespace + err.struct_namespace
            )
            self.errs.append(err)


def wrap_struct_level_func(
    fn: Callable[[StructLevel], None],
) -> Callable[[Any, StructLevel], None]:
    """Adapt a struct-level check to one that also takes a context."""

    def wrapped(ctx: Any, sl: StructLevel) -> None:
        fn(sl)

    return wrapped