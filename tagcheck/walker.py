"""Walking values and structures, running their tag chains and collecting errors."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from .checks import has_not_zero_value, has_value
from .errors import FieldError
from .levels import ValidationState
from .tags import REQUIRED_TAG, CField, CStruct, CTag, TagType
from .util import MISSING, TIME_TYPES, Kind, extract_type

_NILABLE_KINDS = (Kind.PTR, Kind.INTERFACE, Kind.INVALID)
_SKIP_WHEN_NIL = (TagType.OMIT_EMPTY, TagType.IS_DEFAULT, TagType.OMIT_ZERO)
_DIVE_ERROR = "dive error! can't dive on a non slice or map"


def get_value(value: Any) -> Any:
    """Return the value to report in an error; a missing value becomes None."""
    return None if value is MISSING else value


def _format_key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


class Walker(ValidationState):
    """Runs parsed tag chains over a value tree and gathers field errors."""

    def __init__(self, validator: Any = None, top: Any = None, ctx: Any = None) -> None:
        super().__init__(validator, top)
        self.ctx = ctx

    def _required_struct_enabled(self) -> bool:
        return bool(getattr(self.instance, "required_struct_enabled", False))

    def _set_field_level(self, parent: Any, current: Any, cf: CField, ct: CTag) -> None:
        self.slfl_parent = parent
        self.fl_field = current
        self.cf = cf
        self.ct = ct

    def _record(
        self,
        ns: str,
        struct_ns: str,
        cf: CField,
        tag: str,
        actual_tag: str,
        param: str,
        kind: Kind,
        value: Any = None,
        typ: Any = None,
    ) -> None:
        namespace = ns + cf.alt_name
        if self._has_tag_name_func():
            struct_namespace = struct_ns + cf.name
        else:
            struct_namespace = namespace
        self.errs.append(
            FieldError(
                tag=tag,
                actual_tag=actual_tag,
                namespace=namespace,
                struct_namespace=struct_namespace,
                field_len=len(cf.alt_name),
                struct_field_len=len(cf.name),
                value=value,
                param=param,
                kind=kind,
                type=typ,
                validator=self.instance,
            )
        )

    def traverse_field(
        self,
        parent: Any,
        current: Any,
        ns: str,
        struct_ns: str,
        cf: CField,
        ct: Optional[CTag],
    ) -> None:
        """Validate one field, descending into structures and collections."""
        current, kind, self.fld_is_pointer = extract_type(current, self._custom_funcs())
        is_nested = False

        if kind in _NILABLE_KINDS:
            if (
                ct is None
                or ct.typeof in _SKIP_WHEN_NIL
                or (ct.typeof is TagType.OMIT_NIL and kind is not Kind.INVALID and current is None)
            ):
                return
            if ct.has_tag:
                if kind is Kind.INVALID:
                    self._record(ns, struct_ns, cf, ct.alias_tag, ct.tag, ct.param, kind)
                    return
                if not ct.run_validation_when_nil:
                    self._record(
                        ns, struct_ns, cf, ct.alias_tag, ct.tag, ct.param, kind,
                        get_value(current), type(current),
                    )
                    return
            if kind is Kind.INVALID:
                return
        elif kind is Kind.STRUCT:
            is_nested = not isinstance(current, TIME_TYPES)
            # A non-reference structure is always present, so 'required' is
            # skipped on it unless explicitly enabled.
            if (
                is_nested
                and not self._required_struct_enabled()
                and ct is not None
                and ct.tag == REQUIRED_TAG
            ):
                ct = ct.next

        typ = type(current)
        while True:
            if ct is None or not ct.has_tag or (is_nested and not cf.name):
                if is_nested:
                    if cf.name:
                        ns = ns + cf.alt_name + "."
                        struct_ns = struct_ns + cf.name + "."
                    self.validate_struct(parent, current, typ, ns, struct_ns, ct)
                return

            typeof = ct.typeof
            if typeof is TagType.NO_STRUCT_LEVEL or typeof is TagType.END_KEYS:
                return
            if typeof is TagType.STRUCT_ONLY:
                if is_nested:
                    if cf.name:
                        ns = ns + cf.alt_name + "."
                        struct_ns = struct_ns + cf.name + "."
                    self.validate_struct(parent, current, typ, ns, struct_ns, ct)
                return
            if typeof is TagType.OMIT_EMPTY:
                self._set_field_level(parent, current, cf, ct)
                if not has_value(self):
                    return
                ct = ct.next
                continue
            if typeof is TagType.OMIT_ZERO:
                self._set_field_level(parent, current, cf, ct)
                if not has_not_zero_value(self):
                    return
                ct = ct.next
                continue
            if typeof is TagType.OMIT_NIL:
                self._set_field_level(parent, current, cf, ct)
                if self.field() is None:
                    return
                ct = ct.next
                continue
            if typeof is TagType.DIVE:
                self._dive(parent, current, kind, ns, struct_ns, cf, ct.next)
                return
            if typeof is TagType.OR:
                ct, passed = self._check_or(parent, current, kind, typ, ns, struct_ns, cf, ct)
                if not passed:
                    return
                continue

            self._set_field_level(parent, current, cf, ct)
            if not ct.fn(self.ctx, self):
                self._record(
                    ns, struct_ns, cf, ct.alias_tag, ct.tag, ct.param, kind,
                    get_value(current), typ,
                )
                return
            ct = ct.next

    def _element_field(self, cf: CField, label: str) -> CField:
        name = f"{cf.name}[{label}]"
        alt_name = name if cf.names_equal else f"{cf.alt_name}[{label}]"
        return CField(name=name, alt_name=alt_name, names_equal=cf.names_equal)

    def _dive(
        self,
        parent: Any,
        current: Any,
        kind: Kind,
        ns: str,
        struct_ns: str,
        cf: CField,
        ct: Optional[CTag],
    ) -> None:
        if kind in (Kind.SLICE, Kind.ARRAY):
            for index, item in enumerate(current):
                element = self._element_field(cf, str(index))
                self.traverse_field(parent, item, ns, struct_ns, element, ct)
        elif kind is Kind.MAP:
            for key in list(current):
                element = self._element_field(cf, _format_key(key))
                if ct is not None and ct.typeof is TagType.KEYS and ct.keys is not None:
                    self.traverse_field(parent, key, ns, struct_ns, element, ct.keys)
                    if ct.next is not None:
                        self.traverse_field(parent, current[key], ns, struct_ns, element, ct.next)
                else:
                    self.traverse_field(parent, current[key], ns, struct_ns, element, ct)
        else:
            raise ValueError(_DIVE_ERROR)

    def _check_or(
        self,
        parent: Any,
        current: Any,
        kind: Kind,
        typ: Any,
        ns: str,
        struct_ns: str,
        cf: CField,
        ct: CTag,
    ) -> Tuple[Optional[CTag], bool]:
        """Run an or-block; return the link after it and whether any check passed."""
        attempted = []
        while True:
            self._set_field_level(parent, current, cf, ct)
            if ct.fn(self.ctx, self):
                if ct.is_block_end:
                    return ct.next, True
                while True:
                    ct = ct.next
                    if ct is None or ct.typeof is not TagType.OR:
                        return ct, True
                    if ct.is_block_end:
                        return ct.next, True

            attempted.append(f"{ct.tag}={ct.param}" if ct.has_param else ct.tag)
            if ct.is_block_end or ct.next is None:
                if ct.has_alias:
                    tag, actual_tag = ct.alias_tag, ct.actual_alias_tag
                else:
                    tag = actual_tag = "|".join(attempted)
                self._record(
                    ns, struct_ns, cf, tag, actual_tag, ct.param, kind,
                    get_value(current), typ,
                )
                return None, False
            ct = ct.next

    def validate_struct(
        self,
        parent: Any,
        current: Any,
        typ: Any,
        ns: str,
        struct_ns: str,
        ct: Optional[CTag],
    ) -> None:
        """Validate every field of a structure, then its struct-level check."""
        cache = getattr(self.instance, "struct_cache", None)
        cs: Optional[CStruct] = cache.get(typ) if cache is not None else None
        if cs is None:
            cs = self.instance.extract_struct_cache(current, getattr(typ, "__name__", ""))

        if not ns and cs.name:
            ns = cs.name + "."
            struct_ns = cs.name + "."

        if ct is None or ct.typeof is not TagType.STRUCT_ONLY:
            for f in cs.fields:
                if self.is_partial:
                    if self.ffn is not None:
                        if self.ffn(struct_ns + f.name):
                            continue
                    else:
                        listed = (struct_ns + f.name) in self.include_exclude
                        if listed == self.has_excludes:
                            continue
                self.traverse_field(
                    current, getattr(current, f.name, MISSING), ns, struct_ns, f, f.ctags
                )

        if cs.fn is not None:
            self.slfl_parent = parent
            self.sl_current = current
            self.ns = ns
            self.actual_ns = struct_ns
            cs.fn(self.ctx, self)