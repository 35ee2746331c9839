"""The validator: registration of checks, aliases and rules, and entry points."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterable, Mapping, Optional

from .checks import has_value, wrap_func
from .errors import InvalidValidationError, ValidationErrors
from .levels import wrap_struct_level_func
from .tags import (
    IS_DEFAULT_TAG,
    REQUIRED_TAG,
    RESTRICTED_ALIAS_ERR,
    RESTRICTED_TAG_CHARS,
    RESTRICTED_TAG_ERR,
    RESTRICTED_TAGS,
    SKIP_VALIDATION_TAG,
    CField,
    CStruct,
    CTag,
    StructCache,
    TagCache,
    parse_field_tags,
)
from .util import TIME_TYPES, Kind, kind_of
from .walker import Walker

DEFAULT_TAG_NAME = "validate"


def _is_restricted(name: str) -> bool:
    return name in RESTRICTED_TAGS or any(c in RESTRICTED_TAG_CHARS for c in name)


def _type_of(item: Any) -> type:
    return item if isinstance(item, type) else type(item)


def _is_default(fl: Any) -> bool:
    return not has_value(fl)


class Validate:
    """Validator settings, registered checks and parsed-tag caches.

    Tags are read from the ``metadata`` of dataclass fields under the key
    ``tag_name``.  Fields whose names start with an underscore are private
    and skipped unless ``private_field_validation`` is set.
    """

    def __init__(
        self,
        tag_name: str = DEFAULT_TAG_NAME,
        private_field_validation: bool = False,
        required_struct_enabled: bool = False,
    ) -> None:
        self.tag_name = tag_name
        self.private_field_validation = private_field_validation
        self.required_struct_enabled = required_struct_enabled
        self.tag_name_func: Optional[Callable[[dataclasses.Field], str]] = None
        self.has_tag_name_func = False
        self.struct_level_funcs: dict[type, Callable[[Any, Any], None]] = {}
        self.custom_funcs: dict[type, Callable[[Any], Any]] = {}
        self.has_custom_funcs = False
        self.aliases: dict[str, str] = {}
        self.validations: dict[str, tuple] = {}
        self.rules: dict[type, dict[str, str]] = {}
        self.tag_cache = TagCache()
        self.struct_cache = StructCache()

        self._register(REQUIRED_TAG, wrap_func(has_value), baked_in=True, nil_checkable=False)
        self._register(IS_DEFAULT_TAG, wrap_func(_is_default), baked_in=True, nil_checkable=False)

    def register_alias(self, alias: str, tags: str) -> None:
        """Register ``alias`` as a shorthand for the tag string ``tags``."""
        if _is_restricted(alias):
            raise ValueError(RESTRICTED_ALIAS_ERR.format(alias))
        self.aliases[alias] = tags

    def register_validation(
        self, tag: str, fn: Optional[Callable[[Any], bool]], call_even_if_null: bool = False
    ) -> None:
        """Register a check ``fn(field_level) -> bool`` under ``tag``."""
        self.register_validation_ctx(tag, wrap_func(fn), call_even_if_null)

    def register_validation_ctx(
        self,
        tag: str,
        fn: Optional[Callable[[Any, Any], bool]],
        call_even_if_null: bool = False,
    ) -> None:
        """Register a check ``fn(ctx, field_level) -> bool`` under ``tag``."""
        self._register(tag, fn, baked_in=False, nil_checkable=call_even_if_null)

    def _register(self, tag: str, fn: Any, baked_in: bool, nil_checkable: bool) -> None:
        if not tag:
            raise ValueError("function Key cannot be empty")
        if fn is None:
            raise ValueError("function cannot be empty")
        if not baked_in and _is_restricted(tag):
            raise ValueError(RESTRICTED_TAG_ERR.format(tag))
        self.validations[tag] = (fn, nil_checkable)

    def register_struct_validation(self, fn: Callable[[Any], None], *args: Any) -> None:
        """Register a struct-level check ``fn(struct_level)`` for the given types."""
        self.register_struct_validation_ctx(wrap_struct_level_func(fn), *args)

    def register_struct_validation_ctx(self, fn: Callable[[Any, Any], None], *args: Any) -> None:
        """Register a struct-level check ``fn(ctx, struct_level)`` for the given types."""
        for item in args:
            self.struct_level_funcs[_type_of(item)] = fn

    def register_struct_validation_map_rules(self, rules: Mapping[str, str], *args: Any) -> None:
        """Register field tags by name; they take precedence over field metadata."""
        copied = dict(rules)
        for item in args:
            typ = _type_of(item)
            if dataclasses.is_dataclass(typ):
                self.rules[typ] = copied

    def register_tag_name_func(self, fn: Callable[[dataclasses.Field], str]) -> None:
        """Register a function giving an alternate name for each field."""
        self.tag_name_func = fn
        self.has_tag_name_func = True

    def register_custom_type_func(self, fn: Callable[[Any], Any], *args: Any) -> None:
        """Register ``fn`` to turn values of the given types into the value checked."""
        for item in args:
            self.custom_funcs[_type_of(item)] = fn
        self.has_custom_funcs = True

    def fetch_cache_tag(self, tag: str) -> CTag:
        """Return the parsed chain for ``tag``, parsing it only once."""
        return self.tag_cache.get_or_create(
            tag, lambda: parse_field_tags(tag, "", self.aliases, self.validations)
        )

    def extract_struct_cache(self, current: Any, name: str) -> CStruct:
        """Return the parsed description of ``current``'s type, building it once."""
        typ = type(current)
        return self.struct_cache.get_or_create(typ, lambda: self._build_struct(current, typ, name))

    def _build_struct(self, current: Any, typ: type, name: str) -> CStruct:
        cs = CStruct(name=name, fn=self.struct_level_funcs.get(typ))
        if not dataclasses.is_dataclass(current):
            return cs
        rules = self.rules.get(typ, {})
        for idx, fld in enumerate(dataclasses.fields(current)):
            if not self.private_field_validation and fld.name.startswith("_"):
                continue
            if fld.name in rules:
                tag = rules[fld.name]
            else:
                tag = fld.metadata.get(self.tag_name, "")
            if tag == SKIP_VALIDATION_TAG:
                continue

            custom_name = fld.name
            if self.has_tag_name_func:
                alternate = self.tag_name_func(fld)
                if alternate:
                    custom_name = alternate

            if tag:
                ctag = parse_field_tags(tag, fld.name, self.aliases, self.validations)
            else:
                ctag = CTag()
            cs.fields.append(
                CField(
                    idx=idx,
                    name=fld.name,
                    alt_name=custom_name,
                    names_equal=fld.name == custom_name,
                    ctags=ctag,
                )
            )
        return cs

    def struct(self, obj: Any, ctx: Any = None) -> None:
        """Validate every field of ``obj``; raise ``ValidationErrors`` on failure."""
        if obj is None:
            raise InvalidValidationError(None)
        if kind_of(obj) is not Kind.STRUCT or isinstance(obj, TIME_TYPES):
            raise InvalidValidationError(type(obj))
        walker = Walker(self, top=obj, ctx=ctx)
        walker.validate_struct(obj, obj, type(obj), "", "", None)
        if walker.errs:
            raise ValidationErrors(walker.errs)

    def var(self, value: Any, tag: str, ctx: Any = None) -> None:
        """Validate a single value against ``tag``; raise ``ValidationErrors`` on failure."""
        if not tag or tag == SKIP_VALIDATION_TAG:
            return
        ctag = self.fetch_cache_tag(tag)
        walker = Walker(self, top=value, ctx=ctx)
        walker.traverse_field(value, value, "", "", CField(names_equal=True), ctag)
        if walker.errs:
            raise ValidationErrors(walker.errs)

    def _errors(self, run: Callable[[], None]) -> Iterable:
        try:
            run()
        except ValidationErrors as exc:
            return list(exc)
        return []