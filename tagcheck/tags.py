"""Tag vocabulary, parsing of tag strings into check chains, and caches."""

from __future__ import annotations

import dataclasses
import enum
import threading
from typing import Any, Callable, Generic, Hashable, Mapping, Optional, TypeVar

UTF8_HEX_COMMA = "0x2C"
UTF8_PIPE = "0x7C"
TAG_SEPARATOR = ","
OR_SEPARATOR = "|"
TAG_KEY_SEPARATOR = "="
STRUCT_ONLY_TAG = "structonly"
NO_STRUCT_LEVEL_TAG = "nostructlevel"
OMIT_ZERO_TAG = "omitzero"
OMIT_EMPTY_TAG = "omitempty"
OMIT_NIL_TAG = "omitnil"
IS_DEFAULT_TAG = "isdefault"
SKIP_VALIDATION_TAG = "-"
DIVE_TAG = "dive"
KEYS_TAG = "keys"
END_KEYS_TAG = "endkeys"
REQUIRED_TAG = "required"
NAMESPACE_SEPARATOR = "."
LEFT_BRACKET = "["
RIGHT_BRACKET = "]"
RESTRICTED_TAG_CHARS = ".[],|=+()`~!@#$%^&*\\\"/?<>{}"
RESTRICTED_ALIAS_ERR = (
    "Alias '{}' either contains restricted characters or is the same as a "
    "restricted tag needed for normal operation"
)
RESTRICTED_TAG_ERR = (
    "Tag '{}' either contains restricted characters or is the same as a "
    "restricted tag needed for normal operation"
)
INVALID_VALIDATION = "Invalid validation tag on field '{}'"
UNDEFINED_VALIDATION = "Undefined validation function '{}' on field '{}'"
KEYS_TAG_NOT_DEFINED = (
    f"'{END_KEYS_TAG}' tag encountered without a corresponding '{KEYS_TAG}' tag"
)

RESTRICTED_TAGS = frozenset(
    {
        DIVE_TAG,
        KEYS_TAG,
        END_KEYS_TAG,
        STRUCT_ONLY_TAG,
        OMIT_ZERO_TAG,
        OMIT_EMPTY_TAG,
        OMIT_NIL_TAG,
        SKIP_VALIDATION_TAG,
        UTF8_HEX_COMMA,
        UTF8_PIPE,
        NO_STRUCT_LEVEL_TAG,
        REQUIRED_TAG,
        IS_DEFAULT_TAG,
    }
)

FuncCtx = Callable[[Any, Any], bool]
# A registered check: the function and whether it also runs on nil values.
ValidationEntry = tuple


class TagType(enum.Enum):
    """What a parsed tag does during traversal."""

    DEFAULT = 0
    OMIT_EMPTY = 1
    IS_DEFAULT = 2
    NO_STRUCT_LEVEL = 3
    STRUCT_ONLY = 4
    DIVE = 5
    OR = 6
    KEYS = 7
    END_KEYS = 8
    OMIT_NIL = 9
    OMIT_ZERO = 10


@dataclasses.dataclass
class CTag:
    """One link of a parsed tag chain."""

    tag: str = ""
    alias_tag: str = ""
    actual_alias_tag: str = ""
    param: str = ""
    keys: Optional["CTag"] = None
    next: Optional["CTag"] = None
    fn: Optional[FuncCtx] = None
    typeof: TagType = TagType.DEFAULT
    has_tag: bool = False
    has_alias: bool = False
    has_param: bool = False
    is_block_end: bool = False
    run_validation_when_nil: bool = False


@dataclasses.dataclass
class CField:
    """A cached field of a structure with its parsed tags."""

    idx: int = 0
    name: str = ""
    alt_name: str = ""
    names_equal: bool = True
    ctags: Optional[CTag] = None


@dataclasses.dataclass
class CStruct:
    """A cached structure: its name, fields and struct-level check."""

    name: str = ""
    fields: list = dataclasses.field(default_factory=list)
    fn: Optional[Callable[[Any, Any], None]] = None


def parse_field_tags(
    tag: str,
    field_name: str,
    aliases: Mapping[str, str],
    validations: Mapping[str, tuple],
) -> CTag:
    """Parse a tag string into a chain of ``CTag`` links.

    ``validations`` maps a tag name to ``(fn, run_validation_when_nil)``.
    Raises ``ValueError`` for malformed tags or unknown checks.
    """
    first, _ = _parse(tag, field_name, "", False, aliases, validations)
    return first


def _parse(tag, field_name, alias, has_alias, aliases, validations):
    first: Optional[CTag] = None
    current: Optional[CTag] = None
    no_alias = not alias
    tags = tag.split(TAG_SEPARATOR)
    last_index = len(tags) - 1
    items = iter(enumerate(tags))

    for i, t in items:
        if no_alias:
            alias = t

        if t in aliases:
            head, tail = _parse(aliases[t], field_name, t, True, aliases, validations)
            if i == 0:
                first, current = head, tail
            else:
                current.next, current = head, tail
            continue

        prev_type = None
        if i == 0:
            current = CTag(alias_tag=alias, has_alias=has_alias, has_tag=True)
            first = current
        else:
            prev_type = current.typeof
            current.next = CTag(alias_tag=alias, has_alias=has_alias, has_tag=True)
            current = current.next

        if t == DIVE_TAG:
            current.typeof = TagType.DIVE
        elif t == KEYS_TAG:
            current.typeof = TagType.KEYS
            if i == 0 or prev_type is not TagType.DIVE:
                raise ValueError(
                    f"'{KEYS_TAG}' tag must be immediately preceded by the '{DIVE_TAG}' tag"
                )
            key_tags = []
            for _, key_tag in items:
                key_tags.append(key_tag)
                if key_tag == END_KEYS_TAG:
                    break
            current.keys, _ = _parse(
                TAG_SEPARATOR.join(key_tags), field_name, "", False, aliases, validations
            )
        elif t == END_KEYS_TAG:
            current.typeof = TagType.END_KEYS
            if i != last_index:
                raise ValueError(KEYS_TAG_NOT_DEFINED)
            return first, current
        elif t == OMIT_ZERO_TAG:
            current.typeof = TagType.OMIT_ZERO
        elif t == OMIT_EMPTY_TAG:
            current.typeof = TagType.OMIT_EMPTY
        elif t == OMIT_NIL_TAG:
            current.typeof = TagType.OMIT_NIL
        elif t == STRUCT_ONLY_TAG:
            current.typeof = TagType.STRUCT_ONLY
        elif t == NO_STRUCT_LEVEL_TAG:
            current.typeof = TagType.NO_STRUCT_LEVEL
        else:
            if t == IS_DEFAULT_TAG:
                current.typeof = TagType.IS_DEFAULT
            or_values = t.split(OR_SEPARATOR)
            for j, or_value in enumerate(or_values):
                vals = or_value.split(TAG_KEY_SEPARATOR, 1)
                if no_alias:
                    alias = vals[0]
                    current.alias_tag = alias
                else:
                    current.actual_alias_tag = t

                if j > 0:
                    current.next = CTag(
                        alias_tag=alias,
                        actual_alias_tag=current.actual_alias_tag,
                        has_alias=has_alias,
                        has_tag=True,
                    )
                    current = current.next

                current.has_param = len(vals) > 1
                current.tag = vals[0]
                if not current.tag:
                    raise ValueError(INVALID_VALIDATION.format(field_name).strip())

                entry = validations.get(current.tag)
                if entry is None:
                    raise ValueError(
                        UNDEFINED_VALIDATION.format(current.tag, field_name).strip()
                    )
                current.fn, current.run_validation_when_nil = entry

                if len(or_values) > 1:
                    current.typeof = TagType.OR
                if len(vals) > 1:
                    current.param = vals[1].replace(UTF8_HEX_COMMA, ",").replace(UTF8_PIPE, "|")
            current.is_block_end = True

    return first, current


K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _CopyOnWriteCache(Generic[K, V]):
    """Lock-free reads; writers copy the mapping under a lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict = {}

    def _lookup(self, key: K) -> Optional[V]:
        return self._entries.get(key)

    def _lookup_or_create(self, key: K, factory: Callable[[], V]) -> V:
        entries = self._entries
        if key in entries:
            return entries[key]
        with self._lock:
            entries = self._entries
            if key in entries:
                return entries[key]
            value = factory()
            updated = dict(entries)
            updated[key] = value
            self._entries = updated
            return value


class TagCache(_CopyOnWriteCache[str, CTag]):
    """Parsed tag chains keyed by tag string."""

    def get(self, key: str) -> Optional[CTag]:
        """Return the cached chain for ``key`` or None."""
        return self._lookup(key)

    def get_or_create(self, key: str, factory: Callable[[], CTag]) -> CTag:
        """Return the cached chain, building it with ``factory`` exactly once."""
        return self._lookup_or_create(key, factory)


class StructCache(_CopyOnWriteCache[type, CStruct]):
    """Parsed structure descriptions keyed by type."""

    def get(self, key: type) -> Optional[CStruct]:
        """Return the cached structure for ``key`` or None."""
        return self._lookup(key)

    def get_or_create(self, key: type, factory: Callable[[], CStruct]) -> CStruct:
        """Return the cached structure, building it with ``factory`` exactly once."""
        return self._lookup_or_create(key, factory)