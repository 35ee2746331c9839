import threading

import pytest

from tagcheck.tags import (
    KEYS_TAG_NOT_DEFINED,
    CStruct,
    CTag,
    StructCache,
    TagCache,
    TagType,
    parse_field_tags,
)


def _ok(ctx, fl):
    return True


def _nil_ok(ctx, fl):
    return True


VALIDATIONS = {
    name: (_ok, False)
    for name in ["required", "min", "max", "eq", "hexcolor", "rgb", "isdefault"]
}
VALIDATIONS["nilcheck"] = (_nil_ok, True)


def _chain(ctag):
    links = []
    while ctag is not None:
        links.append(ctag)
        ctag = ctag.next
    return links


def test_simple_chain():
    links = _chain(parse_field_tags("required,min=1", "Name", {}, VALIDATIONS))
    assert [c.tag for c in links] == ["required", "min"]
    assert [c.alias_tag for c in links] == ["required", "min"]
    assert all(c.typeof is TagType.DEFAULT for c in links)
    assert all(c.is_block_end and c.has_tag for c in links)
    assert links[0].has_param is False
    assert links[1].has_param is True
    assert links[1].param == "1"
    assert links[0].fn is _ok


def test_run_when_nil_flag_is_taken_from_registration():
    ctag = parse_field_tags("nilcheck", "F", {}, VALIDATIONS)
    assert ctag.run_validation_when_nil is True
    assert ctag.fn is _nil_ok


def test_or_chain():
    links = _chain(parse_field_tags("min=1|max=5", "F", {}, VALIDATIONS))
    assert [c.tag for c in links] == ["min", "max"]
    assert all(c.typeof is TagType.OR for c in links)
    assert [c.is_block_end for c in links] == [False, True]
    assert [c.param for c in links] == ["1", "5"]


def test_alias_expansion():
    aliases = {"iscolor": "hexcolor|rgb"}
    links = _chain(parse_field_tags("required,iscolor", "Color", aliases, VALIDATIONS))
    assert [c.tag for c in links] == ["required", "hexcolor", "rgb"]
    for c in links[1:]:
        assert c.has_alias is True
        assert c.alias_tag == "iscolor"
        assert c.actual_alias_tag == "hexcolor|rgb"
    assert links[0].has_alias is False


def test_alias_as_first_tag():
    aliases = {"short": "min=1,max=3"}
    links = _chain(parse_field_tags("short,eq=2", "F", aliases, VALIDATIONS))
    assert [c.tag for c in links] == ["min", "max", "eq"]
    assert [c.alias_tag for c in links] == ["short", "short", "eq"]


def test_param_escapes():
    ctag = parse_field_tags("eq=a0x2Cb0x7Cc", "F", {}, VALIDATIONS)
    assert ctag.param == "a,b|c"


@pytest.mark.parametrize(
    "tag, kind",
    [
        ("omitempty", TagType.OMIT_EMPTY),
        ("omitnil", TagType.OMIT_NIL),
        ("omitzero", TagType.OMIT_ZERO),
        ("structonly", TagType.STRUCT_ONLY),
        ("nostructlevel", TagType.NO_STRUCT_LEVEL),
        ("dive", TagType.DIVE),
        ("isdefault", TagType.IS_DEFAULT),
    ],
)
def test_special_tag_types(tag, kind):
    assert parse_field_tags(tag, "F", {}, VALIDATIONS).typeof is kind


def test_dive_keys():
    links = _chain(parse_field_tags("dive,keys,min=1,endkeys,required", "M", {}, VALIDATIONS))
    assert [c.typeof for c in links] == [TagType.DIVE, TagType.KEYS, TagType.DEFAULT]
    assert links[2].tag == "required"
    key_links = _chain(links[1].keys)
    assert [c.tag for c in key_links] == ["min", ""]
    assert key_links[-1].typeof is TagType.END_KEYS


def test_keys_without_dive_raises():
    with pytest.raises(ValueError, match="'keys' tag must be immediately preceded by the 'dive' tag"):
        parse_field_tags("required,keys,min=1,endkeys", "F", {}, VALIDATIONS)


def test_keys_first_raises():
    with pytest.raises(ValueError):
        parse_field_tags("keys,min=1,endkeys", "F", {}, VALIDATIONS)


def test_endkeys_without_keys_raises():
    with pytest.raises(ValueError) as info:
        parse_field_tags("required,endkeys,min=1", "F", {}, VALIDATIONS)
    assert str(info.value) == KEYS_TAG_NOT_DEFINED


def test_undefined_validation_raises():
    with pytest.raises(ValueError) as info:
        parse_field_tags("required,nope", "Name", {}, VALIDATIONS)
    assert str(info.value) == "Undefined validation function 'nope' on field 'Name'"


def test_empty_tag_raises():
    with pytest.raises(ValueError) as info:
        parse_field_tags("required,,min=1", "Name", {}, VALIDATIONS)
    assert str(info.value) == "Invalid validation tag on field 'Name'"


def test_tag_cache_creates_once():
    cache = TagCache()
    assert cache.get("required") is None
    calls = []

    def build():
        calls.append(1)
        return CTag(tag="required")

    first = cache.get_or_create("required", build)
    second = cache.get_or_create("required", build)
    assert first is second
    assert len(calls) == 1
    assert cache.get("required") is first


def test_struct_cache_concurrent_creation_calls_factory_once():
    cache = StructCache()
    calls = []
    lock = threading.Lock()

    class Sample:
        pass

    def build():
        with lock:
            calls.append(1)
        return CStruct(name="Sample")

    results = []

    def worker():
        results.append(cache.get_or_create(Sample, build))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(calls) == 1
    assert all(r is results[0] for r in results)
    assert cache.get(Sample).name == "Sample"


def test_cache_factory_error_leaves_entry_absent():
    cache = TagCache()

    def fail():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        cache.get_or_create("x", fail)
    assert cache.get("x") is None