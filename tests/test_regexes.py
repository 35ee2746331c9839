import base64
import hashlib
import uuid

import pytest
import regex

from tagcheck import regexes


def test_lazy_compile_returns_same_object():
    getter = regexes.lazy_regex_compile(r"^a+\Z")
    first = getter()
    assert first is getter()
    assert first.search("aaa")


def test_lazy_compile_defers_errors_until_first_call():
    getter = regexes.lazy_regex_compile("(")
    with pytest.raises(regex.error):
        getter()


def test_trailing_newline_does_not_match():
    assert regexes.alpha_regex().search("abc")
    assert regexes.alpha_regex().search("abc\n") is None
    assert regexes.number_regex().search("123\n") is None


def test_digits_are_ascii_only():
    assert regexes.number_regex().search("\u0661\u0662\u0663") is None
    assert regexes.number_regex().search("0123")


@pytest.mark.parametrize(
    "getter, good, bad",
    [
        (regexes.alpha_regex, "abc", "abc1"),
        (regexes.alpha_numeric_regex, "abc1", "abc-1"),
        (regexes.alpha_unicode_regex, "h\u00e9llo", "abc1"),
        (regexes.numeric_regex, "-1.5", "1."),
        (regexes.hexadecimal_regex, "0xFF", "0xZZ"),
        (regexes.hex_color_regex, "#fff", "#fffff"),
        (regexes.rgb_regex, "rgb(0, 128, 255)", "rgb(256,0,0)"),
        (regexes.rgb_regex, "rgb(10%, 20%, 30%)", "rgb(10%, 20, 30%)"),
        (regexes.rgba_regex, "rgba(0,0,0,0.5)", "rgba(0,0,0)"),
        (regexes.hsl_regex, "hsl(360, 100%, 50%)", "hsl(361, 100%, 50%)"),
        (regexes.hsla_regex, "hsla(120, 50%, 50%, 1)", "hsla(120, 50%, 50%)"),
        (regexes.email_regex, "someone@example.com", "someone@"),
        (regexes.latitude_regex, "90.0", "90.1"),
        (regexes.longitude_regex, "180", "181"),
        (regexes.semver_regex, "1.2.3-alpha.1+build.5", "01.2.3"),
        (regexes.ulid_regex, "01arz3ndektsv4rrffq69g5fav", "01ARZ3NDEKTSV4RRFFQ69G5FAU"),
        (regexes.fqdn_rfc1123_regex, "example.com.", "123"),
        (regexes.hostname_rfc1123_regex, "example.com", "-example"),
        (regexes.jwt_regex, "aaa.bbb.ccc", "aaa.bbb"),
        (regexes.eth_address_regex, "0x" + "a" * 40, "0x" + "g" * 40),
        (regexes.mongodb_id_regex, "5f1d7a2b3c4d5e6f7a8b9c0d", "5f1d7a2b"),
        (regexes.url_encoded_regex, "a%20b", "a%2"),
        (regexes.dns_rfc1035_label_regex, "my-label", "-label"),
        (regexes.spicedb_id_regex, "*", ""),
    ],
)
def test_pattern_accepts_and_rejects(getter, good, bad):
    compiled = getter()
    assert compiled.search(good)
    assert compiled.search(bad) is None


@pytest.mark.parametrize(
    "payload", [b"t", b"te", b"tes", b"test", b"\x00\xff\x10", bytes(range(40))]
)
def test_base64_encodings_match(payload):
    assert regexes.base64_regex().search(base64.b64encode(payload).decode())
    assert regexes.base64_url_regex().search(base64.urlsafe_b64encode(payload).decode())
    assert regexes.base32_regex().search(base64.b32encode(payload).decode())


def test_uuid_versions():
    namespace = uuid.NAMESPACE_DNS
    v3 = str(uuid.uuid3(namespace, "example.com"))
    v4 = str(uuid.uuid4())
    v5 = str(uuid.uuid5(namespace, "example.com"))
    assert regexes.uuid3_regex().search(v3)
    assert regexes.uuid4_regex().search(v4)
    assert regexes.uuid5_regex().search(v5)
    assert regexes.uuid4_regex().search(v3) is None
    for value in (v3, v4, v5):
        assert regexes.uuid_regex().search(value)
        assert regexes.uuid_rfc4122_regex().search(value.upper())
        assert regexes.uuid_regex().search(value.upper()) is None


def test_hash_digests():
    data = b"payload"
    assert regexes.md5_regex().search(hashlib.md5(data).hexdigest())
    assert regexes.sha256_regex().search(hashlib.sha256(data).hexdigest())
    assert regexes.sha384_regex().search(hashlib.sha384(data).hexdigest())
    assert regexes.sha512_regex().search(hashlib.sha512(data).hexdigest())
    assert regexes.sha256_regex().search(hashlib.md5(data).hexdigest()) is None


def test_ascii_and_multibyte():
    assert regexes.ascii_regex().search("")
    assert regexes.ascii_regex().search("plain text")
    assert regexes.ascii_regex().search("caf\u00e9") is None
    assert regexes.multibyte_regex().search("abc") is None
    assert regexes.multibyte_regex().search("a\u00e9")
    assert regexes.printable_ascii_regex().search("tab\there") is None


def test_unanchored_patterns_search_inside_text():
    assert regexes.html_regex().search("some <b>bold</b> text")
    assert regexes.html_regex().search("plain") is None
    assert regexes.cron_regex().search("*/5 * * * *")
    assert regexes.cron_regex().search("@daily")
    assert regexes.data_uri_regex().search("data:text/plain;base64,SGVsbG8=")


def test_split_params_keeps_quoted_groups():
    found = regexes.split_params_regex().findall("a 'b c' d")
    assert found == ["a", "'b c'", "d"]