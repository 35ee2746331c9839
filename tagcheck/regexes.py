"""Regular expressions used by the built-in checks, compiled on first use.

Patterns follow RE2 semantics: character classes such as ``\\d`` and ``\\s``
are ASCII only, and ``$`` is written as ``\\Z`` so a trailing newline never
matches.
"""

from __future__ import annotations

import threading
from typing import Callable

import regex

_FLAGS = regex.ASCII | regex.V0

# Byte (0-255) and percentage components used by the colour patterns.
_BYTE = r"(?:0|[1-9]\d?|1\d\d?|2[0-4]\d|25[0-5])"
_RGB_BODY = (
    r"\s*(?:" + _BYTE + r"\s*,\s*" + _BYTE + r"\s*,\s*" + _BYTE
    + "|" + _BYTE + r"%\s*,\s*" + _BYTE + r"%\s*,\s*" + _BYTE + r"%)"
)
_ALPHA_CHANNEL = r"\s*,\s*(?:(?:0.[1-9]*)|[01])"
_HUE = r"(?:0|[1-9]\d?|[12]\d\d|3[0-5]\d|360)"
_PERCENT = r"(?:(?:0|[1-9]\d?|100)%)"
_HSL_BODY = r"\s*" + _HUE + r"\s*,\s*" + _PERCENT + r"\s*,\s*" + _PERCENT

# Unicode ranges allowed in e-mail addresses.
_U = r"[\u00A0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF]"
_SPECIAL = r"[!#\$%&'\*\+\-\/=\?\^_`{\|}~]"

ALPHA_PATTERN = r"^[a-zA-Z]+\Z"
ALPHA_NUMERIC_PATTERN = r"^[a-zA-Z0-9]+\Z"
ALPHA_UNICODE_PATTERN = r"^[\p{L}]+\Z"
ALPHA_UNICODE_NUMERIC_PATTERN = r"^[\p{L}\p{N}]+\Z"
NUMERIC_PATTERN = r"^[-+]?[0-9]+(?:\.[0-9]+)?\Z"
NUMBER_PATTERN = r"^[0-9]+\Z"
HEXADECIMAL_PATTERN = r"^(0[xX])?[0-9a-fA-F]+\Z"
HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})\Z"
RGB_PATTERN = r"^rgb\(" + _RGB_BODY + r"\s*\)\Z"
RGBA_PATTERN = r"^rgba\(" + _RGB_BODY + _ALPHA_CHANNEL + r"\s*\)\Z"
HSL_PATTERN = r"^hsl\(" + _HSL_BODY + r"\s*\)\Z"
HSLA_PATTERN = r"^hsla\(" + _HSL_BODY + _ALPHA_CHANNEL + r"\s*\)\Z"
EMAIL_PATTERN = (
    r"^(?:(?:(?:(?:[a-zA-Z]|\d|" + _SPECIAL + "|" + _U + r")+"
    r"(?:\.([a-zA-Z]|\d|" + _SPECIAL + "|" + _U + r")+)*)"
    r"|(?:(?:\x22)(?:(?:(?:(?:\x20|\x09)*(?:\x0d\x0a))?(?:\x20|\x09)+)?"
    r"(?:(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x7f]|\x21|[\x23-\x5b]|[\x5d-\x7e]|" + _U + r")"
    r"|(?:(?:[\x01-\x09\x0b\x0c\x0d-\x7f]|" + _U + r"))))*"
    r"(?:(?:(?:\x20|\x09)*(?:\x0d\x0a))?(\x20|\x09)+)?(?:\x22))))"
    r"@(?:(?:(?:[a-zA-Z]|\d|" + _U + r")"
    r"|(?:(?:[a-zA-Z]|\d|" + _U + r")(?:[a-zA-Z]|\d|-|\.|~|" + _U + r")*"
    r"(?:[a-zA-Z]|\d|" + _U + r")))\.)+"
    r"(?:(?:[a-zA-Z]|" + _U + r")"
    r"|(?:(?:[a-zA-Z]|" + _U + r")(?:[a-zA-Z]|\d|-|\.|~|" + _U + r")*"
    r"(?:[a-zA-Z]|" + _U + r")))\.?\Z"
)
E164_PATTERN = r"^\+[1-9]?[0-9]{7,14}\Z"
BASE32_PATTERN = (
    r"^(?:[A-Z2-7]{8})*(?:[A-Z2-7]{2}={6}|[A-Z2-7]{4}={4}|[A-Z2-7]{5}={3}"
    r"|[A-Z2-7]{7}=|[A-Z2-7]{8})\Z"
)
BASE64_PATTERN = (
    r"^(?:[A-Za-z0-9+\/]{4})*(?:[A-Za-z0-9+\/]{2}==|[A-Za-z0-9+\/]{3}=|[A-Za-z0-9+\/]{4})\Z"
)
BASE64_URL_PATTERN = (
    r"^(?:[A-Za-z0-9_-]{4})*(?:[A-Za-z0-9_-]{2}==|[A-Za-z0-9_-]{3}=|[A-Za-z0-9_-]{4})\Z"
)
BASE64_RAW_URL_PATTERN = r"^(?:[A-Za-z0-9_-]{4})*(?:[A-Za-z0-9_-]{2,4})\Z"
ISBN10_PATTERN = r"^(?:[0-9]{9}X|[0-9]{10})\Z"
ISBN13_PATTERN = r"^(?:(?:97(?:8|9))[0-9]{10})\Z"
ISSN_PATTERN = r"^(?:[0-9]{4}-[0-9]{3}[0-9X])\Z"
UUID3_PATTERN = r"^[0-9a-f]{8}-[0-9a-f]{4}-3[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}\Z"
UUID4_PATTERN = r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}\Z"
UUID5_PATTERN = r"^[0-9a-f]{8}-[0-9a-f]{4}-5[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}\Z"
UUID_PATTERN = r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\Z"
UUID3_RFC4122_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-3[0-9a-fA-F]{3}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"
)
UUID4_RFC4122_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}\Z"
)
UUID5_RFC4122_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-5[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}\Z"
)
UUID_RFC4122_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"
)
ULID_PATTERN = r"(?i)^[A-HJKMNP-TV-Z0-9]{26}\Z"
MD4_PATTERN = r"^[0-9a-f]{32}\Z"
MD5_PATTERN = r"^[0-9a-f]{32}\Z"
SHA256_PATTERN = r"^[0-9a-f]{64}\Z"
SHA384_PATTERN = r"^[0-9a-f]{96}\Z"
SHA512_PATTERN = r"^[0-9a-f]{128}\Z"
RIPEMD128_PATTERN = r"^[0-9a-f]{32}\Z"
RIPEMD160_PATTERN = r"^[0-9a-f]{40}\Z"
TIGER128_PATTERN = r"^[0-9a-f]{32}\Z"
TIGER160_PATTERN = r"^[0-9a-f]{40}\Z"
TIGER192_PATTERN = r"^[0-9a-f]{48}\Z"
ASCII_PATTERN = r"^[\x00-\x7F]*\Z"
PRINTABLE_ASCII_PATTERN = r"^[\x20-\x7E]*\Z"
MULTIBYTE_PATTERN = r"[^\x00-\x7F]"
DATA_URI_PATTERN = r"^data:((?:\w+\/(?:([^;]|;[^;]).)+)?)"
LATITUDE_PATTERN = r"^[-+]?([1-8]?\d(\.\d+)?|90(\.0+)?)\Z"
LONGITUDE_PATTERN = r"^[-+]?(180(\.0+)?|((1[0-7]\d)|([1-9]?\d))(\.\d+)?)\Z"
SSN_PATTERN = (
    r"^[0-9]{3}[ -]?(0[1-9]|[1-9][0-9])[ -]?"
    r"([1-9][0-9]{3}|[0-9][1-9][0-9]{2}|[0-9]{2}[1-9][0-9]|[0-9]{3}[1-9])\Z"
)
HOSTNAME_RFC952_PATTERN = r"^[a-zA-Z]([a-zA-Z0-9\-]+[\.]?)*[a-zA-Z0-9]\Z"
HOSTNAME_RFC1123_PATTERN = (
    r"^([a-zA-Z0-9]{1}[a-zA-Z0-9-]{0,62}){1}(\.[a-zA-Z0-9]{1}[a-zA-Z0-9-]{0,62})*?\Z"
)
FQDN_RFC1123_PATTERN = (
    r"^([a-zA-Z0-9]{1}[a-zA-Z0-9-]{0,62})(\.[a-zA-Z0-9]{1}[a-zA-Z0-9-]{0,62})*?"
    r"(\.[a-zA-Z]{1}[a-zA-Z0-9]{0,62})\.?\Z"
)
BTC_ADDRESS_PATTERN = r"^[13][a-km-zA-HJ-NP-Z1-9]{25,34}\Z"
BTC_ADDRESS_UPPER_BECH32_PATTERN = r"^BC1[02-9AC-HJ-NP-Z]{7,76}\Z"
BTC_ADDRESS_LOWER_BECH32_PATTERN = r"^bc1[02-9ac-hj-np-z]{7,76}\Z"
ETH_ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}\Z"
ETH_ADDRESS_UPPER_PATTERN = r"^0x[0-9A-F]{40}\Z"
ETH_ADDRESS_LOWER_PATTERN = r"^0x[0-9a-f]{40}\Z"
URL_ENCODED_PATTERN = r"^(?:[^%]|%[0-9A-Fa-f]{2})*\Z"
HTML_ENCODED_PATTERN = r"&#[x]?([0-9a-fA-F]{2})|(&gt)|(&lt)|(&quot)|(&amp)+[;]?"
HTML_PATTERN = r"<[/]?([a-zA-Z]+).*?>"
JWT_PATTERN = r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*\Z"
SPLIT_PARAMS_PATTERN = r"'[^']*'|\S+"
BIC_PATTERN = r"^[A-Za-z]{6}[A-Za-z0-9]{2}([A-Za-z0-9]{3})?\Z"
SEMVER_PATTERN = (
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?\Z"
)
DNS_RFC1035_LABEL_PATTERN = r"^[a-z]([-a-z0-9]*[a-z0-9])?\Z"
CVE_PATTERN = r"^CVE-(1999|2\d{3})-(0[^0]\d{2}|0\d[^0]\d{1}|0\d{2}[^0]|[1-9]{1}\d{3,})\Z"
MONGODB_ID_PATTERN = r"^[a-f\d]{24}\Z"
MONGODB_CONNECTION_PATTERN = (
    r"^mongodb(\+srv)?:\/\/(([a-zA-Z\d]+):([a-zA-Z\d$:\/?#\[\]@]+)@)?"
    r"(([a-z\d.-]+)(:[\d]+)?)((,(([a-z\d.-]+)(:(\d+))?))*)?(\/[a-zA-Z_-]{1,64})?"
    r"(\?(([a-zA-Z]+)=([a-zA-Z\d]+))(&(([a-zA-Z\d]+)=([a-zA-Z\d]+))?)*)?\Z"
)
CRON_PATTERN = (
    r"(@(annually|yearly|monthly|weekly|daily|hourly|reboot))"
    r"|(@every (\d+(ns|us|µs|ms|s|m|h))+)"
    r"|((((\d+,)+\d+|((\*|\d+)(\/|-)\d+)|\d+|\*) ?){5,7})"
)
SPICEDB_ID_PATTERN = r"^(([a-zA-Z0-9/_|\-=+]{1,})|\*)\Z"
SPICEDB_PERMISSION_PATTERN = r"^([a-z][a-z0-9_]{1,62}[a-z0-9])?\Z"
SPICEDB_TYPE_PATTERN = r"^([a-z][a-z0-9_]{1,61}[a-z0-9]/)?[a-z][a-z0-9_]{1,62}[a-z0-9]\Z"
EIN_PATTERN = r"^(\d{2}-\d{7})\Z"


def lazy_regex_compile(pattern: str) -> Callable[[], regex.Pattern]:
    """Return a callable that compiles ``pattern`` once, on its first call."""
    lock = threading.Lock()
    compiled: list[regex.Pattern] = []

    def get() -> regex.Pattern:
        if not compiled:
            with lock:
                if not compiled:
                    compiled.append(regex.compile(pattern, _FLAGS))
        return compiled[0]

    return get


alpha_regex = lazy_regex_compile(ALPHA_PATTERN)
alpha_numeric_regex = lazy_regex_compile(ALPHA_NUMERIC_PATTERN)
alpha_unicode_regex = lazy_regex_compile(ALPHA_UNICODE_PATTERN)
alpha_unicode_numeric_regex = lazy_regex_compile(ALPHA_UNICODE_NUMERIC_PATTERN)
numeric_regex = lazy_regex_compile(NUMERIC_PATTERN)
number_regex = lazy_regex_compile(NUMBER_PATTERN)
hexadecimal_regex = lazy_regex_compile(HEXADECIMAL_PATTERN)
hex_color_regex = lazy_regex_compile(HEX_COLOR_PATTERN)
rgb_regex = lazy_regex_compile(RGB_PATTERN)
rgba_regex = lazy_regex_compile(RGBA_PATTERN)
hsl_regex = lazy_regex_compile(HSL_PATTERN)
hsla_regex = lazy_regex_compile(HSLA_PATTERN)
e164_regex = lazy_regex_compile(E164_PATTERN)
email_regex = lazy_regex_compile(EMAIL_PATTERN)
base32_regex = lazy_regex_compile(BASE32_PATTERN)
base64_regex = lazy_regex_compile(BASE64_PATTERN)
base64_url_regex = lazy_regex_compile(BASE64_URL_PATTERN)
base64_raw_url_regex = lazy_regex_compile(BASE64_RAW_URL_PATTERN)
isbn10_regex = lazy_regex_compile(ISBN10_PATTERN)
isbn13_regex = lazy_regex_compile(ISBN13_PATTERN)
issn_regex = lazy_regex_compile(ISSN_PATTERN)
uuid3_regex = lazy_regex_compile(UUID3_PATTERN)
uuid4_regex = lazy_regex_compile(UUID4_PATTERN)
uuid5_regex = lazy_regex_compile(UUID5_PATTERN)
uuid_regex = lazy_regex_compile(UUID_PATTERN)
uuid3_rfc4122_regex = lazy_regex_compile(UUID3_RFC4122_PATTERN)
uuid4_rfc4122_regex = lazy_regex_compile(UUID4_RFC4122_PATTERN)
uuid5_rfc4122_regex = lazy_regex_compile(UUID5_RFC4122_PATTERN)
uuid_rfc4122_regex = lazy_regex_compile(UUID_RFC4122_PATTERN)
ulid_regex = lazy_regex_compile(ULID_PATTERN)
md4_regex = lazy_regex_compile(MD4_PATTERN)
md5_regex = lazy_regex_compile(MD5_PATTERN)
sha256_regex = lazy_regex_compile(SHA256_PATTERN)
sha384_regex = lazy_regex_compile(SHA384_PATTERN)
sha512_regex = lazy_regex_compile(SHA512_PATTERN)
ripemd128_regex = lazy_regex_compile(RIPEMD128_PATTERN)
ripemd160_regex = lazy_regex_compile(RIPEMD160_PATTERN)
tiger128_regex = lazy_regex_compile(TIGER128_PATTERN)
tiger160_regex = lazy_regex_compile(TIGER160_PATTERN)
tiger192_regex = lazy_regex_compile(TIGER192_PATTERN)
ascii_regex = lazy_regex_compile(ASCII_PATTERN)
printable_ascii_regex = lazy_regex_compile(PRINTABLE_ASCII_PATTERN)
multibyte_regex = lazy_regex_compile(MULTIBYTE_PATTERN)
data_uri_regex = lazy_regex_compile(DATA_URI_PATTERN)
latitude_regex = lazy_regex_compile(LATITUDE_PATTERN)
longitude_regex = lazy_regex_compile(LONGITUDE_PATTERN)
ssn_regex = lazy_regex_compile(SSN_PATTERN)
hostname_rfc952_regex = lazy_regex_compile(HOSTNAME_RFC952_PATTERN)
hostname_rfc1123_regex = lazy_regex_compile(HOSTNAME_RFC1123_PATTERN)
fqdn_rfc1123_regex = lazy_regex_compile(FQDN_RFC1123_PATTERN)
btc_address_regex = lazy_regex_compile(BTC_ADDRESS_PATTERN)
btc_upper_address_bech32_regex = lazy_regex_compile(BTC_ADDRESS_UPPER_BECH32_PATTERN)
btc_lower_address_bech32_regex = lazy_regex_compile(BTC_ADDRESS_LOWER_BECH32_PATTERN)
eth_address_regex = lazy_regex_compile(ETH_ADDRESS_PATTERN)
url_encoded_regex = lazy_regex_compile(URL_ENCODED_PATTERN)
html_encoded_regex = lazy_regex_compile(HTML_ENCODED_PATTERN)
html_regex = lazy_regex_compile(HTML_PATTERN)
jwt_regex = lazy_regex_compile(JWT_PATTERN)
split_params_regex = lazy_regex_compile(SPLIT_PARAMS_PATTERN)
bic_regex = lazy_regex_compile(BIC_PATTERN)
semver_regex = lazy_regex_compile(SEMVER_PATTERN)
dns_rfc1035_label_regex = lazy_regex_compile(DNS_RFC1035_LABEL_PATTERN)
cve_regex = lazy_regex_compile(CVE_PATTERN)
mongodb_id_regex = lazy_regex_compile(MONGODB_ID_PATTERN)
mongodb_connection_regex = lazy_regex_compile(MONGODB_CONNECTION_PATTERN)
cron_regex = lazy_regex_compile(CRON_PATTERN)
spicedb_id_regex = lazy_regex_compile(SPICEDB_ID_PATTERN)
spicedb_permission_regex = lazy_regex_compile(SPICEDB_PERMISSION_PATTERN)
spicedb_type_regex = lazy_regex_compile(SPICEDB_TYPE_PATTERN)
ein_regex = lazy_regex_compile(EIN_PATTERN)