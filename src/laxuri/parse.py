"""laxuri.parse
A permissive URI-reference parser.
Accepts a superset of RFC 3986: bytes that ought to be percent-encoded are tolerated,
and the exact encoding of the input is kept wherever it isn't canonical.
"""

import re

from typing import Self

from . import codec
from .uri import Uri, Userinfo

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = r"(?P<scheme>[A-Za-z][A-Za-z0-9+\-.]*)"
_SCHEME_PAT: re.Pattern[str] = re.compile(rf"{_SCHEME}:")


class ParseError(ValueError):
    pass


class InvalidBracketedHost(ParseError):
    """An IP literal was opened with '[' but never closed."""

    def __init__(self: Self, host: str) -> None:
        super().__init__(f"missing ']' in host {host!r}")
        self.host: str = host


def encode_path(path: str, scheme: bool, authority: bool) -> str:
    """Canonical encoding of `path` for where it sits in a URI.
    Without a "//" authority before it, a leading "//" is written as "/%2F" so it can't be read back as one.
    Without a scheme either, a first segment like "a:b" is written as "a%3Ab" so it can't be read back as a scheme.
    """
    result: str = codec.encode(path, codec.PATH)
    if authority:
        return result
    if result.startswith("//") and (scheme or not result.startswith("///")):
        return f"/%2F{result[2:]}"
    if not scheme:
        m: re.Match[str] | None = _SCHEME_PAT.match(result)
        if m is not None:
            return f"{m['scheme']}%3A{result[m.end() :]}"
    return result


def _twin(raw: str, canonical: str, policy: codec.Policy) -> str:
    """Returns `raw` if it should be kept alongside its decoded value, else the empty string.
    The raw slice is kept only when it is a valid encoding that differs from `canonical`.
    """
    if raw != canonical and codec.is_valid_encoded(raw, policy):
        return raw
    return ""


def _parse_userinfo(data: str) -> Userinfo:
    username, colon, password = data.partition(":")
    if len(colon) == 0:
        return Userinfo(username=codec.decode(username))
    return Userinfo(username=codec.decode(username), password=codec.decode(password))


def _parse_host(data: str) -> str:
    if data.startswith("[") and data.rfind("]") == -1:
        raise InvalidBracketedHost(data)
    # Inside brackets this turns a "%25<zone>" zone identifier into "%<zone>".
    return codec.decode(data)


def _parse_authority(data: str) -> tuple[Userinfo | None, str]:
    """Splits userinfo from host at the LAST '@', so "j@ne:pw@host" has the username "j@ne"."""
    userinfo, at, host = data.rpartition("@")
    if len(at) == 0:
        return None, _parse_host(data)
    return _parse_userinfo(userinfo), _parse_host(host)


def parse(data: str) -> Uri:
    """Parses a URI reference.
    Raises InvalidBracketedHost for an unterminated IP literal; every other deviation from RFC 3986 is tolerated.
    """
    rest, _, raw_fragment = data.partition("#")
    fragment: str = codec.decode(raw_fragment)

    rest, question_mark, raw_query = rest.partition("?")
    force_query: bool = len(question_mark) > 0 and len(raw_query) == 0

    scheme: str = ""
    m: re.Match[str] | None = _SCHEME_PAT.match(rest)
    if m is not None:
        scheme = m["scheme"].lower()
        rest = rest[m.end() :]

    if scheme and not rest.startswith("/"):
        # Not hierarchical, so nothing after the ':' is decoded.
        return Uri(
            scheme=scheme,
            opaque=rest,
            force_query=force_query,
            raw_query=raw_query,
            fragment=fragment,
            raw_fragment=_twin(raw_fragment, codec.encode(fragment, codec.FRAGMENT), codec.FRAGMENT),
        )

    userinfo: Userinfo | None = None
    host: str = ""
    has_authority: bool = False
    omit_host: bool = False
    # Without a scheme, "///path" is a path rather than an empty authority.
    if rest.startswith("//") and (scheme or not rest.startswith("///")):
        authority, slash, path_rest = rest[2:].partition("/")
        userinfo, host = _parse_authority(authority)
        rest = slash + path_rest
        has_authority = True
    elif scheme:
        omit_host = True

    path: str = codec.decode(rest)
    return Uri(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        path=path,
        raw_path=_twin(rest, encode_path(path, bool(scheme), has_authority), codec.PATH),
        force_query=force_query,
        raw_query=raw_query,
        fragment=fragment,
        raw_fragment=_twin(raw_fragment, codec.encode(fragment, codec.FRAGMENT), codec.FRAGMENT),
        omit_host=omit_host,
    )
