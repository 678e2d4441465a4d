"""laxuri.codec
Percent-encoding and decoding under per-component character policies.
Decoding is tolerant: a '%' that does not start a valid escape is passed through.
"""

import dataclasses
import re
import string

from typing import Self

# Each of these ABNF rules is from RFC 3986.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = string.ascii_letters

# DIGIT = %x30-39
_DIGIT: str = string.digits

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = r"[0-9A-Fa-f]"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = _ALPHA + _DIGIT + "-._~"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = "!$&'()*+,;="

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED_PAT: re.Pattern[bytes] = re.compile(rf"%({_HEXDIG}{_HEXDIG})".encode("ascii"))
_PCT_ESCAPE_PAT: re.Pattern[str] = re.compile(rf"%{_HEXDIG}{_HEXDIG}")

# Octets that are not valid UTF-8 survive a decode/encode cycle as lone surrogates.
_ERRORS: str = "surrogateescape"


@dataclasses.dataclass(frozen=True)
class Policy:
    """The set of characters a URI component may carry unescaped.

    `allowed` is what `encode` leaves alone. `tolerated` is accepted by `is_valid_encoded`
    on top of that, but is still escaped when re-encoding.
    """

    allowed: frozenset[str]
    tolerated: frozenset[str] = frozenset()

    @classmethod
    def build(cls: type[Self], extra: str = "", tolerated: str = "") -> Self:
        return cls(frozenset(_UNRESERVED + _SUB_DELIMS + extra), frozenset(tolerated))

    def permits(self: Self, char: str) -> bool:
        return char in self.allowed or char in self.tolerated


USERNAME: Policy = Policy.build()
PASSWORD: Policy = Policy.build(extra=":")
HOST: Policy = Policy.build()
# Bracketed IP literals, and hosts carrying a ":port".
HOST_LITERAL: Policy = Policy.build(extra=":[]")
PATH: Policy = Policy.build(extra=":@/", tolerated="[]")
QUERY: Policy = Policy.build(extra="/?:@", tolerated="[]")
FRAGMENT: Policy = Policy.build(extra="/?:@", tolerated="[]")


def must_encode(policy: Policy, char: str) -> bool:
    """True if `char` has to be percent-encoded in a component governed by `policy`."""
    return char not in policy.allowed


def decode(text: str) -> str:
    """Replaces each "%HH" escape with the octet it denotes.
    A '%' that isn't followed by two hex digits is kept as a literal '%'.
    e.g. decode("a%20b%zz") == "a b%zz"
    """
    octets: bytes = _PCT_ENCODED_PAT.sub(lambda m: bytes((int(m[1], 16),)), text.encode("utf-8", _ERRORS))
    return octets.decode("utf-8", _ERRORS)


def encode(text: str, policy: Policy) -> str:
    """Percent-encodes every UTF-8 octet of `text` that `policy` does not allow unescaped.
    Hex digits are emitted in uppercase.
    """
    result: list[str] = []
    for octet in text.encode("utf-8", _ERRORS):
        char: str = chr(octet)
        result.append(f"%{octet:02X}" if must_encode(policy, char) else char)
    return "".join(result)


def is_valid_encoded(text: str, policy: Policy) -> bool:
    """True iff every '%' in `text` starts a "%HH" escape and every other character is permitted by `policy`."""
    i: int = 0
    while i < len(text):
        char: str = text[i]
        if char == "%":
            if _PCT_ESCAPE_PAT.match(text, i) is None:
                return False
            i += 3
            continue
        if not policy.permits(char):
            return False
        i += 1
    return True
