"""laxuri.uri
The structured form of a parsed URI reference.
"""

import dataclasses

from typing import Self


@dataclasses.dataclass(frozen=True)
class Userinfo:
    """The credential portion of an authority. `password` is None when no ':' was present."""

    username: str = ""
    password: str | None = None

    @property
    def password_set(self: Self) -> bool:
        return self.password is not None


@dataclasses.dataclass(frozen=True)
class Uri:
    """A URI reference. You should not instantiate this directly. Instead use laxuri.parse.

    Encode-sensitive components are held twice: the decoded value (`path`, `fragment`) and
    the exact slice of the input (`raw_path`, `raw_fragment`) when that slice is a valid
    encoding that differs from the canonical one. `raw_query` is never decoded.
    """

    scheme: str = ""
    opaque: str = ""
    userinfo: Userinfo | None = None
    host: str = ""
    path: str = ""
    raw_path: str = ""
    force_query: bool = False
    raw_query: str = ""
    fragment: str = ""
    raw_fragment: str = ""
    omit_host: bool = False

    @property
    def is_absolute(self: Self) -> bool:
        return len(self.scheme) > 0

    @property
    def username(self: Self) -> str | None:
        if self.userinfo is None:
            return None
        return self.userinfo.username

    @property
    def password(self: Self) -> str | None:
        if self.userinfo is None:
            return None
        return self.userinfo.password

    @property
    def hostname(self: Self) -> str:
        """The host without its port and without the brackets of an IP literal."""
        host, _ = _split_host_port(self.host)
        if host.startswith("["):
            return host[1:].removesuffix("]")
        return host

    @property
    def port(self: Self) -> str:
        """The text following the host's port colon; empty when there is none."""
        _, port = _split_host_port(self.host)
        return port


def _split_host_port(host: str) -> tuple[str, str]:
    if host.startswith("["):
        head, bracket, tail = host.rpartition("]")
        if len(bracket) == 0:
            return host, ""
        return head + bracket, tail.removeprefix(":")
    head, colon, tail = host.rpartition(":")
    if len(colon) == 0:
        return host, ""
    return head, tail
