"""laxuri.serialize
Reassembles a Uri in one of two forms:
    encoded: lossless, keeps the input's own encoding of each component where it was retained
    decoded: human-readable, percent-escapes replaced by the text they stand for
The query is emitted as received in both forms.
"""

from typing import Self

from . import codec
from .parse import encode_path
from .uri import Uri, Userinfo


class Serializer:
    """Walks the components of a Uri in canonical order. Subclasses choose how each component is rendered."""

    def render_userinfo(self: Self, userinfo: Userinfo) -> str:
        raise NotImplementedError

    def render_host(self: Self, host: str) -> str:
        raise NotImplementedError

    def render_path(self: Self, uri: Uri, authority: bool) -> str:
        raise NotImplementedError

    def render_fragment(self: Self, uri: Uri) -> str:
        raise NotImplementedError

    def authority(self: Self, uri: Uri) -> str:
        """The "//userinfo@host:port" prefix, or the empty string when none is emitted."""
        if not (uri.scheme or uri.host or uri.userinfo is not None):
            return ""
        if uri.omit_host and not uri.host and uri.userinfo is None:
            return ""
        result: str = ""
        if uri.host or uri.path or uri.userinfo is not None:
            result += "//"
        if uri.userinfo is not None:
            result += f"{self.render_userinfo(uri.userinfo)}@"
        result += self.render_host(uri.host)
        return result

    def serialize(self: Self, uri: Uri) -> str:
        result: str = ""
        if uri.scheme:
            result += f"{uri.scheme}:"
        if uri.opaque:
            result += uri.opaque
        else:
            authority: str = self.authority(uri)
            result += authority
            if uri.path and not uri.path.startswith("/") and uri.host:
                result += "/"
            result += self.render_path(uri, authority.startswith("//"))
        if uri.force_query or uri.raw_query:
            result += f"?{uri.raw_query}"
        fragment: str = self.render_fragment(uri)
        if fragment:
            result += f"#{fragment}"
        return result


class EncodedSerializer(Serializer):
    def render_userinfo(self: Self, userinfo: Userinfo) -> str:
        result: str = codec.encode(userinfo.username, codec.USERNAME)
        if userinfo.password is not None:
            result += f":{codec.encode(userinfo.password, codec.PASSWORD)}"
        return result

    def render_host(self: Self, host: str) -> str:
        # An unclosed "[" must stay escaped, or it would be read back as an unterminated IP literal.
        if host.startswith("[") and "]" in host or not host.startswith("[") and ":" in host:
            return codec.encode(host, codec.HOST_LITERAL)
        return codec.encode(host, codec.HOST)

    def render_path(self: Self, uri: Uri, authority: bool) -> str:
        if uri.raw_path:
            return uri.raw_path
        return encode_path(uri.path, len(uri.scheme) > 0, authority)

    def render_fragment(self: Self, uri: Uri) -> str:
        if uri.raw_fragment:
            return uri.raw_fragment
        return codec.encode(uri.fragment, codec.FRAGMENT)


class DecodedSerializer(Serializer):
    def render_userinfo(self: Self, userinfo: Userinfo) -> str:
        if userinfo.password is None:
            return userinfo.username
        return f"{userinfo.username}:{userinfo.password}"

    def render_host(self: Self, host: str) -> str:
        return host

    def render_path(self: Self, uri: Uri, authority: bool) -> str:
        return uri.path

    def render_fragment(self: Self, uri: Uri) -> str:
        return uri.fragment


_ENCODED: EncodedSerializer = EncodedSerializer()
_DECODED: DecodedSerializer = DecodedSerializer()


def serialize_encoded(uri: Uri) -> str:
    """Lossless serialization. Re-parsing the result yields an equal Uri."""
    return _ENCODED.serialize(uri)


def serialize_decoded(uri: Uri) -> str:
    """Human-readable serialization. Not guaranteed to re-parse to the same Uri."""
    return _DECODED.serialize(uri)
