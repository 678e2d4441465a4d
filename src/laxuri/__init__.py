__version__ = "0.1"

from .codec import FRAGMENT, HOST, HOST_LITERAL, PASSWORD, PATH, QUERY, USERNAME, Policy, decode, encode, is_valid_encoded, must_encode
from .parse import InvalidBracketedHost, ParseError, parse
from .serialize import DecodedSerializer, EncodedSerializer, Serializer, serialize_decoded, serialize_encoded
from .uri import Uri, Userinfo
