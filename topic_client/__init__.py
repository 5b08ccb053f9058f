"""Client for the BYOND TOPIC status/administrative query protocol."""

from .config import ClientConfig, parse_address
from .connection import STATUS_QUERY, TopicClient
from .errors import (
    ConfigurationError,
    DecodeError,
    ProtocolError,
    QueryTimeoutError,
    StatusParseError,
    TopicConnectionError,
    TopicError,
)
from .protocol import BodyKind, DecodedBody, decode_body, encode_request, is_protocol_frame
from .status import ServerStatus, parse_status

__all__ = [
    "BodyKind",
    "ClientConfig",
    "ConfigurationError",
    "DecodeError",
    "DecodedBody",
    "ProtocolError",
    "QueryTimeoutError",
    "STATUS_QUERY",
    "ServerStatus",
    "StatusParseError",
    "TopicClient",
    "TopicConnectionError",
    "TopicError",
    "decode_body",
    "encode_request",
    "is_protocol_frame",
    "parse_address",
    "parse_status",
]
