"""Exception types raised by the TOPIC client."""

from __future__ import annotations


class TopicError(RuntimeError):
    """Base class for every error raised by this package."""


class ConfigurationError(TopicError, ValueError):
    """Raised when an address, timeout, policy or payload is out of range."""


class TopicConnectionError(TopicError, ConnectionError):
    """Raised when dialing, writing to or reading from the server fails."""


class QueryTimeoutError(TopicConnectionError, TimeoutError):
    """Raised when the server does not answer before the read deadline."""


class ProtocolError(TopicError):
    """Raised when the peer does not answer with a TOPIC frame."""


class DecodeError(TopicError):
    """Raised when a reply body carries an unknown content tag."""


class StatusParseError(TopicError, ValueError):
    """Raised when a status reply is not a well-formed key/value string."""
