"""Frame codec for the BYOND TOPIC query protocol.

Request frame::

    00 83 | LEN (u16 BE) | 00 00 00 00 00 | PAYLOAD | 00      LEN = len(PAYLOAD) + 6

Response frame::

    00 83 | SIZE (u16 BE) | TAG (u8) | BODY ...

SIZE counts every byte after the 4-byte header. Everything here is pure
except ``read_frame``, which pulls one response frame off a connected socket.
"""

from __future__ import annotations

import enum
import math
import struct
import time
from dataclasses import dataclass
from typing import Any

import numpy

from .errors import ConfigurationError, DecodeError, ProtocolError


MARKER = b"\x00\x83"
RESERVED = b"\x00" * 5
TERMINATOR = b"\x00"
HEADER_SIZE = 4
TAG_OFFSET = 4
BODY_OFFSET = 5
TAG_VALUE = 0x06
MAX_PAYLOAD = 0xFFFF - 6


class BodyKind(enum.Enum):
    ASCII = "ascii"
    FLOAT = "float"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DecodedBody:
    kind: BodyKind
    value: str

    def __str__(self) -> str:
        return self.value


def encode_request(payload: str | bytes) -> bytes:
    raw = payload.encode() if isinstance(payload, str) else bytes(payload)
    if len(raw) > MAX_PAYLOAD:
        raise ConfigurationError(f"Query is {len(raw)} bytes; at most {MAX_PAYLOAD} fit in one frame")
    return MARKER + struct.pack(">H", len(raw) + 6) + RESERVED + raw + TERMINATOR


def is_protocol_frame(response: bytes) -> bool:
    return response[:2] == MARKER


def _is_ascii_body(response: bytes) -> bool:
    return len(response) > TAG_OFFSET and response[TAG_OFFSET] == TAG_VALUE


def _is_float_body(response: bytes) -> bool:
    # Same tag as ASCII; no authoritative float tag is known yet.
    return len(response) > TAG_OFFSET and response[TAG_OFFSET] == TAG_VALUE


def body_kind(response: bytes) -> BodyKind:
    """Classify a response body by its tag byte.

    The ASCII test runs first and claims every ``0x06`` frame, so ``FLOAT`` is
    never returned here. Callers that know a query answers with a number ask
    for it explicitly through ``decode_body(..., expect=BodyKind.FLOAT)``.
    """
    if _is_ascii_body(response):
        return BodyKind.ASCII
    if _is_float_body(response):
        return BodyKind.FLOAT
    return BodyKind.UNKNOWN


def decode_float(data: bytes) -> str:
    """Format a big-endian IEEE-754 single as its shortest round-trip decimal."""
    if len(data) < 4:
        raise DecodeError(f"Float body needs 4 bytes, got {len(data)}")
    (value,) = struct.unpack(">f", data[:4])
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return numpy.format_float_positional(numpy.float32(value), unique=True, trim="-")


def decode_ascii(response: bytes) -> str:
    (size,) = struct.unpack(">H", response[2:HEADER_SIZE])
    body = response[BODY_OFFSET : BODY_OFFSET + size]
    return body.rstrip(b"\x00").decode("utf-8", errors="replace")


def decode_body(response: bytes, expect: BodyKind | None = None) -> DecodedBody:
    if not is_protocol_frame(response):
        raise ProtocolError("Response was not in TOPIC format")

    kind = body_kind(response)
    if kind is BodyKind.UNKNOWN:
        if len(response) <= TAG_OFFSET:
            raise DecodeError("Response is missing its content tag")
        raise DecodeError(f"Unknown content tag: 0x{response[TAG_OFFSET]:02x}")

    if expect is BodyKind.FLOAT:
        return DecodedBody(BodyKind.FLOAT, decode_float(response[BODY_OFFSET:]))
    if expect not in (None, BodyKind.ASCII):
        raise ValueError(f"Cannot decode a body as {expect}")
    return DecodedBody(BodyKind.ASCII, decode_ascii(response))


def _time_left(deadline: float) -> float:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise TimeoutError("Read deadline exceeded")
    return remaining


def _recv_exactly(conn: Any, count: int, deadline: float, recv_size: int) -> bytes:
    data = bytearray()
    while len(data) < count:
        conn.settimeout(_time_left(deadline))
        chunk = conn.recv(min(recv_size, count - len(data)))
        if not chunk:
            if not data:
                raise ConnectionError("Connection closed by server")
            raise ConnectionError(f"Connection closed mid-frame: expected {count} bytes, got {len(data)}")
        data += chunk
    return bytes(data)


def read_frame(conn: Any, deadline: float, recv_size: int = 4096) -> bytes:
    """Read one complete response frame from ``conn``.

    The header is read first; its SIZE field then says exactly how many more
    bytes belong to the frame, so replies of any size arrive whole.
    ``deadline`` is a ``time.monotonic()`` timestamp; once it has passed the
    read fails with ``TimeoutError`` before touching the socket. EOF raises
    the builtin ``ConnectionError``.
    """
    header = _recv_exactly(conn, HEADER_SIZE, deadline, recv_size)
    if not is_protocol_frame(header):
        raise ProtocolError("Response was not in TOPIC format")
    (size,) = struct.unpack(">H", header[2:HEADER_SIZE])
    return header + _recv_exactly(conn, size, deadline, recv_size)
