"""Network client for BYOND TOPIC queries."""

from __future__ import annotations

import logging
import socket
import time
from typing import Any, Callable

from .config import ClientConfig
from .errors import QueryTimeoutError, StatusParseError, TopicConnectionError
from .protocol import BodyKind, DecodedBody, decode_body, encode_request, read_frame
from .status import ServerStatus, parse_status


logger = logging.getLogger(__name__)

# (host, port), timeout in seconds or None -> connected socket-like object
Connector = Callable[[tuple, Any], Any]

STATUS_QUERY = "?status"


def _default_connector(address: tuple[str, int], timeout: float | None) -> socket.socket:
    return socket.create_connection(address, timeout=timeout)


class TopicClient:
    """One-shot TOPIC client: every query opens, uses and closes its own connection.

    The client keeps only immutable configuration, so one instance can be
    shared between threads.
    """

    def __init__(
        self,
        address: str,
        timeout_ms: int = 5000,
        *,
        status_errors: str = "ignore",
        recv_size: int = 4096,
        connector: Connector | None = None,
    ):
        self.config = ClientConfig.from_address(
            address, timeout_ms, status_errors=status_errors, recv_size=recv_size
        )
        self._connector = connector or _default_connector

    @classmethod
    def from_config(cls, config: ClientConfig, connector: Connector | None = None) -> "TopicClient":
        return cls(
            config.address,
            config.timeout_ms,
            status_errors=config.status_errors,
            recv_size=config.recv_size,
            connector=connector,
        )

    @property
    def address(self) -> str:
        return self.config.address

    @property
    def timeout(self) -> float:
        return self.config.timeout

    def __repr__(self) -> str:
        return f"TopicClient({self.address!r}, timeout_ms={self.config.timeout_ms})"

    def query(self, text: str) -> str:
        return self.query_value(text).value

    def query_value(self, text: str, expect: BodyKind | None = None) -> DecodedBody:
        response = self._exchange(encode_request(text))
        body = decode_body(response, expect)
        logger.debug("Query %r to %s decoded as %s", text, self.address, body.kind.value)
        return body

    def get_status(self) -> ServerStatus:
        text = self.query(STATUS_QUERY)
        try:
            return parse_status(text, strict=True)
        except StatusParseError as exc:
            if self.config.status_errors == "raise":
                raise
            logger.warning("Ignoring malformed status reply from %s: %s", self.address, exc)
            return parse_status(text)

    def _exchange(self, request: bytes) -> bytes:
        target = (self.config.host, self.config.port)
        timeout = self.config.timeout
        try:
            # A zero timeout would make the socket non-blocking; dial without one.
            conn = self._connector(target, timeout or None)
        except TimeoutError as exc:
            raise QueryTimeoutError(f"Timed out connecting to {self.address}") from exc
        except OSError as exc:
            raise TopicConnectionError(f"Could not connect to {self.address}: {exc}") from exc

        with conn:
            logger.debug("Connected to %s, sending %d bytes", self.address, len(request))
            try:
                conn.sendall(request)
                deadline = time.monotonic() + timeout
                response = read_frame(conn, deadline, self.config.recv_size)
            except TimeoutError as exc:
                raise QueryTimeoutError(f"No reply from {self.address} within {self.config.timeout_ms}ms") from exc
            except OSError as exc:
                raise TopicConnectionError(f"Query to {self.address} failed: {exc}") from exc

        logger.debug("Received %d byte frame from %s", len(response), self.address)
        return response
