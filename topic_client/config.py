from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigurationError


STATUS_ERROR_POLICIES = ("ignore", "raise")


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6addr]:port``) into its parts."""
    if not isinstance(address, str) or not address.strip():
        raise ConfigurationError("Address must be a non-empty 'host:port' string")

    text = address.strip()
    if text.startswith("["):
        host, sep, port_text = text[1:].partition("]:")
        if not sep:
            raise ConfigurationError(f"Invalid IPv6 address {address!r}; expected '[addr]:port'")
    else:
        host, sep, port_text = text.rpartition(":")
        if not sep or ":" in host:
            raise ConfigurationError(f"Invalid address {address!r}; expected 'host:port'")

    if not host:
        raise ConfigurationError(f"Address {address!r} is missing a host")
    try:
        port = int(port_text)
    except ValueError as exc:
        raise ConfigurationError(f"Port in {address!r} must be an integer") from exc
    return host, port


@dataclass(frozen=True)
class ClientConfig:
    host: str
    port: int
    timeout_ms: int = 5000
    status_errors: str = "ignore"
    recv_size: int = 4096

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigurationError("host cannot be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigurationError(f"port must be in 1..65535, got {self.port!r}")
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int) or self.timeout_ms < 0:
            raise ConfigurationError(f"timeout_ms must be a non-negative integer, got {self.timeout_ms!r}")
        if self.status_errors not in STATUS_ERROR_POLICIES:
            raise ConfigurationError(
                f"status_errors must be one of {', '.join(STATUS_ERROR_POLICIES)}, got {self.status_errors!r}"
            )
        if isinstance(self.recv_size, bool) or not isinstance(self.recv_size, int) or self.recv_size < 1:
            raise ConfigurationError(f"recv_size must be an integer >= 1, got {self.recv_size!r}")

    @classmethod
    def from_address(cls, address: str, timeout_ms: int = 5000, **kwargs) -> "ClientConfig":
        host, port = parse_address(address)
        return cls(host=host, port=port, timeout_ms=timeout_ms, **kwargs)

    @property
    def address(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @property
    def timeout(self) -> float:
        """Per-call timeout in seconds. 0 makes every read fail at once."""
        return self.timeout_ms / 1000
