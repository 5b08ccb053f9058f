"""Mapping of ``?status`` replies onto a fixed-shape record."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from typing import Mapping
from urllib.parse import parse_qs

from .errors import StatusParseError


@dataclass(frozen=True)
class ServerStatus:
    """Server state reported by ``?status``.

    Every field holds the raw text the server sent under the key of the same
    name, or ``""`` when the key was absent. Nothing is converted, so numeric
    fields such as ``players`` stay strings.
    """

    version: str = ""
    mode: str = ""
    respawn: str = ""
    enter: str = ""
    vote: str = ""
    ai: str = ""
    host: str = ""
    round_id: str = ""
    players: str = ""
    revision: str = ""
    revision_date: str = ""
    admins: str = ""
    gamestate: str = ""
    map_name: str = ""
    security_level: str = ""
    round_duration: str = ""
    time_dilation_current: str = ""
    time_dilation_avg: str = ""
    time_dilation_avg_slow: str = ""
    time_dilation_avg_fast: str = ""
    shuttle_mode: str = ""
    shuttle_timer: str = ""

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


STATUS_KEYS = tuple(field.name for field in fields(ServerStatus))
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def status_from_fields(values: Mapping[str, str]) -> ServerStatus:
    return ServerStatus(**{key: values[key] for key in STATUS_KEYS if key in values})


def _parse_key_values(text: str, strict: bool) -> dict[str, str]:
    if strict:
        bad = _BAD_ESCAPE.search(text)
        if bad:
            raise ValueError(f"invalid URL escape {text[bad.start() : bad.start() + 3]!r}")
    # Bare keys and empty fields are legal; BYOND sends them for null values.
    parsed = parse_qs(
        text,
        keep_blank_values=True,
        errors="strict" if strict else "replace",
    )
    return {key: values[0] for key, values in parsed.items()}


def parse_status(text: str, *, strict: bool = False) -> ServerStatus:
    """Parse a URL-encoded ``key=value&...`` status reply.

    Only the first value of a repeated key is kept and unknown keys are
    dropped. The lenient mode accepts any text; ``strict=True`` raises
    ``StatusParseError`` on malformed or undecodable percent escapes.
    """
    try:
        values = _parse_key_values(text, strict)
    except ValueError as exc:
        raise StatusParseError(f"Malformed status reply: {exc}") from exc
    return status_from_fields(values)
