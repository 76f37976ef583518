"""Widget parameter parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DELIMITER = "||"
DEFAULT_PARAMETER = "MyVault||Recent"


class Mode(str, Enum):
    RECENT = "RECENT"
    STARRED = "STARRED"
    FOLDER = "FOLDER"
    FILE = "FILE"

    @classmethod
    def from_raw(cls, raw: str | None) -> Mode:
        """Map a user supplied mode to a :class:`Mode`, defaulting to ``RECENT``."""

        if not raw:
            return cls.RECENT
        try:
            return cls(raw.upper())
        except ValueError:
            return cls.RECENT


@dataclass(frozen=True)
class Query:
    bookmark: str
    mode: Mode = Mode.RECENT
    path: str | None = None


def parse_parameter(raw: str | None, default: str = DEFAULT_PARAMETER) -> Query:
    """Split ``bookmark[||mode[||path]]`` into a :class:`Query`.

    Never raises: missing segments take their defaults and an unrecognised
    mode falls back to ``RECENT``. An empty parameter is replaced by
    *default*.
    """

    segments = (raw or default).split(DELIMITER)
    bookmark = segments[0]
    mode = Mode.from_raw(segments[1] if len(segments) > 1 else None)
    path = segments[2] if len(segments) > 2 else None
    return Query(bookmark=bookmark, mode=mode, path=path)
