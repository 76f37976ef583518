"""Display items and the selection policy applied to source records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .query import Mode


class LinkKind(str, Enum):
    OPEN = "open"
    SEARCH = "search"


class ErrorKind(str, Enum):
    BOOKMARK_MISSING = "bookmark_missing"
    SOURCE_DATA_MISSING = "source_data_missing"
    INVALID_PATH = "invalid_path"


@dataclass(frozen=True)
class ResolutionError:
    """A displayable failure that replaces the item list."""

    kind: ErrorKind
    message: str
    help_url: str | None = None


@dataclass(frozen=True)
class SourceRecord:
    """A raw entry as a source reader found it.

    ``path`` holds a saved search query when ``kind`` is ``SEARCH``.
    """

    basename: str
    path: str
    kind: LinkKind = LinkKind.OPEN


@dataclass(frozen=True)
class DisplayItem:
    label: str
    target_path: str
    link_kind: LinkKind = LinkKind.OPEN


def normalize(record: SourceRecord) -> DisplayItem:
    return DisplayItem(label=record.basename, target_path=record.path, link_kind=record.kind)


def normalize_and_select(
    records: Sequence[SourceRecord], cap: int, mode: Mode
) -> list[DisplayItem]:
    """Return at most *cap* items, in source order.

    Folder listings are sorted by name before the cap is applied.
    """

    if cap <= 0:
        return []

    candidates = list(records)
    if mode is Mode.FOLDER:
        candidates.sort(key=lambda record: record.basename)
    return [normalize(record) for record in candidates[:cap]]
