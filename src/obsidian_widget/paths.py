"""Bookmark definitions and vault path helpers."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class Bookmark:
    """A named pointer to a vault root."""

    name: str
    root: Path


class VaultConfigurationError(ValueError):
    """Raised when bookmark configuration is invalid."""


def _make_bookmark(name: str, raw_path: str) -> Bookmark:
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        raise VaultConfigurationError(f"Bookmark path must be absolute: {raw_path!r}")
    root = path.resolve(strict=False)
    return Bookmark(name=name or root.name, root=root)


def parse_bookmarks(raw: str) -> dict[str, Bookmark]:
    """Parse ``Name=/path`` pairs separated by commas into :class:`Bookmark` objects.

    A chunk without ``=`` is taken as a bare path and named after its final
    directory component.
    """

    bookmarks: dict[str, Bookmark] = {}
    for chunk in raw.split(","):
        candidate = chunk.strip()
        if not candidate:
            continue
        name, sep, raw_path = candidate.partition("=")
        if not sep:
            name, raw_path = "", candidate
        bookmark = _make_bookmark(name.strip(), raw_path.strip())
        if bookmark.name in bookmarks:
            raise VaultConfigurationError(f"Duplicate bookmark name detected: {bookmark.name}")
        bookmarks[bookmark.name] = bookmark
    return bookmarks


def load_bookmarks_file(path: Path) -> dict[str, Bookmark]:
    """Load a YAML mapping of bookmark name to vault root."""

    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise VaultConfigurationError(f"Cannot read bookmarks file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise VaultConfigurationError(f"Bookmarks file must contain a mapping: {path}")

    bookmarks: dict[str, Bookmark] = {}
    for name, raw_path in data.items():
        if not isinstance(raw_path, str):
            raise VaultConfigurationError(f"Bookmark {name!r} must map to a path string")
        bookmarks[str(name)] = _make_bookmark(str(name), raw_path)
    return bookmarks


def merge_bookmarks(*groups: Mapping[str, Bookmark]) -> dict[str, Bookmark]:
    """Merge bookmark mappings, rejecting names defined more than once."""

    merged: dict[str, Bookmark] = {}
    for group in groups:
        for name, bookmark in group.items():
            if name in merged:
                raise VaultConfigurationError(f"Duplicate bookmark name detected: {name}")
            merged[name] = bookmark
    return merged


def join_in_vault(root: Path, relative: str) -> Path | None:
    """Join *relative* onto *root*, or return ``None`` if it escapes the vault.

    A leading slash on *relative* is taken relative to the vault root, the way
    widget parameters spell folder paths (``/Projects``).
    """

    target = Path(os.path.normpath(root / relative.lstrip("/")))
    try:
        target.relative_to(root)
    except ValueError:
        return None
    return target


def list_bookmark_names(bookmarks: Iterable[Bookmark]) -> list[str]:
    """Return bookmark names sorted alphabetically."""

    return sorted(b.name for b in bookmarks)
