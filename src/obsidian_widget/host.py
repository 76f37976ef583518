"""File-system primitives the resolver needs from its host."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .paths import Bookmark

logger = logging.getLogger(__name__)


class VaultHost(Protocol):
    """Read-only view of the bookmarked vaults.

    ``read_text`` returns ``None`` instead of raising when the file is absent.
    """

    def bookmark_exists(self, name: str) -> bool: ...

    def bookmarked_path(self, name: str) -> Path: ...

    async def is_directory(self, path: Path) -> bool: ...

    async def read_text(self, path: Path) -> str | None: ...

    async def list_contents(self, path: Path) -> list[str]: ...


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError):
        return None
    except (UnicodeDecodeError, PermissionError) as exc:
        logger.warning("Cannot read %s as text: %s", path, exc)
        return None


def _list_contents(path: Path) -> list[str]:
    return [entry.name for entry in path.iterdir()]


@dataclass(slots=True)
class LocalVaultHost:
    """:class:`VaultHost` backed by the local disk."""

    bookmarks: Mapping[str, Bookmark]

    def bookmark_exists(self, name: str) -> bool:
        return name in self.bookmarks

    def bookmarked_path(self, name: str) -> Path:
        return self.bookmarks[name].root

    async def is_directory(self, path: Path) -> bool:
        return await asyncio.to_thread(path.is_dir)

    async def read_text(self, path: Path) -> str | None:
        logger.debug("Reading %s", path)
        return await asyncio.to_thread(_read_text, path)

    async def list_contents(self, path: Path) -> list[str]:
        logger.debug("Listing %s", path)
        return await asyncio.to_thread(_list_contents, path)
