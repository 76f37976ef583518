"""Readers turning vault plugin state into source records."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .host import VaultHost
from .items import DisplayItem, ErrorKind, LinkKind, ResolutionError, SourceRecord
from .paths import join_in_vault

logger = logging.getLogger(__name__)

RECENT_FILES_DATA = Path(".obsidian/plugins/recent-files-obsidian/data.json")
STARRED_DATA = Path(".obsidian/starred.json")

RECENT_FILES_PLUGIN_URL = "https://github.com/tgrosinger/recent-files-obsidian"

RECENT_MISSING_MESSAGE = (
    "No recent files information found. Perhaps the Recent Files plugin is not "
    "installed in Obsidian. More info on this plugin can be found at: "
    f"{RECENT_FILES_PLUGIN_URL}"
)
STARRED_MISSING_MESSAGE = (
    "No starred files found. Perhaps the Starred core plugin is not enabled or "
    "you have not starred any files in this vault yet"
)
INVALID_FOLDER_MESSAGE = (
    "The folder path is not valid. Please update the parameter for this widget"
)
MISSING_FILE_MESSAGE = (
    "The file path is not valid or the file is not readable text. "
    "Please update the parameter for this widget"
)


async def _read_json_list(host: VaultHost, path: Path, field: str) -> list[Any] | None:
    """Return ``document[field]`` if it is a list, otherwise ``None``."""

    text = await host.read_text(path)
    if text is None:
        return None
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed JSON in %s: %s", path, exc)
        return None
    entries = document.get(field) if isinstance(document, dict) else None
    if not isinstance(entries, list):
        logger.warning("%s has no %r list", path, field)
        return None
    return entries


async def read_recent(host: VaultHost, root: Path) -> list[SourceRecord] | ResolutionError:
    entries = await _read_json_list(host, root / RECENT_FILES_DATA, "recentFiles")
    if entries is None:
        return ResolutionError(
            ErrorKind.SOURCE_DATA_MISSING, RECENT_MISSING_MESSAGE, RECENT_FILES_PLUGIN_URL
        )

    records: list[SourceRecord] = []
    for entry in entries:
        # e.g. {"basename": "2021-08-24", "path": "f/DNP/2021-08-24.md"}
        if not isinstance(entry, dict) or not entry.get("path"):
            continue
        path = str(entry["path"])
        basename = entry.get("basename") or Path(path).stem
        records.append(SourceRecord(basename=str(basename), path=path))
    return records


async def read_starred(host: VaultHost, root: Path) -> list[SourceRecord] | ResolutionError:
    entries = await _read_json_list(host, root / STARRED_DATA, "items")
    if entries is None:
        return ResolutionError(ErrorKind.SOURCE_DATA_MISSING, STARRED_MISSING_MESSAGE)

    records: list[SourceRecord] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        target = entry.get("path") or entry.get("query")
        if not target:
            continue
        kind = LinkKind.SEARCH if entry.get("type") == "search" else LinkKind.OPEN
        title = entry.get("title") or target
        records.append(SourceRecord(basename=str(title), path=str(target), kind=kind))
    return records


async def read_folder(
    host: VaultHost, root: Path, path: str
) -> list[SourceRecord] | ResolutionError:
    """List the files (not subfolders) directly inside *path*.

    Record targets are vault relative so the resulting links open the file
    itself rather than whichever note shares its name.
    """

    folder = join_in_vault(root, path)
    if folder is None or not await host.is_directory(folder):
        return ResolutionError(ErrorKind.INVALID_PATH, INVALID_FOLDER_MESSAGE)

    prefix = "/".join(folder.relative_to(root).parts)
    records: list[SourceRecord] = []
    for name in await host.list_contents(folder):
        if await host.is_directory(folder / name):
            continue
        target = f"{prefix}/{name}" if prefix else name
        records.append(SourceRecord(basename=name, path=target))
    return records


async def read_file(host: VaultHost, root: Path, path: str) -> DisplayItem | ResolutionError:
    target = join_in_vault(root, path)
    contents = await host.read_text(target) if target is not None else None
    if contents is None:
        return ResolutionError(ErrorKind.SOURCE_DATA_MISSING, MISSING_FILE_MESSAGE)
    return DisplayItem(label=contents, target_path=path)
