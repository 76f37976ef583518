"""Resolve a widget query into display rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .host import VaultHost
from .items import DisplayItem, ErrorKind, ResolutionError, normalize_and_select
from .layout import DisplayConfig
from .links import DEFAULT_SCHEME, build_link
from .query import Mode, Query
from .sources import read_file, read_folder, read_recent, read_starred

logger = logging.getLogger(__name__)

BOOKMARK_MISSING_MESSAGE = (
    "The bookmark does not exist for your Obsidian vault. Create a bookmark "
    "named after the vault that points to its root folder."
)


@dataclass(frozen=True)
class Row:
    label: str
    uri: str | None = None


@dataclass(frozen=True)
class Widget:
    """Everything the presentation layer draws for one invocation."""

    title: str
    rows: list[Row] = field(default_factory=list)
    error: ResolutionError | None = None


async def resolve(
    query: Query, host: VaultHost, cap: int
) -> list[DisplayItem] | ResolutionError:
    """Return up to *cap* items for *query*, or the error to display instead."""

    if not host.bookmark_exists(query.bookmark):
        logger.info("Unknown bookmark %r", query.bookmark)
        return ResolutionError(ErrorKind.BOOKMARK_MISSING, BOOKMARK_MISSING_MESSAGE)

    root = host.bookmarked_path(query.bookmark)
    logger.debug("Resolving %s in %s", query.mode.value, root)

    if query.mode is Mode.STARRED:
        records = await read_starred(host, root)
    elif query.mode is Mode.FOLDER:
        if not query.path:
            return []
        records = await read_folder(host, root, query.path)
    elif query.mode is Mode.FILE:
        if not query.path or cap <= 0:
            return []
        item = await read_file(host, root, query.path)
        return item if isinstance(item, ResolutionError) else [item]
    else:
        records = await read_recent(host, root)

    if isinstance(records, ResolutionError):
        logger.info("Resolution failed: %s", records.kind.value)
        return records
    return normalize_and_select(records, cap, query.mode)


def title_text(query: Query) -> str:
    if query.mode is Mode.RECENT:
        return "Recent"
    if query.mode is Mode.STARRED:
        return "Starred"
    if not query.path:
        return ""
    return query.path[: -len(".md")] if query.path.endswith(".md") else query.path


async def build_widget(
    query: Query,
    host: VaultHost,
    config: DisplayConfig,
    interactive: bool = True,
    scheme: str = DEFAULT_SCHEME,
) -> Widget:
    """Resolve *query* and attach a deep link to every row."""

    title = f"Obsidian: {title_text(query)}"
    result = await resolve(query, host, config.row_output)
    if isinstance(result, ResolutionError):
        return Widget(title=title, error=result)

    rows = [
        Row(label=item.label, uri=build_link(query.bookmark, item, interactive, scheme))
        for item in result
    ]
    return Widget(title=title, rows=rows)
