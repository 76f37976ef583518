import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path

from obsidian_widget.items import ErrorKind, LinkKind, ResolutionError
from obsidian_widget.layout import display_config
from obsidian_widget.query import Mode, Query, parse_parameter
from obsidian_widget.resolver import build_widget, resolve, title_text
from obsidian_widget.sources import RECENT_FILES_DATA, STARRED_DATA

ROOT = Path("/vaults/a")


@dataclass
class FakeHost:
    """In-memory vault; directories are any prefix of a stored file."""

    files: dict[str, str] = field(default_factory=dict)
    bookmarks: dict[str, Path] = field(default_factory=lambda: {"Vault A": ROOT})
    reads: list[Path] = field(default_factory=list)

    def bookmark_exists(self, name: str) -> bool:
        return name in self.bookmarks

    def bookmarked_path(self, name: str) -> Path:
        return self.bookmarks[name]

    def _paths(self) -> list[Path]:
        return [ROOT / name for name in self.files]

    async def is_directory(self, path: Path) -> bool:
        return any(path in p.parents for p in self._paths())

    async def read_text(self, path: Path) -> str | None:
        self.reads.append(path)
        for p, body in zip(self._paths(), self.files.values()):
            if p == path:
                return body
        return None

    async def list_contents(self, path: Path) -> list[str]:
        names = {p.relative_to(path).parts[0] for p in self._paths() if path in p.parents}
        return sorted(names, reverse=True)


def _recent_host(count: int) -> FakeHost:
    entries = [{"basename": f"note {i}", "path": f"notes/note {i}.md"} for i in range(count)]
    return FakeHost({str(RECENT_FILES_DATA): json.dumps({"recentFiles": entries})})


def test_recent_is_capped_in_source_order():
    items = asyncio.run(resolve(parse_parameter("Vault A"), _recent_host(20), 5))
    assert not isinstance(items, ResolutionError)
    assert [item.label for item in items] == [f"note {i}" for i in range(5)]
    assert all(item.link_kind is LinkKind.OPEN for item in items)


def test_unknown_mode_resolves_as_recent():
    items = asyncio.run(resolve(parse_parameter("Vault A||calendar"), _recent_host(2), 5))
    assert not isinstance(items, ResolutionError)
    assert len(items) == 2


def test_missing_bookmark_short_circuits():
    host = _recent_host(3)
    for mode in Mode:
        result = asyncio.run(resolve(Query("Nope", mode, "/x"), host, 5))
        assert isinstance(result, ResolutionError)
        assert result.kind is ErrorKind.BOOKMARK_MISSING
    assert host.reads == []


def test_starred_missing_document():
    result = asyncio.run(resolve(parse_parameter("Vault A||starred"), FakeHost(), 5))
    assert isinstance(result, ResolutionError)
    assert result.kind is ErrorKind.SOURCE_DATA_MISSING
    assert result.message
    assert result.help_url is None


def test_starred_search_items():
    items_doc = {
        "items": [
            {"type": "search", "title": "Todos", "query": "tag:#todo"},
            {"type": "file", "title": "Plan", "path": "Plan.md"},
        ]
    }
    host = FakeHost({str(STARRED_DATA): json.dumps(items_doc)})
    items = asyncio.run(resolve(parse_parameter("Vault A||STARRED"), host, 5))
    assert not isinstance(items, ResolutionError)
    assert [item.link_kind for item in items] == [LinkKind.SEARCH, LinkKind.OPEN]


def test_folder_sorted_and_without_directories():
    host = FakeHost(
        {
            "Projects/c.md": "c",
            "Projects/a.md": "a",
            "Projects/Sub/deep.md": "deep",
            "Projects/b.md": "b",
        }
    )
    items = asyncio.run(resolve(parse_parameter("Vault A||folder||/Projects"), host, 2))
    assert not isinstance(items, ResolutionError)
    assert [item.label for item in items] == ["a.md", "b.md"]
    assert [item.target_path for item in items] == ["Projects/a.md", "Projects/b.md"]


def test_folder_that_is_not_a_directory():
    result = asyncio.run(resolve(parse_parameter("Vault A||folder||/Projects"), FakeHost(), 5))
    assert isinstance(result, ResolutionError)
    assert result.kind is ErrorKind.INVALID_PATH


def test_folder_and_file_without_path_are_empty():
    host = FakeHost()
    assert asyncio.run(resolve(parse_parameter("Vault A||folder"), host, 5)) == []
    assert asyncio.run(resolve(parse_parameter("Vault A||file"), host, 5)) == []
    assert host.reads == []


def test_file_mode_single_row():
    host = FakeHost({"Daily/today.md": "line one\nline two"})
    items = asyncio.run(resolve(parse_parameter("Vault A||file||/Daily/today.md"), host, 5))
    assert not isinstance(items, ResolutionError)
    assert len(items) == 1
    assert items[0].label == "line one\nline two"
    assert items[0].target_path == "/Daily/today.md"


def test_title_text():
    assert title_text(parse_parameter("V")) == "Recent"
    assert title_text(parse_parameter("V||starred")) == "Starred"
    assert title_text(parse_parameter("V||folder||/Projects")) == "/Projects"
    assert title_text(parse_parameter("V||file||/Daily/today.md")) == "/Daily/today"
    assert title_text(parse_parameter("V||file")) == ""


def test_build_widget_attaches_links():
    widget = asyncio.run(
        build_widget(parse_parameter("Vault A"), _recent_host(3), display_config("small"))
    )
    assert widget.title == "Obsidian: Recent"
    assert widget.error is None
    assert widget.rows[0].uri == "obsidian://open?vault=Vault%20A&file=notes%2Fnote%200.md"


def test_build_widget_non_interactive_has_no_links():
    widget = asyncio.run(
        build_widget(
            parse_parameter("Vault A"), _recent_host(3), display_config("large"), interactive=False
        )
    )
    assert len(widget.rows) == 3
    assert all(row.uri is None for row in widget.rows)


def test_build_widget_error():
    widget = asyncio.run(
        build_widget(parse_parameter("Missing||starred"), FakeHost(), display_config(None))
    )
    assert widget.title == "Obsidian: Starred"
    assert widget.rows == []
    assert widget.error is not None
    assert widget.error.kind is ErrorKind.BOOKMARK_MISSING
