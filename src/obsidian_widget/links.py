"""Deep links into the Obsidian app."""

from __future__ import annotations

from urllib.parse import quote

from .items import DisplayItem, LinkKind

DEFAULT_SCHEME = "obsidian"

# Characters encodeURIComponent leaves alone, besides alphanumerics.
_UNRESERVED = "-_.!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_UNRESERVED)


def build_link(
    bookmark: str, item: DisplayItem, interactive: bool, scheme: str = DEFAULT_SCHEME
) -> str | None:
    """Return the URI that opens *item* in the vault named *bookmark*.

    Non-interactive invocations (voice, for instance) cannot follow links, so
    no URI is produced for them.
    """

    if not interactive:
        return None

    vault = encode_component(bookmark)
    target = encode_component(item.target_path)
    if item.link_kind is LinkKind.SEARCH:
        return f"{scheme}://search?vault={vault}&query={target}"
    return f"{scheme}://open?vault={vault}&file={target}"
