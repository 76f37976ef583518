"""FastMCP server exposing the Obsidian widget resolver."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar, cast

from dotenv import load_dotenv
from fastmcp import FastMCP
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from .host import LocalVaultHost
from .layout import display_config
from .links import DEFAULT_SCHEME
from .middleware import build_http_middleware
from .paths import (
    Bookmark,
    VaultConfigurationError,
    list_bookmark_names,
    load_bookmarks_file,
    merge_bookmarks,
    parse_bookmarks,
)
from .query import DEFAULT_PARAMETER, parse_parameter
from .resolver import build_widget

TToolFunc = TypeVar("TToolFunc", bound=Callable[..., Any])

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Settings:
    bookmarks: Mapping[str, Bookmark]
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    default_parameter: str = DEFAULT_PARAMETER
    uri_scheme: str = DEFAULT_SCHEME
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass(slots=True)
class WidgetService:
    """Resolves widget parameters against the configured bookmarks."""

    bookmarks: Mapping[str, Bookmark]
    default_parameter: str = DEFAULT_PARAMETER
    uri_scheme: str = DEFAULT_SCHEME

    def list_bookmarks(self) -> dict[str, list[str]]:
        return {"bookmarks": list_bookmark_names(self.bookmarks.values())}

    async def widget(
        self, parameter: str | None = None, size: str = "default", interactive: bool = True
    ) -> dict[str, Any]:
        query = parse_parameter(parameter, self.default_parameter)
        config = display_config(size)
        host = LocalVaultHost(self.bookmarks)
        widget = await build_widget(query, host, config, interactive, self.uri_scheme)

        font = {"title": config.title_font, "description": config.description_font}
        if widget.error is not None:
            return {
                "ok": False,
                "title": widget.title,
                "error": widget.error.message,
                "kind": widget.error.kind.value,
                "help_url": widget.error.help_url,
                "font": font,
            }
        return {
            "ok": True,
            "title": widget.title,
            "rows": [{"label": row.label, "uri": row.uri} for row in widget.rows],
            "font": font,
        }


def load_settings() -> Settings:
    """Load configuration from environment variables."""

    bookmarks = parse_bookmarks(os.environ.get("VAULT_BOOKMARKS", ""))
    bookmarks_file = os.environ.get("VAULT_BOOKMARKS_FILE")
    if bookmarks_file:
        bookmarks = merge_bookmarks(bookmarks, load_bookmarks_file(Path(bookmarks_file)))
    if not bookmarks:
        raise VaultConfigurationError("VAULT_BOOKMARKS or VAULT_BOOKMARKS_FILE must be provided")

    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))
    cors_origins = [
        origin.strip() for origin in os.environ.get("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]

    log_level = os.environ.get("LOG_LEVEL", "info").upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))

    return Settings(
        bookmarks=bookmarks,
        host=host,
        port=port,
        log_level=log_level,
        default_parameter=os.environ.get("WIDGET_DEFAULT_PARAMETER", DEFAULT_PARAMETER),
        uri_scheme=os.environ.get("WIDGET_URI_SCHEME", DEFAULT_SCHEME),
        cors_origins=cors_origins,
    )


def create_server(settings: Settings | None = None) -> tuple[FastMCP, list[Middleware]]:
    """Create a configured :class:`FastMCP` instance and its HTTP middleware."""

    settings = settings or load_settings()
    server = FastMCP(
        "Obsidian Widget",
        instructions="Recent, starred, folder and file views of Obsidian vaults",
    )

    middleware = build_http_middleware(settings.cors_origins)

    service = WidgetService(
        settings.bookmarks,
        default_parameter=settings.default_parameter,
        uri_scheme=settings.uri_scheme,
    )
    logger.info("Serving bookmarks: %s", ", ".join(service.list_bookmarks()["bookmarks"]))

    def tool(*args: Any, **kwargs: Any) -> Callable[[TToolFunc], TToolFunc]:
        decorator = server.tool(*args, **kwargs)
        return cast(Callable[[TToolFunc], TToolFunc], decorator)

    @tool()
    async def list_bookmarks() -> dict[str, list[str]]:
        return service.list_bookmarks()

    @tool()
    async def widget(
        parameter: str | None = None, size: str = "default", interactive: bool = True
    ) -> dict[str, Any]:
        return await service.widget(parameter, size, interactive)

    @server.custom_route("/mcp/health", methods=["GET"])
    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return cast(FastMCP, server), middleware


def main() -> None:
    """Run the FastMCP server."""

    settings = load_settings()
    server, middleware = create_server(settings)
    server.run(
        transport="http",
        host=settings.host,
        port=settings.port,
        middleware=middleware,
    )


if __name__ == "__main__":
    main()
