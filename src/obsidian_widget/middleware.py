"""HTTP middleware for the widget server."""

from __future__ import annotations

from collections.abc import Sequence

from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware


def build_http_middleware(allow_origins: Sequence[str] = ("*",)) -> list[Middleware]:
    """Create the middleware stack.

    Widgets only read from the vault, so the stack is a permissive CORS layer
    that lets browser-based hosts call the tools.
    """

    return [
        Middleware(
            CORSMiddleware,
            allow_origins=list(allow_origins),
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )
    ]
