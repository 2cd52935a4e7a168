"""Static file server implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from starlette.staticfiles import StaticFiles

from visit_counter.domain.contracts.static_file_server import StaticFileServerProtocol

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, MutableMapping

    from starlette.applications import Starlette

logger = logging.getLogger(__name__)


class StaticFileCacheApp:
    """ASGI app wrapper that adds cache headers to static file responses."""

    def __init__(self, static_files: StaticFiles, max_age_seconds: int = 60) -> None:
        """Initialize with a StaticFiles instance and the max-age to advertise."""
        self.static_files = static_files
        self.cache_control = f"public, max-age={max_age_seconds}, must-revalidate".encode()

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[[], Awaitable[dict[str, Any]]],
        send: Callable[[MutableMapping[str, Any]], Awaitable[None]],
    ) -> None:
        """Handle ASGI request and add cache headers."""

        async def send_with_cache_headers(
            message: MutableMapping[str, Any],
        ) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                has_cache_control = any(header[0].lower() == b"cache-control" for header in headers)
                if not has_cache_control:
                    headers.append((b"cache-control", self.cache_control))
                    message["headers"] = headers
            await send(message)

        await self.static_files(scope, receive, send_with_cache_headers)


class StaticFileServer(StaticFileServerProtocol):
    """Serves a directory of static files as the site root."""

    def __init__(self, directory: str | Path, max_age_seconds: int = 60) -> None:
        """Initialize the server.

        Args:
            directory: Directory to serve; relative paths resolve against the working directory.
            max_age_seconds: max-age of the Cache-Control header added to responses.
        """
        self.directory = Path(directory)
        self.max_age_seconds = max_age_seconds

    def register_routes(self, app: Starlette) -> bool:
        """Mount the static directory at ``/``.

        Must be called after all other routes, since the mount matches every path.
        ``index.html`` is served for directory requests.
        """
        if not self.directory.is_dir():
            logger.warning(f"Static directory not found at {self.directory.resolve()}")
            return False

        static_files = StaticFiles(directory=str(self.directory), html=True)
        app.mount("/", StaticFileCacheApp(static_files, self.max_age_seconds), name="static")
        logger.info(
            f"Mounted static files from {self.directory.resolve()} "
            f"with {self.max_age_seconds}s cache headers"
        )
        return True
