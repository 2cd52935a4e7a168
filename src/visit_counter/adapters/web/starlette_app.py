"""Starlette web adapter serving the site and counting visits."""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.middleware import Middleware

from visit_counter.adapters.config import AppConfig
from visit_counter.adapters.database import StorageClient

from .servers import StaticFileServer
from .visit_tracking_middleware import VisitTrackingMiddleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from visit_counter.domain.contracts.visit_recorder import VisitRecorderProtocol

logger = logging.getLogger(__name__)


class WebAdapter:
    """Builds the Starlette app and runs it under uvicorn."""

    def __init__(
        self,
        config: AppConfig,
        storage: StorageClient,
        recorder: VisitRecorderProtocol,
    ) -> None:
        """Initialize the web adapter.

        Args:
            config: Application configuration.
            storage: Storage client; opened and schema-synced on app startup, closed on shutdown.
            recorder: Records one visit per request (usually a VisitTrackingService).
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        if not callable(getattr(recorder, "record_visit", None)):
            raise TypeError("recorder must implement VisitRecorderProtocol")

        self.config = config
        self.storage = storage
        self.recorder = recorder
        self._server: Any | None = None

    @contextlib.asynccontextmanager
    async def _lifespan(self, _app: Starlette) -> AsyncIterator[None]:
        # uvicorn binds its socket only after this startup phase completes
        await self.storage.open()
        try:
            await self.storage.sync_schema()
            yield
        finally:
            await self.storage.close()

    def create_app(self) -> Starlette:
        """Create the Starlette application.

        The visit-tracking middleware runs ahead of static file serving for
        every HTTP request.
        """
        app = Starlette(
            middleware=[
                Middleware(
                    VisitTrackingMiddleware,
                    service=self.recorder,
                    fail_on_storage_error=self.config.fail_on_storage_error,
                )
            ],
            lifespan=self._lifespan,
        )

        static_file_server = StaticFileServer(
            self.config.static_directory,
            max_age_seconds=self.config.static_max_age_seconds,
        )
        static_file_server.register_routes(app)
        return app

    async def start(self) -> None:
        """Start the web server and block until it exits."""
        import uvicorn

        config = uvicorn.Config(
            self.create_app(),
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Starting server on http://{self.config.host}:{self.config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Ask the web server to exit."""
        if self._server:
            self._server.should_exit = True
