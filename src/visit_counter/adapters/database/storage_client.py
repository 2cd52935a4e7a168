"""Storage client owning the SQLAlchemy engine and its lifecycle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from visit_counter.adapters.database.schema import Base
from visit_counter.domain.models import StorageError

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)


class StorageClient:
    """Explicitly constructed handle to the visitors database.

    The engine is created by :meth:`open` and disposed by :meth:`close`; the
    client can also be used as an async context manager.
    """

    def __init__(self, url: URL | str, pool_size: int = 5, echo: bool = False) -> None:
        """Initialize the client without connecting.

        Args:
            url: SQLAlchemy database URL (async driver, e.g. ``postgresql+asyncpg``).
            pool_size: Connection pool size; not applied to SQLite.
            echo: Log every SQL statement.
        """
        self.url = url
        self.pool_size = pool_size
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        """Whether :meth:`open` has been called and :meth:`close` has not."""
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """The underlying engine; raises if the client is not open."""
        if self._engine is None:
            raise RuntimeError("StorageClient is not open")
        return self._engine

    @property
    def dialect_name(self) -> str:
        """Name of the database dialect, e.g. ``postgresql`` or ``sqlite``."""
        return self.engine.dialect.name

    async def open(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            logger.warning("StorageClient already open")
            return

        engine_kwargs: dict[str, object] = {"echo": self.echo, "pool_pre_ping": True}
        if make_url(self.url).get_backend_name() != "sqlite":
            engine_kwargs["pool_size"] = self.pool_size

        self._engine = create_async_engine(self.url, **engine_kwargs)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)
        logger.info(f"Opened storage client for {self._engine.url.render_as_string()}")

    async def sync_schema(self) -> None:
        """Create missing tables, leaving existing ones untouched.

        Raises:
            StorageError: If the schema cannot be created.
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Schema synchronization failed: {e}")
            raise StorageError("sync_schema", str(e)) from e
        logger.info("Database schema synchronized")

    def session(self) -> AsyncSession:
        """Return a new session bound to the engine."""
        if self._session_factory is None:
            raise RuntimeError("StorageClient is not open")
        return self._session_factory()

    async def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Closed storage client")

    async def __aenter__(self) -> StorageClient:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
