"""Main entry point for the visitor counter server."""

import asyncio
import logging
import sys

from pydantic import ValidationError

from visit_counter.adapters.config import AppConfig
from visit_counter.adapters.database import SqlAlchemyVisitorRepository, StorageClient
from visit_counter.adapters.web import WebAdapter
from visit_counter.application.services import VisitTrackingService

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_config() -> AppConfig:
    """Load configuration from the environment, exiting on invalid values."""
    try:
        return AppConfig()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)


async def main() -> None:
    """Main application entry point."""
    config = load_config()
    configure_logging(config.log_level)

    storage = StorageClient(
        config.get_database_url(),
        pool_size=config.db_pool_size,
        echo=config.db_echo,
    )
    repository = SqlAlchemyVisitorRepository(storage)
    service = VisitTrackingService(repository)
    web_adapter = WebAdapter(config, storage, service)

    try:
        await web_adapter.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        await web_adapter.stop()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
