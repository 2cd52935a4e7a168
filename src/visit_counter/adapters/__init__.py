"""Adapters layer - external system integrations."""

from visit_counter.adapters.config import AppConfig
from visit_counter.adapters.database import SqlAlchemyVisitorRepository, StorageClient

__all__ = [
    "AppConfig",
    "SqlAlchemyVisitorRepository",
    "StorageClient",
]
