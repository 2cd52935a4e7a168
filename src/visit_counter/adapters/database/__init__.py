"""Relational storage adapters for visitor records."""

from visit_counter.adapters.database.schema import Base, VisitorTable
from visit_counter.adapters.database.storage_client import StorageClient
from visit_counter.adapters.database.visitor_repository import SqlAlchemyVisitorRepository

__all__ = [
    "Base",
    "SqlAlchemyVisitorRepository",
    "StorageClient",
    "VisitorTable",
]
