"""Domain models for the visitor counter."""

from visit_counter.domain.models.storage_error import StorageError
from visit_counter.domain.models.visit_result import VisitResult
from visit_counter.domain.models.visitor_record import VisitorRecord

__all__ = [
    "StorageError",
    "VisitResult",
    "VisitorRecord",
]
