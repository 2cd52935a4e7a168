"""Domain layer - core business models and ports."""

from visit_counter.domain.models import StorageError, VisitorRecord, VisitResult
from visit_counter.domain.ports import VisitorRepository

__all__ = [
    "StorageError",
    "VisitResult",
    "VisitorRecord",
    "VisitorRepository",
]
