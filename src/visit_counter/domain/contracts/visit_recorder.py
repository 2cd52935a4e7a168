"""Protocol for recording visits."""

from typing import Protocol

from visit_counter.domain.models.visit_result import VisitResult


class VisitRecorderProtocol(Protocol):
    """Protocol for counting a visit from a client address."""

    async def record_visit(self, ip: str) -> VisitResult:
        """Count one visit from ``ip``.

        Raises:
            StorageError: If the visit could not be stored.
        """
        ...
