"""Service for counting visits per client IP."""

import logging

from visit_counter.domain.models import VisitResult
from visit_counter.domain.ports import VisitorRepository

logger = logging.getLogger(__name__)


class VisitTrackingService:
    """Records visits through a visitor repository."""

    def __init__(self, repository: VisitorRepository) -> None:
        """Initialize with a visitor repository.

        Args:
            repository: Repository used to persist visitor records.
        """
        self._repository = repository

    async def record_visit(self, ip: str) -> VisitResult:
        """Count one visit from ``ip``.

        Uses the repository's atomic upsert, so concurrent first visits from the
        same address end up in a single record.

        Raises:
            StorageError: If the backing store fails.
        """
        result = await self._repository.record_visit(ip)
        if result.created:
            logger.info(f"New visitor {ip}")
        else:
            logger.debug(f"Visitor {ip} seen {result.record.visits} times")
        return result

    async def get_visits(self, ip: str) -> int:
        """Return how often ``ip`` has visited, 0 if never."""
        record = await self._repository.find_one({"ip": ip})
        return record.visits if record else 0
