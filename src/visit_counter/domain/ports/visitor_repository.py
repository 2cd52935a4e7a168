"""Visitor repository port."""

from typing import Any, Protocol

from visit_counter.domain.models.visit_result import VisitResult
from visit_counter.domain.models.visitor_record import VisitorRecord


class VisitorRepository(Protocol):
    """Port for reading and writing visitor records.

    Implementations raise ``StorageError`` when the backing store fails.
    """

    async def create(self, ip: str, visits: int = 1) -> VisitorRecord:
        """Persist a new visitor record."""
        ...

    async def find_or_create(self, ip: str) -> VisitResult:
        """Return the record for ``ip``, creating it with one visit if absent."""
        ...

    async def find_all(self) -> list[VisitorRecord]:
        """Return every visitor record."""
        ...

    async def find_by_id(self, record_id: int) -> VisitorRecord | None:
        """Return the record with the given primary key."""
        ...

    async def find_one(self, criteria: dict[str, Any]) -> VisitorRecord | None:
        """Return the first record matching all field criteria."""
        ...

    async def delete(self, criteria: dict[str, Any]) -> int:
        """Delete records matching the criteria and return how many were removed."""
        ...

    async def update(self, visits: int, ip: str) -> list[VisitorRecord]:
        """Set the visit count for ``ip`` to ``visits + 1``."""
        ...

    async def record_visit(self, ip: str) -> VisitResult:
        """Atomically create the record for ``ip`` or increment its visit count."""
        ...
