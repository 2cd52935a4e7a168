"""Tests for application services."""

import pytest

from visit_counter.application.services import VisitTrackingService
from visit_counter.domain.models import StorageError, VisitorRecord, VisitResult


class MockVisitorRepository:
    """In-memory visitor repository for testing."""

    def __init__(self) -> None:
        """Initialize with an empty table."""
        self.records: dict[str, VisitorRecord] = {}
        self.fail = False

    async def record_visit(self, ip: str) -> VisitResult:
        """Insert or increment the record for ``ip``."""
        if self.fail:
            raise StorageError("record_visit", "database unavailable")
        existing = self.records.get(ip)
        if existing is None:
            record = VisitorRecord(id=len(self.records) + 1, ip=ip, visits=1)
        else:
            record = existing.model_copy(update={"visits": existing.visits + 1})
        self.records[ip] = record
        return VisitResult(record=record, created=existing is None)

    async def find_one(self, criteria: dict[str, str]) -> VisitorRecord | None:
        """Return the record for the ``ip`` criterion."""
        return self.records.get(criteria["ip"])


@pytest.fixture
def repository() -> MockVisitorRepository:
    """Empty mock repository."""
    return MockVisitorRepository()


@pytest.mark.asyncio
async def test_first_visit_creates_record(repository: MockVisitorRepository) -> None:
    """Given a new IP, when recording a visit, then a record with one visit is created."""
    service = VisitTrackingService(repository)  # type: ignore[arg-type]

    result = await service.record_visit("1.2.3.4")

    assert result.created is True
    assert result.record.visits == 1


@pytest.mark.asyncio
async def test_repeat_visits_increment_count(repository: MockVisitorRepository) -> None:
    """Given an IP seen N times, when recording, then the count equals N."""
    service = VisitTrackingService(repository)  # type: ignore[arg-type]

    for _ in range(4):
        result = await service.record_visit("1.2.3.4")

    assert result.created is False
    assert result.record.visits == 4
    assert await service.get_visits("1.2.3.4") == 4


@pytest.mark.asyncio
async def test_get_visits_for_unknown_ip_is_zero(repository: MockVisitorRepository) -> None:
    """Given an IP never seen, when asking for its visits, then returns 0."""
    service = VisitTrackingService(repository)  # type: ignore[arg-type]

    assert await service.get_visits("9.9.9.9") == 0


@pytest.mark.asyncio
async def test_storage_error_propagates(repository: MockVisitorRepository) -> None:
    """Given a failing repository, when recording, then StorageError reaches the caller."""
    repository.fail = True
    service = VisitTrackingService(repository)  # type: ignore[arg-type]

    with pytest.raises(StorageError, match="record_visit failed"):
        await service.record_visit("1.2.3.4")
