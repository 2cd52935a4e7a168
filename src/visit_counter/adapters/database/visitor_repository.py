"""SQLAlchemy implementation of the visitor repository."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import ColumnElement, delete, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError

from visit_counter.adapters.database.schema import VisitorTable
from visit_counter.adapters.database.storage_client import StorageClient
from visit_counter.domain.models import StorageError, VisitorRecord, VisitResult
from visit_counter.domain.ports.visitor_repository import VisitorRepository

logger = logging.getLogger(__name__)

_visitors = VisitorTable.__table__
_CRITERIA_FIELDS = frozenset({"id", "ip", "visits"})

# Dialects whose INSERT supports ON CONFLICT clauses
_UPSERT_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _to_record(row: RowMapping) -> VisitorRecord:
    return VisitorRecord.model_validate(dict(row))


class SqlAlchemyVisitorRepository(VisitorRepository):
    """Visitor repository backed by the ``visitors`` table.

    Every storage failure is logged and re-raised as ``StorageError``.
    """

    def __init__(self, storage: StorageClient) -> None:
        """Initialize with an explicitly constructed storage client.

        Args:
            storage: Storage client; must be open before any operation is awaited.
        """
        self._storage = storage

    def _upsert_insert(self, operation: str) -> Callable[..., Any]:
        """Return the dialect-specific insert construct supporting ON CONFLICT."""
        dialect = self._storage.dialect_name
        insert_fn = _UPSERT_INSERTS.get(dialect)
        if insert_fn is None:
            raise StorageError(operation, f"dialect '{dialect}' does not support upserts")
        return insert_fn

    def _fail(self, operation: str, error: Exception) -> StorageError:
        logger.error(f"Storage operation '{operation}' failed: {error}")
        return StorageError(operation, str(error))

    def _where(self, criteria: dict[str, Any]) -> list[ColumnElement[bool]]:
        unknown = set(criteria) - _CRITERIA_FIELDS
        if unknown:
            raise ValueError(
                f"Unknown visitor fields in criteria: {sorted(unknown)}; "
                f"allowed: {sorted(_CRITERIA_FIELDS)}"
            )
        return [_visitors.c[field] == value for field, value in criteria.items()]

    async def create(self, ip: str, visits: int = 1) -> VisitorRecord:
        """Persist a new visitor record.

        Raises:
            ValueError: If ``visits`` is below 1; counts start at one visit.
            StorageError: If the insert fails, including when ``ip`` already exists.
        """
        if visits < 1:
            raise ValueError(f"visits must be at least 1, got {visits}")
        stmt = insert(_visitors).values(ip=ip, visits=visits).returning(*_visitors.c)
        try:
            async with self._storage.session() as session:
                row = (await session.execute(stmt)).mappings().one()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("create", e) from e
        return _to_record(row)

    async def find_or_create(self, ip: str) -> VisitResult:
        """Return the record for ``ip``, creating it with one visit if absent.

        The insert uses ON CONFLICT DO NOTHING, so two concurrent callers never
        produce duplicate rows; exactly one of them sees ``created=True``.
        """
        insert_fn = self._upsert_insert("find_or_create")
        stmt = (
            insert_fn(_visitors)
            .values(ip=ip, visits=1)
            .on_conflict_do_nothing(index_elements=[_visitors.c.ip])
            .returning(*_visitors.c)
        )
        try:
            async with self._storage.session() as session:
                row = (await session.execute(stmt)).mappings().first()
                created = row is not None
                if row is None:
                    existing = select(_visitors).where(_visitors.c.ip == ip)
                    row = (await session.execute(existing)).mappings().one()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("find_or_create", e) from e
        return VisitResult(record=_to_record(row), created=created)

    async def find_all(self) -> list[VisitorRecord]:
        """Return every visitor record ordered by id."""
        stmt = select(_visitors).order_by(_visitors.c.id)
        try:
            async with self._storage.session() as session:
                rows = (await session.execute(stmt)).mappings().all()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("find_all", e) from e
        return [_to_record(row) for row in rows]

    async def find_by_id(self, record_id: int) -> VisitorRecord | None:
        """Return the record with the given id, or None."""
        stmt = select(_visitors).where(_visitors.c.id == record_id)
        try:
            async with self._storage.session() as session:
                row = (await session.execute(stmt)).mappings().first()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("find_by_id", e) from e
        return _to_record(row) if row is not None else None

    async def find_one(self, criteria: dict[str, Any]) -> VisitorRecord | None:
        """Return the lowest-id record matching all criteria, or None.

        Raises:
            ValueError: If criteria name a field other than id, ip or visits.
        """
        stmt = select(_visitors).where(*self._where(criteria)).order_by(_visitors.c.id).limit(1)
        try:
            async with self._storage.session() as session:
                row = (await session.execute(stmt)).mappings().first()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("find_one", e) from e
        if row is None:
            logger.warning(f"No visitor found matching {criteria}")
            return None
        return _to_record(row)

    async def delete(self, criteria: dict[str, Any]) -> int:
        """Delete all records matching the criteria.

        Raises:
            ValueError: If criteria are empty or name an unknown field.
        """
        if not criteria:
            raise ValueError("delete requires at least one criterion")
        stmt = delete(_visitors).where(*self._where(criteria))
        try:
            async with self._storage.session() as session:
                result = await session.execute(stmt)
                deleted: int = result.rowcount  # type: ignore[attr-defined]
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("delete", e) from e
        logger.info(f"Deleted {deleted} visitor(s) matching {criteria}")
        return deleted

    async def update(self, visits: int, ip: str) -> list[VisitorRecord]:
        """Set the visit count for ``ip`` to ``visits + 1``.

        This is the non-atomic half of find-or-create-then-update; prefer
        :meth:`record_visit` for counting requests.
        """
        stmt = (
            update(_visitors)
            .where(_visitors.c.ip == ip)
            .values(visits=visits + 1)
            .returning(*_visitors.c)
        )
        try:
            async with self._storage.session() as session:
                rows = (await session.execute(stmt)).mappings().all()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("update", e) from e
        return [_to_record(row) for row in rows]

    async def record_visit(self, ip: str) -> VisitResult:
        """Insert ``ip`` with one visit, or increment its count, in one statement.

        ``created`` is derived from the resulting count: a row holding exactly
        one visit was inserted by this call.
        """
        insert_fn = self._upsert_insert("record_visit")
        stmt = (
            insert_fn(_visitors)
            .values(ip=ip, visits=1)
            .on_conflict_do_update(
                index_elements=[_visitors.c.ip],
                set_={"visits": _visitors.c.visits + 1, "updated_at": func.now()},
            )
            .returning(*_visitors.c)
        )
        try:
            async with self._storage.session() as session:
                row = (await session.execute(stmt)).mappings().one()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise self._fail("record_visit", e) from e
        record = _to_record(row)
        return VisitResult(record=record, created=record.visits == 1)
