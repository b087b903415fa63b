"""In-memory database and session.

Stands in for a relational store: tables are dicts of plain records (strings
for enums, decimals and timestamps) keyed by id, and every record carries the
optimistic concurrency `version` it was last written with.

Following hexagonal architecture:
- This is an infrastructure concern
- Repositories read records through a session and stage aggregates on it
- The unit of work flushes a session's staged aggregates atomically

Usage:
    db = InMemoryDatabase()
    session = db.session()
    session.stage("bookings", booking.id, booking)
"""

from collections.abc import Iterator
from typing import Any, TypeAlias
from uuid import UUID

from src.domain.entities.aggregate_root import AggregateRoot

Record: TypeAlias = dict[str, Any]


class InMemoryDatabase:
    """Process-local table storage.

    Attributes:
        tables: Table name → {id: record}.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[UUID, Record]] = {"bookings": {}, "payouts": {}}

    def session(self) -> "InMemorySession":
        return InMemorySession(self)

    def get(self, table: str, record_id: UUID) -> Record | None:
        record = self.tables[table].get(record_id)
        return dict(record) if record is not None else None

    def scan(self, table: str) -> Iterator[Record]:
        """Copies of every record in insertion order."""
        for record in list(self.tables[table].values()):
            yield dict(record)

    def version_of(self, table: str, record_id: UUID) -> int:
        """Stored version, 0 when the record does not exist yet."""
        record = self.tables[table].get(record_id)
        return int(record["version"]) if record is not None else 0

    def write(self, table: str, record_id: UUID, record: Record) -> None:
        self.tables[table][record_id] = record

    def reset(self) -> None:
        for table in self.tables.values():
            table.clear()


class InMemorySession:
    """Staging area for one unit of work.

    Aggregates are staged under (table, id); staging the same aggregate twice
    keeps its first position.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._staged: dict[tuple[str, UUID], AggregateRoot] = {}

    def stage(self, table: str, record_id: UUID, aggregate: AggregateRoot) -> None:
        self._staged[(table, record_id)] = aggregate

    def staged(self) -> list[tuple[str, UUID, AggregateRoot]]:
        return [(table, record_id, agg) for (table, record_id), agg in self._staged.items()]

    def clear(self) -> None:
        self._staged.clear()
