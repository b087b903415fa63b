"""Aggregate root base with an uncommitted-events buffer.

Aggregates record domain events while they mutate; nothing is published
from inside the domain. The unit of work drains the buffer after a
successful commit (transactional outbox) and discards it on rollback.

`version` is the optimistic concurrency token the repositories compare and
bump on every committed save.
"""

from dataclasses import dataclass, field

from src.domain.events.base_event import DomainEvent


@dataclass(kw_only=True)
class AggregateRoot:
    """Base class for Booking and Payout.

    Attributes:
        version: Persisted version (0 until first commit).
    """

    version: int = 0
    _pending_events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    @property
    def uncommitted_events(self) -> tuple[DomainEvent, ...]:
        """Events recorded since the last drain, oldest first."""
        return tuple(self._pending_events)

    def pull_events(self) -> list[DomainEvent]:
        """Drain and return the buffered events."""
        events, self._pending_events = self._pending_events, []
        return events

    def clear_events(self) -> None:
        self._pending_events.clear()

    def _record_event(self, event: DomainEvent) -> None:
        self._pending_events.append(event)
