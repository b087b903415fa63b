"""Base domain event class.

Domain events represent "things that happened" to an aggregate and are
always named in past tense (BookingConfirmed, PayoutFailed).

Architecture:
    - Frozen dataclass (immutable after creation)
    - Auto-generated event_id (UUIDv7, time-ordered) for tracking
    - occurred_at supplied by the aggregate's clock, UTC by default
    - Buffered on the aggregate and published only after the unit of work
      commits (see src/infrastructure/persistence/unit_of_work.py)

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class BookingConfirmed(DomainEvent):
    ...     booking_id: UUID | None
    ...     booking_reference: str
    >>>
    >>> event = BookingConfirmed(booking_id=booking.id, booking_reference="BK-...")
    >>> event.event_id  # Auto-generated
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen dataclasses with kw_only=True
        4. Carry everything downstream handlers need (ids, references)

    Attributes:
        event_id: Unique identifier for this event instance. Used for
            deduplication by downstream consumers.
        occurred_at: When the fact occurred (UTC). Aggregates pass their
            clock's reading so replays and tests stay deterministic.
    """

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
