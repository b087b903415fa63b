"""Unit of work over the in-memory database.

Commit order:
    1. Optimistic version check of every staged aggregate
    2. Write all records (version + 1), all or nothing
    3. Drain each aggregate's buffered events, in staging order
    4. Publish the events through the event bus

Rollback (explicit, or the `async with` block raised) discards the staged
writes and the buffered events, so nothing that was rolled back is ever
published.

Usage:
    async with get_unit_of_work() as uow:
        booking = await uow.bookings.find_by_id(booking_id)
        booking.activate()
        await uow.bookings.save(booking)
"""

from collections.abc import Callable
from types import TracebackType
from typing import Self

from src.core.clock import SYSTEM_CLOCK
from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.errors import ConcurrentModificationError
from src.domain.events.base_event import DomainEvent
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.chauffeur_assignment_policy import (
    DEFAULT_ASSIGNMENT_POLICY,
    ChauffeurAssignmentPolicy,
)
from src.infrastructure.persistence.database import InMemoryDatabase, Record
from src.infrastructure.persistence.repositories.booking_repository import (
    TABLE as BOOKINGS_TABLE,
    BookingRepository,
)
from src.infrastructure.persistence.repositories.payout_repository import (
    TABLE as PAYOUTS_TABLE,
    PayoutRepository,
)

_SERIALIZERS: dict[str, Callable[..., Record]] = {
    BOOKINGS_TABLE: BookingRepository.to_record,
    PAYOUTS_TABLE: PayoutRepository.to_record,
}


class InMemoryUnitOfWork:
    """Transactional boundary over the booking and payout repositories.

    Implements UnitOfWorkProtocol structurally. One instance per command.

    Attributes:
        bookings: Booking repository bound to this unit of work.
        payouts: Payout repository bound to this unit of work.
    """

    def __init__(
        self,
        database: InMemoryDatabase,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        *,
        clock: ClockProtocol = SYSTEM_CLOCK,
        assignment_policy: ChauffeurAssignmentPolicy = DEFAULT_ASSIGNMENT_POLICY,
    ) -> None:
        self._database = database
        self._event_bus = event_bus
        self._logger = logger
        self._session = database.session()
        self._collected: list[AggregateRoot] = []
        self.bookings = BookingRepository(
            self._session, clock=clock, assignment_policy=assignment_policy
        )
        self.payouts = PayoutRepository(self._session, clock=clock)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()

    def collect(self, aggregate: AggregateRoot) -> None:
        """Publish this aggregate's events on commit without writing it."""
        if all(existing is not aggregate for existing in self._collected):
            self._collected.append(aggregate)

    async def commit(self) -> None:
        """Write staged aggregates atomically, then publish their events.

        Raises:
            ConcurrentModificationError: If a staged aggregate is stale; the
                unit of work is rolled back before raising.
        """
        staged = self._session.staged()

        for table, record_id, aggregate in staged:
            stored_version = self._database.version_of(table, record_id)
            if stored_version != aggregate.version:
                await self.rollback()
                raise ConcurrentModificationError(
                    aggregate_type=type(aggregate).__name__,
                    aggregate_id=str(record_id),
                    expected_version=aggregate.version,
                    actual_version=stored_version,
                )

        for table, record_id, aggregate in staged:
            record = _SERIALIZERS[table](aggregate)
            record["version"] = aggregate.version + 1
            self._database.write(table, record_id, record)
            aggregate.version += 1

        events: list[DomainEvent] = []
        for _, _, aggregate in staged:
            events.extend(aggregate.pull_events())
        for aggregate in self._collected:
            events.extend(aggregate.pull_events())
        self._session.clear()
        self._collected.clear()

        if staged or events:
            self._logger.debug(
                "unit_of_work_committed",
                aggregate_count=len(staged),
                event_count=len(events),
            )
        for event in events:
            await self._event_bus.publish(event)

    async def rollback(self) -> None:
        """Discard staged writes and every buffered event."""
        staged = self._session.staged()
        discarded = 0
        for _, _, aggregate in staged:
            discarded += len(aggregate.uncommitted_events)
            aggregate.clear_events()
        for aggregate in self._collected:
            discarded += len(aggregate.uncommitted_events)
            aggregate.clear_events()
        self._session.clear()
        self._collected.clear()
        if staged:
            self._logger.warning(
                "unit_of_work_rolled_back",
                aggregate_count=len(staged),
                discarded_event_count=discarded,
            )
