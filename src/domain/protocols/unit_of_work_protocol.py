"""UnitOfWorkProtocol: atomic save plus post-commit event publishing.

One unit of work spans the loads, mutations and saves of a single command.
On commit the staged aggregates are written together (optimistic version
check first), then their buffered domain events are drained and published.
On rollback nothing is written and the buffered events are discarded, so a
rolled-back mutation never leaks an event.

Usage:
    async with uow:
        booking = await uow.bookings.find_by_id(booking_id)
        booking.confirm()
        await uow.bookings.save(booking)
    # committed and events published on clean exit
"""

from collections.abc import Callable
from types import TracebackType
from typing import Protocol, Self, TypeAlias

from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.protocols.booking_repository import BookingRepository
from src.domain.protocols.payout_repository import PayoutRepository


class UnitOfWorkProtocol(Protocol):
    """Transactional boundary over the booking and payout repositories."""

    bookings: BookingRepository
    payouts: PayoutRepository

    async def __aenter__(self) -> Self:
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Commit on clean exit, roll back when the block raised."""
        ...

    def collect(self, aggregate: AggregateRoot) -> None:
        """Publish an aggregate's events on commit without writing it."""
        ...

    async def commit(self) -> None:
        """Write staged aggregates, then publish their events.

        Raises:
            ConcurrentModificationError: If a staged aggregate is stale.
        """
        ...

    async def rollback(self) -> None:
        """Discard staged writes and buffered events."""
        ...


UnitOfWorkFactory: TypeAlias = Callable[[], UnitOfWorkProtocol]
"""Builds a fresh unit of work per command."""
