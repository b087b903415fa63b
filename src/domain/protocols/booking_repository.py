"""BookingRepository protocol for booking persistence.

Port (interface) for hexagonal architecture. Implementations load bookings
through the trusted reconstitute path and raise InconsistentDataError when a
stored value cannot be mapped back (unknown status strings).

Writes are staged until the owning unit of work commits; see
UnitOfWorkProtocol.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.booking import Booking
from src.domain.enums import BookingStatus


class BookingRepository(Protocol):
    """Booking repository protocol (port).

    Methods:
        find_by_id: Retrieve booking by ID
        find_by_reference: Retrieve booking by its BK- reference
        find_by_status: Retrieve bookings in a status
        find_due_for_activation: CONFIRMED bookings whose start has passed
        find_due_for_completion: ACTIVE bookings whose end has passed
        add: Assign identities to a new booking and stage it
        save: Stage changes to an existing booking
    """

    async def find_by_id(self, booking_id: UUID) -> Booking | None:
        """Find booking by ID.

        Args:
            booking_id: Booking's unique identifier.

        Returns:
            Booking if found, None otherwise.

        Raises:
            InconsistentDataError: If the stored record is corrupt.
        """
        ...

    async def find_by_reference(self, booking_reference: str) -> Booking | None:
        ...

    async def find_by_status(self, status: BookingStatus) -> list[Booking]:
        ...

    async def find_due_for_activation(self, now: datetime) -> list[Booking]:
        """CONFIRMED bookings with period start <= now.

        Chauffeur presence is not filtered here; callers consult
        Booking.is_eligible_for_activation().
        """
        ...

    async def find_due_for_completion(self, now: datetime) -> list[Booking]:
        """ACTIVE bookings with period end <= now."""
        ...

    async def add(self, booking: Booking) -> None:
        """Assign persisted identities (booking and legs) and stage the booking.

        After this call booking.id is set, so mark_as_created() can run.
        """
        ...

    async def save(self, booking: Booking) -> None:
        """Stage an existing booking for the next commit."""
        ...
