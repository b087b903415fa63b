"""PayoutRepository protocol for payout persistence.

Port (interface) for hexagonal architecture. Like BookingRepository, writes
are staged until the owning unit of work commits.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.payout import Payout


class PayoutRepository(Protocol):
    """Payout repository protocol (port).

    Methods:
        find_by_id: Retrieve payout by ID
        find_by_booking_id: All payouts for a booking
        find_by_extension_id: All payouts for a booking extension
        find_by_provider_reference: Payout the gateway reported on
        find_pending: Oldest PENDING_DISBURSEMENT payouts first
        save: Stage a new or changed payout
    """

    async def find_by_id(self, payout_id: UUID) -> Payout | None:
        ...

    async def find_by_booking_id(self, booking_id: UUID) -> list[Payout]:
        ...

    async def find_by_extension_id(self, extension_id: str) -> list[Payout]:
        ...

    async def find_by_provider_reference(self, provider_reference: str) -> Payout | None:
        ...

    async def find_pending(self, limit: int) -> list[Payout]:
        """PENDING_DISBURSEMENT payouts, oldest first, at most `limit`."""
        ...

    async def save(self, payout: Payout) -> None:
        ...
