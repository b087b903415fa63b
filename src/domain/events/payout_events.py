"""Payout domain events.

Events:
    - PayoutInitiated: Payout created (PENDING_DISBURSEMENT)
    - PayoutProcessing: Gateway accepted the transfer (PROCESSING)
    - PayoutCompleted: Funds delivered
    - PayoutFailed: Transfer failed
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class PayoutInitiated(DomainEvent):
    """Payout created for a booking or extension.

    Attributes:
        payout_id: Payout identity.
        fleet_owner_id: Recipient.
        amount: Amount to disburse.
        booking_id: Source booking, if any.
        extension_id: Source booking extension, if any.
    """

    payout_id: UUID
    fleet_owner_id: str
    amount: Decimal
    booking_id: UUID | None = None
    extension_id: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class PayoutProcessing(DomainEvent):
    """Gateway accepted the transfer."""

    payout_id: UUID
    fleet_owner_id: str
    provider_reference: str


@dataclass(frozen=True, kw_only=True, slots=True)
class PayoutCompleted(DomainEvent):
    """Funds delivered to the fleet owner."""

    payout_id: UUID
    fleet_owner_id: str
    amount: Decimal
    provider_reference: str | None
    booking_id: UUID | None = None
    extension_id: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class PayoutFailed(DomainEvent):
    """Transfer failed."""

    payout_id: UUID
    fleet_owner_id: str
    amount: Decimal
    reason: str
    booking_id: UUID | None = None
    extension_id: str | None = None


PAYOUT_EVENTS: tuple[type[DomainEvent], ...] = (
    PayoutInitiated,
    PayoutProcessing,
    PayoutCompleted,
    PayoutFailed,
)
