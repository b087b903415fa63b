"""Booking domain events.

Emitted by the Booking aggregate on every meaningful transition and
buffered until the unit of work commits. Consumers (notifications, payout
orchestration, audit) live outside the booking core.

Events:
    - BookingCreated: Persisted identity assigned (mark_as_created)
    - BookingConfirmed: PENDING → CONFIRMED (with or without payment)
    - BookingActivated: CONFIRMED → ACTIVE
    - BookingCompleted: ACTIVE → COMPLETED (triggers fleet-owner payout)
    - BookingCancelled: CONFIRMED → CANCELLED
    - BookingChauffeurAssigned / BookingChauffeurUnassigned
    - BookingLegStarted / BookingLegEnded: Owned leg transitions
    - BookingPaymentStatusChanged: Refund workflow progress
    - BookingLegStartReminder / BookingLegEndReminder: A leg starts or ends
      within the hour
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingCreated(DomainEvent):
    """Booking persisted for the first time.

    Attributes:
        booking_id: Persisted identity.
        booking_reference: Human-readable reference (BK-...).
        customer_id: Customer who placed the booking.
    """

    booking_id: UUID
    booking_reference: str
    customer_id: str


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingConfirmed(DomainEvent):
    """Booking confirmed (PENDING → CONFIRMED).

    Attributes:
        payment_id: Set when confirmation came with a captured payment.
    """

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str | None = None
    payment_id: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingActivated(DomainEvent):
    """Service window started (CONFIRMED → ACTIVE)."""

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str | None


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingCompleted(DomainEvent):
    """Service delivered (ACTIVE → COMPLETED).

    Attributes:
        fleet_owner_payout_amount_net: Net amount owed to the fleet owner,
            used by payout orchestration.
    """

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str | None
    fleet_owner_payout_amount_net: Decimal


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingCancelled(DomainEvent):
    """Booking cancelled (CONFIRMED → CANCELLED)."""

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str | None = None
    cancellation_reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingChauffeurAssigned(DomainEvent):
    """Chauffeur assigned to a booking."""

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str
    fleet_owner_id: str
    assigned_by: str


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingChauffeurUnassigned(DomainEvent):
    """Chauffeur removed from a booking (explicitly or by reassignment)."""

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str
    fleet_owner_id: str
    unassigned_by: str
    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingLegStarted(DomainEvent):
    """Owned leg moved PENDING → ACTIVE."""

    booking_id: UUID | None
    booking_reference: str
    leg_id: UUID | None
    leg_date: date


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingLegEnded(DomainEvent):
    """Owned leg moved ACTIVE → COMPLETED."""

    booking_id: UUID | None
    booking_reference: str
    leg_id: UUID | None
    leg_date: date


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingPaymentStatusChanged(DomainEvent):
    """Payment status moved along the refund workflow."""

    booking_id: UUID | None
    booking_reference: str
    previous_status: str
    new_status: str


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingLegStartReminder(DomainEvent):
    """Leg starts within the hour; the customer and chauffeur are due a reminder.

    Attributes:
        leg_start_time: When the leg starts.
    """

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str | None
    leg_id: UUID | None
    leg_date: date
    leg_start_time: datetime


@dataclass(frozen=True, kw_only=True, slots=True)
class BookingLegEndReminder(DomainEvent):
    """Leg ends within the hour."""

    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str | None
    leg_id: UUID | None
    leg_date: date
    leg_end_time: datetime


BOOKING_EVENTS: tuple[type[DomainEvent], ...] = (
    BookingCreated,
    BookingConfirmed,
    BookingActivated,
    BookingCompleted,
    BookingCancelled,
    BookingChauffeurAssigned,
    BookingChauffeurUnassigned,
    BookingLegStarted,
    BookingLegEnded,
    BookingPaymentStatusChanged,
    BookingLegStartReminder,
    BookingLegEndReminder,
)
