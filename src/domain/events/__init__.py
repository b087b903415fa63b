"""Domain events package.

Usage:
    from src.domain.events import BookingConfirmed, PayoutFailed
"""

from src.domain.events.base_event import DomainEvent
from src.domain.events.booking_events import (
    BOOKING_EVENTS,
    BookingActivated,
    BookingCancelled,
    BookingChauffeurAssigned,
    BookingChauffeurUnassigned,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingLegEnded,
    BookingLegEndReminder,
    BookingLegStarted,
    BookingLegStartReminder,
    BookingPaymentStatusChanged,
)
from src.domain.events.payout_events import (
    PAYOUT_EVENTS,
    PayoutCompleted,
    PayoutFailed,
    PayoutInitiated,
    PayoutProcessing,
)

__all__ = [
    "BOOKING_EVENTS",
    "PAYOUT_EVENTS",
    "BookingActivated",
    "BookingCancelled",
    "BookingChauffeurAssigned",
    "BookingChauffeurUnassigned",
    "BookingCompleted",
    "BookingConfirmed",
    "BookingCreated",
    "BookingLegEnded",
    "BookingLegEndReminder",
    "BookingLegStarted",
    "BookingLegStartReminder",
    "BookingPaymentStatusChanged",
    "DomainEvent",
    "PayoutCompleted",
    "PayoutFailed",
    "PayoutInitiated",
    "PayoutProcessing",
]
