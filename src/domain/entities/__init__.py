"""Domain entities and aggregate roots.

Usage:
    from src.domain.entities import Booking, BookingLeg, Payout
"""

from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.entities.booking import Booking
from src.domain.entities.booking_leg import BookingLeg
from src.domain.entities.payout import Payout

__all__ = [
    "AggregateRoot",
    "Booking",
    "BookingLeg",
    "Payout",
]
