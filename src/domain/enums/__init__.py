"""Domain enums.

Usage:
    from src.domain.enums import BookingStatus, PayoutStatus
"""

from src.domain.enums.booking_leg_status import BookingLegStatus
from src.domain.enums.booking_status import BookingStatus
from src.domain.enums.booking_type import BookingType
from src.domain.enums.payment_status import PaymentStatus
from src.domain.enums.payout_status import PayoutStatus

__all__ = [
    "BookingLegStatus",
    "BookingStatus",
    "BookingType",
    "PaymentStatus",
    "PayoutStatus",
]
