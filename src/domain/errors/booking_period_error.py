"""Booking period validation errors.

Raised by BookingPeriodFactory.create() whenever a requested rental window
breaks the rules of its booking type. Carries the attempted type and both
timestamps (either may be None when the failure happened before they could be
computed, e.g. a missing pickup time).
"""

from datetime import datetime

from src.core.enums import ErrorCode
from src.core.errors import DomainException


class InvalidBookingPeriodError(DomainException):
    """Requested booking period violates its type's rules.

    Attributes:
        booking_type: Attempted type discriminator as given by the caller.
        start: Computed or supplied start instant, if known.
        end: Computed or supplied end instant, if known.
    """

    code = ErrorCode.INVALID_BOOKING_PERIOD

    def __init__(
        self,
        message: str,
        *,
        booking_type: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> None:
        super().__init__(
            message,
            details={
                "booking_type": booking_type,
                "start": start.isoformat() if start else "",
                "end": end.isoformat() if end else "",
            },
        )
        self.booking_type = booking_type
        self.start = start
        self.end = end
