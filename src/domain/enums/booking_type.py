"""Booking types (the period-shape discriminator).

- DAY: 12-hour window starting between 7:00 AM and 11:59 AM local time
- NIGHT: 23:00 to 05:00 the next day
- FULL_DAY: whole 24-hour blocks
"""

from enum import Enum


class BookingType(str, Enum):
    """Discriminator for BookingPeriod variants."""

    DAY = "DAY"
    NIGHT = "NIGHT"
    FULL_DAY = "FULL_DAY"

    @property
    def security_detail_multiplier(self) -> int:
        """Security coverage units per leg (24h blocks need double cover)."""
        return 2 if self is BookingType.FULL_DAY else 1

    @classmethod
    def values(cls) -> list[str]:
        return [booking_type.value for booking_type in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls.values()
