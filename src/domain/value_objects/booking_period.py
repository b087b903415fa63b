"""Booking period value object.

A booking period is a closed tagged union: the `booking_type` tag (DAY,
NIGHT, FULL_DAY) selects which shape rules the start/end window obeys. The
rules themselves are enforced by BookingPeriodFactory.create(); this object
only carries the validated window and answers questions about it. Periods
loaded from storage come through BookingPeriodFactory.reconstitute() and are
trusted as-is.

Usage:
    period = factory.create(BookingPeriodRequest(booking_type=BookingType.NIGHT, start_date=tomorrow))
    period.duration_in_hours()  # 6.0
    period.is_upcoming(clock)   # True
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from src.core.clock import SYSTEM_CLOCK
from src.core.constants import FULL_DAY_BLOCK
from src.domain.enums import BookingType
from src.domain.protocols.clock_protocol import ClockProtocol

_SECONDS_PER_HOUR = Decimal("3600")


@dataclass(frozen=True, kw_only=True)
class BookingPeriod:
    """Start/end window of a booking, tagged with its booking type.

    Attributes:
        booking_type: Variant tag.
        start: Start instant (timezone-aware).
        end: End instant (timezone-aware).
    """

    booking_type: BookingType
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def duration_in_hours(self) -> float:
        """Length of the window in hours (fractional)."""
        return self.duration.total_seconds() / 3600

    def duration_in_hours_exact(self) -> Decimal:
        """Length of the window in hours as a Decimal (for pricing)."""
        return Decimal(int(self.duration.total_seconds())) / _SECONDS_PER_HOUR

    def overlaps(self, other: "BookingPeriod") -> bool:
        """Half-open interval intersection: touching windows do not overlap."""
        return self.start < other.end and self.end > other.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def is_past(self, clock: ClockProtocol = SYSTEM_CLOCK) -> bool:
        return self.end < clock.now()

    def is_active(self, clock: ClockProtocol = SYSTEM_CLOCK) -> bool:
        return self.contains(clock.now())

    def is_upcoming(self, clock: ClockProtocol = SYSTEM_CLOCK) -> bool:
        return self.start > clock.now()

    @property
    def security_detail_multiplier(self) -> int:
        return self.booking_type.security_detail_multiplier

    def number_of_full_day_periods(self) -> int:
        """Whole 24h blocks in a FULL_DAY period (1 for DAY and NIGHT)."""
        if self.booking_type is not BookingType.FULL_DAY:
            return 1
        return max(1, self.duration // FULL_DAY_BLOCK)

    @property
    def first_day(self) -> date:
        """Calendar date of the start, in the start's own timezone."""
        return self.start.date()

    @property
    def last_day(self) -> date:
        """Calendar date of the end, in the end's own timezone."""
        return self.end.date()

    def covers_day(self, day: date) -> bool:
        """Whether the calendar day lies within [first_day, last_day]."""
        return self.first_day <= day <= self.last_day
