"""Splits a booking period into per-day leg windows.

    DAY:      one 12h window per calendar day, at the pickup time
    NIGHT:    one window, the whole 23:00 → 05:00 period
    FULL_DAY: one window per 24h block, starting at the period start
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from src.core.constants import DAY_SERVICE_HOURS, FULL_DAY_BLOCK
from src.domain.enums import BookingType
from src.domain.value_objects.booking_period import BookingPeriod


@dataclass(frozen=True, kw_only=True)
class LegWindow:
    """Service window of one leg."""

    leg_date: date
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


class BookingSchedule:
    """Leg windows for a booking period."""

    @staticmethod
    def leg_windows(period: BookingPeriod) -> list[LegWindow]:
        """Ordered windows, one per leg.

        Args:
            period: Validated period.

        Returns:
            list[LegWindow]: Windows ordered by start.
        """
        match period.booking_type:
            case BookingType.NIGHT:
                return [
                    LegWindow(leg_date=period.first_day, start=period.start, end=period.end)
                ]
            case BookingType.FULL_DAY:
                return [
                    LegWindow(
                        leg_date=(period.start + FULL_DAY_BLOCK * index).date(),
                        start=period.start + FULL_DAY_BLOCK * index,
                        end=period.start + FULL_DAY_BLOCK * (index + 1),
                    )
                    for index in range(period.number_of_full_day_periods())
                ]
            case BookingType.DAY:
                service = timedelta(hours=DAY_SERVICE_HOURS)
                windows: list[LegWindow] = []
                day = period.first_day
                while day <= period.last_day:
                    start = datetime.combine(day, period.start.timetz())
                    windows.append(LegWindow(leg_date=day, start=start, end=start + service))
                    day += timedelta(days=1)
                return windows
