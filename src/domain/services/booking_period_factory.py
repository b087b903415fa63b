"""Booking period factory.

Single entry point for building BookingPeriod values. create() dispatches on
the booking type tag and enforces that variant's rules; reconstitute() trusts
persisted data and skips validation.

Rules:
    DAY:
        - Pickup time required, hour in [7, 11] (service timezone)
        - End = start + 12h on a single day
        - Optional end date for multi-day bookings: N calendar days span
          exactly 12 + 24 * (N - 1) hours
    NIGHT:
        - Start forced to 23:00 on the start date, end to 05:00 next day
        - Pickup time and any time component of the start are ignored
    FULL_DAY:
        - Explicit start and end instants
        - UTC start hour in [7, 22]
        - Duration >= 24h and an exact multiple of 24h
    All:
        - Start strictly in the future

Usage:
    factory = BookingPeriodFactory(clock=clock, tz=settings.timezone)
    period = factory.create(
        BookingPeriodRequest(
            booking_type=BookingType.DAY,
            start_date=date(2025, 3, 1),
            pickup_time="9:00 AM",
        )
    )
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from src.core.clock import SYSTEM_CLOCK
from src.core.constants import (
    DAY_PICKUP_EARLIEST_HOUR,
    DAY_PICKUP_LATEST_HOUR,
    DAY_SERVICE_HOURS,
    FULL_DAY_BLOCK,
    FULL_DAY_EARLIEST_START_HOUR,
    FULL_DAY_LATEST_START_HOUR,
    NIGHT_END_HOUR,
    NIGHT_START_HOUR,
)
from src.domain.enums import BookingType
from src.domain.errors import InconsistentDataError, InvalidBookingPeriodError
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.value_objects.booking_period import BookingPeriod
from src.domain.value_objects.pickup_time import InvalidPickupTimeError, PickupTime

_DAY_SERVICE = timedelta(hours=DAY_SERVICE_HOURS)
_NIGHT_DURATION = timedelta(hours=(NIGHT_END_HOUR + 24) - NIGHT_START_HOUR)


@dataclass(frozen=True, kw_only=True)
class BookingPeriodRequest:
    """Raw period input as received from the booking request.

    Attributes:
        booking_type: Type tag (enum or its string value).
        start_date: Calendar date (DAY, NIGHT) or start instant (FULL_DAY).
        end_date: Last day (multi-day DAY) or end instant (FULL_DAY).
        pickup_time: "H:MM AM|PM" pickup time, DAY only.
    """

    booking_type: BookingType | str
    start_date: date | datetime
    end_date: date | datetime | None = None
    pickup_time: PickupTime | str | None = None


class BookingPeriodFactory:
    """Builds validated booking periods.

    Args:
        clock: Source of "now" for the future-start rule.
        tz: Timezone DAY and NIGHT wall-clock times are expressed in.
    """

    def __init__(self, clock: ClockProtocol = SYSTEM_CLOCK, tz: tzinfo = UTC) -> None:
        self._clock = clock
        self._tz = tz

    def create(self, request: BookingPeriodRequest) -> BookingPeriod:
        """Validate the request and build the matching period.

        Raises:
            InvalidBookingPeriodError: For unknown type tags, missing or
                malformed inputs, and any violated variant rule.
        """
        booking_type = self._parse_type(request)

        match booking_type:
            case BookingType.DAY:
                period = self._create_day(request)
            case BookingType.NIGHT:
                period = self._create_night(request)
            case BookingType.FULL_DAY:
                period = self._create_full_day(request)

        if period.start <= self._clock.now():
            raise InvalidBookingPeriodError(
                f"{booking_type.value} booking cannot start in the past",
                booking_type=booking_type.value,
                start=period.start,
                end=period.end,
            )
        return period

    @staticmethod
    def reconstitute(
        booking_type: BookingType | str, start: datetime, end: datetime
    ) -> BookingPeriod:
        """Rebuild a persisted period without validation.

        Raises:
            InconsistentDataError: If the stored type tag is unknown.
        """
        if isinstance(booking_type, str) and not BookingType.is_valid(booking_type):
            raise InconsistentDataError(
                f"Unknown booking type in storage: {booking_type!r}",
                details={"booking_type": str(booking_type)},
            )
        return BookingPeriod(booking_type=BookingType(booking_type), start=start, end=end)

    # -------------------------------------------------------------------------
    # Variants
    # -------------------------------------------------------------------------

    def _create_day(self, request: BookingPeriodRequest) -> BookingPeriod:
        kind = BookingType.DAY.value
        if request.pickup_time is None:
            raise InvalidBookingPeriodError(
                "DAY bookings require a pickup time", booking_type=kind
            )
        try:
            pickup = (
                request.pickup_time
                if isinstance(request.pickup_time, PickupTime)
                else PickupTime(request.pickup_time)
            )
        except InvalidPickupTimeError as e:
            raise InvalidBookingPeriodError(e.message, booking_type=kind) from e

        if not DAY_PICKUP_EARLIEST_HOUR <= pickup.hour <= DAY_PICKUP_LATEST_HOUR:
            raise InvalidBookingPeriodError(
                f"DAY bookings must start between 7:00 AM and 11:00 AM. Provided: {pickup}",
                booking_type=kind,
            )

        first_day = self._calendar_date(request.start_date)
        start = self._at(first_day, pickup.to_time())
        if request.end_date is None:
            return BookingPeriod(booking_type=BookingType.DAY, start=start, end=start + _DAY_SERVICE)

        last_day = self._calendar_date(request.end_date)
        if last_day < first_day:
            raise InvalidBookingPeriodError(
                "DAY booking end date cannot be before its start date",
                booking_type=kind,
                start=start,
            )
        end = self._at(last_day, pickup.to_time()) + _DAY_SERVICE
        days = (last_day - first_day).days + 1
        expected = _DAY_SERVICE + FULL_DAY_BLOCK * (days - 1)
        if end - start != expected:
            raise InvalidBookingPeriodError(
                f"DAY bookings over {days} days must last exactly "
                f"{int(expected.total_seconds() // 3600)} hours",
                booking_type=kind,
                start=start,
                end=end,
            )
        return BookingPeriod(booking_type=BookingType.DAY, start=start, end=end)

    def _create_night(self, request: BookingPeriodRequest) -> BookingPeriod:
        night = self._calendar_date(request.start_date)
        start = self._at(night, time(NIGHT_START_HOUR))
        end = self._at(night + timedelta(days=1), time(NIGHT_END_HOUR))
        if end - start != _NIGHT_DURATION:
            raise InvalidBookingPeriodError(
                "NIGHT bookings must be exactly 6 hours",
                booking_type=BookingType.NIGHT.value,
                start=start,
                end=end,
            )
        return BookingPeriod(booking_type=BookingType.NIGHT, start=start, end=end)

    def _create_full_day(self, request: BookingPeriodRequest) -> BookingPeriod:
        kind = BookingType.FULL_DAY.value
        if request.end_date is None:
            raise InvalidBookingPeriodError(
                "FULL_DAY bookings require an end date", booking_type=kind
            )
        if not isinstance(request.start_date, datetime) or not isinstance(
            request.end_date, datetime
        ):
            raise InvalidBookingPeriodError(
                "FULL_DAY bookings require explicit start and end times",
                booking_type=kind,
            )
        start = _as_aware(request.start_date)
        end = _as_aware(request.end_date)

        start_hour = start.astimezone(UTC).hour
        if not FULL_DAY_EARLIEST_START_HOUR <= start_hour <= FULL_DAY_LATEST_START_HOUR:
            raise InvalidBookingPeriodError(
                "FULL_DAY bookings must start between 7:00 AM and 10:00 PM. "
                f"Provided: {start.isoformat()}",
                booking_type=kind,
                start=start,
                end=end,
            )

        duration = end - start
        hours = duration.total_seconds() / 3600
        if duration < FULL_DAY_BLOCK:
            raise InvalidBookingPeriodError(
                f"FULL_DAY bookings must be at least 24 hours. Got: {hours:g} hours",
                booking_type=kind,
                start=start,
                end=end,
            )
        if duration % FULL_DAY_BLOCK:
            raise InvalidBookingPeriodError(
                f"FULL_DAY bookings must be in multiples of 24 hours. Got: {hours:g} hours",
                booking_type=kind,
                start=start,
                end=end,
            )
        return BookingPeriod(booking_type=BookingType.FULL_DAY, start=start, end=end)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_type(request: BookingPeriodRequest) -> BookingType:
        raw = request.booking_type
        if isinstance(raw, BookingType):
            return raw
        if isinstance(raw, str) and BookingType.is_valid(raw):
            return BookingType(raw)
        start = request.start_date if isinstance(request.start_date, datetime) else None
        raise InvalidBookingPeriodError(
            f"Invalid booking type: {raw}", booking_type=str(raw), start=start
        )

    def _calendar_date(self, value: date | datetime) -> date:
        """Calendar date in the service timezone; time components are dropped."""
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                return value.astimezone(self._tz).date()
            return value.date()
        return value

    def _at(self, day: date, wall_time: time) -> datetime:
        return datetime.combine(day, wall_time, tzinfo=self._tz)


def _as_aware(instant: datetime) -> datetime:
    """Naive instants are read as UTC."""
    return instant if instant.tzinfo is not None else instant.replace(tzinfo=UTC)
