"""Booking leg entity.

One calendar day's service window inside a booking. Owned exclusively by its
Booking; identity is assigned by the persistence boundary when the parent
booking is first added.

Two kinds of predicates are exposed on purpose:
    - Time predicates (is_active, is_upcoming, has_ended) read the clock
      only. Automation loops use them to decide which explicit transition to
      drive next.
    - The status predicate (is_marked_completed) reads the recorded status
      only. Reporting and persistence-backed views trust it.
is_completed() combines both and may run ahead of the recorded status.

State Machine:
    PENDING → ACTIVE → COMPLETED
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from src.core.clock import SYSTEM_CLOCK
from src.core.constants import REMINDER_LEAD_TIME
from src.domain.enums import BookingLegStatus
from src.domain.errors import (
    InconsistentDataError,
    InvalidAmountError,
    InvalidInputError,
    InvalidStateTransitionError,
)
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.value_objects.money import to_decimal

_AMOUNT_FIELDS = (
    "total_daily_price",
    "items_net_value_for_leg",
    "fleet_owner_earning_for_leg",
)


@dataclass(kw_only=True)
class BookingLeg:
    """One day of service within a booking.

    Attributes:
        leg_date: Calendar date the leg belongs to.
        leg_start_time: Service window start.
        leg_end_time: Service window end (strictly after start).
        total_daily_price: Price charged for this leg.
        items_net_value_for_leg: Net value of add-on items for this leg.
        fleet_owner_earning_for_leg: Fleet owner's share of this leg.
        status: Recorded leg status.
        notes: Free-form operator notes.
        id: Persisted identity (None until the booking is first added).
        booking_id: Owning booking's identity.
        clock: Source of "now" for the time predicates.
    """

    leg_date: date
    leg_start_time: datetime
    leg_end_time: datetime
    total_daily_price: Decimal
    items_net_value_for_leg: Decimal = Decimal("0")
    fleet_owner_earning_for_leg: Decimal = Decimal("0")
    status: BookingLegStatus = BookingLegStatus.PENDING
    notes: str | None = None
    id: UUID | None = None
    booking_id: UUID | None = None
    clock: ClockProtocol = field(default=SYSTEM_CLOCK, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        *,
        leg_date: date,
        leg_start_time: datetime,
        leg_end_time: datetime,
        total_daily_price: Decimal | int | str,
        items_net_value_for_leg: Decimal | int | str = Decimal("0"),
        fleet_owner_earning_for_leg: Decimal | int | str = Decimal("0"),
        notes: str | None = None,
        clock: ClockProtocol = SYSTEM_CLOCK,
    ) -> "BookingLeg":
        """Create a new, not yet persisted leg.

        Raises:
            InvalidInputError: If the window is empty or inverted.
            InvalidAmountError: If an amount is negative or not a number.
        """
        if leg_start_time >= leg_end_time:
            raise InvalidInputError(
                "Leg start time must be before leg end time",
                details={
                    "leg_start_time": leg_start_time.isoformat(),
                    "leg_end_time": leg_end_time.isoformat(),
                },
            )
        amounts = {
            "total_daily_price": total_daily_price,
            "items_net_value_for_leg": items_net_value_for_leg,
            "fleet_owner_earning_for_leg": fleet_owner_earning_for_leg,
        }
        converted: dict[str, Decimal] = {}
        for name, value in amounts.items():
            amount = to_decimal(value, name)
            if amount < 0:
                raise InvalidAmountError(
                    f"{name} cannot be negative", details={"field": name}
                )
            converted[name] = amount
        return cls(
            leg_date=leg_date,
            leg_start_time=leg_start_time,
            leg_end_time=leg_end_time,
            notes=notes,
            clock=clock,
            **converted,
        )

    @classmethod
    def reconstitute(
        cls,
        *,
        id: UUID | None,
        booking_id: UUID | None,
        leg_date: date,
        leg_start_time: datetime,
        leg_end_time: datetime,
        total_daily_price: Decimal,
        items_net_value_for_leg: Decimal,
        fleet_owner_earning_for_leg: Decimal,
        status: BookingLegStatus,
        notes: str | None = None,
        clock: ClockProtocol = SYSTEM_CLOCK,
    ) -> "BookingLeg":
        """Rebuild a persisted leg without re-running creation rules.

        Raises:
            InconsistentDataError: If either identity is missing.
        """
        if id is None or booking_id is None:
            raise InconsistentDataError(
                "Persisted booking leg must have both id and booking_id"
            )
        return cls(
            id=id,
            booking_id=booking_id,
            leg_date=leg_date,
            leg_start_time=leg_start_time,
            leg_end_time=leg_end_time,
            total_daily_price=total_daily_price,
            items_net_value_for_leg=items_net_value_for_leg,
            fleet_owner_earning_for_leg=fleet_owner_earning_for_leg,
            status=status,
            notes=notes,
            clock=clock,
        )

    # -------------------------------------------------------------------------
    # Time predicates (clock only)
    # -------------------------------------------------------------------------

    def is_active(self) -> bool:
        now = self.clock.now()
        return self.leg_start_time <= now <= self.leg_end_time

    def is_upcoming(self) -> bool:
        return self.leg_start_time > self.clock.now()

    def has_ended(self) -> bool:
        return self.clock.now() > self.leg_end_time

    def is_eligible_for_start_reminder(self) -> bool:
        """now ∈ [start - 1h, start)."""
        now = self.clock.now()
        return self.leg_start_time - REMINDER_LEAD_TIME <= now < self.leg_start_time

    def is_eligible_for_end_reminder(self) -> bool:
        """now ∈ [end - 1h, end)."""
        now = self.clock.now()
        return self.leg_end_time - REMINDER_LEAD_TIME <= now < self.leg_end_time

    # -------------------------------------------------------------------------
    # Status predicate (recorded status only)
    # -------------------------------------------------------------------------

    def is_marked_completed(self) -> bool:
        return self.status == BookingLegStatus.COMPLETED

    def is_completed(self) -> bool:
        """Ended by the clock or recorded as COMPLETED."""
        return self.has_ended() or self.is_marked_completed()

    def duration_in_hours(self) -> float:
        return (self.leg_end_time - self.leg_start_time).total_seconds() / 3600

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def can_transition_to(self, target: BookingLegStatus) -> bool:
        return self.status.can_transition_to(target)

    def start(self) -> None:
        """PENDING → ACTIVE.

        Raises:
            InvalidStateTransitionError: If the leg is not PENDING.
        """
        self._transition(BookingLegStatus.ACTIVE, action="start")

    def complete(self) -> None:
        """ACTIVE → COMPLETED.

        Raises:
            InvalidStateTransitionError: If the leg is not ACTIVE.
        """
        self._transition(BookingLegStatus.COMPLETED, action="complete")

    def assign_identity(self, leg_id: UUID, booking_id: UUID) -> None:
        """Called by the persistence boundary when the parent is first added."""
        self.id = leg_id
        self.booking_id = booking_id

    def _transition(self, target: BookingLegStatus, *, action: str) -> None:
        if not self.can_transition_to(target):
            raise InvalidStateTransitionError(
                entity="leg", current_status=self.status, action=action
            )
        self.status = target
