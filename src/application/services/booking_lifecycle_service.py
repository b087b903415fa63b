"""Time-driven booking lifecycle.

Run periodically by a scheduler. Nothing here is triggered by a user: the
clock decides when a booking activates, when its legs start and end, and
when it completes.

Order of one process_status_updates() run:
    1. Activate CONFIRMED bookings whose period started and that have a
       chauffeur assigned
    2. Start and complete the due legs of every ACTIVE booking
    3. Complete ACTIVE bookings whose period ended, ending any leg still
       running at that instant

Each booking is saved in its own unit of work, and a booking that fails is
logged and skipped so the rest of the run goes on.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from src.core.clock import SYSTEM_CLOCK
from src.domain.entities.booking import Booking
from src.domain.entities.booking_leg import BookingLeg
from src.domain.enums import BookingLegStatus, BookingStatus
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


@dataclass(frozen=True, kw_only=True)
class StatusUpdateSummary:
    """Counts from one process_status_updates() run."""

    activated: int = 0
    completed: int = 0
    legs_started: int = 0
    legs_completed: int = 0
    failed: int = 0

    def __str__(self) -> str:
        return (
            f"Processed status updates: {self.activated} activated, "
            f"{self.completed} completed"
        )


class ReminderKind(str, Enum):
    LEG_START = "LEG_START"
    LEG_END = "LEG_END"


@dataclass(frozen=True, kw_only=True)
class LegReminder:
    """A leg that is due a reminder (one hour before it starts or ends).

    Attributes:
        kind: Start or end reminder.
        booking_id: Booking owning the leg.
        booking_reference: Human-readable booking reference.
        customer_id: Customer to remind.
        chauffeur_id: Chauffeur to remind, if assigned.
        leg_id: Leg identity.
        leg_date: Calendar day of the leg.
    """

    kind: ReminderKind
    booking_id: UUID | None
    booking_reference: str
    customer_id: str
    chauffeur_id: str | None
    leg_id: UUID | None
    leg_date: date


class BookingLifecycleService:
    """Applies the clock-driven transitions to stored bookings.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: One unit of work per scan and per booking
        - LoggerProtocol: Per-booking failures and the run summary
        - ClockProtocol: Source of "now" for the due-date scans
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        logger: LoggerProtocol,
        clock: ClockProtocol = SYSTEM_CLOCK,
    ) -> None:
        self._uow_factory = uow_factory
        self._logger = logger
        self._clock = clock

    async def process_status_updates(self) -> StatusUpdateSummary:
        """Run one pass of activation, leg transitions and completion.

        Returns:
            StatusUpdateSummary: What changed, and how many bookings failed.
        """
        activated = failed = 0
        async with self._uow_factory() as uow:
            confirmed = await uow.bookings.find_due_for_activation(self._clock.now())
        for booking in confirmed:
            if not booking.is_eligible_for_activation():
                continue
            if await self._apply(booking, Booking.activate, "booking_activation_failed"):
                activated += 1
                self._logger.info(
                    "booking_activated", booking_reference=booking.booking_reference
                )
            else:
                failed += 1

        legs_started = legs_completed = 0
        async with self._uow_factory() as uow:
            active = await uow.bookings.find_by_status(BookingStatus.ACTIVE)
        for booking in active:
            started = [leg.leg_date for leg in booking.legs_due_to_start()]
            if not started and not booking.legs_due_to_complete():
                continue
            before = _completed_leg_count(booking)
            if await self._apply(booking, _advance_legs, "booking_leg_update_failed"):
                legs_started += len(started)
                legs_completed += _completed_leg_count(booking) - before
            else:
                failed += 1

        completed = 0
        async with self._uow_factory() as uow:
            due = await uow.bookings.find_due_for_completion(self._clock.now())
        for booking in due:
            if not booking.is_eligible_for_completion():
                continue
            before = _completed_leg_count(booking)
            if await self._apply(booking, Booking.complete, "booking_completion_failed"):
                completed += 1
                legs_completed += _completed_leg_count(booking) - before
                self._logger.info(
                    "booking_completed", booking_reference=booking.booking_reference
                )
            else:
                failed += 1

        summary = StatusUpdateSummary(
            activated=activated,
            completed=completed,
            legs_started=legs_started,
            legs_completed=legs_completed,
            failed=failed,
        )
        self._logger.info(
            "booking_status_updates_processed",
            activated=activated,
            completed=completed,
            legs_started=legs_started,
            legs_completed=legs_completed,
            failed=failed,
        )
        return summary

    async def find_leg_reminders(self) -> list[LegReminder]:
        """Legs due a reminder right now.

        Start reminders go out for PENDING legs of CONFIRMED or ACTIVE
        bookings that have a chauffeur; end reminders for legs of ACTIVE
        bookings that are not yet marked completed. Each reminder is also
        published as a BookingLegStartReminder or BookingLegEndReminder
        event for the notification consumers.
        """
        reminders: list[LegReminder] = []
        async with self._uow_factory() as uow:
            confirmed = await uow.bookings.find_by_status(BookingStatus.CONFIRMED)
            active = await uow.bookings.find_by_status(BookingStatus.ACTIVE)
            for booking in [*confirmed, *active]:
                due = _due_reminders(booking)
                for reminder in due:
                    if reminder.kind == ReminderKind.LEG_START:
                        booking.remind_leg_start(reminder.leg_date)
                    else:
                        booking.remind_leg_end(reminder.leg_date)
                if due:
                    uow.collect(booking)
                    reminders.extend(due)

        if reminders:
            self._logger.info("booking_leg_reminders_published", count=len(reminders))
        return reminders

    async def _apply(
        self,
        booking: Booking,
        operation: Callable[[Booking], None],
        failure_event: str,
    ) -> bool:
        try:
            async with self._uow_factory() as uow:
                operation(booking)
                await uow.bookings.save(booking)
        except Exception as e:
            self._logger.error(
                failure_event,
                error=e,
                booking_id=str(booking.id),
                booking_reference=booking.booking_reference,
            )
            return False
        return True


def _advance_legs(booking: Booking) -> None:
    for leg in booking.legs_due_to_start():
        booking.start_leg(leg.leg_date)
    for leg in booking.legs_due_to_complete():
        booking.complete_leg(leg.leg_date)


def _completed_leg_count(booking: Booking) -> int:
    return sum(1 for leg in booking.legs if leg.is_marked_completed())


def _reminder(kind: ReminderKind, booking: Booking, leg: BookingLeg) -> LegReminder:
    return LegReminder(
        kind=kind,
        booking_id=booking.id,
        booking_reference=booking.booking_reference,
        customer_id=booking.customer_id,
        chauffeur_id=booking.chauffeur_id,
        leg_id=leg.id,
        leg_date=leg.leg_date,
    )


def _due_reminders(booking: Booking) -> list[LegReminder]:
    due: list[LegReminder] = []
    for leg in booking.legs:
        if (
            booking.has_chauffeur_assigned()
            and leg.status == BookingLegStatus.PENDING
            and leg.is_eligible_for_start_reminder()
        ):
            due.append(_reminder(ReminderKind.LEG_START, booking, leg))
        if (
            booking.status == BookingStatus.ACTIVE
            and not leg.is_marked_completed()
            and leg.is_eligible_for_end_reminder()
        ):
            due.append(_reminder(ReminderKind.LEG_END, booking, leg))
    return due
