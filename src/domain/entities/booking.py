"""Booking aggregate root.

Owns the booking status, payment status, chauffeur assignment, financial
snapshot and the collection of legs. Every guarded transition raises on
violation and records exactly one domain event on success (reassigning a
chauffeur records two: unassigned, then assigned; completing a booking
first ends any leg still running; no-ops record none). Leg reminders record
an event without changing state.

Architecture:
    - Pure domain aggregate (no infrastructure dependencies)
    - Raises DomainException subclasses on invariant violations
    - Buffers events; the unit of work publishes them after commit
    - Reads "now" through an injected clock

State Machine:
    PENDING → CONFIRMED → ACTIVE → COMPLETED
                  ↓
              CANCELLED

Usage:
    booking = Booking.create(
        customer_id="cust-1",
        car_id="car-1",
        period=period,
        pickup_address="12 Admiralty Way",
        drop_off_address="Murtala Muhammed Airport",
        financials=financials,
    )
    await uow.bookings.add(booking)  # assigns booking.id
    booking.mark_as_created()
    booking.confirm_with_payment("pay_123")
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from src.core.clock import SYSTEM_CLOCK
from src.core.constants import (
    BOOKING_REFERENCE_PREFIX,
    CANCELLATION_CUTOFF,
    DEFAULT_FLEET_OWNER_COMMISSION_PERCENT,
    REMINDER_LEAD_TIME,
)
from src.core.references import random_token, timestamp_token
from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.entities.booking_leg import BookingLeg
from src.domain.enums import BookingLegStatus, BookingStatus, PaymentStatus
from src.domain.errors import (
    InvalidAmountError,
    InvalidInputError,
    InvalidStateTransitionError,
    LegOutsideBookingPeriodError,
)
from src.domain.events.booking_events import (
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
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.value_objects.booking_financials import BookingFinancials
from src.domain.value_objects.booking_period import BookingPeriod
from src.domain.value_objects.chauffeur_assignment_policy import (
    DEFAULT_ASSIGNMENT_POLICY,
    ChauffeurAssignmentPolicy,
)
from src.domain.value_objects.money import HUNDRED, round_to_minor_unit, to_decimal

DEFAULT_CANCELLATION_REASON = "Booking cancelled by customer"
DEFAULT_UNASSIGN_REASON = "Chauffeur unassigned"
REASSIGNMENT_REASON = "Reassigned to different chauffeur"

_UNASSIGN_FORBIDDEN = frozenset(
    {BookingStatus.ACTIVE, BookingStatus.COMPLETED, BookingStatus.CANCELLED}
)


@dataclass(kw_only=True)
class Booking(AggregateRoot):
    """Vehicle rental booking.

    Attributes:
        booking_reference: Human-readable reference ("BK-LQ3K2J1A-X7Q2ZD").
        customer_id: Customer who booked.
        car_id: Booked car.
        period: Validated rental window.
        pickup_address: Where the chauffeur picks the customer up.
        drop_off_address: Where the service ends.
        financials: Priced amounts captured at creation.
        status: Booking lifecycle status.
        payment_status: Payment/refund status.
        id: Persisted identity (None until the repository adds it).
        chauffeur_id: Assigned chauffeur, if any.
        special_requests: Customer notes.
        payment_intent: Gateway payment intent reference.
        payment_id: Captured payment reference.
        include_security_detail: Whether security coverage was booked.
        legs: Owned legs, ordered by date.
        cancelled_at: When the booking was cancelled.
        cancellation_reason: Why it was cancelled.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
        assignment_policy: Which statuses accept a chauffeur assignment.
        clock: Source of "now".
    """

    booking_reference: str
    customer_id: str
    car_id: str
    period: BookingPeriod
    pickup_address: str
    drop_off_address: str
    financials: BookingFinancials
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    id: UUID | None = None
    chauffeur_id: str | None = None
    special_requests: str | None = None
    payment_intent: str | None = None
    payment_id: str | None = None
    include_security_detail: bool = False
    legs: list[BookingLeg] = field(default_factory=list)
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    assignment_policy: ChauffeurAssignmentPolicy = field(
        default=DEFAULT_ASSIGNMENT_POLICY, repr=False, compare=False
    )
    clock: ClockProtocol = field(default=SYSTEM_CLOCK, repr=False, compare=False)
    _creation_recorded: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        now = self.clock.now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = self.created_at

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        customer_id: str,
        car_id: str,
        period: BookingPeriod,
        pickup_address: str,
        drop_off_address: str,
        financials: BookingFinancials,
        include_security_detail: bool = False,
        special_requests: str | None = None,
        payment_intent: str | None = None,
        assignment_policy: ChauffeurAssignmentPolicy = DEFAULT_ASSIGNMENT_POLICY,
        clock: ClockProtocol = SYSTEM_CLOCK,
    ) -> "Booking":
        """Create a new PENDING, UNPAID booking without legs.

        No event is recorded yet: BookingCreated needs the persisted identity
        and is recorded by mark_as_created().

        Raises:
            InvalidInputError: If a required identifier or address is blank.
        """
        for name, value in (
            ("customer_id", customer_id),
            ("car_id", car_id),
            ("pickup_address", pickup_address),
            ("drop_off_address", drop_off_address),
        ):
            if not value or not value.strip():
                raise InvalidInputError(f"{name} is required", details={"field": name})

        return cls(
            booking_reference=cls.generate_reference(clock),
            customer_id=customer_id,
            car_id=car_id,
            period=period,
            pickup_address=pickup_address,
            drop_off_address=drop_off_address,
            financials=financials,
            include_security_detail=include_security_detail,
            special_requests=special_requests,
            payment_intent=payment_intent,
            assignment_policy=assignment_policy,
            clock=clock,
        )

    @classmethod
    def reconstitute(cls, **attributes: object) -> "Booking":
        """Rebuild a persisted booking; creation rules and events are skipped."""
        booking = cls(**attributes)  # type: ignore[arg-type]
        booking._creation_recorded = True
        return booking

    @staticmethod
    def generate_reference(clock: ClockProtocol = SYSTEM_CLOCK) -> str:
        """BK-{base36 millis}-{6 random}, upper-cased."""
        return (
            f"{BOOKING_REFERENCE_PREFIX}-{timestamp_token(clock.now())}-{random_token()}"
        ).upper()

    def mark_as_created(self) -> None:
        """Record BookingCreated once the booking has a persisted identity.

        Calling it again after the event was recorded does nothing.

        Raises:
            InvalidInputError: If the booking has no identity yet.
        """
        if self.id is None:
            raise InvalidInputError(
                "Booking must be persisted before it can be marked as created"
            )
        if self._creation_recorded:
            return
        self._creation_recorded = True
        self._record_event(
            BookingCreated(
                occurred_at=self.clock.now(),
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
            )
        )

    # -------------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------------

    def confirm(self) -> None:
        """PENDING → CONFIRMED.

        Raises:
            InvalidStateTransitionError: If the booking is not PENDING.
        """
        self._require_transition(BookingStatus.CONFIRMED, action="confirm")
        self._set_status(BookingStatus.CONFIRMED)
        self._record_confirmed()

    def confirm_with_payment(self, payment_id: str) -> None:
        """PENDING → CONFIRMED with a captured payment (UNPAID → PAID).

        Raises:
            InvalidInputError: If payment_id is blank.
            InvalidStateTransitionError: If the booking is not PENDING or the
                payment status cannot move to PAID.
        """
        if not payment_id or not payment_id.strip():
            raise InvalidInputError("Payment ID is required", details={"field": "payment_id"})
        self._require_transition(BookingStatus.CONFIRMED, action="confirm")
        self._require_payment_transition(PaymentStatus.PAID, action="mark as paid")

        self.payment_id = payment_id
        self.payment_status = PaymentStatus.PAID
        self._set_status(BookingStatus.CONFIRMED)
        self._record_confirmed()

    def activate(self) -> None:
        """CONFIRMED → ACTIVE.

        Consult is_eligible_for_activation() first when driving this from an
        automation loop; the guard here only checks the status.

        Raises:
            InvalidStateTransitionError: If the booking is not CONFIRMED.
        """
        self._require_transition(BookingStatus.ACTIVE, action="activate")
        self._set_status(BookingStatus.ACTIVE)
        self._record_event(
            BookingActivated(
                occurred_at=self.clock.now(),
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=self.chauffeur_id,
            )
        )

    def complete(self) -> None:
        """ACTIVE → COMPLETED.

        Legs still ACTIVE are completed first (one BookingLegEnded each), so
        a completed booking never owns a running leg. The chauffeur is
        released once the event has captured it.

        Raises:
            InvalidStateTransitionError: If the booking is not ACTIVE.
        """
        self._require_transition(BookingStatus.COMPLETED, action="complete")
        for leg in self.legs:
            if leg.status == BookingLegStatus.ACTIVE:
                self.complete_leg(leg.leg_date)
        chauffeur_id = self.chauffeur_id
        self.chauffeur_id = None
        self._set_status(BookingStatus.COMPLETED)
        self._record_event(
            BookingCompleted(
                occurred_at=self.clock.now(),
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=chauffeur_id,
                fleet_owner_payout_amount_net=self.fleet_owner_payout_amount_net,
            )
        )

    def cancel(self, reason: str | None = None) -> None:
        """CONFIRMED → CANCELLED.

        A PAID booking moves to REFUND_PROCESSING; the refund itself is
        settled later through mark_refunded() / mark_refund_failed(). Any
        assigned chauffeur is released and reported on the event.

        Args:
            reason: Why the booking was cancelled (defaults to a customer
                cancellation message when omitted or blank).

        Raises:
            InvalidStateTransitionError: If the booking is not CONFIRMED.
        """
        self._require_transition(BookingStatus.CANCELLED, action="cancel")
        now = self.clock.now()
        self.cancelled_at = now
        self.cancellation_reason = (reason or "").strip() or DEFAULT_CANCELLATION_REASON
        if self.payment_status == PaymentStatus.PAID:
            self.payment_status = PaymentStatus.REFUND_PROCESSING
        chauffeur_id = self.chauffeur_id
        self.chauffeur_id = None
        self._set_status(BookingStatus.CANCELLED)
        self._record_event(
            BookingCancelled(
                occurred_at=now,
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=chauffeur_id,
                cancellation_reason=self.cancellation_reason,
            )
        )

    # -------------------------------------------------------------------------
    # Chauffeur assignment
    # -------------------------------------------------------------------------

    def assign_chauffeur(
        self, chauffeur_id: str, fleet_owner_id: str, assigned_by: str
    ) -> None:
        """Assign (or reassign) the booking's chauffeur.

        Assigning the chauffeur already on the booking is a no-op. Replacing
        a different chauffeur records BookingChauffeurUnassigned for the old
        one, then BookingChauffeurAssigned for the new one.

        Raises:
            InvalidStateTransitionError: If the assignment policy does not
                allow the current status.
            InvalidInputError: If chauffeur_id is blank.
        """
        if not self.assignment_policy.allows(self.status):
            raise InvalidStateTransitionError(
                entity="booking", current_status=self.status, action="assign chauffeur to"
            )
        if not chauffeur_id or not chauffeur_id.strip():
            raise InvalidInputError("Chauffeur ID is required", details={"field": "chauffeur_id"})
        if self.chauffeur_id == chauffeur_id:
            return

        now = self.clock.now()
        previous = self.chauffeur_id
        if previous is not None:
            self._record_event(
                BookingChauffeurUnassigned(
                    occurred_at=now,
                    booking_id=self.id,
                    booking_reference=self.booking_reference,
                    customer_id=self.customer_id,
                    chauffeur_id=previous,
                    fleet_owner_id=fleet_owner_id,
                    unassigned_by=assigned_by,
                    reason=REASSIGNMENT_REASON,
                )
            )
        self.chauffeur_id = chauffeur_id
        self.updated_at = now
        self._record_event(
            BookingChauffeurAssigned(
                occurred_at=now,
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=chauffeur_id,
                fleet_owner_id=fleet_owner_id,
                assigned_by=assigned_by,
            )
        )

    def unassign_chauffeur(
        self, fleet_owner_id: str, unassigned_by: str, reason: str | None = None
    ) -> None:
        """Remove the current chauffeur.

        Raises:
            InvalidInputError: If no chauffeur is assigned.
            InvalidStateTransitionError: If the booking is ACTIVE, COMPLETED
                or CANCELLED.
        """
        if self.chauffeur_id is None:
            raise InvalidInputError("No chauffeur assigned to this booking")
        if self.status in _UNASSIGN_FORBIDDEN:
            raise InvalidStateTransitionError(
                entity="booking", current_status=self.status, action="unassign chauffeur from"
            )

        now = self.clock.now()
        previous = self.chauffeur_id
        self.chauffeur_id = None
        self.updated_at = now
        self._record_event(
            BookingChauffeurUnassigned(
                occurred_at=now,
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=previous,
                fleet_owner_id=fleet_owner_id,
                unassigned_by=unassigned_by,
                reason=(reason or "").strip() or DEFAULT_UNASSIGN_REASON,
            )
        )

    def has_chauffeur_assigned(self) -> bool:
        return self.chauffeur_id is not None

    # -------------------------------------------------------------------------
    # Legs
    # -------------------------------------------------------------------------

    def add_leg(self, leg: BookingLeg) -> None:
        """Attach a leg whose date lies inside the booking period.

        Raises:
            LegOutsideBookingPeriodError: If the leg date is outside the period.
        """
        if not self.period.covers_day(leg.leg_date):
            raise LegOutsideBookingPeriodError(
                leg.leg_date, self.period.first_day, self.period.last_day
            )
        leg.clock = self.clock
        if self.id is not None:
            leg.booking_id = self.id
        self.legs.append(leg)
        self.legs.sort(key=lambda item: item.leg_start_time)

    def find_leg(self, leg_date: date) -> BookingLeg | None:
        return next((leg for leg in self.legs if leg.leg_date == leg_date), None)

    def start_leg(self, leg_date: date) -> None:
        """Move the leg on `leg_date` PENDING → ACTIVE.

        Raises:
            InvalidStateTransitionError: If the booking is not ACTIVE or the
                leg is not PENDING.
            InvalidInputError: If there is no leg on that date.
        """
        leg = self._leg_for_transition(leg_date, action="start leg of")
        leg.start()
        self.updated_at = self.clock.now()
        self._record_event(
            BookingLegStarted(
                occurred_at=self.updated_at,
                booking_id=self.id,
                booking_reference=self.booking_reference,
                leg_id=leg.id,
                leg_date=leg.leg_date,
            )
        )

    def complete_leg(self, leg_date: date) -> None:
        """Move the leg on `leg_date` ACTIVE → COMPLETED.

        Raises:
            InvalidStateTransitionError: If the booking is not ACTIVE or the
                leg is not ACTIVE.
            InvalidInputError: If there is no leg on that date.
        """
        leg = self._leg_for_transition(leg_date, action="complete leg of")
        leg.complete()
        self.updated_at = self.clock.now()
        self._record_event(
            BookingLegEnded(
                occurred_at=self.updated_at,
                booking_id=self.id,
                booking_reference=self.booking_reference,
                leg_id=leg.id,
                leg_date=leg.leg_date,
            )
        )

    def remind_leg_start(self, leg_date: date) -> None:
        """Record a BookingLegStartReminder for the leg on `leg_date`.

        Raises:
            InvalidInputError: If there is no leg on that date.
        """
        leg = self._require_leg(leg_date)
        self._record_event(
            BookingLegStartReminder(
                occurred_at=self.clock.now(),
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=self.chauffeur_id,
                leg_id=leg.id,
                leg_date=leg.leg_date,
                leg_start_time=leg.leg_start_time,
            )
        )

    def remind_leg_end(self, leg_date: date) -> None:
        """Record a BookingLegEndReminder for the leg on `leg_date`."""
        leg = self._require_leg(leg_date)
        self._record_event(
            BookingLegEndReminder(
                occurred_at=self.clock.now(),
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=self.chauffeur_id,
                leg_id=leg.id,
                leg_date=leg.leg_date,
                leg_end_time=leg.leg_end_time,
            )
        )

    def legs_due_to_start(self) -> list[BookingLeg]:
        """PENDING legs whose window has opened (time predicate)."""
        return [
            leg
            for leg in self.legs
            if leg.can_transition_to(BookingLegStatus.ACTIVE)
            and not leg.is_upcoming()
        ]

    def legs_due_to_complete(self) -> list[BookingLeg]:
        """ACTIVE legs whose window has closed (time predicate)."""
        return [
            leg
            for leg in self.legs
            if leg.can_transition_to(BookingLegStatus.COMPLETED) and leg.has_ended()
        ]

    # -------------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------------

    def set_payment_intent(self, payment_intent: str) -> None:
        if not payment_intent or not payment_intent.strip():
            raise InvalidInputError(
                "Payment intent is required", details={"field": "payment_intent"}
            )
        self.payment_intent = payment_intent
        self.updated_at = self.clock.now()

    def mark_refund_processing(self) -> None:
        self._change_payment_status(PaymentStatus.REFUND_PROCESSING, action="start refund for")

    def mark_refunded(self) -> None:
        self._change_payment_status(PaymentStatus.REFUNDED, action="mark refunded")

    def mark_partially_refunded(self) -> None:
        self._change_payment_status(
            PaymentStatus.PARTIALLY_REFUNDED, action="mark partially refunded"
        )

    def mark_refund_failed(self) -> None:
        self._change_payment_status(PaymentStatus.REFUND_FAILED, action="mark refund failed for")

    # -------------------------------------------------------------------------
    # Eligibility queries (side-effect free)
    # -------------------------------------------------------------------------

    def is_eligible_for_activation(self) -> bool:
        """CONFIRMED, chauffeur assigned, and the period has started."""
        return (
            self.status == BookingStatus.CONFIRMED
            and self.has_chauffeur_assigned()
            and self.clock.now() >= self.period.start
        )

    def is_eligible_for_completion(self) -> bool:
        """ACTIVE, the period has ended, and no leg is still waiting to start."""
        return (
            self.status == BookingStatus.ACTIVE
            and self.clock.now() >= self.period.end
            and not any(leg.status == BookingLegStatus.PENDING for leg in self.legs)
        )

    def is_eligible_for_cancellation(self) -> bool:
        """CONFIRMED and at least 12 hours before the period starts."""
        return (
            self.status == BookingStatus.CONFIRMED
            and self.clock.now() <= self.period.start - CANCELLATION_CUTOFF
        )

    def is_eligible_for_start_reminder(self) -> bool:
        """CONFIRMED with a chauffeur, within an hour before the start."""
        now = self.clock.now()
        return (
            self.status == BookingStatus.CONFIRMED
            and self.has_chauffeur_assigned()
            and self.period.start - REMINDER_LEAD_TIME <= now < self.period.start
        )

    def is_eligible_for_end_reminder(self) -> bool:
        """ACTIVE, within an hour before the end."""
        now = self.clock.now()
        return (
            self.status == BookingStatus.ACTIVE
            and self.period.end - REMINDER_LEAD_TIME <= now < self.period.end
        )

    def get_duration_in_hours(self) -> float:
        return self.period.duration_in_hours()

    # -------------------------------------------------------------------------
    # Money getters (rounded to the currency's minor unit)
    # -------------------------------------------------------------------------

    @property
    def currency(self) -> str:
        return self.financials.currency

    @property
    def total_amount(self) -> Decimal:
        return self.financials.rounded("total_amount")

    @property
    def net_total(self) -> Decimal:
        return self.financials.rounded("net_total")

    @property
    def security_detail_cost(self) -> Decimal:
        return self.financials.rounded("security_detail_cost")

    @property
    def platform_service_fee_amount(self) -> Decimal:
        return self.financials.rounded("platform_service_fee_amount")

    @property
    def vat_amount(self) -> Decimal:
        return self.financials.rounded("vat_amount")

    @property
    def fleet_owner_payout_amount_net(self) -> Decimal:
        return self.financials.rounded("fleet_owner_payout_amount_net")

    @staticmethod
    def calculate_fleet_owner_payout_amount_net(
        total_amount: Decimal | int | str,
        commission_percent: Decimal | int | str = DEFAULT_FLEET_OWNER_COMMISSION_PERCENT,
        currency: str = "NGN",
    ) -> Decimal:
        """total * (1 - commission / 100), rounded to the minor unit.

        Example:
            >>> Booking.calculate_fleet_owner_payout_amount_net(1000)
            Decimal('800.00')
            >>> Booking.calculate_fleet_owner_payout_amount_net(1000, 15)
            Decimal('850.00')

        Raises:
            InvalidAmountError: If total is negative or not a number.
            InvalidInputError: If commission is outside [0, 100].
        """
        total = to_decimal(total_amount, "total_amount")
        commission = to_decimal(commission_percent, "commission_percent")
        if total < 0:
            raise InvalidAmountError("Total amount cannot be negative")
        if not Decimal("0") <= commission <= HUNDRED:
            raise InvalidInputError("Commission percent must be between 0 and 100")
        return round_to_minor_unit(total * (1 - commission / HUNDRED), currency)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_transition(self, target: BookingStatus, *, action: str) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStateTransitionError(
                entity="booking", current_status=self.status, action=action
            )

    def _require_payment_transition(self, target: PaymentStatus, *, action: str) -> None:
        if not self.payment_status.can_transition_to(target):
            raise InvalidStateTransitionError(
                entity="booking payment",
                current_status=self.payment_status,
                action=action,
            )

    def _set_status(self, status: BookingStatus) -> None:
        self.status = status
        self.updated_at = self.clock.now()

    def _change_payment_status(self, target: PaymentStatus, *, action: str) -> None:
        self._require_payment_transition(target, action=action)
        previous = self.payment_status
        self.payment_status = target
        self.updated_at = self.clock.now()
        self._record_event(
            BookingPaymentStatusChanged(
                occurred_at=self.updated_at,
                booking_id=self.id,
                booking_reference=self.booking_reference,
                previous_status=previous.value,
                new_status=target.value,
            )
        )

    def _record_confirmed(self) -> None:
        self._record_event(
            BookingConfirmed(
                occurred_at=self.clock.now(),
                booking_id=self.id,
                booking_reference=self.booking_reference,
                customer_id=self.customer_id,
                chauffeur_id=self.chauffeur_id,
                payment_id=self.payment_id,
            )
        )

    def _leg_for_transition(self, leg_date: date, *, action: str) -> BookingLeg:
        if self.status != BookingStatus.ACTIVE:
            raise InvalidStateTransitionError(
                entity="booking", current_status=self.status, action=action
            )
        return self._require_leg(leg_date)

    def _require_leg(self, leg_date: date) -> BookingLeg:
        leg = self.find_leg(leg_date)
        if leg is None:
            raise InvalidInputError(
                f"Booking has no leg on {leg_date.isoformat()}",
                details={"leg_date": leg_date.isoformat()},
            )
        return leg
