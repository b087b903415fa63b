"""BookingRepository - in-memory implementation of the BookingRepository protocol.

Adapter for hexagonal architecture. Maps between Booking aggregates (with
their owned legs) and plain records in InMemoryDatabase. Loads go through
the trusted reconstitute path; writes are staged on the session and applied
by the unit of work on commit.
"""

from datetime import datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.core.clock import SYSTEM_CLOCK
from src.domain.entities.booking import Booking
from src.domain.entities.booking_leg import BookingLeg
from src.domain.enums import BookingLegStatus, BookingStatus, PaymentStatus
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.services.booking_period_factory import BookingPeriodFactory
from src.domain.value_objects.booking_financials import BookingFinancials
from src.domain.value_objects.chauffeur_assignment_policy import (
    DEFAULT_ASSIGNMENT_POLICY,
    ChauffeurAssignmentPolicy,
)
from src.infrastructure.persistence.database import InMemorySession, Record
from src.infrastructure.persistence.records import (
    format_optional,
    parse_date,
    parse_datetime,
    parse_decimal,
    parse_enum,
    parse_optional_datetime,
    parse_optional_uuid,
    parse_uuid,
)

TABLE = "bookings"


class BookingRepository:
    """In-memory implementation of BookingRepository protocol.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Attributes:
        session: Session of the owning unit of work.

    Example:
        >>> async with uow:
        ...     booking = await uow.bookings.find_by_id(booking_id)
    """

    def __init__(
        self,
        session: InMemorySession,
        *,
        clock: ClockProtocol = SYSTEM_CLOCK,
        assignment_policy: ChauffeurAssignmentPolicy = DEFAULT_ASSIGNMENT_POLICY,
    ) -> None:
        self.session = session
        self._clock = clock
        self._assignment_policy = assignment_policy

    async def find_by_id(self, booking_id: UUID) -> Booking | None:
        record = self.session.database.get(TABLE, booking_id)
        if record is None:
            return None
        return self._to_domain(record)

    async def find_by_reference(self, booking_reference: str) -> Booking | None:
        for record in self.session.database.scan(TABLE):
            if record["booking_reference"] == booking_reference:
                return self._to_domain(record)
        return None

    async def find_by_status(self, status: BookingStatus) -> list[Booking]:
        return [
            self._to_domain(record)
            for record in self.session.database.scan(TABLE)
            if record["status"] == status.value
        ]

    async def find_due_for_activation(self, now: datetime) -> list[Booking]:
        """CONFIRMED bookings whose period has started, oldest start first."""
        due = [
            booking
            for booking in await self.find_by_status(BookingStatus.CONFIRMED)
            if booking.period.start <= now
        ]
        return sorted(due, key=lambda booking: booking.period.start)

    async def find_due_for_completion(self, now: datetime) -> list[Booking]:
        """ACTIVE bookings whose period has ended, oldest end first."""
        due = [
            booking
            for booking in await self.find_by_status(BookingStatus.ACTIVE)
            if booking.period.end <= now
        ]
        return sorted(due, key=lambda booking: booking.period.end)

    async def add(self, booking: Booking) -> None:
        """Assign uuid7 identities to the booking and its legs, then stage it."""
        if booking.id is None:
            booking.id = uuid7()
        self._assign_leg_identities(booking.id, booking.legs)
        self.session.stage(TABLE, booking.id, booking)

    async def save(self, booking: Booking) -> None:
        """Stage an existing booking.

        Raises:
            ValueError: If the booking was never added (has no id).
        """
        if booking.id is None:
            raise ValueError("Cannot save a booking that was never added")
        self._assign_leg_identities(booking.id, booking.legs)
        self.session.stage(TABLE, booking.id, booking)

    @staticmethod
    def _assign_leg_identities(booking_id: UUID, legs: list[BookingLeg]) -> None:
        for leg in legs:
            if leg.id is None:
                leg.assign_identity(uuid7(), booking_id)
            elif leg.booking_id is None:
                leg.booking_id = booking_id

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def to_record(booking: Booking) -> Record:
        """Convert a Booking aggregate to a stored record.

        The version is written by the unit of work, not here.
        """
        financials = booking.financials
        return {
            "id": str(booking.id),
            "booking_reference": booking.booking_reference,
            "customer_id": booking.customer_id,
            "car_id": booking.car_id,
            "booking_type": booking.period.booking_type.value,
            "start_date": booking.period.start.isoformat(),
            "end_date": booking.period.end.isoformat(),
            "pickup_address": booking.pickup_address,
            "drop_off_address": booking.drop_off_address,
            "status": booking.status.value,
            "payment_status": booking.payment_status.value,
            "chauffeur_id": booking.chauffeur_id,
            "special_requests": booking.special_requests,
            "payment_intent": booking.payment_intent,
            "payment_id": booking.payment_id,
            "include_security_detail": booking.include_security_detail,
            "currency": financials.currency,
            **{name: str(getattr(financials, name)) for name in financials.amount_field_names()},
            "cancelled_at": format_optional(booking.cancelled_at),
            "cancellation_reason": booking.cancellation_reason,
            "created_at": format_optional(booking.created_at),
            "updated_at": format_optional(booking.updated_at),
            "legs": [_leg_to_record(leg) for leg in booking.legs],
        }

    def _to_domain(self, record: Record) -> Booking:
        """Convert a stored record back to a Booking aggregate.

        Raises:
            InconsistentDataError: If any stored value cannot be mapped back.
        """
        booking_id = parse_uuid(record["id"], "booking.id")
        period = BookingPeriodFactory.reconstitute(
            record["booking_type"],
            parse_datetime(record["start_date"], "booking.start_date"),
            parse_datetime(record["end_date"], "booking.end_date"),
        )
        financials = BookingFinancials(
            currency=record["currency"],
            **{
                name: parse_decimal(record[name], f"booking.{name}")
                for name in BookingFinancials.amount_field_names()
            },
        )
        return Booking.reconstitute(
            id=booking_id,
            version=int(record["version"]),
            booking_reference=record["booking_reference"],
            customer_id=record["customer_id"],
            car_id=record["car_id"],
            period=period,
            pickup_address=record["pickup_address"],
            drop_off_address=record["drop_off_address"],
            financials=financials,
            status=parse_enum(BookingStatus, record["status"], "booking.status"),
            payment_status=parse_enum(
                PaymentStatus, record["payment_status"], "booking.payment_status"
            ),
            chauffeur_id=record["chauffeur_id"],
            special_requests=record["special_requests"],
            payment_intent=record["payment_intent"],
            payment_id=record["payment_id"],
            include_security_detail=bool(record["include_security_detail"]),
            legs=[self._leg_to_domain(leg) for leg in record["legs"]],
            cancelled_at=parse_optional_datetime(record["cancelled_at"], "booking.cancelled_at"),
            cancellation_reason=record["cancellation_reason"],
            created_at=parse_optional_datetime(record["created_at"], "booking.created_at"),
            updated_at=parse_optional_datetime(record["updated_at"], "booking.updated_at"),
            assignment_policy=self._assignment_policy,
            clock=self._clock,
        )

    def _leg_to_domain(self, record: Record) -> BookingLeg:
        return BookingLeg.reconstitute(
            id=parse_optional_uuid(record["id"], "leg.id"),
            booking_id=parse_optional_uuid(record["booking_id"], "leg.booking_id"),
            leg_date=parse_date(record["leg_date"], "leg.leg_date"),
            leg_start_time=parse_datetime(record["leg_start_time"], "leg.leg_start_time"),
            leg_end_time=parse_datetime(record["leg_end_time"], "leg.leg_end_time"),
            total_daily_price=parse_decimal(record["total_daily_price"], "leg.total_daily_price"),
            items_net_value_for_leg=parse_decimal(
                record["items_net_value_for_leg"], "leg.items_net_value_for_leg"
            ),
            fleet_owner_earning_for_leg=parse_decimal(
                record["fleet_owner_earning_for_leg"], "leg.fleet_owner_earning_for_leg"
            ),
            status=parse_enum(BookingLegStatus, record["status"], "leg.status"),
            notes=record["notes"],
            clock=self._clock,
        )


def _leg_to_record(leg: BookingLeg) -> Record:
    return {
        "id": format_optional(leg.id),
        "booking_id": format_optional(leg.booking_id),
        "leg_date": leg.leg_date.isoformat(),
        "leg_start_time": leg.leg_start_time.isoformat(),
        "leg_end_time": leg.leg_end_time.isoformat(),
        "total_daily_price": str(leg.total_daily_price),
        "items_net_value_for_leg": str(leg.items_net_value_for_leg),
        "fleet_owner_earning_for_leg": str(leg.fleet_owner_earning_for_leg),
        "status": leg.status.value,
        "notes": leg.notes,
    }
