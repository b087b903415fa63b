"""Unit tests for the booking command handlers.

Tests cover:
- CreateBooking: pricing, legs, identity, BookingCreated after commit
- ConfirmBooking: with and without payment
- CancelBooking: cancellation window, refund processing
- AssignChauffeur / UnassignChauffeur: status rules and events
- Not found and domain failures become Failure(ApplicationError)

Architecture:
- Real handlers over the in-memory unit of work
- Mocked event bus and logger (conftest)
"""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import Mock

import pytest
from uuid_extensions import uuid7

from src.application.commands.booking_commands import (
    AssignChauffeur,
    CancelBooking,
    ConfirmBooking,
    CreateBooking,
    UnassignChauffeur,
)
from src.application.commands.handlers.assign_chauffeur_handler import AssignChauffeurHandler
from src.application.commands.handlers.cancel_booking_handler import (
    CancelBookingError,
    CancelBookingHandler,
)
from src.application.commands.handlers.confirm_booking_handler import ConfirmBookingHandler
from src.application.commands.handlers.create_booking_handler import CreateBookingHandler
from src.application.commands.handlers.unassign_chauffeur_handler import (
    UnassignChauffeurHandler,
)
from src.application.errors import ApplicationErrorCode
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import BookingStatus, BookingType, PaymentStatus
from src.domain.events.booking_events import (
    BookingCancelled,
    BookingChauffeurAssigned,
    BookingChauffeurUnassigned,
    BookingConfirmed,
    BookingCreated,
)
from src.domain.services.booking_cost_calculator import BookingCostCalculator
from src.domain.services.booking_period_factory import BookingPeriodFactory
from src.domain.value_objects.platform_fee_rates import PlatformFeeRates
from tests.conftest import (
    DAY_START,
    create_booking,
    create_car_rates,
    load_booking,
    published_events,
    store_booking,
)


# =============================================================================
# CreateBooking
# =============================================================================


@pytest.fixture
def create_handler(uow_factory, clock) -> CreateBookingHandler:
    return CreateBookingHandler(
        uow_factory=uow_factory,
        period_factory=BookingPeriodFactory(clock=clock),
        cost_calculator=BookingCostCalculator(
            PlatformFeeRates(
                platform_service_fee_rate=Decimal("10"),
                fleet_owner_commission_rate=Decimal("20"),
                vat_rate=Decimal("7.5"),
            ),
            security_detail_cost=Decimal("30000"),
        ),
        clock=clock,
    )


def create_command(**overrides) -> CreateBooking:
    params = {
        "customer_id": "cust-1",
        "car_id": "car-1",
        "car_rates": create_car_rates(),
        "booking_type": BookingType.DAY,
        "start_date": date(2025, 3, 3),
        "pickup_time": "9:00 AM",
        "pickup_address": "12 Admiralty Way, Lekki",
        "drop_off_address": "Murtala Muhammed Airport",
    }
    params.update(overrides)
    return CreateBooking(**params)


@pytest.mark.unit
class TestCreateBookingHandler:
    """Test CreateBookingHandler."""

    @pytest.mark.asyncio
    async def test_creates_priced_booking(self, create_handler, event_bus, uow_factory):
        # Act
        result = await create_handler.handle(create_command())

        # Assert
        assert isinstance(result, Success)
        booking = result.value
        assert booking.id is not None
        assert booking.status == BookingStatus.PENDING
        assert booking.payment_status == PaymentStatus.UNPAID
        assert booking.period.start == DAY_START
        assert booking.total_amount == Decimal("59125")
        assert len(booking.legs) == 1
        assert booking.legs[0].booking_id == booking.id

        stored = await load_booking(uow_factory, booking.id)
        assert stored.booking_reference == booking.booking_reference

        (event,) = published_events(event_bus)
        assert isinstance(event, BookingCreated)
        assert event.booking_id == booking.id

    @pytest.mark.asyncio
    async def test_multi_day_creates_one_leg_per_day(self, create_handler):
        result = await create_handler.handle(
            create_command(end_date=date(2025, 3, 5), include_security_detail=True)
        )

        booking = result.value
        assert len(booking.legs) == 3
        assert booking.net_total == Decimal("150000")
        assert booking.security_detail_cost == Decimal("90000")
        assert booking.include_security_detail is True

    @pytest.mark.asyncio
    async def test_invalid_period_is_validation_failure(
        self, create_handler, event_bus, database
    ):
        result = await create_handler.handle(create_command(pickup_time="6:00 AM"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert result.error.domain_error.code == ErrorCode.INVALID_BOOKING_PERIOD
        assert database.tables["bookings"] == {}
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_past_start_is_rejected(self, create_handler):
        result = await create_handler.handle(create_command(start_date=date(2025, 2, 28)))

        assert isinstance(result, Failure)
        assert "cannot start in the past" in result.error.message

    @pytest.mark.asyncio
    async def test_blank_address_is_rejected(self, create_handler):
        result = await create_handler.handle(create_command(pickup_address="  "))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self, clock):
        failing_factory = Mock(side_effect=RuntimeError("database offline"))
        handler = CreateBookingHandler(
            uow_factory=failing_factory,
            period_factory=BookingPeriodFactory(clock=clock),
            cost_calculator=BookingCostCalculator(
                PlatformFeeRates(
                    platform_service_fee_rate=0,
                    fleet_owner_commission_rate=0,
                    vat_rate=0,
                ),
                security_detail_cost=0,
            ),
            clock=clock,
        )

        result = await handler.handle(create_command())

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_EXECUTION_FAILED
        assert result.error.message == "Unexpected error: database offline"


# =============================================================================
# ConfirmBooking
# =============================================================================


@pytest.mark.unit
class TestConfirmBookingHandler:
    """Test ConfirmBookingHandler."""

    @pytest.mark.asyncio
    async def test_confirm_without_payment(self, clock, event_bus, uow_factory):
        booking = await store_booking(uow_factory, create_booking(clock))
        handler = ConfirmBookingHandler(uow_factory)

        result = await handler.handle(ConfirmBooking(booking_id=booking.id))

        assert isinstance(result, Success)
        stored = await load_booking(uow_factory, booking.id)
        assert stored.status == BookingStatus.CONFIRMED
        assert stored.payment_status == PaymentStatus.UNPAID
        (event,) = published_events(event_bus)
        assert isinstance(event, BookingConfirmed)

    @pytest.mark.asyncio
    async def test_confirm_with_payment(self, clock, uow_factory):
        booking = await store_booking(uow_factory, create_booking(clock))
        handler = ConfirmBookingHandler(uow_factory)

        await handler.handle(ConfirmBooking(booking_id=booking.id, payment_id="pay_1"))

        stored = await load_booking(uow_factory, booking.id)
        assert stored.payment_status == PaymentStatus.PAID
        assert stored.payment_id == "pay_1"

    @pytest.mark.asyncio
    async def test_confirm_twice_is_conflict(self, clock, uow_factory):
        booking = await store_booking(
            uow_factory, create_booking(clock, status=BookingStatus.CONFIRMED)
        )
        handler = ConfirmBookingHandler(uow_factory)

        result = await handler.handle(ConfirmBooking(booking_id=booking.id))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.CONFLICT
        assert result.error.message == "Cannot confirm booking in CONFIRMED status"

    @pytest.mark.asyncio
    async def test_not_found(self, uow_factory):
        booking_id = uuid7()

        result = await ConfirmBookingHandler(uow_factory).handle(
            ConfirmBooking(booking_id=booking_id)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.NOT_FOUND
        assert result.error.details == {"resource": "Booking", "id": str(booking_id)}


# =============================================================================
# CancelBooking
# =============================================================================


@pytest.mark.unit
class TestCancelBookingHandler:
    """Test CancelBookingHandler."""

    @pytest.mark.asyncio
    async def test_cancel_paid_booking(self, clock, event_bus, uow_factory):
        # Arrange
        booking = await store_booking(
            uow_factory,
            create_booking(
                clock, status=BookingStatus.CONFIRMED, payment_status=PaymentStatus.PAID
            ),
        )

        # Act
        result = await CancelBookingHandler(uow_factory).handle(
            CancelBooking(booking_id=booking.id, reason="Flight moved")
        )

        # Assert
        assert isinstance(result, Success)
        stored = await load_booking(uow_factory, booking.id)
        assert stored.status == BookingStatus.CANCELLED
        assert stored.payment_status == PaymentStatus.REFUND_PROCESSING
        assert stored.cancellation_reason == "Flight moved"
        (event,) = published_events(event_bus)
        assert isinstance(event, BookingCancelled)

    @pytest.mark.asyncio
    async def test_cancel_releases_chauffeur(self, clock, event_bus, uow_factory):
        booking = await store_booking(
            uow_factory,
            create_booking(clock, status=BookingStatus.CONFIRMED, chauffeur_id="chf-1"),
        )

        result = await CancelBookingHandler(uow_factory).handle(
            CancelBooking(booking_id=booking.id)
        )

        assert isinstance(result, Success)
        assert (await load_booking(uow_factory, booking.id)).chauffeur_id is None
        (event,) = published_events(event_bus)
        assert event.chauffeur_id == "chf-1"

    @pytest.mark.asyncio
    async def test_inside_cutoff_is_not_eligible(self, clock, event_bus, uow_factory):
        """Test cancelling under 12 hours before the start is refused."""
        booking = await store_booking(
            uow_factory, create_booking(clock, status=BookingStatus.CONFIRMED)
        )
        clock.set(DAY_START - timedelta(hours=11, minutes=59))

        result = await CancelBookingHandler(uow_factory).handle(
            CancelBooking(booking_id=booking.id)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.NOT_ELIGIBLE
        assert result.error.message == CancelBookingError.NOT_CANCELLABLE
        assert result.error.domain_error.code == ErrorCode.BOOKING_NOT_CANCELLABLE
        assert (await load_booking(uow_factory, booking.id)).status == BookingStatus.CONFIRMED
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pending_booking_is_not_eligible(self, clock, uow_factory):
        booking = await store_booking(uow_factory, create_booking(clock))

        result = await CancelBookingHandler(uow_factory).handle(
            CancelBooking(booking_id=booking.id)
        )

        assert result.error.code == ApplicationErrorCode.NOT_ELIGIBLE
        assert result.error.details["status"] == "PENDING"

    @pytest.mark.asyncio
    async def test_not_found(self, uow_factory):
        result = await CancelBookingHandler(uow_factory).handle(
            CancelBooking(booking_id=uuid7())
        )

        assert result.error.code == ApplicationErrorCode.NOT_FOUND


# =============================================================================
# AssignChauffeur / UnassignChauffeur
# =============================================================================


@pytest.mark.unit
class TestChauffeurHandlers:
    """Test AssignChauffeurHandler and UnassignChauffeurHandler."""

    @pytest.mark.asyncio
    async def test_assign(self, clock, event_bus, uow_factory):
        booking = await store_booking(
            uow_factory, create_booking(clock, status=BookingStatus.CONFIRMED)
        )

        result = await AssignChauffeurHandler(uow_factory).handle(
            AssignChauffeur(
                booking_id=booking.id,
                chauffeur_id="chf-1",
                fleet_owner_id="owner-1",
                assigned_by="ops-1",
            )
        )

        assert isinstance(result, Success)
        assert (await load_booking(uow_factory, booking.id)).chauffeur_id == "chf-1"
        (event,) = published_events(event_bus)
        assert isinstance(event, BookingChauffeurAssigned)
        assert event.assigned_by == "ops-1"

    @pytest.mark.asyncio
    async def test_reassign_publishes_unassign_then_assign(self, clock, event_bus, uow_factory):
        booking = await store_booking(
            uow_factory,
            create_booking(clock, status=BookingStatus.ACTIVE, chauffeur_id="chf-1"),
        )

        await AssignChauffeurHandler(uow_factory).handle(
            AssignChauffeur(
                booking_id=booking.id,
                chauffeur_id="chf-2",
                fleet_owner_id="owner-1",
                assigned_by="ops-1",
            )
        )

        events = published_events(event_bus)
        assert [type(event) for event in events] == [
            BookingChauffeurUnassigned,
            BookingChauffeurAssigned,
        ]
        assert events[0].chauffeur_id == "chf-1"

    @pytest.mark.asyncio
    async def test_assign_to_pending_is_conflict(self, clock, uow_factory):
        booking = await store_booking(uow_factory, create_booking(clock))

        result = await AssignChauffeurHandler(uow_factory).handle(
            AssignChauffeur(
                booking_id=booking.id,
                chauffeur_id="chf-1",
                fleet_owner_id="owner-1",
                assigned_by="ops-1",
            )
        )

        assert result.error.code == ApplicationErrorCode.CONFLICT
        assert result.error.message == "Cannot assign chauffeur to booking in PENDING status"

    @pytest.mark.asyncio
    async def test_unassign(self, clock, event_bus, uow_factory):
        booking = await store_booking(
            uow_factory,
            create_booking(clock, status=BookingStatus.CONFIRMED, chauffeur_id="chf-1"),
        )

        result = await UnassignChauffeurHandler(uow_factory).handle(
            UnassignChauffeur(
                booking_id=booking.id,
                fleet_owner_id="owner-1",
                unassigned_by="ops-1",
                reason="Sick",
            )
        )

        assert isinstance(result, Success)
        assert (await load_booking(uow_factory, booking.id)).chauffeur_id is None
        (event,) = published_events(event_bus)
        assert event.reason == "Sick"

    @pytest.mark.asyncio
    async def test_unassign_from_active_is_conflict(self, clock, uow_factory):
        booking = await store_booking(
            uow_factory,
            create_booking(clock, status=BookingStatus.ACTIVE, chauffeur_id="chf-1"),
        )

        result = await UnassignChauffeurHandler(uow_factory).handle(
            UnassignChauffeur(booking_id=booking.id, fleet_owner_id="owner-1", unassigned_by="ops")
        )

        assert result.error.code == ApplicationErrorCode.CONFLICT
        assert (await load_booking(uow_factory, booking.id)).chauffeur_id == "chf-1"

    @pytest.mark.asyncio
    async def test_unassign_without_chauffeur(self, clock, uow_factory):
        booking = await store_booking(
            uow_factory, create_booking(clock, status=BookingStatus.CONFIRMED)
        )

        result = await UnassignChauffeurHandler(uow_factory).handle(
            UnassignChauffeur(booking_id=booking.id, fleet_owner_id="owner-1", unassigned_by="ops")
        )

        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert result.error.message == "No chauffeur assigned to this booking"
