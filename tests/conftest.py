"""Shared fixtures and helpers for the booking core tests.

Provides:
1. A FixedClock pinned to NOW so every time predicate is deterministic
2. Mocked logger and event bus (protocol-specced)
3. A fresh InMemoryDatabase and unit of work factory per test
4. create_* helpers for periods, bookings, bank accounts and payouts

Helpers are plain functions so test modules can import them:
    from tests.conftest import NOW, create_booking
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, Mock
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.core.clock import FixedClock
from src.domain.entities.booking import Booking
from src.domain.entities.booking_leg import BookingLeg
from src.domain.entities.payout import Payout
from src.domain.enums import BookingStatus, BookingType, PaymentStatus
from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.services.booking_schedule import BookingSchedule
from src.domain.value_objects.bank_account import BankAccount
from src.domain.value_objects.booking_financials import BookingFinancials
from src.domain.value_objects.booking_period import BookingPeriod
from src.domain.value_objects.car_rates import CarRates
from src.infrastructure.persistence.database import InMemoryDatabase
from src.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork

# Saturday morning; the default DAY booking starts two days later at 09:00.
NOW = datetime(2025, 3, 1, 8, 0, tzinfo=UTC)
DAY_START = datetime(2025, 3, 3, 9, 0, tzinfo=UTC)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def logger() -> Mock:
    return Mock(spec=LoggerProtocol)


@pytest.fixture
def event_bus() -> AsyncMock:
    return AsyncMock(spec=EventBusProtocol)


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def uow_factory(
    database: InMemoryDatabase, event_bus: AsyncMock, logger: Mock, clock: FixedClock
) -> Callable[[], InMemoryUnitOfWork]:
    """Unit of work factory bound to the per-test database and clock."""

    def factory() -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(database, event_bus, logger, clock=clock)

    return factory


# =============================================================================
# Test helpers
# =============================================================================


def published_events(event_bus: AsyncMock) -> list[DomainEvent]:
    """Events awaited on a mocked event bus, in publish order."""
    return [call.args[0] for call in event_bus.publish.await_args_list]


def create_day_period(start: datetime = DAY_START, days: int = 1) -> BookingPeriod:
    """DAY period of `days` consecutive 12h windows starting at `start`."""
    return BookingPeriod(
        booking_type=BookingType.DAY,
        start=start,
        end=start + timedelta(hours=12 + 24 * (days - 1)),
    )


def create_full_day_period(start: datetime = DAY_START, blocks: int = 1) -> BookingPeriod:
    return BookingPeriod(
        booking_type=BookingType.FULL_DAY,
        start=start,
        end=start + timedelta(hours=24 * blocks),
    )


def create_car_rates(
    day_rate: str = "50000",
    night_rate: str = "40000",
    full_day_rate: str = "90000",
    hourly_rate: str = "0",
) -> CarRates:
    return CarRates(
        day_rate=Decimal(day_rate),
        night_rate=Decimal(night_rate),
        full_day_rate=Decimal(full_day_rate),
        hourly_rate=Decimal(hourly_rate),
    )


def create_financials(
    total_amount: str = "100000",
    net_total: str = "80000",
    fleet_owner_payout_amount_net: str = "64000",
) -> BookingFinancials:
    return BookingFinancials(
        total_amount=Decimal(total_amount),
        net_total=Decimal(net_total),
        fleet_owner_payout_amount_net=Decimal(fleet_owner_payout_amount_net),
    )


def create_booking(
    clock: FixedClock,
    *,
    period: BookingPeriod | None = None,
    status: BookingStatus = BookingStatus.PENDING,
    payment_status: PaymentStatus = PaymentStatus.UNPAID,
    chauffeur_id: str | None = None,
    with_legs: bool = True,
) -> Booking:
    """Unpersisted booking in the requested state, with one leg per window.

    Args:
        clock: Clock shared by the booking and its legs.
        period: Defaults to a single DAY starting at DAY_START.
        status: Status to place the booking in (set directly, no events).
        payment_status: Payment status to place the booking in.
        chauffeur_id: Chauffeur to place on the booking.
        with_legs: Whether to attach legs from the booking schedule.

    Returns:
        Booking with an empty event buffer.
    """
    period = period or create_day_period()
    booking = Booking.create(
        customer_id="cust-1",
        car_id="car-1",
        period=period,
        pickup_address="12 Admiralty Way, Lekki",
        drop_off_address="Murtala Muhammed Airport",
        financials=create_financials(),
        clock=clock,
    )
    if with_legs:
        for window in BookingSchedule.leg_windows(period):
            booking.add_leg(
                BookingLeg.create(
                    leg_date=window.leg_date,
                    leg_start_time=window.start,
                    leg_end_time=window.end,
                    total_daily_price=Decimal("50000"),
                    fleet_owner_earning_for_leg=Decimal("40000"),
                    clock=clock,
                )
            )
    booking.status = status
    booking.payment_status = payment_status
    booking.chauffeur_id = chauffeur_id
    booking.clear_events()
    return booking


def create_bank_account(is_verified: bool = True) -> BankAccount:
    return BankAccount(
        bank_code="058",
        account_number="0123456789",
        bank_name="Guaranty Trust Bank",
        account_name="Ada Fleet Ltd",
        is_verified=is_verified,
    )


def create_payout(
    clock: FixedClock,
    *,
    amount: str = "64000",
    booking_id: UUID | None = None,
    extension_id: str | None = None,
) -> Payout:
    """PENDING_DISBURSEMENT payout with an empty event buffer.

    A booking id is generated unless an extension id is given.
    """
    if booking_id is None and extension_id is None:
        booking_id = uuid7()
    payout = Payout.create(
        fleet_owner_id="owner-1",
        amount=Decimal(amount),
        bank_account=create_bank_account(),
        booking_id=booking_id,
        extension_id=extension_id,
        clock=clock,
    )
    payout.clear_events()
    return payout


async def store_booking(
    uow_factory: Callable[[], InMemoryUnitOfWork], booking: Booking
) -> Booking:
    """Add the booking through a committed unit of work (assigns ids)."""
    async with uow_factory() as uow:
        await uow.bookings.add(booking)
    return booking


async def load_booking(
    uow_factory: Callable[[], InMemoryUnitOfWork], booking_id: UUID | None
) -> Booking:
    assert booking_id is not None
    async with uow_factory() as uow:
        booking = await uow.bookings.find_by_id(booking_id)
    assert booking is not None
    return booking


async def store_payout(
    uow_factory: Callable[[], InMemoryUnitOfWork], payout: Payout
) -> Payout:
    async with uow_factory() as uow:
        await uow.payouts.save(payout)
    return payout


async def load_payout(
    uow_factory: Callable[[], InMemoryUnitOfWork], payout_id: UUID
) -> Payout:
    async with uow_factory() as uow:
        payout = await uow.payouts.find_by_id(payout_id)
    assert payout is not None
    return payout
