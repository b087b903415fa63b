"""Booking cost calculation.

Prices every leg from the car's rates, then layers security detail, the
platform service fee and VAT on top. The fleet owner's payout is the net leg
total minus the platform commission.

Formula:
    net        = sum(leg prices)
    security   = security_detail_cost * multiplier * legs   (if requested)
    fee        = (net + security) * service_fee% / 100
    subtotal   = net + security + fee
    vat        = subtotal * vat% / 100
    total      = subtotal + vat
    commission = net * commission% / 100
    payout     = net - commission

Leg prices:
    NIGHT:    night_rate
    FULL_DAY: full_day_rate (per 24h block)
    DAY:      hourly_rate * hours, capped at day_rate; day_rate when the car
              has no hourly rate

Amounts stay at full Decimal precision; rounding happens when surfaced.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.core.clock import SYSTEM_CLOCK
from src.domain.entities.booking_leg import BookingLeg
from src.domain.enums import BookingType
from src.domain.errors import InvalidInputError
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.services.booking_schedule import BookingSchedule, LegWindow
from src.domain.value_objects.booking_financials import BookingFinancials
from src.domain.value_objects.booking_period import BookingPeriod
from src.domain.value_objects.car_rates import CarRates
from src.domain.value_objects.money import percent_of, to_decimal
from src.domain.value_objects.platform_fee_rates import PlatformFeeRates

_MINIMUM_CHARGEABLE_HOURS = Decimal("1")
_SECONDS_PER_HOUR = Decimal("3600")


@dataclass(frozen=True, kw_only=True)
class BookingCostBreakdown:
    """Result of pricing one booking.

    Attributes:
        leg_windows: Priced windows, in order.
        leg_prices: Price per window, same order.
        leg_fleet_owner_earnings: Fleet owner's share per window.
        net_total: Sum of leg prices.
        security_detail_cost: Security coverage cost.
        platform_service_fee_amount: Customer-facing platform fee.
        subtotal_before_vat: net + security + fee.
        vat_amount: VAT on the subtotal.
        total_amount: Gross amount the customer pays.
        fleet_owner_commission_amount: Commission withheld from the net.
        fleet_owner_payout_amount_net: Owed to the fleet owner.
        currency: Currency of every amount.
    """

    leg_windows: tuple[LegWindow, ...]
    leg_prices: tuple[Decimal, ...]
    leg_fleet_owner_earnings: tuple[Decimal, ...]
    net_total: Decimal
    security_detail_cost: Decimal
    platform_service_fee_amount: Decimal
    subtotal_before_vat: Decimal
    vat_amount: Decimal
    total_amount: Decimal
    fleet_owner_commission_amount: Decimal
    fleet_owner_payout_amount_net: Decimal
    currency: str

    def to_financials(self) -> BookingFinancials:
        return BookingFinancials(
            total_amount=self.total_amount,
            net_total=self.net_total,
            security_detail_cost=self.security_detail_cost,
            platform_service_fee_amount=self.platform_service_fee_amount,
            vat_amount=self.vat_amount,
            fleet_owner_payout_amount_net=self.fleet_owner_payout_amount_net,
            currency=self.currency,
        )

    def build_legs(self, clock: ClockProtocol = SYSTEM_CLOCK) -> list[BookingLeg]:
        """Unpersisted legs carrying the priced amounts."""
        return [
            BookingLeg.create(
                leg_date=window.leg_date,
                leg_start_time=window.start,
                leg_end_time=window.end,
                total_daily_price=price,
                fleet_owner_earning_for_leg=earning,
                clock=clock,
            )
            for window, price, earning in zip(
                self.leg_windows, self.leg_prices, self.leg_fleet_owner_earnings, strict=True
            )
        ]


class BookingCostCalculator:
    """Prices bookings with fixed fee rates.

    Args:
        fee_rates: Platform service fee, commission and VAT percents.
        security_detail_cost: Security cost per leg before the multiplier.
        currency: Currency every amount is expressed in.
    """

    def __init__(
        self,
        fee_rates: PlatformFeeRates,
        security_detail_cost: Decimal | int | str,
        currency: str = "NGN",
    ) -> None:
        self._fee_rates = fee_rates
        self._security_detail_cost = to_decimal(security_detail_cost, "security_detail_cost")
        self._currency = currency

    def calculate(
        self,
        period: BookingPeriod,
        car_rates: CarRates,
        *,
        include_security_detail: bool = False,
        leg_windows: list[LegWindow] | None = None,
    ) -> BookingCostBreakdown:
        """Price a booking.

        Args:
            period: Validated period.
            car_rates: Rates of the booked car.
            include_security_detail: Whether security coverage is booked.
            leg_windows: Windows to price; derived from the period when omitted.

        Raises:
            InvalidInputError: If there is nothing to price.
        """
        windows = tuple(leg_windows if leg_windows is not None else BookingSchedule.leg_windows(period))
        if not windows:
            raise InvalidInputError("A booking needs at least one leg to be priced")

        commission_rate = self._fee_rates.fleet_owner_commission_rate
        prices = tuple(self.leg_price(period.booking_type, car_rates, w) for w in windows)
        earnings = tuple(price - percent_of(price, commission_rate) for price in prices)

        net_total = sum(prices, Decimal("0"))
        security = (
            self._security_detail_cost * period.security_detail_multiplier * len(windows)
            if include_security_detail
            else Decimal("0")
        )
        fee = percent_of(net_total + security, self._fee_rates.platform_service_fee_rate)
        subtotal = net_total + security + fee
        vat = percent_of(subtotal, self._fee_rates.vat_rate)
        commission = percent_of(net_total, commission_rate)

        return BookingCostBreakdown(
            leg_windows=windows,
            leg_prices=prices,
            leg_fleet_owner_earnings=earnings,
            net_total=net_total,
            security_detail_cost=security,
            platform_service_fee_amount=fee,
            subtotal_before_vat=subtotal,
            vat_amount=vat,
            total_amount=subtotal + vat,
            fleet_owner_commission_amount=commission,
            fleet_owner_payout_amount_net=net_total - commission,
            currency=self._currency,
        )

    @staticmethod
    def leg_price(booking_type: BookingType, car_rates: CarRates, window: LegWindow) -> Decimal:
        match booking_type:
            case BookingType.NIGHT:
                return car_rates.night_rate
            case BookingType.FULL_DAY:
                return car_rates.full_day_rate
            case BookingType.DAY:
                if car_rates.hourly_rate <= 0:
                    return car_rates.day_rate
                hours = Decimal(int(window.duration.total_seconds())) / _SECONDS_PER_HOUR
                hourly_cost = max(hours, _MINIMUM_CHARGEABLE_HOURS) * car_rates.hourly_rate
                return min(hourly_cost, car_rates.day_rate)
