"""Domain service factories.

Stateless domain services configured from settings: period validation in
the service timezone, pricing with the platform fee rates, payout rules.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.container.infrastructure import get_clock

if TYPE_CHECKING:
    from src.domain.services.booking_cost_calculator import BookingCostCalculator
    from src.domain.services.booking_period_factory import BookingPeriodFactory
    from src.domain.services.payout_policy import PayoutPolicy


@lru_cache()
def get_period_factory() -> "BookingPeriodFactory":
    """Period factory reading DAY/NIGHT wall-clock times in the service timezone."""
    from src.domain.services.booking_period_factory import BookingPeriodFactory

    return BookingPeriodFactory(clock=get_clock(), tz=get_settings().timezone)


@lru_cache()
def get_cost_calculator() -> "BookingCostCalculator":
    """Cost calculator with the configured fee, commission and VAT rates."""
    from src.domain.services.booking_cost_calculator import BookingCostCalculator
    from src.domain.value_objects.platform_fee_rates import PlatformFeeRates

    settings = get_settings()
    return BookingCostCalculator(
        PlatformFeeRates(
            platform_service_fee_rate=settings.platform_service_fee_rate,
            fleet_owner_commission_rate=settings.fleet_owner_commission_rate,
            vat_rate=settings.vat_rate,
        ),
        security_detail_cost=settings.security_detail_cost,
        currency=settings.system_currency,
    )


@lru_cache()
def get_payout_policy() -> "PayoutPolicy":
    from src.domain.services.payout_policy import PayoutPolicy

    return PayoutPolicy(clock=get_clock())
