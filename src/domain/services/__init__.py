"""Domain services: stateless rules spanning several domain objects.

Usage:
    from src.domain.services import BookingPeriodFactory, PayoutPolicy
"""

from src.domain.services.booking_cost_calculator import (
    BookingCostBreakdown,
    BookingCostCalculator,
)
from src.domain.services.booking_period_factory import (
    BookingPeriodFactory,
    BookingPeriodRequest,
)
from src.domain.services.booking_schedule import BookingSchedule, LegWindow
from src.domain.services.payout_policy import PayoutEligibility, PayoutPolicy

__all__ = [
    "BookingCostBreakdown",
    "BookingCostCalculator",
    "BookingPeriodFactory",
    "BookingPeriodRequest",
    "BookingSchedule",
    "LegWindow",
    "PayoutEligibility",
    "PayoutPolicy",
]
