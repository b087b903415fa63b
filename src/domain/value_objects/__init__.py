"""Domain value objects with validation.

Immutable value objects that enforce business constraints. BookingPeriod is
imported from its own module (it depends on the clock port).
"""

from src.domain.value_objects.bank_account import BankAccount
from src.domain.value_objects.booking_financials import BookingFinancials
from src.domain.value_objects.car_rates import CarRates
from src.domain.value_objects.chauffeur_assignment_policy import (
    DEFAULT_ASSIGNMENT_POLICY,
    ChauffeurAssignmentPolicy,
)
from src.domain.value_objects.money import (
    CurrencyMismatchError,
    Money,
    round_to_minor_unit,
    to_decimal,
    validate_currency,
)
from src.domain.value_objects.pickup_time import PickupTime
from src.domain.value_objects.platform_fee_rates import PlatformFeeRates

__all__ = [
    "BankAccount",
    "BookingFinancials",
    "CarRates",
    "ChauffeurAssignmentPolicy",
    "CurrencyMismatchError",
    "DEFAULT_ASSIGNMENT_POLICY",
    "Money",
    "PickupTime",
    "PlatformFeeRates",
    "round_to_minor_unit",
    "to_decimal",
    "validate_currency",
]
