"""Rates a car is priced at.

Supplied by the fleet catalogue at booking time (the catalogue itself is
outside the booking core). Negative rates are rejected.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.errors import InvalidAmountError
from src.domain.value_objects.money import to_decimal


@dataclass(frozen=True, kw_only=True)
class CarRates:
    """Per-leg and hourly prices.

    Attributes:
        day_rate: Price of a full DAY leg (also the cap for hourly pricing).
        night_rate: Price of a NIGHT leg.
        full_day_rate: Price of one 24h FULL_DAY block.
        hourly_rate: Optional hourly price for DAY legs; zero disables it.
    """

    day_rate: Decimal
    night_rate: Decimal
    full_day_rate: Decimal
    hourly_rate: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        for name in ("day_rate", "night_rate", "full_day_rate", "hourly_rate"):
            rate = to_decimal(getattr(self, name), name)
            if rate < 0:
                raise InvalidAmountError(
                    f"{name} cannot be negative", details={"field": name}
                )
            object.__setattr__(self, name, rate)
