"""Platform fee rates applied when pricing a booking."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.errors import InvalidInputError
from src.domain.value_objects.money import to_decimal


@dataclass(frozen=True, kw_only=True)
class PlatformFeeRates:
    """Percent rates in [0, 100].

    Attributes:
        platform_service_fee_rate: Charged to the customer on net + security.
        fleet_owner_commission_rate: Withheld from the fleet owner's net.
        vat_rate: Charged on the subtotal before VAT.
    """

    platform_service_fee_rate: Decimal
    fleet_owner_commission_rate: Decimal
    vat_rate: Decimal

    def __post_init__(self) -> None:
        for name in (
            "platform_service_fee_rate",
            "fleet_owner_commission_rate",
            "vat_rate",
        ):
            rate = to_decimal(getattr(self, name), name)
            if not Decimal("0") <= rate <= Decimal("100"):
                raise InvalidInputError(
                    f"{name} must be between 0 and 100", details={"field": name}
                )
            object.__setattr__(self, name, rate)
