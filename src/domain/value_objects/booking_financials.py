"""Financial snapshot captured on a booking at creation time.

All amounts are Decimal and non-negative. They are stored at full precision
and rounded to the currency's minor unit only when surfaced.
"""

from dataclasses import dataclass, fields
from decimal import Decimal

from src.domain.errors import InvalidAmountError
from src.domain.value_objects.money import round_to_minor_unit, to_decimal, validate_currency

_AMOUNT_FIELDS = (
    "total_amount",
    "net_total",
    "security_detail_cost",
    "platform_service_fee_amount",
    "vat_amount",
    "fleet_owner_payout_amount_net",
)


@dataclass(frozen=True, kw_only=True)
class BookingFinancials:
    """Priced amounts of one booking.

    Attributes:
        total_amount: Gross amount the customer pays.
        net_total: Sum of leg prices.
        security_detail_cost: Security coverage cost (zero when not requested).
        platform_service_fee_amount: Customer-facing platform fee.
        vat_amount: VAT on the subtotal.
        fleet_owner_payout_amount_net: Owed to the fleet owner after commission.
        currency: Currency all amounts are in.

    Raises:
        InvalidAmountError: If an amount is non-numeric, non-finite or negative.
    """

    total_amount: Decimal
    net_total: Decimal
    security_detail_cost: Decimal = Decimal("0")
    platform_service_fee_amount: Decimal = Decimal("0")
    vat_amount: Decimal = Decimal("0")
    fleet_owner_payout_amount_net: Decimal = Decimal("0")
    currency: str = "NGN"

    def __post_init__(self) -> None:
        for name in _AMOUNT_FIELDS:
            amount = to_decimal(getattr(self, name), name)
            if amount < 0:
                raise InvalidAmountError(
                    f"{name} cannot be negative", details={"field": name}
                )
            object.__setattr__(self, name, amount)
        object.__setattr__(self, "currency", validate_currency(self.currency))

    def rounded(self, name: str) -> Decimal:
        """One amount rounded to the minor unit.

        Args:
            name: One of the amount field names.
        """
        if name not in _AMOUNT_FIELDS:
            raise KeyError(name)
        return round_to_minor_unit(getattr(self, name), self.currency)

    def as_display_amounts(self) -> dict[str, Decimal]:
        """All amounts rounded to the minor unit, keyed by field name."""
        return {name: self.rounded(name) for name in _AMOUNT_FIELDS}

    @classmethod
    def amount_field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.name in _AMOUNT_FIELDS)
