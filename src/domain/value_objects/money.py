"""Decimal money helpers and the Money value object.

Booking financials, leg prices and payout amounts are always Decimal; binary
floats never enter the arithmetic. Amounts keep full precision while being
computed and are rounded half-up to the currency's minor unit only when
surfaced (getters, gateway calls, persistence display fields).

Error Handling:
    Non-numeric, NaN or infinite inputs raise InvalidAmountError (a
    ValueError subclass). Arithmetic between different currencies raises
    CurrencyMismatchError, following Python's convention for incompatible
    operands.

Usage:
    from src.domain.value_objects.money import Money, to_decimal

    net = to_decimal("1000")
    payout = Money(net * Decimal("0.8"), "NGN").rounded()  # Money(800.00, NGN)
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Self

from src.domain.errors import InvalidAmountError

# Minor-unit exponent per currency; anything not listed uses two decimals.
_ZERO_DECIMAL_CURRENCIES: frozenset[str] = frozenset({"JPY", "KRW", "XOF", "XAF"})

HUNDRED = Decimal("100")


class CurrencyMismatchError(ValueError):
    """Raised when attempting operations on different currencies."""

    def __init__(self, currency1: str, currency2: str) -> None:
        super().__init__(
            f"Cannot perform operation between {currency1} and {currency2}"
        )
        self.currency1 = currency1
        self.currency2 = currency2


def validate_currency(code: str) -> str:
    """Normalize a three-letter currency code.

    Raises:
        ValueError: If the code is empty or not three letters.
    """
    if not code or not isinstance(code, str):
        raise ValueError("Currency code cannot be empty")
    normalized = code.strip().upper()
    if len(normalized) != 3 or not normalized.isalpha():
        raise ValueError(f"Currency code must be 3 letters: {code}")
    return normalized


def to_decimal(value: Decimal | int | float | str, field: str = "amount") -> Decimal:
    """Convert a numeric input to a finite Decimal.

    Floats are converted through str() so 0.1 stays 0.1.

    Args:
        value: Number or numeric string.
        field: Field name used in the error message.

    Returns:
        Decimal: Finite decimal value.

    Raises:
        InvalidAmountError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"{field} must be a number", details={"field": field})
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmountError(
            f"{field} must be a valid number", details={"field": field}
        ) from e
    if not amount.is_finite():
        raise InvalidAmountError(
            f"{field} cannot be NaN or Infinite", details={"field": field}
        )
    return amount


def minor_unit_exponent(currency: str) -> Decimal:
    """Quantization exponent for the currency (Decimal("0.01") for NGN)."""
    return Decimal("1") if currency.upper() in _ZERO_DECIMAL_CURRENCIES else Decimal("0.01")


def round_to_minor_unit(amount: Decimal, currency: str) -> Decimal:
    """Round half-up to the currency's minor unit.

    Example:
        >>> round_to_minor_unit(Decimal("10.005"), "NGN")
        Decimal('10.01')
    """
    return amount.quantize(minor_unit_exponent(currency), rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, rate_percent: Decimal) -> Decimal:
    """amount * rate / 100, unrounded."""
    return amount * rate_percent / HUNDRED


@dataclass(frozen=True)
class Money:
    """Immutable monetary value with currency.

    Attributes:
        amount: Decimal value (any sign, full precision).
        currency: Three-letter currency code.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "currency", validate_currency(self.currency))

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def rounded(self) -> "Money":
        """Copy rounded half-up to the minor unit."""
        return Money(round_to_minor_unit(self.amount, self.currency), self.currency)

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_zero(self) -> bool:
        return self.amount == 0

    @classmethod
    def zero(cls, currency: str) -> Self:
        return cls(Decimal("0"), currency)

    def _check_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __str__(self) -> str:
        return f"{self.rounded().amount} {self.currency}"
