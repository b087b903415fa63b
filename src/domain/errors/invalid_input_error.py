"""Invalid input errors.

Raised for rejected arguments: empty chauffeur ids, empty failure reasons,
non-positive amounts, unverified bank accounts, malformed pickup times.
Subclasses ValueError so plain `except ValueError` callers still catch it.
"""

from datetime import date

from src.core.enums import ErrorCode
from src.core.errors import DomainException


class InvalidInputError(DomainException, ValueError):
    """An argument failed a domain rule."""

    code = ErrorCode.INVALID_INPUT


class InvalidAmountError(InvalidInputError):
    """Monetary amount is missing, non-finite, negative or zero where forbidden."""

    code = ErrorCode.INVALID_AMOUNT


class BankAccountNotVerifiedError(InvalidInputError):
    """Bank account has not been verified for disbursement."""

    code = ErrorCode.BANK_ACCOUNT_NOT_VERIFIED

    def __init__(self) -> None:
        super().__init__("Bank account must be verified before use")


class LegOutsideBookingPeriodError(InvalidInputError):
    """A leg's date does not fall inside the booking period."""

    code = ErrorCode.LEG_OUTSIDE_BOOKING_PERIOD

    def __init__(self, leg_date: date, first_day: date, last_day: date) -> None:
        super().__init__(
            f"Leg date {leg_date.isoformat()} is outside the booking period "
            f"({first_day.isoformat()} to {last_day.isoformat()})",
            details={
                "leg_date": leg_date.isoformat(),
                "period_start": first_day.isoformat(),
                "period_end": last_day.isoformat(),
            },
        )
        self.leg_date = leg_date
