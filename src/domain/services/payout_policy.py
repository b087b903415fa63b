"""Payout policy.

Pure rules deciding whether a payout may start, how much the fleet owner
receives, and how the gateway idempotency reference is built. Never raises
for ineligibility: callers inspect PayoutEligibility.reason instead.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.core.clock import SYSTEM_CLOCK
from src.core.constants import PAYOUT_REFERENCE_PREFIX
from src.core.references import random_token, timestamp_token
from src.domain.entities.payout import Payout
from src.domain.errors import InvalidAmountError, InvalidInputError
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.value_objects.bank_account import BankAccount
from src.domain.value_objects.money import HUNDRED, percent_of, to_decimal

AMOUNT_ZERO_REASON = "Payout amount cannot be zero"
AMOUNT_NOT_POSITIVE_REASON = "Payout amount must be positive"
BANK_ACCOUNT_UNVERIFIED_REASON = "Bank account must be verified"
PAYOUT_IN_PROGRESS_REASON = "Payout already in progress for this booking or extension"


@dataclass(frozen=True)
class PayoutEligibility:
    """Outcome of an eligibility check.

    Attributes:
        is_eligible: Whether the payout may be created.
        reason: First violated rule when not eligible.
    """

    is_eligible: bool
    reason: str | None = None

    @classmethod
    def eligible(cls) -> "PayoutEligibility":
        return cls(is_eligible=True)

    @classmethod
    def ineligible(cls, reason: str) -> "PayoutEligibility":
        return cls(is_eligible=False, reason=reason)


class PayoutPolicy:
    """Eligibility, amount and reference rules for payouts.

    Args:
        clock: Source of the timestamp embedded in references.
    """

    def __init__(self, clock: ClockProtocol = SYSTEM_CLOCK) -> None:
        self._clock = clock

    def can_initiate_payout(
        self,
        amount: Decimal | int | str,
        bank_account: BankAccount,
        existing_payouts: Iterable[Payout],
    ) -> PayoutEligibility:
        """Check the rules in order and report the first one violated.

        Args:
            amount: Amount to disburse.
            bank_account: Destination account.
            existing_payouts: Payouts already recorded for the same booking or
                extension.

        Raises:
            InvalidAmountError: If amount is not a finite number.
        """
        value = to_decimal(amount, "amount")
        if value == 0:
            return PayoutEligibility.ineligible(AMOUNT_ZERO_REASON)
        if value < 0:
            return PayoutEligibility.ineligible(AMOUNT_NOT_POSITIVE_REASON)
        if not bank_account.is_verified:
            return PayoutEligibility.ineligible(BANK_ACCOUNT_UNVERIFIED_REASON)
        if any(payout.is_in_progress() for payout in existing_payouts):
            return PayoutEligibility.ineligible(PAYOUT_IN_PROGRESS_REASON)
        return PayoutEligibility.eligible()

    @staticmethod
    def calculate_payout_amount(
        gross_amount: Decimal | int | str, commission_rate: Decimal | int | str
    ) -> Decimal:
        """gross - gross * rate / 100, unrounded.

        Raises:
            InvalidAmountError: If gross is negative or not a number.
            InvalidInputError: If the rate is outside [0, 100].
        """
        gross = to_decimal(gross_amount, "gross_amount")
        rate = to_decimal(commission_rate, "commission_rate")
        if gross < 0:
            raise InvalidAmountError("Gross amount cannot be negative")
        if not Decimal("0") <= rate <= HUNDRED:
            raise InvalidInputError("Commission rate must be between 0 and 100")
        return gross - percent_of(gross, rate)

    def generate_payout_reference(
        self, booking_id: UUID | str | None = None, extension_id: str | None = None
    ) -> str:
        """Gateway idempotency reference.

        Booking ids win over extension ids when both are given.

        Example:
            >>> policy.generate_payout_reference(booking_id="b1")
            'payout_booking_b1_lq3k2j1a_x7q2zd'
        """
        stamp = f"{timestamp_token(self._clock.now())}_{random_token()}"
        if booking_id:
            return f"{PAYOUT_REFERENCE_PREFIX}_booking_{booking_id}_{stamp}"
        if extension_id:
            return f"{PAYOUT_REFERENCE_PREFIX}_extension_{extension_id}_{stamp}"
        return f"{PAYOUT_REFERENCE_PREFIX}_{stamp}"
