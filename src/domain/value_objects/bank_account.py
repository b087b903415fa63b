"""Bank account value object for payout disbursement.

Verification itself happens outside the booking core (account-name lookup
against the bank); this object only carries the flag and enforces it.
"""

from dataclasses import dataclass, replace

from src.core.enums import ErrorCode
from src.domain.errors import BankAccountNotVerifiedError, InvalidInputError


class InvalidBankAccountError(InvalidInputError):
    code = ErrorCode.INVALID_BANK_ACCOUNT


@dataclass(frozen=True, kw_only=True)
class BankAccount:
    """Fleet owner's destination account.

    Attributes:
        bank_code: Three-character bank code (NIP/CBN style).
        account_number: Exactly 10 digits (NUBAN).
        bank_name: Display name of the bank.
        account_name: Account holder name as returned by verification.
        is_verified: Whether the account holder was verified.

    Raises:
        InvalidBankAccountError: If any field is malformed.
    """

    bank_code: str
    account_number: str
    bank_name: str
    account_name: str
    is_verified: bool = False

    def __post_init__(self) -> None:
        if not self.bank_code or len(self.bank_code.strip()) != 3:
            raise InvalidBankAccountError(
                "Bank code must be 3 characters", details={"field": "bank_code"}
            )
        if not (len(self.account_number) == 10 and self.account_number.isdigit()):
            raise InvalidBankAccountError(
                "Account number must be exactly 10 digits",
                details={"field": "account_number"},
            )
        if not self.bank_name.strip():
            raise InvalidBankAccountError(
                "Bank name is required", details={"field": "bank_name"}
            )
        if not self.account_name.strip():
            raise InvalidBankAccountError(
                "Account name is required", details={"field": "account_name"}
            )
        object.__setattr__(self, "bank_code", self.bank_code.strip())

    def must_be_verified(self) -> None:
        """Raise unless the account is verified.

        Raises:
            BankAccountNotVerifiedError: If is_verified is False.
        """
        if not self.is_verified:
            raise BankAccountNotVerifiedError()

    def verify(self) -> "BankAccount":
        """Verified copy of this account."""
        return replace(self, is_verified=True)

    @property
    def masked_account_number(self) -> str:
        """Account number with all but the last four digits hidden (for logs)."""
        return f"******{self.account_number[-4:]}"
