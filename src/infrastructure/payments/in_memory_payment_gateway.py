"""In-memory payment gateway adapter.

Implements PaymentGatewayProtocol without network access. Used in tests and
local runs; the HTTP client for the real gateway plugs into the same port.

Behavior:
    - Transfers are idempotent by reference: repeating a reference returns
      the provider reference of the first accepted transfer
    - fail_next(message) makes the next transfer fail with that message
    - Amounts must be positive and in the account currency the gateway
      supports

Returns Result types (no exceptions for gateway-side rejections).
"""

from dataclasses import dataclass

from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.bank_account import BankAccount
from src.domain.value_objects.money import Money


@dataclass(frozen=True, kw_only=True)
class TransferRecord:
    """Accepted transfer, as the gateway would report it."""

    reference: str
    provider_reference: str
    amount: Money
    bank_code: str
    account_number: str
    narration: str


class InMemoryPaymentGateway:
    """Payment gateway that accepts transfers in process.

    Args:
        logger: Logger for transfer outcomes.
        supported_currencies: Currencies transfers may be made in.
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        *,
        supported_currencies: frozenset[str] = frozenset({"NGN"}),
    ) -> None:
        self._logger = logger
        self._supported_currencies = supported_currencies
        self._transfers: dict[str, TransferRecord] = {}
        self._pending_failures: list[str] = []

    @property
    def transfers(self) -> list[TransferRecord]:
        return list(self._transfers.values())

    def fail_next(self, message: str = "Gateway unavailable") -> None:
        """Queue a failure for the next transfer attempt."""
        self._pending_failures.append(message)

    async def initiate_payout(
        self,
        *,
        bank_account: BankAccount,
        amount: Money,
        reference: str,
        narration: str,
    ) -> Result[str, str]:
        existing = self._transfers.get(reference)
        if existing is not None:
            return Success(value=existing.provider_reference)

        if self._pending_failures:
            message = self._pending_failures.pop(0)
            self._logger.warning(
                "payment_gateway_transfer_rejected",
                reference=reference,
                account=bank_account.masked_account_number,
                reason=message,
            )
            return Failure(error=message)

        if not amount.is_positive():
            return Failure(error="Transfer amount must be positive")
        if amount.currency not in self._supported_currencies:
            return Failure(error=f"Unsupported currency: {amount.currency}")

        provider_reference = f"TRF_{uuid7().hex}"
        self._transfers[reference] = TransferRecord(
            reference=reference,
            provider_reference=provider_reference,
            amount=amount.rounded(),
            bank_code=bank_account.bank_code,
            account_number=bank_account.account_number,
            narration=narration,
        )
        self._logger.info(
            "payment_gateway_transfer_accepted",
            reference=reference,
            provider_reference=provider_reference,
            amount=str(amount),
            account=bank_account.masked_account_number,
        )
        return Success(value=provider_reference)
