"""PaymentGatewayProtocol: outbound bank transfers.

The HTTP client for the real gateway lives outside the booking core. The
payout workflow only needs a transfer call whose outcome is a Result:
Success(provider_reference) when the gateway accepted the transfer,
Failure(message) otherwise. Implementations own timeouts and retries of the
HTTP call itself and must not raise for gateway-side rejections.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.value_objects.bank_account import BankAccount
from src.domain.value_objects.money import Money


class PaymentGatewayProtocol(Protocol):
    """Protocol for payout-capable payment gateways."""

    async def initiate_payout(
        self,
        *,
        bank_account: BankAccount,
        amount: Money,
        reference: str,
        narration: str,
    ) -> Result[str, str]:
        """Request a transfer to a verified bank account.

        Args:
            bank_account: Verified destination.
            amount: Amount, already rounded to the minor unit.
            reference: Idempotency key (from PayoutPolicy).
            narration: Statement text ("Payout for booking BK-...").

        Returns:
            Success(provider_reference) or Failure(error message).
        """
        ...
