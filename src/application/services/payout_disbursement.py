"""Gateway transfer step shared by the payout handlers.

InitiatePayout, ProcessPendingPayouts and RetryPayout all end the same way:
build a fresh idempotency reference, ask the gateway for a transfer and log
a rejection. Moving the payout to PROCESSING stays with the caller, inside
its own unit of work.
"""

from src.core.result import Failure, Result
from src.domain.entities.payout import Payout
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.payment_gateway_protocol import PaymentGatewayProtocol
from src.domain.services.payout_policy import PayoutPolicy


class PayoutDisbursement:
    """Requests gateway transfers for persisted payouts.

    Dependencies (injected via constructor):
        - PaymentGatewayProtocol: Outbound transfers
        - PayoutPolicy: Reference generation
        - LoggerProtocol: Gateway rejections
    """

    def __init__(
        self,
        gateway: PaymentGatewayProtocol,
        policy: PayoutPolicy,
        logger: LoggerProtocol,
    ) -> None:
        self._gateway = gateway
        self._policy = policy
        self._logger = logger

    async def transfer(self, payout: Payout) -> Result[str, str]:
        """Ask the gateway to transfer the payout amount.

        Returns:
            Success(provider_reference) or Failure(gateway message).
        """
        reference = self._policy.generate_payout_reference(
            booking_id=payout.booking_id, extension_id=payout.extension_id
        )
        result = await self._gateway.initiate_payout(
            bank_account=payout.bank_account,
            amount=payout.money.rounded(),
            reference=reference,
            narration=narration_for(payout),
        )
        if isinstance(result, Failure):
            self._logger.warning(
                "payout_gateway_failed",
                payout_id=str(payout.id),
                reference=reference,
                reason=result.error,
            )
        return result


def narration_for(payout: Payout) -> str:
    """Statement text: "Payout for booking <id>" or "Payout for extension <id>"."""
    if payout.booking_id is not None:
        return f"Payout for booking {payout.booking_id}"
    return f"Payout for extension {payout.extension_id}"
