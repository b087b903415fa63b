"""RetryPayout command handler.

Resets a FAILED payout to PENDING_DISBURSEMENT and immediately attempts a
new transfer. If the gateway rejects it again the payout is left pending
for the next batch run.
"""

from typing import cast

from src.application.commands.payout_commands import RetryPayout
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.services.payout_disbursement import PayoutDisbursement
from src.core.errors import DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.payout import Payout
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


class RetryPayoutHandler:
    """Handler for RetryPayout command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per step
        - PayoutDisbursement: Gateway transfer
        - LoggerProtocol: Outcome logging
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        disbursement: PayoutDisbursement,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._disbursement = disbursement
        self._logger = logger

    async def handle(self, cmd: RetryPayout) -> Result[Payout, ApplicationError]:
        """Handle RetryPayout command.

        Returns:
            Success(Payout): Payout back in PROCESSING.
            Failure(ApplicationError): Not found, not FAILED (CONFLICT), or
                rejected again by the gateway (EXTERNAL_SERVICE_FAILED).
        """
        try:
            async with self._uow_factory() as uow:
                payout = await uow.payouts.find_by_id(cmd.payout_id)
                if payout is None:
                    return cast(
                        Result[Payout, ApplicationError],
                        Failure(error=ApplicationError.not_found("Payout", cmd.payout_id)),
                    )
                payout.retry()
                await uow.payouts.save(payout)

            transfer = await self._disbursement.transfer(payout)
            if isinstance(transfer, Failure):
                return cast(
                    Result[Payout, ApplicationError],
                    Failure(
                        error=ApplicationError(
                            code=ApplicationErrorCode.EXTERNAL_SERVICE_FAILED,
                            message=f"Payout retry rejected: {transfer.error}",
                            details={
                                "payout_id": str(payout.id),
                                "status": payout.status.value,
                            },
                        )
                    ),
                )

            async with self._uow_factory() as uow:
                payout.initiate(transfer.value)
                await uow.payouts.save(payout)

            self._logger.info("payout_retried", payout_id=str(payout.id))
            return Success(value=payout)

        except DomainException as e:
            return cast(
                Result[Payout, ApplicationError],
                Failure(error=ApplicationError.from_domain_exception(e)),
            )
        except Exception as e:
            self._logger.error("payout_retry_failed", error=e, payout_id=str(cmd.payout_id))
            return cast(
                Result[Payout, ApplicationError],
                Failure(error=ApplicationError.unexpected(e)),
            )
