"""ProcessPendingPayouts command handler.

Batch job that pushes PENDING_DISBURSEMENT payouts (oldest first) to the
gateway. Each payout is handled on its own: one failing payout is logged
and counted, never aborting the rest of the batch.
"""

from typing import cast

from src.application.commands.payout_commands import (
    PendingPayoutsSummary,
    ProcessPendingPayouts,
)
from src.application.errors import ApplicationError
from src.application.services.payout_disbursement import PayoutDisbursement
from src.core.result import Failure, Result, Success
from src.domain.entities.payout import Payout
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


class ProcessPendingPayoutsHandler:
    """Handler for ProcessPendingPayouts command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: One unit of work for the scan, one per payout
        - PayoutDisbursement: Gateway transfer
        - LoggerProtocol: Per-payout outcomes and the batch summary
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        disbursement: PayoutDisbursement,
        logger: LoggerProtocol,
        batch_size: int = 50,
    ) -> None:
        self._uow_factory = uow_factory
        self._disbursement = disbursement
        self._logger = logger
        self._batch_size = batch_size

    async def handle(
        self, cmd: ProcessPendingPayouts
    ) -> Result[PendingPayoutsSummary, ApplicationError]:
        """Handle ProcessPendingPayouts command.

        Returns:
            Success(PendingPayoutsSummary): Counts of accepted and failed
                transfers. Rejected payouts stay PENDING_DISBURSEMENT.
            Failure(ApplicationError): The pending payouts could not be loaded.
        """
        try:
            async with self._uow_factory() as uow:
                pending = await uow.payouts.find_pending(cmd.limit or self._batch_size)
        except Exception as e:
            self._logger.error("pending_payouts_load_failed", error=e)
            return cast(
                Result[PendingPayoutsSummary, ApplicationError],
                Failure(error=ApplicationError.unexpected(e)),
            )

        processed = 0
        failed = 0
        for payout in pending:
            try:
                if await self._process(payout):
                    processed += 1
                else:
                    failed += 1
            except Exception as e:
                failed += 1
                self._logger.error(
                    "pending_payout_processing_failed",
                    error=e,
                    payout_id=str(payout.id),
                )

        summary = PendingPayoutsSummary(processed=processed, failed=failed)
        self._logger.info(
            "pending_payouts_processed", processed=processed, failed=failed
        )
        return Success(value=summary)

    async def _process(self, payout: Payout) -> bool:
        transfer = await self._disbursement.transfer(payout)
        if isinstance(transfer, Failure):
            return False

        async with self._uow_factory() as uow:
            payout.initiate(transfer.value)
            await uow.payouts.save(payout)
        return True
