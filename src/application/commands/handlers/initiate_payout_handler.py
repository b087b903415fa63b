"""InitiatePayout command handler.

Pays a fleet owner for a booking or booking extension.

Flow:
    1. Inside one unit of work: load the payouts already recorded for the
       same booking/extension, check PayoutPolicy, create and store the
       payout (PayoutInitiated is published on commit)
    2. Ask the gateway for the transfer, outside any unit of work
    3. Accepted: a second unit of work moves the payout to PROCESSING
       Rejected: the payout stays PENDING_DISBURSEMENT for the next
       ProcessPendingPayouts run and the handler returns Failure

Architecture:
- Application layer handler
- Network calls never run while a unit of work is open
- Uses Result types for error handling
"""

from typing import cast

from src.application.commands.payout_commands import InitiatePayout
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.services.payout_disbursement import PayoutDisbursement
from src.core.clock import SYSTEM_CLOCK
from src.core.enums import ErrorCode
from src.core.errors import DomainError, DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.payout import Payout
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory
from src.domain.services.payout_policy import PayoutPolicy


class InitiatePayoutError:
    """InitiatePayout-specific errors."""

    SUBJECT_REQUIRED = "A payout needs a booking ID or an extension ID"
    NOT_ELIGIBLE = "Payout not eligible"
    GATEWAY_FAILED = "Payment gateway rejected the transfer"


class InitiatePayoutHandler:
    """Handler for InitiatePayout command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per step
        - PayoutPolicy: Eligibility rules
        - PayoutDisbursement: Gateway transfer
        - LoggerProtocol: Outcome logging
        - ClockProtocol: Source of "now" for the new aggregate
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: PayoutPolicy,
        disbursement: PayoutDisbursement,
        logger: LoggerProtocol,
        currency: str = "NGN",
        clock: ClockProtocol = SYSTEM_CLOCK,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy
        self._disbursement = disbursement
        self._logger = logger
        self._currency = currency
        self._clock = clock

    async def handle(self, cmd: InitiatePayout) -> Result[Payout, ApplicationError]:
        """Handle InitiatePayout command.

        Returns:
            Success(Payout): Payout in PROCESSING with a provider reference.
            Failure(ApplicationError): NOT_ELIGIBLE when the policy refuses,
                EXTERNAL_SERVICE_FAILED when the gateway rejects the transfer
                (the payout is stored and left PENDING_DISBURSEMENT).
        """
        if cmd.booking_id is None and not cmd.extension_id:
            return cast(
                Result[Payout, ApplicationError],
                Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                        message=InitiatePayoutError.SUBJECT_REQUIRED,
                    )
                ),
            )

        try:
            async with self._uow_factory() as uow:
                if cmd.booking_id is not None:
                    existing = await uow.payouts.find_by_booking_id(cmd.booking_id)
                else:
                    existing = await uow.payouts.find_by_extension_id(cmd.extension_id)

                eligibility = self._policy.can_initiate_payout(
                    cmd.amount, cmd.bank_account, existing
                )
                if not eligibility.is_eligible:
                    return cast(
                        Result[Payout, ApplicationError],
                        Failure(error=_not_eligible(eligibility.reason or "")),
                    )

                payout = Payout.create(
                    fleet_owner_id=cmd.fleet_owner_id,
                    amount=cmd.amount,
                    bank_account=cmd.bank_account,
                    booking_id=cmd.booking_id,
                    extension_id=cmd.extension_id,
                    currency=self._currency,
                    clock=self._clock,
                )
                await uow.payouts.save(payout)

            transfer = await self._disbursement.transfer(payout)
            if isinstance(transfer, Failure):
                return cast(
                    Result[Payout, ApplicationError],
                    Failure(
                        error=ApplicationError(
                            code=ApplicationErrorCode.EXTERNAL_SERVICE_FAILED,
                            message=f"{InitiatePayoutError.GATEWAY_FAILED}: {transfer.error}",
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

            self._logger.info(
                "payout_initiated",
                payout_id=str(payout.id),
                provider_reference=payout.provider_reference,
            )
            return Success(value=payout)

        except DomainException as e:
            return cast(
                Result[Payout, ApplicationError],
                Failure(error=ApplicationError.from_domain_exception(e)),
            )
        except Exception as e:
            self._logger.error("payout_initiation_failed", error=e)
            return cast(
                Result[Payout, ApplicationError],
                Failure(error=ApplicationError.unexpected(e)),
            )


def _not_eligible(reason: str) -> ApplicationError:
    message = f"{InitiatePayoutError.NOT_ELIGIBLE}: {reason}"
    return ApplicationError(
        code=ApplicationErrorCode.NOT_ELIGIBLE,
        message=message,
        domain_error=DomainError(
            code=ErrorCode.PAYOUT_NOT_ELIGIBLE,
            message=message,
            details={"reason": reason},
        ),
        details={"reason": reason},
    )
