"""RecordPayoutOutcome command handler.

Applies the gateway's final verdict (webhook or status poll) to the
PROCESSING payout it refers to.
"""

from typing import cast

from src.application.commands.payout_commands import RecordPayoutOutcome
from src.application.errors import ApplicationError
from src.core.errors import DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.payout import Payout
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory

DEFAULT_FAILURE_REASON = "Transfer failed"


class RecordPayoutOutcomeHandler:
    """Handler for RecordPayoutOutcome command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per command
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def handle(self, cmd: RecordPayoutOutcome) -> Result[Payout, ApplicationError]:
        """Handle RecordPayoutOutcome command.

        Returns:
            Success(Payout): Payout now COMPLETED or FAILED.
            Failure(ApplicationError): Unknown provider reference, or the
                payout is not PROCESSING.
        """
        try:
            async with self._uow_factory() as uow:
                payout = await uow.payouts.find_by_provider_reference(
                    cmd.provider_reference
                )
                if payout is None:
                    return cast(
                        Result[Payout, ApplicationError],
                        Failure(
                            error=ApplicationError.not_found(
                                "Payout", cmd.provider_reference
                            )
                        ),
                    )

                if cmd.succeeded:
                    payout.mark_as_completed()
                else:
                    payout.mark_as_failed(
                        (cmd.failure_reason or "").strip() or DEFAULT_FAILURE_REASON
                    )
                await uow.payouts.save(payout)

            return Success(value=payout)

        except DomainException as e:
            return cast(
                Result[Payout, ApplicationError],
                Failure(error=ApplicationError.from_domain_exception(e)),
            )
        except Exception as e:
            return cast(
                Result[Payout, ApplicationError],
                Failure(error=ApplicationError.unexpected(e)),
            )
