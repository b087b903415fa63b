"""Payout handler dependency factories.

Handler instances for payout operations:
- InitiatePayout, RetryPayout (single payout, immediate gateway call)
- ProcessPendingPayouts (batch job)
- RecordPayoutOutcome (gateway callback)
"""

from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.container.domain_services import get_payout_policy
from src.core.container.infrastructure import (
    get_clock,
    get_logger,
    get_payment_gateway,
)
from src.core.container.repositories import get_unit_of_work

if TYPE_CHECKING:
    from src.application.commands.handlers.initiate_payout_handler import (
        InitiatePayoutHandler,
    )
    from src.application.commands.handlers.process_pending_payouts_handler import (
        ProcessPendingPayoutsHandler,
    )
    from src.application.commands.handlers.record_payout_outcome_handler import (
        RecordPayoutOutcomeHandler,
    )
    from src.application.commands.handlers.retry_payout_handler import (
        RetryPayoutHandler,
    )
    from src.application.services.payout_disbursement import PayoutDisbursement


# ============================================================================
# Payout Handler Factories
# ============================================================================


def get_payout_disbursement() -> "PayoutDisbursement":
    """Gateway transfer step shared by the payout handlers."""
    from src.application.services.payout_disbursement import PayoutDisbursement

    return PayoutDisbursement(
        gateway=get_payment_gateway(),
        policy=get_payout_policy(),
        logger=get_logger(),
    )


def get_initiate_payout_handler() -> "InitiatePayoutHandler":
    """Get InitiatePayout command handler.

    Creates handler with:
    - Unit of work factory
    - PayoutPolicy (app-scoped)
    - PayoutDisbursement over the app-scoped payment gateway
    - Logger and clock (app-scoped)

    Returns:
        InitiatePayoutHandler instance.
    """
    from src.application.commands.handlers.initiate_payout_handler import (
        InitiatePayoutHandler,
    )

    return InitiatePayoutHandler(
        uow_factory=get_unit_of_work,
        policy=get_payout_policy(),
        disbursement=get_payout_disbursement(),
        logger=get_logger(),
        currency=get_settings().system_currency,
        clock=get_clock(),
    )


def get_process_pending_payouts_handler() -> "ProcessPendingPayoutsHandler":
    from src.application.commands.handlers.process_pending_payouts_handler import (
        ProcessPendingPayoutsHandler,
    )

    return ProcessPendingPayoutsHandler(
        uow_factory=get_unit_of_work,
        disbursement=get_payout_disbursement(),
        logger=get_logger(),
        batch_size=get_settings().payout_batch_size,
    )


def get_retry_payout_handler() -> "RetryPayoutHandler":
    from src.application.commands.handlers.retry_payout_handler import (
        RetryPayoutHandler,
    )

    return RetryPayoutHandler(
        uow_factory=get_unit_of_work,
        disbursement=get_payout_disbursement(),
        logger=get_logger(),
    )


def get_record_payout_outcome_handler() -> "RecordPayoutOutcomeHandler":
    from src.application.commands.handlers.record_payout_outcome_handler import (
        RecordPayoutOutcomeHandler,
    )

    return RecordPayoutOutcomeHandler(uow_factory=get_unit_of_work)
