"""Integration tests for paying a fleet owner.

Tests cover:
- Eligibility: unverified accounts and in-progress payouts are refused
- A payout initiated, rejected by the gateway, picked up by the batch run
  and settled by the gateway's verdict
- A failed transfer retried to completion

Architecture:
- Real handlers, unit of work, payment gateway and InMemoryEventBus
- LoggingEventHandler subscribed as in the container
"""

from decimal import Decimal
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.application.commands.handlers.initiate_payout_handler import InitiatePayoutHandler
from src.application.commands.handlers.process_pending_payouts_handler import (
    ProcessPendingPayoutsHandler,
)
from src.application.commands.handlers.record_payout_outcome_handler import (
    RecordPayoutOutcomeHandler,
)
from src.application.commands.handlers.retry_payout_handler import RetryPayoutHandler
from src.application.commands.payout_commands import (
    InitiatePayout,
    ProcessPendingPayouts,
    RecordPayoutOutcome,
    RetryPayout,
)
from src.application.errors import ApplicationErrorCode
from src.application.services.payout_disbursement import PayoutDisbursement
from src.core.result import Failure, Success
from src.domain.enums import PayoutStatus
from src.domain.events.payout_events import (
    PayoutCompleted,
    PayoutFailed,
    PayoutInitiated,
    PayoutProcessing,
)
from src.domain.services.payout_policy import PayoutPolicy
from src.infrastructure.payments.in_memory_payment_gateway import InMemoryPaymentGateway
from tests.conftest import create_bank_account, create_payout, load_payout


@pytest.fixture
def gateway(logger) -> InMemoryPaymentGateway:
    return InMemoryPaymentGateway(logger)


@pytest.fixture
def policy(clock) -> PayoutPolicy:
    return PayoutPolicy(clock=clock)


@pytest.fixture
def disbursement(gateway, policy, logger) -> PayoutDisbursement:
    return PayoutDisbursement(gateway, policy, logger)


@pytest.fixture
def initiate_handler(uow_factory, policy, disbursement, logger, clock) -> InitiatePayoutHandler:
    return InitiatePayoutHandler(
        uow_factory=uow_factory,
        policy=policy,
        disbursement=disbursement,
        logger=logger,
        clock=clock,
    )


@pytest.mark.integration
class TestPayoutEligibility:
    """PayoutPolicy decisions for a 50,000 payout."""

    def test_unverified_account_is_ineligible(self, policy):
        eligibility = policy.can_initiate_payout(
            Decimal("50000"), create_bank_account(is_verified=False), []
        )

        assert eligibility.is_eligible is False
        assert "verified" in eligibility.reason

    def test_processing_payout_for_same_booking_is_ineligible(self, clock, policy):
        booking_id = uuid7()
        existing = create_payout(clock, amount="50000", booking_id=booking_id)
        existing.initiate("TRF_existing")

        eligibility = policy.can_initiate_payout(
            Decimal("50000"), create_bank_account(), [existing]
        )

        assert eligibility.is_eligible is False
        assert "in progress" in eligibility.reason

    @pytest.mark.asyncio
    async def test_handler_refuses_second_payout(self, initiate_handler):
        command = InitiatePayout(
            fleet_owner_id="f1",
            amount=Decimal("50000"),
            bank_account=create_bank_account(),
            booking_id=uuid7(),
        )

        first = await initiate_handler.handle(command)
        second = await initiate_handler.handle(command)

        assert isinstance(first, Success)
        assert isinstance(second, Failure)
        assert second.error.code == ApplicationErrorCode.NOT_ELIGIBLE


@pytest.mark.integration
class TestPayoutDisbursementFlow:
    """From initiation to settlement through the gateway."""

    @pytest.mark.asyncio
    async def test_rejected_then_batched_then_completed(
        self, initiate_handler, gateway, disbursement, uow_factory, recorder, logger
    ):
        # Gateway down on the first attempt: the payout waits for the batch
        gateway.fail_next("Gateway unavailable")
        initiated = await initiate_handler.handle(
            InitiatePayout(
                fleet_owner_id="f1",
                amount=Decimal("50000"),
                bank_account=create_bank_account(),
                booking_id=uuid7(),
            )
        )
        assert isinstance(initiated, Failure)
        assert initiated.error.code == ApplicationErrorCode.EXTERNAL_SERVICE_FAILED
        payout_id = UUID(initiated.error.details["payout_id"])
        pending = await load_payout(uow_factory, payout_id)
        assert pending.status == PayoutStatus.PENDING_DISBURSEMENT

        # Batch run pushes it through
        summary = await ProcessPendingPayoutsHandler(
            uow_factory=uow_factory, disbursement=disbursement, logger=logger
        ).handle(ProcessPendingPayouts())
        assert summary.value.processed == 1
        processing = await load_payout(uow_factory, payout_id)
        assert processing.status == PayoutStatus.PROCESSING
        assert processing.provider_reference == gateway.transfers[0].provider_reference

        # Gateway reports settlement
        outcome = await RecordPayoutOutcomeHandler(uow_factory=uow_factory).handle(
            RecordPayoutOutcome(
                provider_reference=processing.provider_reference, succeeded=True
            )
        )
        assert isinstance(outcome, Success)
        assert (await load_payout(uow_factory, payout_id)).status == PayoutStatus.COMPLETED

        assert [type(event) for event in recorder.events] == [
            PayoutInitiated,
            PayoutProcessing,
            PayoutCompleted,
        ]
        logged = [call.args[0] for call in logger.info.call_args_list]
        assert "payout_completed" in logged

    @pytest.mark.asyncio
    async def test_failed_transfer_is_retried(
        self, initiate_handler, disbursement, uow_factory, recorder, logger
    ):
        initiated = await initiate_handler.handle(
            InitiatePayout(
                fleet_owner_id="f1",
                amount=Decimal("50000"),
                bank_account=create_bank_account(),
                extension_id="ext-1",
            )
        )
        payout = initiated.value
        record_outcome = RecordPayoutOutcomeHandler(uow_factory=uow_factory)

        failed = await record_outcome.handle(
            RecordPayoutOutcome(
                provider_reference=payout.provider_reference,
                succeeded=False,
                failure_reason="Account dormant",
            )
        )
        assert failed.value.status == PayoutStatus.FAILED
        assert failed.value.failure_reason == "Account dormant"

        retried = await RetryPayoutHandler(
            uow_factory=uow_factory, disbursement=disbursement, logger=logger
        ).handle(RetryPayout(payout_id=payout.id))
        assert isinstance(retried, Success)
        assert retried.value.status == PayoutStatus.PROCESSING
        assert retried.value.failure_reason is None

        completed = await record_outcome.handle(
            RecordPayoutOutcome(
                provider_reference=retried.value.provider_reference, succeeded=True
            )
        )
        assert completed.value.status == PayoutStatus.COMPLETED
        assert len(recorder.of_type(PayoutFailed)) == 1
        assert len(recorder.of_type(PayoutCompleted)) == 1
