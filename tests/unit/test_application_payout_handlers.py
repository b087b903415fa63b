"""Unit tests for the payout command handlers.

Tests cover:
- InitiatePayout: eligibility, two-step persistence, gateway rejection
- ProcessPendingPayouts: batch counts, rejected payouts stay pending
- RetryPayout: FAILED → PENDING_DISBURSEMENT → PROCESSING
- RecordPayoutOutcome: completion and failure by provider reference
- PayoutDisbursement: reference, rounded amount, narration

Architecture:
- Real handlers over the in-memory unit of work and payment gateway
- Mocked event bus and logger (conftest)
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.commands.handlers.initiate_payout_handler import (
    InitiatePayoutError,
    InitiatePayoutHandler,
)
from src.application.commands.handlers.process_pending_payouts_handler import (
    ProcessPendingPayoutsHandler,
)
from src.application.commands.handlers.record_payout_outcome_handler import (
    RecordPayoutOutcomeHandler,
)
from src.application.commands.handlers.retry_payout_handler import RetryPayoutHandler
from src.application.commands.payout_commands import (
    InitiatePayout,
    PendingPayoutsSummary,
    ProcessPendingPayouts,
    RecordPayoutOutcome,
    RetryPayout,
)
from src.application.errors import ApplicationErrorCode
from src.application.services.payout_disbursement import PayoutDisbursement, narration_for
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import PayoutStatus
from src.domain.events.payout_events import (
    PayoutCompleted,
    PayoutFailed,
    PayoutInitiated,
    PayoutProcessing,
)
from src.domain.services.payout_policy import (
    BANK_ACCOUNT_UNVERIFIED_REASON,
    PAYOUT_IN_PROGRESS_REASON,
    PayoutPolicy,
)
from src.infrastructure.payments.in_memory_payment_gateway import InMemoryPaymentGateway
from tests.conftest import (
    create_bank_account,
    create_payout,
    load_payout,
    published_events,
    store_payout,
)


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


def initiate_command(**overrides) -> InitiatePayout:
    params = {
        "fleet_owner_id": "owner-1",
        "amount": Decimal("64000"),
        "bank_account": create_bank_account(),
        "booking_id": uuid7(),
    }
    params.update(overrides)
    return InitiatePayout(**params)


async def failed_payout(clock, uow_factory):
    """Stored FAILED payout."""
    payout = create_payout(clock)
    payout.initiate("TRF_first")
    payout.mark_as_failed("Account dormant")
    payout.clear_events()
    return await store_payout(uow_factory, payout)


# =============================================================================
# InitiatePayout
# =============================================================================


@pytest.mark.unit
class TestInitiatePayoutHandler:
    """Test InitiatePayoutHandler."""

    @pytest.mark.asyncio
    async def test_initiates_transfer(self, initiate_handler, gateway, event_bus, uow_factory):
        # Act
        result = await initiate_handler.handle(initiate_command())

        # Assert
        assert isinstance(result, Success)
        payout = result.value
        stored = await load_payout(uow_factory, payout.id)
        assert stored.status == PayoutStatus.PROCESSING
        assert stored.provider_reference == gateway.transfers[0].provider_reference
        assert stored.version == 2
        assert [type(event) for event in published_events(event_bus)] == [
            PayoutInitiated,
            PayoutProcessing,
        ]

    @pytest.mark.asyncio
    async def test_extension_payout(self, initiate_handler, gateway):
        result = await initiate_handler.handle(
            initiate_command(booking_id=None, extension_id="ext-1")
        )

        assert result.value.extension_id == "ext-1"
        assert gateway.transfers[0].narration == "Payout for extension ext-1"

    @pytest.mark.asyncio
    async def test_subject_required(self, initiate_handler, database):
        result = await initiate_handler.handle(initiate_command(booking_id=None))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert result.error.message == InitiatePayoutError.SUBJECT_REQUIRED
        assert database.tables["payouts"] == {}

    @pytest.mark.asyncio
    async def test_unverified_account_not_eligible(self, initiate_handler, gateway):
        result = await initiate_handler.handle(
            initiate_command(bank_account=create_bank_account(is_verified=False))
        )

        assert result.error.code == ApplicationErrorCode.NOT_ELIGIBLE
        assert result.error.details == {"reason": BANK_ACCOUNT_UNVERIFIED_REASON}
        assert result.error.domain_error.code == ErrorCode.PAYOUT_NOT_ELIGIBLE
        assert gateway.transfers == []

    @pytest.mark.asyncio
    async def test_second_payout_for_booking_is_blocked(self, initiate_handler):
        command = initiate_command()
        await initiate_handler.handle(command)

        result = await initiate_handler.handle(command)

        assert result.error.code == ApplicationErrorCode.NOT_ELIGIBLE
        assert result.error.details["reason"] == PAYOUT_IN_PROGRESS_REASON

    @pytest.mark.asyncio
    async def test_gateway_rejection_keeps_pending_payout(
        self, initiate_handler, gateway, event_bus, database, uow_factory
    ):
        """Test the payout is stored and left for the next batch run."""
        # Arrange
        gateway.fail_next("Insufficient float")

        # Act
        result = await initiate_handler.handle(initiate_command())

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.EXTERNAL_SERVICE_FAILED
        assert result.error.message.endswith("Insufficient float")
        payout_id = result.error.details["payout_id"]
        (stored_id,) = database.tables["payouts"]
        assert str(stored_id) == payout_id
        stored = await load_payout(uow_factory, stored_id)
        assert stored.status == PayoutStatus.PENDING_DISBURSEMENT
        assert [type(event) for event in published_events(event_bus)] == [PayoutInitiated]

    @pytest.mark.asyncio
    async def test_zero_amount_not_eligible(self, initiate_handler):
        result = await initiate_handler.handle(initiate_command(amount=Decimal("0")))

        assert result.error.code == ApplicationErrorCode.NOT_ELIGIBLE


# =============================================================================
# ProcessPendingPayouts
# =============================================================================


@pytest.mark.unit
class TestProcessPendingPayoutsHandler:
    """Test ProcessPendingPayoutsHandler."""

    @pytest.mark.asyncio
    async def test_processes_pending_batch(self, clock, disbursement, gateway, logger, uow_factory):
        # Arrange
        first = await store_payout(uow_factory, create_payout(clock))
        clock.advance(timedelta(minutes=1))
        second = await store_payout(uow_factory, create_payout(clock))
        gateway.fail_next("Bank offline")
        handler = ProcessPendingPayoutsHandler(uow_factory, disbursement, logger)

        # Act
        result = await handler.handle(ProcessPendingPayouts())

        # Assert
        assert result.value == PendingPayoutsSummary(processed=1, failed=1)
        assert str(result.value) == "Processed pending payouts: 1 successful, 1 failed"
        assert (await load_payout(uow_factory, first.id)).status == (
            PayoutStatus.PENDING_DISBURSEMENT
        )
        assert (await load_payout(uow_factory, second.id)).status == PayoutStatus.PROCESSING
        logger.info.assert_any_call("pending_payouts_processed", processed=1, failed=1)

    @pytest.mark.asyncio
    async def test_limit(self, clock, disbursement, logger, uow_factory):
        for _ in range(3):
            await store_payout(uow_factory, create_payout(clock))
        handler = ProcessPendingPayoutsHandler(uow_factory, disbursement, logger, batch_size=50)

        result = await handler.handle(ProcessPendingPayouts(limit=2))

        assert result.value.processed == 2

    @pytest.mark.asyncio
    async def test_batch_size_default(self, clock, disbursement, logger, uow_factory):
        for _ in range(3):
            await store_payout(uow_factory, create_payout(clock))
        handler = ProcessPendingPayoutsHandler(uow_factory, disbursement, logger, batch_size=1)

        result = await handler.handle(ProcessPendingPayouts())

        assert result.value.processed == 1

    @pytest.mark.asyncio
    async def test_raising_transfer_is_counted_and_logged(self, clock, logger, uow_factory):
        await store_payout(uow_factory, create_payout(clock))
        disbursement = AsyncMock(spec=PayoutDisbursement)
        disbursement.transfer.side_effect = RuntimeError("socket closed")
        handler = ProcessPendingPayoutsHandler(uow_factory, disbursement, logger)

        result = await handler.handle(ProcessPendingPayouts())

        assert result.value == PendingPayoutsSummary(processed=0, failed=1)
        assert logger.error.call_args.args == ("pending_payout_processing_failed",)

    @pytest.mark.asyncio
    async def test_nothing_pending(self, disbursement, logger, uow_factory):
        handler = ProcessPendingPayoutsHandler(uow_factory, disbursement, logger)

        result = await handler.handle(ProcessPendingPayouts())

        assert result.value == PendingPayoutsSummary(processed=0, failed=0)


# =============================================================================
# RetryPayout
# =============================================================================


@pytest.mark.unit
class TestRetryPayoutHandler:
    """Test RetryPayoutHandler."""

    @pytest.mark.asyncio
    async def test_retry_failed_payout(self, clock, disbursement, logger, event_bus, uow_factory):
        payout = await failed_payout(clock, uow_factory)
        handler = RetryPayoutHandler(uow_factory, disbursement, logger)

        result = await handler.handle(RetryPayout(payout_id=payout.id))

        assert isinstance(result, Success)
        stored = await load_payout(uow_factory, payout.id)
        assert stored.status == PayoutStatus.PROCESSING
        assert stored.provider_reference != "TRF_first"
        assert stored.failure_reason is None
        assert [type(event) for event in published_events(event_bus)] == [PayoutProcessing]

    @pytest.mark.asyncio
    async def test_retry_rejected_again_stays_pending(
        self, clock, disbursement, gateway, logger, uow_factory
    ):
        payout = await failed_payout(clock, uow_factory)
        gateway.fail_next()
        handler = RetryPayoutHandler(uow_factory, disbursement, logger)

        result = await handler.handle(RetryPayout(payout_id=payout.id))

        assert result.error.code == ApplicationErrorCode.EXTERNAL_SERVICE_FAILED
        assert result.error.message == "Payout retry rejected: Gateway unavailable"
        stored = await load_payout(uow_factory, payout.id)
        assert stored.status == PayoutStatus.PENDING_DISBURSEMENT

    @pytest.mark.asyncio
    async def test_retry_pending_is_conflict(self, clock, disbursement, logger, uow_factory):
        payout = await store_payout(uow_factory, create_payout(clock))
        handler = RetryPayoutHandler(uow_factory, disbursement, logger)

        result = await handler.handle(RetryPayout(payout_id=payout.id))

        assert result.error.code == ApplicationErrorCode.CONFLICT

    @pytest.mark.asyncio
    async def test_retry_unknown_payout(self, disbursement, logger, uow_factory):
        handler = RetryPayoutHandler(uow_factory, disbursement, logger)

        result = await handler.handle(RetryPayout(payout_id=uuid7()))

        assert result.error.code == ApplicationErrorCode.NOT_FOUND
        assert result.error.message == "Payout not found"


# =============================================================================
# RecordPayoutOutcome
# =============================================================================


@pytest.mark.unit
class TestRecordPayoutOutcomeHandler:
    """Test RecordPayoutOutcomeHandler."""

    async def _processing_payout(self, clock, uow_factory):
        payout = create_payout(clock)
        payout.initiate("TRF_settle")
        payout.clear_events()
        return await store_payout(uow_factory, payout)

    @pytest.mark.asyncio
    async def test_success_completes(self, clock, event_bus, uow_factory):
        payout = await self._processing_payout(clock, uow_factory)

        result = await RecordPayoutOutcomeHandler(uow_factory).handle(
            RecordPayoutOutcome(provider_reference="TRF_settle", succeeded=True)
        )

        assert isinstance(result, Success)
        assert (await load_payout(uow_factory, payout.id)).status == PayoutStatus.COMPLETED
        assert isinstance(published_events(event_bus)[0], PayoutCompleted)

    @pytest.mark.asyncio
    async def test_failure_uses_default_reason(self, clock, event_bus, uow_factory):
        payout = await self._processing_payout(clock, uow_factory)

        await RecordPayoutOutcomeHandler(uow_factory).handle(
            RecordPayoutOutcome(provider_reference="TRF_settle", succeeded=False)
        )

        stored = await load_payout(uow_factory, payout.id)
        assert stored.status == PayoutStatus.FAILED
        assert stored.failure_reason == "Transfer failed"
        event = published_events(event_bus)[0]
        assert isinstance(event, PayoutFailed)

    @pytest.mark.asyncio
    async def test_unknown_reference(self, uow_factory):
        result = await RecordPayoutOutcomeHandler(uow_factory).handle(
            RecordPayoutOutcome(provider_reference="TRF_missing", succeeded=True)
        )

        assert result.error.code == ApplicationErrorCode.NOT_FOUND
        assert result.error.details["id"] == "TRF_missing"

    @pytest.mark.asyncio
    async def test_completed_payout_cannot_fail(self, clock, uow_factory):
        payout = await self._processing_payout(clock, uow_factory)
        handler = RecordPayoutOutcomeHandler(uow_factory)
        await handler.handle(RecordPayoutOutcome(provider_reference="TRF_settle", succeeded=True))

        result = await handler.handle(
            RecordPayoutOutcome(
                provider_reference="TRF_settle", succeeded=False, failure_reason="Reversed"
            )
        )

        assert result.error.code == ApplicationErrorCode.CONFLICT
        assert (await load_payout(uow_factory, payout.id)).status == PayoutStatus.COMPLETED


# =============================================================================
# PayoutDisbursement
# =============================================================================


@pytest.mark.unit
class TestPayoutDisbursement:
    """Test PayoutDisbursement.transfer()."""

    @pytest.mark.asyncio
    async def test_transfer_sends_rounded_amount(self, clock, disbursement, gateway):
        payout = create_payout(clock, amount="1234.565")

        result = await disbursement.transfer(payout)

        assert isinstance(result, Success)
        (record,) = gateway.transfers
        assert record.amount.amount == Decimal("1234.57")
        assert record.reference.startswith(f"payout_booking_{payout.booking_id}_")
        assert record.narration == f"Payout for booking {payout.booking_id}"

    @pytest.mark.asyncio
    async def test_each_transfer_uses_a_fresh_reference(self, clock, disbursement, gateway):
        payout = create_payout(clock)

        await disbursement.transfer(payout)
        await disbursement.transfer(payout)

        assert len({record.reference for record in gateway.transfers}) == 2

    @pytest.mark.asyncio
    async def test_rejection_is_logged(self, clock, disbursement, gateway, logger):
        payout = create_payout(clock)
        gateway.fail_next("Closed account")

        result = await disbursement.transfer(payout)

        assert result == Failure(error="Closed account")
        args, kwargs = logger.warning.call_args
        assert args == ("payout_gateway_failed",)
        assert kwargs["payout_id"] == str(payout.id)
        assert kwargs["reason"] == "Closed account"
        assert gateway.transfers == []

    def test_narration_for_extension(self, clock):
        assert narration_for(create_payout(clock, extension_id="ext-7")) == (
            "Payout for extension ext-7"
        )
