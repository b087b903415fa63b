"""Payout aggregate root.

A disbursement of the fleet owner's share for a completed booking or a
booking extension. Independent of the Booking aggregate: payouts reference
their source by id only.

State Machine:
    PENDING_DISBURSEMENT → PROCESSING → COMPLETED
                               ↓  ↑
                              FAILED

retry() additionally resets FAILED → PENDING_DISBURSEMENT without an event,
so the payout re-enters the pending batch.

Usage:
    payout = Payout.create(
        fleet_owner_id="owner-1",
        booking_id=booking.id,
        amount=Decimal("80000"),
        bank_account=account,
    )
    payout.initiate("TRF_8f2k")
    payout.mark_as_completed()
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from uuid_extensions import uuid7

from src.core.clock import SYSTEM_CLOCK
from src.domain.entities.aggregate_root import AggregateRoot
from src.domain.enums import PayoutStatus
from src.domain.errors import (
    InvalidAmountError,
    InvalidInputError,
    InvalidStateTransitionError,
)
from src.domain.events.payout_events import (
    PayoutCompleted,
    PayoutFailed,
    PayoutInitiated,
    PayoutProcessing,
)
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.value_objects.bank_account import BankAccount
from src.domain.value_objects.money import Money, to_decimal


@dataclass(kw_only=True)
class Payout(AggregateRoot):
    """Fleet owner payout.

    Attributes:
        id: Payout identity (uuid7, assigned at creation).
        fleet_owner_id: Recipient.
        amount: Strictly positive amount to disburse.
        bank_account: Verified destination account.
        currency: Currency of the amount.
        status: Disbursement status.
        booking_id: Source booking, if any.
        extension_id: Source booking extension, if any.
        provider_reference: Gateway transfer reference once PROCESSING.
        failure_reason: Why the last attempt failed.
        processed_at: When the gateway accepted the transfer.
        completed_at: When the funds were delivered.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
        clock: Source of "now".
    """

    id: UUID
    fleet_owner_id: str
    amount: Decimal
    bank_account: BankAccount
    currency: str = "NGN"
    status: PayoutStatus = PayoutStatus.PENDING_DISBURSEMENT
    booking_id: UUID | None = None
    extension_id: str | None = None
    provider_reference: str | None = None
    failure_reason: str | None = None
    processed_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    clock: ClockProtocol = field(default=SYSTEM_CLOCK, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = self.clock.now()
        if self.updated_at is None:
            self.updated_at = self.created_at

    @classmethod
    def create(
        cls,
        *,
        fleet_owner_id: str,
        amount: Decimal | int | str,
        bank_account: BankAccount,
        booking_id: UUID | None = None,
        extension_id: str | None = None,
        currency: str = "NGN",
        clock: ClockProtocol = SYSTEM_CLOCK,
    ) -> "Payout":
        """Create a PENDING_DISBURSEMENT payout and record PayoutInitiated.

        Raises:
            InvalidInputError: If fleet_owner_id is blank.
            InvalidAmountError: If amount is not strictly positive.
            BankAccountNotVerifiedError: If the bank account is unverified.
        """
        if not fleet_owner_id or not fleet_owner_id.strip():
            raise InvalidInputError(
                "Fleet owner ID is required", details={"field": "fleet_owner_id"}
            )
        value = to_decimal(amount, "amount")
        if value <= 0:
            raise InvalidAmountError(
                "Payout amount must be positive", details={"field": "amount"}
            )
        bank_account.must_be_verified()

        payout = cls(
            id=uuid7(),
            fleet_owner_id=fleet_owner_id,
            amount=value,
            bank_account=bank_account,
            booking_id=booking_id,
            extension_id=extension_id,
            currency=currency,
            clock=clock,
        )
        payout._record_event(
            PayoutInitiated(
                occurred_at=payout.created_at,
                payout_id=payout.id,
                fleet_owner_id=fleet_owner_id,
                amount=value,
                booking_id=booking_id,
                extension_id=extension_id,
            )
        )
        return payout

    @classmethod
    def reconstitute(cls, **attributes: object) -> "Payout":
        """Rebuild a persisted payout without validation or events."""
        return cls(**attributes)  # type: ignore[arg-type]

    @property
    def money(self) -> Money:
        return Money(self.amount, self.currency)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def initiate(self, provider_reference: str) -> None:
        """Gateway accepted the transfer: → PROCESSING.

        Allowed from PENDING_DISBURSEMENT and from FAILED.

        Raises:
            InvalidInputError: If provider_reference is blank.
            InvalidStateTransitionError: If the status has no PROCESSING edge.
        """
        if not provider_reference or not provider_reference.strip():
            raise InvalidInputError(
                "Provider reference is required",
                details={"field": "provider_reference"},
            )
        self._require_transition(PayoutStatus.PROCESSING, action="initiate")

        now = self.clock.now()
        self.provider_reference = provider_reference
        self.failure_reason = None
        self.processed_at = now
        self._set_status(PayoutStatus.PROCESSING, now)
        self._record_event(
            PayoutProcessing(
                occurred_at=now,
                payout_id=self.id,
                fleet_owner_id=self.fleet_owner_id,
                provider_reference=provider_reference,
            )
        )

    def mark_as_completed(self) -> None:
        """PROCESSING → COMPLETED.

        Raises:
            InvalidStateTransitionError: If the payout is not PROCESSING.
        """
        self._require_transition(PayoutStatus.COMPLETED, action="complete")

        now = self.clock.now()
        self.completed_at = now
        self._set_status(PayoutStatus.COMPLETED, now)
        self._record_event(
            PayoutCompleted(
                occurred_at=now,
                payout_id=self.id,
                fleet_owner_id=self.fleet_owner_id,
                amount=self.amount,
                provider_reference=self.provider_reference,
                booking_id=self.booking_id,
                extension_id=self.extension_id,
            )
        )

    def mark_as_failed(self, reason: str) -> None:
        """PROCESSING → FAILED.

        Raises:
            InvalidInputError: If reason is blank.
            InvalidStateTransitionError: If the payout is not PROCESSING.
        """
        if not reason or not reason.strip():
            raise InvalidInputError("Failure reason is required", details={"field": "reason"})
        self._require_transition(PayoutStatus.FAILED, action="fail")

        now = self.clock.now()
        self.failure_reason = reason.strip()
        self._set_status(PayoutStatus.FAILED, now)
        self._record_event(
            PayoutFailed(
                occurred_at=now,
                payout_id=self.id,
                fleet_owner_id=self.fleet_owner_id,
                amount=self.amount,
                reason=self.failure_reason,
                booking_id=self.booking_id,
                extension_id=self.extension_id,
            )
        )

    def retry(self) -> None:
        """FAILED → PENDING_DISBURSEMENT, clearing the last attempt.

        Raises:
            InvalidStateTransitionError: If the payout is not FAILED.
        """
        if self.status != PayoutStatus.FAILED:
            raise InvalidStateTransitionError(
                entity="payout", current_status=self.status, action="retry"
            )
        self.failure_reason = None
        self.provider_reference = None
        self.processed_at = None
        self._set_status(PayoutStatus.PENDING_DISBURSEMENT, self.clock.now())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def can_be_initiated(self) -> bool:
        return self.status.can_transition_to(PayoutStatus.PROCESSING)

    def is_in_progress(self) -> bool:
        return self.status in PayoutStatus.in_progress_states()

    def is_final(self) -> bool:
        return self.status in PayoutStatus.final_states()

    def _require_transition(self, target: PayoutStatus, *, action: str) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStateTransitionError(
                entity="payout", current_status=self.status, action=action
            )

    def _set_status(self, status: PayoutStatus, now: datetime) -> None:
        self.status = status
        self.updated_at = now
