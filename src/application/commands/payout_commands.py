"""Payout commands.

Commands that disburse fleet-owner earnings through the payment gateway and
record the gateway's verdict.

Architecture:
    - Commands are immutable value objects representing user intent
    - Handlers check PayoutPolicy, persist the payout, then call the gateway
    - A gateway failure never loses the payout: it stays (or goes back to)
      PENDING_DISBURSEMENT or FAILED for the next batch run
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.domain.value_objects.bank_account import BankAccount


@dataclass(frozen=True, kw_only=True)
class InitiatePayout:
    """Command to pay a fleet owner for a booking or a booking extension.

    Attributes:
        fleet_owner_id: Fleet owner receiving the money.
        amount: Net amount to disburse.
        bank_account: Destination account (must be verified).
        booking_id: Booking being paid for.
        extension_id: Booking extension being paid for.
    """

    fleet_owner_id: str
    amount: Decimal
    bank_account: BankAccount
    booking_id: UUID | None = None
    extension_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class ProcessPendingPayouts:
    """Command to push PENDING_DISBURSEMENT payouts to the gateway.

    Attributes:
        limit: Maximum number of payouts to process (settings default when
            omitted).
    """

    limit: int | None = None


@dataclass(frozen=True, kw_only=True)
class RetryPayout:
    """Command to retry a FAILED payout.

    Attributes:
        payout_id: Payout to retry.
    """

    payout_id: UUID


@dataclass(frozen=True, kw_only=True)
class RecordPayoutOutcome:
    """Command recording the gateway's final verdict on a transfer.

    Attributes:
        provider_reference: Gateway transfer reference.
        succeeded: Whether the transfer settled.
        failure_reason: Gateway message when it did not.
    """

    provider_reference: str
    succeeded: bool
    failure_reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class PendingPayoutsSummary:
    """Result of a ProcessPendingPayouts run.

    Attributes:
        processed: Payouts the gateway accepted.
        failed: Payouts rejected by the gateway or that raised.
    """

    processed: int
    failed: int

    def __str__(self) -> str:
        return (
            f"Processed pending payouts: {self.processed} successful, "
            f"{self.failed} failed"
        )
