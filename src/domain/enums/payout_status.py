"""Payout disbursement states.

Defines the status state machine for the Payout aggregate.

State Machine:
    PENDING_DISBURSEMENT → PROCESSING → COMPLETED
                               ↓  ↑
                              FAILED

    - PENDING_DISBURSEMENT: Created, waiting for the gateway transfer
    - PROCESSING: Transfer accepted by the gateway (has provider reference)
    - COMPLETED: Funds delivered (terminal)
    - FAILED: Transfer failed; may be re-processed or reset by retry()

Payout.retry() additionally resets FAILED → PENDING_DISBURSEMENT; that reset
is an explicit aggregate operation, not an edge of this table.
"""

from enum import Enum


class PayoutStatus(str, Enum):
    """Payout lifecycle states."""

    PENDING_DISBURSEMENT = "PENDING_DISBURSEMENT"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    def can_transition_to(self, target: "PayoutStatus") -> bool:
        """Check the adjacency table for self → target.

        Args:
            target: Status the caller wants to move to.

        Returns:
            bool: True if the edge exists.
        """
        return target in _PAYOUT_TRANSITIONS[self]

    @classmethod
    def values(cls) -> list[str]:
        """Get all status values as strings.

        Returns:
            list[str]: List of status values.
        """
        return [status.value for status in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls.values()

    @classmethod
    def in_progress_states(cls) -> list["PayoutStatus"]:
        """States that block a second payout for the same subject.

        Returns:
            list[PayoutStatus]: PENDING_DISBURSEMENT and PROCESSING.
        """
        return [cls.PENDING_DISBURSEMENT, cls.PROCESSING]

    @classmethod
    def final_states(cls) -> list["PayoutStatus"]:
        """States reported as settled (FAILED is final until retried).

        Returns:
            list[PayoutStatus]: COMPLETED and FAILED.
        """
        return [cls.COMPLETED, cls.FAILED]


_PAYOUT_TRANSITIONS: dict[PayoutStatus, frozenset[PayoutStatus]] = {
    PayoutStatus.PENDING_DISBURSEMENT: frozenset({PayoutStatus.PROCESSING}),
    PayoutStatus.PROCESSING: frozenset({PayoutStatus.COMPLETED, PayoutStatus.FAILED}),
    PayoutStatus.FAILED: frozenset({PayoutStatus.PROCESSING}),
    PayoutStatus.COMPLETED: frozenset(),
}
