"""Payment states of a booking.

State Machine:
    UNPAID → PAID → REFUNDED
                  → REFUND_PROCESSING → REFUNDED
                                      → REFUND_FAILED → REFUND_PROCESSING
                  → PARTIALLY_REFUNDED → REFUNDED
                                       → REFUND_PROCESSING

Usage:
    from src.domain.enums import PaymentStatus

    if booking.payment_status.can_transition_to(PaymentStatus.PAID):
        ...
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """Payment status tracked alongside the booking status."""

    UNPAID = "UNPAID"
    PAID = "PAID"
    REFUNDED = "REFUNDED"
    REFUND_PROCESSING = "REFUND_PROCESSING"
    REFUND_FAILED = "REFUND_FAILED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"

    def can_transition_to(self, target: "PaymentStatus") -> bool:
        """Check the adjacency table for self → target.

        Args:
            target: Payment status the caller wants to move to.

        Returns:
            bool: True if the edge exists.
        """
        return target in _PAYMENT_TRANSITIONS[self]

    @property
    def is_refund_state(self) -> bool:
        """Whether money is being, or has been, returned to the customer."""
        return self in {
            PaymentStatus.REFUNDED,
            PaymentStatus.REFUND_PROCESSING,
            PaymentStatus.REFUND_FAILED,
            PaymentStatus.PARTIALLY_REFUNDED,
        }

    @classmethod
    def values(cls) -> list[str]:
        """Get all status values as strings.

        Returns:
            list[str]: List of status values.
        """
        return [status.value for status in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid payment status (case-sensitive)."""
        return value in cls.values()


_PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.UNPAID: frozenset({PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(
        {
            PaymentStatus.REFUNDED,
            PaymentStatus.REFUND_PROCESSING,
            PaymentStatus.PARTIALLY_REFUNDED,
        }
    ),
    PaymentStatus.REFUND_PROCESSING: frozenset(
        {PaymentStatus.REFUNDED, PaymentStatus.REFUND_FAILED}
    ),
    PaymentStatus.REFUND_FAILED: frozenset({PaymentStatus.REFUND_PROCESSING}),
    PaymentStatus.PARTIALLY_REFUNDED: frozenset(
        {PaymentStatus.REFUNDED, PaymentStatus.REFUND_PROCESSING}
    ),
    PaymentStatus.REFUNDED: frozenset(),
}
