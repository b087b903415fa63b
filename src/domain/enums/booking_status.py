"""Booking lifecycle states.

Defines the status state machine for the Booking aggregate.

State Machine:
    PENDING → CONFIRMED → ACTIVE → COMPLETED
                  ↓
              CANCELLED

    - PENDING: Created, awaiting confirmation (usually payment)
    - CONFIRMED: Committed; chauffeur can be assigned
    - ACTIVE: Service in progress
    - COMPLETED: Service delivered (terminal)
    - CANCELLED: Cancelled before service started (terminal)

Usage:
    from src.domain.enums import BookingStatus

    if booking.status.can_transition_to(BookingStatus.ACTIVE):
        booking.activate()
"""

from enum import Enum


class BookingStatus(str, Enum):
    """Booking lifecycle states.

    String Enum:
        Inherits from str for easy serialization and storage.
        Values are upper-case, matching the persisted representation.

    State Transitions:
        PENDING → CONFIRMED: Booking confirmed (optionally with payment)
        CONFIRMED → ACTIVE: Service window started with a chauffeur
        CONFIRMED → CANCELLED: Cancelled before service
        ACTIVE → COMPLETED: Service window ended
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    def can_transition_to(self, target: "BookingStatus") -> bool:
        """Check the adjacency table for self → target.

        Args:
            target: Status the caller wants to move to.

        Returns:
            bool: True if the edge exists.
        """
        return target in _BOOKING_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return self in self.terminal_states()

    @classmethod
    def values(cls) -> list[str]:
        """Get all status values as strings.

        Returns:
            list[str]: List of status values.
        """
        return [status.value for status in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid status.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid status.
        """
        return value in cls.values()

    @classmethod
    def terminal_states(cls) -> list["BookingStatus"]:
        """Get terminal states (no further transitions).

        Returns:
            list[BookingStatus]: Terminal states.
        """
        return [cls.COMPLETED, cls.CANCELLED]


_BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.ACTIVE, BookingStatus.CANCELLED}),
    BookingStatus.ACTIVE: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}
