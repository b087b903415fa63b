"""Booking leg states.

A leg is one calendar day's service window inside a booking. Its status
moves linearly and never skips a step:

    PENDING → ACTIVE → COMPLETED
"""

from enum import Enum


class BookingLegStatus(str, Enum):
    """Status of a single booking leg."""

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"

    def can_transition_to(self, target: "BookingLegStatus") -> bool:
        """Check the adjacency table for self → target."""
        return target in _LEG_TRANSITIONS[self]

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls.values()


_LEG_TRANSITIONS: dict[BookingLegStatus, frozenset[BookingLegStatus]] = {
    BookingLegStatus.PENDING: frozenset({BookingLegStatus.ACTIVE}),
    BookingLegStatus.ACTIVE: frozenset({BookingLegStatus.COMPLETED}),
    BookingLegStatus.COMPLETED: frozenset(),
}
