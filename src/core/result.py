"""Result types for railway-oriented programming.

This module implements the Result pattern used by application handlers to report
command outcomes without raising. Domain exceptions are caught at the handler
boundary and returned as Failure values, keeping callers explicit and testable.

Usage:
    result = await handler.handle(ConfirmBooking(booking_id=booking_id))
    match result:
        case Success(value=booking):
            print(f"Confirmed: {booking.booking_reference}")
        case Failure(error=error):
            print(f"Error: {error.message}")
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
Result: TypeAlias = Success[T] | Failure[E]
