"""Base domain error value for Railway-Oriented Programming.

DomainError is the base class for error VALUES returned inside Failure
results by application handlers. It does not inherit from Exception.

Domain invariants themselves are enforced by raising DomainException
subclasses (see domain_exception.py); the application boundary converts a
caught exception into a DomainError with DomainException.to_error().

Usage:
    from src.core.errors import DomainError
    from src.core.enums import ErrorCode

    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
