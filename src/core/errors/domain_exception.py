"""Base exception for violated domain invariants.

Aggregates and value objects raise DomainException subclasses synchronously
from the operation that detects the violation. They are never swallowed
inside the domain; the application layer catches them at the command
boundary and returns Failure(ApplicationError) instead.

Usage:
    class InvalidInputError(DomainException, ValueError):
        code = ErrorCode.INVALID_INPUT

    raise InvalidInputError("Chauffeur ID is required", details={"field": "chauffeur_id"})
"""

from src.core.enums import ErrorCode
from src.core.errors.domain_error import DomainError


class DomainException(Exception):
    """Exception carrying a machine-readable ErrorCode.

    Attributes:
        code: Error code shared by every instance of the subclass.
        message: Human-readable message (also the exception's str()).
        details: Structured string context for logs and API errors.
    """

    code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, str] = dict(details or {})

    def to_error(self) -> DomainError:
        """Render this exception as a DomainError value."""
        return DomainError(
            code=self.code,
            message=self.message,
            details=self.details or None,
        )
