"""Application layer error types.

Command handlers catch DomainException subclasses at the boundary and return
Failure(ApplicationError) instead of raising. The original exception is kept
as a DomainError value so callers can still branch on the domain code.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
"""

from dataclasses import dataclass
from enum import Enum

from src.core.enums import ErrorCode
from src.core.errors import DomainException
from src.core.errors.domain_error import DomainError


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="Booking not found",
        ... )
        >>> error.http_status
        404
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    COMMAND_EXECUTION_FAILED = "command_execution_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    NOT_ELIGIBLE = "not_eligible"
    EXTERNAL_SERVICE_FAILED = "external_service_failed"
    DATA_INTEGRITY_FAILED = "data_integrity_failed"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[ApplicationErrorCode, int] = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: 400,
    ApplicationErrorCode.COMMAND_EXECUTION_FAILED: 500,
    ApplicationErrorCode.NOT_FOUND: 404,
    ApplicationErrorCode.CONFLICT: 409,
    ApplicationErrorCode.NOT_ELIGIBLE: 422,
    ApplicationErrorCode.EXTERNAL_SERVICE_FAILED: 502,
    ApplicationErrorCode.DATA_INTEGRITY_FAILED: 500,
}

_DOMAIN_CODE_MAPPING: dict[ErrorCode, ApplicationErrorCode] = {
    ErrorCode.INVALID_BOOKING_PERIOD: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.INVALID_PICKUP_TIME: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.INVALID_INPUT: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.INVALID_AMOUNT: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.INVALID_BANK_ACCOUNT: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.BANK_ACCOUNT_NOT_VERIFIED: ApplicationErrorCode.NOT_ELIGIBLE,
    ErrorCode.LEG_OUTSIDE_BOOKING_PERIOD: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.VALIDATION_FAILED: ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
    ErrorCode.INVALID_STATE_TRANSITION: ApplicationErrorCode.CONFLICT,
    ErrorCode.BOOKING_NOT_CANCELLABLE: ApplicationErrorCode.NOT_ELIGIBLE,
    ErrorCode.PAYOUT_NOT_ELIGIBLE: ApplicationErrorCode.NOT_ELIGIBLE,
    ErrorCode.BOOKING_NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ErrorCode.BOOKING_LEG_NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ErrorCode.PAYOUT_NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ErrorCode.INCONSISTENT_DATA: ApplicationErrorCode.DATA_INTEGRITY_FAILED,
    ErrorCode.CONCURRENT_MODIFICATION: ApplicationErrorCode.CONFLICT,
    ErrorCode.PAYMENT_GATEWAY_FAILED: ApplicationErrorCode.EXTERNAL_SERVICE_FAILED,
}


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs

    Examples:
        >>> try:
        ...     booking.cancel()
        ... except DomainException as e:
        ...     return Failure(error=ApplicationError.from_domain_exception(e))
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None

    @property
    def http_status(self) -> int:
        """Status code the presentation layer should answer with."""
        return self.code.http_status

    @classmethod
    def from_domain_exception(cls, exc: DomainException) -> "ApplicationError":
        """Translate a raised domain exception into an application error."""
        domain_error = exc.to_error()
        return cls(
            code=_DOMAIN_CODE_MAPPING.get(
                exc.code, ApplicationErrorCode.COMMAND_EXECUTION_FAILED
            ),
            message=exc.message,
            domain_error=domain_error,
            details=domain_error.details,
        )

    @classmethod
    def not_found(cls, resource: str, resource_id: object) -> "ApplicationError":
        return cls(
            code=ApplicationErrorCode.NOT_FOUND,
            message=f"{resource} not found",
            details={"resource": resource, "id": str(resource_id)},
        )

    @classmethod
    def unexpected(cls, exc: Exception) -> "ApplicationError":
        return cls(
            code=ApplicationErrorCode.COMMAND_EXECUTION_FAILED,
            message=f"Unexpected error: {exc}",
            details={"error_type": type(exc).__name__},
        )
