"""Invalid lifecycle transition errors.

Raised by any guarded transition method on Booking, BookingLeg or Payout when
the current status does not allow the attempted action.

Example:
    >>> booking.cancel()  # booking is COMPLETED
    InvalidStateTransitionError: Cannot cancel booking in COMPLETED status
"""

from enum import Enum

from src.core.enums import ErrorCode
from src.core.errors import DomainException


class InvalidStateTransitionError(DomainException):
    """Status does not permit the attempted action.

    Attributes:
        entity: Lower-case entity name ("booking", "leg", "payout").
        current_status: Status at the time of the attempt.
        action: Attempted action verb ("cancel", "complete", ...).
    """

    code = ErrorCode.INVALID_STATE_TRANSITION

    def __init__(
        self,
        *,
        entity: str,
        current_status: Enum,
        action: str,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Cannot {action} {entity} in {current_status.value} status",
            details={
                "entity": entity,
                "current_status": str(current_status.value),
                "action": action,
            },
        )
        self.entity = entity
        self.current_status = current_status
        self.action = action
