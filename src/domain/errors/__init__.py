"""Domain errors package.

Every error here is a DomainException subclass carrying an ErrorCode and is
raised synchronously by the operation that detects the violation.

Usage:
    from src.domain.errors import InvalidStateTransitionError, InvalidInputError
"""

from src.domain.errors.booking_period_error import InvalidBookingPeriodError
from src.domain.errors.invalid_input_error import (
    BankAccountNotVerifiedError,
    InvalidAmountError,
    InvalidInputError,
    LegOutsideBookingPeriodError,
)
from src.domain.errors.persistence_error import (
    ConcurrentModificationError,
    InconsistentDataError,
)
from src.domain.errors.state_transition_error import InvalidStateTransitionError

__all__ = [
    "BankAccountNotVerifiedError",
    "ConcurrentModificationError",
    "InconsistentDataError",
    "InvalidAmountError",
    "InvalidBookingPeriodError",
    "InvalidInputError",
    "InvalidStateTransitionError",
    "LegOutsideBookingPeriodError",
]
