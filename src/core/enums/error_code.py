"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Carried by domain exceptions and by the DomainError values handlers return.

Categories:
- Validation errors (INVALID_*)
- Lifecycle errors (INVALID_STATE_TRANSITION, *_NOT_ELIGIBLE)
- Resource errors (*_NOT_FOUND)
- Persistence errors (INCONSISTENT_DATA, CONCURRENT_MODIFICATION)
- External collaborator errors (PAYMENT_GATEWAY_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_BOOKING_PERIOD = "invalid_booking_period"
    INVALID_PICKUP_TIME = "invalid_pickup_time"
    INVALID_INPUT = "invalid_input"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_BANK_ACCOUNT = "invalid_bank_account"
    BANK_ACCOUNT_NOT_VERIFIED = "bank_account_not_verified"
    LEG_OUTSIDE_BOOKING_PERIOD = "leg_outside_booking_period"
    VALIDATION_FAILED = "validation_failed"

    # Lifecycle errors
    INVALID_STATE_TRANSITION = "invalid_state_transition"
    BOOKING_NOT_CANCELLABLE = "booking_not_cancellable"
    PAYOUT_NOT_ELIGIBLE = "payout_not_eligible"

    # Resource errors
    BOOKING_NOT_FOUND = "booking_not_found"
    BOOKING_LEG_NOT_FOUND = "booking_leg_not_found"
    PAYOUT_NOT_FOUND = "payout_not_found"

    # Persistence errors
    INCONSISTENT_DATA = "inconsistent_data"
    CONCURRENT_MODIFICATION = "concurrent_modification"

    # External collaborator errors
    PAYMENT_GATEWAY_FAILED = "payment_gateway_failed"
