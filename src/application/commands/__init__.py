"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (CreateBooking, InitiatePayout).

Each command has a corresponding handler in commands/handlers/ that loads
aggregates through a unit of work and returns a Result.
"""

from src.application.commands.booking_commands import (
    AssignChauffeur,
    CancelBooking,
    ConfirmBooking,
    CreateBooking,
    UnassignChauffeur,
)
from src.application.commands.payout_commands import (
    InitiatePayout,
    PendingPayoutsSummary,
    ProcessPendingPayouts,
    RecordPayoutOutcome,
    RetryPayout,
)

__all__ = [
    # Booking commands
    "AssignChauffeur",
    "CancelBooking",
    "ConfirmBooking",
    "CreateBooking",
    "UnassignChauffeur",
    # Payout commands
    "InitiatePayout",
    "PendingPayoutsSummary",
    "ProcessPendingPayouts",
    "RecordPayoutOutcome",
    "RetryPayout",
]
