"""Booking handler dependency factories.

Handler instances for booking operations:
- Booking commands (create, confirm, cancel)
- Chauffeur assignment (assign, unassign)
- Time-driven lifecycle (activation, legs, completion, reminders)

Handlers receive the unit of work factory, not a unit of work: each
command opens its own.
"""

from typing import TYPE_CHECKING

from src.core.container.domain_services import get_cost_calculator, get_period_factory
from src.core.container.infrastructure import get_clock, get_logger
from src.core.container.repositories import get_assignment_policy, get_unit_of_work

if TYPE_CHECKING:
    from src.application.commands.handlers.assign_chauffeur_handler import (
        AssignChauffeurHandler,
    )
    from src.application.commands.handlers.cancel_booking_handler import (
        CancelBookingHandler,
    )
    from src.application.commands.handlers.confirm_booking_handler import (
        ConfirmBookingHandler,
    )
    from src.application.commands.handlers.create_booking_handler import (
        CreateBookingHandler,
    )
    from src.application.commands.handlers.unassign_chauffeur_handler import (
        UnassignChauffeurHandler,
    )
    from src.application.services.booking_lifecycle_service import (
        BookingLifecycleService,
    )


# ============================================================================
# Booking Handler Factories
# ============================================================================


def get_create_booking_handler() -> "CreateBookingHandler":
    """Get CreateBooking command handler.

    Creates handler with:
    - Unit of work factory
    - BookingPeriodFactory and BookingCostCalculator (app-scoped)
    - ChauffeurAssignmentPolicy from settings

    Returns:
        CreateBookingHandler instance.
    """
    from src.application.commands.handlers.create_booking_handler import (
        CreateBookingHandler,
    )

    return CreateBookingHandler(
        uow_factory=get_unit_of_work,
        period_factory=get_period_factory(),
        cost_calculator=get_cost_calculator(),
        assignment_policy=get_assignment_policy(),
        clock=get_clock(),
    )


def get_confirm_booking_handler() -> "ConfirmBookingHandler":
    from src.application.commands.handlers.confirm_booking_handler import (
        ConfirmBookingHandler,
    )

    return ConfirmBookingHandler(uow_factory=get_unit_of_work)


def get_cancel_booking_handler() -> "CancelBookingHandler":
    from src.application.commands.handlers.cancel_booking_handler import (
        CancelBookingHandler,
    )

    return CancelBookingHandler(uow_factory=get_unit_of_work)


def get_assign_chauffeur_handler() -> "AssignChauffeurHandler":
    from src.application.commands.handlers.assign_chauffeur_handler import (
        AssignChauffeurHandler,
    )

    return AssignChauffeurHandler(uow_factory=get_unit_of_work)


def get_unassign_chauffeur_handler() -> "UnassignChauffeurHandler":
    from src.application.commands.handlers.unassign_chauffeur_handler import (
        UnassignChauffeurHandler,
    )

    return UnassignChauffeurHandler(uow_factory=get_unit_of_work)


def get_booking_lifecycle_service() -> "BookingLifecycleService":
    """Get the scheduler-driven lifecycle service.

    Returns:
        BookingLifecycleService using the shared clock and logger.
    """
    from src.application.services.booking_lifecycle_service import (
        BookingLifecycleService,
    )

    return BookingLifecycleService(
        uow_factory=get_unit_of_work, logger=get_logger(), clock=get_clock()
    )
