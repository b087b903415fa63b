"""Unit of work factory.

Repositories are not handed out on their own: they belong to a unit of
work, which stages their writes and publishes the aggregates' events after
commit. Every call returns a fresh unit of work.
"""

from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_clock, get_database, get_logger

if TYPE_CHECKING:
    from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol
    from src.domain.value_objects.chauffeur_assignment_policy import (
        ChauffeurAssignmentPolicy,
    )


def get_assignment_policy() -> "ChauffeurAssignmentPolicy":
    """Chauffeur assignment statuses from settings."""
    from src.domain.value_objects.chauffeur_assignment_policy import (
        ChauffeurAssignmentPolicy,
    )

    return ChauffeurAssignmentPolicy.from_names(
        get_settings().assignable_status_names
    )


def get_unit_of_work() -> "UnitOfWorkProtocol":
    """Get a new unit of work (command-scoped).

    Returns:
        InMemoryUnitOfWork bound to the shared database and event bus.

    Usage:
        async with get_unit_of_work() as uow:
            booking = await uow.bookings.find_by_id(booking_id)
            booking.confirm()
            await uow.bookings.save(booking)
    """
    from src.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork

    return InMemoryUnitOfWork(
        get_database(),
        get_event_bus(),
        get_logger(),
        clock=get_clock(),
        assignment_policy=get_assignment_policy(),
    )
