"""AssignChauffeur command handler.

Assigns a chauffeur to a booking, or replaces the current one. Assigning
the chauffeur already on the booking succeeds without recording events.
"""

from typing import cast

from src.application.commands.booking_commands import AssignChauffeur
from src.application.errors import ApplicationError
from src.core.errors import DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.booking import Booking
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


class AssignChauffeurHandler:
    """Handler for AssignChauffeur command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per command
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def handle(self, cmd: AssignChauffeur) -> Result[Booking, ApplicationError]:
        """Handle AssignChauffeur command.

        Returns:
            Success(Booking): Booking with the chauffeur assigned.
            Failure(ApplicationError): Not found, or the booking status does
                not accept an assignment.

        Side Effects:
            - Publishes BookingChauffeurUnassigned (on reassignment) and
              BookingChauffeurAssigned after commit
        """
        try:
            async with self._uow_factory() as uow:
                booking = await uow.bookings.find_by_id(cmd.booking_id)
                if booking is None:
                    return cast(
                        Result[Booking, ApplicationError],
                        Failure(error=ApplicationError.not_found("Booking", cmd.booking_id)),
                    )

                booking.assign_chauffeur(
                    cmd.chauffeur_id, cmd.fleet_owner_id, cmd.assigned_by
                )
                await uow.bookings.save(booking)

            return Success(value=booking)

        except DomainException as e:
            return cast(
                Result[Booking, ApplicationError],
                Failure(error=ApplicationError.from_domain_exception(e)),
            )
        except Exception as e:
            return cast(
                Result[Booking, ApplicationError],
                Failure(error=ApplicationError.unexpected(e)),
            )
