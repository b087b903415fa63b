"""UnassignChauffeur command handler."""

from typing import cast

from src.application.commands.booking_commands import UnassignChauffeur
from src.application.errors import ApplicationError
from src.core.errors import DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.booking import Booking
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


class UnassignChauffeurHandler:
    """Handler for UnassignChauffeur command.

    Removing a chauffeur is refused once the booking is ACTIVE, COMPLETED
    or CANCELLED.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per command
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def handle(self, cmd: UnassignChauffeur) -> Result[Booking, ApplicationError]:
        try:
            async with self._uow_factory() as uow:
                booking = await uow.bookings.find_by_id(cmd.booking_id)
                if booking is None:
                    return cast(
                        Result[Booking, ApplicationError],
                        Failure(error=ApplicationError.not_found("Booking", cmd.booking_id)),
                    )

                booking.unassign_chauffeur(
                    cmd.fleet_owner_id, cmd.unassigned_by, cmd.reason
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
