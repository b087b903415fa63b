"""ConfirmBooking command handler.

Moves a PENDING booking to CONFIRMED, capturing the payment when the
command carries one.
"""

from typing import cast

from src.application.commands.booking_commands import ConfirmBooking
from src.application.errors import ApplicationError
from src.core.errors import DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.booking import Booking
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


class ConfirmBookingHandler:
    """Handler for ConfirmBooking command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per command
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def handle(self, cmd: ConfirmBooking) -> Result[Booking, ApplicationError]:
        """Handle ConfirmBooking command.

        Returns:
            Success(Booking): Booking now CONFIRMED (and PAID with a payment).
            Failure(ApplicationError): Not found, or not PENDING.
        """
        try:
            async with self._uow_factory() as uow:
                booking = await uow.bookings.find_by_id(cmd.booking_id)
                if booking is None:
                    return cast(
                        Result[Booking, ApplicationError],
                        Failure(error=ApplicationError.not_found("Booking", cmd.booking_id)),
                    )

                if cmd.payment_id is None:
                    booking.confirm()
                else:
                    booking.confirm_with_payment(cmd.payment_id)
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
