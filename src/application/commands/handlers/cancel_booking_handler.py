"""CancelBooking command handler.

Cancels a CONFIRMED booking while the cancellation window is still open
(at least 12 hours before the period starts). A PAID booking moves to
REFUND_PROCESSING; settling the refund is a separate step.

Architecture:
- Application layer handler
- The window check is Booking.is_eligible_for_cancellation(); the status
  guard itself stays in Booking.cancel()
- Uses Result types for error handling
"""

from typing import cast

from src.application.commands.booking_commands import CancelBooking
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.enums import ErrorCode
from src.core.errors import DomainError, DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.booking import Booking
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


class CancelBookingError:
    """CancelBooking-specific errors."""

    NOT_CANCELLABLE = (
        "Booking can only be cancelled while confirmed and at least 12 hours "
        "before it starts"
    )


class CancelBookingHandler:
    """Handler for CancelBooking command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per command
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def handle(self, cmd: CancelBooking) -> Result[Booking, ApplicationError]:
        """Handle CancelBooking command.

        Returns:
            Success(Booking): Booking now CANCELLED.
            Failure(ApplicationError): Not found, or outside the cancellation
                window (NOT_ELIGIBLE).

        Side Effects:
            - Publishes BookingCancelled after commit
        """
        try:
            async with self._uow_factory() as uow:
                booking = await uow.bookings.find_by_id(cmd.booking_id)
                if booking is None:
                    return cast(
                        Result[Booking, ApplicationError],
                        Failure(error=ApplicationError.not_found("Booking", cmd.booking_id)),
                    )

                if not booking.is_eligible_for_cancellation():
                    return cast(
                        Result[Booking, ApplicationError],
                        Failure(error=_not_cancellable(booking)),
                    )

                booking.cancel(cmd.reason)
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


def _not_cancellable(booking: Booking) -> ApplicationError:
    details = {
        "booking_reference": booking.booking_reference,
        "status": booking.status.value,
    }
    return ApplicationError(
        code=ApplicationErrorCode.NOT_ELIGIBLE,
        message=CancelBookingError.NOT_CANCELLABLE,
        domain_error=DomainError(
            code=ErrorCode.BOOKING_NOT_CANCELLABLE,
            message=CancelBookingError.NOT_CANCELLABLE,
            details=details,
        ),
        details=details,
    )
