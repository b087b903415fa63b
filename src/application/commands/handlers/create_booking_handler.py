"""CreateBooking command handler.

Validates the requested period, prices it, builds one leg per leg window
and stores the booking. BookingCreated is recorded once the repository has
assigned the booking's identity and is published after commit.

Architecture:
- Application layer handler (orchestrates domain services)
- Period rules live in BookingPeriodFactory, pricing in BookingCostCalculator
- Uses Result types for error handling
- Domain exceptions become Failure(ApplicationError) at this boundary
"""

from typing import cast

from src.application.commands.booking_commands import CreateBooking
from src.application.errors import ApplicationError
from src.core.clock import SYSTEM_CLOCK
from src.core.errors import DomainException
from src.core.result import Failure, Result, Success
from src.domain.entities.booking import Booking
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory
from src.domain.services.booking_cost_calculator import BookingCostCalculator
from src.domain.services.booking_period_factory import (
    BookingPeriodFactory,
    BookingPeriodRequest,
)
from src.domain.value_objects.chauffeur_assignment_policy import (
    DEFAULT_ASSIGNMENT_POLICY,
    ChauffeurAssignmentPolicy,
)


class CreateBookingHandler:
    """Handler for CreateBooking command.

    Dependencies (injected via constructor):
        - UnitOfWorkFactory: Fresh unit of work per command
        - BookingPeriodFactory: Period validation
        - BookingCostCalculator: Pricing
        - ChauffeurAssignmentPolicy: Statuses that accept a chauffeur
        - ClockProtocol: Source of "now" for the new aggregate
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        period_factory: BookingPeriodFactory,
        cost_calculator: BookingCostCalculator,
        assignment_policy: ChauffeurAssignmentPolicy = DEFAULT_ASSIGNMENT_POLICY,
        clock: ClockProtocol = SYSTEM_CLOCK,
    ) -> None:
        self._uow_factory = uow_factory
        self._period_factory = period_factory
        self._cost_calculator = cost_calculator
        self._assignment_policy = assignment_policy
        self._clock = clock

    async def handle(self, cmd: CreateBooking) -> Result[Booking, ApplicationError]:
        """Handle CreateBooking command.

        Args:
            cmd: CreateBooking command.

        Returns:
            Success(Booking): PENDING booking with id and legs assigned.
            Failure(ApplicationError): Invalid period, input or pricing.

        Side Effects:
            - Stores the booking and its legs
            - Publishes BookingCreated after commit
        """
        try:
            period = self._period_factory.create(
                BookingPeriodRequest(
                    booking_type=cmd.booking_type,
                    start_date=cmd.start_date,
                    end_date=cmd.end_date,
                    pickup_time=cmd.pickup_time,
                )
            )
            breakdown = self._cost_calculator.calculate(
                period,
                cmd.car_rates,
                include_security_detail=cmd.include_security_detail,
            )

            booking = Booking.create(
                customer_id=cmd.customer_id,
                car_id=cmd.car_id,
                period=period,
                pickup_address=cmd.pickup_address,
                drop_off_address=cmd.drop_off_address,
                financials=breakdown.to_financials(),
                include_security_detail=cmd.include_security_detail,
                special_requests=cmd.special_requests,
                payment_intent=cmd.payment_intent,
                assignment_policy=self._assignment_policy,
                clock=self._clock,
            )
            for leg in breakdown.build_legs(self._clock):
                booking.add_leg(leg)

            async with self._uow_factory() as uow:
                await uow.bookings.add(booking)
                booking.mark_as_created()

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
