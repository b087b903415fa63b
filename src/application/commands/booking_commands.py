"""Booking commands.

Commands that create bookings and move them through their lifecycle on
behalf of a customer, a fleet owner or an operator.

Architecture:
    - Commands are immutable value objects representing user intent
    - Handlers load the booking inside a unit of work, call one aggregate
      operation and let the unit of work publish the resulting events
    - Time-driven transitions (activation, completion, legs) are not
      commands; BookingLifecycleService runs them
"""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from src.domain.enums import BookingType
from src.domain.value_objects.car_rates import CarRates
from src.domain.value_objects.pickup_time import PickupTime


@dataclass(frozen=True, kw_only=True)
class CreateBooking:
    """Command to price and create a new booking.

    The period is validated by BookingPeriodFactory, priced by
    BookingCostCalculator and stored with one leg per leg window.

    Attributes:
        customer_id: Customer making the booking.
        car_id: Car being booked.
        car_rates: Rates of the car, from the fleet catalogue.
        booking_type: DAY, NIGHT or FULL_DAY (enum or its name).
        start_date: First day (DAY/NIGHT) or start instant (FULL_DAY).
        end_date: Last day (DAY/NIGHT) or end instant (FULL_DAY).
        pickup_time: Wall-clock pickup time, DAY bookings only.
        pickup_address: Where the chauffeur picks the customer up.
        drop_off_address: Where the service ends.
        include_security_detail: Book security coverage for every leg.
        special_requests: Free-text customer notes.
        payment_intent: Gateway payment intent created at checkout.
    """

    customer_id: str
    car_id: str
    car_rates: CarRates
    booking_type: BookingType | str
    start_date: date | datetime
    pickup_address: str
    drop_off_address: str
    end_date: date | datetime | None = None
    pickup_time: PickupTime | str | None = None
    include_security_detail: bool = False
    special_requests: str | None = None
    payment_intent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ConfirmBooking:
    """Command to confirm a PENDING booking.

    Attributes:
        booking_id: Booking to confirm.
        payment_id: Captured payment; when given the booking is also marked
            PAID.
    """

    booking_id: UUID
    payment_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class CancelBooking:
    """Command to cancel a CONFIRMED booking.

    Only allowed while the booking is eligible for cancellation (at least
    12 hours before the period starts).

    Attributes:
        booking_id: Booking to cancel.
        reason: Why it is cancelled (a default customer reason when omitted).
    """

    booking_id: UUID
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class AssignChauffeur:
    """Command to assign (or reassign) the chauffeur of a booking.

    Attributes:
        booking_id: Booking to staff.
        chauffeur_id: Chauffeur to assign.
        fleet_owner_id: Fleet owner the chauffeur works for.
        assigned_by: User performing the assignment.
    """

    booking_id: UUID
    chauffeur_id: str
    fleet_owner_id: str
    assigned_by: str


@dataclass(frozen=True, kw_only=True)
class UnassignChauffeur:
    """Command to remove the chauffeur from a booking.

    Attributes:
        booking_id: Booking to update.
        fleet_owner_id: Fleet owner the chauffeur works for.
        unassigned_by: User performing the removal.
        reason: Why the chauffeur was removed.
    """

    booking_id: UUID
    fleet_owner_id: str
    unassigned_by: str
    reason: str | None = None
