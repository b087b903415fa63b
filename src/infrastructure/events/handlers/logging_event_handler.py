"""Logging event handler for booking and payout events.

Writes one structured log line per committed domain event.

Log Levels:
    - INFO: Lifecycle progress (created, confirmed, activated, completed,
      chauffeur changes, legs, leg reminders, payout initiated/processing/
      completed)
    - WARNING: Cancellations, refund failures, failed payouts

Structured Fields:
    - event_id / occurred_at on every line
    - booking_id, booking_reference for booking events
    - payout_id, fleet_owner_id for payout events

Usage:
    >>> handler = LoggingEventHandler(logger=get_logger())
    >>> for event_type, callback in handler.subscriptions():
    ...     event_bus.subscribe(event_type, callback)
"""

from collections.abc import Awaitable, Callable
from typing import Any

from src.domain.enums import PaymentStatus
from src.domain.events.base_event import DomainEvent
from src.domain.events.booking_events import (
    BookingActivated,
    BookingCancelled,
    BookingChauffeurAssigned,
    BookingChauffeurUnassigned,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingLegEnded,
    BookingLegEndReminder,
    BookingLegStarted,
    BookingLegStartReminder,
    BookingPaymentStatusChanged,
)
from src.domain.events.payout_events import (
    PayoutCompleted,
    PayoutFailed,
    PayoutInitiated,
    PayoutProcessing,
)
from src.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Structured logging of every booking and payout event.

    Attributes:
        _logger: Logger protocol implementation (from container).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def subscriptions(self) -> list[tuple[type[DomainEvent], Callable[[Any], Awaitable[None]]]]:
        """Event type → bound handler pairs for the container to subscribe."""
        return [
            (BookingCreated, self.handle_booking_created),
            (BookingConfirmed, self.handle_booking_confirmed),
            (BookingActivated, self.handle_booking_activated),
            (BookingCompleted, self.handle_booking_completed),
            (BookingCancelled, self.handle_booking_cancelled),
            (BookingChauffeurAssigned, self.handle_chauffeur_assigned),
            (BookingChauffeurUnassigned, self.handle_chauffeur_unassigned),
            (BookingLegStarted, self.handle_leg_started),
            (BookingLegEnded, self.handle_leg_ended),
            (BookingLegStartReminder, self.handle_leg_start_reminder),
            (BookingLegEndReminder, self.handle_leg_end_reminder),
            (BookingPaymentStatusChanged, self.handle_payment_status_changed),
            (PayoutInitiated, self.handle_payout_initiated),
            (PayoutProcessing, self.handle_payout_processing),
            (PayoutCompleted, self.handle_payout_completed),
            (PayoutFailed, self.handle_payout_failed),
        ]

    # =========================================================================
    # Booking lifecycle
    # =========================================================================

    async def handle_booking_created(self, event: BookingCreated) -> None:
        self._logger.info(
            "booking_created",
            **_envelope(event),
            booking_id=str(event.booking_id),
            booking_reference=event.booking_reference,
            customer_id=event.customer_id,
        )

    async def handle_booking_confirmed(self, event: BookingConfirmed) -> None:
        self._logger.info(
            "booking_confirmed",
            **_envelope(event),
            booking_id=str(event.booking_id),
            booking_reference=event.booking_reference,
            with_payment=event.payment_id is not None,
        )

    async def handle_booking_activated(self, event: BookingActivated) -> None:
        self._logger.info(
            "booking_activated",
            **_envelope(event),
            booking_id=str(event.booking_id),
            booking_reference=event.booking_reference,
            chauffeur_id=event.chauffeur_id,
        )

    async def handle_booking_completed(self, event: BookingCompleted) -> None:
        self._logger.info(
            "booking_completed",
            **_envelope(event),
            booking_id=str(event.booking_id),
            booking_reference=event.booking_reference,
            chauffeur_id=event.chauffeur_id,
            fleet_owner_payout_amount_net=str(event.fleet_owner_payout_amount_net),
        )

    async def handle_booking_cancelled(self, event: BookingCancelled) -> None:
        """Cancellations are logged at WARNING: they usually trigger a refund."""
        self._logger.warning(
            "booking_cancelled",
            **_envelope(event),
            booking_id=str(event.booking_id),
            booking_reference=event.booking_reference,
            chauffeur_id=event.chauffeur_id,
            cancellation_reason=event.cancellation_reason,
        )

    # =========================================================================
    # Chauffeur assignment
    # =========================================================================

    async def handle_chauffeur_assigned(self, event: BookingChauffeurAssigned) -> None:
        self._logger.info(
            "booking_chauffeur_assigned",
            **_envelope(event),
            booking_id=str(event.booking_id),
            chauffeur_id=event.chauffeur_id,
            fleet_owner_id=event.fleet_owner_id,
            assigned_by=event.assigned_by,
        )

    async def handle_chauffeur_unassigned(self, event: BookingChauffeurUnassigned) -> None:
        self._logger.info(
            "booking_chauffeur_unassigned",
            **_envelope(event),
            booking_id=str(event.booking_id),
            chauffeur_id=event.chauffeur_id,
            fleet_owner_id=event.fleet_owner_id,
            unassigned_by=event.unassigned_by,
            reason=event.reason,
        )

    # =========================================================================
    # Legs and payment
    # =========================================================================

    async def handle_leg_started(self, event: BookingLegStarted) -> None:
        self._logger.info(
            "booking_leg_started",
            **_envelope(event),
            booking_id=str(event.booking_id),
            leg_id=str(event.leg_id),
            leg_date=event.leg_date.isoformat(),
        )

    async def handle_leg_ended(self, event: BookingLegEnded) -> None:
        self._logger.info(
            "booking_leg_ended",
            **_envelope(event),
            booking_id=str(event.booking_id),
            leg_id=str(event.leg_id),
            leg_date=event.leg_date.isoformat(),
        )

    async def handle_leg_start_reminder(self, event: BookingLegStartReminder) -> None:
        self._logger.info(
            "booking_leg_start_reminder",
            **_envelope(event),
            booking_id=str(event.booking_id),
            booking_reference=event.booking_reference,
            chauffeur_id=event.chauffeur_id,
            leg_date=event.leg_date.isoformat(),
            leg_start_time=event.leg_start_time.isoformat(),
        )

    async def handle_leg_end_reminder(self, event: BookingLegEndReminder) -> None:
        self._logger.info(
            "booking_leg_end_reminder",
            **_envelope(event),
            booking_id=str(event.booking_id),
            booking_reference=event.booking_reference,
            chauffeur_id=event.chauffeur_id,
            leg_date=event.leg_date.isoformat(),
            leg_end_time=event.leg_end_time.isoformat(),
        )

    async def handle_payment_status_changed(self, event: BookingPaymentStatusChanged) -> None:
        log = (
            self._logger.warning
            if event.new_status == PaymentStatus.REFUND_FAILED.value
            else self._logger.info
        )
        log(
            "booking_payment_status_changed",
            **_envelope(event),
            booking_id=str(event.booking_id),
            previous_status=event.previous_status,
            new_status=event.new_status,
        )

    # =========================================================================
    # Payouts
    # =========================================================================

    async def handle_payout_initiated(self, event: PayoutInitiated) -> None:
        self._logger.info(
            "payout_initiated",
            **_envelope(event),
            payout_id=str(event.payout_id),
            fleet_owner_id=event.fleet_owner_id,
            amount=str(event.amount),
            booking_id=str(event.booking_id) if event.booking_id else None,
            extension_id=event.extension_id,
        )

    async def handle_payout_processing(self, event: PayoutProcessing) -> None:
        self._logger.info(
            "payout_processing",
            **_envelope(event),
            payout_id=str(event.payout_id),
            fleet_owner_id=event.fleet_owner_id,
            provider_reference=event.provider_reference,
        )

    async def handle_payout_completed(self, event: PayoutCompleted) -> None:
        self._logger.info(
            "payout_completed",
            **_envelope(event),
            payout_id=str(event.payout_id),
            fleet_owner_id=event.fleet_owner_id,
            amount=str(event.amount),
        )

    async def handle_payout_failed(self, event: PayoutFailed) -> None:
        self._logger.warning(
            "payout_failed",
            **_envelope(event),
            payout_id=str(event.payout_id),
            fleet_owner_id=event.fleet_owner_id,
            amount=str(event.amount),
            reason=event.reason,
        )


def _envelope(event: DomainEvent) -> dict[str, str]:
    return {
        "event_id": str(event.event_id),
        "occurred_at": event.occurred_at.isoformat(),
    }
