"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_create_booking_handler, ...

The container is organized into modules by concern:
- infrastructure: Core services (logging, clock, database, payment gateway)
- events: Event bus and subscriptions
- repositories: Unit of work factory and assignment policy
- domain_services: Period factory, cost calculator, payout policy
- booking_handlers: Booking command handlers and lifecycle service
- payout_handlers: Payout command handlers
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_clock,
    get_database,
    get_logger,
    get_payment_gateway,
)

# Event bus
from src.core.container.events import get_event_bus

# Unit of work
from src.core.container.repositories import get_assignment_policy, get_unit_of_work

# Domain services
from src.core.container.domain_services import (
    get_cost_calculator,
    get_payout_policy,
    get_period_factory,
)

# Booking handlers
from src.core.container.booking_handlers import (
    get_assign_chauffeur_handler,
    get_booking_lifecycle_service,
    get_cancel_booking_handler,
    get_confirm_booking_handler,
    get_create_booking_handler,
    get_unassign_chauffeur_handler,
)

# Payout handlers
from src.core.container.payout_handlers import (
    get_initiate_payout_handler,
    get_payout_disbursement,
    get_process_pending_payouts_handler,
    get_record_payout_outcome_handler,
    get_retry_payout_handler,
)

__all__ = [
    # Infrastructure
    "get_clock",
    "get_database",
    "get_logger",
    "get_payment_gateway",
    # Events
    "get_event_bus",
    # Unit of work
    "get_assignment_policy",
    "get_unit_of_work",
    # Domain services
    "get_cost_calculator",
    "get_payout_policy",
    "get_period_factory",
    # Booking handlers
    "get_assign_chauffeur_handler",
    "get_booking_lifecycle_service",
    "get_cancel_booking_handler",
    "get_confirm_booking_handler",
    "get_create_booking_handler",
    "get_unassign_chauffeur_handler",
    # Payout handlers
    "get_initiate_payout_handler",
    "get_payout_disbursement",
    "get_process_pending_payouts_handler",
    "get_record_payout_outcome_handler",
    "get_retry_payout_handler",
]
