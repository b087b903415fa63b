"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console/JSON)
- Clock (system UTC clock)
- Database (in-memory record store)
- Payment gateway (in-memory transfer adapter)

Adapters are imported inside the factories so importing the container
never drags in infrastructure modules that are not used.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings

if TYPE_CHECKING:
    from src.domain.protocols.clock_protocol import ClockProtocol
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.payment_gateway_protocol import PaymentGatewayProtocol
    from src.infrastructure.persistence.database import InMemoryDatabase


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON lines)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=settings.environment.uses_json_logs,
        level=settings.log_level,
        app_name=settings.app_name,
        app_version=settings.app_version,
    )


@lru_cache()
def get_clock() -> "ClockProtocol":
    """Get the wall clock shared by aggregates, factories and services."""
    from src.core.clock import SYSTEM_CLOCK

    return SYSTEM_CLOCK


@lru_cache()
def get_database() -> "InMemoryDatabase":
    """Get the record store singleton (app-scoped).

    Every unit of work opens its own session on this store.
    """
    from src.infrastructure.persistence.database import InMemoryDatabase

    return InMemoryDatabase()


@lru_cache()
def get_payment_gateway() -> "PaymentGatewayProtocol":
    """Get payment gateway singleton (app-scoped).

    Transfers are accepted in the system currency only.
    """
    from src.infrastructure.payments.in_memory_payment_gateway import (
        InMemoryPaymentGateway,
    )

    settings = get_settings()
    return InMemoryPaymentGateway(
        get_logger(), supported_currencies=frozenset({settings.system_currency})
    )
