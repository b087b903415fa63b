"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Only ports with no entity imports are re-exported here. Import
repository, unit-of-work and gateway ports from their own modules so that
entities can depend on ClockProtocol without a circular import.

Usage:
    from src.domain.protocols import ClockProtocol, LoggerProtocol
    from src.domain.protocols.booking_repository import BookingRepository
"""

from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol

__all__ = [
    "ClockProtocol",
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
]
