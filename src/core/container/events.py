"""Event bus dependency factory.

Application-scoped singleton for domain event publishing. Subscriptions are
wired once, at first use: the logging handler listens to every booking and
payout event.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Returns:
        Event bus implementing EventBusProtocol, with the LoggingEventHandler
        subscribed to every booking and payout event.

    Usage:
        event_bus = get_event_bus()
        await event_bus.publish(event)  # normally done by the unit of work
    """
    from src.core.container.infrastructure import get_logger
    from src.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    event_bus = InMemoryEventBus(logger=get_logger())

    logging_handler = LoggingEventHandler(logger=get_logger())
    for event_type, handler in logging_handler.subscriptions():
        event_bus.subscribe(event_type, handler)

    return event_bus
