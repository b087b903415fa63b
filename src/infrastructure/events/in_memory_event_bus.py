"""In-memory event bus implementation.

Implements EventBusProtocol with a dictionary registry (event type → list of
async handlers). The unit of work publishes committed booking and payout
events through it; handlers run concurrently and fail open.

Architecture:
    - Hexagonal adapter for EventBusProtocol
    - Exact type routing (no inheritance matching)
    - asyncio.gather(return_exceptions=True): one failing handler never
      stops the others and never reaches the publisher
    - Single process, single event loop

Usage:
    >>> bus = InMemoryEventBus(logger=get_logger())
    >>> bus.subscribe(BookingCompleted, schedule_payout)
    >>> await bus.publish(event)
"""

import asyncio
from collections import defaultdict

from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryEventBus:
    """In-memory event bus with fail-open behavior.

    Attributes:
        _handlers: Event class → registered async handlers.
        _logger: Logger for publishing and handler failures.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._logger = logger

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register a handler for one event type.

        The same handler may be registered for many types (the logging handler
        subscribes to every booking and payout event).
        """
        self._handlers[event_type].append(handler)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """Run every handler registered for type(event); never raises.

        Flow:
            1. Look up handlers for type(event)
            2. No handlers: return (not an error)
            3. Run them with asyncio.gather(return_exceptions=True)
            4. Log each handler exception at warning level
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])
        if not handlers:
            return

        self._logger.debug(
            "event_publishing",
            event_type=event_type.__name__,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        results = await asyncio.gather(
            *(handler(event) for handler in handlers),
            return_exceptions=True,
        )

        for handler, result in zip(handlers, results, strict=True):
            if isinstance(result, Exception):
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event_type.__name__,
                    event_id=str(event.event_id),
                    handler_name=getattr(handler, "__qualname__", repr(handler)),
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
