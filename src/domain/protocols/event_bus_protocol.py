"""Event bus protocol (port) for domain events.

Aggregates never publish. They buffer events, and the unit of work hands
them to the event bus after a successful commit, in the order they were
recorded.

Architecture:
    - Protocol (structural typing, NOT ABC inheritance)
    - Domain layer defines the port, infrastructure provides adapters
    - Container (src/core/container/events.py) provides the singleton

Implementations:
    - InMemoryEventBus: src/infrastructure/events/in_memory_event_bus.py

Usage:
    >>> event_bus = get_event_bus()
    >>> async def notify_customer(event: BookingConfirmed) -> None:
    ...     ...
    >>> event_bus.subscribe(BookingConfirmed, notify_customer)
    >>> await event_bus.publish(event)
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from src.domain.events.base_event import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]
"""Async handler receiving one event and returning None.

Handlers run after the commit, so they observe facts. They must not raise for
expected conditions; the bus logs and swallows handler failures.
"""


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. Fail-open: one handler failure must not stop the others.
        2. Async handlers.
        3. Exact type routing: handlers receive only the event type they
           subscribed to (no inheritance matching).
        4. No ordering between handlers of the same event.

    Methods:
        subscribe: Register a handler for an event type
        publish: Deliver an event to all registered handlers
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register a handler for one event type.

        Args:
            event_type: Event class, e.g. BookingCompleted.
            handler: Async callable invoked with each published event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver an event to every handler registered for type(event).

        Never raises to the publisher. No handlers means no-op.

        Args:
            event: Committed domain event.
        """
        ...
