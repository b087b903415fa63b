"""Integration fixtures: a real event bus wired the way the container wires it.

The shared `event_bus` fixture is overridden with an InMemoryEventBus that
has the LoggingEventHandler subscribed, plus a recorder that keeps every
delivered event in order.
"""

import pytest

from src.domain.events.base_event import DomainEvent
from src.infrastructure.events.handlers.logging_event_handler import LoggingEventHandler
from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus


class EventRecorder:
    """Subscriber that remembers what it was given."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    async def __call__(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[DomainEvent]) -> list[DomainEvent]:
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def event_bus(logger, recorder) -> InMemoryEventBus:
    bus = InMemoryEventBus(logger=logger)
    for event_type, handler in LoggingEventHandler(logger=logger).subscriptions():
        bus.subscribe(event_type, handler)
        bus.subscribe(event_type, recorder)
    return bus
