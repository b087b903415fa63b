"""Infrastructure event implementations.

Event Bus:
    - InMemoryEventBus: fail-open, concurrent handler execution

Event Handlers:
    - LoggingEventHandler: src/infrastructure/events/handlers/

Usage:
    >>> from src.infrastructure.events import InMemoryEventBus
    >>> bus = InMemoryEventBus(logger=logger)
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
