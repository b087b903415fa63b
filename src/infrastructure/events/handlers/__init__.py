"""Event handlers reacting to committed domain events.

Handlers:
    - LoggingEventHandler: Structured log line per booking and payout event

Handlers fail open: the event bus logs and swallows their exceptions.
"""

from src.infrastructure.events.handlers.logging_event_handler import LoggingEventHandler

__all__ = [
    "LoggingEventHandler",
]
