"""LoggerProtocol definition for structured logging.

Application services and infrastructure adapters log through this port, never
through a logging backend directly. Every call is an event name plus
key-value context; identifiers are passed as strings.

Log Levels:
    - DEBUG: Per-booking decisions inside automation loops
    - INFO: Committed transitions, published events, gateway acceptances
    - WARNING: Gateway rejections, skipped bookings
    - ERROR: A workflow step failed for one booking or payout
    - CRITICAL: Persisted data cannot be mapped back to an aggregate

Security:
    - Never log full bank account numbers (use masked_account_number)
    - Never log payment gateway secrets

Usage:
    from src.core.container import get_logger

    logger = get_logger().bind(booking_reference=booking.booking_reference)
    logger.info("booking_activated", booking_id=str(booking.id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        ...

    def info(self, message: str, /, **context: Any) -> None:
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error with optional exception details.

        Args:
            message: Snake_case event name ("booking_activation_failed").
            error: Exception that caused the failure; adapters add
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a failure that needs a human (corrupt stored booking or payout)."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return a new logger with permanently bound context.

        The original logger is unchanged.

        Example:
            booking_logger = logger.bind(booking_id=str(booking.id))
            booking_logger.info("booking_leg_started", leg_date="2025-03-01")
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
