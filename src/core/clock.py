"""Clock adapters for reading "now".

Every time-aware predicate in the domain (period validation, eligibility
queries, reminder windows) reads the current instant through a clock
object instead of calling datetime.now() directly, so tests can pin time.

Adapters:
    - SystemClock: Wall-clock time in UTC (production default)
    - FixedClock: Settable instant for deterministic tests and replays

Usage:
    >>> clock = FixedClock(datetime(2025, 1, 1, 9, tzinfo=UTC))
    >>> booking.is_eligible_for_activation()  # booking built with clock=clock
    >>> clock.advance(timedelta(hours=12))

Both satisfy src.domain.protocols.clock_protocol.ClockProtocol structurally.
"""

from datetime import UTC, datetime, timedelta


class SystemClock:
    """Clock backed by the system wall clock (UTC)."""

    def now(self) -> datetime:
        """Return the current instant (timezone-aware, UTC)."""
        return datetime.now(UTC)


class FixedClock:
    """Clock frozen at an explicit instant until moved.

    Args:
        instant: Starting instant. Naive datetimes are treated as UTC.
    """

    def __init__(self, instant: datetime) -> None:
        self._instant = _ensure_aware(instant)

    def now(self) -> datetime:
        """Return the pinned instant."""
        return self._instant

    def set(self, instant: datetime) -> None:
        """Move the clock to a new instant."""
        self._instant = _ensure_aware(instant)

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward (or backward, for negative deltas)."""
        self._instant = self._instant + delta


def _ensure_aware(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant


SYSTEM_CLOCK = SystemClock()
"""Shared default clock for aggregates and factories built without one."""
