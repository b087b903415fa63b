"""ClockProtocol: the single source of "now" for the domain.

Every eligibility query, reminder window and period validation reads the
current instant through this port so tests can substitute a FixedClock.

Implementations:
    - SystemClock: src/core/clock.py (UTC wall clock)
    - FixedClock: src/core/clock.py (settable, for tests)
"""

from datetime import datetime
from typing import Protocol


class ClockProtocol(Protocol):
    """Protocol for clocks returning timezone-aware instants."""

    def now(self) -> datetime:
        """Return the current instant (timezone-aware)."""
        ...
