"""Centralized constants for business rules that are not configuration.

This module contains fixed rule values of the booking domain. For values
that change per deployment (fee rates, currency, timezone) use
`src/core/config.py` instead.

Categories:
- Period windows: Pickup windows and durations per booking type
- Cutoffs: Cancellation and reminder lead times
- References: Booking and payout reference formatting
- Money: Default commission and rounding

Example:
    >>> from src.core.constants import CANCELLATION_CUTOFF
    >>> period.start - CANCELLATION_CUTOFF
"""

from datetime import timedelta
from decimal import Decimal

# =============================================================================
# Period Windows
# =============================================================================

DAY_PICKUP_EARLIEST_HOUR: int = 7
"""Earliest pickup hour (inclusive) for DAY bookings."""

DAY_PICKUP_LATEST_HOUR: int = 11
"""Latest pickup hour (inclusive) for DAY bookings."""

DAY_SERVICE_HOURS: int = 12
"""Length of one DAY service window."""

NIGHT_START_HOUR: int = 23
"""NIGHT bookings always start at 23:00 local time."""

NIGHT_END_HOUR: int = 5
"""NIGHT bookings always end at 05:00 local time the next day."""

FULL_DAY_EARLIEST_START_HOUR: int = 7
"""Earliest UTC start hour (inclusive) for FULL_DAY bookings."""

FULL_DAY_LATEST_START_HOUR: int = 22
"""Latest UTC start hour (inclusive) for FULL_DAY bookings."""

FULL_DAY_BLOCK: timedelta = timedelta(hours=24)
"""FULL_DAY durations are whole multiples of this block."""

# =============================================================================
# Cutoffs
# =============================================================================

CANCELLATION_CUTOFF: timedelta = timedelta(hours=12)
"""Customers may cancel up to this long before the period starts."""

REMINDER_LEAD_TIME: timedelta = timedelta(hours=1)
"""Start/end reminders become due this long before the instant."""

# =============================================================================
# References
# =============================================================================

BOOKING_REFERENCE_PREFIX: str = "BK"
PAYOUT_REFERENCE_PREFIX: str = "payout"
REFERENCE_RANDOM_LENGTH: int = 6

# =============================================================================
# Money
# =============================================================================

DEFAULT_FLEET_OWNER_COMMISSION_PERCENT: Decimal = Decimal("20")
"""Platform commission withheld from a fleet owner's net earnings."""

MINOR_UNIT_EXPONENT: Decimal = Decimal("0.01")
"""Quantization exponent for two-decimal currencies (NGN kobo, USD cents)."""
