"""Pickup time value object ("9:00 AM").

DAY bookings are requested with a 12-hour clock pickup time. The value is
kept in its display form and converted to a datetime.time on demand.
"""

import re
from dataclasses import dataclass
from datetime import time

from src.core.enums import ErrorCode
from src.domain.errors import InvalidInputError

_PICKUP_TIME_PATTERN = re.compile(r"^(1[0-2]|[1-9]):([0-5][0-9])\s(AM|PM)$")


class InvalidPickupTimeError(InvalidInputError):
    code = ErrorCode.INVALID_PICKUP_TIME


@dataclass(frozen=True)
class PickupTime:
    """Validated 12-hour clock time.

    Attributes:
        value: Normalized display form, "H:MM AM" or "H:MM PM".

    Raises:
        InvalidPickupTimeError: If the value does not match "H:MM AM|PM".
    """

    value: str

    def __post_init__(self) -> None:
        normalized = " ".join(self.value.strip().upper().split()) if self.value else ""
        if not _PICKUP_TIME_PATTERN.match(normalized):
            raise InvalidPickupTimeError(
                f"Invalid pickup time format: {self.value!r}. Expected format like '9:00 AM'",
                details={"pickup_time": str(self.value)},
            )
        object.__setattr__(self, "value", normalized)

    @property
    def hour(self) -> int:
        """Hour on the 24-hour clock (12 AM → 0, 1 PM → 13)."""
        match = self._match()
        hour = int(match.group(1)) % 12
        return hour + 12 if match.group(3) == "PM" else hour

    @property
    def minute(self) -> int:
        return int(self._match().group(2))

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    @classmethod
    def from_time(cls, value: time) -> "PickupTime":
        """Build from a datetime.time (used when reconstituting periods)."""
        suffix = "PM" if value.hour >= 12 else "AM"
        hour = value.hour % 12 or 12
        return cls(f"{hour}:{value.minute:02d} {suffix}")

    def __str__(self) -> str:
        return self.value

    def _match(self) -> re.Match[str]:
        match = _PICKUP_TIME_PATTERN.match(self.value)
        if match is None:
            raise InvalidPickupTimeError(
                f"Invalid pickup time format: {self.value!r}",
                details={"pickup_time": str(self.value)},
            )
        return match
