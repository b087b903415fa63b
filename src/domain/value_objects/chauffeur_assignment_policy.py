"""Which booking statuses accept a chauffeur assignment.

Kept as a value object injected into the Booking aggregate so product can
change the rule (for example, allow pre-assignment while PENDING) through
configuration without touching the state machine.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.domain.enums import BookingStatus
from src.domain.errors import InvalidInputError


def _default_statuses() -> frozenset[BookingStatus]:
    return frozenset({BookingStatus.CONFIRMED, BookingStatus.ACTIVE})


@dataclass(frozen=True)
class ChauffeurAssignmentPolicy:
    """Statuses in which assign_chauffeur() is permitted.

    Terminal statuses can never be allowed.

    Attributes:
        allowed_statuses: Non-terminal statuses accepting an assignment.
    """

    allowed_statuses: frozenset[BookingStatus] = field(default_factory=_default_statuses)

    def __post_init__(self) -> None:
        terminal = self.allowed_statuses & frozenset(BookingStatus.terminal_states())
        if terminal:
            names = ", ".join(sorted(status.value for status in terminal))
            raise InvalidInputError(
                f"Chauffeur assignment cannot be allowed in terminal statuses: {names}"
            )
        if not self.allowed_statuses:
            raise InvalidInputError("At least one status must allow chauffeur assignment")

    def allows(self, status: BookingStatus) -> bool:
        return status in self.allowed_statuses

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ChauffeurAssignmentPolicy":
        """Build from status names (configuration input).

        Raises:
            InvalidInputError: For unknown or terminal status names.
        """
        statuses: set[BookingStatus] = set()
        for name in names:
            normalized = name.strip().upper()
            if not BookingStatus.is_valid(normalized):
                raise InvalidInputError(f"Unknown booking status: {name}")
            statuses.add(BookingStatus(normalized))
        return cls(frozenset(statuses))


DEFAULT_ASSIGNMENT_POLICY = ChauffeurAssignmentPolicy()
