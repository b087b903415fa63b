"""Errors raised at the persistence boundary.

InconsistentDataError signals corrupted stored state (an enum string no
member matches, a leg without its booking id). ConcurrentModificationError
signals that another unit of work saved the same aggregate first.
"""

from src.core.enums import ErrorCode
from src.core.errors import DomainException


class InconsistentDataError(DomainException):
    """Persisted data cannot be mapped back to a valid aggregate."""

    code = ErrorCode.INCONSISTENT_DATA


class ConcurrentModificationError(DomainException):
    """Aggregate version in storage moved on since it was loaded.

    Attributes:
        aggregate_type: "Booking" or "Payout".
        aggregate_id: Identity as string.
        expected_version: Version the caller loaded.
        actual_version: Version currently stored.
    """

    code = ErrorCode.CONCURRENT_MODIFICATION

    def __init__(
        self,
        *,
        aggregate_type: str,
        aggregate_id: str,
        expected_version: int,
        actual_version: int,
    ) -> None:
        super().__init__(
            f"{aggregate_type} {aggregate_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            details={
                "aggregate_type": aggregate_type,
                "aggregate_id": aggregate_id,
                "expected_version": str(expected_version),
                "actual_version": str(actual_version),
            },
        )
        self.aggregate_type = aggregate_type
        self.aggregate_id = aggregate_id
        self.expected_version = expected_version
        self.actual_version = actual_version
