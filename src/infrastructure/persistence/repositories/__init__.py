"""Repository implementations (adapters for hexagonal architecture).

Concrete implementations of the repository protocols defined in
src/domain/protocols/.
"""

from src.infrastructure.persistence.repositories.booking_repository import (
    BookingRepository,
)
from src.infrastructure.persistence.repositories.payout_repository import (
    PayoutRepository,
)

__all__ = [
    "BookingRepository",
    "PayoutRepository",
]
