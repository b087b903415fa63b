"""Helpers for human-readable, collision-resistant references.

Booking references (BK-LQ3K2J1A-X7Q2ZD) and payout references
(payout_booking_<id>_lq3k2j1a_x7q2zd) combine a base36 millisecond
timestamp with a random suffix drawn from `secrets`.
"""

import secrets
import string
from datetime import datetime

from src.core.constants import REFERENCE_RANDOM_LENGTH

_BASE36_ALPHABET = string.digits + string.ascii_lowercase


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base36.

    Raises:
        ValueError: If number is negative.
    """
    if number < 0:
        raise ValueError("Cannot encode negative numbers in base36")
    if number == 0:
        return "0"
    digits: list[str] = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def timestamp_token(instant: datetime) -> str:
    """Base36 of the instant's epoch milliseconds."""
    return to_base36(int(instant.timestamp() * 1000))


def random_token(length: int = REFERENCE_RANDOM_LENGTH) -> str:
    """Random lowercase base36 token of the given length."""
    return "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(length))
