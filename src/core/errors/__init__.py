"""Core errors package.

Exports all core-level error classes for convenient importing.

Usage:
    from src.core.errors import DomainError, DomainException
"""

from src.core.errors.domain_error import DomainError
from src.core.errors.domain_exception import DomainException

__all__ = [
    "DomainError",
    "DomainException",
]
