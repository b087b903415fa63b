"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Error values and the domain exception base
- Injectable clocks and reference helpers

The core module has NO dependencies on other application layers.
"""

from src.core.enums import ErrorCode
from src.core.errors import DomainError, DomainException
from src.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "DomainException",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
