"""Conversions between domain values and stored record fields.

Records hold only plain values: enums as their string value, Decimals and
UUIDs as strings, datetimes as ISO 8601. Reading a value back that no longer
parses raises InconsistentDataError naming the field.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar
from uuid import UUID

from src.domain.errors import InconsistentDataError

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], raw: Any, field: str) -> E:
    """Map a stored string back to its enum member.

    Raises:
        InconsistentDataError: If no member has that value.
    """
    try:
        return enum_cls(raw)
    except ValueError as e:
        raise InconsistentDataError(
            f"Unknown {enum_cls.__name__} value in stored {field}: {raw!r}",
            details={"field": field, "value": str(raw)},
        ) from e


def parse_decimal(raw: Any, field: str) -> Decimal:
    try:
        return Decimal(str(raw))
    except InvalidOperation as e:
        raise InconsistentDataError(
            f"Stored {field} is not a decimal: {raw!r}",
            details={"field": field, "value": str(raw)},
        ) from e


def parse_uuid(raw: Any, field: str) -> UUID:
    try:
        return UUID(str(raw))
    except ValueError as e:
        raise InconsistentDataError(
            f"Stored {field} is not a UUID: {raw!r}",
            details={"field": field, "value": str(raw)},
        ) from e


def parse_optional_uuid(raw: Any, field: str) -> UUID | None:
    return None if raw is None else parse_uuid(raw, field)


def parse_datetime(raw: Any, field: str) -> datetime:
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError as e:
        raise InconsistentDataError(
            f"Stored {field} is not an ISO timestamp: {raw!r}",
            details={"field": field, "value": str(raw)},
        ) from e


def parse_optional_datetime(raw: Any, field: str) -> datetime | None:
    return None if raw is None else parse_datetime(raw, field)


def parse_date(raw: Any, field: str) -> date:
    try:
        return date.fromisoformat(str(raw))
    except ValueError as e:
        raise InconsistentDataError(
            f"Stored {field} is not an ISO date: {raw!r}",
            details={"field": field, "value": str(raw)},
        ) from e


def format_optional(value: datetime | UUID | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
