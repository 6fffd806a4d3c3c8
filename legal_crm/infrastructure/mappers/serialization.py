"""
Shared helpers for the JSON snapshot shape: ISO dates and enum coercion.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Type, TypeVar


E = TypeVar("E", bound=Enum)


def format_date(value: Optional[date]) -> Optional[str]:
    """Format a date as YYYY-MM-DD."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format a timestamp as ISO 8601."""
    return value.isoformat() if value else None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a stored date.
    Accepts plain dates and full timestamps; only the calendar day is kept.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp into a naive local datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_enum(enum_class: Type[E], value: Any, default: E) -> E:
    """Coerce a stored value into an enum member, falling back to a default."""
    if value is None or value == "":
        return default
    return enum_class(value)
