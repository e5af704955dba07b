"""
Formatting of backend values for display.

Timestamps are inconsistent across endpoints: some send Unix seconds,
others ISO 8601 strings.  :func:`parse_timestamp` accepts both.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

NOT_AVAILABLE = "N/A"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Return a ``datetime`` for Unix seconds or an ISO string, else ``None``."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: Any) -> str:
    """Render a timestamp as e.g. ``"Jan 5, 2025"``."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return NOT_AVAILABLE
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def to_date_input(value: Any) -> str:
    """Render a timestamp as ``YYYY-MM-DD`` for a date field, or ``""``."""
    parsed = parse_timestamp(value)
    return parsed.date().isoformat() if parsed else ""


def format_price(value: Any, currency: str = "AED") -> str:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return NOT_AVAILABLE
    return f"{currency} {amount:,.2f}"
