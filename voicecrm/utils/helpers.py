"""
Utility Functions

Common helpers for request parsing.
"""

from datetime import datetime, timezone
from typing import Any, Optional


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into a naive UTC datetime.

    Examples:
        "2025-01-31" -> 2025-01-31 00:00:00
        "2025-01-31T10:00:00Z" -> 2025-01-31 10:00:00
        "2025-01-31T15:30:00+05:30" -> 2025-01-31 10:00:00

    Returns:
        Parsed datetime, or None when the value is empty or unparseable
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def clean_str(value: Optional[str]) -> Optional[str]:
    """Strip a string, passing None through"""
    return value.strip() if isinstance(value, str) else value


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()
