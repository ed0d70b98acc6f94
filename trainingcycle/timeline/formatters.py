"""
Formatting utilities for timeline dates and labels.

All label text is produced here so the builder never touches strings.
"""

from datetime import date, datetime, timezone
from typing import Optional

from ..errors import ParseError


DEFAULT_TRAINING_TYPE = "Session"
UNKNOWN_TEAM = "TBD"


def parse_iso_datetime(value: str, field: str = "date") -> datetime:
    """
    Parse an ISO-8601 date or date-time string into an aware datetime.

    Date-only values and naive date-times are read as UTC.

    Args:
        value: ISO string (e.g., "2024-01-05" or "2024-01-05T18:30:00Z")
        field: Name of the field being parsed, used in the error

    Returns:
        Timezone-aware datetime

    Raises:
        ParseError: If the value is not a parseable ISO string
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        if not isinstance(value, str) or not value.strip():
            raise ParseError(f"{field} must be an ISO-8601 date string, got {value!r}", field=field, value=value)
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as e:
            raise ParseError(f"Invalid {field}: {value!r}", field=field, value=value) from e

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_date_iso(dt: datetime) -> str:
    """
    Format a datetime as an ISO calendar date.

    Args:
        dt: Datetime to format

    Returns:
        Date string (e.g., "2024-01-05")
    """
    return dt.date().isoformat()


def format_date_display(dt: datetime) -> str:
    """
    Format a datetime for display (DD MMM YYYY).

    Args:
        dt: Datetime to format

    Returns:
        Display string (e.g., "05 Jan 2024")
    """
    return dt.strftime("%d %b %Y")


def format_match_label(home_team: Optional[str], away_team: Optional[str]) -> str:
    return f"Match: {home_team or UNKNOWN_TEAM} vs {away_team or UNKNOWN_TEAM}"


def format_training_label(session_type: Optional[str]) -> str:
    if not session_type or not session_type.strip():
        session_type = DEFAULT_TRAINING_TYPE
    return f"Training: {session_type}"


def format_day_label(days_before_match: Optional[int]) -> Optional[str]:
    """
    Format the J-x badge for a timeline day.

    Args:
        days_before_match: Days until the next match (0 on match day), or None

    Returns:
        Badge text (e.g., "J-3") or None when the day has no label
    """
    if days_before_match is None:
        return None
    return f"J-{days_before_match}"
