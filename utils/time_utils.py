"""
Time utilities shared by the scheduling engine and the API.

Used for duration labels, minute-resolution timestamps, and the
week tags archived orders are grouped by.
"""

import math
from datetime import datetime
from typing import Optional


def format_duration(minutes: float) -> str:
    """
    Format a duration in minutes as "<H>h <M>m".

    Minutes are rounded to the nearest whole minute:
    - 100.85 → "1h 41m"
    - 45 → "0h 45m"
    - 119.6 → "2h 0m"

    Args:
        minutes: Duration in minutes (negative values are treated as 0)

    Returns:
        Human-readable duration
    """
    # Half-up, so 30.5 reads "0h 31m"
    total = max(0, math.floor(minutes + 0.5))
    hours, mins = divmod(total, 60)
    return f"{hours}h {mins}m"


def truncate_to_minute(instant: datetime) -> datetime:
    """Drop seconds and sub-second components."""
    return instant.replace(second=0, microsecond=0)


def iso_week_tag(instant: Optional[datetime] = None) -> str:
    """
    ISO week identifier for an instant, e.g. "2025-W01".

    Uses the ISO year, so 2024-12-30 (a Monday) belongs to "2025-W01".
    """
    instant = instant or datetime.now()
    iso_year, iso_week, _ = instant.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"
