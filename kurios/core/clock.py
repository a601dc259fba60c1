"""
Clock Helpers

Timestamp parsing and formatting shared by availability windows and the
``time`` variable. All timestamps are naive local wall-clock times with
second precision, written as ``YYYY-MM-DD HH:MM:SS``.
"""

from datetime import datetime, timedelta
from typing import Optional


TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_FORMAT_HINT = "YYYY-MM-DD HH:MM:SS"

# Availability endpoint meaning "always open"
WILDCARD = "*"

# Wildcard endpoints resolve to now minus/plus this tolerance
WILDCARD_TOLERANCE = timedelta(minutes=10)


def now() -> datetime:
    """Current wall-clock time truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse a literal timestamp.

    Returns:
        The parsed datetime, or None if ``value`` is not in TIME_FORMAT
    """
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return None


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIME_FORMAT)


def is_valid_timestamp(value: str) -> bool:
    return parse_timestamp(value) is not None
