import re
from datetime import datetime
from typing import Tuple

MINUTES_PER_DAY = 24 * 60

# zero padded, so string order matches chronological order
TIME_PATTERN = re.compile(r"\d{2}:\d{2}")


def parse_time(time_str: str) -> int:
    """Parse a zero padded "HH:MM" string into minutes since midnight"""
    if not isinstance(time_str, str) or not TIME_PATTERN.fullmatch(time_str):
        raise ValueError(f"Invalid time string {time_str}")
    try:
        t = datetime.strptime(time_str, "%H:%M")
    except ValueError:
        raise ValueError(f"Invalid time string {time_str}")
    return t.hour * 60 + t.minute


def format_time(total_minutes: int) -> str:
    """Format minutes since midnight as "HH:MM", wrapping past midnight"""
    hours = (total_minutes // 60) % 24
    minutes = total_minutes % 60
    return f"{hours:02d}:{minutes:02d}"


def duration_minutes(start: str, end: str) -> int:
    return parse_time(end) - parse_time(start)


def to_12_hour(time24: str) -> str:
    """
        Convert "13:45" to "1:45 PM".
        An empty value gives an empty string.
    """
    if not time24:
        return ""
    hours, minutes = (int(part) for part in time24.split(":"))
    period = "PM" if hours >= 12 else "AM"
    return f"{hours % 12 or 12}:{minutes:02d} {period}"


def format_hour_header(hour: int) -> Tuple[str, str]:
    """Column header for a whole hour, e.g. 13 -> ("1:00", "PM")"""
    period = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:00", period
