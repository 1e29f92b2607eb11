from datetime import datetime, timezone

from cheeper.schemas.message import TimeWindow
from cheeper.utils.exceptions import MalformedTimeError

# "16:00 10-12-2021"
WINDOW_FORMAT = "%H:%M %d-%m-%Y"


def parse_time(value: str) -> datetime:
    """Parse one "HH:MM DD-MM-YYYY" literal into a UTC datetime"""
    if not isinstance(value, str):
        raise MalformedTimeError(f"Expected a time string, got {type(value).__name__}")
    try:
        parsed = datetime.strptime(value, WINDOW_FORMAT)
    except ValueError as e:
        raise MalformedTimeError(
            f"Malformed time {value!r}, expected format HH:MM DD-MM-YYYY"
        ) from e
    return parsed.replace(second=0, microsecond=0, tzinfo=timezone.utc)


def parse_window(start_str: str, end_str: str) -> TimeWindow:
    return TimeWindow(start=parse_time(start_str), end=parse_time(end_str))
