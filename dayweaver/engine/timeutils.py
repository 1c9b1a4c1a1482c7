"""Time-of-day helpers.

Gap and block boundaries are HH:MM strings at the edges of the system; everything
inside the engine works in integer minutes since midnight.
"""

from dayweaver.models.constants import MINUTES_PER_DAY


def time_to_minutes(value: str) -> int:
    """Convert an HH:MM string to minutes since midnight.

    Args:
        value: Time string such as "09:30" (24:00 is accepted as end of day)

    Returns:
        Minutes since midnight (0-1440)

    Raises:
        ValueError: If the string is not a valid time of day
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid time {value!r}: expected HH:MM string")
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time {value!r}: expected HH:MM")

    hours, minutes = int(parts[0]), int(parts[1])
    if minutes >= 60:
        raise ValueError(f"Invalid time {value!r}: minutes out of range")
    total = hours * 60 + minutes
    if total > MINUTES_PER_DAY:
        raise ValueError(f"Invalid time {value!r}: beyond end of day")
    return total


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to an HH:MM string.

    1440 renders as "24:00" so a block ending at midnight keeps end - start == duration.
    """
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise ValueError(f"Minutes out of range for a single day: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(value: str, minutes: int) -> str:
    """Add minutes to an HH:MM string."""
    return minutes_to_time(time_to_minutes(value) + minutes)
