"""Time and domain rule functions shared by the checker and the solver.

All functions are pure and take primitive values, so the hot ones are
memoized: the fitness function calls them for every pair of entries.
"""

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from ..exceptions import InvalidTimeError
from .constants import FRIDAY_BLOCKED_HOURS, PRAYER_WINDOWS, SATURDAY_PROGRAM

if TYPE_CHECKING:
    from .models import ScheduleEntry

TIME_PATTERN = re.compile(r"(\d{2}):(\d{2})")


@lru_cache(maxsize=4096)
def time_to_minutes(time_str: str) -> int:
    """Convert an 'HH:MM' string to minutes since midnight.

    Raises:
        InvalidTimeError: If the value is not a valid 'HH:MM' time
    """
    match = TIME_PATTERN.fullmatch(time_str) if isinstance(time_str, str) else None
    if not match:
        raise InvalidTimeError(time_str)
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTimeError(time_str)
    return hour * 60 + minute


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to an 'HH:MM' string."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def start_hour(time_str: str) -> int:
    """Hour component of an 'HH:MM' string."""
    return time_to_minutes(time_str) // 60


def base_duration(credits: int) -> int:
    """Class length for a credit load: 50 minutes per SKS plus 10-minute gaps."""
    return credits * 50 + (credits - 1) * 10


def prayer_overlap(start_time: str, credits: int, day: str) -> int:
    """Total minutes of prayer windows intersecting the nominal class interval.

    The nominal interval is ``[start, start + base_duration)``. The windows
    apply on every day, so ``day`` does not change the result.
    """
    start = time_to_minutes(start_time)
    end = start + base_duration(credits)
    return sum(
        window.duration
        for window in PRAYER_WINDOWS
        if start < window.end and end > window.start
    )


@lru_cache(maxsize=8192)
def calculate_end_time(start_time: str, credits: int, day: str) -> tuple[str, int]:
    """Return (adjusted end time, prayer minutes added) for a class."""
    added = prayer_overlap(start_time, credits, day)
    end = time_to_minutes(start_time) + base_duration(credits) + added
    return minutes_to_time(end), added


def adjusted_end(start_time: str, credits: int, day: str) -> str:
    """Nominal end shifted by the overlapping prayer time."""
    return calculate_end_time(start_time, credits, day)[0]


@lru_cache(maxsize=8192)
def adjusted_end_minutes(start_time: str, credits: int, day: str) -> int:
    return (
        time_to_minutes(start_time)
        + base_duration(credits)
        + prayer_overlap(start_time, credits, day)
    )


def is_valid_friday_start(start_time: str) -> bool:
    """Friday classes may not start at 11, 12 or 13 o'clock."""
    return start_hour(start_time) not in FRIDAY_BLOCKED_HOURS


def starts_during_prayer(start_time: str) -> bool:
    """Whether the start instant falls inside a prayer window."""
    start = time_to_minutes(start_time)
    return any(window.start <= start < window.end for window in PRAYER_WINDOWS)


def is_saturday_program(prodi: str) -> bool:
    """Whether the program may be scheduled on Saturday."""
    return SATURDAY_PROGRAM in prodi.lower()


def intervals_overlap(first: "ScheduleEntry", second: "ScheduleEntry") -> bool:
    """Whether two entries occupy intersecting [start, adjusted end) intervals."""
    if first.time_slot.day != second.time_slot.day:
        return False

    start1 = time_to_minutes(first.time_slot.start_time)
    start2 = time_to_minutes(second.time_slot.start_time)
    end1 = adjusted_end_minutes(first.time_slot.start_time, first.credits, first.time_slot.day)
    end2 = adjusted_end_minutes(second.time_slot.start_time, second.credits, second.time_slot.day)
    return start1 < end2 and start2 < end1
