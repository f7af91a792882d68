"""Constants for schedule generation."""

from enum import Enum
from typing import NamedTuple


class PrayerWindow(NamedTuple):
    """A daily prayer window in minutes from midnight, half-open [start, end)."""

    name: str
    start: int
    end: int
    duration: int


# Prayer windows apply on every day, Saturday included
PRAYER_WINDOWS = (
    PrayerWindow("dzuhur", 11 * 60 + 40, 12 * 60 + 30, 50),
    PrayerWindow("ashar", 15 * 60, 15 * 60 + 30, 30),
    PrayerWindow("maghrib", 18 * 60, 18 * 60 + 30, 30),
)

DEFAULT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

FRIDAY = "Friday"
SATURDAY = "Saturday"

# Friday prayer: classes may not start at these hours
FRIDAY_BLOCKED_HOURS = frozenset({11, 12, 13})

# Only this program may be taught on Saturday (matched case-insensitively)
SATURDAY_PROGRAM = "magister manajemen"

# Break after every generated slot
BREAK_MINUTES = 10

# Evening classes start at or after this hour; they may use late morning slots
EVENING_MIN_START_HOUR = 15
# Morning classes must start before this hour
MORNING_MAX_START_HOUR = 18
# Preferred evening start hour
EVENING_ANCHOR_HOUR = 18

# Compactness: gaps up to this many minutes are ideal
COMPACT_GAP_MINUTES = 60
# ... and the score reaches zero at this gap
MAX_GAP_MINUTES = 240

# Substituted for a NaN fitness value
NAN_FITNESS_SENTINEL = 999999.0

# Progress log interval for the annealing loop
LOG_EVERY_ITERATIONS = 1000


class Severity(str, Enum):
    """Violation severity."""

    HARD = "hard"
    SOFT = "soft"


class ConstraintType(str, Enum):
    """Labels written into violation records."""

    LECTURER_CONFLICT = "HC1: Lecturer Conflict"
    ROOM_CONFLICT = "HC2: Room Conflict"
    ROOM_CAPACITY = "HC3: Room Capacity"
    PRODI_CONFLICT = "HC5: Prodi Conflict"
    RESEARCH_DAY = "HC6: Research Day"
    MAX_DAILY_PERIODS = "HC7: Max Daily Periods"
    CLASS_TYPE_TIME = "HC8: Class Type Time"
    SATURDAY_RESTRICTION = "HC9: Saturday Restriction"
    FRIDAY_TIME_RESTRICTION = "HC10: Friday Time Restriction"
    PRAYER_TIME_START = "HC11: Prayer Time Start"
    PRAYER_TIME_OVERLAP = "SC5: Prayer Time Overlap"
