"""Constants for reading institution timetable input."""

from enum import Enum


class Shift(str, Enum):
    """Daily session band a class belongs to."""

    MORNING = "pagi"
    EVENING = "sore"

    @classmethod
    def parse(cls, value: "str | Shift | None") -> "Shift":
        """Parse a shift tag; anything that is not an evening tag is morning."""
        if isinstance(value, Shift):
            return value
        text = (value or "").strip().lower()
        if text in SHIFT_ALIASES:
            return SHIFT_ALIASES[text]
        return cls.MORNING


SHIFT_ALIASES = {
    "pagi": Shift.MORNING,
    "morning": Shift.MORNING,
    "sore": Shift.EVENING,
    "evening": Shift.EVENING,
}

# Lecturer preferred time-of-day bands: tag -> (first hour, end hour exclusive)
PREFERRED_TIME_BANDS = {
    "pagi": (7, 12),
    "siang": (12, 15),
    "sore": (15, 18),
    "malam": (18, 24),
}

PREFERRED_TIME_ALIASES = {
    "morning": "pagi",
    "midday": "siang",
    "noon": "siang",
    "afternoon": "sore",
    "evening": "sore",
    "night": "malam",
}

# Sheet names in the input workbook
SHEET_ROOMS = "ruangan"
SHEET_LECTURERS = "dosen"
SHEET_CLASSES = "kebutuhan_kelas"

# Lecturer code columns of a class requirement row
LECTURER_COLUMNS = (
    "Kode_Dosen1",
    "Kode_Dosen2",
    "Kode_Dosen_Prodi_Lain1",
    "Kode_Dosen_Prodi_Lain2",
)

# Room codes treated as labs even when their type does not say so
KNOWN_LAB_ROOMS = frozenset(
    {
        "CM-206",
        "CM-207",
        "CM-LabVirtual",
        "CM-Lab3",
        "G5-Lab1",
        "G5-Lab2",
        "G5-LabAudioVisual",
    }
)

# Fallbacks for blank requirement cells
DEFAULT_CREDITS = 3
DEFAULT_PARTICIPANTS = 30
DEFAULT_PRODI = "Unknown"
DEFAULT_COURSE_NAME = "Unknown"
