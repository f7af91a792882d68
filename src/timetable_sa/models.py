"""Input records: rooms, lecturers and class requirements."""

from dataclasses import dataclass, field
from typing import Any

from .constants import (
    DEFAULT_COURSE_NAME,
    DEFAULT_CREDITS,
    DEFAULT_PARTICIPANTS,
    DEFAULT_PRODI,
    KNOWN_LAB_ROOMS,
    LECTURER_COLUMNS,
    PREFERRED_TIME_ALIASES,
    Shift,
)
from .utils import parse_yes_no, safe_int, safe_str, split_codes


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, so sheet headers and snake_case both load."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class Room:
    """A physical room."""

    code: str
    name: str
    type: str
    capacity: int

    @property
    def is_lab(self) -> bool:
        """Whether the room counts as a laboratory."""
        return "lab" in self.type.lower() or self.code in KNOWN_LAB_ROOMS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Room":
        """Create a Room from a sheet row or JSON object."""
        return cls(
            code=safe_str(_pick(data, "Code", "code")),
            name=safe_str(_pick(data, "Name", "name")),
            type=safe_str(_pick(data, "Type", "type")),
            capacity=safe_int(_pick(data, "Capacity", "capacity")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert room to dictionary."""
        return {
            "code": self.code,
            "name": self.name,
            "type": self.type,
            "capacity": self.capacity,
        }


@dataclass(frozen=True)
class Lecturer:
    """A lecturer and their scheduling preferences."""

    code: str
    prodi_code: str = ""
    name: str = ""
    preferred_time: str = ""
    research_day: str = ""
    transit_time: int = 0
    max_daily_periods: int = 0
    preferred_room: str = ""

    @property
    def preferred_time_band(self) -> str:
        """Preferred time tag normalized to pagi/siang/sore/malam ('' if none)."""
        tag = self.preferred_time.strip().lower()
        return PREFERRED_TIME_ALIASES.get(tag, tag)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Lecturer":
        """Create a Lecturer from a sheet row or JSON object."""
        return cls(
            code=safe_str(_pick(data, "Code", "code")),
            prodi_code=safe_str(_pick(data, "Prodi Code", "prodi_code")),
            name=safe_str(_pick(data, "Name", "name")),
            preferred_time=safe_str(_pick(data, "Prefered_Time", "preferred_time")),
            research_day=safe_str(_pick(data, "Research_Day", "research_day")),
            transit_time=safe_int(_pick(data, "Transit_Time", "transit_time")),
            max_daily_periods=safe_int(
                _pick(data, "Max_Daily_Periods", "max_daily_periods")
            ),
            preferred_room=safe_str(_pick(data, "Prefered_Room", "preferred_room")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert lecturer to dictionary."""
        return {
            "code": self.code,
            "prodi_code": self.prodi_code,
            "name": self.name,
            "preferred_time": self.preferred_time,
            "research_day": self.research_day,
            "transit_time": self.transit_time,
            "max_daily_periods": self.max_daily_periods,
            "preferred_room": self.preferred_room,
        }


@dataclass(frozen=True)
class ClassRequirement:
    """A course section that must be placed in the timetable."""

    course_code: str
    course_name: str = DEFAULT_COURSE_NAME
    prodi: str = DEFAULT_PRODI
    class_group: str = ""
    credits: int = DEFAULT_CREDITS
    kind: str = ""
    participants: int = DEFAULT_PARTICIPANTS
    lecturers: tuple[str, ...] = field(default_factory=tuple)
    needs_lab: bool = False
    shift: Shift = Shift.MORNING
    rooms: tuple[str, ...] = field(default_factory=tuple)

    @property
    def base_duration(self) -> int:
        """Class length in minutes before any prayer-time extension."""
        from .scheduler.utils import base_duration

        return base_duration(self.credits)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClassRequirement":
        """Create a ClassRequirement from a sheet row or JSON object.

        Lecturer codes come either from a ``lecturers`` list or from the four
        Kode_Dosen columns; blank codes are dropped. Blank credits and
        participants fall back to 3 SKS and 30 students.
        """
        if "lecturers" in data:
            raw_lecturers = data["lecturers"]
            if isinstance(raw_lecturers, str):
                lecturers = split_codes(raw_lecturers)
            else:
                lecturers = [safe_str(code) for code in raw_lecturers or []]
        else:
            lecturers = [safe_str(data.get(column)) for column in LECTURER_COLUMNS]

        raw_rooms = _pick(data, "rooms", "Rooms", default="")
        if isinstance(raw_rooms, (list, tuple)):
            rooms = [safe_str(code) for code in raw_rooms]
        else:
            rooms = split_codes(raw_rooms)

        return cls(
            course_code=safe_str(_pick(data, "Kode_Matakuliah", "course_code")),
            course_name=safe_str(
                _pick(data, "Mata_Kuliah", "course_name"), DEFAULT_COURSE_NAME
            )
            or DEFAULT_COURSE_NAME,
            prodi=safe_str(_pick(data, "Prodi", "prodi"), DEFAULT_PRODI) or DEFAULT_PRODI,
            class_group=safe_str(_pick(data, "Kelas", "class_group")),
            credits=safe_int(_pick(data, "SKS", "credits")) or DEFAULT_CREDITS,
            kind=safe_str(_pick(data, "Jenis", "kind")),
            participants=safe_int(_pick(data, "Peserta", "participants"))
            or DEFAULT_PARTICIPANTS,
            lecturers=tuple(code for code in lecturers if code),
            needs_lab=_read_lab_flag(_pick(data, "should_on_the_lab", "needs_lab")),
            shift=Shift.parse(safe_str(_pick(data, "Class_Type", "shift"))),
            rooms=tuple(code for code in rooms if code),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert requirement to dictionary."""
        return {
            "course_code": self.course_code,
            "course_name": self.course_name,
            "prodi": self.prodi,
            "class_group": self.class_group,
            "credits": self.credits,
            "kind": self.kind,
            "participants": self.participants,
            "lecturers": list(self.lecturers),
            "needs_lab": self.needs_lab,
            "shift": self.shift.value,
            "rooms": list(self.rooms),
        }


def _read_lab_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return parse_yes_no(value)
