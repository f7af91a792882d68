"""Test fixtures for timetable scheduler tests."""

import pytest

from timetable_sa.constants import Shift
from timetable_sa.models import ClassRequirement, Lecturer, Room
from timetable_sa.scheduler.models import ScheduleEntry, TimeSlot
from timetable_sa.scheduler.utils import minutes_to_time, time_to_minutes


@pytest.fixture
def rooms():
    """A few lecture rooms and one lab."""
    return [
        Room(code="R101", name="Ruang 101", type="Kelas", capacity=40),
        Room(code="R102", name="Ruang 102", type="Kelas", capacity=60),
        Room(code="G5-Lab1", name="Lab Komputer 1", type="Laboratorium", capacity=30),
        Room(code="S01", name="Ruang Seminar", type="Kelas", capacity=10),
    ]


@pytest.fixture
def lecturers():
    """Lecturers with and without preferences."""
    return [
        Lecturer(
            code="L1",
            prodi_code="IF",
            name="Budi Santoso",
            preferred_time="pagi",
            research_day="Wednesday",
            transit_time=30,
            max_daily_periods=6,
            preferred_room="R101",
        ),
        Lecturer(code="L2", prodi_code="IF", name="Siti Aminah"),
        Lecturer(code="L3", prodi_code="MM", name="Agus Wijaya", preferred_time="malam"),
    ]


@pytest.fixture
def classes():
    """Class requirements covering morning, evening and lab classes."""
    return [
        ClassRequirement(
            course_code="IF101",
            course_name="Algoritma",
            prodi="Informatika",
            class_group="A",
            credits=3,
            participants=35,
            lecturers=("L1",),
        ),
        ClassRequirement(
            course_code="IF102",
            course_name="Praktikum Basis Data",
            prodi="Informatika",
            class_group="A",
            credits=2,
            participants=25,
            lecturers=("L2",),
            needs_lab=True,
        ),
        ClassRequirement(
            course_code="MM201",
            course_name="Manajemen Strategik",
            prodi="Magister Manajemen",
            class_group="B",
            credits=3,
            participants=20,
            lecturers=("L3",),
            shift=Shift.EVENING,
        ),
    ]


@pytest.fixture
def make_entry():
    """Factory for schedule entries with sensible defaults."""

    def _make(
        class_id: str = "C1",
        day: str = "Monday",
        start: str = "07:30",
        credits: int = 2,
        room: str = "R101",
        lecturers: tuple[str, ...] = ("L2",),
        prodi: str = "Informatika",
        shift: Shift = Shift.MORNING,
        needs_lab: bool = False,
        participants: int = 30,
    ) -> ScheduleEntry:
        end = minutes_to_time(time_to_minutes(start) + 50)
        return ScheduleEntry(
            class_id=class_id,
            class_name=f"Class {class_id}",
            prodi=prodi,
            lecturers=lecturers,
            room=room,
            time_slot=TimeSlot(day=day, start_time=start, end_time=end, period=1),
            credits=credits,
            needs_lab=needs_lab,
            participants=participants,
            shift=shift,
        )

    return _make


@pytest.fixture
def fast_config():
    """A short annealing run for tests."""
    return {
        "maxIterations": 300,
        "reheatingThreshold": 100,
        "maxReheats": 1,
    }
