"""Data models for the timetable scheduling system."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..constants import Shift
from .constants import Severity
from .utils import base_duration, calculate_end_time, time_to_minutes


@dataclass(frozen=True)
class TimeSlot:
    """A candidate (day, start, end) slot; end is nominal, before prayer adjustment."""

    day: str
    start_time: str
    end_time: str
    period: int

    @property
    def start_hour(self) -> int:
        return time_to_minutes(self.start_time) // 60

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeSlot":
        """Create a TimeSlot from a dictionary (snake_case or camelCase keys).

        Raises:
            InvalidTimeError: If a start or end time is malformed
        """
        start_time = data.get("start_time", data.get("startTime", ""))
        end_time = data.get("end_time", data.get("endTime", ""))
        # Validate at the boundary so the search never sees a bad time
        time_to_minutes(start_time)
        time_to_minutes(end_time)
        return cls(
            day=str(data["day"]),
            start_time=start_time,
            end_time=end_time,
            period=int(data.get("period", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "period": self.period,
        }


@dataclass(frozen=True)
class ScheduleEntry:
    """One placed class occurrence.

    Entries are immutable; the solver derives a moved entry with
    ``dataclasses.replace`` so earlier schedules stay observable.
    """

    class_id: str
    class_name: str
    prodi: str
    lecturers: tuple[str, ...]
    room: str
    time_slot: TimeSlot
    credits: int
    needs_lab: bool
    participants: int
    shift: Shift
    prayer_time_added: int = 0
    candidate_rooms: tuple[str, ...] = ()

    @property
    def day(self) -> str:
        return self.time_slot.day

    @property
    def start_time(self) -> str:
        return self.time_slot.start_time

    @property
    def base_duration(self) -> int:
        return base_duration(self.credits)

    @property
    def end_time(self) -> str:
        """Effective end time, re-derived from the prayer-time rule."""
        end_time, _ = calculate_end_time(self.start_time, self.credits, self.day)
        return end_time

    def to_row(self) -> dict[str, Any]:
        """Convert to a flat timetable row for export."""
        return {
            "Class ID": self.class_id,
            "Class Name": self.class_name,
            "Program": self.prodi,
            "Lecturers": ", ".join(self.lecturers),
            "Room": self.room,
            "Day": self.day,
            "Start Time": self.start_time,
            "End Time": self.end_time,
            "SKS": self.credits,
            "Base Duration (minutes)": self.base_duration,
            "Prayer Time Added (minutes)": self.prayer_time_added,
            "Total Duration (minutes)": self.base_duration + self.prayer_time_added,
            "Participants": self.participants,
            "Class Type": self.shift.value,
            "Needs Lab": "Yes" if self.needs_lab else "No",
        }


@dataclass(frozen=True)
class ConstraintViolation:
    """A single recorded constraint failure."""

    class_id: str
    class_name: str
    constraint_type: str
    reason: str
    severity: Severity
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "class_id": self.class_id,
            "class_name": self.class_name,
            "constraint_type": self.constraint_type,
            "reason": self.reason,
            "severity": self.severity.value,
        }
        if self.details is not None:
            data["details"] = self.details
        return data


@dataclass
class ViolationReport:
    """Violations of the final schedule, split by severity."""

    hard_violations: list[ConstraintViolation] = field(default_factory=list)
    soft_violations: list[ConstraintViolation] = field(default_factory=list)
    violations_by_type: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_violations(cls, violations: list[ConstraintViolation]) -> "ViolationReport":
        """Partition a violation log and count it by constraint type."""
        return cls(
            hard_violations=[v for v in violations if v.severity == Severity.HARD],
            soft_violations=[v for v in violations if v.severity == Severity.SOFT],
            violations_by_type=dict(Counter(v.constraint_type for v in violations)),
        )

    @property
    def total_hard(self) -> int:
        return len(self.hard_violations)

    @property
    def total_soft(self) -> int:
        return len(self.soft_violations)

    @property
    def is_empty(self) -> bool:
        return not self.hard_violations and not self.soft_violations

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "hard_constraint_violations": [v.to_dict() for v in self.hard_violations],
            "soft_constraint_violations": [v.to_dict() for v in self.soft_violations],
            "summary": {
                "total_hard_violations": self.total_hard,
                "total_soft_violations": self.total_soft,
                "violations_by_type": self.violations_by_type,
            },
        }


@dataclass
class Solution:
    """An ordered schedule and its fitness (lower is better)."""

    schedule: list[ScheduleEntry]
    fitness: float
    hard_violations: int = 0
    soft_violations: int = 0
    violation_report: ViolationReport | None = None

    @property
    def size(self) -> int:
        return len(self.schedule)


class UnplacedReason(str, Enum):
    """Reasons why a class requirement was left out of the schedule."""

    MISSING_COURSE_CODE = "missing_course_code"
    NO_LECTURER = "no_lecturer"
    NO_ROOM_AVAILABLE = "no_room_available"
    NO_SLOT_AVAILABLE = "no_slot_available"


@dataclass(frozen=True)
class UnplacedClass:
    """A class requirement that could not be placed."""

    class_id: str
    class_name: str
    prodi: str
    reason: UnplacedReason
    details: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "class_id": self.class_id,
            "class_name": self.class_name,
            "prodi": self.prodi,
            "reason": self.reason.value,
            "details": self.details,
        }


@dataclass
class RunStatistics:
    """Counters collected by one annealing run."""

    iterations: int = 0
    reheats: int = 0
    accepted_moves: int = 0
    rejected_moves: int = 0
    improvements: int = 0
    best_iteration: int = 0
    initial_fitness: float = 0.0
    best_fitness: float = 0.0
    final_temperature: float = 0.0
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "iterations": self.iterations,
            "reheats": self.reheats,
            "accepted_moves": self.accepted_moves,
            "rejected_moves": self.rejected_moves,
            "improvements": self.improvements,
            "best_iteration": self.best_iteration,
            "initial_fitness": self.initial_fitness,
            "best_fitness": self.best_fitness,
            "final_temperature": self.final_temperature,
            "elapsed_seconds": self.elapsed_seconds,
        }


@dataclass
class ScheduleStatistics:
    """Statistics about the generated schedule."""

    total_classes: int = 0
    total_placed: int = 0
    total_unplaced: int = 0
    by_day: dict[str, int] = field(default_factory=dict)
    by_shift: dict[str, int] = field(default_factory=dict)
    by_room: dict[str, int] = field(default_factory=dict)
    chains: int = 1
    best_chain: int = 0
    run: RunStatistics = field(default_factory=RunStatistics)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_classes": self.total_classes,
            "total_placed": self.total_placed,
            "total_unplaced": self.total_unplaced,
            "placement_rate": (
                self.total_placed / self.total_classes if self.total_classes > 0 else 0.0
            ),
            "by_day": self.by_day,
            "by_shift": self.by_shift,
            "by_room": self.by_room,
            "chains": self.chains,
            "best_chain": self.best_chain,
            "run": self.run.to_dict(),
        }


@dataclass
class ScheduleResult:
    """Result of the scheduling process."""

    solution: Solution
    unplaced: list[UnplacedClass] = field(default_factory=list)
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def schedule(self) -> list[ScheduleEntry]:
        return self.solution.schedule

    @property
    def violation_report(self) -> ViolationReport:
        return self.solution.violation_report or ViolationReport()

    def to_rows(self) -> list[dict[str, Any]]:
        """Timetable rows in schedule order."""
        return [entry.to_row() for entry in self.solution.schedule]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "fitness": self.solution.fitness,
            "hard_violations": self.solution.hard_violations,
            "soft_violations": self.solution.soft_violations,
            "timetable": self.to_rows(),
            "violation_report": self.violation_report.to_dict(),
            "unplaced_classes": [u.to_dict() for u in self.unplaced],
            "statistics": self.statistics.to_dict(),
        }
