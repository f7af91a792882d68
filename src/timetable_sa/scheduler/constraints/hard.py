"""Hard constraint implementations for the scheduler.

Hard constraints are mandatory requirements that must never be violated.
Every failure is recorded in the violation log and counted once toward the
fitness. Data-integrity problems, such as an unknown room code, are reported
the same way instead of being raised.
"""

from ...constants import Shift
from ..constants import (
    EVENING_MIN_START_HOUR,
    FRIDAY,
    MORNING_MAX_START_HOUR,
    SATURDAY,
    ConstraintType,
    Severity,
)
from ..models import ScheduleEntry
from ..utils import (
    intervals_overlap,
    is_saturday_program,
    is_valid_friday_start,
    start_hour,
    starts_during_prayer,
)
from .base import ConstraintBase


class HardConstraints(ConstraintBase):
    """
    Implementation of all hard constraints.

    Hard Constraints:
    - HC1: Lecturer Conflict
    - HC2: Room Conflict
    - HC3: Room Capacity (an unknown room also fails)
    - HC5: Prodi Conflict
    - HC6: Research Day
    - HC7: Max Daily Periods
    - HC8: Class Type Time
    - HC9: Saturday Restriction
    - HC10: Friday Time Restriction
    - HC11: Prayer Time Start

    Each check stops at its first failure, so it records at most one
    violation per entry.
    """

    severity = Severity.HARD

    def check_entry(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> int:
        """Run every hard check and return how many failed."""
        results = (
            self.check_lecturer_conflict(earlier, entry),
            self.check_room_conflict(earlier, entry),
            self.check_room_capacity(entry),
            self.check_prodi_conflict(earlier, entry),
            self.check_research_day(entry),
            self.check_max_daily_periods(earlier, entry),
            self.check_class_type_time(entry),
            self.check_saturday_restriction(entry),
            self.check_friday_time_restriction(entry),
            self.check_prayer_time_start(entry),
        )
        return sum(1 for passed in results if not passed)

    def check_lecturer_conflict(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> bool:
        """
        HC1: Lecturer Conflict
        A lecturer cannot teach two overlapping classes.
        """
        for existing in earlier:
            if not intervals_overlap(existing, entry):
                continue
            for lecturer in entry.lecturers:
                if lecturer in existing.lecturers:
                    self._add_violation(
                        entry,
                        ConstraintType.LECTURER_CONFLICT,
                        f"Lecturer {lecturer} has conflict with class {existing.class_id} "
                        f"on {entry.day} at {entry.start_time}",
                        {"conflicts_with": existing.class_id, "lecturer": lecturer},
                    )
                    return False
        return True

    def check_room_conflict(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> bool:
        """
        HC2: Room Conflict
        A room can only hold one class at a time.
        """
        for existing in earlier:
            if existing.room == entry.room and intervals_overlap(existing, entry):
                self._add_violation(
                    entry,
                    ConstraintType.ROOM_CONFLICT,
                    f"Room {entry.room} is already occupied by class {existing.class_id} "
                    f"on {entry.day} at {entry.start_time}",
                    {"conflicts_with": existing.class_id, "room": entry.room},
                )
                return False
        return True

    def check_room_capacity(self, entry: ScheduleEntry) -> bool:
        """
        HC3: Room Capacity
        The room must exist and seat every participant.
        """
        room = self.rooms.get(entry.room)
        if room is None:
            self._add_violation(
                entry,
                ConstraintType.ROOM_CAPACITY,
                f"Room {entry.room} not found",
            )
            return False

        if room.capacity < entry.participants:
            self._add_violation(
                entry,
                ConstraintType.ROOM_CAPACITY,
                f"Room {entry.room} capacity ({room.capacity}) is less than "
                f"participants ({entry.participants})",
                {"room_capacity": room.capacity, "participants": entry.participants},
            )
            return False
        return True

    def check_prodi_conflict(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> bool:
        """
        HC5: Prodi Conflict
        Two classes of the same program cannot overlap.
        """
        for existing in earlier:
            if existing.prodi == entry.prodi and intervals_overlap(existing, entry):
                self._add_violation(
                    entry,
                    ConstraintType.PRODI_CONFLICT,
                    f"Same program ({entry.prodi}) has class {existing.class_id} "
                    f"at the same time on {entry.day}",
                    {"conflicts_with": existing.class_id, "prodi": entry.prodi},
                )
                return False
        return True

    def check_research_day(self, entry: ScheduleEntry) -> bool:
        """
        HC6: Research Day
        No lecturer teaches on their research day.
        """
        for code in entry.lecturers:
            lecturer = self.lecturers.get(code)
            if lecturer is None:
                continue
            research_day = lecturer.research_day.strip()
            if research_day and entry.day == research_day:
                self._add_violation(
                    entry,
                    ConstraintType.RESEARCH_DAY,
                    f"Lecturer {code} has research day on {research_day}",
                    {"lecturer": code, "research_day": research_day},
                )
                return False
        return True

    def check_max_daily_periods(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> bool:
        """
        HC7: Max Daily Periods
        A lecturer's credits taught on one day stay within their limit.
        Lecturers without a limit are skipped.
        """
        for code in entry.lecturers:
            lecturer = self.lecturers.get(code)
            if lecturer is None or not lecturer.max_daily_periods:
                continue

            periods = entry.credits + sum(
                existing.credits
                for existing in earlier
                if existing.day == entry.day and code in existing.lecturers
            )
            if periods > lecturer.max_daily_periods:
                self._add_violation(
                    entry,
                    ConstraintType.MAX_DAILY_PERIODS,
                    f"Lecturer {code} exceeds max daily periods "
                    f"({lecturer.max_daily_periods}) on {entry.day}",
                    {"lecturer": code, "periods": periods, "max": lecturer.max_daily_periods},
                )
                return False
        return True

    def check_class_type_time(self, entry: ScheduleEntry) -> bool:
        """
        HC8: Class Type Time
        Evening classes start at 15:00 or later; morning classes before 18:00.
        """
        hour = start_hour(entry.start_time)
        if entry.shift == Shift.EVENING:
            if hour < EVENING_MIN_START_HOUR:
                self._add_violation(
                    entry,
                    ConstraintType.CLASS_TYPE_TIME,
                    f"Evening class starting too early at {entry.start_time}",
                )
                return False
        elif hour >= MORNING_MAX_START_HOUR:
            self._add_violation(
                entry,
                ConstraintType.CLASS_TYPE_TIME,
                f"Morning class starting too late at {entry.start_time}",
            )
            return False
        return True

    def check_saturday_restriction(self, entry: ScheduleEntry) -> bool:
        """
        HC9: Saturday Restriction
        Only the Magister Manajemen program is taught on Saturday.
        """
        if entry.day != SATURDAY or is_saturday_program(entry.prodi):
            return True
        self._add_violation(
            entry,
            ConstraintType.SATURDAY_RESTRICTION,
            f"Only Magister Manajemen allowed on Saturday, but class is from {entry.prodi}",
            {"prodi": entry.prodi},
        )
        return False

    def check_friday_time_restriction(self, entry: ScheduleEntry) -> bool:
        """
        HC10: Friday Time Restriction
        No class starts at 11, 12 or 13 o'clock on Friday.
        """
        if entry.day != FRIDAY or is_valid_friday_start(entry.start_time):
            return True
        self._add_violation(
            entry,
            ConstraintType.FRIDAY_TIME_RESTRICTION,
            f"Cannot start class at {entry.start_time} on Friday "
            "(prohibited: 11:00, 12:00, 13:00)",
            {"start_time": entry.start_time},
        )
        return False

    def check_prayer_time_start(self, entry: ScheduleEntry) -> bool:
        """
        HC11: Prayer Time Start
        No class starts inside a prayer window.
        """
        if not starts_during_prayer(entry.start_time):
            return True
        self._add_violation(
            entry,
            ConstraintType.PRAYER_TIME_START,
            f"Class cannot start during prayer time at {entry.start_time}",
            {"start_time": entry.start_time},
        )
        return False
