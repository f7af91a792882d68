"""Soft constraint implementations for the scheduler.

Soft constraints are preferences that should be satisfied when possible.
Each returns a score in [0, 1] (1 is fully satisfied); the checker turns
``1 - score`` into a weighted penalty.
"""

from ...constants import PREFERRED_TIME_BANDS, Shift
from ..constants import (
    COMPACT_GAP_MINUTES,
    EVENING_ANCHOR_HOUR,
    EVENING_MIN_START_HOUR,
    MAX_GAP_MINUTES,
    ConstraintType,
    Severity,
)
from ..models import ScheduleEntry
from ..utils import adjusted_end_minutes, prayer_overlap, start_hour, time_to_minutes
from .base import ConstraintBase


class SoftConstraints(ConstraintBase):
    """
    Implementation of soft constraints as scores.

    Soft Constraints (keys match ``SoftConstraintWeights`` fields):
    - preferred_time: Lecturer preferred time of day
    - preferred_room: Lecturer preferred room
    - transit_time: Lecturer gap between consecutive classes
    - compactness: Small gaps between classes on the same day
    - lab_requirement: Lab classes in lab rooms
    - prayer_time_overlap: Classes spanning prayer windows
    - evening_class_priority: Evening classes anchored at 18:00
    """

    severity = Severity.SOFT

    def check_entry(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> dict[str, float]:
        """Score one entry on every soft constraint."""
        return {
            "preferred_time": self.score_preferred_time(entry),
            "preferred_room": self.score_preferred_room(entry),
            "transit_time": self.score_transit_time(earlier, entry),
            "compactness": self.score_compactness(earlier, entry),
            "lab_requirement": self.score_lab_requirement(entry),
            "prayer_time_overlap": self.score_prayer_time_overlap(entry),
            "evening_class_priority": self.score_evening_class_priority(entry),
        }

    def score_preferred_time(self, entry: ScheduleEntry) -> float:
        """Share of lecturers with a time preference whose band holds the start hour."""
        hour = start_hour(entry.start_time)
        total = 0
        count = 0
        for code in entry.lecturers:
            lecturer = self.lecturers.get(code)
            if lecturer is None or not lecturer.preferred_time:
                continue
            count += 1
            band = PREFERRED_TIME_BANDS.get(lecturer.preferred_time_band)
            if band and band[0] <= hour < band[1]:
                total += 1
        return total / count if count else 1.0

    def score_preferred_room(self, entry: ScheduleEntry) -> float:
        """Share of lecturers with a room preference whose room was assigned."""
        total = 0
        count = 0
        for code in entry.lecturers:
            lecturer = self.lecturers.get(code)
            if lecturer is None or not lecturer.preferred_room:
                continue
            count += 1
            if lecturer.preferred_room == entry.room:
                total += 1
        return total / count if count else 1.0

    def score_transit_time(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> float:
        """
        Worst ratio of gap to required transit time over the lecturer's
        earlier same-day classes. Lecturers without a transit time are skipped.
        """
        start = time_to_minutes(entry.start_time)
        score = 1.0
        for code in entry.lecturers:
            lecturer = self.lecturers.get(code)
            if lecturer is None or not lecturer.transit_time:
                continue
            for existing in earlier:
                if existing.day != entry.day or code not in existing.lecturers:
                    continue
                gap = start - adjusted_end_minutes(existing.start_time, existing.credits, existing.day)
                if gap < lecturer.transit_time:
                    score = min(score, max(0.0, gap / lecturer.transit_time))
        return score

    def score_compactness(self, earlier: list[ScheduleEntry], entry: ScheduleEntry) -> float:
        """
        Smallest gap to an earlier same-day class (any program): 1.0 up to
        60 minutes, falling linearly to 0.0 at 240 minutes.
        """
        start = time_to_minutes(entry.start_time)
        end = adjusted_end_minutes(entry.start_time, entry.credits, entry.day)

        min_gap = None
        for existing in earlier:
            if existing.day != entry.day:
                continue
            existing_start = time_to_minutes(existing.start_time)
            existing_end = adjusted_end_minutes(existing.start_time, existing.credits, existing.day)
            if existing_end <= start:
                gap = start - existing_end
            elif end <= existing_start:
                gap = existing_start - end
            else:
                continue
            min_gap = gap if min_gap is None else min(min_gap, gap)

        if min_gap is None or min_gap <= COMPACT_GAP_MINUTES:
            return 1.0
        span = MAX_GAP_MINUTES - COMPACT_GAP_MINUTES
        return max(0.0, 1 - (min_gap - COMPACT_GAP_MINUTES) / span)

    def score_lab_requirement(self, entry: ScheduleEntry) -> float:
        """1.0 when no lab is needed or a lab is used, 0.5 for a non-lab room, 0.0 for an unknown room."""
        if not entry.needs_lab:
            return 1.0
        room = self.rooms.get(entry.room)
        if room is None:
            return 0.0
        return 1.0 if room.is_lab else 0.5

    def score_prayer_time_overlap(self, entry: ScheduleEntry) -> float:
        """Penalize classes spanning prayer windows; records a soft violation."""
        minutes = prayer_overlap(entry.start_time, entry.credits, entry.day)
        if minutes == 0:
            return 1.0

        self._add_violation(
            entry,
            ConstraintType.PRAYER_TIME_OVERLAP,
            f"Class overlaps with {minutes} minutes of prayer time",
            {"prayer_time_minutes": minutes},
        )
        return max(0.5, 1 - minutes / 100)

    def score_evening_class_priority(self, entry: ScheduleEntry) -> float:
        if entry.shift != Shift.EVENING:
            return 1.0
        hour = start_hour(entry.start_time)
        if hour == EVENING_ANCHOR_HOUR:
            return 1.0
        if EVENING_MIN_START_HOUR <= hour < EVENING_ANCHOR_HOUR:
            return 0.7
        return 0.5
