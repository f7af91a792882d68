"""Initial schedule construction and move candidates."""

import logging
import random
from dataclasses import replace

from ...constants import Shift
from ...models import ClassRequirement, Room
from ..constants import FRIDAY, SATURDAY
from ..models import ScheduleEntry, TimeSlot, UnplacedClass, UnplacedReason
from ..time_slots import TimeSlotCatalog
from ..utils import calculate_end_time, is_saturday_program, is_valid_friday_start, starts_during_prayer

logger = logging.getLogger(__name__)


class SolutionBuilder:
    """
    Places each class requirement in a random eligible room and slot.

    Eligibility mirrors the fixed hard rules (Saturday program, Friday start
    hours, prayer-time starts, shift band, capacity), so a freshly built
    entry can only violate the pairwise and lecturer-specific constraints.
    """

    def __init__(
        self,
        rooms: list[Room],
        classes: list[ClassRequirement],
        catalog: TimeSlotCatalog,
        rng: random.Random,
    ):
        self.rooms = rooms
        self.classes = classes
        self.catalog = catalog
        self.rng = rng
        self._room_by_code = {room.code: room for room in rooms}
        self._slot_cache: dict[tuple[Shift, bool], list[TimeSlot]] = {}

    def eligible_rooms(
        self,
        participants: int,
        needs_lab: bool = False,
        candidate_rooms: tuple[str, ...] = (),
    ) -> list[str]:
        """
        Room codes a class may use.

        An explicit room list wins when any of its rooms exist and fit.
        Otherwise lab classes get lab rooms, falling back to non-lab rooms,
        and other classes get any room that fits.
        """
        codes = [
            code
            for code in candidate_rooms
            if code in self._room_by_code and self._room_by_code[code].capacity >= participants
        ]
        if codes:
            return codes

        fitting = [room for room in self.rooms if room.capacity >= participants]
        if needs_lab:
            labs = [room.code for room in fitting if room.is_lab]
            if labs:
                return labs
            return [room.code for room in fitting if not room.is_lab]
        return [room.code for room in fitting]

    def eligible_slots(self, shift: Shift, prodi: str) -> list[TimeSlot]:
        """Slots of the class's shift band that pass the fixed day and start rules."""
        saturday_allowed = is_saturday_program(prodi)
        key = (shift, saturday_allowed)
        if key not in self._slot_cache:
            self._slot_cache[key] = [
                slot
                for slot in self.catalog.slots_for(shift)
                if (saturday_allowed or slot.day != SATURDAY)
                and (slot.day != FRIDAY or is_valid_friday_start(slot.start_time))
                and not starts_during_prayer(slot.start_time)
            ]
        return self._slot_cache[key]

    def build_initial(self) -> tuple[list[ScheduleEntry], list[UnplacedClass]]:
        """
        Build the starting schedule.

        Returns:
            Placed entries in requirement order, and the requirements that
            had to be dropped.
        """
        schedule: list[ScheduleEntry] = []
        unplaced: list[UnplacedClass] = []

        for requirement in self.classes:
            reason = self._unplaceable_reason(requirement)
            if reason is not None:
                unplaced.append(reason)
                logger.warning(
                    f"Dropping class {requirement.course_code or '<no code>'} "
                    f"({requirement.course_name}): {reason.details}"
                )
                continue

            rooms = self.eligible_rooms(
                requirement.participants, requirement.needs_lab, requirement.rooms
            )
            slots = self.eligible_slots(requirement.shift, requirement.prodi)
            schedule.append(
                self._make_entry(requirement, self.rng.choice(rooms), self.rng.choice(slots))
            )

        return schedule, unplaced

    def move_slot(self, entry: ScheduleEntry) -> ScheduleEntry:
        """Copy of ``entry`` in a random eligible slot (unchanged if none)."""
        slots = self.eligible_slots(entry.shift, entry.prodi)
        if not slots:
            return entry
        slot = self.rng.choice(slots)
        _, added = calculate_end_time(slot.start_time, entry.credits, slot.day)
        return replace(entry, time_slot=slot, prayer_time_added=added)

    def move_room(self, entry: ScheduleEntry) -> ScheduleEntry:
        """Copy of ``entry`` in a random eligible room (unchanged if none)."""
        rooms = self.eligible_rooms(entry.participants, entry.needs_lab, entry.candidate_rooms)
        if not rooms:
            return entry
        return replace(entry, room=self.rng.choice(rooms))

    def _unplaceable_reason(self, requirement: ClassRequirement) -> UnplacedClass | None:
        if not requirement.course_code:
            return self._unplaced(
                requirement, UnplacedReason.MISSING_COURSE_CODE, "Missing course code"
            )
        if not requirement.lecturers:
            return self._unplaced(requirement, UnplacedReason.NO_LECTURER, "No lecturer assigned")
        if not self.eligible_rooms(requirement.participants, requirement.needs_lab, requirement.rooms):
            return self._unplaced(
                requirement,
                UnplacedReason.NO_ROOM_AVAILABLE,
                f"No room seats {requirement.participants} participants",
            )
        if not self.eligible_slots(requirement.shift, requirement.prodi):
            return self._unplaced(
                requirement,
                UnplacedReason.NO_SLOT_AVAILABLE,
                f"No eligible {requirement.shift.value} slot",
            )
        return None

    @staticmethod
    def _unplaced(
        requirement: ClassRequirement, reason: UnplacedReason, details: str
    ) -> UnplacedClass:
        return UnplacedClass(
            class_id=requirement.course_code,
            class_name=requirement.course_name,
            prodi=requirement.prodi,
            reason=reason,
            details=details,
        )

    @staticmethod
    def _make_entry(requirement: ClassRequirement, room: str, slot: TimeSlot) -> ScheduleEntry:
        _, added = calculate_end_time(slot.start_time, requirement.credits, slot.day)
        return ScheduleEntry(
            class_id=requirement.course_code,
            class_name=requirement.course_name,
            prodi=requirement.prodi,
            lecturers=requirement.lecturers,
            room=room,
            time_slot=slot,
            credits=requirement.credits,
            needs_lab=requirement.needs_lab,
            participants=requirement.participants,
            shift=requirement.shift,
            prayer_time_added=added,
            candidate_rooms=requirement.rooms,
        )
