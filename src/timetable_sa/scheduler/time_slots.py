"""Time-slot generation.

Slots are produced per shift from a start/end window and a slot length, with
a fixed break after every slot. A full override bypasses generation and uses
the supplied slot lists verbatim.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import Shift
from .constants import BREAK_MINUTES, DEFAULT_DAYS, EVENING_MIN_START_HOUR
from .models import TimeSlot
from .utils import minutes_to_time, time_to_minutes

if TYPE_CHECKING:
    from .config import CustomTimeSlots, ShiftConfig, TimeSlotConfig


def generate_time_slots(shift_config: "ShiftConfig", days: list[str] | None = None) -> list[TimeSlot]:
    """Generate the slots of one shift for every day.

    Periods are numbered from 1 within each day. No prayer or Friday
    filtering happens here; those rules belong to the solver.

    Example:
        >>> from .config import ShiftConfig
        >>> slots = generate_time_slots(ShiftConfig("07:30", "09:30", 50), ["Monday"])
        >>> [(s.start_time, s.end_time) for s in slots]
        [('07:30', '08:20'), ('08:30', '09:20')]
    """
    if days is None:
        days = DEFAULT_DAYS

    start = time_to_minutes(shift_config.start_time)
    end = time_to_minutes(shift_config.end_time)
    duration = shift_config.slot_duration

    slots = []
    for day in days:
        current = start
        period = 1
        while current + duration <= end:
            slots.append(
                TimeSlot(
                    day=day,
                    start_time=minutes_to_time(current),
                    end_time=minutes_to_time(current + duration),
                    period=period,
                )
            )
            current += duration + BREAK_MINUTES
            period += 1
    return slots


@dataclass
class TimeSlotCatalog:
    """Slot lists used by one solver run."""

    morning: list[TimeSlot] = field(default_factory=list)
    evening: list[TimeSlot] = field(default_factory=list)

    @property
    def evening_eligible(self) -> list[TimeSlot]:
        """Slots an evening class may take: any slot starting at 15:00 or later."""
        return [
            slot
            for slot in self.morning + self.evening
            if slot.start_hour >= EVENING_MIN_START_HOUR
        ]

    def slots_for(self, shift: Shift) -> list[TimeSlot]:
        return self.evening_eligible if shift == Shift.EVENING else self.morning

    @property
    def days(self) -> list[str]:
        """Distinct days in first-seen order."""
        return list(dict.fromkeys(slot.day for slot in self.morning + self.evening))


def build_time_slot_catalog(
    time_slot_config: "TimeSlotConfig | None" = None,
    custom_time_slots: "CustomTimeSlots | None" = None,
) -> TimeSlotCatalog:
    """Build the slot catalog.

    A full override always wins: when ``custom_time_slots`` is given its lists
    are used as-is and a shift it leaves out gets no slots. Otherwise slots
    are generated from ``time_slot_config`` (defaults when None).
    """
    if custom_time_slots is not None:
        return TimeSlotCatalog(
            morning=list(custom_time_slots.morning or []),
            evening=list(custom_time_slots.evening or []),
        )

    if time_slot_config is None:
        from .config import TimeSlotConfig

        time_slot_config = TimeSlotConfig()

    days = time_slot_config.days or DEFAULT_DAYS
    return TimeSlotCatalog(
        morning=generate_time_slots(time_slot_config.morning, days),
        evening=generate_time_slots(time_slot_config.evening, days),
    )
