"""Tests for time-slot generation."""

from timetable_sa.constants import Shift
from timetable_sa.scheduler.config import (
    CustomTimeSlots,
    ShiftConfig,
    TimeSlotConfig,
    merge_config,
)
from timetable_sa.scheduler.models import TimeSlot
from timetable_sa.scheduler.time_slots import build_time_slot_catalog, generate_time_slots


class TestGenerateTimeSlots:
    """Tests for generate_time_slots function."""

    def test_default_morning_day(self):
        slots = generate_time_slots(ShiftConfig("07:30", "17:00", 50), ["Monday"])
        assert [s.start_time for s in slots] == [
            "07:30", "08:30", "09:30", "10:30", "11:30", "12:30", "13:30", "14:30", "15:30",
        ]
        assert slots[-1].end_time == "16:20"

    def test_default_evening_day(self):
        slots = generate_time_slots(ShiftConfig("15:30", "21:00", 50), ["Monday"])
        assert [s.start_time for s in slots] == ["15:30", "16:30", "17:30", "18:30", "19:30"]

    def test_periods_restart_each_day(self):
        slots = generate_time_slots(ShiftConfig("08:00", "10:00", 50), ["Monday", "Tuesday"])
        assert [(s.day, s.period) for s in slots] == [
            ("Monday", 1),
            ("Monday", 2),
            ("Tuesday", 1),
            ("Tuesday", 2),
        ]

    def test_slot_ending_exactly_at_end_is_kept(self):
        slots = generate_time_slots(ShiftConfig("08:00", "08:50", 50), ["Monday"])
        assert len(slots) == 1

    def test_window_shorter_than_a_slot(self):
        assert generate_time_slots(ShiftConfig("10:00", "10:30", 50), ["Monday"]) == []

    def test_custom_slot_duration(self):
        slots = generate_time_slots(ShiftConfig("08:00", "12:00", 90), ["Monday"])
        assert [(s.start_time, s.end_time) for s in slots] == [
            ("08:00", "09:30"),
            ("09:40", "11:10"),
        ]

    def test_no_prayer_filtering(self):
        slots = generate_time_slots(ShiftConfig("11:40", "12:30", 50), ["Friday"])
        assert slots[0].start_time == "11:40"


class TestBuildTimeSlotCatalog:
    """Tests for build_time_slot_catalog function."""

    def test_defaults(self):
        catalog = build_time_slot_catalog()
        assert len(catalog.morning) == 9 * 6
        assert len(catalog.evening) == 5 * 6
        assert catalog.days == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

    def test_evening_eligible(self):
        catalog = build_time_slot_catalog()
        eligible = catalog.evening_eligible
        # One 15:30 morning slot per day plus every evening slot
        assert len(eligible) == 6 + 30
        assert all(slot.start_hour >= 15 for slot in eligible)

    def test_slots_for_shift(self):
        catalog = build_time_slot_catalog()
        assert catalog.slots_for(Shift.MORNING) == catalog.morning
        assert catalog.slots_for(Shift.EVENING) == catalog.evening_eligible

    def test_merge_mode_keeps_unspecified_fields(self):
        config = merge_config({"timeSlotConfig": {"pagi": {"start_time": "08:00"}}})
        catalog = build_time_slot_catalog(config.time_slot_config)

        monday = [s for s in catalog.morning if s.day == "Monday"]
        assert monday[0].start_time == "08:00"
        assert monday[-1].start_time == "16:00"
        assert all(s.end_time <= "17:00" for s in monday)
        assert len(catalog.evening) == 30

    def test_merge_mode_custom_days(self):
        catalog = build_time_slot_catalog(TimeSlotConfig(days=["Monday", "Thursday"]))
        assert catalog.days == ["Monday", "Thursday"]
        assert len(catalog.morning) == 18

    def test_full_override_uses_supplied_slots(self):
        custom = CustomTimeSlots(
            morning=[
                TimeSlot("Monday", "08:00", "09:40", 1),
                TimeSlot("Tuesday", "10:00", "11:40", 1),
            ],
            evening=[TimeSlot("Monday", "19:00", "20:40", 1)],
        )
        catalog = build_time_slot_catalog(TimeSlotConfig(), custom)
        assert catalog.morning == custom.morning
        assert catalog.evening == custom.evening

    def test_full_override_wins_over_merge(self):
        config = merge_config(
            {
                "timeSlotConfig": {"pagi": {"startTime": "09:00"}},
                "customTimeSlots": {
                    "pagi": [{"day": "Monday", "startTime": "08:00", "endTime": "09:40", "period": 1}]
                },
            }
        )
        catalog = build_time_slot_catalog(config.time_slot_config, config.custom_time_slots)
        assert [s.start_time for s in catalog.morning] == ["08:00"]

    def test_override_without_evening_has_no_evening_slots(self):
        custom = CustomTimeSlots(morning=[TimeSlot("Monday", "08:00", "09:40", 1)])
        catalog = build_time_slot_catalog(None, custom)
        assert catalog.evening == []
        assert catalog.evening_eligible == []

    def test_catalogs_are_independent(self):
        first = build_time_slot_catalog()
        second = build_time_slot_catalog()
        first.morning.clear()
        assert len(second.morning) == 54
