"""University timetable scheduling using simulated annealing.

This package assigns class requirements to rooms and time slots. A
constraint model scores complete schedules (hard rules counted with a large
weight, soft preferences as weighted penalties) and a simulated annealing
search with reheating looks for the lowest score.

Main classes:
- TimetableScheduler: Runs one or more annealing chains and builds the result
- SimulatedAnnealing: A single annealing chain
- ConstraintChecker: Scores a schedule and records violations
- AlgorithmConfig: Tuning and time-slot settings (see merge_config)

Usage:
    from timetable_sa.scheduler import TimetableScheduler

    scheduler = TimetableScheduler(config={"maxIterations": 5000}, seed=1)
    result = scheduler.schedule(rooms, lecturers, classes)
"""

from .config import (
    DEFAULT_EVENING_CONFIG,
    DEFAULT_MORNING_CONFIG,
    AlgorithmConfig,
    CustomTimeSlots,
    ShiftConfig,
    SoftConstraintWeights,
    TimeSlotConfig,
    load_config,
    merge_config,
)
from .constants import PRAYER_WINDOWS, ConstraintType, Severity
from .constraints import ConstraintChecker, FitnessBreakdown
from .models import (
    ConstraintViolation,
    RunStatistics,
    ScheduleEntry,
    ScheduleResult,
    ScheduleStatistics,
    Solution,
    TimeSlot,
    UnplacedClass,
    UnplacedReason,
    ViolationReport,
)
from .scheduler import TimetableScheduler
from .solver import SimulatedAnnealing, SolutionBuilder
from .time_slots import TimeSlotCatalog, build_time_slot_catalog, generate_time_slots
from .utils import (
    adjusted_end,
    calculate_end_time,
    intervals_overlap,
    is_valid_friday_start,
    minutes_to_time,
    prayer_overlap,
    starts_during_prayer,
    time_to_minutes,
)

__all__ = [
    # Main scheduler
    "TimetableScheduler",
    "SimulatedAnnealing",
    "SolutionBuilder",
    "ConstraintChecker",
    "FitnessBreakdown",
    # Configuration
    "AlgorithmConfig",
    "CustomTimeSlots",
    "DEFAULT_EVENING_CONFIG",
    "DEFAULT_MORNING_CONFIG",
    "ShiftConfig",
    "SoftConstraintWeights",
    "TimeSlotConfig",
    "load_config",
    "merge_config",
    # Time slots
    "TimeSlotCatalog",
    "build_time_slot_catalog",
    "generate_time_slots",
    # Models
    "ConstraintViolation",
    "RunStatistics",
    "ScheduleEntry",
    "ScheduleResult",
    "ScheduleStatistics",
    "Solution",
    "TimeSlot",
    "UnplacedClass",
    "UnplacedReason",
    "ViolationReport",
    # Constants
    "ConstraintType",
    "PRAYER_WINDOWS",
    "Severity",
    # Rule functions
    "adjusted_end",
    "calculate_end_time",
    "intervals_overlap",
    "is_valid_friday_start",
    "minutes_to_time",
    "prayer_overlap",
    "starts_during_prayer",
    "time_to_minutes",
]
