"""Timetable SA - university course timetabling with simulated annealing.

This module loads rooms, lecturers and class requirements from an Excel
workbook (or JSON), assigns every class a day, start time and room, and
reports the hard and soft constraint violations that remain.

Example usage:
    from timetable_sa import TimetableScheduler, load_input

    data = load_input("data_uisi.xlsx")
    scheduler = TimetableScheduler(seed=42)
    result = scheduler.schedule(data.rooms, data.lecturers, data.classes)

    print(f"Fitness: {result.solution.fitness:.2f}")
    print(f"Hard violations: {result.violation_report.total_hard}")

    # Export to JSON
    from timetable_sa.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(result, "timetable_result.json")
"""

from .exceptions import (
    InputError,
    InvalidConfigError,
    InvalidDataError,
    InvalidTimeError,
    SheetNotFoundError,
    TimetableError,
)
from .exporters import ExcelExporter, JSONExporter, TextReportExporter, get_exporter
from .loader import InputData, load_input, validate_input
from .models import ClassRequirement, Lecturer, Room
from .constants import Shift
from .scheduler import AlgorithmConfig, TimetableScheduler, merge_config

__version__ = "0.1.0"

__all__ = [
    # Main scheduler
    "TimetableScheduler",
    "AlgorithmConfig",
    "merge_config",
    # Input
    "InputData",
    "load_input",
    "validate_input",
    # Models
    "Room",
    "Lecturer",
    "ClassRequirement",
    "Shift",
    # Exporters
    "JSONExporter",
    "ExcelExporter",
    "TextReportExporter",
    "get_exporter",
    # Exceptions
    "TimetableError",
    "InvalidTimeError",
    "InvalidConfigError",
    "InputError",
    "SheetNotFoundError",
    "InvalidDataError",
]
