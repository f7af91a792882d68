"""Tests for result exporters."""

import json

import pandas as pd
import pytest
from openpyxl import load_workbook

from timetable_sa.exporters import (
    TIMETABLE_COLUMNS,
    ExcelExporter,
    JSONExporter,
    TextReportExporter,
    get_exporter,
)
from timetable_sa.scheduler.constants import ConstraintType, Severity
from timetable_sa.scheduler.models import (
    ConstraintViolation,
    ScheduleResult,
    Solution,
    UnplacedClass,
    UnplacedReason,
    ViolationReport,
)


def _violation(class_id, constraint_type, severity, reason="reason"):
    return ConstraintViolation(
        class_id=class_id,
        class_name=f"Class {class_id}",
        constraint_type=constraint_type.value,
        reason=reason,
        severity=severity,
    )


@pytest.fixture
def result(make_entry):
    schedule = [
        make_entry("IF101", start="07:30", credits=3),
        make_entry("IF102", day="Tuesday", start="11:00", credits=2, room="R102"),
    ]
    violations = [
        _violation("IF102", ConstraintType.ROOM_CAPACITY, Severity.HARD, "Room X999 not found"),
        _violation("IF102", ConstraintType.PRAYER_TIME_OVERLAP, Severity.SOFT, "Overlaps prayer time"),
    ]
    return ScheduleResult(
        solution=Solution(
            schedule=schedule,
            fitness=100007.5,
            hard_violations=1,
            soft_violations=1,
            violation_report=ViolationReport.from_violations(violations),
        ),
        unplaced=[
            UnplacedClass(
                class_id="IF999",
                class_name="Seminar",
                prodi="Informatika",
                reason=UnplacedReason.NO_ROOM_AVAILABLE,
                details="No room seats 500 participants",
            )
        ],
    )


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_full_result(self, result, tmp_path):
        path = tmp_path / "out" / "timetable_result.json"
        JSONExporter().export(result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["fitness"] == 100007.5
        assert [row["Class ID"] for row in data["timetable"]] == ["IF101", "IF102"]
        assert data["unplaced_classes"][0]["reason"] == "no_room_available"

    def test_violations_only(self, result, tmp_path):
        path = tmp_path / "violation_report.json"
        JSONExporter(violations_only=True).export(result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["total_hard_violations"] == 1
        assert data["summary"]["total_soft_violations"] == 1
        assert data["hard_constraint_violations"][0]["severity"] == "hard"

    def test_prayer_time_in_rows(self, result, tmp_path):
        path = tmp_path / "timetable_result.json"
        JSONExporter().export(result, path)
        row = json.loads(path.read_text(encoding="utf-8"))["timetable"][1]
        assert row["End Time"] == "13:40"
        assert row["Total Duration (minutes)"] == 110 + row["Prayer Time Added (minutes)"]


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_sheets(self, result, tmp_path):
        path = tmp_path / "timetable_result.xlsx"
        ExcelExporter().export(result, path)

        sheets = pd.read_excel(path, sheet_name=None)
        assert list(sheets) == ["Timetable", "Violations", "Unplaced", "Summary"]
        assert list(sheets["Timetable"].columns) == TIMETABLE_COLUMNS
        assert len(sheets["Timetable"]) == 2
        assert list(sheets["Violations"]["Severity"]) == ["hard", "soft"]
        assert sheets["Unplaced"]["Class ID"][0] == "IF999"

    def test_header_formatting(self, result, tmp_path):
        path = tmp_path / "timetable_result.xlsx"
        ExcelExporter().export(result, path)

        worksheet = load_workbook(path)["Timetable"]
        assert worksheet["A1"].font.bold
        assert worksheet.freeze_panes == "A2"
        assert worksheet.column_dimensions["A"].width >= len("Class ID")

    def test_empty_result(self, tmp_path):
        path = tmp_path / "empty.xlsx"
        ExcelExporter().export(ScheduleResult(solution=Solution(schedule=[], fitness=0.0)), path)
        sheets = pd.read_excel(path, sheet_name=None)
        assert sheets["Timetable"].empty
        assert list(sheets["Timetable"].columns) == TIMETABLE_COLUMNS


class TestTextReportExporter:
    """Tests for TextReportExporter."""

    def test_sections(self, result):
        text = TextReportExporter().render(result)
        assert "CONSTRAINT VIOLATION REPORT" in text
        assert "Total Hard Violations: 1" in text
        assert "HC3: Room Capacity: 1" in text
        assert "HARD CONSTRAINT VIOLATIONS:" in text
        assert "SOFT CONSTRAINT VIOLATIONS (Sample):" in text
        assert "IF102: Overlaps prayer time" in text

    def test_truncates_long_lists(self):
        violations = [
            _violation(f"C{i}", ConstraintType.ROOM_CONFLICT, Severity.HARD) for i in range(25)
        ]
        result = ScheduleResult(
            solution=Solution(
                schedule=[],
                fitness=0.0,
                violation_report=ViolationReport.from_violations(violations),
            )
        )
        text = TextReportExporter().render(result)
        assert "   ... and 5 more" in text
        assert "C19 (" in text
        assert "C20 (" not in text

    def test_no_violations(self):
        text = TextReportExporter().render(ScheduleResult(solution=Solution(schedule=[], fitness=0.0)))
        assert "Total Hard Violations: 0" in text
        assert "HARD CONSTRAINT VIOLATIONS:" not in text

    def test_export_writes_file(self, result, tmp_path):
        path = tmp_path / "violation_report.txt"
        TextReportExporter().export(result, path)
        assert path.read_text(encoding="utf-8") == TextReportExporter().render(result)


class TestGetExporter:
    """Tests for get_exporter function."""

    @pytest.mark.parametrize(
        "name, cls",
        [("json", JSONExporter), ("excel", ExcelExporter), ("text", TextReportExporter)],
    )
    def test_known_formats(self, name, cls):
        assert isinstance(get_exporter(name), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("csv")
