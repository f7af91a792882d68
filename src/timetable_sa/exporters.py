"""Export functionality for scheduling results."""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .scheduler.models import ScheduleResult

TIMETABLE_COLUMNS = [
    "Class ID",
    "Class Name",
    "Program",
    "Lecturers",
    "Room",
    "Day",
    "Start Time",
    "End Time",
    "SKS",
    "Base Duration (minutes)",
    "Prayer Time Added (minutes)",
    "Total Duration (minutes)",
    "Participants",
    "Class Type",
    "Needs Lab",
]

VIOLATION_COLUMNS = ["Class ID", "Class Name", "Severity", "Constraint", "Reason"]

FONT_HEADER = Font(bold=True)
ALIGN_HEADER = Alignment(horizontal="center", vertical="center")
MAX_COLUMN_WIDTH = 50

# Violations listed in full in the text report before truncating
TEXT_REPORT_HARD_LIMIT = 20
TEXT_REPORT_SOFT_LIMIT = 10


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export scheduling result to file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output file
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False, violations_only: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
            violations_only: Write only the violation report
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.violations_only = violations_only

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export result (or only its violation report) to a JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        payload = result.violation_report.to_dict() if self.violations_only else result.to_dict()
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=self.indent, ensure_ascii=self.ensure_ascii)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export result to an Excel file.

        Creates workbook with sheets:
        - Timetable: One row per placed class
        - Violations: Hard then soft violations
        - Unplaced: Classes that could not be placed
        - Summary: Fitness and counts

        Args:
            result: ScheduleResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            pd.DataFrame(result.to_rows(), columns=TIMETABLE_COLUMNS).to_excel(
                writer, sheet_name="Timetable", index=False
            )
            self._export_violations_sheet(result, writer)
            self._export_unplaced_sheet(result, writer)
            self._export_summary_sheet(result, writer)

            for worksheet in writer.sheets.values():
                self._format_sheet(worksheet)

    @staticmethod
    def _format_sheet(worksheet: Worksheet) -> None:
        """Bold the header row, freeze it and size columns to their content."""
        for cell in worksheet[1]:
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_HEADER
        worksheet.freeze_panes = "A2"

        for column_cells in worksheet.iter_cols():
            width = max(len(str(cell.value)) for cell in column_cells if cell.value is not None)
            letter = get_column_letter(column_cells[0].column)
            worksheet.column_dimensions[letter].width = min(width + 2, MAX_COLUMN_WIDTH)

    def _export_violations_sheet(self, result: ScheduleResult, writer: pd.ExcelWriter) -> None:
        report = result.violation_report
        rows = [
            {
                "Class ID": v.class_id,
                "Class Name": v.class_name,
                "Severity": v.severity.value,
                "Constraint": v.constraint_type,
                "Reason": v.reason,
            }
            for v in report.hard_violations + report.soft_violations
        ]
        pd.DataFrame(rows, columns=VIOLATION_COLUMNS).to_excel(
            writer, sheet_name="Violations", index=False
        )

    def _export_unplaced_sheet(self, result: ScheduleResult, writer: pd.ExcelWriter) -> None:
        rows = [
            {
                "Class ID": u.class_id,
                "Class Name": u.class_name,
                "Program": u.prodi,
                "Reason": u.reason.value,
                "Details": u.details,
            }
            for u in result.unplaced
        ]
        columns = ["Class ID", "Class Name", "Program", "Reason", "Details"]
        pd.DataFrame(rows, columns=columns).to_excel(writer, sheet_name="Unplaced", index=False)

    def _export_summary_sheet(self, result: ScheduleResult, writer: pd.ExcelWriter) -> None:
        stats = result.statistics
        rows = [
            {"Metric": "Generation Date", "Value": result.generation_date},
            {"Metric": "Fitness", "Value": result.solution.fitness},
            {"Metric": "Hard Violations", "Value": result.solution.hard_violations},
            {"Metric": "Soft Violations", "Value": result.solution.soft_violations},
            {"Metric": "Total Classes", "Value": stats.total_classes},
            {"Metric": "Placed", "Value": stats.total_placed},
            {"Metric": "Unplaced", "Value": stats.total_unplaced},
            {"Metric": "Iterations", "Value": stats.run.iterations},
            {"Metric": "Reheats", "Value": stats.run.reheats},
        ]
        pd.DataFrame(rows).to_excel(writer, sheet_name="Summary", index=False)


class TextReportExporter(BaseExporter):
    """Human-readable violation report."""

    def render(self, result: ScheduleResult) -> str:
        report = result.violation_report
        lines = [
            "==========================================",
            "CONSTRAINT VIOLATION REPORT",
            "==========================================",
            "",
            "SUMMARY:",
            f"   Total Hard Violations: {report.total_hard}",
            f"   Total Soft Violations: {report.total_soft}",
            "",
            "VIOLATIONS BY TYPE:",
        ]
        lines.extend(f"   {kind}: {count}" for kind, count in report.violations_by_type.items())
        lines.append("")

        if report.hard_violations:
            lines.append("HARD CONSTRAINT VIOLATIONS:")
            for v in report.hard_violations[:TEXT_REPORT_HARD_LIMIT]:
                lines.append(f"   - {v.class_id} ({v.class_name})")
                lines.append(f"     {v.constraint_type}: {v.reason}")
                lines.append("")
            remaining = report.total_hard - TEXT_REPORT_HARD_LIMIT
            if remaining > 0:
                lines.append(f"   ... and {remaining} more")
                lines.append("")

        if report.soft_violations:
            lines.append("SOFT CONSTRAINT VIOLATIONS (Sample):")
            for v in report.soft_violations[:TEXT_REPORT_SOFT_LIMIT]:
                lines.append(f"   - {v.class_id}: {v.reason}")
            remaining = report.total_soft - TEXT_REPORT_SOFT_LIMIT
            if remaining > 0:
                lines.append(f"   ... and {remaining} more")

        return "\n".join(lines) + "\n"

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(result), encoding="utf-8")


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'excel', 'text')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "excel": ExcelExporter,
        "text": TextReportExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
