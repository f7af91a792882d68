"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from timetable_sa.cli import app

runner = CliRunner()


@pytest.fixture
def input_file(tmp_path, rooms, lecturers, classes):
    path = tmp_path / "input.json"
    path.write_text(
        json.dumps(
            {
                "rooms": [room.to_dict() for room in rooms],
                "lecturers": [lecturer.to_dict() for lecturer in lecturers],
                "classes": [requirement.to_dict() for requirement in classes],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestSolveCommand:
    """Tests for the solve command."""

    def test_writes_result_files(self, input_file, tmp_path):
        output_dir = tmp_path / "out"
        result = runner.invoke(
            app,
            ["solve", str(input_file), "-o", str(output_dir), "--seed", "1", "--max-iterations", "50"],
        )

        assert result.exit_code == 0, result.output
        for name in (
            "timetable_result.json",
            "timetable_result.xlsx",
            "violation_report.json",
            "violation_report.txt",
        ):
            assert (output_dir / name).exists()

        data = json.loads((output_dir / "timetable_result.json").read_text(encoding="utf-8"))
        assert len(data["timetable"]) == 3
        assert data["statistics"]["run"]["iterations"] == 50

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, ["solve", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_bad_config(self, input_file, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"coolingRate": 2}), encoding="utf-8")
        result = runner.invoke(app, ["solve", str(input_file), "-c", str(config)])
        assert result.exit_code == 1
        assert "cooling_rate" in result.output


class TestSlotsCommand:
    """Tests for the slots command."""

    def test_default_catalog(self):
        result = runner.invoke(app, ["slots"])
        assert result.exit_code == 0
        assert "Morning (pagi): 54 slots" in result.output
        assert "Evening (sore): 30 slots" in result.output
        assert "Evening-eligible: 36 slots" in result.output

    def test_custom_catalog(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps(
                {"customTimeSlots": {"pagi": [{"day": "Monday", "startTime": "08:00", "endTime": "08:50"}]}}
            ),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["slots", "-c", str(config)])
        assert result.exit_code == 0
        assert "full override" in result.output
        assert "Evening (sore): 0 slots" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_consistent_input(self, input_file):
        result = runner.invoke(app, ["validate", str(input_file)])
        assert result.exit_code == 0
        assert "Input is consistent" in result.output

    def test_reports_warnings(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text(
            json.dumps(
                {"rooms": [], "lecturers": [], "classes": [{"course_code": "IF1", "lecturers": ["ZZ"]}]}
            ),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 0
        assert "No rooms defined" in result.output
        assert "unknown lecturer 'ZZ'" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
