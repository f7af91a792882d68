"""Tests for input loading."""

import json

import pandas as pd
import pytest

from timetable_sa.constants import Shift
from timetable_sa.exceptions import InputError, InvalidDataError, SheetNotFoundError
from timetable_sa.loader import InputData, load_input, validate_input
from timetable_sa.models import ClassRequirement, Lecturer, Room

ROOM_ROWS = [
    {"Code": "R101", "Name": "Ruang 101", "Type": "Kelas", "Capacity": 40},
    {"Code": "G5-Lab1", "Name": "Lab 1", "Type": "Laboratorium", "Capacity": 30},
]

LECTURER_ROWS = [
    {
        "Code": "L1",
        "Prodi Code": "IF",
        "Name": "Budi",
        "Prefered_Time": "pagi",
        "Research_Day": "Wednesday",
        "Transit_Time": 30,
        "Max_Daily_Periods": 6,
        "Prefered_Room": "R101",
    },
    {"Code": "L2", "Prodi Code": "IF", "Name": "Siti"},
]

CLASS_ROWS = [
    {
        "Kode_Matakuliah": "IF101",
        "Mata_Kuliah": "Algoritma",
        "Prodi": "Informatika",
        "Kelas": "A",
        "SKS": 3,
        "Jenis": "T",
        "Peserta": 35,
        "Kode_Dosen1": "L1",
        "Kode_Dosen2": "L2",
        "should_on_the_lab": "no",
        "Class_Type": "pagi",
    },
    {
        "Kode_Matakuliah": "IF102",
        "Mata_Kuliah": "Praktikum",
        "Prodi": "Informatika",
        "Kelas": "A",
        "SKS": 2,
        "Peserta": 25,
        "Kode_Dosen1": "L2",
        "should_on_the_lab": "yes",
        "Class_Type": "sore",
    },
]


def _write_workbook(path, sheets):
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, index=False)
    return path


@pytest.fixture
def workbook(tmp_path):
    return _write_workbook(
        tmp_path / "input.xlsx",
        {"ruangan": ROOM_ROWS, "dosen": LECTURER_ROWS, "kebutuhan_kelas": CLASS_ROWS},
    )


class TestLoadExcel:
    """Tests for loading the input workbook."""

    def test_loads_all_sheets(self, workbook):
        data = load_input(workbook)
        assert [room.code for room in data.rooms] == ["R101", "G5-Lab1"]
        assert [lecturer.code for lecturer in data.lecturers] == ["L1", "L2"]
        assert [requirement.course_code for requirement in data.classes] == ["IF101", "IF102"]
        assert data.source == str(workbook)

    def test_numeric_cells_converted(self, workbook):
        data = load_input(workbook)
        assert data.rooms[0].capacity == 40
        assert data.lecturers[0].transit_time == 30
        assert data.classes[0].credits == 3
        assert data.classes[0].participants == 35

    def test_class_fields(self, workbook):
        data = load_input(workbook)
        first, second = data.classes
        assert first.lecturers == ("L1", "L2")
        assert first.needs_lab is False
        assert second.lecturers == ("L2",)
        assert second.needs_lab is True
        assert second.shift == Shift.EVENING

    def test_blank_lecturer_cells(self, workbook):
        data = load_input(workbook)
        assert data.lecturers[1].research_day == ""
        assert data.lecturers[1].max_daily_periods == 0

    def test_missing_sheet(self, tmp_path):
        path = _write_workbook(tmp_path / "input.xlsx", {"ruangan": ROOM_ROWS, "dosen": LECTURER_ROWS})
        with pytest.raises(SheetNotFoundError) as exc_info:
            load_input(path)
        assert exc_info.value.sheet_name == "kebutuhan_kelas"

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError):
            load_input(tmp_path / "missing.xlsx")

    def test_not_a_workbook(self, tmp_path):
        path = tmp_path / "input.xlsx"
        path.write_text("not a workbook", encoding="utf-8")
        with pytest.raises(InputError):
            load_input(path)


class TestLoadJson:
    """Tests for loading JSON input."""

    def test_english_keys(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text(
            json.dumps(
                {
                    "rooms": [{"code": "R1", "name": "A", "type": "Kelas", "capacity": 20}],
                    "lecturers": [{"code": "L1", "name": "Budi"}],
                    "classes": [{"course_code": "IF1", "lecturers": ["L1"], "shift": "sore"}],
                }
            ),
            encoding="utf-8",
        )
        data = load_input(path)
        assert data.rooms == [Room(code="R1", name="A", type="Kelas", capacity=20)]
        assert data.classes[0].shift == Shift.EVENING

    def test_sheet_name_keys(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text(
            json.dumps({"ruangan": ROOM_ROWS, "dosen": LECTURER_ROWS, "kebutuhan_kelas": CLASS_ROWS}),
            encoding="utf-8",
        )
        data = load_input(path)
        assert len(data.rooms) == 2
        assert data.classes[1].needs_lab is True

    def test_missing_section(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text(json.dumps({"rooms": [], "lecturers": []}), encoding="utf-8")
        with pytest.raises(InvalidDataError):
            load_input(path)

    def test_section_not_array(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text(json.dumps({"rooms": {}, "lecturers": [], "classes": []}), encoding="utf-8")
        with pytest.raises(InvalidDataError):
            load_input(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(InvalidDataError):
            load_input(path)


class TestValidateInput:
    """Tests for validate_input function."""

    def test_consistent_input(self, rooms, lecturers, classes):
        assert validate_input(InputData(rooms=rooms, lecturers=lecturers, classes=classes)) == []

    def test_empty_input(self):
        warnings = validate_input(InputData())
        assert "No rooms defined" in warnings
        assert "No class requirements defined" in warnings

    def test_cross_reference_problems(self, rooms, lecturers):
        classes = [
            ClassRequirement(course_code="IF1", lecturers=("ZZ",), rooms=("X999",)),
            ClassRequirement(course_code="IF2"),
            ClassRequirement(course_code="", lecturers=("L1",)),
        ]
        warnings = validate_input(InputData(rooms=rooms, lecturers=lecturers, classes=classes))
        assert any("unknown lecturer 'ZZ'" in w for w in warnings)
        assert any("unknown room 'X999'" in w for w in warnings)
        assert any("IF2" in w and "no lecturer assigned" in w for w in warnings)
        assert any("#3" in w and "missing course code" in w for w in warnings)

    def test_duplicate_codes(self, rooms, classes):
        lecturers = [Lecturer(code="L1"), Lecturer(code="L1"), Lecturer(code="L2"), Lecturer(code="L3")]
        warnings = validate_input(
            InputData(rooms=rooms + [rooms[0]], lecturers=lecturers, classes=classes)
        )
        assert "Duplicate room code 'R101' (2 rows)" in warnings
        assert "Duplicate lecturer code 'L1' (2 rows)" in warnings
