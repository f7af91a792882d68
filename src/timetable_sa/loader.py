"""Input loading for rooms, lecturers and class requirements.

Two sources are supported: an Excel workbook with the sheets ``ruangan``,
``dosen`` and ``kebutuhan_kelas``, or a JSON document with ``rooms``,
``lecturers`` and ``classes`` arrays.
"""

import json
import logging
import zipfile
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from .constants import SHEET_CLASSES, SHEET_LECTURERS, SHEET_ROOMS
from .exceptions import InputError, InvalidDataError, SheetNotFoundError
from .models import ClassRequirement, Lecturer, Room

logger = logging.getLogger(__name__)

# JSON keys, with the workbook sheet names accepted as aliases
JSON_SECTIONS = {
    "rooms": (SHEET_ROOMS,),
    "lecturers": (SHEET_LECTURERS,),
    "classes": (SHEET_CLASSES,),
}


@dataclass
class InputData:
    """Everything the scheduler needs as input."""

    rooms: list[Room] = field(default_factory=list)
    lecturers: list[Lecturer] = field(default_factory=list)
    classes: list[ClassRequirement] = field(default_factory=list)
    source: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "rooms": [room.to_dict() for room in self.rooms],
            "lecturers": [lecturer.to_dict() for lecturer in self.lecturers],
            "classes": [requirement.to_dict() for requirement in self.classes],
        }


def load_input(file_path: str | Path) -> InputData:
    """Load input from an Excel workbook or a JSON file, by extension.

    Raises:
        InputError: If the file is missing, unreadable or malformed
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise InputError(f"File not found: {file_path}")

    if file_path.suffix.lower() == ".json":
        return load_json(file_path)
    return load_excel(file_path)


def load_excel(file_path: str | Path) -> InputData:
    """Load the three input sheets from a workbook.

    Cells are read as text and converted per field, so numeric-looking
    codes keep their exact spelling.

    Raises:
        SheetNotFoundError: If a required sheet is missing
        InputError: If the workbook cannot be opened
    """
    file_path = Path(file_path)
    try:
        excel_file = pd.ExcelFile(file_path)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise InputError(f"Failed to open Excel file {file_path}: {e}") from e

    with excel_file:
        available_sheets = excel_file.sheet_names
        for sheet_name in (SHEET_ROOMS, SHEET_LECTURERS, SHEET_CLASSES):
            if sheet_name not in available_sheets:
                raise SheetNotFoundError(sheet_name, available_sheets)

        data = InputData(
            rooms=[Room.from_dict(row) for row in _read_sheet(excel_file, SHEET_ROOMS)],
            lecturers=[
                Lecturer.from_dict(row) for row in _read_sheet(excel_file, SHEET_LECTURERS)
            ],
            classes=[
                ClassRequirement.from_dict(row)
                for row in _read_sheet(excel_file, SHEET_CLASSES)
            ],
            source=str(file_path),
        )

    _log_loaded(data)
    return data


def load_json(file_path: str | Path) -> InputData:
    """Load input from a JSON document.

    Raises:
        InvalidDataError: If the document is not an object of arrays
    """
    file_path = Path(file_path)
    try:
        with open(file_path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidDataError(f"Malformed JSON: {e}") from e

    if not isinstance(document, dict):
        raise InvalidDataError("Top-level JSON value must be an object")

    sections = {}
    for key, aliases in JSON_SECTIONS.items():
        records = next(
            (document[name] for name in (key, *aliases) if name in document), None
        )
        if records is None:
            raise InvalidDataError(f"Missing '{key}' array")
        if not isinstance(records, list):
            raise InvalidDataError(f"'{key}' must be an array")
        sections[key] = records

    data = InputData(
        rooms=[Room.from_dict(record) for record in sections["rooms"]],
        lecturers=[Lecturer.from_dict(record) for record in sections["lecturers"]],
        classes=[ClassRequirement.from_dict(record) for record in sections["classes"]],
        source=str(file_path),
    )
    _log_loaded(data)
    return data


def validate_input(data: InputData) -> list[str]:
    """Check cross-references in the input.

    Problems are returned as warnings rather than raised; the scheduler
    handles them by dropping classes or recording hard violations.

    Returns:
        List of warning messages (empty when the input is consistent)
    """
    warnings = []

    if not data.rooms:
        warnings.append("No rooms defined")
    if not data.classes:
        warnings.append("No class requirements defined")

    for code, count in Counter(room.code for room in data.rooms).items():
        if count > 1:
            warnings.append(f"Duplicate room code '{code}' ({count} rows)")
    for code, count in Counter(lecturer.code for lecturer in data.lecturers).items():
        if count > 1:
            warnings.append(f"Duplicate lecturer code '{code}' ({count} rows)")

    room_codes = {room.code for room in data.rooms}
    lecturer_codes = {lecturer.code for lecturer in data.lecturers}

    for index, requirement in enumerate(data.classes, start=1):
        label = f"Class {requirement.course_code or f'#{index}'} ({requirement.course_name})"
        if not requirement.course_code:
            warnings.append(f"{label}: missing course code")
        if not requirement.lecturers:
            warnings.append(f"{label}: no lecturer assigned")
        for code in requirement.lecturers:
            if code not in lecturer_codes:
                warnings.append(f"{label}: unknown lecturer '{code}'")
        for code in requirement.rooms:
            if code not in room_codes:
                warnings.append(f"{label}: unknown room '{code}'")

    return warnings


def _read_sheet(excel_file: pd.ExcelFile, sheet_name: str) -> list[dict[str, Any]]:
    df = pd.read_excel(excel_file, sheet_name=sheet_name, dtype=str)
    df.columns = [str(column).strip() for column in df.columns]
    df = df.dropna(how="all")
    return df.to_dict("records")


def _log_loaded(data: InputData) -> None:
    logger.info(
        f"Loaded {len(data.rooms)} rooms, {len(data.lecturers)} lecturers, "
        f"{len(data.classes)} class requirements from {data.source}"
    )
    if not data.classes:
        logger.warning("Input contains no class requirements")
