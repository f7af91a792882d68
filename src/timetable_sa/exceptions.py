"""Custom exceptions for the timetable scheduler."""


class TimetableError(Exception):
    """Base exception for scheduler errors."""

    pass


class InvalidTimeError(TimetableError, ValueError):
    """Time value is not a valid HH:MM string."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid time value: {value!r}. Expected 'HH:MM' (00:00-23:59)")


class InvalidConfigError(TimetableError, ValueError):
    """Algorithm or time-slot configuration is malformed."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        location = f" for '{field}'" if field else ""
        super().__init__(f"Invalid configuration{location}: {message}")


class InputError(TimetableError):
    """Base exception for input loading errors."""

    pass


class SheetNotFoundError(InputError):
    """Sheet not found in workbook."""

    def __init__(self, sheet_name: str, available_sheets: list[str] | None = None):
        self.sheet_name = sheet_name
        self.available_sheets = available_sheets or []
        message = f"Sheet '{sheet_name}' not found in workbook"
        if self.available_sheets:
            message += f". Available sheets: {', '.join(self.available_sheets)}"
        super().__init__(message)


class InvalidDataError(InputError):
    """Input data validation failed."""

    def __init__(self, message: str, sheet_name: str | None = None, row: int | None = None):
        self.sheet_name = sheet_name
        self.row = row
        location = ""
        if sheet_name:
            location += f" in sheet '{sheet_name}'"
        if row is not None:
            location += f" at row {row}"
        super().__init__(f"Invalid data{location}: {message}")
