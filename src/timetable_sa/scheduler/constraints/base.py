"""Base class for constraint implementations."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..constants import ConstraintType, Severity
from ..models import ConstraintViolation

if TYPE_CHECKING:
    from ...models import Lecturer, Room
    from ..models import ScheduleEntry


class ConstraintBase(ABC):
    """Abstract base class for constraint implementations."""

    severity: Severity

    def __init__(
        self,
        rooms: list["Room"],
        lecturers: list["Lecturer"],
        violations: list[ConstraintViolation] | None = None,
    ):
        """
        Initialize constraint handler.

        Args:
            rooms: Rooms that entries may reference.
            lecturers: Lecturers that entries may reference.
            violations: Log to append failures to. Pass the same list to
                several handlers to collect one combined log.
        """
        self.rooms = {room.code: room for room in rooms}
        self.lecturers = {lecturer.code: lecturer for lecturer in lecturers}
        self.violations = violations if violations is not None else []

    @abstractmethod
    def check_entry(self, earlier: list["ScheduleEntry"], entry: "ScheduleEntry") -> Any:
        """
        Check one entry against the entries placed before it.

        Args:
            earlier: Entries preceding ``entry`` in schedule order.
            entry: The entry being checked.
        """
        pass

    def reset_violations(self) -> None:
        # Cleared in place so handlers sharing the log see the reset
        self.violations.clear()

    def get_violations(self) -> list[ConstraintViolation]:
        return self.violations

    def _add_violation(
        self,
        entry: "ScheduleEntry",
        constraint_type: ConstraintType,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.violations.append(
            ConstraintViolation(
                class_id=entry.class_id,
                class_name=entry.class_name,
                constraint_type=constraint_type.value,
                reason=reason,
                severity=self.severity,
                details=details,
            )
        )
