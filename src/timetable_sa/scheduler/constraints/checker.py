"""Schedule evaluation combining hard and soft constraints."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import Severity
from ..models import ConstraintViolation, ScheduleEntry, ViolationReport
from .hard import HardConstraints
from .soft import SoftConstraints

if TYPE_CHECKING:
    from ...models import Lecturer, Room
    from ..config import SoftConstraintWeights


@dataclass
class FitnessBreakdown:
    """Result of evaluating one schedule."""

    hard_violations: int = 0
    soft_penalty: float = 0.0
    fitness: float = 0.0
    penalties: dict[str, float] = field(default_factory=dict)
    violations: list[ConstraintViolation] = field(default_factory=list)

    @property
    def soft_violations(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.SOFT)

    def to_report(self) -> ViolationReport:
        return ViolationReport.from_violations(self.violations)


class ConstraintChecker:
    """
    Scores schedules.

    Hard and soft handlers share one violation log, which is cleared at the
    start of every evaluation.
    """

    def __init__(self, rooms: list["Room"], lecturers: list["Lecturer"]):
        self._violations: list[ConstraintViolation] = []
        self.hard = HardConstraints(rooms, lecturers, self._violations)
        self.soft = SoftConstraints(rooms, lecturers, self._violations)

    @property
    def rooms(self):
        return self.hard.rooms

    @property
    def lecturers(self):
        return self.hard.lecturers

    def reset_violations(self) -> None:
        self.hard.reset_violations()

    def get_violations(self) -> list[ConstraintViolation]:
        return list(self._violations)

    def evaluate(
        self,
        schedule: list[ScheduleEntry],
        hard_weight: float,
        soft_weights: "SoftConstraintWeights",
    ) -> FitnessBreakdown:
        """
        Evaluate a schedule from scratch.

        Each entry is checked only against the entries before it, so a
        conflict between two classes is counted once, on the later one.

        Args:
            schedule: Entries in schedule order.
            hard_weight: Penalty per failed hard check.
            soft_weights: Weight per soft constraint.

        Returns:
            FitnessBreakdown with ``hard * hard_weight + sum((1 - score) * weight)``.
        """
        self.reset_violations()

        weights = soft_weights.scored()
        penalties = dict.fromkeys(weights, 0.0)
        hard_count = 0

        for index, entry in enumerate(schedule):
            earlier = schedule[:index]
            hard_count += self.hard.check_entry(earlier, entry)
            for name, score in self.soft.check_entry(earlier, entry).items():
                penalties[name] += (1 - score) * weights[name]

        soft_penalty = sum(penalties.values())
        return FitnessBreakdown(
            hard_violations=hard_count,
            soft_penalty=soft_penalty,
            fitness=hard_count * hard_weight + soft_penalty,
            penalties=penalties,
            violations=self.get_violations(),
        )
