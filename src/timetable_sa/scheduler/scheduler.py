"""Main scheduler class running one or more annealing chains."""

import logging
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from typing import Any

from ..models import ClassRequirement, Lecturer, Room
from .config import AlgorithmConfig, merge_config
from .models import (
    RunStatistics,
    ScheduleResult,
    ScheduleStatistics,
    Solution,
    UnplacedClass,
)
from .solver.annealing import SimulatedAnnealing

logger = logging.getLogger(__name__)


def _run_chain(
    rooms: list[Room],
    lecturers: list[Lecturer],
    classes: list[ClassRequirement],
    config: AlgorithmConfig,
    seed: int | None,
) -> tuple[Solution, RunStatistics, list[UnplacedClass]]:
    """Run one independent chain (module level so worker processes can pickle it)."""
    solver = SimulatedAnnealing(rooms, lecturers, classes, config=config, seed=seed)
    solution = solver.solve()
    return solution, solver.statistics, solver.unplaced


class TimetableScheduler:
    """
    University timetable scheduler using simulated annealing.

    Runs ``restarts`` independent chains, each with its own random generator
    seeded from ``seed + chain index``, and keeps the chain with the lowest
    fitness. With ``workers > 1`` the chains run in separate processes.

    Usage:
        scheduler = TimetableScheduler(config={"maxIterations": 5000}, seed=7)
        result = scheduler.schedule(rooms, lecturers, classes)
    """

    def __init__(
        self,
        config: AlgorithmConfig | dict[str, Any] | None = None,
        seed: int | None = None,
        restarts: int = 1,
        workers: int = 1,
    ):
        """
        Initialize the scheduler.

        Args:
            config: Algorithm configuration or a partial mapping over defaults.
            seed: Base seed; None draws fresh randomness for every chain.
            restarts: Number of independent chains (at least 1).
            workers: Worker processes for the chains; 1 runs them in-process.
        """
        self.config = merge_config(config)
        self.seed = seed
        self.restarts = max(1, restarts)
        self.workers = max(1, workers)

    def _chain_seed(self, chain: int) -> int | None:
        return None if self.seed is None else self.seed + chain

    def schedule(
        self,
        rooms: list[Room],
        lecturers: list[Lecturer],
        classes: list[ClassRequirement],
    ) -> ScheduleResult:
        """
        Schedule class requirements into rooms and time slots.

        Args:
            rooms: Available rooms.
            lecturers: Lecturers referenced by the classes.
            classes: Class requirements to place.

        Returns:
            ScheduleResult with the best solution and its statistics.
        """
        if not classes:
            logger.warning("No class requirements to schedule")
        if not rooms:
            logger.warning("No rooms available for scheduling")

        logger.info(
            f"Scheduling {len(classes)} classes into {len(rooms)} rooms "
            f"({self.restarts} chain(s), {self.workers} worker(s))"
        )

        seeds = [self._chain_seed(chain) for chain in range(self.restarts)]
        if self.workers > 1 and self.restarts > 1:
            with ProcessPoolExecutor(max_workers=min(self.workers, self.restarts)) as executor:
                futures = [
                    executor.submit(_run_chain, rooms, lecturers, classes, self.config, seed)
                    for seed in seeds
                ]
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [
                _run_chain(rooms, lecturers, classes, self.config, seed) for seed in seeds
            ]

        best_chain = min(range(len(outcomes)), key=lambda chain: outcomes[chain][0].fitness)
        solution, run_stats, unplaced = outcomes[best_chain]
        if self.restarts > 1:
            fitnesses = ", ".join(f"{outcome[0].fitness:.2f}" for outcome in outcomes)
            logger.info(f"Chain fitnesses: {fitnesses}; keeping chain {best_chain}")

        statistics = self._build_statistics(classes, solution, unplaced, run_stats)
        statistics.chains = self.restarts
        statistics.best_chain = best_chain

        logger.info(
            f"Placed {statistics.total_placed} of {statistics.total_classes} classes "
            f"with fitness {solution.fitness:.2f}"
        )
        return ScheduleResult(solution=solution, unplaced=unplaced, statistics=statistics)

    @staticmethod
    def _build_statistics(
        classes: list[ClassRequirement],
        solution: Solution,
        unplaced: list[UnplacedClass],
        run_stats: RunStatistics,
    ) -> ScheduleStatistics:
        return ScheduleStatistics(
            total_classes=len(classes),
            total_placed=len(solution.schedule),
            total_unplaced=len(unplaced),
            by_day=dict(Counter(entry.day for entry in solution.schedule)),
            by_shift=dict(Counter(entry.shift.value for entry in solution.schedule)),
            by_room=dict(Counter(entry.room for entry in solution.schedule)),
            run=run_stats,
        )
