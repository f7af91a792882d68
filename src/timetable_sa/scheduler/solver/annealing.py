"""Simulated annealing search with reheating."""

import logging
import math
import random
from time import perf_counter

from ...models import ClassRequirement, Lecturer, Room
from ..config import AlgorithmConfig, merge_config
from ..constants import LOG_EVERY_ITERATIONS, NAN_FITNESS_SENTINEL
from ..constraints import ConstraintChecker
from ..models import RunStatistics, ScheduleEntry, Solution, UnplacedClass, ViolationReport
from ..time_slots import TimeSlotCatalog, build_time_slot_catalog
from .builder import SolutionBuilder

logger = logging.getLogger(__name__)


class SimulatedAnnealing:
    """
    Single-chain simulated annealing over complete schedules.

    The temperature is multiplied by ``cooling_rate`` every iteration. When
    ``reheating_threshold`` iterations pass without a new best solution the
    temperature is multiplied by ``reheating_factor``, at most
    ``max_reheats`` times. The search stops when the temperature reaches
    ``min_temperature`` or after ``max_iterations`` iterations.

    Usage:
        sa = SimulatedAnnealing(rooms, lecturers, classes, seed=42)
        solution = sa.solve()
        print(solution.fitness, sa.statistics.reheats)
    """

    def __init__(
        self,
        rooms: list[Room],
        lecturers: list[Lecturer],
        classes: list[ClassRequirement],
        config: AlgorithmConfig | dict | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        catalog: TimeSlotCatalog | None = None,
    ):
        """
        Initialize the solver.

        Args:
            rooms: Available rooms.
            lecturers: Lecturers referenced by the classes.
            classes: Class requirements to place.
            config: Algorithm configuration, or a partial mapping merged
                over the defaults.
            seed: Seed for a private random generator; ignored when ``rng``
                is given.
            rng: Random generator to draw every choice from.
            catalog: Slot catalog; built from ``config`` when omitted.
        """
        self.config = merge_config(config)
        self.rng = rng if rng is not None else random.Random(seed)
        self.catalog = catalog or build_time_slot_catalog(
            self.config.time_slot_config, self.config.custom_time_slots
        )
        self.checker = ConstraintChecker(rooms, lecturers)
        self.builder = SolutionBuilder(rooms, classes, self.catalog, self.rng)

        self.statistics = RunStatistics()
        self.unplaced: list[UnplacedClass] = []

    def evaluate(self, schedule: list[ScheduleEntry]) -> Solution:
        """Score a schedule; a NaN fitness is replaced by a large sentinel."""
        breakdown = self.checker.evaluate(
            schedule,
            self.config.hard_constraint_weight,
            self.config.soft_constraint_weights,
        )
        fitness = breakdown.fitness
        if math.isnan(fitness):
            fitness = NAN_FITNESS_SENTINEL
        return Solution(
            schedule=schedule,
            fitness=fitness,
            hard_violations=breakdown.hard_violations,
            soft_violations=breakdown.soft_violations,
        )

    def generate_neighbor(self, solution: Solution) -> Solution:
        """
        Move one random entry to a new slot or a new room (even odds).

        The input solution is left untouched: the schedule list is copied
        and the moved entry is a new object.
        """
        move_slot = self.rng.random() < 0.5
        index = self.rng.randrange(len(solution.schedule))

        schedule = list(solution.schedule)
        entry = schedule[index]
        schedule[index] = self.builder.move_slot(entry) if move_slot else self.builder.move_room(entry)
        return self.evaluate(schedule)

    def acceptance_probability(self, current: float, candidate: float, temperature: float) -> float:
        """Metropolis criterion: always take improvements, else ``exp((current - candidate) / T)``."""
        if candidate < current:
            return 1.0
        return math.exp((current - candidate) / temperature)

    def solve(self) -> Solution:
        """
        Run the search.

        Returns:
            The best solution found, re-scored once with its violation report.
            Run counters are left in ``statistics`` and dropped classes in
            ``unplaced``.
        """
        started = perf_counter()
        config = self.config
        stats = RunStatistics()
        self.statistics = stats

        schedule, self.unplaced = self.builder.build_initial()
        if not schedule:
            logger.warning("No placeable classes; returning an empty schedule")
            stats.final_temperature = config.initial_temperature
            stats.elapsed_seconds = perf_counter() - started
            return Solution(schedule=[], fitness=0.0, violation_report=ViolationReport())

        current = self.evaluate(schedule)
        best = current
        stats.initial_fitness = current.fitness
        logger.info(f"Initial fitness: {current.fitness:.2f} ({len(schedule)} classes)")

        temperature = config.initial_temperature
        iteration = 0
        since_best = 0

        while temperature > config.min_temperature and iteration < config.max_iterations:
            candidate = self.generate_neighbor(current)
            probability = self.acceptance_probability(current.fitness, candidate.fitness, temperature)

            improved = False
            if self.rng.random() < probability:
                current = candidate
                stats.accepted_moves += 1
                if current.fitness < best.fitness:
                    best = current
                    improved = True
                    stats.improvements += 1
                    stats.best_iteration = iteration
                    logger.debug(
                        f"New best at iteration {iteration}: {best.fitness:.2f} "
                        f"(T={temperature:.4f})"
                    )
            else:
                stats.rejected_moves += 1

            temperature *= config.cooling_rate
            iteration += 1
            since_best = 0 if improved else since_best + 1

            if since_best >= config.reheating_threshold and stats.reheats < config.max_reheats:
                temperature *= config.reheating_factor
                stats.reheats += 1
                since_best = 0
                logger.info(
                    f"Reheat {stats.reheats}/{config.max_reheats} at iteration {iteration}: "
                    f"T={temperature:.4f}"
                )

            if iteration % LOG_EVERY_ITERATIONS == 0:
                logger.info(
                    f"Iteration {iteration}: T={temperature:.4f}, "
                    f"current={current.fitness:.2f}, best={best.fitness:.2f}"
                )

        # Re-score the best schedule to rebuild its violation log
        breakdown = self.checker.evaluate(
            best.schedule, config.hard_constraint_weight, config.soft_constraint_weights
        )
        result = Solution(
            schedule=best.schedule,
            fitness=best.fitness,
            hard_violations=breakdown.hard_violations,
            soft_violations=breakdown.soft_violations,
            violation_report=breakdown.to_report(),
        )

        stats.iterations = iteration
        stats.best_fitness = result.fitness
        stats.final_temperature = temperature
        stats.elapsed_seconds = perf_counter() - started
        logger.info(
            f"Optimization complete: best fitness {result.fitness:.2f}, "
            f"{iteration} iterations, {stats.reheats} reheats, "
            f"{result.hard_violations} hard violations"
        )
        return result
