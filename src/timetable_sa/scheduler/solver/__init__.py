"""Simulated annealing solver components."""

from .annealing import SimulatedAnnealing
from .builder import SolutionBuilder

__all__ = [
    "SimulatedAnnealing",
    "SolutionBuilder",
]
