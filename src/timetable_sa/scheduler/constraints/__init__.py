"""Constraint implementations for the scheduler."""

from .base import ConstraintBase
from .checker import ConstraintChecker, FitnessBreakdown
from .hard import HardConstraints
from .soft import SoftConstraints

__all__ = [
    "ConstraintBase",
    "ConstraintChecker",
    "FitnessBreakdown",
    "HardConstraints",
    "SoftConstraints",
]
