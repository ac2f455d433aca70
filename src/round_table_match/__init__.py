"""RoundTableMatch package."""
from .models import Person, Preference, SolveOptions, SolveResult, SolveStatus
from .errors import (
    SeatingError,
    InvalidPreferenceMatrixError,
    NoFeasibleArrangementError,
    NoSingleCycleError,
    InvariantViolationError,
    NoProgressError,
    IterationBudgetExceededError,
)
from .csv_loader import (
    load_people,
    load_preferences,
    load_matrix,
    load_all,
)
from .backends import PulpBackend
from .cycle import extract_table_cycle, extract_tables
from .subtours import find_subtours
from .solver import SeatingModel, solve_sitting

__all__ = [
    "Person",
    "Preference",
    "SolveOptions",
    "SolveResult",
    "SolveStatus",
    "SeatingError",
    "InvalidPreferenceMatrixError",
    "NoFeasibleArrangementError",
    "NoSingleCycleError",
    "InvariantViolationError",
    "NoProgressError",
    "IterationBudgetExceededError",
    "load_people",
    "load_preferences",
    "load_matrix",
    "load_all",
    "PulpBackend",
    "extract_table_cycle",
    "extract_tables",
    "find_subtours",
    "SeatingModel",
    "solve_sitting",
]
