"""Exceptions raised while computing a seating arrangement."""
from __future__ import annotations

from typing import List, Optional

from .models import AdjacencyMatrix, SolveStatus


class SeatingError(Exception):
    """Base class for every failure of the seating pipeline."""


class InvalidPreferenceMatrixError(SeatingError, ValueError):
    """The preference matrix has the wrong shape or missing entries."""


class SolverRejectedError(SeatingError):
    """The backend returned a status without a usable solution."""

    def __init__(self, message: str, status: SolveStatus, iteration: int) -> None:
        super().__init__(message)
        self.status = status
        self.iteration = iteration


class NoFeasibleArrangementError(SolverRejectedError):
    """Rejected before any subtour cut existed: no base arrangement at all."""


class NoSingleCycleError(SolverRejectedError):
    """Rejected once cuts were added: nobody can be seated at one table."""


class InvariantViolationError(SeatingError):
    """A matrix broke a structural invariant. Points at a model or solver bug."""


class NoProgressError(InvariantViolationError):
    """Several cycles were found but none of them could be cut."""


class IterationBudgetExceededError(SeatingError):
    """The cutting-plane loop did not converge within its iteration limit."""

    def __init__(
        self,
        message: str,
        iterations: int,
        last_matrix: Optional[AdjacencyMatrix] = None,
        subtours: Optional[List[List[int]]] = None,
    ) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.last_matrix = last_matrix
        self.subtours = subtours or []
