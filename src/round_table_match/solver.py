"""
Single table seating solver.

The integer program in :mod:`round_table_match.model_builder` only guarantees
that everybody gets two neighbours, which still allows several small tables.
:func:`solve_sitting` therefore runs a cutting-plane loop: solve, split the
result into cycles, forbid every cycle that leaves somebody out, solve again.

Iteration budget: ``2 * n`` by default. It is a safety limit picked from
experience, not a proven bound on the number of rounds.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .backends import PulpBackend, SolverBackend
from .cycle import extract_table_cycle
from .errors import (
    InvalidPreferenceMatrixError,
    IterationBudgetExceededError,
    NoFeasibleArrangementError,
    NoProgressError,
    NoSingleCycleError,
)
from .interpreter import interpret_solution
from .model_builder import (
    EPSILON,
    build_base_problem,
    subtour_elimination_constraint,
    validate_preference_matrix,
)
from .models import AdjacencyMatrix, Constraint, Person, Preference, PreferenceMatrix, SolveOptions
from .scoring import build_preference_matrix
from .subtours import find_subtours


logger = logging.getLogger(__name__)


class LoopState(enum.Enum):
    INIT = "init"
    SOLVING = "solving"
    SUBTOURS_FOUND = "subtours_found"
    SINGLE_CYCLE_FOUND = "single_cycle_found"
    INFEASIBLE = "infeasible"
    ITERATION_BUDGET_EXHAUSTED = "iteration_budget_exhausted"


@dataclass(frozen=True)
class CuttingPlaneState:
    """Everything one request carries from one iteration to the next."""

    iteration: int = 0
    cuts: Tuple[Constraint, ...] = ()
    last_matrix: Optional[AdjacencyMatrix] = None
    last_subtours: Tuple[Tuple[int, ...], ...] = ()

    def advance(
        self,
        new_cuts: Sequence[Constraint],
        matrix: AdjacencyMatrix,
        subtours: Sequence[Sequence[int]],
    ) -> "CuttingPlaneState":
        return replace(
            self,
            iteration=self.iteration + 1,
            cuts=self.cuts + tuple(new_cuts),
            last_matrix=matrix,
            last_subtours=tuple(tuple(c) for c in subtours),
        )


def trivial_arrangement(n: int) -> Optional[AdjacencyMatrix]:
    """Fixed answers for tables too small to need the solver."""
    if n == 0:
        return []
    if n == 1:
        return [[0]]
    if n == 2:
        return [[0, 1], [1, 0]]
    return None


def cuts_for(subtours: Sequence[Sequence[int]], n: int, iteration: int) -> List[Constraint]:
    """One elimination cut per cycle that does not seat everyone."""
    return [
        subtour_elimination_constraint(cycle, f"SubtourElim_{iteration}_{idx}")
        for idx, cycle in enumerate(subtours)
        if len(cycle) < n
    ]


def _transition(state: LoopState, iteration: int, detail: str = "") -> None:
    logger.debug("[iteration %d] -> %s %s", iteration + 1, state.value, detail)


def solve_sitting(
    pref: PreferenceMatrix,
    backend: Optional[SolverBackend] = None,
    *,
    epsilon: float = EPSILON,
    max_iterations: Optional[int] = None,
    options: Optional[SolveOptions] = None,
) -> AdjacencyMatrix:
    """Adjacency matrix of the best single-table arrangement for ``pref``.

    Raises:
        InvalidPreferenceMatrixError: ``pref`` is not square or has gaps.
        NoFeasibleArrangementError: the backend rejected the base model.
        NoSingleCycleError: the backend rejected the model once cuts existed.
        InvariantViolationError: a solution broke a structural invariant.
        IterationBudgetExceededError: no single cycle within ``max_iterations``.
    """
    n = validate_preference_matrix(pref)
    trivial = trivial_arrangement(n)
    if trivial is not None:
        logger.debug("Trivial table of %d, skipping the solver", n)
        return trivial

    limit = 2 * n if max_iterations is None else max_iterations
    if limit < 1:
        raise ValueError(f"max_iterations must be at least 1, got {limit}")
    backend = backend if backend is not None else PulpBackend()
    options = options if options is not None else SolveOptions()

    base = build_base_problem(pref, epsilon)
    state = CuttingPlaneState()
    _transition(LoopState.INIT, 0, f"n={n} limit={limit}")

    while state.iteration < limit:
        iteration = state.iteration
        _transition(LoopState.SOLVING, iteration, f"with {len(state.cuts)} cuts")
        result = backend.solve(base.with_constraints(state.cuts), options)
        logger.debug("[iteration %d] solver status %s", iteration + 1, result.status.value)

        if not result.status.has_solution:
            _transition(LoopState.INFEASIBLE, iteration)
            if iteration == 0:
                raise NoFeasibleArrangementError(
                    f"No feasible base arrangement (solver status: {result.status.value}).",
                    status=result.status, iteration=iteration,
                )
            raise NoSingleCycleError(
                "No single-table arrangement exists for these preferences "
                f"(solver status {result.status.value} after {len(state.cuts)} cuts).",
                status=result.status, iteration=iteration,
            )

        matrix = interpret_solution(result.values, n)
        subtours = find_subtours(matrix)

        if len(subtours) == 1 and len(subtours[0]) == n:
            _transition(LoopState.SINGLE_CYCLE_FOUND, iteration)
            return matrix

        new_cuts = cuts_for(subtours, n, iteration)
        if not new_cuts:
            raise NoProgressError(
                f"Found {len(subtours)} cycles in iteration {iteration + 1} but none could be cut."
            )
        _transition(LoopState.SUBTOURS_FOUND, iteration, f"{subtours}, adding {len(new_cuts)} cuts")
        state = state.advance(new_cuts, matrix, subtours)

    _transition(LoopState.ITERATION_BUDGET_EXHAUSTED, state.iteration)
    logger.error(
        "No single table after %d iterations; last subtours: %s",
        limit, [list(c) for c in state.last_subtours],
    )
    raise IterationBudgetExceededError(
        f"Failed to find a single-table arrangement within {limit} iterations.",
        iterations=limit,
        last_matrix=state.last_matrix,
        subtours=[list(c) for c in state.last_subtours],
    )


# ----------------------------- model -----------------------------
class SeatingModel:
    """Seat everybody at one round table, maximising neighbour preferences."""

    def __init__(
        self,
        epsilon: float = EPSILON,
        max_iterations: Optional[int] = None,
        backend: Optional[SolverBackend] = None,
        msg: bool = False,
        presolve: bool = True,
        time_limit: Optional[float] = None,
    ) -> None:
        # Solver settings
        self.epsilon = epsilon
        self.max_iterations = max_iterations
        self.backend = backend
        self.options = SolveOptions(msg=msg, presolve=presolve, time_limit=time_limit)
        # Inputs
        self.people: List[Person] = []
        self.preferences: PreferenceMatrix = []
        # Outputs, set by solve()
        self.matrix: Optional[AdjacencyMatrix] = None
        self.order: List[int] = []
        # Id mapping helpers
        self.index_by_id: Dict[str, int] = {}

    def build(self, people: List[Person], preferences: List[Preference]) -> None:
        """Store people and turn their preferences into a matrix."""
        self.people = list(people)
        self.index_by_id = {p.id: i for i, p in enumerate(self.people)}
        self.preferences = build_preference_matrix(self.people, preferences)
        self.matrix = None
        self.order = []

    def build_from_matrix(self, names: List[str], matrix: PreferenceMatrix) -> None:
        """Use a ready-made matrix; ``names[i]`` labels row and column ``i``."""
        if len(names) != len(matrix):
            raise InvalidPreferenceMatrixError(
                f"Got {len(names)} names for a matrix with {len(matrix)} rows."
            )
        self.people = [Person(id=str(i), name=name) for i, name in enumerate(names)]
        self.index_by_id = {p.id: i for i, p in enumerate(self.people)}
        self.preferences = [list(row) for row in matrix]
        self.matrix = None
        self.order = []

    def solve(self) -> List[str]:
        """Names in seating order around the table, starting with the first person."""
        self.matrix = solve_sitting(
            self.preferences,
            self.backend,
            epsilon=self.epsilon,
            max_iterations=self.max_iterations,
            options=self.options,
        )
        self.order = extract_table_cycle(self.matrix)
        return [self.people[i].name for i in self.order]
