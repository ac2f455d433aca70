"""Data models for RoundTableMatch.

Two groups of types live here: the people/preference records that feed the
preference matrix, and the solver protocol types that describe an integer
program independently of any backend.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple


AdjacencyMatrix = List[List[int]]
PreferenceMatrix = Sequence[Sequence[float]]


# ----------------------------- people -----------------------------
@dataclass
class Person:
    """Someone who needs a seat at the table."""

    id: str
    name: str


@dataclass
class Preference:
    """Directional preference of ``a`` for sitting next to ``b``."""

    a: str
    b: str
    relation: str = "neutral"
    strength: int = 0
    notes: str = ""


# ----------------------------- solver protocol -----------------------------
class Direction(enum.Enum):
    MAXIMIZE = "max"
    MINIMIZE = "min"


class BoundKind(enum.Enum):
    FIXED = "fixed"
    UPPER = "upper"
    LOWER = "lower"


class SolveStatus(enum.Enum):
    """Outcome of a single backend call."""

    UNDEFINED = "undefined"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    NO_FEASIBLE = "no_feasible"
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"

    @property
    def has_solution(self) -> bool:
        return self in (SolveStatus.OPTIMAL, SolveStatus.FEASIBLE)


@dataclass(frozen=True)
class LinearTerm:
    name: str
    coef: float


@dataclass(frozen=True)
class Bound:
    """Right hand side of a linear constraint."""

    kind: BoundKind
    lb: float = 0.0
    ub: float = 0.0

    @classmethod
    def fixed(cls, value: float) -> "Bound":
        return cls(BoundKind.FIXED, lb=value, ub=value)

    @classmethod
    def upper(cls, value: float) -> "Bound":
        return cls(BoundKind.UPPER, lb=0.0, ub=value)

    @classmethod
    def lower(cls, value: float) -> "Bound":
        return cls(BoundKind.LOWER, lb=value, ub=0.0)


@dataclass(frozen=True)
class Constraint:
    name: str
    terms: Tuple[LinearTerm, ...]
    bound: Bound


@dataclass(frozen=True)
class Objective:
    direction: Direction
    name: str
    terms: Tuple[LinearTerm, ...]


@dataclass(frozen=True)
class Problem:
    """An integer program as handed to a :class:`SolverBackend`."""

    name: str
    objective: Objective
    constraints: Tuple[Constraint, ...] = ()
    binaries: Tuple[str, ...] = ()

    def with_constraints(self, extra: Sequence[Constraint]) -> "Problem":
        """Return a copy with ``extra`` appended; ``self`` is left untouched."""
        return replace(self, constraints=self.constraints + tuple(extra))

    def variable_names(self) -> List[str]:
        """All variable names in first-seen order."""
        seen: Dict[str, None] = {}
        for term in self.objective.terms:
            seen.setdefault(term.name, None)
        for constraint in self.constraints:
            for term in constraint.terms:
                seen.setdefault(term.name, None)
        for name in self.binaries:
            seen.setdefault(name, None)
        return list(seen)


@dataclass
class SolveOptions:
    """Backend knobs. None of them change which solutions are correct."""

    msg: bool = False
    presolve: bool = True
    time_limit: Optional[float] = None


@dataclass
class SolveResult:
    status: SolveStatus
    values: Dict[str, float] = field(default_factory=dict)
    objective_value: Optional[float] = None
