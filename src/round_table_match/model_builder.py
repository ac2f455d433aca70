"""
Integer program for a single round table.

Every ordered pair (i, j), i != j, gets a binary ``x_i_j`` meaning "i sits next
to j". The base model is

    maximize   sum_{i != j} x_i_j * (pref[i][j] + epsilon)
    subject to sum_{j != i} x_i_j = 2            for every i   (RowSum_i)
               x_i_j - x_j_i = 0                 for i < j     (Symm_i_j)

Its feasible region is every union of disjoint cycles covering all people.
Subtour cuts narrow that down to a single cycle.
"""
from __future__ import annotations

import math
import numbers
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidPreferenceMatrixError
from .models import (
    Bound,
    Constraint,
    Direction,
    LinearTerm,
    Objective,
    PreferenceMatrix,
    Problem,
)

# Small enough not to outweigh any integer preference, large enough to make
# an all-neutral table still prefer seating people next to each other.
EPSILON = 0.001

_VAR_PREFIX = "x"


def var_name(i: int, j: int) -> str:
    return f"{_VAR_PREFIX}_{i}_{j}"


def parse_var_name(name: str) -> Optional[Tuple[int, int]]:
    """Inverse of :func:`var_name`. ``None`` for names outside the scheme."""
    parts = name.split("_")
    if len(parts) != 3 or parts[0] != _VAR_PREFIX:
        return None
    if not (parts[1].isdigit() and parts[2].isdigit()):
        return None
    return int(parts[1]), int(parts[2])


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(float(value))


def validate_preference_matrix(pref: PreferenceMatrix) -> int:
    """Check shape (and, for n >= 3, off-diagonal entries). Returns n."""
    if pref is None or isinstance(pref, (str, bytes)):
        raise InvalidPreferenceMatrixError("Preference matrix must be a sequence of rows.")
    try:
        n = len(pref)
    except TypeError as exc:
        raise InvalidPreferenceMatrixError("Preference matrix must be a sequence of rows.") from exc

    for i, row in enumerate(pref):
        if row is None or isinstance(row, (str, bytes)) or not hasattr(row, "__len__"):
            raise InvalidPreferenceMatrixError(f"Row {i} is not a sequence.")
        if len(row) != n:
            raise InvalidPreferenceMatrixError(
                f"Preference matrix must be square: row {i} has {len(row)} entries, expected {n}."
            )

    if n >= 3:
        for i in range(n):
            for j in range(n):
                if i != j and not _is_number(pref[i][j]):
                    raise InvalidPreferenceMatrixError(
                        f"Missing or non-numeric preference at ({i}, {j}): {pref[i][j]!r}"
                    )
    return n


def build_base_problem(pref: PreferenceMatrix, epsilon: float = EPSILON) -> Problem:
    """Objective, degree and symmetry constraints for ``pref`` (n >= 3)."""
    n = validate_preference_matrix(pref)
    if n < 3:
        raise InvalidPreferenceMatrixError(f"The integer program needs at least 3 people, got {n}.")
    if not epsilon > 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")

    people = range(n)
    pairs = [(i, j) for i in people for j in people if i != j]

    objective = Objective(
        direction=Direction.MAXIMIZE,
        name="TotalPreference",
        terms=tuple(LinearTerm(var_name(i, j), float(pref[i][j]) + epsilon) for i, j in pairs),
    )

    degree = [
        Constraint(
            name=f"RowSum_{i}",
            terms=tuple(LinearTerm(var_name(i, j), 1.0) for j in people if j != i),
            bound=Bound.fixed(2.0),
        )
        for i in people
    ]
    # Column sums follow from the row sums plus symmetry.
    symmetry = [
        Constraint(
            name=f"Symm_{i}_{j}",
            terms=(LinearTerm(var_name(i, j), 1.0), LinearTerm(var_name(j, i), -1.0)),
            bound=Bound.fixed(0.0),
        )
        for i, j in combinations(people, 2)
    ]

    return Problem(
        name="TableSitting",
        objective=objective,
        constraints=tuple(degree + symmetry),
        binaries=tuple(var_name(i, j) for i, j in pairs),
    )


def subtour_elimination_constraint(cycle: Sequence[int], name: str) -> Constraint:
    """At most ``len(cycle) - 1`` edges may join the members of ``cycle``."""
    members: List[int] = list(cycle)
    terms = tuple(LinearTerm(var_name(u, v), 1.0) for u, v in combinations(members, 2))
    return Constraint(name=name, terms=terms, bound=Bound.upper(len(members) - 1.0))
