"""Turn raw backend values into a checked adjacency matrix."""
from __future__ import annotations

import math
from typing import Mapping, Optional, Sequence

from .errors import InvariantViolationError
from .model_builder import parse_var_name
from .models import AdjacencyMatrix


def check_adjacency(matrix: Sequence[Sequence[int]]) -> None:
    """Raise :class:`InvariantViolationError` unless ``matrix`` is a valid cycle cover.

    Valid means square, binary, symmetric, zero diagonal and (for n >= 3)
    every row summing to exactly 2.
    """
    n = len(matrix)
    for i, row in enumerate(matrix):
        if len(row) != n:
            raise InvariantViolationError(f"Adjacency row {i} has {len(row)} entries, expected {n}.")
    for i in range(n):
        if matrix[i][i] != 0:
            raise InvariantViolationError(f"Person {i} is marked as sitting next to themselves.")
        for j in range(i + 1, n):
            if matrix[i][j] not in (0, 1):
                raise InvariantViolationError(f"Entry ({i}, {j}) is {matrix[i][j]!r}, not 0 or 1.")
            if matrix[i][j] != matrix[j][i]:
                raise InvariantViolationError(
                    f"Adjacency is not symmetric at ({i}, {j}): {matrix[i][j]} vs {matrix[j][i]}."
                )
    if n >= 3:
        for i, row in enumerate(matrix):
            degree = sum(row)
            if degree != 2:
                raise InvariantViolationError(f"Person {i} has {degree} neighbours, expected 2.")


def _round_binary(name: str, value: Optional[float]) -> int:
    if value is None or not math.isfinite(value):
        raise InvariantViolationError(f"Variable {name} has no usable value: {value!r}")
    rounded = int(round(value))
    if rounded not in (0, 1):
        raise InvariantViolationError(f"Variable {name} rounds to {rounded}, not 0 or 1 (raw {value}).")
    return rounded


def interpret_solution(values: Mapping[str, Optional[float]], n: int) -> AdjacencyMatrix:
    """Round ``values`` into an ``n`` x ``n`` matrix and check it.

    Names that are not seat variables are ignored and missing seat
    variables count as 0.
    """
    matrix = [[0] * n for _ in range(n)]
    for name, value in values.items():
        pair = parse_var_name(name)
        if pair is None:
            continue
        i, j = pair
        if i >= n or j >= n or i == j:
            raise InvariantViolationError(f"Variable {name} does not address a pair of {n} people.")
        matrix[i][j] = _round_binary(name, value)

    check_adjacency(matrix)
    return matrix
