"""
Split a cycle cover into its cycles.

Every node of a matrix produced by the integer program has exactly two
neighbours, so each component is a simple cycle and can be traced by always
stepping to the neighbour we did not just come from.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import InvariantViolationError


def expected_degree(n: int) -> int:
    """Neighbour count every node must have in an ``n`` person arrangement."""
    if n >= 3:
        return 2
    return max(n - 1, 0)


def neighbours(matrix: Sequence[Sequence[int]], node: int) -> List[int]:
    """Indices adjacent to ``node``, checked against :func:`expected_degree`."""
    n = len(matrix)
    row = matrix[node]
    if len(row) != n:
        raise InvariantViolationError(f"Adjacency row {node} has {len(row)} entries, expected {n}.")
    if row[node]:
        raise InvariantViolationError(f"Person {node} is adjacent to themselves.")
    found = [j for j in range(n) if row[j] == 1]
    if len(found) != expected_degree(n):
        raise InvariantViolationError(
            f"Person {node} has {len(found)} neighbours, expected {expected_degree(n)} for n={n}."
        )
    return found


def next_node(options: List[int], previous: Optional[int]) -> Optional[int]:
    """The neighbour that is not ``previous``; ``None`` for an isolated node."""
    if not options:
        return None
    if options[0] == previous and len(options) > 1:
        return options[1]
    return options[0]


def find_subtours(matrix: Sequence[Sequence[int]]) -> List[List[int]]:
    """Return the disjoint cycles of ``matrix`` in visit order."""
    n = len(matrix)
    visited = [False] * n
    cycles: List[List[int]] = []

    for start in range(n):
        if visited[start]:
            continue
        cycle: List[int] = []
        previous: Optional[int] = None
        current = start
        while True:
            visited[current] = True
            cycle.append(current)
            nxt = next_node(neighbours(matrix, current), previous)
            if nxt is None or nxt == start:
                break
            if visited[nxt]:
                raise InvariantViolationError(
                    f"Tracing from {start} reached {nxt}, which already belongs to another cycle."
                )
            previous, current = current, nxt
        cycles.append(cycle)

    return cycles
