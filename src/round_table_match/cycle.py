"""Read seating orders and tables out of an adjacency matrix."""
from __future__ import annotations

from collections import deque
from typing import List, Optional, Sequence

from .errors import InvariantViolationError
from .subtours import neighbours, next_node


def extract_table_cycle(matrix: Sequence[Sequence[int]]) -> List[int]:
    """Seating order around a single table, starting at person 0.

    ``matrix`` must describe one cycle through everybody. The walk takes
    exactly n steps and has to land back on 0 having seen n distinct people.
    """
    n = len(matrix)
    if n == 0:
        return []

    order = [0]
    seen = {0}
    previous: Optional[int] = None
    current = 0
    for step in range(1, n + 1):
        nxt = next_node(neighbours(matrix, current), previous)
        if nxt is None:
            break
        if step == n:
            if nxt != 0:
                raise InvariantViolationError(
                    f"Walk ended at {nxt} after {n} steps instead of returning to 0."
                )
            break
        if nxt in seen:
            raise InvariantViolationError(
                f"Walk revisited {nxt} after {step} of {n} steps; the matrix holds more than one table."
            )
        order.append(nxt)
        seen.add(nxt)
        previous, current = current, nxt

    if len(order) != n:
        raise InvariantViolationError(f"Walk visited {len(order)} people, expected {n}.")
    return order


def extract_tables(matrix: Sequence[Sequence[int]]) -> List[List[int]]:
    """Connected groups of people (sorted indices), breadth first.

    Works on any square 0/1 matrix, including ones with several subtours,
    which makes it handy for looking at a failed run's last matrix.
    """
    n = len(matrix)
    for i, row in enumerate(matrix):
        if len(row) != n:
            raise InvariantViolationError(f"Adjacency row {i} has {len(row)} entries, expected {n}.")

    visited = [False] * n
    tables: List[List[int]] = []
    for start in range(n):
        if visited[start]:
            continue
        visited[start] = True
        queue = deque([start])
        members: List[int] = []
        while queue:
            current = queue.popleft()
            members.append(current)
            for other in range(n):
                if other != current and matrix[current][other] == 1 and not visited[other]:
                    visited[other] = True
                    queue.append(other)
        tables.append(sorted(members))
    return tables
