"""Solver backends.

A backend takes a :class:`~round_table_match.models.Problem` and returns a
:class:`~round_table_match.models.SolveResult`. The default one hands the
problem to CBC through PuLP; tests plug in scripted backends with the same
``solve`` signature.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

import pulp

from .models import BoundKind, Direction, Problem, SolveOptions, SolveResult, SolveStatus


logger = logging.getLogger(__name__)


class SolverBackend(Protocol):
    def solve(self, problem: Problem, options: SolveOptions) -> SolveResult:
        ...


_STATUS_BY_PULP = {
    pulp.LpStatusOptimal: SolveStatus.OPTIMAL,
    pulp.LpStatusNotSolved: SolveStatus.NO_FEASIBLE,
    pulp.LpStatusInfeasible: SolveStatus.INFEASIBLE,
    pulp.LpStatusUnbounded: SolveStatus.UNBOUNDED,
    pulp.LpStatusUndefined: SolveStatus.UNDEFINED,
}


def map_pulp_status(status: int, sol_status: Optional[int] = None) -> SolveStatus:
    """Translate PuLP's (status, sol_status) pair into a :class:`SolveStatus`."""
    if sol_status == pulp.LpSolutionIntegerFeasible:
        return SolveStatus.FEASIBLE
    if status == pulp.LpStatusOptimal and sol_status == pulp.LpSolutionNoSolutionFound:
        return SolveStatus.NO_FEASIBLE
    return _STATUS_BY_PULP.get(status, SolveStatus.UNDEFINED)


class PulpBackend:
    """Solve a :class:`Problem` with PuLP's bundled CBC."""

    def _make_solver(self, options: SolveOptions) -> pulp.LpSolver:
        return pulp.PULP_CBC_CMD(
            msg=options.msg,
            presolve=options.presolve,
            timeLimit=options.time_limit,
        )

    def to_pulp(self, problem: Problem) -> tuple[pulp.LpProblem, Dict[str, pulp.LpVariable]]:
        sense = pulp.LpMaximize if problem.objective.direction is Direction.MAXIMIZE else pulp.LpMinimize
        model = pulp.LpProblem(problem.name, sense)

        binaries = set(problem.binaries)
        variables: Dict[str, pulp.LpVariable] = {}
        for name in problem.variable_names():
            if name in binaries:
                variables[name] = pulp.LpVariable(name, lowBound=0, upBound=1, cat=pulp.LpBinary)
            else:
                variables[name] = pulp.LpVariable(name, cat=pulp.LpContinuous)

        model += (
            pulp.lpSum(t.coef * variables[t.name] for t in problem.objective.terms),
            problem.objective.name,
        )

        for c in problem.constraints:
            expr = pulp.lpSum(t.coef * variables[t.name] for t in c.terms)
            if c.bound.kind is BoundKind.FIXED:
                model += (expr == c.bound.lb, c.name)
            elif c.bound.kind is BoundKind.UPPER:
                model += (expr <= c.bound.ub, c.name)
            elif c.bound.kind is BoundKind.LOWER:
                model += (expr >= c.bound.lb, c.name)
            else:  # pragma: no cover - exhaustive enum
                raise ValueError(f"Unknown bound kind {c.bound.kind!r}")
        return model, variables

    def solve(self, problem: Problem, options: SolveOptions) -> SolveResult:
        model, variables = self.to_pulp(problem)
        model.solve(self._make_solver(options))

        status = map_pulp_status(model.status, getattr(model, "sol_status", None))
        logger.debug(
            "CBC finished %s: %s (%d variables, %d constraints)",
            problem.name, pulp.LpStatus.get(model.status, "Undefined"),
            len(variables), len(problem.constraints),
        )
        if not status.has_solution:
            return SolveResult(status=status)

        values = {name: var.varValue for name, var in variables.items()}
        return SolveResult(
            status=status,
            values=values,
            objective_value=pulp.value(model.objective),
        )
