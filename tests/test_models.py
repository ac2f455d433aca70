import pathlib
import sys

# Ensure src package is on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from round_table_match.models import (
    Bound,
    BoundKind,
    Constraint,
    Direction,
    LinearTerm,
    Objective,
    Person,
    Preference,
    Problem,
    SolveStatus,
)


def _problem():
    return Problem(
        name="p",
        objective=Objective(Direction.MAXIMIZE, "obj", (LinearTerm("a", 1.0), LinearTerm("b", 2.0))),
        constraints=(Constraint("c0", (LinearTerm("b", 1.0), LinearTerm("c", 1.0)), Bound.upper(1.0)),),
        binaries=("a", "b", "c"),
    )


def test_person_and_preference_instantiation():
    person = Person(id="7", name="Alex")
    pref = Preference(a="7", b="8", relation="want")
    assert person.name == "Alex"
    assert pref.strength == 0
    assert pref.notes == ""


def test_bound_helpers():
    assert Bound.fixed(2.0) == Bound(BoundKind.FIXED, 2.0, 2.0)
    assert Bound.upper(3.0).kind is BoundKind.UPPER
    assert Bound.upper(3.0).ub == 3.0
    assert Bound.lower(1.0).lb == 1.0


def test_with_constraints_leaves_original_untouched():
    base = _problem()
    extra = Constraint("cut", (LinearTerm("a", 1.0),), Bound.upper(0.0))

    combined = base.with_constraints([extra])

    assert len(base.constraints) == 1
    assert [c.name for c in combined.constraints] == ["c0", "cut"]
    assert combined.objective is base.objective


def test_variable_names_first_seen_order():
    assert _problem().variable_names() == ["a", "b", "c"]


def test_status_has_solution():
    assert SolveStatus.OPTIMAL.has_solution
    assert SolveStatus.FEASIBLE.has_solution
    for status in (SolveStatus.UNDEFINED, SolveStatus.INFEASIBLE, SolveStatus.NO_FEASIBLE, SolveStatus.UNBOUNDED):
        assert not status.has_solution
