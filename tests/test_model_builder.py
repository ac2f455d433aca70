"""Tests for building the seating integer program."""
import math
import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from round_table_match.errors import InvalidPreferenceMatrixError
from round_table_match.model_builder import (
    EPSILON,
    build_base_problem,
    parse_var_name,
    subtour_elimination_constraint,
    validate_preference_matrix,
    var_name,
)
from round_table_match.models import BoundKind, Direction


PREF_4 = [[0, 10, 0, 5], [10, 0, 1, 0], [0, 1, 0, 8], [5, 0, 8, 0]]


class TestVariableNames:
    def test_round_trip(self):
        assert var_name(3, 12) == "x_3_12"
        assert parse_var_name("x_3_12") == (3, 12)

    @pytest.mark.parametrize("name", ["y_1_2", "x_1", "x_a_2", "x_1_2_3", "TotalPreference"])
    def test_foreign_names(self, name):
        assert parse_var_name(name) is None


class TestValidation:
    def test_square_matrix(self):
        assert validate_preference_matrix(PREF_4) == 4
        assert validate_preference_matrix([]) == 0

    def test_non_square_rejected(self):
        with pytest.raises(InvalidPreferenceMatrixError):
            validate_preference_matrix([[0, 1, 2], [1, 0, 2]])

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidPreferenceMatrixError):
            validate_preference_matrix([[0, 1, 2], [1, 0], [2, 2, 0]])

    @pytest.mark.parametrize("missing", [None, "x", math.nan, math.inf, True])
    def test_missing_entry_rejected(self, missing):
        pref = [[0, 1, 2], [1, 0, missing], [2, 2, 0]]
        with pytest.raises(InvalidPreferenceMatrixError):
            validate_preference_matrix(pref)

    def test_diagonal_is_ignored(self):
        assert validate_preference_matrix([[None, 1, 2], [1, "-", 2], [2, 2, math.nan]]) == 3

    def test_not_a_matrix(self):
        with pytest.raises(InvalidPreferenceMatrixError):
            validate_preference_matrix("abc")
        with pytest.raises(InvalidPreferenceMatrixError):
            validate_preference_matrix(5)

    def test_invalid_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_preference_matrix([[0, 1]])


class TestBaseProblem:
    def test_objective(self):
        problem = build_base_problem(PREF_4)
        assert problem.objective.direction is Direction.MAXIMIZE
        coefs = {t.name: t.coef for t in problem.objective.terms}
        assert len(coefs) == 12
        assert coefs["x_0_1"] == pytest.approx(10 + EPSILON)
        assert coefs["x_0_2"] == pytest.approx(EPSILON)
        assert "x_0_0" not in coefs

    def test_degree_and_symmetry_constraints(self):
        problem = build_base_problem(PREF_4)
        by_name = {c.name: c for c in problem.constraints}

        row = by_name["RowSum_2"]
        assert row.bound.kind is BoundKind.FIXED
        assert row.bound.lb == row.bound.ub == 2.0
        assert sorted(t.name for t in row.terms) == ["x_2_0", "x_2_1", "x_2_3"]

        symm = by_name["Symm_1_3"]
        assert {(t.name, t.coef) for t in symm.terms} == {("x_1_3", 1.0), ("x_3_1", -1.0)}
        assert symm.bound.lb == symm.bound.ub == 0.0

        assert sum(1 for name in by_name if name.startswith("RowSum_")) == 4
        assert sum(1 for name in by_name if name.startswith("Symm_")) == 6

    def test_all_variables_binary(self):
        problem = build_base_problem(PREF_4)
        assert sorted(problem.binaries) == sorted(problem.variable_names())

    def test_asymmetric_preferences_kept_per_direction(self):
        pref = [[0, 3, 0], [-1, 0, 0], [0, 0, 0]]
        coefs = {t.name: t.coef for t in build_base_problem(pref, epsilon=0.5).objective.terms}
        assert coefs["x_0_1"] == pytest.approx(3.5)
        assert coefs["x_1_0"] == pytest.approx(-0.5)

    def test_idempotent(self):
        assert build_base_problem(PREF_4) == build_base_problem(PREF_4)

    def test_too_small(self):
        with pytest.raises(InvalidPreferenceMatrixError):
            build_base_problem([[0, 1], [1, 0]])

    def test_epsilon_must_be_positive(self):
        with pytest.raises(ValueError):
            build_base_problem(PREF_4, epsilon=0.0)


def test_subtour_elimination_constraint():
    cut = subtour_elimination_constraint([4, 1, 3], "SubtourElim_0_1")
    assert cut.name == "SubtourElim_0_1"
    assert cut.bound.kind is BoundKind.UPPER
    assert cut.bound.ub == 2.0
    assert {t.name for t in cut.terms} == {"x_4_1", "x_4_3", "x_1_3"}
    assert all(t.coef == 1.0 for t in cut.terms)
