import pytest

from errores import BasisError, SimplexError
from fila import Row
from restricciones import EQ, GT, GTE, LT, LTE, ConstraintBuilder, parse_relation
from superreal import SuperReal


def scenario_builder():
    builder = ConstraintBuilder()
    builder.add_constraint([-2, 1], 2, LTE)
    builder.add_constraint([-1, 2], 5, LTE)
    builder.add_constraint([1, -4], 5, LTE)
    builder.set_objective([1, 2, 0])
    return builder


def test_parse_relation():
    assert parse_relation("<=") == LTE
    assert parse_relation(" ≥ ") == GTE
    assert parse_relation("=") == EQ
    with pytest.raises(ValueError):
        parse_relation("!=")


def test_standardize_scenario():
    rows, objective, basis = scenario_builder().standardize()
    assert rows == [
        Row.from_ints([-2, 1, 1, 0, 0, 2]),
        Row.from_ints([-1, 2, 0, 1, 0, 5]),
        Row.from_ints([1, -4, 0, 0, 1, 5]),
    ]
    assert objective == Row.from_ints([1, 2, 0, 0, 0, 0])
    assert basis == [2, 3, 4]


def test_standardize_is_idempotent():
    builder = scenario_builder()
    builder.add_constraint([1, 1], 9, GT)
    first = builder.standardize()
    second = builder.standardize()
    assert first == second
    assert builder.constraints[0] == Row.from_ints([-2, 1, 2])


def test_surplus_column():
    builder = ConstraintBuilder()
    builder.add_constraint([1], 3, GTE)
    builder.set_objective([1, 0])
    rows, objective, basis = builder.standardize()
    assert rows == [Row.from_ints([1, -1, 3])]
    assert basis == [1]


def test_strict_rows_are_tightened_by_epsilon():
    def standardized(relation):
        builder = ConstraintBuilder()
        builder.add_constraint([1], 5, relation)
        builder.set_objective([1, 0])
        return builder.standardize().rows[0]

    strict, loose = standardized(LT), standardized(LTE)
    assert strict.coefficients == loose.coefficients
    assert strict.minus_z - loose.minus_z == SuperReal(0, 0, -1)

    strict, loose = standardized(GT), standardized(GTE)
    assert strict.minus_z - loose.minus_z == SuperReal(0, 0, 1)


def test_uniform_width_and_distinct_basis():
    builder = ConstraintBuilder()
    builder.add_constraint([1, 0, 0], 4, EQ)
    builder.add_constraint([0, 1, 1], 3, LTE)
    builder.add_constraint([0, 2], 8, GT)
    builder.add_constraint([0, 1, -1], 1, GTE)
    builder.set_objective([1, 1, 1, 0])
    rows, objective, basis = builder.standardize()

    assert all(len(row) == len(objective) for row in rows)
    assert len(objective.coefficients) == 3 + 3
    assert len(basis) == 4
    assert len(set(basis)) == 4
    # the equality row keeps column 0 as its basic variable
    assert basis == [0, 3, 4, 5]


def test_equality_basis_must_be_unit_column():
    builder = ConstraintBuilder()
    builder.add_constraint([1, 1], 4, EQ)
    builder.add_constraint([1, 0], 3, LTE)
    builder.set_objective([1, 1, 0])
    with pytest.raises(BasisError):
        builder.standardize()
    rows, objective, basis = builder.standardize(equality_basis=[1])
    assert basis == [1, 2]


def test_equality_basis_size_and_duplicates():
    builder = ConstraintBuilder()
    builder.add_constraint([0, 0, 1], 4, EQ)
    builder.add_constraint([1, 0, 0], 3, LTE)
    builder.set_objective([1, 1, 1, 0])
    with pytest.raises(BasisError):
        builder.standardize(equality_basis=[0, 1])
    with pytest.raises(BasisError):
        builder.standardize(equality_basis=[3])


def test_objective_required():
    builder = ConstraintBuilder()
    builder.add_constraint([1], 1, LTE)
    with pytest.raises(SimplexError):
        builder.standardize()
    with pytest.raises(SimplexError):
        builder.to_dual()


def test_to_dual():
    builder = ConstraintBuilder()
    builder.add_constraint([-2, -2, -1], -3, LTE)
    builder.add_constraint([-3, -1, -3], -4, LTE)
    builder.set_objective([-180, -120, -150, 0])

    dual = builder.to_dual()
    assert dual.relations == (GTE, GTE, GTE)
    assert dual.constraints == (
        Row.from_ints([-2, -3, -180]),
        Row.from_ints([-2, -1, -120]),
        Row.from_ints([-1, -3, -150]),
    )
    assert dual.objective == Row.from_ints([3, 4, 0])
    # the primal builder is left untouched
    assert builder.relations == (LTE, LTE)


def test_to_dual_normalizes_relations():
    builder = ConstraintBuilder()
    builder.add_constraint([1, 2], 3, GTE)
    builder.add_constraint([1, 0], 5, LT)
    builder.add_constraint([0, 1], 2, EQ)
    builder.set_objective([1, 1, 7])

    dual = builder.to_dual()
    assert len(dual) == 2
    assert dual.num_variables == 4
    assert dual.constraints[0] == Row.from_ints([-1, 1, 0, 0, 1])
    assert dual.constraints[1] == Row.from_ints([-2, 0, 1, -1, 1])
    assert dual.objective == Row(
        [3, SuperReal(0, -5, 1), -2, 2], -7)
