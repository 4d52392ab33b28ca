from fractions import Fraction

import pytest

from superreal import BIG_M, EPSILON, ONE, ZERO, SuperReal, SuperRealNumbers

VALUES = [
    SuperReal(0, 0, 0),
    SuperReal(1, 2, 3),
    SuperReal(-2, Fraction(1, 3), 5),
    SuperReal(0, -4, 1),
    SuperReal(Fraction(7, 2), 0, -1),
]


def test_coerce():
    assert SuperReal.coerce(3) == SuperReal(0, 3, 0)
    assert SuperReal.coerce((1, 2, 3)) == SuperReal(1, 2, 3)
    assert SuperReal.coerce(Fraction(1, 2)).real() == Fraction(1, 2)
    with pytest.raises(TypeError):
        SuperReal.coerce(1.5)


def test_add_is_associative():
    for a in VALUES:
        for b in VALUES:
            for c in VALUES:
                assert a + (b + c) == (a + b) + c


def test_mul_drops_nilpotent_terms():
    assert BIG_M * BIG_M == ZERO
    assert EPSILON * EPSILON == ZERO
    assert BIG_M * EPSILON == ZERO
    assert SuperReal(1, 2, 3) * SuperReal(4, 5, 6) == SuperReal(2 * 4 + 1 * 5, 10, 2 * 6 + 3 * 5)


def test_value_times_conjugate_is_real():
    for a in VALUES:
        product = a * a.conj()
        assert product.em() == 0
        assert product.epsilon() == 0
        assert product.real() == a.real() ** 2


def test_division_round_trip():
    for a in VALUES:
        for b in VALUES:
            if b.real() != 0:
                assert (a / b) * b == a


def test_division_by_degenerate_value_is_zero():
    assert SuperReal(1, 2, 3) / SuperReal(0, 0, 1) == ZERO
    assert SuperReal(1, 2, 3) / ZERO == ZERO


def test_scalar_operations():
    assert SuperReal(2, 4, 6) / 2 == SuperReal(1, 2, 3)
    assert SuperReal(1, 2, 3) * Fraction(1, 2) == SuperReal(Fraction(1, 2), 1, Fraction(3, 2))
    assert 2 * ONE == SuperReal(0, 2, 0)
    assert 1 - EPSILON == SuperReal(0, 1, -1)
    assert -SuperReal(1, -2, 3) == SuperReal(-1, 2, -3)


def test_reciprocal():
    assert SuperReal(1, 2, 3).reciprocal() * SuperReal(1, 2, 3) == ONE
    with pytest.raises(ZeroDivisionError):
        EPSILON.reciprocal()


def test_lexicographic_order():
    assert EPSILON > ZERO
    assert ONE > EPSILON * 1000
    assert BIG_M > ONE * 1000
    assert SuperReal(0, 5, 1) > 5
    assert SuperReal(0, 5, -1) < 5
    assert sorted([ONE, BIG_M, -EPSILON, ZERO]) == [-EPSILON, ZERO, ONE, BIG_M]


def test_equality_and_hash():
    assert SuperReal(0, 3, 0) == 3
    assert SuperReal(0, 3, 1) != 3
    assert len({SuperReal(1, 2, 3), SuperReal(1, 2, 3), ONE}) == 2


def test_pure_real_hashes_like_fraction():
    assert len({SuperReal(0, 3, 0), 3}) == 1
    assert {3: "a"}[SuperReal(0, 3, 0)] == "a"
    assert hash(SuperReal(0, Fraction(1, 2), 0)) == hash(Fraction(1, 2))


def test_str():
    assert str(ZERO) == "0"
    assert str(SuperReal(0, 2, 0)) == "+2"
    assert str(SuperReal(0, Fraction(-1, 2), 0)) == "-1/2"
    assert str(SuperReal(1, 2, -3)) == "(+1M+2-3ε)"


def test_number_class():
    num = SuperRealNumbers()
    assert num.positive(EPSILON)
    assert num.negative(-EPSILON)
    assert num.nonnegative(ZERO)
    assert num.nonpositive(ZERO)
    assert not num.invertible(EPSILON)
    assert num.invertible(SuperReal(0, -1, 2))
    assert num.coerce_mtx([[1, 2], [3]]) == [[ONE, SuperReal(0, 2, 0)], [SuperReal(0, 3, 0)]]
