from fractions import Fraction


class SuperReal:
    """Exact number m*M + x + e*eps.

    For every x > 0: 0 < eps < x < M, with M*M = eps*eps = M*eps = 0.
    Ordering is lexicographic on (m, x, e).
    """

    def __init__(self, m=0, x=0, e=0):
        self._m = Fraction(m)
        self._x = Fraction(x)
        self._e = Fraction(e)

    @classmethod
    def coerce(cls, value):
        if isinstance(value, SuperReal):
            return value
        if isinstance(value, (tuple, list)):
            m, x, e = value
            return cls(m, x, e)
        if isinstance(value, (int, Fraction)):
            return cls(0, value, 0)
        raise TypeError(f"cannot convert {value!r} to SuperReal")

    @property
    def m(self): return self._m

    @property
    def x(self): return self._x

    @property
    def e(self): return self._e

    def em(self): return self._m
    def real(self): return self._x
    def epsilon(self): return self._e

    def into_inner(self):
        return self._m, self._x, self._e

    def conj(self):
        # r * conj(r) == real(r)**2
        return SuperReal(-self._m, self._x, -self._e)

    def reciprocal(self):
        if self._x == 0:
            raise ZeroDivisionError(f"{self} has no inverse: real part is zero")
        return self.conj() / (self._x * self._x)

    def __add__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return SuperReal(self._m + other._m, self._x + other._x, self._e + other._e)

    __radd__ = __add__

    def __sub__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return SuperReal(self._m - other._m, self._x - other._x, self._e - other._e)

    def __rsub__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        if isinstance(other, (int, Fraction)):
            return SuperReal(self._m * other, self._x * other, self._e * other)
        if not isinstance(other, SuperReal):
            return NotImplemented
        return SuperReal(
            self._x * other._m + self._m * other._x,
            self._x * other._x,
            self._x * other._e + self._e * other._x,
        )

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, (int, Fraction)):
            return SuperReal(self._m / other, self._x / other, self._e / other)
        if not isinstance(other, SuperReal):
            return NotImplemented
        other_mul_conj = other * other.conj()
        assert other_mul_conj.em() == 0 and other_mul_conj.epsilon() == 0
        if other_mul_conj.real() == 0:
            return ZERO
        return self * other.conj() / other_mul_conj.real()

    def __neg__(self):
        return SuperReal(-self._m, -self._x, -self._e)

    def __eq__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return self.into_inner() == other.into_inner()

    def __hash__(self):
        # equal to an int/Fraction when purely real, so hash like one
        if self._m == 0 and self._e == 0:
            return hash(self._x)
        return hash(self.into_inner())

    def __lt__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return self.into_inner() < other.into_inner()

    def __le__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return self.into_inner() <= other.into_inner()

    def __gt__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return self.into_inner() > other.into_inner()

    def __ge__(self, other):
        other = _lift(other)
        if other is None:
            return NotImplemented
        return self.into_inner() >= other.into_inner()

    def __repr__(self):
        return f"SuperReal({self._m}, {self._x}, {self._e})"

    def __str__(self):
        if self._m != 0 or self._e != 0:
            return f"({_signed(self._m)}M{_signed(self._x)}{_signed(self._e)}ε)"
        if self._x == 0:
            return "0"
        return _signed(self._x)


def _lift(value):
    if isinstance(value, SuperReal):
        return value
    if isinstance(value, (int, Fraction)):
        return SuperReal(0, value, 0)
    return None


def _signed(f):
    return f"+{f}" if f >= 0 else str(f)


ZERO = SuperReal()
ONE = SuperReal(0, 1, 0)
EPSILON = SuperReal(0, 0, 1)
BIG_M = SuperReal(1, 0, 0)


class SuperRealNumbers:
    """Number class handing out and classifying SuperReal values."""

    def zero(self): return ZERO
    def one(self): return ONE
    def epsilon(self): return EPSILON
    def positive(self, x): return x > ZERO
    def negative(self, x): return x < ZERO
    def iszero(self, x): return x == ZERO
    def nonnegative(self, x): return self.positive(x) or self.iszero(x)
    def nonpositive(self, x): return self.negative(x) or self.iszero(x)
    # Only values with a nonzero real part have an inverse.
    def invertible(self, x): return x.real() != 0
    def coerce(self, x): return SuperReal.coerce(x)
    def coerce_vec(self, x): return [self.coerce(xi) for xi in x]
    def coerce_mtx(self, x): return [self.coerce_vec(xi) for xi in x]
