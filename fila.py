from errores import RowLengthError
from superreal import SuperReal, ZERO


class Row:
    """Coefficient row of a tableau plus its constant term ``minus_z``.

    For a constraint row ``minus_z`` holds the right-hand side, for the
    objective row it holds minus the current objective value.
    """

    def __init__(self, coefficients, minus_z=ZERO):
        self.coefficients = [SuperReal.coerce(c) for c in coefficients]
        self.minus_z = SuperReal.coerce(minus_z)

    @classmethod
    def from_ints(cls, values):
        values = list(values)
        if not values:
            raise ValueError("a row needs at least its constant term")
        return cls(values[:-1], values[-1])

    def __len__(self):
        return len(self.coefficients) + 1

    def __eq__(self, other):
        if not isinstance(other, Row):
            return NotImplemented
        return self.coefficients == other.coefficients and self.minus_z == other.minus_z

    def __repr__(self):
        return f"Row({self.coefficients!r}, {self.minus_z!r})"

    def __str__(self):
        return "".join(f"| {c} " for c in self.coefficients) + f"| {self.minus_z} |"

    def copy(self):
        return Row(self.coefficients, self.minus_z)

    def _check_len(self, row):
        if len(self) != len(row):
            raise RowLengthError(len(self), len(row))

    def extend(self, n):
        self.coefficients.extend([ZERO] * n)

    def scale(self, by):
        """Divide the whole row by ``by`` (which needs a nonzero real part)."""
        inverted = SuperReal.coerce(by).reciprocal()
        self.coefficients = [c * inverted for c in self.coefficients]
        self.minus_z = self.minus_z * inverted

    def mul(self, by):
        by = SuperReal.coerce(by)
        self.coefficients = [c * by for c in self.coefficients]
        self.minus_z = self.minus_z * by

    def add(self, row):
        self._check_len(row)
        self.coefficients = [c + o for c, o in zip(self.coefficients, row.coefficients)]
        self.minus_z = self.minus_z + row.minus_z

    def sub(self, row):
        self._check_len(row)
        self.coefficients = [c - o for c, o in zip(self.coefficients, row.coefficients)]
        self.minus_z = self.minus_z - row.minus_z

    def sub_mul(self, row, by):
        """self -= by*row"""
        self._check_len(row)
        by = SuperReal.coerce(by)
        if by == ZERO:
            return
        self.coefficients = [c - o * by for c, o in zip(self.coefficients, row.coefficients)]
        self.minus_z = self.minus_z - row.minus_z * by

    def cells(self):
        return [str(c) for c in self.coefficients] + [str(self.minus_z)]
