import logging
from collections import namedtuple

from errores import BasisError, SimplexError
from fila import Row
from superreal import SuperRealNumbers

logger = logging.getLogger(__name__)

LT = "<"
LTE = "<="
GT = ">"
GTE = ">="
EQ = "="

RELATIONS = (LT, LTE, GT, GTE, EQ)
_ALIASES = {"≤": LTE, "≥": GTE, "=<": LTE, "=>": GTE, "==": EQ}


Tableau = namedtuple("Tableau", ["rows", "objective", "basis"])


def parse_relation(text):
    text = text.strip()
    relation = _ALIASES.get(text, text)
    if relation not in RELATIONS:
        raise ValueError(f"unknown relation {text!r}")
    return relation


class ConstraintBuilder:
    """Collects relational constraints and an objective to maximize.

    ``standardize`` turns them into a tableau with one slack (<, <=) or
    surplus (>, >=) column per inequality and an initial basis.
    """

    def __init__(self, numclass=None):
        self.numclass = numclass if numclass is not None else SuperRealNumbers()
        self._constraints = []
        self._relations = []
        self._objective = None

    def __len__(self):
        return len(self._constraints)

    @property
    def constraints(self):
        return tuple(self._constraints)

    @property
    def relations(self):
        return tuple(self._relations)

    @property
    def objective(self):
        return self._objective

    @property
    def num_variables(self):
        widths = [len(row.coefficients) for row in self._constraints]
        if self._objective is not None:
            widths.append(len(self._objective.coefficients))
        return max(widths, default=0)

    def add_constraint(self, coefficients, rhs, relation):
        row = Row(self.numclass.coerce_vec(coefficients), self.numclass.coerce(rhs))
        self.add_constraint_row(row, relation)

    def add_constraint_row(self, row, relation):
        self._constraints.append(row.copy())
        self._relations.append(parse_relation(relation))

    def set_objective(self, row):
        if not isinstance(row, Row):
            row = Row.from_ints(row)
        self._objective = row.copy()

    def standardize(self, equality_basis=None):
        if self._objective is None:
            raise SimplexError("an objective must be set before standardizing")

        width = self.num_variables
        rows = [row.copy() for row in self._constraints]
        objective = self._objective.copy()
        for row in rows + [objective]:
            row.extend(width - len(row.coefficients))

        slacks = [None] * len(rows)
        n_slacks = 0
        for i, relation in enumerate(self._relations):
            if relation != EQ:
                slacks[i] = width + n_slacks
                n_slacks += 1

        for row in rows + [objective]:
            row.extend(n_slacks)

        for row, column, relation in zip(rows, slacks, self._relations):
            if relation in (LT, LTE):
                row.coefficients[column] = self.numclass.one()
            elif relation in (GT, GTE):
                row.coefficients[column] = -self.numclass.one()

            # x < b is kept as x <= b - ε, x > b as x >= b + ε
            if relation == LT:
                row.minus_z = row.minus_z - self.numclass.epsilon()
            elif relation == GT:
                row.minus_z = row.minus_z + self.numclass.epsilon()

        basis = [column for column in slacks if column is not None]
        equality_rows = [i for i, column in enumerate(slacks) if column is None]
        if equality_basis is None:
            equality_basis = range(len(equality_rows))
        equality_basis = list(equality_basis)
        if len(equality_basis) != len(equality_rows):
            raise BasisError(
                f"{len(equality_rows)} equality rows but {len(equality_basis)} basis columns given")
        basis.extend(equality_basis)

        if len(set(basis)) != len(basis):
            raise BasisError(f"repeated column in initial basis {basis}")

        # basis[k] pairs with the k-th slack row, then the equality rows in order
        owners = [i for i, column in enumerate(slacks) if column is not None] + equality_rows
        for i, column in zip(equality_rows, equality_basis):
            self._check_unit_column(rows, i, column)

        # reorder so that basis[i] belongs to rows[i]
        ordered = [None] * len(rows)
        for row_index, column in zip(owners, basis):
            ordered[row_index] = column

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("standardized %d rows x %d columns (%d slack), basis %s",
                         len(rows), width + n_slacks, n_slacks, ordered)
        return Tableau(rows, objective, ordered)

    def _check_unit_column(self, rows, i, column):
        if not 0 <= column < len(rows[i].coefficients):
            raise BasisError(f"basis column {column} out of range for row {i}")
        if self.numclass.iszero(rows[i].coefficients[column]):
            raise BasisError(f"column {column} is zero in equality row {i}")
        for j, row in enumerate(rows):
            if j != i and not self.numclass.iszero(row.coefficients[column]):
                raise BasisError(
                    f"column {column} is not a unit column for equality row {i}: row {j} uses it")

    def to_dual(self):
        if self._objective is None:
            raise SimplexError("an objective must be set before building the dual")

        minus_one = -self.numclass.one()
        width = self.num_variables

        normalized = []
        for row, relation in zip(self._constraints, self._relations):
            row = row.copy()
            row.extend(width - len(row.coefficients))
            if relation in (GT, GTE):
                row.mul(minus_one)
            if relation in (LT, GT):
                row.minus_z = row.minus_z - self.numclass.epsilon()
                normalized.append(row)
            elif relation == EQ:
                normalized.append(row.copy())
                row.mul(minus_one)
                normalized.append(row)
            else:
                normalized.append(row)

        objective = self._objective.copy()
        objective.extend(width - len(objective.coefficients))

        dual = ConstraintBuilder(self.numclass)
        for x in range(width):
            column = [row.coefficients[x] for row in normalized]
            dual.add_constraint_row(Row(column, objective.coefficients[x]), GTE)
        dual.set_objective(Row([-row.minus_z for row in normalized], -objective.minus_z))
        return dual
