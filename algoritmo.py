import logging

import tabla
from errores import BasisError, RowLengthError
from superreal import SuperRealNumbers

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 50

RESOLUTION_NO = "no"
RESOLUTION_SOLVED = "solved"
RESOLUTION_UNBOUNDED = "unbounded"
RESOLUTION_INCOMPATIBLE = "incompatible"
RESOLUTION_CYCLE = "cycle"
RESOLUTION_STALLED = "stalled"

MODE_PRIMAL = "primal"
MODE_DUAL = "dual"


def _argmax(pairs):
    """Index of the first largest value in (index, value) pairs, or None."""
    best = None
    for i, value in pairs:
        if best is None or value > best[1]:
            best = (i, value)
    return None if best is None else best[0]


def _argmin(pairs):
    best = None
    for i, value in pairs:
        if best is None or value < best[1]:
            best = (i, value)
    return None if best is None else best[0]


class SimplexSolver:
    """Primal/dual tableau simplex that maximizes the objective row.

    The tableau (``rows``, ``objective``, ``basis``) is updated in place.
    Each step is a dual step when the tableau is primal-infeasible and
    dual-feasible, and a primal step otherwise. A basis that was already
    visited stops the loop.
    """

    def __init__(self, rows, objective, basis, numclass=None, canonicalize=False, renderer=None):
        self.numclass = numclass if numclass is not None else SuperRealNumbers()
        self.rows = rows
        self.objective = objective
        self.basis = list(basis)
        self.n = len(objective.coefficients)
        self.m = len(rows)
        self.renderer = renderer
        self.resolution = RESOLUTION_NO
        self.steps = 0
        self.history = []
        self.iterations = []
        self._validate_shape()
        if canonicalize:
            self._canonicalize()
        self._visited = {tuple(self.basis)}
        self._save_iteration()
        self._render()

    def _validate_shape(self):
        for row in self.rows:
            if len(row) != len(self.objective):
                raise RowLengthError(len(self.objective), len(row))
        if len(self.basis) != self.m:
            raise BasisError(f"basis has {len(self.basis)} entries for {self.m} rows")
        if len(set(self.basis)) != len(self.basis):
            raise BasisError(f"repeated column in basis {self.basis}")
        for i in self.basis:
            if not 0 <= i < self.n:
                raise BasisError(f"basis column {i} out of range")

    def _canonicalize(self):
        """Make every basic column a unit column and price it out of the objective."""
        for row, i in zip(self.rows, self.basis):
            a_i = row.coefficients[i]
            if not self.numclass.invertible(a_i):
                raise BasisError(f"basic column {i} cannot be pivoted in its row")
            if a_i != self.numclass.one():
                row.scale(a_i)
            self.objective.sub_mul(row, self.objective.coefficients[i])

    def _save_iteration(self):
        self.iterations.append({
            'rows': [row.copy() for row in self.rows],
            'objective': self.objective.copy(),
            'basis': self.basis[:],
        })

    def _render(self):
        if self.renderer is not None:
            for row in self.rows:
                self.renderer(row)
            self.renderer(self.objective)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("tableau:\n%s", tabla.format_table(self.rows, self.objective, self.basis))

    def is_primal_feasible(self):
        return all(self.numclass.nonnegative(row.minus_z) for row in self.rows)

    def is_dual_feasible(self):
        return all(self.numclass.nonpositive(c) for c in self.objective.coefficients)

    def vertex(self):
        v = [self.numclass.zero()] * self.n
        for row, i in zip(self.rows, self.basis):
            v[i] = row.minus_z / row.coefficients[i]
        return v

    def objective_value(self):
        return -self.objective.minus_z

    def _primal_choice(self, primal_feasible):
        num = self.numclass
        entering = _argmax(
            (i, c) for i, c in enumerate(self.objective.coefficients)
            if num.positive(c) and i not in self.basis
        )
        if entering is None:
            self.resolution = RESOLUTION_SOLVED if primal_feasible else RESOLUTION_STALLED
            return None

        # standard minimum-ratio test: only positive, invertible pivots
        column = [row.coefficients[entering] for row in self.rows]
        ratios = (
            (j, row.minus_z / a) for j, (row, a) in enumerate(zip(self.rows, column))
            if num.positive(a) and num.invertible(a)
        )
        active_row = _argmin((j, r) for j, r in ratios if num.nonnegative(r))
        if active_row is None:
            self.resolution = RESOLUTION_UNBOUNDED if primal_feasible else RESOLUTION_STALLED
            return None
        return active_row, entering

    def _dual_choice(self):
        num = self.numclass
        active_row = _argmin(
            (j, row.minus_z) for j, row in enumerate(self.rows) if num.negative(row.minus_z)
        )
        if active_row is None:
            self.resolution = RESOLUTION_SOLVED
            return None

        entering = _argmax(
            (i, -self.objective.coefficients[i] / a) for i, a in enumerate(self.rows[active_row].coefficients)
            if num.negative(a) and num.invertible(a) and i not in self.basis
        )
        if entering is None:
            self.resolution = RESOLUTION_INCOMPATIBLE
            return None
        return active_row, entering

    def _basic_slot(self, active_row):
        coefficients = self.rows[active_row].coefficients
        for slot, i in enumerate(self.basis):
            if not self.numclass.iszero(coefficients[i]):
                return slot
        raise BasisError(f"no basic variable in row {active_row}")

    def _pivot(self, active_row, entering):
        pivot_row = self.rows[active_row]
        pivot_row.scale(pivot_row.coefficients[entering])
        for j, row in enumerate(self.rows):
            if j != active_row:
                row.sub_mul(pivot_row, row.coefficients[entering])
        self.objective.sub_mul(pivot_row, self.objective.coefficients[entering])

    def step(self):
        if self.resolution != RESOLUTION_NO:
            return False

        primal_feasible = self.is_primal_feasible()
        dual_feasible = self.is_dual_feasible()
        if not primal_feasible and dual_feasible:
            mode = MODE_DUAL
            choice = self._dual_choice()
        else:
            if not primal_feasible:
                logger.warning("step %d: tableau is neither primal nor dual feasible, "
                               "trying a primal step", self.steps + 1)
            mode = MODE_PRIMAL
            choice = self._primal_choice(primal_feasible)
        if choice is None:
            logger.info("stopped after %d steps: %s", self.steps, self.resolution)
            return False

        active_row, entering = choice
        slot = self._basic_slot(active_row)
        leaving = self.basis[slot]
        basis = self.basis[:]
        basis[slot] = entering
        if tuple(basis) in self._visited:
            logger.warning("basis %s already visited, stopping after %d steps",
                           [i + 1 for i in basis], self.steps)
            self.resolution = RESOLUTION_CYCLE
            return False
        self._visited.add(tuple(basis))

        self._pivot(active_row, entering)
        self.basis = basis
        self.steps += 1
        self.history.append({
            'step': self.steps,
            'mode': mode,
            'row': active_row,
            'entering': entering,
            'leaving': leaving,
            'basis': basis[:],
        })
        logger.info("step %d (%s): entering x%d, leaving x%d, basis %s", self.steps, mode,
                    entering + 1, leaving + 1, [i + 1 for i in basis])
        self._save_iteration()
        self._render()
        return True

    def run(self, max_steps=DEFAULT_MAX_STEPS):
        if max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {max_steps}")
        for _ in range(max_steps):
            if not self.step():
                break
        else:
            logger.warning("step budget of %d exhausted", max_steps)
        return self.resolution


def simplex(rows, objective, basis, max_steps=DEFAULT_MAX_STEPS, renderer=None):
    """Run the engine on a standardized tableau; returns (basis, objective)."""
    solver = SimplexSolver(rows, objective, basis, renderer=renderer)
    solver.run(max_steps)
    return solver.basis, solver.objective


def linsolve(builder, max_steps=DEFAULT_MAX_STEPS, dual=False, equality_basis=None, renderer=None):
    """Standardize ``builder`` (or its dual) and maximize its objective.

    Returns (resolution, vertex, solver); vertex holds the values of the
    builder's decision variables and is None unless the problem was solved.
    With ``dual=True`` the solver works on the dual problem, so its
    objective value is minus the primal optimum; the primal values are read
    from the reduced costs of the dual surplus columns.
    """
    n = builder.num_variables
    problem = builder.to_dual() if dual else builder
    rows, objective, basis = problem.standardize(equality_basis)
    solver = SimplexSolver(rows, objective, basis, numclass=problem.numclass,
                           canonicalize=True, renderer=renderer)
    solver.run(max_steps)

    if solver.resolution != RESOLUTION_SOLVED:
        return solver.resolution, None, solver
    if dual:
        offset = problem.num_variables
        return solver.resolution, [-solver.objective.coefficients[offset + j] for j in range(n)], solver
    return solver.resolution, solver.vertex()[:n], solver
