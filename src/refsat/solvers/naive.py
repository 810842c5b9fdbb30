"""
Naive exhaustive solver.

Enumerates the formula's variables in ascending order, trying True before
False for each one, and only evaluates the formula once every variable is
assigned. There is no propagation, no pruning and no learning; this is the
baseline other solvers are checked against.
"""

import logging
import time
from typing import Any

from refsat.types import Conjunction, Model

from .base import SolverBase, SolverResult
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)


@register_solver("naive")
class NaiveSolver(SolverBase):
    """
    Depth-first two-way branching over the whole variable domain.

    The search keeps an explicit trail with one entry per assigned
    variable instead of recursing, so the depth of the decision tree is not
    bounded by the interpreter's recursion limit.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.stats: dict[str, Any] = {}
        self._reset_statistics()

    def _reset_statistics(self) -> None:
        self.stats = {
            "decisions": 0,
            "leaves_evaluated": 0,
            "num_vars": 0,
            "total_clauses": 0,
            "solver_name": "naive",
        }

    def _search(self, model: Model, variables: range) -> bool:
        """
        Run the enumeration to the first satisfying leaf.

        ``trail[i]`` is the value currently assigned to ``variables[i]``.
        On success the model is left holding the satisfying assignment; on
        failure every variable has been unassigned again.
        """
        trail: list[bool] = []

        while True:
            if len(trail) < len(variables):
                model.assign(variables[len(trail)], True)
                trail.append(True)
                self.stats["decisions"] += 1
                continue

            self.stats["leaves_evaluated"] += 1
            if model.evaluate():
                return True

            # Unwind variables whose False branch is already exhausted
            while trail and not trail[-1]:
                trail.pop()
                model.unassign(variables[len(trail)])

            if not trail:
                return False

            trail[-1] = False
            model.assign(variables[len(trail) - 1], False)
            self.stats["decisions"] += 1

    def solve(self, formula: Conjunction) -> SolverResult:
        """
        Solve the formula by exhaustive enumeration.

        Args:
            formula: The conjunction to solve

        Returns:
            SATISFIABLE with the first model found in true-before-false
            order, or UNSATISFIABLE after all 2^n assignments failed
        """
        self._reset_statistics()
        self.stats["num_vars"] = formula.num_vars
        self.stats["total_clauses"] = len(formula)

        logger.debug(
            f"Naive search over {formula.num_vars} variables, "
            f"{len(formula)} clauses"
        )

        start_time = time.time()
        model = Model(formula)
        satisfied = self._search(model, formula.domain())
        runtime = time.time() - start_time

        logger.debug(
            f"Naive search finished in {runtime:.4f}s after "
            f"{self.stats['leaves_evaluated']} leaves"
        )

        if satisfied:
            return SolverResult.sat(
                model, runtime=runtime, statistics=dict(self.stats)
            )
        return SolverResult.unsat(runtime=runtime, statistics=dict(self.stats))

    def get_statistics(self) -> dict[str, Any]:
        return dict(self.stats)

    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver.

        Only ``timeout`` is recognised; the search itself has no tunables.
        """
        for key, value in config.items():
            if key == "timeout":
                self.default_timeout = value
            else:
                logger.warning(f"Unknown option for naive solver: {key}")
