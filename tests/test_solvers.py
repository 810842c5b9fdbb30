"""
Unit tests for the solver interface, registry and the naive solver.

The naive solver is cross-checked against the numpy truth-table oracle on
seeded random formulas.
"""

import itertools
import random
import threading
import unittest
from typing import Any

from refsat.solvers import (
    NaiveSolver,
    SolverBase,
    SolverRegistry,
    SolverResult,
    SolverStatus,
    register_solver,
)
from refsat.types import Conjunction, Model
from refsat.verification import count_models, first_model, is_satisfiable


def random_formula(
    rng: random.Random, num_vars: int, num_clauses: int
) -> Conjunction:
    """Random formula whose variable 1 is guaranteed to occur."""
    clauses = []
    for i in range(num_clauses):
        width = rng.randint(1, min(3, num_vars))
        variables = rng.sample(range(1, num_vars + 1), width)
        if i == 0 and 1 not in variables:
            variables[0] = 1
        clauses.append([v if rng.random() < 0.5 else -v for v in variables])
    return Conjunction.from_tokens(clauses)


class BlockingSolver(SolverBase):
    """Solver that waits on an event, used to exercise timeouts."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.release = threading.Event()
        self.finished = threading.Event()
        self.runs = 0

    def solve(self, formula: Conjunction) -> SolverResult:
        self.release.wait(5)
        self.runs += 1
        self.finished.set()
        return SolverResult.unsat()

    def get_statistics(self) -> dict[str, Any]:
        return {}

    def configure(self, config: dict[str, Any]) -> None:
        pass


class TestSolverResult(unittest.TestCase):
    """Test cases for SolverResult."""

    def test_sat_result(self):
        formula = Conjunction.from_tokens([[1], [-2]])
        model = Model(formula)
        model.assign(1, True)
        model.assign(2, False)

        result = SolverResult.sat(model, runtime=0.5)
        self.assertTrue(result.is_sat)
        self.assertFalse(result.is_unsat)
        self.assertEqual(result.solution, [1, -2])
        self.assertIn("SATISFIABLE", str(result))

    def test_unsat_result(self):
        result = SolverResult.unsat()
        self.assertTrue(result.is_unsat)
        self.assertIsNone(result.model)
        self.assertIsNone(result.solution)
        self.assertIn("UNSATISFIABLE", str(result))

    def test_timeout_result(self):
        result = SolverResult(SolverStatus.TIMEOUT, runtime=1.5)
        self.assertIsNone(result.solution)
        self.assertEqual(str(result), "SAT Result: TIMEOUT (gave up after 1.5000s)")


class TestSolverRegistry(unittest.TestCase):
    """Test cases for SolverRegistry."""

    def test_naive_is_registered(self):
        self.assertIn("naive", SolverRegistry.list_solvers())
        self.assertIs(SolverRegistry.get("naive"), NaiveSolver)
        self.assertIsInstance(SolverRegistry.create("naive"), NaiveSolver)

    def test_unknown_solver(self):
        with self.assertRaises(ValueError):
            SolverRegistry.get("no-such-solver")

    def test_register_rejects_non_solvers(self):
        with self.assertRaises(TypeError):
            SolverRegistry.register("bogus", dict)

    def test_register_decorator(self):
        @register_solver("blocking-test")
        class RegisteredBlockingSolver(BlockingSolver):
            pass

        try:
            self.assertIs(
                SolverRegistry.get("blocking-test"), RegisteredBlockingSolver
            )
            self.assertEqual(RegisteredBlockingSolver.solver_name, "blocking-test")
        finally:
            SolverRegistry._registry.pop("blocking-test", None)

    def test_set_default(self):
        @register_solver("default-test")
        class DefaultTestSolver(BlockingSolver):
            pass

        saved_default = SolverRegistry._default_solver
        try:
            SolverRegistry.set_default("default-test")
            self.assertIs(SolverRegistry.get(), DefaultTestSolver)
            self.assertIsInstance(SolverRegistry.create(), DefaultTestSolver)
            with self.assertRaises(ValueError):
                SolverRegistry.set_default("no-such-solver")
            self.assertIs(SolverRegistry.get(), DefaultTestSolver)
        finally:
            SolverRegistry._default_solver = saved_default
            SolverRegistry._registry.pop("default-test", None)

    def test_auto_discover_is_idempotent(self):
        before = SolverRegistry.list_solvers()
        SolverRegistry.auto_discover()
        self.assertEqual(SolverRegistry.list_solvers(), before)


class TestNaiveSolver(unittest.TestCase):
    """Test cases for NaiveSolver."""

    def setUp(self):
        self.solver = NaiveSolver()

    def test_trivial_sat(self):
        formula = Conjunction.from_tokens([[1], [1]])
        result = self.solver.solve(formula)

        self.assertEqual(result.status, SolverStatus.SATISFIABLE)
        self.assertTrue(result.model.evaluate())
        self.assertEqual(result.solution, [1])

    def test_trivial_unsat(self):
        formula = Conjunction.from_tokens([[1], [-1]])
        result = self.solver.solve(formula)

        self.assertEqual(result.status, SolverStatus.UNSATISFIABLE)
        self.assertIsNone(result.model)

    def test_true_before_false(self):
        # Satisfied by every assignment with x2 false; x1 stays true
        formula = Conjunction.from_tokens([[1, -1], [-2], [3, -3]])
        result = self.solver.solve(formula)
        self.assertEqual(result.solution, [1, -2, 3])

    def test_last_assignment_is_found(self):
        formula = Conjunction.from_tokens([[-1], [-2], [-3], [-4]])
        result = self.solver.solve(formula)

        self.assertEqual(result.solution, [-1, -2, -3, -4])
        self.assertEqual(self.solver.get_statistics()["leaves_evaluated"], 16)

    def test_unsat_explores_every_leaf(self):
        # All eight clauses over three variables: no assignment survives
        clauses = [
            [s1 * 1, s2 * 2, s3 * 3]
            for s1, s2, s3 in itertools.product((1, -1), repeat=3)
        ]
        formula = Conjunction.from_tokens(clauses)
        result = self.solver.solve(formula)

        self.assertTrue(result.is_unsat)
        stats = result.statistics
        self.assertEqual(stats["leaves_evaluated"], 8)
        self.assertEqual(stats["decisions"], 14)
        self.assertEqual(stats["num_vars"], 3)
        self.assertEqual(stats["total_clauses"], 8)

    def test_many_variables_do_not_hit_recursion_limit(self):
        formula = Conjunction.from_tokens([[v] for v in range(1, 3001)])
        result = self.solver.solve(formula)

        self.assertTrue(result.is_sat)
        self.assertEqual(self.solver.get_statistics()["leaves_evaluated"], 1)

    def test_solver_is_reusable(self):
        first = self.solver.solve(Conjunction.from_tokens([[-1]]))
        second = self.solver.solve(Conjunction.from_tokens([[1], [-1]]))

        self.assertEqual(first.solution, [-1])
        self.assertTrue(second.is_unsat)

    def test_matches_brute_force(self):
        rng = random.Random(1234)
        for _ in range(200):
            num_vars = rng.randint(1, 8)
            formula = random_formula(rng, num_vars, rng.randint(1, 4 * num_vars))
            result = self.solver.solve(formula)

            self.assertEqual(
                result.is_sat, is_satisfiable(formula), str(formula.to_tokens())
            )
            if result.is_sat:
                self.assertTrue(result.model.is_total())
                self.assertTrue(result.model.evaluate())
                self.assertEqual(result.solution, first_model(formula))

    def test_brute_force_on_larger_instances(self):
        rng = random.Random(99)
        for num_vars in (10, 12, 15):
            formula = random_formula(rng, num_vars, 5 * num_vars)
            result = self.solver.solve(formula)
            self.assertEqual(result.is_sat, count_models(formula) > 0)

    def test_configure(self):
        self.solver.configure({"timeout": 2.5})
        self.assertEqual(self.solver.default_timeout, 2.5)


class TestSolveWithTimeout(unittest.TestCase):
    """Test cases for SolverBase.solve_with_timeout."""

    def test_finishes_in_time(self):
        result = NaiveSolver().solve_with_timeout(
            Conjunction.from_tokens([[1, 2], [-1]]), timeout=5
        )
        self.assertEqual(result.solution, [-1, 2])

    def test_no_timeout_runs_inline(self):
        result = NaiveSolver(default_timeout=None).solve_with_timeout(
            Conjunction.from_tokens([[1]])
        )
        self.assertTrue(result.is_sat)

    def test_times_out(self):
        solver = BlockingSolver()
        try:
            result = solver.solve_with_timeout(Conjunction.from_tokens([[1]]), 0.05)
        finally:
            solver.release.set()

        self.assertEqual(result.status, SolverStatus.TIMEOUT)
        self.assertGreater(result.runtime, 0)

    def test_worker_errors_propagate(self):
        class FailingSolver(BlockingSolver):
            def solve(self, formula):
                raise RuntimeError("solver crashed")

        with self.assertRaises(RuntimeError):
            FailingSolver().solve_with_timeout(Conjunction.from_tokens([[1]]), 5)

    def test_abandoned_worker_leaves_solver_untouched(self):
        solver = BlockingSolver()
        try:
            result = solver.solve_with_timeout(Conjunction.from_tokens([[1]]), 0.05)
        finally:
            solver.release.set()

        self.assertEqual(result.status, SolverStatus.TIMEOUT)
        self.assertTrue(solver.finished.wait(5))
        self.assertEqual(solver.runs, 0)

    def test_finished_run_updates_solver_state(self):
        solver = BlockingSolver()
        solver.release.set()
        result = solver.solve_with_timeout(Conjunction.from_tokens([[1]]), 5)

        self.assertTrue(result.is_unsat)
        self.assertEqual(solver.runs, 1)

    def test_statistics_after_timed_solve(self):
        solver = NaiveSolver()
        solver.solve_with_timeout(Conjunction.from_tokens([[-1], [-2]]), 5)
        self.assertEqual(solver.get_statistics()["leaves_evaluated"], 4)


if __name__ == "__main__":
    unittest.main()
