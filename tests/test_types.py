"""
Unit tests for the formula and assignment types.
"""

import unittest

from refsat.exceptions import (
    FormulaError,
    IncompleteAssignmentError,
    InvalidClauseError,
)
from refsat.types import Clause, Conjunction, Literal, Model


class TestLiteral(unittest.TestCase):
    """Test cases for Literal."""

    def test_from_token(self):
        self.assertEqual(Literal.from_token(3), Literal.positive_of(3))
        self.assertEqual(Literal.from_token(-7), Literal.negative_of(7))

    def test_zero_token_rejected(self):
        with self.assertRaises(ValueError):
            Literal.from_token(0)

    def test_variable_must_be_positive(self):
        with self.assertRaises(ValueError):
            Literal(0)

    def test_variable_and_polarity(self):
        lit = Literal.from_token(-4)
        self.assertEqual(lit.variable, 4)
        self.assertFalse(lit.polarity())
        self.assertTrue(Literal.from_token(4).polarity())

    def test_to_token_and_negation(self):
        self.assertEqual(Literal.from_token(-5).to_token(), -5)
        self.assertEqual(-Literal.positive_of(2), Literal.negative_of(2))
        self.assertEqual(repr(Literal.negative_of(2)), "Negative(2)")


class TestClause(unittest.TestCase):
    """Test cases for Clause."""

    def test_empty_clause_rejected(self):
        with self.assertRaises(InvalidClauseError):
            Clause([])

    def test_preserves_literal_order(self):
        clause = Clause.from_tokens([2, 3, -1])
        self.assertEqual(clause.to_tokens(), [2, 3, -1])
        self.assertEqual(list(clause.variables()), [2, 3, 1])
        self.assertEqual(len(clause), 3)

    def test_evaluate(self):
        clause = Clause.from_tokens([1, -3])
        # Every row of the truth table for (x1 or not x3)
        self.assertTrue(clause.evaluate([True, False, True]))
        self.assertTrue(clause.evaluate([True, False, False]))
        self.assertFalse(clause.evaluate([False, False, True]))
        self.assertTrue(clause.evaluate([False, False, False]))

    def test_equality(self):
        self.assertEqual(Clause.from_tokens([1, -2]), Clause.from_tokens([1, -2]))
        self.assertNotEqual(Clause.from_tokens([1, -2]), Clause.from_tokens([-2, 1]))


class TestConjunction(unittest.TestCase):
    """Test cases for Conjunction."""

    def test_domain(self):
        formula = Conjunction.from_tokens([[1, -3], [2, 3, -1]])
        self.assertEqual(formula.domain(), range(1, 4))
        self.assertEqual(formula.num_vars, 3)
        self.assertEqual(len(formula), 2)

    def test_no_clauses(self):
        with self.assertRaises(FormulaError):
            Conjunction([])

    def test_domain_must_start_at_one(self):
        with self.assertRaises(FormulaError):
            Conjunction.from_tokens([[2, 3]])

    def test_gaps_are_allowed_above_one(self):
        formula = Conjunction.from_tokens([[1, 4]])
        self.assertEqual(formula.domain(), range(1, 5))


class TestModel(unittest.TestCase):
    """Test cases for Model."""

    def setUp(self):
        self.formula = Conjunction.from_tokens([[1, -3], [2, 3, -1]])

    def test_new_model_is_unassigned(self):
        model = Model(self.formula)
        self.assertEqual(model.assignments, [None, None, None])
        self.assertFalse(model.is_total())

    def test_assign_and_unassign(self):
        model = Model(self.formula)
        model.assign(2, True)
        self.assertTrue(model.value(2))
        model.unassign(2)
        self.assertIsNone(model.value(2))

    def test_out_of_range_variable_rejected(self):
        model = Model(self.formula)
        for variable in (0, -1, 4):
            with self.assertRaises(ValueError):
                model.assign(variable, True)
            with self.assertRaises(ValueError):
                model.value(variable)
            with self.assertRaises(ValueError):
                model.unassign(variable)
        self.assertEqual(model.assignments, [None, None, None])

    def test_evaluate_partial_model_fails_fast(self):
        model = Model(self.formula)
        model.assign(1, True)
        with self.assertRaises(IncompleteAssignmentError) as ctx:
            model.evaluate()
        self.assertEqual(ctx.exception.variable, 2)

    def test_evaluate(self):
        model = Model(self.formula)
        for variable, value in ((1, True), (2, False), (3, False)):
            model.assign(variable, value)
        # (x1 or not x3) holds, but (x2 or x3 or not x1) does not
        self.assertFalse(model.evaluate())

        model.assign(2, True)
        self.assertTrue(model.evaluate())

        model.assign(1, False)
        model.assign(2, False)
        self.assertTrue(model.evaluate())

    def test_to_literals_and_copy(self):
        model = Model(self.formula)
        model.assign(1, True)
        model.assign(3, False)
        self.assertEqual(model.to_literals(), [1, -3])

        snapshot = model.copy()
        model.assign(1, False)
        self.assertEqual(snapshot.to_literals(), [1, -3])
        self.assertIs(snapshot.formula, self.formula)


if __name__ == "__main__":
    unittest.main()
