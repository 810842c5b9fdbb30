"""
Unit tests for the exception hierarchy.
"""

import unittest

from refsat.exceptions import (
    DimacsError,
    DimacsIOError,
    DimacsSyntaxError,
    FormulaError,
    IncompleteAssignmentError,
    InvalidClauseError,
    SATBaseException,
    UnexpectedEOFError,
)


class TestExceptions(unittest.TestCase):
    """Test cases for custom exception classes."""

    def test_unexpected_eof(self):
        error = UnexpectedEOFError()
        self.assertEqual(str(error), "Unexpected EOF")
        self.assertIsInstance(error, DimacsError)

    def test_syntax_error(self):
        error = DimacsSyntaxError(4, "Var 9 > 3")
        self.assertEqual(str(error), "Line 4: Var 9 > 3")
        self.assertEqual(error.line, 4)
        self.assertEqual(error.description, "Var 9 > 3")

    def test_io_error(self):
        original = FileNotFoundError(2, "No such file or directory")
        error = DimacsIOError(original)
        self.assertIs(error.original, original)
        self.assertEqual(str(error), str(original))

    def test_invalid_clause_error(self):
        self.assertEqual(str(InvalidClauseError()), "Invalid clause detected")
        error = InvalidClauseError(clause=[])
        self.assertIn("[]", str(error))
        self.assertEqual(error.clause, [])

    def test_incomplete_assignment_error(self):
        error = IncompleteAssignmentError(variable=5)
        self.assertIn("variable 5", str(error))
        self.assertEqual(error.variable, 5)

    def test_hierarchy(self):
        for cls in (
            DimacsError,
            FormulaError,
            InvalidClauseError,
            IncompleteAssignmentError,
        ):
            self.assertTrue(issubclass(cls, SATBaseException))


if __name__ == "__main__":
    unittest.main()
