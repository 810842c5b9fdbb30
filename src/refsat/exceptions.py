"""
Custom exceptions for refsat.

This module defines the error taxonomy for DIMACS ingestion, formula
construction and model evaluation, allowing callers to tell structural
input problems apart from malformed tokens and I/O failures.
"""


class SATBaseException(Exception):
    """Base class for all refsat specific exceptions."""

    def __init__(self, message: str | None = None):
        """
        Initialize the exception.

        Args:
            message: Optional error message
        """
        self.message = message
        super().__init__(message)


class DimacsError(SATBaseException):
    """Base class for errors raised while reading DIMACS input."""


class UnexpectedEOFError(DimacsError):
    """
    Exception raised when the input ends before the formula is complete.

    This covers a clause left open at a blank line or at end of input, a
    truncated header, a missing header and an input with no clauses.
    """

    def __init__(self, message: str = "Unexpected EOF"):
        super().__init__(message)


class DimacsSyntaxError(DimacsError):
    """
    Exception raised for a grammar violation on a specific input line.

    Line numbers are 0-based.
    """

    def __init__(self, line: int, message: str):
        """
        Initialize the exception.

        Args:
            line: 0-based line number where the error was detected
            message: Human-readable description
        """
        self.line = line
        self.description = message
        super().__init__(f"Line {line}: {message}")


class DimacsIOError(DimacsError):
    """Exception wrapping an I/O failure from the underlying byte source."""

    def __init__(self, original: OSError):
        self.original = original
        super().__init__(str(original))


class FormulaError(SATBaseException):
    """
    Exception raised when a conjunction cannot be built from its clauses.

    Formulas must be non-empty and densely numbered starting at variable 1.
    """

    def __init__(self, message: str = "Invalid formula"):
        super().__init__(message)


class InvalidClauseError(SATBaseException):
    """
    Exception raised when an invalid clause is detected.

    This occurs when a clause has no literals.
    """

    def __init__(self, message: str = "Invalid clause detected", clause=None):
        """
        Initialize the exception.

        Args:
            message: Error message
            clause: The invalid clause
        """
        self.clause = clause

        if clause is not None:
            message = f"{message}: {clause}"

        super().__init__(message)


class IncompleteAssignmentError(SATBaseException):
    """
    Exception raised when a partial model is evaluated.

    Evaluation requires every variable in the formula's domain to be
    assigned; hitting this is a programming error.
    """

    def __init__(
        self,
        message: str = "Cannot evaluate a partial assignment",
        variable: int | None = None,
    ):
        self.variable = variable

        if variable is not None:
            message = f"{message}: variable {variable} is unassigned"

        super().__init__(message)

