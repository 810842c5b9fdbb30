"""
refsat: a reference SAT solver for DIMACS CNF formulas.
"""

from refsat.dimacs import (
    DimacsDocument,
    formula_to_dimacs,
    load_cnf_file,
    load_formula,
    parse_dimacs,
    read_dimacs,
    save_cnf_file,
)
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
from refsat.solvers import (
    NaiveSolver,
    SolverBase,
    SolverRegistry,
    SolverResult,
    SolverStatus,
)
from refsat.types import Clause, Conjunction, Literal, Model

__version__ = "0.1.0"

__all__ = [
    "Literal",
    "Clause",
    "Conjunction",
    "Model",
    "DimacsDocument",
    "parse_dimacs",
    "read_dimacs",
    "load_formula",
    "load_cnf_file",
    "formula_to_dimacs",
    "save_cnf_file",
    "SATBaseException",
    "DimacsError",
    "UnexpectedEOFError",
    "DimacsSyntaxError",
    "DimacsIOError",
    "FormulaError",
    "InvalidClauseError",
    "IncompleteAssignmentError",
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "NaiveSolver",
]
