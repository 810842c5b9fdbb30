"""
DIMACS CNF reading and writing.

This module provides a single-pass, line-oriented reader for the DIMACS
CNF format, as well as helpers to assemble a ``Conjunction`` from a byte
source and to write a formula back out as DIMACS text.

Format:
- ``c ...`` lines are comments
- ``p cnf <num_vars> <num_clauses>`` is the header, exactly once
- Clause data is a stream of signed integers; ``0`` terminates a clause,
  independently of line breaks
- A blank line ends the input
"""

import io
import logging
import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import BinaryIO, TextIO

from refsat.exceptions import (
    DimacsIOError,
    DimacsSyntaxError,
    UnexpectedEOFError,
)
from refsat.types import Clause, Conjunction, Literal

# Set up logging
logger = logging.getLogger(__name__)

DimacsSource = bytes | str | BinaryIO | TextIO

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")
_ASCII_SPACE = " \t\n\r\f"
_WHITESPACE = re.compile(f"[{_ASCII_SPACE}]+")


@dataclass
class ParserState:
    """Bookkeeping created when the header line is read."""

    header_line: int
    expected_vars: int
    expected_clauses: int
    vars_seen: list[bool] = field(default_factory=list)

    def __post_init__(self):
        if not self.vars_seen:
            self.vars_seen = [False] * (self.expected_vars + 1)


@dataclass
class _ParseContext:
    state: ParserState | None = None
    clauses: list[Clause] = field(default_factory=list)
    pending: list[Literal] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)


@dataclass
class DimacsDocument:
    """
    The result of reading a DIMACS CNF input.

    Attributes:
        clauses: Clauses in input order
        num_vars: Variable count declared in the header
        num_clauses: Clause count declared in the header
        header_line: 0-based line number of the header
        comments: Comment texts, without the leading ``c``
        vars_seen: Variables that occur in at least one clause
    """

    clauses: list[Clause]
    num_vars: int
    num_clauses: int
    header_line: int
    comments: list[str] = field(default_factory=list)
    vars_seen: set[int] = field(default_factory=set)

    def unseen_variables(self) -> list[int]:
        """Declared variables that never occur in a clause."""
        return [v for v in range(1, self.num_vars + 1) if v not in self.vars_seen]

    def to_formula(self) -> Conjunction:
        return Conjunction.from_clauses(self.clauses)


def _iter_lines(source: DimacsSource) -> Iterator[bytes | str]:
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    elif isinstance(source, str):
        source = io.StringIO(source)

    try:
        yield from source
    except OSError as e:
        raise DimacsIOError(e) from e


def _decode(raw: bytes | str, line_num: int) -> str:
    if isinstance(raw, bytes):
        try:
            return raw.decode("ascii")
        except UnicodeDecodeError:
            raise DimacsSyntaxError(line_num, "Non-ASCII input") from None
    if not raw.isascii():
        raise DimacsSyntaxError(line_num, "Non-ASCII input")
    return raw


def _parse_int(
    token: str | None, line_num: int, desc: str, pattern: re.Pattern
) -> int:
    if token is None:
        raise UnexpectedEOFError(f"Line {line_num}: missing {desc}")
    if not pattern.fullmatch(token):
        raise DimacsSyntaxError(line_num, f"Expected {desc}, got {token}")
    return int(token)


def _handle_comment(ctx: _ParseContext, line_num: int, line: str) -> None:
    if ctx.pending:
        raise DimacsSyntaxError(line_num, "Unterminated clause before comment line")
    ctx.comments.append(line.strip(_ASCII_SPACE)[1:].strip(_ASCII_SPACE))


def _handle_header(ctx: _ParseContext, line_num: int, tokens: list[str]) -> None:
    it = iter(tokens[1:])

    fmt = next(it, None)
    if fmt is None:
        raise UnexpectedEOFError(f"Line {line_num}: missing file format type")
    if fmt != "cnf":
        raise DimacsSyntaxError(
            line_num, f'Expected "cnf" file format type, got {fmt}'
        )
    if ctx.state is not None:
        raise DimacsSyntaxError(
            line_num, f"Header already defined on line {ctx.state.header_line}"
        )

    num_vars = _parse_int(next(it, None), line_num, "num_vars", _UNSIGNED_INT)
    num_clauses = _parse_int(
        next(it, None), line_num, "num_clauses", _UNSIGNED_INT
    )
    ctx.state = ParserState(line_num, num_vars, num_clauses)
    logger.debug(
        f"Header on line {line_num}: {num_vars} variables, {num_clauses} clauses"
    )


def _handle_clause_tokens(
    ctx: _ParseContext, line_num: int, tokens: list[str]
) -> None:
    state = ctx.state
    if state is None:
        raise DimacsSyntaxError(line_num, "Saw a clause before a DIMACS header")

    for token in tokens:
        value = _parse_int(token, line_num, "var", _SIGNED_INT)
        if value == 0:
            if not ctx.pending:
                raise DimacsSyntaxError(line_num, "Empty clause")
            ctx.clauses.append(Clause.from_literals(ctx.pending))
            ctx.pending = []
            continue

        literal = Literal.from_token(value)
        if literal.variable > state.expected_vars:
            raise DimacsSyntaxError(
                line_num, f"Var {value} > {state.expected_vars}"
            )
        state.vars_seen[literal.variable] = True
        ctx.pending.append(literal)


def _check_declared_counts(state: ParserState, clauses: list[Clause]) -> None:
    if len(clauses) != state.expected_clauses:
        logger.warning(
            f"Header declares {state.expected_clauses} clauses, found {len(clauses)}"
        )
    unseen = state.vars_seen[1:].count(False)
    if unseen:
        logger.warning(
            f"{unseen} of {state.expected_vars} declared variables never occur"
        )


def read_dimacs(source: DimacsSource) -> DimacsDocument:
    """
    Read a DIMACS CNF input.

    Args:
        source: DIMACS content as bytes, a string, or a binary or text
            file-like object

    Returns:
        DimacsDocument with the clauses and header information

    Raises:
        UnexpectedEOFError: If the input is structurally incomplete
        DimacsSyntaxError: If a line violates the grammar
        DimacsIOError: If reading from the source fails
    """
    ctx = _ParseContext()

    for line_num, raw in enumerate(_iter_lines(source)):
        line = _decode(raw, line_num)
        tokens = [t for t in _WHITESPACE.split(line) if t]

        if not tokens:
            if ctx.pending:
                raise UnexpectedEOFError(
                    f"Line {line_num}: unterminated clause at blank line"
                )
            break

        if tokens[0] == "c":
            _handle_comment(ctx, line_num, line)
        elif tokens[0] == "p":
            _handle_header(ctx, line_num, tokens)
        else:
            _handle_clause_tokens(ctx, line_num, tokens)

    if ctx.pending:
        raise UnexpectedEOFError("Unterminated clause at end of input")
    if ctx.state is None:
        raise UnexpectedEOFError("Missing DIMACS header")
    if not ctx.clauses:
        raise UnexpectedEOFError("No clauses")

    state = ctx.state
    _check_declared_counts(state, ctx.clauses)

    return DimacsDocument(
        clauses=ctx.clauses,
        num_vars=state.expected_vars,
        num_clauses=state.expected_clauses,
        header_line=state.header_line,
        comments=ctx.comments,
        vars_seen={v for v, seen in enumerate(state.vars_seen) if seen},
    )


def parse_dimacs(source: DimacsSource) -> list[Clause]:
    """Parse DIMACS CNF content into its clause sequence."""
    return read_dimacs(source).clauses


def load_formula(source: DimacsSource) -> Conjunction:
    """Parse DIMACS CNF content and assemble it into a ``Conjunction``."""
    return read_dimacs(source).to_formula()


def load_cnf_file(file_path: str | os.PathLike) -> Conjunction:
    """
    Load a CNF formula from a DIMACS file.

    Args:
        file_path: Path to the CNF file

    Returns:
        The parsed formula

    Raises:
        DimacsIOError: If the file cannot be opened or read
    """
    try:
        f = open(file_path, "rb")
    except OSError as e:
        raise DimacsIOError(e) from e

    with f:
        return load_formula(f)


def formula_to_dimacs(
    formula: Conjunction | Iterable[Clause],
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> str:
    """
    Convert a formula to DIMACS format.

    Args:
        formula: A conjunction or any sequence of clauses
        num_variables: Number of variables (computed if not provided)
        comments: List of comment lines to include

    Returns:
        DIMACS format string representation
    """
    clauses = list(formula)

    if num_variables is None:
        num_variables = max(
            (v for clause in clauses for v in clause.variables()), default=0
        )

    lines = [f"c {comment}" for comment in comments or []]
    lines.append(f"p cnf {num_variables} {len(clauses)}")
    for clause in clauses:
        lines.append(" ".join(map(str, clause.to_tokens())) + " 0")

    return "\n".join(lines) + "\n"


def save_cnf_file(
    file_path: str | os.PathLike,
    formula: Conjunction | Iterable[Clause],
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> None:
    """Save a CNF formula to a DIMACS file."""
    dimacs_str = formula_to_dimacs(formula, num_variables, comments)

    with open(file_path, "w", encoding="ascii") as f:
        f.write(dimacs_str)
