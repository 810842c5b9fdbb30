"""
Formula and assignment types.

A formula in conjunctive normal form is a ``Conjunction`` of ``Clause``
objects, each of which is a disjunction of ``Literal`` objects. A ``Model``
holds one optional truth value per variable of a given conjunction and is
what solvers mutate while searching.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from refsat.exceptions import (
    FormulaError,
    IncompleteAssignmentError,
    InvalidClauseError,
)


@dataclass(frozen=True)
class Literal:
    """
    A signed reference to a 1-based variable index.

    Attributes:
        variable: Variable index, always >= 1
        positive: True if the literal asserts the variable true
    """

    variable: int
    positive: bool = True

    def __post_init__(self):
        if self.variable < 1:
            raise ValueError(f"Variable index must be >= 1, got {self.variable}")

    @classmethod
    def positive_of(cls, variable: int) -> "Literal":
        return cls(variable, True)

    @classmethod
    def negative_of(cls, variable: int) -> "Literal":
        return cls(variable, False)

    @classmethod
    def from_token(cls, token: int) -> "Literal":
        """
        Build a literal from a non-zero DIMACS integer.

        Zero is the clause terminator and must be handled by the caller.
        """
        if token == 0:
            raise ValueError("0 is a clause terminator, not a literal")
        if token > 0:
            return cls(token, True)
        return cls(-token, False)

    def polarity(self) -> bool:
        return self.positive

    def to_token(self) -> int:
        return self.variable if self.positive else -self.variable

    def __neg__(self) -> "Literal":
        return Literal(self.variable, not self.positive)

    def __repr__(self) -> str:
        kind = "Positive" if self.positive else "Negative"
        return f"{kind}({self.variable})"


class Clause:
    """
    An ordered, non-empty disjunction of literals.

    Clauses are never mutated after creation.
    """

    __slots__ = ("_literals",)

    def __init__(self, literals: Iterable[Literal]):
        literals = tuple(literals)
        if not literals:
            raise InvalidClauseError("Clause must contain at least one literal")
        self._literals = literals

    @classmethod
    def from_literals(cls, literals: Iterable[Literal]) -> "Clause":
        return cls(literals)

    @classmethod
    def from_tokens(cls, tokens: Iterable[int]) -> "Clause":
        """Build a clause from signed DIMACS integers, e.g. ``[1, -3]``."""
        return cls(Literal.from_token(t) for t in tokens)

    @property
    def literals(self) -> tuple[Literal, ...]:
        return self._literals

    def variables(self) -> Iterator[int]:
        return (lit.variable for lit in self._literals)

    def to_tokens(self) -> list[int]:
        return [lit.to_token() for lit in self._literals]

    def evaluate(self, assignment: Sequence[bool]) -> bool:
        """
        Evaluate the clause under a total assignment.

        Args:
            assignment: Truth values indexed by ``variable - 1``; must cover
                every variable the clause references

        Returns:
            True if some literal's polarity matches its variable's value
        """
        return any(
            assignment[lit.variable - 1] == lit.positive for lit in self._literals
        )

    def __len__(self) -> int:
        return len(self._literals)

    def __iter__(self) -> Iterator[Literal]:
        return iter(self._literals)

    def __getitem__(self, index: int) -> Literal:
        return self._literals[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Clause):
            return NotImplemented
        return self._literals == other._literals

    def __hash__(self) -> int:
        return hash(self._literals)

    def __repr__(self) -> str:
        return f"Clause({list(self._literals)!r})"


class Conjunction:
    """
    A CNF formula: an ordered sequence of clauses over a contiguous
    variable domain starting at 1.

    Attributes:
        clauses: The clauses, in input order
        atom_domain: ``range(1, max_variable + 1)``
    """

    def __init__(self, clauses: Iterable[Clause]):
        """
        Initialize the conjunction.

        Args:
            clauses: The formula's clauses

        Raises:
            FormulaError: If there are no clauses or the smallest referenced
                variable is not 1
        """
        self.clauses: tuple[Clause, ...] = tuple(clauses)
        if not self.clauses:
            raise FormulaError("Formula must contain at least one clause")

        variables = [v for clause in self.clauses for v in clause.variables()]
        min_var, max_var = min(variables), max(variables)
        if min_var != 1:
            raise FormulaError(
                f"Variables must be numbered from 1, smallest variable is {min_var}"
            )
        self.atom_domain = range(min_var, max_var + 1)

    @classmethod
    def from_clauses(cls, clauses: Iterable[Clause]) -> "Conjunction":
        return cls(clauses)

    @classmethod
    def from_tokens(cls, clauses: Iterable[Iterable[int]]) -> "Conjunction":
        """Build a conjunction from nested signed integers, e.g. ``[[1, -2], [2]]``."""
        return cls(Clause.from_tokens(c) for c in clauses)

    def domain(self) -> range:
        return self.atom_domain

    @property
    def num_vars(self) -> int:
        return len(self.atom_domain)

    def to_tokens(self) -> list[list[int]]:
        return [clause.to_tokens() for clause in self.clauses]

    def __len__(self) -> int:
        return len(self.clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Conjunction):
            return NotImplemented
        return self.clauses == other.clauses

    def __repr__(self) -> str:
        return (
            f"Conjunction(num_vars={self.num_vars}, num_clauses={len(self.clauses)})"
        )


class Model:
    """
    A partial or total truth assignment scoped to one conjunction.

    Slot ``variable - 1`` holds True, False or None (unassigned).
    """

    def __init__(self, formula: Conjunction):
        self.formula = formula
        self.assignments: list[bool | None] = [None] * len(formula.domain())

    def _slot(self, variable: int) -> int:
        if not 1 <= variable <= len(self.assignments):
            raise ValueError(
                f"Variable {variable} is outside 1..{len(self.assignments)}"
            )
        return variable - 1

    def assign(self, variable: int, value: bool) -> None:
        self.assignments[self._slot(variable)] = value

    def unassign(self, variable: int) -> None:
        self.assignments[self._slot(variable)] = None

    def value(self, variable: int) -> bool | None:
        return self.assignments[self._slot(variable)]

    def is_total(self) -> bool:
        return all(v is not None for v in self.assignments)

    def evaluate(self) -> bool:
        """
        Evaluate the formula under this model.

        Returns:
            True if every clause is satisfied

        Raises:
            IncompleteAssignmentError: If any variable is unassigned
        """
        for index, value in enumerate(self.assignments):
            if value is None:
                raise IncompleteAssignmentError(variable=index + 1)
        return all(clause.evaluate(self.assignments) for clause in self.formula)

    def to_literals(self) -> list[int]:
        """
        Return the assigned variables as signed integers.

        Unassigned variables are omitted.
        """
        return [
            index + 1 if value else -(index + 1)
            for index, value in enumerate(self.assignments)
            if value is not None
        ]

    def copy(self) -> "Model":
        snapshot = Model.__new__(Model)
        snapshot.formula = self.formula
        snapshot.assignments = list(self.assignments)
        return snapshot

    def __repr__(self) -> str:
        return f"Model({self.to_literals()})"
