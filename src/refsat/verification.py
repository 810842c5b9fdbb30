"""
Brute-force truth-table checks for small formulas.

These helpers evaluate a formula on every one of its 2^n assignments at
once using numpy boolean arrays. They are independent of the solvers and
serve as an oracle to cross-check their answers.
"""

import logging

import numpy as np

from refsat.types import Conjunction

# Set up logging
logger = logging.getLogger(__name__)

MAX_BRUTE_FORCE_VARS = 20


def truth_table(num_vars: int) -> np.ndarray:
    """
    Build every assignment over ``num_vars`` variables.

    Args:
        num_vars: Number of variables, at most MAX_BRUTE_FORCE_VARS

    Returns:
        Boolean array of shape (2**num_vars, num_vars); column ``v - 1``
        holds the value of variable ``v``. Rows are ordered so that row 0
        is all-True and the last row is all-False, matching the
        true-before-false enumeration order.
    """
    if num_vars > MAX_BRUTE_FORCE_VARS:
        raise ValueError(
            f"Refusing to enumerate {num_vars} variables "
            f"(limit is {MAX_BRUTE_FORCE_VARS})"
        )

    rows = np.arange(2**num_vars, dtype=np.int64)[:, None]
    shifts = np.arange(num_vars - 1, -1, -1, dtype=np.int64)[None, :]
    return ((rows >> shifts) & 1) == 0


def satisfying_rows(formula: Conjunction) -> np.ndarray:
    """
    Evaluate the formula on its whole truth table.

    Returns:
        Boolean vector with one entry per row of ``truth_table``
    """
    table = truth_table(formula.num_vars)
    result = np.ones(table.shape[0], dtype=bool)

    for clause in formula:
        columns = np.array([lit.variable - 1 for lit in clause])
        polarities = np.array([lit.positive for lit in clause])
        result &= (table[:, columns] == polarities).any(axis=1)

    return result


def count_models(formula: Conjunction) -> int:
    """Return the number of satisfying total assignments."""
    return int(satisfying_rows(formula).sum())


def is_satisfiable(formula: Conjunction) -> bool:
    return bool(satisfying_rows(formula).any())


def first_model(formula: Conjunction) -> list[int] | None:
    """
    Return the first satisfying assignment in true-before-false order.

    Returns:
        Signed literals for every variable, or None if unsatisfiable
    """
    rows = satisfying_rows(formula)
    hits = np.flatnonzero(rows)
    if hits.size == 0:
        return None

    row = truth_table(formula.num_vars)[hits[0]]
    return [v + 1 if value else -(v + 1) for v, value in enumerate(row)]


def check_solution(formula: Conjunction, literals: list[int]) -> bool:
    """
    Check a signed-literal assignment against a formula.

    Args:
        formula: The conjunction
        literals: One signed literal per variable of the formula's domain

    Returns:
        True if every clause is satisfied
    """
    values = np.zeros(formula.num_vars, dtype=bool)
    assigned = np.zeros(formula.num_vars, dtype=bool)
    for lit in literals:
        index = abs(lit) - 1
        if not 0 <= index < formula.num_vars:
            logger.warning(f"Literal {lit} is outside the formula's domain")
            return False
        values[index] = lit > 0
        assigned[index] = True

    if not assigned.all():
        missing = int(np.flatnonzero(~assigned)[0]) + 1
        logger.warning(f"Assignment does not cover variable {missing}")
        return False

    return all(clause.evaluate(values.tolist()) for clause in formula)
