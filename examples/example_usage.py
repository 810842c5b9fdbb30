#!/usr/bin/env python
"""
Example usage of the refsat solver architecture.
This demonstrates how to use the solver interface, registry, configuration
system and the brute-force oracle together.
"""

import argparse
import logging
import random
import sys

from refsat import Conjunction, formula_to_dimacs
from refsat.solvers import SolverRegistry, SolverStatus, get_config, load_config
from refsat.verification import MAX_BRUTE_FORCE_VARS, check_solution, count_models

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def generate_random_problem(
    num_vars: int, num_clauses: int, clause_size: int = 3
) -> Conjunction:
    """
    Generate a random k-SAT instance that mentions variable 1.

    Args:
        num_vars: Number of variables
        num_clauses: Number of clauses
        clause_size: Number of literals per clause

    Returns:
        The generated formula
    """
    clauses = []
    for _ in range(num_clauses):
        variables = random.sample(range(1, num_vars + 1), min(clause_size, num_vars))
        clauses.append([var * random.choice([-1, 1]) for var in variables])
    clauses.append([1, -1])
    return Conjunction.from_tokens(clauses)


def main():
    parser = argparse.ArgumentParser(description="refsat example")
    parser.add_argument("--solver", type=str, default=None, help="Solver to use")
    parser.add_argument("--vars", type=int, default=12, help="Number of variables")
    parser.add_argument("--clauses", type=int, default=50, help="Number of clauses")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--timeout", type=float, default=None, help="Timeout in seconds")
    parser.add_argument("--config", type=str, default=None, help="Configuration file")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    config = load_config(args.config) if args.config else get_config()
    if args.timeout is not None:
        config["solver.timeout"] = args.timeout
    if args.solver:
        config["solver.name"] = args.solver

    formula = generate_random_problem(args.vars, args.clauses)
    logger.info(f"Generated {formula}")
    print(formula_to_dimacs(formula, comments=["random 3-SAT"]))

    solver = SolverRegistry.create(config.get("solver.name"))
    result = solver.solve_with_timeout(formula)
    print(result)

    if result.is_sat:
        print(f"Solution: {result.solution}")
        print(f"Verified: {check_solution(formula, result.solution)}")
    elif result.status == SolverStatus.UNSATISFIABLE:
        print("Problem is UNSATISFIABLE")

    if formula.num_vars <= MAX_BRUTE_FORCE_VARS:
        print(f"Models according to the truth table: {count_models(formula)}")

    print("\nSolver Statistics:")
    for key, value in solver.get_statistics().items():
        print(f"  {key}: {value}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
