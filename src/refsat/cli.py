#!/usr/bin/env python
"""
Command-line interface for solving DIMACS CNF files.

Output follows the SAT competition convention: an ``s`` status line,
a ``v`` line with the model for satisfiable instances, and exit code 10
(SAT), 20 (UNSAT) or 0 (timeout). Invalid input or configuration exits with 1.
"""
import argparse
import logging
import sys

from omegaconf.errors import OmegaConfBaseException

from refsat.dimacs import load_cnf_file, load_formula
from refsat.exceptions import DimacsError, FormulaError
from refsat.solvers import SolverRegistry, SolverResult, SolverStatus
from refsat.solvers.config import load_config

logger = logging.getLogger(__name__)

EXIT_SAT = 10
EXIT_UNSAT = 20
EXIT_UNKNOWN = 0
EXIT_ERROR = 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="refsat", description="Decide satisfiability of a DIMACS CNF formula"
    )

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="DIMACS CNF file, or '-' to read standard input (default: -)",
    )

    parser.add_argument(
        "--solver",
        default=None,
        help="Solver to use (default: solver.name from the configuration)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds (default: solver.timeout)",
    )

    parser.add_argument("--config", default=None, help="YAML or JSON config file")

    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a configuration value, e.g. solver.timeout=5",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: logging.level from the configuration)",
    )

    parser.add_argument(
        "--list-solvers", action="store_true", help="List registered solvers and exit"
    )

    return parser.parse_args(argv)


def format_result(result: SolverResult) -> str:
    """Render a result as competition-style ``s``/``v`` lines."""
    if result.is_sat:
        literals = " ".join(map(str, result.solution))
        return f"s SATISFIABLE\nv {literals} 0"
    if result.is_unsat:
        return "s UNSATISFIABLE"
    return "s UNKNOWN"


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``refsat`` command."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        if args.overrides:
            config.update_from_dotlist(args.overrides)
    except (FileNotFoundError, OmegaConfBaseException) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_ERROR

    log_level = str(args.log_level or config.get("logging.level", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        logger.error(f"Unknown logging level: {log_level}")
        return EXIT_ERROR

    logging.basicConfig(level=log_level, format=config.get("logging.format"))

    if args.list_solvers:
        for name in SolverRegistry.list_solvers():
            print(name)
        return 0

    timeout = args.timeout if args.timeout is not None else config.get("solver.timeout")
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            logger.error(f"Invalid solver.timeout: {timeout!r}")
            return EXIT_ERROR

    try:
        SolverRegistry.set_default(config.get("solver.name"))
        solver = SolverRegistry.create(args.solver)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_ERROR

    try:
        if args.input == "-":
            formula = load_formula(sys.stdin.buffer)
        else:
            formula = load_cnf_file(args.input)
    except (DimacsError, FormulaError) as e:
        logger.error(f"Failed to read {args.input}: {e}")
        return EXIT_ERROR

    solver_name = args.solver or config.get("solver.name")
    logger.info(
        f"Solving {args.input} ({formula.num_vars} variables, "
        f"{len(formula)} clauses) with {solver_name}"
    )
    result = solver.solve_with_timeout(formula, timeout)
    logger.info(str(result))

    print(format_result(result))

    if result.status == SolverStatus.SATISFIABLE:
        return EXIT_SAT
    if result.status == SolverStatus.UNSATISFIABLE:
        return EXIT_UNSAT
    return EXIT_UNKNOWN


if __name__ == "__main__":
    sys.exit(main())
