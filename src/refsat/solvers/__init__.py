"""
SAT Solver package with unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .config import SolverConfig, get_config, load_config
from .registry import SolverRegistry, register_solver

# Auto-discover and register all available solvers
SolverRegistry.auto_discover()

from .naive import NaiveSolver  # noqa: E402

__all__ = [
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "get_config",
    "load_config",
    "SolverConfig",
    "NaiveSolver",
]
