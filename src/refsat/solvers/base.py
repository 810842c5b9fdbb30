"""
Base interface for all SAT solvers in refsat.
Defines the standardized solver interface that all solver implementations must follow.
"""

import copy
import logging
import threading
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from refsat.types import Conjunction, Model

from .config import get_config

# Set up logging
logger = logging.getLogger(__name__)


class SolverStatus(Enum):
    """Enum representing the status of a solver run."""

    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"
    TIMEOUT = "timeout"


class SolverResult:
    """
    Standardized result object returned by all solvers.

    A satisfiable result carries the witnessing ``Model``; every other
    status carries ``model=None``.
    """

    def __init__(
        self,
        status: SolverStatus,
        model: Model | None = None,
        runtime: float = 0.0,
        statistics: dict[str, Any] | None = None,
    ):
        self.status = status
        self.model = model
        self.runtime = runtime
        self.statistics = statistics or {}

    @classmethod
    def sat(cls, model: Model, **kwargs) -> "SolverResult":
        return cls(SolverStatus.SATISFIABLE, model=model, **kwargs)

    @classmethod
    def unsat(cls, **kwargs) -> "SolverResult":
        return cls(SolverStatus.UNSATISFIABLE, **kwargs)

    @property
    def is_sat(self) -> bool:
        """Returns True if the problem is satisfiable."""
        return self.status == SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        """Returns True if the problem is unsatisfiable."""
        return self.status == SolverStatus.UNSATISFIABLE

    @property
    def solution(self) -> list[int] | None:
        """The satisfying assignment as signed literals, or None."""
        if self.model is None:
            return None
        return self.model.to_literals()

    def __str__(self) -> str:
        """String representation of the result."""
        status_str = str(self.status.value).upper()
        if self.status == SolverStatus.SATISFIABLE:
            return f"SAT Result: {status_str} ({self.runtime:.4f}s)"
        elif self.status == SolverStatus.UNSATISFIABLE:
            return f"SAT Result: {status_str} (proved in {self.runtime:.4f}s)"
        else:
            return f"SAT Result: {status_str} (gave up after {self.runtime:.4f}s)"


class SolverBase(ABC):
    """
    Abstract base class for SAT solver implementations.
    All solver implementations must inherit from this class.
    """

    def __init__(self, **kwargs):
        """
        Initialize shared solver settings from the global configuration.

        Args:
            **kwargs: Overrides for solver attributes, e.g. ``default_timeout``
        """
        self.default_timeout: float | None = get_config().get("solver.timeout")
        for key, value in kwargs.items():
            setattr(self, key, value)

    @abstractmethod
    def solve(self, formula: Conjunction) -> SolverResult:
        """
        Decide the satisfiability of a formula.

        Args:
            formula: The conjunction to solve

        Returns:
            SolverResult with status SATISFIABLE (and a total model) or
            UNSATISFIABLE
        """

    @abstractmethod
    def get_statistics(self) -> dict[str, Any]:
        """
        Get solver statistics for the most recent run.

        Returns:
            Dictionary of statistics
        """

    @abstractmethod
    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver with the given parameters.

        Args:
            config: Dictionary of configuration parameters
        """

    def solve_with_timeout(
        self, formula: Conjunction, timeout: float | None = None
    ) -> SolverResult:
        """
        Solve in a worker thread, giving up after ``timeout`` seconds.

        The search runs on a shallow copy of this solver. The worker is not
        cancelled on timeout; it runs on as a daemon thread against the copy
        and its eventual result is discarded, so this instance stays usable.
        When the run finishes in time the copy's state, such as its
        statistics, is adopted.

        Args:
            formula: The conjunction to solve
            timeout: Timeout in seconds; falls back to ``default_timeout``,
                and waits indefinitely when both are None

        Returns:
            The solver's result, or a TIMEOUT result
        """
        if timeout is None:
            timeout = self.default_timeout
        if timeout is None:
            return self.solve(formula)

        runner = copy.copy(self)
        outcome: dict[str, Any] = {}

        def run():
            try:
                outcome["result"] = runner.solve(formula)
            except Exception as e:
                outcome["error"] = e

        start_time = time.time()
        worker = threading.Thread(target=run, name="refsat-solve", daemon=True)
        worker.start()
        worker.join(timeout)
        runtime = time.time() - start_time

        if worker.is_alive():
            logger.info(f"Solver gave up after {runtime:.2f}s")
            return SolverResult(SolverStatus.TIMEOUT, runtime=runtime)

        if "error" in outcome:
            raise outcome["error"]

        self.__dict__.update(runner.__dict__)
        return outcome["result"]
