"""
Logging Solver - Decorator that reports a solver's best solutions.
"""

import logging
from typing import List, Optional, Tuple

from ..base import Solver
from ..countdown import Countdown
from ..solution import Solution
from ..stat_value import StatValue

logger = logging.getLogger(__name__)


class LoggingSolver(Solver):
    """
    Wraps a solver and logs the tail of every trace it returns.

    The wrapped trace is materialized (lazy solvers run to completion)
    and returned unchanged. Not registered in the solver registry; use
    Solver.with_logging() instead.
    """
    name = "logging"
    description = "Logs best solutions of a wrapped solver"

    def __init__(self, solver: Solver, solutions_count_to_log: int,
                 logger: Optional[logging.Logger] = None):
        """
        Args:
            solver: Solver to observe
            solutions_count_to_log: Trailing solutions to log per call
            logger: Diagnostic sink (defaults to this module's logger)
        """
        self.solver = solver
        self.solutions_count_to_log = solutions_count_to_log
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def display_name(self) -> str:
        return self.solver.display_name()

    def stats(self) -> List[StatValue]:
        return self.solver.stats()

    def stats_by_owner(self) -> List[Tuple[str, StatValue]]:
        return self.solver.stats_by_owner()

    def debug_stats(self) -> str:
        return self.solver.debug_stats()

    def get_solutions(self, problem, countdown: Countdown) -> List[Solution]:
        solutions = list(self.solver.get_solutions(problem, countdown))
        best = solutions[::-1][:max(0, self.solutions_count_to_log)]
        self.logger.info("## Best found:\n" + "\n".join(str(s) for s in best))
        self.logger.info("## Solver debug info:\n" + self.solver.debug_stats())
        self.logger.info(f"Time spent: {countdown.elapsed() * 1000:.1f} ms")
        return solutions
