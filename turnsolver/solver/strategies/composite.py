"""
Composite Solver - Runs several solvers in sequence, splitting the budget.
"""

import logging
import math
from typing import Iterator, List, Sequence, Tuple

from ..base import ConfigurationError, Solver
from ..countdown import Countdown
from ..factory import register_solver
from ..solution import Solution
from ..stat_value import StatValue

logger = logging.getLogger(__name__)


@register_solver
class CompositeSolver(Solver):
    """
    Pipeline of solvers sharing one countdown.

    Each child gets its share of the parent budget, in declared order.
    Because every sub-budget is cut from the time still *remaining*, the
    declared fractions are converted into per-step scale factors: the
    i-th factor is fraction_i divided by the sum of fractions not yet
    consumed. With fractions {0.2, 0.3, 0.5} the factors are
    {0.2, 0.375, 1.0}, which gives each child 20/30/50% of the total.

    Solutions of a child are forwarded only if they score at least as
    well as the best seen so far in this run, across all children, so the
    combined trace is non-decreasing.

    Attributes:
        solvers: Child solvers in run order
        time_fractions: Normalized share of the total budget per child
        scale_factors: Factor applied to the remaining countdown per child
    """
    name = "composite"
    description = "Composite - Chains solvers with split time budget"

    def __init__(self, solvers: Sequence[Tuple[Solver, float]]):
        """
        Initialize composite solver.

        Args:
            solvers: (solver, time_fraction) pairs; fractions need not sum to 1

        Raises:
            ConfigurationError: If list is empty, a fraction is negative
                                or not finite, or all fractions are zero
        """
        if not solvers:
            raise ConfigurationError("CompositeSolver needs at least one solver")
        for solver, fraction in solvers:
            if not math.isfinite(fraction) or fraction < 0:
                raise ConfigurationError(
                    f"Invalid time fraction {fraction} for {solver.display_name()}"
                )
        total = sum(fraction for _, fraction in solvers)
        if total <= 0:
            raise ConfigurationError("CompositeSolver time fractions sum to zero")

        self.solvers: List[Solver] = [solver for solver, _ in solvers]
        self.time_fractions: List[float] = [fraction / total for _, fraction in solvers]
        self.scale_factors: List[float] = []
        remaining = total
        for _, fraction in solvers:
            self.scale_factors.append(fraction / remaining if remaining > 0 else 0.0)
            remaining -= fraction

    def display_name(self) -> str:
        return "[" + " → ".join(s.display_name() for s in self.solvers) + "]"

    def stats(self) -> List[StatValue]:
        return [stat for solver in self.solvers for stat in solver.stats()]

    def stats_by_owner(self) -> List[Tuple[str, StatValue]]:
        return [pair for solver in self.solvers for pair in solver.stats_by_owner()]

    def debug_stats(self) -> str:
        return "\n\n".join(
            f"{solver.display_name()} {fraction:g}:\n{solver.debug_stats()}"
            for solver, fraction in zip(self.solvers, self.time_fractions)
        )

    def get_solutions(self, problem, countdown: Countdown) -> Iterator[Solution]:
        """
        Run children in order and yield the combined improving trace.

        Args:
            problem: Current problem state
            countdown: Total budget shared by all children

        Yields:
            Solutions scoring >= every solution yielded before them
        """
        best_score = -math.inf
        for solver, factor in zip(self.solvers, self.scale_factors):
            sub_countdown = countdown.scale(factor)
            forwarded = 0
            for solution in solver.get_solutions(problem, sub_countdown):
                if solution.score >= best_score:
                    best_score = solution.score
                    forwarded += 1
                    yield solution
            logger.debug(
                f"[Composite] {solver.display_name()} forwarded {forwarded} solutions "
                f"in {sub_countdown.elapsed() * 1000:.1f} ms"
            )
