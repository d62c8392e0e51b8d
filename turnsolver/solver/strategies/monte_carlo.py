"""
Monte Carlo Solver - Random sampling of complete solutions until the deadline.
"""

import logging
import math
from typing import List

from ..base import Solver
from ..contracts import SolutionGenerator
from ..countdown import Countdown
from ..factory import register_solver
from ..solution import DebugInfo, Solution
from ..stat_value import StatValue

logger = logging.getLogger(__name__)


@register_solver
class MonteCarloSolver(Solver):
    """
    Keeps generating random solutions while time remains.

    Only strictly better solutions enter the trace, so scores are
    strictly increasing. The loop is bounded by wall-clock time only;
    the iteration running when the deadline passes is allowed to finish.

    Attributes:
        simulations_count: Simulations per call
        improvements_count: Improvements per call
        time_to_find_best_ms: Time of the last improvement per call
    """
    name = "monte_carlo"
    description = "Monte Carlo - Random full solutions until the deadline"
    collaborators = {"generator": SolutionGenerator}

    def __init__(self, generator: SolutionGenerator):
        """
        Initialize Monte Carlo solver.

        Args:
            generator: Produces one complete random solution per call
        """
        self.generator = generator
        self.simulations_count = StatValue.create_empty("Simulations")
        self.improvements_count = StatValue.create_empty("Improvements")
        self.time_to_find_best_ms = StatValue.create_empty("TimeOfBestMs")

    def display_name(self) -> str:
        return "MC"

    def stats(self) -> List[StatValue]:
        return [self.simulations_count, self.improvements_count, self.time_to_find_best_ms]

    def get_solutions(self, problem, countdown: Countdown) -> List[Solution]:
        """
        Sample random solutions until the countdown expires.

        Args:
            problem: Current problem state
            countdown: Time budget

        Returns:
            Strictly improving trace (empty if countdown already expired)
        """
        solver_name = self.display_name()
        sim_count = 0
        improvements = 0
        best_score = -math.inf
        steps: List[Solution] = []

        while not countdown.is_finished():
            solution = self.generator.generate(problem)
            sim_count += 1
            if solution.score > best_score:
                improvements += 1
                best_score = solution.score
                solution.debug_info = DebugInfo.from_countdown(
                    countdown, sim_count, improvements, solver_name
                )
                steps.append(solution)

        self.simulations_count.add(sim_count)
        self.improvements_count.add(improvements)
        if steps:
            self.time_to_find_best_ms.add(steps[-1].debug_info.elapsed_sec * 1000)

        logger.debug(
            f"[MonteCarlo] {sim_count} simulations, {improvements} improvements, "
            f"best={best_score}"
        )
        return steps
