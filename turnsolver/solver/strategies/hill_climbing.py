"""
Hill Climbing Solver - Local search from a seed produced by another solver.
"""

import logging
import math
from typing import List

from ..base import ConfigurationError, Solver
from ..contracts import Mutator
from ..countdown import Countdown
from ..factory import register_solver
from ..solution import DebugInfo, Solution, best_solution
from ..stat_value import StatValue

logger = logging.getLogger(__name__)


@register_solver
class HillClimbingSolver(Solver):
    """
    First-improvement hill climbing.

    Algorithm:
        1. Run base_solver on base_solver_time_fraction of the remaining
           time and take its best solution as the seed
        2. While time remains, ask the mutator for one mutation of the
           current best
        3. If the mutation's preview score is strictly higher, build the
           mutated solution and make it the current best; otherwise drop
           the mutation without building it

    The trace starts with the seed and is strictly increasing.

    Parameters:
        base_solver: Produces the starting solution
        mutator: Proposes neighbours of the current best
        base_solver_time_fraction: Share of the budget for the seed (0.1)
    """
    name = "hill_climbing"
    description = "Hill Climbing - Local search from a seed solution"
    collaborators = {"base_solver": Solver, "mutator": Mutator}

    def __init__(self, base_solver: Solver, mutator: Mutator,
                 base_solver_time_fraction: float = 0.1):
        """
        Initialize hill climbing solver.

        Args:
            base_solver: Seed solver
            mutator: Mutation source
            base_solver_time_fraction: Share of remaining time given to
                                       the seed solver, must be > 0

        Raises:
            ConfigurationError: If base_solver_time_fraction is not a
                                positive finite number
        """
        if not (0 < base_solver_time_fraction < math.inf):
            raise ConfigurationError(
                f"base_solver_time_fraction must be positive and finite, "
                f"got {base_solver_time_fraction}"
            )
        self.base_solver = base_solver
        self.mutator = mutator
        self.base_solver_time_fraction = base_solver_time_fraction
        self.simulations_count = StatValue.create_empty("Simulations")
        self.improvements_count = StatValue.create_empty("Improvements")
        self.time_to_find_best_ms = StatValue.create_empty("TimeOfBestMs")

    def display_name(self) -> str:
        return (f"HC_({self.mutator})_({self.base_solver.display_name()})_"
                f"{self.base_solver_time_fraction:.0%}")

    def stats(self) -> List[StatValue]:
        return [self.simulations_count, self.improvements_count, self.time_to_find_best_ms]

    def get_solutions(self, problem, countdown: Countdown) -> List[Solution]:
        """
        Climb from the base solver's best solution until time runs out.

        Args:
            problem: Current problem state
            countdown: Total budget (seed search included)

        Returns:
            Strictly improving trace starting with the seed, empty if the
            base solver found nothing
        """
        seed_countdown = countdown.scale(self.base_solver_time_fraction)
        seed = best_solution(self.base_solver.get_solutions(problem, seed_countdown))
        if seed is None:
            logger.warning(f"[HillClimbing] {self.base_solver.display_name()} produced no seed")
            return []

        solver_name = self.display_name()
        attempts = 0
        improvements = 0
        best = seed
        steps: List[Solution] = [seed]

        while not countdown.is_finished():
            mutation = self.mutator.mutate(problem, best)
            attempts += 1
            if not mutation.score > best.score:
                continue
            best = mutation.get_result()
            improvements += 1
            best.debug_info = DebugInfo.from_countdown(
                countdown, attempts, improvements, solver_name
            )
            steps.append(best)

        self.simulations_count.add(attempts)
        self.improvements_count.add(improvements)
        if best.debug_info is not None:
            self.time_to_find_best_ms.add(best.debug_info.elapsed_sec * 1000)

        logger.debug(
            f"[HillClimbing] {attempts} mutations, {improvements} improvements, "
            f"score {seed.score} -> {best.score}"
        )
        return steps
