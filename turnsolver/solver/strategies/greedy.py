"""
Greedy Solver - Scores every single move with an estimator.
"""

import logging
from typing import Generic, List, Optional, TypeVar

import numpy as np

from ..base import Solver
from ..contracts import Estimator, MoveGenerator
from ..countdown import Countdown
from ..factory import register_solver
from ..solution import DebugInfo, SingleMoveSolution

logger = logging.getLogger(__name__)

State = TypeVar("State")
MoveT = TypeVar("MoveT")


@register_solver
class GreedySolver(Solver[State, SingleMoveSolution[MoveT]], Generic[State, MoveT]):
    """
    One-ply greedy solver.

    Applies every candidate move to the problem, scores the resulting
    state with the estimator (higher is better) and returns all
    candidates sorted ascending by score, so the last one is the best.

    Evaluation is a single eager pass bounded by the move generator; the
    countdown is only used to timestamp debug info. When an rng is given,
    candidates are shuffled with it before the stable sort, so ties come
    out in the same order for the same seed.
    """
    name = "greedy"
    description = "Greedy (instant) - Best single move by estimator"
    collaborators = {"estimator": Estimator, "move_generator": MoveGenerator}

    def __init__(self, estimator: Estimator[State],
                 move_generator: MoveGenerator[State, MoveT],
                 rng: Optional[np.random.Generator] = None,
                 solutions_count_to_log: int = 0):
        """
        Initialize greedy solver.

        Args:
            estimator: Scores states after a move
            move_generator: Lists and applies candidate moves
            rng: Seeded random source for tie ordering (None keeps
                 generator order among ties)
            solutions_count_to_log: Top candidates to log at DEBUG (0 = off)
        """
        self.estimator = estimator
        self.move_generator = move_generator
        self.rng = rng
        self.solutions_count_to_log = solutions_count_to_log

    def display_name(self) -> str:
        return f"G-{self.estimator}"

    def get_solutions(self, problem: State,
                      countdown: Countdown) -> List[SingleMoveSolution[MoveT]]:
        """
        Score all single moves of the problem.

        Args:
            problem: Current state
            countdown: Used for debug timestamps only

        Returns:
            All candidates sorted ascending by score (empty if no moves)
        """
        solver_name = self.display_name()
        solutions = []
        for move in self.move_generator.get_moves(problem):
            clone = self.move_generator.apply_move(problem, move)
            score = self.estimator.score(clone)
            solutions.append(SingleMoveSolution(
                move, score, DebugInfo.from_countdown(countdown, 0, 0, solver_name)
            ))

        if self.rng is not None and len(solutions) > 1:
            order = self.rng.permutation(len(solutions))
            solutions = [solutions[i] for i in order]

        # list.sort is stable, ties keep the (shuffled) order
        solutions.sort(key=lambda s: s.score)

        if self.solutions_count_to_log > 0 and solutions:
            top = solutions[-self.solutions_count_to_log:][::-1]
            logger.debug(
                f"[Greedy] {len(solutions)} candidates, top {len(top)}:\n"
                + "\n".join(str(s) for s in top)
            )

        return solutions
