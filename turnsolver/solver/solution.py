"""
Solution Module - Units produced by solvers and their debug metadata.
"""

from dataclasses import dataclass
from typing import Generic, Iterable, Optional, TypeVar

from .countdown import Countdown

MoveT = TypeVar("MoveT")


@dataclass(frozen=True)
class DebugInfo:
    """
    Where and when a solution entered an improving trace.

    Looking at these values across turns tells how a strategy converges:
    a best solution found very early means the budget is mostly unused,
    one found at the very end means the strategy has not converged.

    Attributes:
        elapsed_sec: Time since the solver's countdown started
        sequence_index: Number of candidates examined so far
        improvement_index: Number of improvements so far
        solver_name: Short name of the solver that produced it
    """
    elapsed_sec: float
    sequence_index: int = 0
    improvement_index: int = 0
    solver_name: str = ""

    @classmethod
    def from_countdown(cls, countdown: Countdown, sequence_index: int = 0,
                       improvement_index: int = 0, solver_name: str = "") -> 'DebugInfo':
        return cls(
            elapsed_sec=countdown.elapsed(),
            sequence_index=sequence_index,
            improvement_index=improvement_index,
            solver_name=solver_name
        )

    def __str__(self) -> str:
        text = f"{self.elapsed_sec:.3f}s"
        if self.improvement_index > 0 or self.sequence_index > 0:
            text += f" improvement {self.improvement_index} of {self.sequence_index}"
        if self.solver_name:
            text += f" by {self.solver_name}"
        return text


class Solution:
    """
    Base class for anything a solver can return.

    Solutions are ordered by score only. debug_info is filled in by the
    solver at the moment the solution joins its improving trace and is
    never used for comparison.

    Attributes:
        score: Quality, higher is better
        debug_info: Diagnostic metadata, None until accepted
    """

    def __init__(self, score: float, debug_info: Optional[DebugInfo] = None):
        self.score = score
        self.debug_info = debug_info

    def __lt__(self, other: "Solution") -> bool:
        return self.score < other.score

    def __str__(self) -> str:
        return f"{self.score} {self.debug_info or ''}".rstrip()


class SingleMoveSolution(Solution, Generic[MoveT]):
    """
    Solution consisting of one move to play this turn.

    Attributes:
        move: Move payload (opaque to solvers)
    """

    def __init__(self, move: MoveT, score: float, debug_info: Optional[DebugInfo] = None):
        super().__init__(score, debug_info)
        self.move = move

    def __str__(self) -> str:
        return f"{self.score} {self.move} {self.debug_info or ''}".rstrip()

    def __repr__(self) -> str:
        return f"SingleMoveSolution(move={self.move!r}, score={self.score!r})"


def best_solution(solutions: Iterable[Solution]) -> Optional[Solution]:
    """
    Pick the best solution of an improving trace.

    The trace is consumed, so lazy solvers run to completion here.

    Args:
        solutions: Improving trace returned by Solver.get_solutions()

    Returns:
        Last solution of the trace, or None if it was empty
    """
    best = None
    for solution in solutions:
        best = solution
    return best
