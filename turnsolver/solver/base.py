"""
Base Solver Module - Abstract base class for search strategies.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from .countdown import Countdown
from .stat_value import StatValue

Problem = TypeVar("Problem")
SolutionT = TypeVar("SolutionT")


class ConfigurationError(ValueError):
    """A solver pipeline was wired with invalid parameters."""


class Solver(ABC, Generic[Problem, SolutionT]):
    """
    Abstract base class for all search strategies.

    A solver spends a Countdown exploring candidates for one problem and
    returns an improving trace: every solution is at least as good as the
    one before it, so the last one is the best. The trace may be a lazy
    iterable; callers that need the best solution should use
    best_solution() or materialize it first.

    Subclasses must implement get_solutions() and define name and
    description class attributes (used by the solver registry).

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
        collaborators: Constructor argument -> contract class it must be
                       an instance of, checked by create_solver()
    """
    name: str = "base"
    description: str = "Base solver"
    collaborators: Dict[str, type] = {}

    @abstractmethod
    def get_solutions(self, problem: Problem, countdown: Countdown) -> Iterable[SolutionT]:
        """
        Search for solutions within the countdown.

        Args:
            problem: Current problem state (never modified)
            countdown: Time budget for this call

        Returns:
            Improving trace of solutions, empty if no candidate exists
        """
        pass

    def display_name(self) -> str:
        """Short name recorded in DebugInfo and logs."""
        return self.name

    def stats(self) -> List[StatValue]:
        """
        Cross-turn statistics accumulated by this solver.

        Returns:
            StatValue accumulators (live objects, not copies)
        """
        return []

    def stats_by_owner(self) -> List[Tuple[str, StatValue]]:
        """
        Statistics paired with the display name of the solver keeping them.

        Different strategies reuse accumulator names ("Simulations" counts
        random samples in Monte Carlo and mutation attempts in hill
        climbing), so aggregation keys on the owner as well as the name.
        """
        owner = self.display_name()
        return [(owner, stat) for stat in self.stats()]

    def debug_stats(self) -> str:
        """Statistics report, one accumulator per line."""
        return "\n".join(str(stat) for stat in self.stats())

    def with_logging(self, solutions_count_to_log: int,
                     logger: Optional[logging.Logger] = None) -> 'Solver[Problem, SolutionT]':
        """
        Wrap this solver so every call logs its best solutions.

        Args:
            solutions_count_to_log: How many trailing solutions to log
            logger: Target logger (defaults to the wrapper module's logger)

        Returns:
            LoggingSolver around this solver
        """
        from .strategies.logging_wrapper import LoggingSolver
        return LoggingSolver(self, solutions_count_to_log, logger=logger)

    def __str__(self) -> str:
        return self.display_name()
