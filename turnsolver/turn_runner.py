"""
Turn Runner Module - Per-match driver for a solver pipeline.

Creates the per-turn countdown, runs the solver, picks the best
solution and keeps match statistics. Reading the game state and
printing the chosen command stay with the caller.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from turnsolver.settings import DEFAULT_SETTINGS
from turnsolver.solver import Countdown, Solution, Solver, StatValue

logger = logging.getLogger(__name__)


__all__ = [
    "TurnRunner",
    "merge_match_stats",
    "stat_key",
]


def stat_key(owner: str, stat: StatValue) -> str:
    """Aggregation key: "owner/name", or just the name for runner stats."""
    name = stat.name or ""
    return f"{owner}/{name}" if owner else name


def merge_match_stats(totals: Dict[str, StatValue],
                      stats: Mapping[str, StatValue]) -> Dict[str, StatValue]:
    """
    Fold per-match accumulators into keyed totals.

    Keys come from TurnRunner.match_stats(), so "MC/Simulations" and
    "HC_(...)/Simulations" stay apart while the same key from several
    matches is merged into one; totals never share objects with stats.

    Args:
        totals: Running totals, updated in place
        stats: Accumulators of one match by key

    Returns:
        totals, for chaining
    """
    for key, stat in stats.items():
        if key in totals:
            totals[key].merge(stat)
        else:
            totals[key] = stat.clone()
    return totals


class TurnRunner:
    """
    Runs one solver pipeline turn after turn.

    The first turn of a match usually allows more time (initialization
    turn), so it gets first_turn_time_ms; later turns get turn_time_ms.

    Example:
        runner = TurnRunner(solver, load_settings())
        while game_running:
            solution = runner.play_turn(read_state())
            send(solution.move if solution else default_move)
        logger.info(runner.summary())
    """

    def __init__(self, solver: Solver, settings: Optional[Dict[str, Any]] = None):
        """
        Args:
            solver: Pipeline used every turn
            settings: Settings dictionary (defaults if None)
        """
        self.solver = solver
        self.settings = DEFAULT_SETTINGS.copy()
        if settings:
            self.settings.update(settings)

        self.turn = 0
        self.turn_time_ms = StatValue.create_empty("TurnTimeMs")
        self.best_score = StatValue.create_empty("BestScore")
        self.trace_length = StatValue.create_empty("TraceLength")
        self.empty_turns = 0

    def next_countdown(self) -> Countdown:
        """Budget for the upcoming turn."""
        key = "first_turn_time_ms" if self.turn == 0 else "turn_time_ms"
        return Countdown.from_ms(float(self.settings[key]))

    def play_turn(self, problem: Any) -> Optional[Solution]:
        """
        Search the best solution for one turn.

        Args:
            problem: Current game state

        Returns:
            Best solution of the trace, or None if there was no candidate
        """
        countdown = self.next_countdown()
        solutions = list(self.solver.get_solutions(problem, countdown))
        elapsed_ms = countdown.elapsed() * 1000
        self.turn += 1

        self.turn_time_ms.add(elapsed_ms)
        self.trace_length.add(len(solutions))

        if not solutions:
            self.empty_turns += 1
            logger.warning(f"Turn {self.turn}: {self.solver.display_name()} found no solution")
            return None

        best = solutions[-1]
        self.best_score.add(best.score)
        logger.info(
            f"Turn {self.turn}: best={best.score} after {elapsed_ms:.1f} ms "
            f"({len(solutions)} improvements)"
        )
        if elapsed_ms > countdown.duration * 1000:
            logger.debug(f"Turn {self.turn}: overran budget by "
                         f"{elapsed_ms - countdown.duration * 1000:.1f} ms")
        return best

    def owned_stats(self) -> List[Tuple[str, StatValue]]:
        """Runner accumulators (no owner) followed by the solver's, with owners."""
        runner = [("", self.turn_time_ms), ("", self.best_score), ("", self.trace_length)]
        return runner + self.solver.stats_by_owner()

    def match_stats(self) -> Dict[str, StatValue]:
        """
        Accumulators of this match keyed for merge_match_stats().

        Returns:
            Live accumulators by stat_key(); a solver's stats are prefixed
            with its display name
        """
        return {stat_key(owner, stat): stat for owner, stat in self.owned_stats()}

    def summary(self) -> str:
        lines = [
            f"Turns: {self.turn} (empty: {self.empty_turns})",
            f"Solver: {self.solver.display_name()}",
        ]
        for owner, stat in self.owned_stats():
            lines.append(f"{owner} {stat}" if owner else str(stat))
        return "\n".join(lines)
