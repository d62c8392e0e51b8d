"""
Test script for settings, pipelines and the turn runner

Covers:
1. Settings load/save round trip and fallback to defaults
2. Pipeline builders driven by settings, log level resolution
3. TurnRunner per-turn budgets and match statistics
4. Cross-match StatValue aggregation keyed by owning solver

Usage:
    python tests/test_turn_runner.py
    pytest tests/test_turn_runner.py
"""

import json
import logging
import sys
import tempfile
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from turnsolver.pipeline import (
    build_greedy_monte_carlo_pipeline,
    build_hill_climbing_pipeline,
    build_pipeline,
    make_rng,
)
from turnsolver.settings import (
    DEFAULT_SETTINGS,
    configure_logging,
    load_settings,
    resolve_log_level,
    save_settings,
)
from turnsolver.solver import (
    CompositeSolver,
    ConfigurationError,
    Estimator,
    HillClimbingSolver,
    LazyMutation,
    LoggingSolver,
    MonteCarloSolver,
    MoveGenerator,
    Mutator,
    SingleMoveSolution,
    Solution,
    SolutionGenerator,
    Solver,
    StatValue,
)
from turnsolver.turn_runner import TurnRunner, merge_match_stats, stat_key


# ---------------------------------------------------------------------------
# Toy game: pick a number on a line, closer to the goal is better.
# State is (position, goal); a move shifts the position.
# ---------------------------------------------------------------------------

class DistanceEstimator(Estimator):
    def score(self, state) -> float:
        position, goal = state
        return -abs(goal - position)


class ShiftMoves(MoveGenerator):
    def get_moves(self, state):
        return [-2, -1, 1, 2]

    def apply_move(self, state, move):
        position, goal = state
        return position + move, goal


class ShiftMutator(Mutator):
    """Tries one neighbouring move of the current move."""

    def __init__(self, seed: int = 0):
        self.rng = np.random.default_rng(seed)

    def mutate(self, problem, parent_solution: SingleMoveSolution):
        position, goal = problem
        move = parent_solution.move + int(self.rng.choice([-1, 1]))
        score = -abs(goal - (position + move))
        return LazyMutation(score, lambda: SingleMoveSolution(move, score))


class RandomShift(SolutionGenerator):
    def __init__(self, seed: int = 0):
        self.rng = np.random.default_rng(seed)

    def generate(self, problem) -> Solution:
        position, goal = problem
        move = int(self.rng.integers(-10, 11))
        return SingleMoveSolution(move, -abs(goal - (position + move)))


class NoMoves(Solver):
    name = "none"

    def get_solutions(self, problem, countdown):
        return []


FAST_SETTINGS = {
    "first_turn_time_ms": 30,
    "turn_time_ms": 10,
    "solutions_count_to_log": 2,
    "seed": 11,
}


def test_settings_round_trip():
    """Saved settings load back merged over defaults."""
    print("\n" + "="*60)
    print("TEST: Settings round trip")
    print("="*60)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"

        # Missing file gives defaults
        assert load_settings(path) == DEFAULT_SETTINGS

        save_settings({"turn_time_ms": 95, "seed": 3}, path)
        settings = load_settings(path)
        print(f"  Loaded: {settings}")
        assert settings["turn_time_ms"] == 95
        assert settings["seed"] == 3
        assert settings["first_turn_time_ms"] == DEFAULT_SETTINGS["first_turn_time_ms"]

        # Invalid content falls back to defaults
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

    # Unknown level names fall back to INFO instead of failing
    configure_logging({"log_level": "chatty"})

    print("  [PASS] Settings tests")


def test_resolve_log_level():
    """Only real level names or numbers become levels; the rest is INFO."""
    print("\n" + "="*60)
    print("TEST: resolve_log_level")
    print("="*60)

    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level("WARNING") == logging.WARNING
    assert resolve_log_level(logging.ERROR) == logging.ERROR
    # Attributes of the logging module that are not levels
    for name in ("Logger", "BASIC_FORMAT", "basicConfig", "chatty", None, True):
        level = resolve_log_level(name)
        print(f"  {name!r} -> {level}")
        assert level == logging.INFO

    print("  [PASS] resolve_log_level tests")


def test_make_rng_seeded():
    """A seed in settings makes the random source reproducible."""
    print("\n" + "="*60)
    print("TEST: make_rng")
    print("="*60)

    first = make_rng({"seed": 5}).integers(0, 1000, size=5)
    second = make_rng({"seed": 5}).integers(0, 1000, size=5)
    assert list(first) == list(second)

    print("  [PASS] make_rng tests")


def test_hill_climbing_pipeline():
    """Settings-driven greedy -> hill climbing pipeline reaches the goal."""
    print("\n" + "="*60)
    print("TEST: Hill climbing pipeline")
    print("="*60)

    solver = build_hill_climbing_pipeline(
        DistanceEstimator(), ShiftMoves(), ShiftMutator(seed=1),
        settings={**FAST_SETTINGS, "base_solver_time_fraction": 0.2},
    )
    assert isinstance(solver, LoggingSolver)
    assert isinstance(solver.solver, HillClimbingSolver)
    assert solver.solver.base_solver_time_fraction == 0.2
    print(f"  Pipeline: {solver.display_name()}")

    runner = TurnRunner(solver, FAST_SETTINGS)
    best = runner.play_turn((0, 7))
    print(f"  Best: {best}")
    assert best is not None
    assert best.move == 7
    assert best.score == 0

    print("  [PASS] Hill climbing pipeline tests")


def test_greedy_monte_carlo_pipeline():
    """Greedy answer refined by Monte Carlo sampling."""
    print("\n" + "="*60)
    print("TEST: Greedy + Monte Carlo pipeline")
    print("="*60)

    settings = {**FAST_SETTINGS, "solutions_count_to_log": 0}
    solver = build_greedy_monte_carlo_pipeline(
        DistanceEstimator(), ShiftMoves(), RandomShift(seed=2), settings=settings,
    )
    assert not isinstance(solver, LoggingSolver)
    print(f"  Pipeline: {solver.display_name()}")

    runner = TurnRunner(solver, settings)
    best = runner.play_turn((0, -6))
    print(f"  Best: {best}")
    assert best.move == -6

    print("  [PASS] Greedy + Monte Carlo pipeline tests")


def test_build_pipeline():
    """settings["pipeline"] picks the pipeline; collaborators are checked."""
    print("\n" + "="*60)
    print("TEST: build_pipeline")
    print("="*60)

    settings = {**FAST_SETTINGS, "solutions_count_to_log": 0}

    # Default setting is the hill climbing pipeline
    solver = build_pipeline(DistanceEstimator(), ShiftMoves(), mutator=ShiftMutator(),
                            settings=settings)
    assert isinstance(solver, HillClimbingSolver)

    mc_settings = {**settings, "pipeline": "greedy_monte_carlo", "greedy_fraction": 0.25}
    solver = build_pipeline(DistanceEstimator(), ShiftMoves(), generator=RandomShift(),
                            settings=mc_settings)
    print(f"  Pipeline: {solver.display_name()}")
    assert isinstance(solver, CompositeSolver)
    assert isinstance(solver.solvers[1], MonteCarloSolver)
    assert solver.time_fractions == [0.25, 0.75]

    # The named pipeline's collaborator is missing
    for config, kwargs in ((settings, {"generator": RandomShift()}),
                           (mc_settings, {"mutator": ShiftMutator()})):
        try:
            build_pipeline(DistanceEstimator(), ShiftMoves(), settings=config, **kwargs)
            raise AssertionError(f"{sorted(kwargs)} should not satisfy the pipeline")
        except ConfigurationError as e:
            print(f"  Rejected: {e}")

    try:
        build_pipeline(DistanceEstimator(), ShiftMoves(), settings={"pipeline": "beam"})
        raise AssertionError("unknown pipeline should raise")
    except ValueError as e:
        print(f"  Rejected: {e}")
        assert "greedy_monte_carlo" in str(e)

    print("  [PASS] build_pipeline tests")


def test_turn_runner_budgets():
    """First turn gets the long budget, later turns the short one."""
    print("\n" + "="*60)
    print("TEST: TurnRunner budgets")
    print("="*60)

    runner = TurnRunner(NoMoves(), FAST_SETTINGS)
    assert abs(runner.next_countdown().duration - 0.030) < 1e-9

    assert runner.play_turn((0, 0)) is None
    assert runner.turn == 1
    assert runner.empty_turns == 1
    assert abs(runner.next_countdown().duration - 0.010) < 1e-9

    print("  [PASS] TurnRunner budget tests")


def test_turn_runner_stats():
    """Match statistics combine runner and solver accumulators."""
    print("\n" + "="*60)
    print("TEST: TurnRunner statistics")
    print("="*60)

    solver = build_hill_climbing_pipeline(
        DistanceEstimator(), ShiftMoves(), ShiftMutator(seed=4), settings=FAST_SETTINGS,
    )
    runner = TurnRunner(solver, FAST_SETTINGS)
    for goal in (3, -4, 9):
        runner.play_turn((0, goal))

    stats = runner.match_stats()
    print(runner.summary())
    owner = solver.display_name()
    assert owner.startswith("HC_")
    assert runner.turn == 3
    assert stats["TurnTimeMs"].count == 3
    assert stats["BestScore"].count == 3
    assert stats[f"{owner}/Simulations"].count == 3
    assert "Simulations" not in stats
    assert stats["TurnTimeMs"].min >= 10
    assert "Turns: 3 (empty: 0)" in runner.summary()
    assert f"{owner} Simulations:" in runner.summary()

    print("  [PASS] TurnRunner statistics tests")


def test_merge_match_stats():
    """Accumulators from several matches merge by key."""
    print("\n" + "="*60)
    print("TEST: merge_match_stats")
    print("="*60)

    match1 = {"MC/Simulations": StatValue("Simulations"),
              "MC/Improvements": StatValue("Improvements")}
    match2 = {"MC/Simulations": StatValue("Simulations")}
    match1["MC/Simulations"].add(100)
    match1["MC/Improvements"].add(4)
    match2["MC/Simulations"].add(300)

    totals = {}
    merge_match_stats(totals, match1)
    merge_match_stats(totals, match2)

    print(f"  {totals['MC/Simulations']}")
    assert totals["MC/Simulations"].count == 2
    assert totals["MC/Simulations"].mean == 200
    assert totals["MC/Improvements"].count == 1
    # Totals do not alias the per-match accumulators
    assert match1["MC/Simulations"].count == 1

    assert stat_key("", StatValue("TurnTimeMs")) == "TurnTimeMs"
    assert stat_key("MC", StatValue("Simulations")) == "MC/Simulations"

    print("  [PASS] merge_match_stats tests")


def test_merge_match_stats_by_owner():
    """Same-named accumulators of different solvers stay apart."""
    print("\n" + "="*60)
    print("TEST: merge_match_stats by owning solver")
    print("="*60)

    def new_match_solver(seed: int):
        climber = build_hill_climbing_pipeline(
            DistanceEstimator(), ShiftMoves(), ShiftMutator(seed=seed),
            settings={**FAST_SETTINGS, "solutions_count_to_log": 0},
        )
        monte_carlo = MonteCarloSolver(RandomShift(seed=seed))
        return climber, CompositeSolver([(climber, 0.5), (monte_carlo, 0.5)]).with_logging(1)

    climber, solver = new_match_solver(6)
    owners = [owner for owner, _ in solver.stats_by_owner()]
    assert owners == [climber.display_name()] * 3 + ["MC"] * 3

    totals = {}
    for seed, goal in ((6, 5), (7, -3)):
        climber, solver = new_match_solver(seed)
        runner = TurnRunner(solver, FAST_SETTINGS)
        runner.play_turn((0, goal))
        merge_match_stats(totals, runner.match_stats())

    for key in sorted(totals):
        print(f"  {key}: {totals[key].format()}")
    hc_key = f"{climber.display_name()}/Simulations"
    assert "Simulations" not in totals
    assert totals["MC/Simulations"].count == 2
    assert totals[hc_key].count == 2
    assert totals[f"{climber.display_name()}/Improvements"].count == 2
    assert totals["TurnTimeMs"].count == 2

    print("  [PASS] merge_match_stats by owner tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# TURN RUNNER TESTS")
    print("#"*60)

    tests = [
        ("Settings", test_settings_round_trip),
        ("resolve_log_level", test_resolve_log_level),
        ("make_rng", test_make_rng_seeded),
        ("Hill climbing pipeline", test_hill_climbing_pipeline),
        ("Greedy + MC pipeline", test_greedy_monte_carlo_pipeline),
        ("build_pipeline", test_build_pipeline),
        ("TurnRunner budgets", test_turn_runner_budgets),
        ("TurnRunner stats", test_turn_runner_stats),
        ("merge_match_stats", test_merge_match_stats),
        ("merge_match_stats by owner", test_merge_match_stats_by_owner),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {name}: {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
