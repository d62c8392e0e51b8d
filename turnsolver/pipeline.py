"""
Pipeline Module - Builds standard solver pipelines from settings.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from turnsolver.settings import DEFAULT_SETTINGS
from turnsolver.solver import (
    Estimator,
    MoveGenerator,
    Mutator,
    SolutionGenerator,
    Solver,
    create_solver,
)

logger = logging.getLogger(__name__)


def _merged(settings: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    result = DEFAULT_SETTINGS.copy()
    if settings:
        result.update(settings)
    return result


def make_rng(settings: Optional[Dict[str, Any]] = None) -> np.random.Generator:
    """
    Create the random source for a match.

    Args:
        settings: Settings dictionary; a non-null "seed" makes runs
                  reproducible

    Returns:
        numpy Generator seeded from settings (OS entropy if seed is None)
    """
    seed = _merged(settings)["seed"]
    return np.random.default_rng(seed)


def build_hill_climbing_pipeline(estimator: Estimator, move_generator: MoveGenerator,
                                 mutator: Mutator,
                                 settings: Optional[Dict[str, Any]] = None,
                                 rng: Optional[np.random.Generator] = None) -> Solver:
    """
    Greedy seed followed by hill climbing, with logging.

    Args:
        estimator: State estimator for the greedy seed
        move_generator: Single-move generator for the greedy seed
        mutator: Mutation source for hill climbing
        settings: Settings dictionary (defaults if None)
        rng: Random source for greedy tie ordering (from settings if None)

    Returns:
        Solver pipeline ready for TurnRunner
    """
    settings = _merged(settings)
    greedy = create_solver(
        "greedy",
        estimator=estimator,
        move_generator=move_generator,
        rng=rng if rng is not None else make_rng(settings),
    )
    solver = create_solver(
        "hill_climbing",
        base_solver=greedy,
        mutator=mutator,
        base_solver_time_fraction=float(settings["base_solver_time_fraction"]),
    )
    logger.debug(f"Built pipeline {solver.display_name()}")
    return _with_logging(solver, settings)


def build_greedy_monte_carlo_pipeline(estimator: Estimator, move_generator: MoveGenerator,
                                      generator: SolutionGenerator,
                                      greedy_fraction: Optional[float] = None,
                                      settings: Optional[Dict[str, Any]] = None,
                                      rng: Optional[np.random.Generator] = None) -> Solver:
    """
    Greedy answer first, then random sampling for the rest of the turn.

    Both stages must produce solutions of a comparable score scale,
    since the composite trace is filtered by score.

    Args:
        estimator: State estimator for the greedy stage
        move_generator: Single-move generator for the greedy stage
        generator: Random full-solution generator for Monte Carlo
        greedy_fraction: Share of the turn given to greedy
                         (settings "greedy_fraction" if None)
        settings: Settings dictionary (defaults if None)
        rng: Random source for greedy tie ordering (from settings if None)

    Returns:
        Solver pipeline ready for TurnRunner
    """
    settings = _merged(settings)
    if greedy_fraction is None:
        greedy_fraction = float(settings["greedy_fraction"])
    greedy = create_solver(
        "greedy",
        estimator=estimator,
        move_generator=move_generator,
        rng=rng if rng is not None else make_rng(settings),
    )
    monte_carlo = create_solver("monte_carlo", generator=generator)
    solver = create_solver(
        "composite",
        solvers=[(greedy, greedy_fraction), (monte_carlo, 1.0 - greedy_fraction)],
    )
    logger.debug(f"Built pipeline {solver.display_name()}")
    return _with_logging(solver, settings)


PIPELINES = {
    "hill_climbing": "Greedy seed refined by hill climbing (needs mutator)",
    "greedy_monte_carlo": "Greedy answer, then Monte Carlo sampling (needs generator)",
}


def build_pipeline(estimator: Estimator, move_generator: MoveGenerator,
                   mutator: Optional[Mutator] = None,
                   generator: Optional[SolutionGenerator] = None,
                   settings: Optional[Dict[str, Any]] = None,
                   rng: Optional[np.random.Generator] = None) -> Solver:
    """
    Build the pipeline named by settings["pipeline"].

    Args:
        estimator: State estimator for the greedy stage
        move_generator: Single-move generator for the greedy stage
        mutator: Mutation source, used by "hill_climbing"
        generator: Random full-solution generator, used by "greedy_monte_carlo"
        settings: Settings dictionary (defaults if None)
        rng: Random source for greedy tie ordering (from settings if None)

    Returns:
        Solver pipeline ready for TurnRunner

    Raises:
        ValueError: If the pipeline name is unknown
        ConfigurationError: If the named pipeline lacks a collaborator
    """
    settings = _merged(settings)
    name = settings["pipeline"]
    if name == "hill_climbing":
        return build_hill_climbing_pipeline(
            estimator, move_generator, mutator, settings=settings, rng=rng,
        )
    if name == "greedy_monte_carlo":
        return build_greedy_monte_carlo_pipeline(
            estimator, move_generator, generator, settings=settings, rng=rng,
        )
    available = ", ".join(PIPELINES)
    raise ValueError(f"Unknown pipeline: {name}. Available: {available}")


def _with_logging(solver: Solver, settings: Dict[str, Any]) -> Solver:
    count = int(settings["solutions_count_to_log"])
    if count <= 0:
        return solver
    return solver.with_logging(count)
