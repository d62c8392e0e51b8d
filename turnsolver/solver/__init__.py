"""
Solver Package - Time-budgeted anytime search for turn-based games.

This package picks the next action of a bot under a hard per-turn
deadline. Game code plugs in through small contracts (estimator, move
generator, random solution generator, mutator); the strategies here
decide how the time budget is spent.

Public API:
    - Countdown: Wall-clock budget, subdivided with scale()
    - Solver: Abstract base for strategies
    - Solution / SingleMoveSolution / DebugInfo: Solver output
    - Estimator, MoveGenerator, SolutionGenerator, Mutator, Mutation:
      Collaborator contracts
    - GreedySolver, MonteCarloSolver, HillClimbingSolver,
      CompositeSolver, LoggingSolver: Strategies
    - StatValue: Cross-turn statistics accumulator
    - MaxHeap: Priority queue building block
    - create_solver(): Factory function, checks collaborator contracts

Usage:
    from turnsolver.solver import (
        Countdown, GreedySolver, HillClimbingSolver, best_solution
    )

    greedy = GreedySolver(estimator, move_generator)
    solver = HillClimbingSolver(greedy, mutator).with_logging(3)

    solution = best_solution(solver.get_solutions(state, Countdown.from_ms(50)))
    if solution is not None:
        play(solution.move)
"""

# Core data structures
from .countdown import Countdown
from .stat_value import StatValue
from .max_heap import MaxHeap
from .solution import DebugInfo, Solution, SingleMoveSolution, best_solution
from .contracts import (
    Estimator,
    NegatedEstimator,
    MoveGenerator,
    SolutionGenerator,
    Mutation,
    LazyMutation,
    Mutator,
)

# Solver framework
from .base import ConfigurationError, Solver
from .factory import (
    check_collaborators,
    create_solver,
    register_solver,
)

# Import strategies to register them
from .strategies import (
    GreedySolver,
    MonteCarloSolver,
    HillClimbingSolver,
    CompositeSolver,
    LoggingSolver,
)

__all__ = [
    # Data structures
    "Countdown",
    "StatValue",
    "MaxHeap",
    "DebugInfo",
    "Solution",
    "SingleMoveSolution",
    "best_solution",
    # Contracts
    "Estimator",
    "NegatedEstimator",
    "MoveGenerator",
    "SolutionGenerator",
    "Mutation",
    "LazyMutation",
    "Mutator",
    # Solver framework
    "ConfigurationError",
    "Solver",
    "check_collaborators",
    "create_solver",
    "register_solver",
    # Strategies
    "GreedySolver",
    "MonteCarloSolver",
    "HillClimbingSolver",
    "CompositeSolver",
    "LoggingSolver",
]
