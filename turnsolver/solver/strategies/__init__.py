"""
Strategies Package - Concrete solver implementations.

Import this module to register all built-in solvers.
"""

from .greedy import GreedySolver
from .monte_carlo import MonteCarloSolver
from .hill_climbing import HillClimbingSolver
from .composite import CompositeSolver
from .logging_wrapper import LoggingSolver

__all__ = [
    "GreedySolver",
    "MonteCarloSolver",
    "HillClimbingSolver",
    "CompositeSolver",
    "LoggingSolver",
]
