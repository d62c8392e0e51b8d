"""
Solver Factory Module - Registry of strategies and checked construction.

Strategies register under their `name`. create_solver() checks the
keyword arguments against the strategy's `collaborators` contracts
before calling the constructor, so a pipeline wired with a missing or
wrong collaborator fails when it is built, not in the middle of a turn.
"""

from typing import Any, Dict, Type

from .base import ConfigurationError, Solver


# Global registry of solvers
_SOLVERS: Dict[str, Type[Solver]] = {}


def register_solver(cls: Type[Solver]) -> Type[Solver]:
    """
    Decorator to register a solver class.

    Usage:
        @register_solver
        class MySolver(Solver):
            name = "my_solver"
            collaborators = {"estimator": Estimator}
            ...

    Args:
        cls: Solver class to register

    Returns:
        The same class (for decorator chaining)
    """
    _SOLVERS[cls.name] = cls
    return cls


def check_collaborators(cls: Type[Solver], kwargs: Dict[str, Any]) -> None:
    """
    Check constructor arguments against a strategy's collaborator contracts.

    Args:
        cls: Registered solver class
        kwargs: Arguments about to be passed to its constructor

    Raises:
        ConfigurationError: If a collaborator is missing or does not
                            implement its contract
    """
    for key, contract in cls.collaborators.items():
        if key not in kwargs:
            raise ConfigurationError(
                f"{cls.name} needs a {contract.__name__} as '{key}'"
            )
        value = kwargs[key]
        if not isinstance(value, contract):
            raise ConfigurationError(
                f"{cls.name}: '{key}' must be a {contract.__name__}, "
                f"got {type(value).__name__}"
            )


def create_solver(name: str, **kwargs: Any) -> Solver:
    """
    Create a solver instance by name.

    Collaborators (estimator, mutator, child solvers, ...) are passed
    through as keyword arguments and checked first.

    Args:
        name: Solver name (e.g., "greedy", "hill_climbing")
        **kwargs: Arguments passed to the solver constructor

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name not found
        ConfigurationError: If a collaborator is missing or of the wrong kind
    """
    if name not in _SOLVERS:
        available = ", ".join(_SOLVERS.keys())
        raise ValueError(f"Unknown solver: {name}. Available: {available}")
    cls = _SOLVERS[name]
    check_collaborators(cls, kwargs)
    return cls(**kwargs)
