"""
Collaborator Contracts Module - Interfaces implemented by game-specific code.

The search strategies never look inside a game state. They only talk
to the game through these small interfaces:

    Estimator          - scores a state (higher is better)
    MoveGenerator      - lists single moves and applies one to a state
    SolutionGenerator  - builds one complete random solution
    Mutator / Mutation - proposes a neighbour of a solution, with a cheap
                         score preview before the expensive result is built

Score sign convention: every score in this package is "higher is
better". Cost functions (lower is better) are adapted with
NegatedEstimator instead of being negated inside a solver.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Optional, TypeVar

State = TypeVar("State")
Problem = TypeVar("Problem")
Move = TypeVar("Move")
SolutionT = TypeVar("SolutionT")

_UNSET = object()


class Estimator(ABC, Generic[State]):
    """
    Scores a game state.

    Implementations must be pure and deterministic: the same state always
    gives the same score, and the score is never NaN. Solvers do not check
    this.
    """

    @abstractmethod
    def score(self, state: State) -> float:
        pass

    def __str__(self) -> str:
        return type(self).__name__


class NegatedEstimator(Estimator[State]):
    """Turns a lower-is-better cost estimator into a higher-is-better one."""

    def __init__(self, cost: Estimator[State]):
        self.cost = cost

    def score(self, state: State) -> float:
        return -self.cost.score(state)

    def __str__(self) -> str:
        return f"-{self.cost}"


class MoveGenerator(ABC, Generic[State, Move]):
    """Enumerates candidate single moves for a state."""

    @abstractmethod
    def get_moves(self, state: State) -> Iterable[Move]:
        pass

    @abstractmethod
    def apply_move(self, state: State, move: Move) -> State:
        """
        Return the state after move.

        Must return a new state and leave the input untouched.
        """
        pass


class SolutionGenerator(ABC, Generic[Problem, SolutionT]):
    """Produces one complete random solution per call."""

    @abstractmethod
    def generate(self, problem: Problem) -> SolutionT:
        pass

    def __str__(self) -> str:
        return type(self).__name__


class Mutation(ABC, Generic[SolutionT]):
    """
    A proposed neighbour of a solution.

    The score is available before the mutated solution is built;
    get_result() is only called by the solver when the mutation is
    accepted.
    """

    @property
    @abstractmethod
    def score(self) -> float:
        pass

    @abstractmethod
    def get_result(self) -> SolutionT:
        pass


class LazyMutation(Mutation[SolutionT]):
    """
    Mutation built from a precomputed score and a result factory.

    The factory runs at most once; later calls return the cached result.
    """

    def __init__(self, score: float, factory: Callable[[], SolutionT]):
        self._score = score
        self._factory: Optional[Callable[[], SolutionT]] = factory
        self._result = _UNSET

    @property
    def score(self) -> float:
        return self._score

    @property
    def is_materialized(self) -> bool:
        return self._result is not _UNSET

    def get_result(self) -> SolutionT:
        if self._result is _UNSET:
            self._result = self._factory()
            self._factory = None
        return self._result


class Mutator(ABC, Generic[Problem, SolutionT]):
    """Proposes one mutation of a parent solution per call."""

    @abstractmethod
    def mutate(self, problem: Problem, parent_solution: SolutionT) -> Mutation[SolutionT]:
        pass

    def __str__(self) -> str:
        return type(self).__name__
