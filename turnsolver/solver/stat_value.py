"""
StatValue Module - Streaming statistics for cross-turn solver diagnostics.
"""

import math
from typing import Optional


def _compact(value: float) -> str:
    """Format a float for one-line reports."""
    if math.isnan(value) or math.isinf(value):
        return str(value)
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.3g}"


class StatValue:
    """
    Running count/sum/sum-of-squares/min/max accumulator.

    Solvers add one sample per search (simulation count, time to best
    solution, ...). Accumulators from several turns or matches are
    combined with merge().

    Attributes:
        name: Optional label used as report prefix
        count: Number of samples
        sum: Sum of samples
        sum2: Sum of squared samples
        min: Smallest sample (+inf while empty)
        max: Largest sample (-inf while empty)
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self.count = 0
        self.sum = 0.0
        self.sum2 = 0.0
        self.min = math.inf
        self.max = -math.inf

    @classmethod
    def create_empty(cls, name: Optional[str] = None) -> 'StatValue':
        return cls(name)

    def add(self, value: float) -> None:
        """Add one sample."""
        self.count += 1
        self.sum += value
        self.sum2 += value * value
        self.min = min(self.min, value)
        self.max = max(self.max, value)

    def merge(self, other: 'StatValue') -> 'StatValue':
        """
        Add all samples of another accumulator to this one.

        Args:
            other: Accumulator to fold in (left unchanged)

        Returns:
            self, for chaining
        """
        self.count += other.count
        self.sum += other.sum
        self.sum2 += other.sum2
        self.min = min(self.min, other.min)
        self.max = max(self.max, other.max)
        return self

    def clone(self) -> 'StatValue':
        copy = StatValue(self.name)
        return copy.merge(self)

    @property
    def mean(self) -> float:
        if self.count == 0:
            return math.nan
        return self.sum / self.count

    @property
    def variance(self) -> float:
        """
        Sample variance (sum2 - sum^2/count) / (count - 1).

        NaN when count <= 1; a single sample has no spread estimate.
        """
        if self.count <= 1:
            return math.nan
        # Rounding can push a zero spread slightly below zero.
        return max(0.0, (self.sum2 - self.sum * self.sum / self.count) / (self.count - 1))

    @property
    def std_deviation(self) -> float:
        return math.sqrt(self.variance)

    @property
    def conf_interval_2sigma(self) -> float:
        """Two-sigma confidence interval size for the mean."""
        if self.count == 0:
            return math.nan
        return 2 * self.std_deviation / math.sqrt(self.count)

    def format(self, human_readable: bool = True) -> str:
        """
        Render the accumulator as one line.

        Args:
            human_readable: False gives tab separated mean/std/confInt/count

        Returns:
            Formatted statistics line
        """
        if not human_readable:
            return (f"{self.mean}\t{self.std_deviation}\t"
                    f"{self.conf_interval_2sigma}\t{self.count}")
        prefix = f"{self.name}: " if self.name else ""
        return (f"{prefix}{_compact(self.mean)} "
                f"stdd={_compact(self.std_deviation)} "
                f"min..max={_compact(self.min)}..{_compact(self.max)} "
                f"confInt={_compact(self.conf_interval_2sigma)} "
                f"count={self.count}")

    def __str__(self) -> str:
        return self.format(True)

    def __repr__(self) -> str:
        return f"StatValue(name={self.name!r}, count={self.count}, mean={self.mean})"
