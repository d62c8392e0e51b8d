"""
Countdown Module - Wall-clock time budget for a single search.
"""

import time


class Countdown:
    """
    Wall-clock budget started at construction.

    The clock is monotonic (time.perf_counter). A countdown is never
    reset: sub-budgets for nested strategies are new countdowns cut
    from whatever time is still available.

    Attributes:
        duration: Total budget in seconds
    """

    def __init__(self, duration: float):
        """
        Start a new countdown.

        Args:
            duration: Budget in seconds (negative values are clamped to 0)
        """
        self._duration = max(0.0, float(duration))
        self._start = time.perf_counter()

    @classmethod
    def from_ms(cls, milliseconds: float) -> 'Countdown':
        """Create countdown from a budget in milliseconds."""
        return cls(milliseconds / 1000.0)

    @property
    def duration(self) -> float:
        return self._duration

    def elapsed(self) -> float:
        """Seconds elapsed since construction."""
        return time.perf_counter() - self._start

    def remaining(self) -> float:
        """
        Seconds left before the deadline.

        Returns:
            Remaining time in seconds, 0.0 once finished
        """
        if self.is_finished():
            return 0.0
        return max(0.0, self._duration - self.elapsed())

    def is_finished(self) -> bool:
        return self.elapsed() >= self._duration

    def scale(self, factor: float) -> 'Countdown':
        """
        Cut a sub-budget from the remaining time.

        The new countdown starts now and lasts remaining() * factor.
        Non-positive factors give an already finished countdown.

        Args:
            factor: Multiplier applied to the remaining time

        Returns:
            New freshly started Countdown
        """
        if factor <= 0:
            return Countdown(0.0)
        return Countdown(self.remaining() * factor)

    def __mul__(self, factor: float) -> 'Countdown':
        return self.scale(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> 'Countdown':
        if divisor <= 0:
            return Countdown(0.0)
        return self.scale(1.0 / divisor)

    def __str__(self) -> str:
        return (f"Elapsed {self.elapsed() * 1000:.0f} ms. "
                f"Available {self.remaining() * 1000:.0f} ms")

    def __repr__(self) -> str:
        return f"Countdown(duration={self._duration:.4f})"
