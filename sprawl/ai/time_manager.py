"""
Time management for iterative deepening.

The budget is cooperative: it is consulted only between depths, never in
the middle of a fixed-depth search. A depth that starts before the budget
runs out always finishes, so the wall clock may overshoot by up to one
depth's worth of work.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import time


@dataclass
class TimeBudget:
    """
    Wall-clock budget for one search.

    Attributes:
        budget: Seconds allowed (None = unlimited)
        clock: Monotonic clock, injectable for tests
    """

    budget: Optional[float] = 30.0
    clock: Callable[[], float] = time.monotonic

    # Time tracking
    started: float = field(init=False)
    last_mark: float = field(init=False)

    # Statistics for analysis
    depth_times: dict[int, float] = field(default_factory=dict)

    def __post_init__(self):
        """Start the clock."""
        if self.budget is not None and self.budget < 0:
            raise ValueError(f"Time budget must be >= 0, got {self.budget}")
        self.started = self.clock()
        self.last_mark = self.started

    @property
    def elapsed(self) -> float:
        """Seconds since the budget started."""
        return self.clock() - self.started

    @property
    def remaining(self) -> float:
        """Seconds left (inf when unlimited, never negative)."""
        if self.budget is None:
            return float('inf')
        return max(0.0, self.budget - self.elapsed)

    def expired(self) -> bool:
        """True once the elapsed time exceeds the budget."""
        if self.budget is None:
            return False
        return self.elapsed > self.budget

    def record_depth(self, depth: int) -> float:
        """
        Record that a depth finished.

        Returns the seconds spent on that depth since the previous mark.
        """
        now = self.clock()
        spent = now - self.last_mark
        self.depth_times[depth] = spent
        self.last_mark = now
        return spent

    def stats(self) -> dict:
        """Return statistics about time usage."""
        return {
            'budget': self.budget,
            'elapsed': self.elapsed,
            'remaining': self.remaining,
            'depth_times': dict(self.depth_times),
        }


def create_time_budget(
    seconds: Optional[float] = 30.0,
    clock: Optional[Callable[[], float]] = None,
) -> TimeBudget:
    """
    Create a time budget with given settings.

    Args:
        seconds: Budget in seconds, or None for unlimited
        clock: Clock function (defaults to time.monotonic)

    Returns:
        Started TimeBudget instance.
    """
    if clock is None:
        return TimeBudget(budget=seconds)
    return TimeBudget(budget=seconds, clock=clock)
