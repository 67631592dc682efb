"""Search configuration."""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Mapping, Optional
import os

from .search import DEFAULT_TOP_K, EXECUTORS


@dataclass
class SearchConfig:
    """Configuration for a best-move search."""
    depth: int = 4  # Fixed depth, used when time_budget is None
    time_budget: Optional[float] = 30.0  # Seconds for iterative deepening
    min_depth: int = 2  # Always completed, whatever the budget
    max_depth: Optional[int] = None  # Upper bound for iterative deepening
    top_k: int = DEFAULT_TOP_K
    workers: Optional[int] = None  # Root fan-out pool size (None = executor default)
    executor: str = 'thread'  # 'thread' or 'process'

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"depth must be >= 1, got {self.depth}")
        if self.min_depth < 1:
            raise ValueError(f"min_depth must be >= 1, got {self.min_depth}")
        if self.max_depth is not None and self.max_depth < self.min_depth:
            raise ValueError(f"max_depth ({self.max_depth}) must be >= min_depth ({self.min_depth})")
        if self.time_budget is not None and self.time_budget < 0:
            raise ValueError(f"time_budget must be >= 0, got {self.time_budget}")
        if self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {sorted(EXECUTORS)}, got {self.executor!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> SearchConfig:
        """
        Build a config from SPRAWL_* environment variables.

        Recognized: SPRAWL_DEPTH, SPRAWL_TIME_BUDGET (a number, or "none"
        for a fixed-depth search), SPRAWL_MIN_DEPTH, SPRAWL_MAX_DEPTH,
        SPRAWL_TOP_K, SPRAWL_WORKERS, SPRAWL_EXECUTOR. Keyword overrides win
        over the environment.
        """
        env = os.environ if environ is None else environ
        values = {}

        def read(name: str, key: str, parse) -> None:
            raw = env.get(name)
            if raw is None or raw.strip() == '':
                return
            try:
                values[key] = parse(raw.strip())
            except ValueError:
                raise ValueError(f"Invalid value for {name}: {raw!r}") from None

        def optional(parse):
            return lambda raw: None if raw.lower() == 'none' else parse(raw)

        read('SPRAWL_DEPTH', 'depth', int)
        read('SPRAWL_TIME_BUDGET', 'time_budget', optional(float))
        read('SPRAWL_MIN_DEPTH', 'min_depth', int)
        read('SPRAWL_MAX_DEPTH', 'max_depth', optional(int))
        read('SPRAWL_TOP_K', 'top_k', int)
        read('SPRAWL_WORKERS', 'workers', optional(int))
        read('SPRAWL_EXECUTOR', 'executor', str.lower)

        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **changes) -> SearchConfig:
        """Copy with some fields replaced (validated again)."""
        return replace(self, **changes)
