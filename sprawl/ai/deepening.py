"""
Iterative deepening over root move ranking.

Ranks the root moves at depth 2, 3, 4, ... and keeps the result of the
deepest depth that finished. The deadline is checked only before starting a
new depth, so a running depth is never interrupted. The minimum depth always
runs, however small the budget.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import logging

from ..core.state import Color, GameState, Position
from ..core.notation import format_ranking
from .config import SearchConfig
from .search import DEFAULT_TOP_K, SearchStats, rank_moves
from .time_manager import create_time_budget

logger = logging.getLogger(__name__)

DEFAULT_TIME_BUDGET = 30.0
DEFAULT_MIN_DEPTH = 2


@dataclass
class DeepeningResult:
    """
    Outcome of an iterative deepening search.

    Attributes:
        depth:       Deepest depth that completed
        moves:       Ranking produced at that depth, best first
        elapsed:     Wall-clock seconds for the whole search
        nodes:       Nodes visited across all depths
        depth_times: Seconds spent per completed depth
        exhausted:   True if the whole game tree fit within depth
    """
    depth: int
    moves: list[tuple[int, Position]] = field(default_factory=list)
    elapsed: float = 0.0
    nodes: int = 0
    depth_times: dict[int, float] = field(default_factory=dict)
    exhausted: bool = False

    @property
    def best(self) -> Optional[tuple[int, Position]]:
        """Top (score, position), or None if there was no legal move."""
        return self.moves[0] if self.moves else None


def iterative_deepening(
    state: GameState,
    time_budget: Optional[float] = DEFAULT_TIME_BUDGET,
    min_depth: int = DEFAULT_MIN_DEPTH,
    max_depth: Optional[int] = None,
    top_k: int = DEFAULT_TOP_K,
    workers: Optional[int] = None,
    executor: str = 'thread',
    color: Color = Color.PLAYER_A,
    clock: Optional[Callable[[], float]] = None,
) -> DeepeningResult:
    """
    Rank root moves at increasing depth until the time budget is spent.

    Args:
        state: Root position (not modified)
        time_budget: Seconds, checked between depths only. None means no
                     limit, in which case max_depth should be set.
        min_depth: First depth searched; always completes
        max_depth: Stop after this depth even if time remains
        top_k, workers, executor, color: Passed to rank_moves()
        clock: Monotonic clock override (for tests)

    Returns:
        DeepeningResult for the deepest completed depth.
    """
    if min_depth < 1:
        raise ValueError(f"min_depth must be >= 1, got {min_depth}")
    if max_depth is not None and max_depth < min_depth:
        raise ValueError(f"max_depth ({max_depth}) must be >= min_depth ({min_depth})")

    budget = create_time_budget(time_budget, clock)
    total = SearchStats()
    result = DeepeningResult(depth=0)
    empties = len(state.legal_empty_cells())

    depth = min_depth
    while True:
        if depth > min_depth and budget.expired():
            logger.debug("Time budget spent after depth %d", result.depth)
            break
        if max_depth is not None and depth > max_depth:
            break

        stats = SearchStats()
        moves = rank_moves(
            state, depth, top_k=top_k, workers=workers, executor=executor,
            color=color, stats=stats,
        )
        spent = budget.record_depth(depth)
        total.merge(stats)

        result.depth = depth
        result.moves = moves
        logger.info(
            "Depth %d done in %.3fs (%d nodes): %s",
            depth, spent, stats.nodes, format_ranking(moves) or "no moves",
        )

        # No visited node hit the depth limit, and either nothing was pruned
        # or no line can outlast the empty cells: deeper ranks are identical.
        if stats.horizon == 0 and (stats.cutoffs == 0 or depth >= empties):
            result.exhausted = True
            logger.debug("Game tree exhausted at depth %d", depth)
            break

        depth += 1

    result.elapsed = budget.elapsed
    result.nodes = total.nodes
    result.depth_times = dict(budget.depth_times)
    return result


def search_best_moves(state: GameState, config: Optional[SearchConfig] = None) -> DeepeningResult:
    """
    Run the search a config describes.

    Iterative deepening when config.time_budget is set, otherwise a single
    ranking at config.depth.
    """
    config = config or SearchConfig()
    if config.time_budget is not None or config.max_depth is not None:
        return iterative_deepening(
            state,
            time_budget=config.time_budget,
            min_depth=config.min_depth,
            max_depth=config.max_depth,
            top_k=config.top_k,
            workers=config.workers,
            executor=config.executor,
        )

    budget = create_time_budget(None)
    stats = SearchStats()
    moves = rank_moves(
        state, config.depth, top_k=config.top_k, workers=config.workers,
        executor=config.executor, stats=stats,
    )
    budget.record_depth(config.depth)
    return DeepeningResult(
        depth=config.depth,
        moves=moves,
        elapsed=budget.elapsed,
        nodes=stats.nodes,
        depth_times=dict(budget.depth_times),
        exhausted=stats.horizon == 0 and stats.cutoffs == 0,
    )
