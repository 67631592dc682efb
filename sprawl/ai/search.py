"""
Adversarial search for Sprawl: minimax, negamax, alpha-beta negamax and
root move ranking.

PlayerA maximizes GameState.evaluate(), PlayerB minimizes it. The negamax
forms encode the side to move as sign = +1 (PlayerA) or -1 (PlayerB) and
return scores from that side's point of view, so for any position

    minimax(depth, True) == negamax(depth, +1) == alphabeta(depth, sign=+1)

Every form stops expanding a node when depth reaches 0, when the game is
over, or when the side to move has no legal move (no pass is modelled), and
scores the node with the static evaluation. A terminal position has no moves
for either side, so the third check covers the second.

Positions are immutable, so each child is derived with GameState.place()
and sibling branches never share state. That is what lets rank_moves() fan
the root moves out over a worker pool without locks.
"""

from __future__ import annotations
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional
import logging

from ..core.state import Color, GameState, Position
from ..core.notation import format_ranking

logger = logging.getLogger(__name__)

# Larger than any reachable evaluation (|score| <= N * N).
MAX_SCORE = 1 << 30
MIN_SCORE = -MAX_SCORE

DEFAULT_TOP_K = 5

EXECUTORS = {
    'thread': ThreadPoolExecutor,
    'process': ProcessPoolExecutor,
}


@dataclass
class SearchStats:
    """
    Counters collected during a search.

    Attributes:
        nodes:    Positions visited (every recursive call counts once)
        cutoffs:  Alpha-beta cutoffs taken
        horizon:  Nodes scored because the depth budget ran out
    """
    nodes: int = 0
    cutoffs: int = 0
    horizon: int = 0

    def merge(self, other: SearchStats) -> None:
        """Add another search's counters into this one."""
        self.nodes += other.nodes
        self.cutoffs += other.cutoffs
        self.horizon += other.horizon


def sign_to_color(sign: int) -> Color:
    """+1 -> PLAYER_A, -1 -> PLAYER_B."""
    return Color.PLAYER_A if sign > 0 else Color.PLAYER_B


def color_to_sign(color: Color) -> int:
    """PLAYER_A -> +1, PLAYER_B -> -1."""
    if color == Color.PLAYER_A:
        return 1
    if color == Color.PLAYER_B:
        return -1
    raise ValueError(f"No side to move for {color!r}")


def _check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"Search depth must be >= 0, got {depth}")


def _minimax(state: GameState, depth: int, maximizing: bool, stats: SearchStats) -> int:
    stats.nodes += 1
    if depth == 0:
        stats.horizon += 1
        return state.evaluate()

    color = Color.PLAYER_A if maximizing else Color.PLAYER_B
    moves = state.legal_moves(color)
    if not moves:
        return state.evaluate()

    scores = (_minimax(state.place(pos, color), depth - 1, not maximizing, stats) for pos in moves)
    return max(scores) if maximizing else min(scores)


def _negamax(state: GameState, depth: int, sign: int, stats: SearchStats) -> int:
    stats.nodes += 1
    if depth == 0:
        stats.horizon += 1
        return sign * state.evaluate()

    color = sign_to_color(sign)
    moves = state.legal_moves(color)
    if not moves:
        return sign * state.evaluate()

    return max(-_negamax(state.place(pos, color), depth - 1, -sign, stats) for pos in moves)


def _alphabeta(
    state: GameState,
    depth: int,
    alpha: int,
    beta: int,
    sign: int,
    stats: SearchStats,
) -> int:
    stats.nodes += 1
    if depth == 0:
        stats.horizon += 1
        return sign * state.evaluate()

    color = sign_to_color(sign)
    moves = state.legal_moves(color)
    if not moves:
        return sign * state.evaluate()

    for pos in moves:
        # The child's window is ours, negated and swapped
        score = -_alphabeta(state.place(pos, color), depth - 1, -beta, -alpha, -sign, stats)
        if score > alpha:
            alpha = score
        if alpha >= beta:
            stats.cutoffs += 1
            return alpha

    return alpha


def minimax(
    state: GameState,
    depth: int,
    maximizing: bool = True,
    stats: Optional[SearchStats] = None,
) -> int:
    """
    Plain minimax.

    Args:
        state: Position to search (not modified)
        depth: Remaining plies
        maximizing: True if PlayerA is to move
        stats: Optional counters to update

    Returns:
        Score from PlayerA's point of view.
    """
    _check_depth(depth)
    return _minimax(state, depth, maximizing, stats if stats is not None else SearchStats())


def negamax(
    state: GameState,
    depth: int,
    sign: int = 1,
    stats: Optional[SearchStats] = None,
) -> int:
    """
    Negamax: one code path for both players via score negation.

    Returns the score from the point of view of the side to move
    (sign = +1 PlayerA, -1 PlayerB).
    """
    _check_depth(depth)
    return _negamax(state, depth, sign, stats if stats is not None else SearchStats())


def alphabeta(
    state: GameState,
    depth: int,
    alpha: int = MIN_SCORE,
    beta: int = MAX_SCORE,
    sign: int = 1,
    stats: Optional[SearchStats] = None,
) -> int:
    """
    Negamax with alpha-beta pruning.

    Moves are tried in generator order. After each child alpha is raised to
    the child's negated score; once alpha >= beta the remaining siblings are
    skipped and alpha is returned (fail-hard). Called with the full window
    (MIN_SCORE, MAX_SCORE) the result equals negamax() exactly.
    """
    _check_depth(depth)
    return _alphabeta(state, depth, alpha, beta, sign, stats if stats is not None else SearchStats())


def _score_root_move(
    state: GameState,
    pos: Position,
    color: Color,
    depth: int,
) -> tuple[int, SearchStats]:
    """Score one root move from the mover's point of view (pool worker)."""
    stats = SearchStats()
    sign = color_to_sign(color)
    child = state.place(pos, color)
    score = -_alphabeta(child, depth - 1, MIN_SCORE, MAX_SCORE, -sign, stats)
    return score, stats


def rank_moves(
    state: GameState,
    depth: int,
    top_k: int = DEFAULT_TOP_K,
    workers: Optional[int] = None,
    executor: str = 'thread',
    color: Color = Color.PLAYER_A,
    stats: Optional[SearchStats] = None,
) -> list[tuple[int, Position]]:
    """
    Rank the root moves of color.

    Each legal move consumes one ply; the resulting position is searched
    with alpha-beta for depth - 1 more plies with the opponent to move. Moves
    are sorted best-first with ties kept in generator order.

    Args:
        state: Root position (not modified)
        depth: Total plies, including the root move (>= 1)
        top_k: Maximum number of moves to return
        workers: Pool size for the root fan-out. 1 searches in the calling
                 thread; None lets the executor pick its default size.
        executor: 'thread' or 'process'
        color: Side to move at the root
        stats: Optional counters; per-move counters are merged into it

    Returns:
        Up to top_k (score, position) pairs, scores from color's point of
        view. Empty if color has no legal move.
    """
    if depth < 1:
        raise ValueError(f"Ranking depth must be >= 1, got {depth}")
    if top_k < 1:
        raise ValueError(f"top_k must be >= 1, got {top_k}")
    if executor not in EXECUTORS:
        raise ValueError(f"Unknown executor {executor!r}, expected one of {sorted(EXECUTORS)}")
    color_to_sign(color)  # raises for EMPTY

    moves = state.legal_moves(color)
    if not moves:
        logger.debug("No legal moves for %s at depth %d", color.name, depth)
        return []

    if workers == 1 or len(moves) == 1:
        results = [_score_root_move(state, pos, color, depth) for pos in moves]
    else:
        results = _score_in_pool(EXECUTORS[executor](max_workers=workers), state, moves, color, depth)

    total = stats if stats is not None else SearchStats()
    for _, move_stats in results:
        total.merge(move_stats)

    scored = [(score, pos) for (score, _), pos in zip(results, moves)]
    scored.sort(key=lambda m: m[0], reverse=True)
    ranked = scored[:top_k]

    logger.debug(
        "Ranked %d moves for %s at depth %d (%d nodes): %s",
        len(moves), color.name, depth, total.nodes, format_ranking(ranked),
    )
    return ranked


def _score_in_pool(
    pool: Executor,
    state: GameState,
    moves: list[Position],
    color: Color,
    depth: int,
) -> list[tuple[int, SearchStats]]:
    """Score root moves concurrently; results come back in move order."""
    results: list[Optional[tuple[int, SearchStats]]] = [None] * len(moves)
    with pool:
        futures = {
            pool.submit(_score_root_move, state, pos, color, depth): i
            for i, pos in enumerate(moves)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return results


@dataclass
class SearchNode:
    """
    Thin wrapper pairing a position with the search entry points.

    Nodes are created per search call and never shared.
    """
    state: GameState

    @classmethod
    def random(cls, seed=None) -> SearchNode:
        """Wrap a random opening position."""
        return cls(GameState.random_opening(seed))

    def with_stone(self, pos: Position, color: Color) -> SearchNode:
        """Child node with one more stone."""
        return SearchNode(self.state.place(pos, color))

    def evaluate(self) -> int:
        return self.state.evaluate()

    def minimax(self, depth: int, maximizing: bool = True, stats: Optional[SearchStats] = None) -> int:
        return minimax(self.state, depth, maximizing, stats)

    def negamax(self, depth: int, sign: int = 1, stats: Optional[SearchStats] = None) -> int:
        return negamax(self.state, depth, sign, stats)

    def alphabeta(
        self,
        depth: int,
        alpha: int = MIN_SCORE,
        beta: int = MAX_SCORE,
        sign: int = 1,
        stats: Optional[SearchStats] = None,
    ) -> int:
        return alphabeta(self.state, depth, alpha, beta, sign, stats)

    def optimal_moves(self, depth: int, **kwargs) -> list[tuple[int, Position]]:
        """Top root moves for PlayerA at a fixed depth (see rank_moves)."""
        return rank_moves(self.state, depth, **kwargs)

    def optimal_moves_iterative(self, time_budget: Optional[float] = None, **kwargs):
        """Iteratively deepened ranking (see iterative_deepening)."""
        from .deepening import DEFAULT_TIME_BUDGET, iterative_deepening
        if time_budget is None:
            time_budget = DEFAULT_TIME_BUDGET
        return iterative_deepening(self.state, time_budget, **kwargs)

    def __str__(self) -> str:
        return str(self.state)
