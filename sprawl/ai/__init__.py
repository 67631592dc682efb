"""AI components: adversarial search, iterative deepening, and time management."""

from .search import (
    MAX_SCORE, MIN_SCORE, SearchNode, SearchStats,
    minimax, negamax, alphabeta, rank_moves
)
from .tree import TreeNode, build_tree, tree_minimax, rank_tree
from .time_manager import TimeBudget
from .config import SearchConfig
from .deepening import DeepeningResult, iterative_deepening, search_best_moves
