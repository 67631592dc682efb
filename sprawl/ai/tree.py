"""
Fully materialized game tree.

Builds every (move, child) pair down to a fixed depth, then runs minimax
over the stored tree. Trades memory (branching ** depth nodes) for never
recomputing a child position across evaluation passes. Each child is owned
by its parent only; there is no sharing between branches.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..core.state import Color, GameState, Position
from .search import DEFAULT_TOP_K, color_to_sign


@dataclass
class TreeNode:
    """A node of the materialized tree."""
    state: GameState
    ply: int = 0
    move: Optional[Position] = None  # Move that led here (None at the root)
    root_color: Color = Color.PLAYER_A
    children: list[TreeNode] = field(default_factory=list)

    @property
    def to_move(self) -> Color:
        """Side to move: the root color on even plies, its opponent on odd."""
        return self.root_color if self.ply % 2 == 0 else self.root_color.opponent

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def expand(self, depth: int) -> None:
        """Materialize children recursively for depth more plies."""
        if depth == 0 or self.children:
            return
        color = self.to_move
        for pos in self.state.legal_moves(color):
            child = TreeNode(
                state=self.state.place(pos, color),
                ply=self.ply + 1,
                move=pos,
                root_color=self.root_color,
            )
            child.expand(depth - 1)
            self.children.append(child)

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Pre-order traversal."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def size(self) -> int:
        """Number of nodes in this subtree."""
        return sum(1 for _ in self.iter_nodes())


def build_tree(state: GameState, depth: int, color: Color = Color.PLAYER_A) -> TreeNode:
    """Build the tree rooted at state with color to move."""
    if depth < 0:
        raise ValueError(f"Tree depth must be >= 0, got {depth}")
    color_to_sign(color)  # raises for EMPTY
    root = TreeNode(state=state, root_color=color)
    root.expand(depth)
    return root


def tree_minimax(node: TreeNode) -> int:
    """
    Minimax value of a materialized subtree, from PlayerA's point of view.

    Leaves (depth exhausted, or the side to move cannot grow) score with the
    static evaluation.
    """
    if node.is_leaf:
        return node.state.evaluate()
    values = (tree_minimax(child) for child in node.children)
    if node.to_move == Color.PLAYER_A:
        return max(values)
    return min(values)


def rank_tree(
    state: GameState,
    depth: int,
    top_k: int = DEFAULT_TOP_K,
    color: Color = Color.PLAYER_A,
) -> list[tuple[int, Position]]:
    """
    Rank root moves over a materialized tree.

    Produces the same list as rank_moves() for the same position, depth and
    color: scores from the mover's point of view, best first, ties in
    generator order.
    """
    if depth < 1:
        raise ValueError(f"Ranking depth must be >= 1, got {depth}")
    if top_k < 1:
        raise ValueError(f"top_k must be >= 1, got {top_k}")

    root = build_tree(state, depth, color)
    sign = color_to_sign(color)
    scored = [(sign * tree_minimax(child), child.move) for child in root.children]
    scored.sort(key=lambda m: m[0], reverse=True)
    return scored[:top_k]
