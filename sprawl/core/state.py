"""
Game state representation for Sprawl.

Uses one bitboard per color. States are immutable values: placing a stone
returns a new state, so sibling search branches never alias each other.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional, Union
import numpy as np

from .bitboard import (
    BOARD_SIZE, NUM_SQUARES, VALID_MASK, ORTHO_NEIGHBORS, DIAG_NEIGHBORS,
    bit, popcount, rowcol_to_sq, growable_mask
)


class Color(IntEnum):
    """Contents of one cell."""
    EMPTY = 0
    PLAYER_A = 1
    PLAYER_B = 2

    @property
    def opponent(self) -> Color:
        """The other player (EMPTY has no opponent)."""
        if self is Color.PLAYER_A:
            return Color.PLAYER_B
        if self is Color.PLAYER_B:
            return Color.PLAYER_A
        raise ValueError("EMPTY has no opponent")


class Position(NamedTuple):
    """Zero-based (row, col) on the board."""
    row: int
    col: int


RandomSource = Union[None, int, np.random.Generator]


def _rng(seed: RandomSource) -> np.random.Generator:
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


@dataclass(frozen=True)
class GameState:
    """
    Represents one Sprawl position.

    Attributes:
        stones_a: Bitboard of PlayerA stones
        stones_b: Bitboard of PlayerB stones

    There is no side-to-move or move counter; search tracks whose turn it is.
    """
    stones_a: int = 0
    stones_b: int = 0

    @classmethod
    def new(cls) -> GameState:
        """Create an all-empty board."""
        return cls()

    @classmethod
    def random_fill(cls, seed: RandomSource = None) -> GameState:
        """Fill every cell uniformly at random from {EMPTY, PLAYER_A, PLAYER_B}."""
        cells = _rng(seed).integers(0, 3, size=NUM_SQUARES)
        stones_a = stones_b = 0
        for sq, value in enumerate(cells):
            if value == Color.PLAYER_A:
                stones_a |= bit(sq)
            elif value == Color.PLAYER_B:
                stones_b |= bit(sq)
        return cls(stones_a, stones_b)

    @classmethod
    def random_opening(cls, seed: RandomSource = None) -> GameState:
        """
        Generate a plausible opening position.

        Starting from an empty board, PlayerA and then PlayerB each drop one
        stone on a random empty cell, N - 1 times per side.
        """
        rng = _rng(seed)
        state = cls.new()
        for _ in range(BOARD_SIZE - 1):
            for color in (Color.PLAYER_A, Color.PLAYER_B):
                cells = state.legal_empty_cells()
                state = state.place(cells[rng.integers(len(cells))], color)
        return state

    @classmethod
    def from_grid(cls, grid) -> GameState:
        """
        Build a state from an N x N nested sequence (or array) of colors.

        Raises ValueError if the shape or any value is wrong.
        """
        rows = [list(row) for row in grid]
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise ValueError(f"Grid must be {BOARD_SIZE}x{BOARD_SIZE}")

        state = cls.new()
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                state = state.place(Position(r, c), Color(int(value)))
        return state

    @classmethod
    def from_strings(cls, lines) -> GameState:
        """Parse rows of glyphs ('o' PlayerA, 'x' PlayerB, '.' empty)."""
        from .notation import parse_board
        return parse_board(lines)

    @property
    def occupied(self) -> int:
        """Bitboard of all occupied squares."""
        return self.stones_a | self.stones_b

    @property
    def empty(self) -> int:
        """Bitboard of all empty squares."""
        return (~self.occupied) & VALID_MASK

    def stones(self, color: Color) -> int:
        """Bitboard of one player's stones."""
        if color == Color.PLAYER_A:
            return self.stones_a
        if color == Color.PLAYER_B:
            return self.stones_b
        return self.empty

    def at(self, pos: Position) -> Color:
        """Color of the cell at pos."""
        b = bit(rowcol_to_sq(*pos))
        if self.stones_a & b:
            return Color.PLAYER_A
        if self.stones_b & b:
            return Color.PLAYER_B
        return Color.EMPTY

    def place(self, pos: Position, color: Color) -> GameState:
        """
        Return the state with one cell overwritten.

        Unchecked: pos must be on the board. Callers place only cells returned
        by legal_moves(). Placing EMPTY clears the cell.
        """
        b = bit(rowcol_to_sq(*pos))
        stones_a = self.stones_a & ~b
        stones_b = self.stones_b & ~b
        if color == Color.PLAYER_A:
            stones_a |= b
        elif color == Color.PLAYER_B:
            stones_b |= b
        return GameState(stones_a, stones_b)

    # Alias read by the search code
    with_stone = place

    def growable(self, color: Color) -> int:
        """Bitboard of empty cells color may grow into."""
        return growable_mask(self.stones(color), self.empty)

    def adjacent_support(self, pos: Position, color: Color) -> bool:
        """
        Check whether color may grow into pos.

        True when pos is empty and at least two of its orthogonal neighbors,
        or at least two of its diagonal neighbors, hold color. Off-board
        neighbors contribute nothing.
        """
        sq = rowcol_to_sq(*pos)
        if self.occupied & bit(sq):
            return False
        own = self.stones(color)
        return popcount(ORTHO_NEIGHBORS[sq] & own) >= 2 or popcount(DIAG_NEIGHBORS[sq] & own) >= 2

    def legal_empty_cells(self) -> list[Position]:
        """All empty cells in row-major order."""
        from .moves import get_empty_cells
        return get_empty_cells(self)

    def legal_moves(self, color: Color) -> list[Position]:
        """All cells color may grow into, in row-major order."""
        from .moves import get_legal_moves
        return get_legal_moves(self, color)

    def is_terminal(self) -> bool:
        """Game is over when neither player can grow."""
        empty = self.empty
        return not (growable_mask(self.stones_a, empty) or growable_mask(self.stones_b, empty))

    def stone_count(self, color: Color) -> int:
        """Number of stones (or empty cells) of one color."""
        return popcount(self.stones(color))

    def counts(self) -> tuple[int, int]:
        """Return (PlayerA stones, PlayerB stones)."""
        return popcount(self.stones_a), popcount(self.stones_b)

    def leader(self) -> Color:
        """PLAYER_A if it has strictly more stones, else PLAYER_B."""
        a, b = self.counts()
        return Color.PLAYER_A if a > b else Color.PLAYER_B

    def get_winner(self) -> Optional[Color]:
        """Return the leader of a finished game, or None while play continues."""
        if not self.is_terminal():
            return None
        return self.leader()

    def evaluate(self) -> int:
        """
        Static evaluation from PlayerA's point of view.

        Each stone counts 1 for its owner; each empty cell counts 1 for every
        player able to grow into it. Returns PlayerA total minus PlayerB total.
        """
        empty = self.empty
        a = popcount(self.stones_a) + popcount(growable_mask(self.stones_a, empty))
        b = popcount(self.stones_b) + popcount(growable_mask(self.stones_b, empty))
        return a - b

    def to_array(self) -> np.ndarray:
        """Return a (N, N) int8 array of Color values."""
        cells = np.zeros(NUM_SQUARES, dtype=np.int8)
        for sq in range(NUM_SQUARES):
            b = bit(sq)
            if self.stones_a & b:
                cells[sq] = Color.PLAYER_A
            elif self.stones_b & b:
                cells[sq] = Color.PLAYER_B
        return cells.reshape(BOARD_SIZE, BOARD_SIZE)

    def __str__(self) -> str:
        from .notation import render
        return render(self)
