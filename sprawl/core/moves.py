"""
Move generation for Sprawl.

A move is the Position of an empty cell a player grows into. Moves are
always produced in row-major scan order, which fixes tie-breaking for every
search built on top of this module.
"""

from __future__ import annotations
from typing import Iterator

from .bitboard import BOARD_SIZE, iter_bits, sq_to_rowcol
from .state import Color, GameState, Position


def _positions(bb: int) -> Iterator[Position]:
    for sq in iter_bits(bb):
        yield Position(*sq_to_rowcol(sq))


class MoveGenerator:
    """Generates legal moves for a game state."""

    @staticmethod
    def get_growth_moves(state: GameState, color: Color) -> Iterator[Position]:
        """
        Generate every cell color may grow into.

        Uses the bit-parallel growable mask; the result matches checking
        state.adjacent_support() cell by cell.
        """
        return _positions(state.growable(color))

    @staticmethod
    def get_empty_cells(state: GameState) -> Iterator[Position]:
        """Generate every empty cell (used for seeding, not in-game moves)."""
        return _positions(state.empty)

    @staticmethod
    def has_moves(state: GameState, color: Color) -> bool:
        """Check whether color has at least one legal move."""
        return state.growable(color) != 0

    @staticmethod
    def get_legal_moves(state: GameState, color: Color) -> list[Position]:
        """Get all legal moves for color in row-major order."""
        return list(MoveGenerator.get_growth_moves(state, color))

    @staticmethod
    def get_move_mask(state: GameState, color: Color) -> list[bool]:
        """
        Get a mask indicating which cells are legal moves.

        Returns a list of N * N booleans; index row * N + col.
        """
        mask = [False] * (BOARD_SIZE * BOARD_SIZE)
        for sq in iter_bits(state.growable(color)):
            mask[sq] = True
        return mask


# Convenience functions
def get_legal_moves(state: GameState, color: Color) -> list[Position]:
    """Get all legal moves for color."""
    return MoveGenerator.get_legal_moves(state, color)


def get_empty_cells(state: GameState) -> list[Position]:
    """Get all empty cells."""
    return list(MoveGenerator.get_empty_cells(state))


def is_legal_move(state: GameState, pos: Position, color: Color) -> bool:
    """Check if a move is legal."""
    return state.adjacent_support(pos, color)


def get_move_count(state: GameState, color: Color) -> int:
    """Get number of legal moves."""
    return sum(1 for _ in MoveGenerator.get_growth_moves(state, color))
