"""Core game logic: bitboards, state, move generation, and notation."""

from .bitboard import BOARD_SIZE, NUM_SQUARES
from .state import Color, Position, GameState
from .moves import MoveGenerator, get_legal_moves
from .notation import render, position_to_label, label_to_position
