"""
Bitboard utilities for Sprawl.

Board layout (N x N squares, default N = 11, one Python int per color):

   1 |  0  1  2 ... N-1
   2 |  N N+1   ...
  ...
   N |  ...        N*N-1
     +---------------------
        a  b  c ...

Square index = row * N + col (row 0 = top row "1", col 0 = column a).

The board side is fixed for the whole process. It can be overridden once,
before import, with the SPRAWL_BOARD_SIZE environment variable.
"""

import os
from typing import Iterator


def _read_board_size() -> int:
    raw = os.environ.get("SPRAWL_BOARD_SIZE", "11")
    try:
        size = int(raw)
    except ValueError:
        raise ValueError(f"SPRAWL_BOARD_SIZE must be an integer, got {raw!r}") from None
    if not 3 <= size <= 26:
        raise ValueError(f"SPRAWL_BOARD_SIZE must be in [3, 26], got {size}")
    return size


# Board dimensions
BOARD_SIZE = _read_board_size()
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE

# Mask for valid squares (bits 0 .. N*N-1)
VALID_MASK = (1 << NUM_SQUARES) - 1

# Column masks, used to stop horizontal shifts wrapping across rows
FIRST_COL_MASK = sum(1 << (row * BOARD_SIZE) for row in range(BOARD_SIZE))
LAST_COL_MASK = FIRST_COL_MASK << (BOARD_SIZE - 1)

# Neighbor offsets (row_delta, col_delta)
ORTHO_DELTAS = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAG_DELTAS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

# Precomputed tables (initialized at module load)
ORTHO_NEIGHBORS: list[int] = [0] * NUM_SQUARES
DIAG_NEIGHBORS: list[int] = [0] * NUM_SQUARES


def sq_to_rowcol(sq: int) -> tuple[int, int]:
    """Convert square index to (row, col)."""
    return sq // BOARD_SIZE, sq % BOARD_SIZE


def rowcol_to_sq(row: int, col: int) -> int:
    """Convert (row, col) to square index."""
    return row * BOARD_SIZE + col


def is_valid_sq(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    bb = int(bb)  # Handle numpy int64
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits, lowest first (row-major order)."""
    bb = int(bb)  # Handle numpy int64
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1  # Clear LSB


def bb_to_squares(bb: int) -> list[int]:
    """Convert bitboard to list of square indices."""
    return list(iter_bits(bb))


def shift(bb: int, dr: int, dc: int) -> int:
    """
    Translate a bitboard so that square (r, c) is set iff (r + dr, c + dc) was.

    Only unit steps are supported. Bits pushed off an edge are dropped, never
    wrapped onto the neighboring row.
    """
    if dr == 1:
        bb >>= BOARD_SIZE
    elif dr == -1:
        bb = (bb << BOARD_SIZE) & VALID_MASK
    if dc == 1:
        bb = (bb >> 1) & ~LAST_COL_MASK
    elif dc == -1:
        bb = (bb << 1) & ~FIRST_COL_MASK & VALID_MASK
    return bb


def at_least_two(a: int, b: int, c: int, d: int) -> int:
    """Squares set in at least two of the four bitboards."""
    return (a & b) | (a & c) | (a & d) | (b & c) | (b & d) | (c & d)


def growable_mask(own: int, empty: int) -> int:
    """
    Empty squares a color may grow into.

    A square qualifies when at least two of its four orthogonal neighbors,
    or at least two of its four diagonal neighbors, hold the color. The two
    groups are thresholded separately: one orthogonal plus one diagonal
    neighbor is not enough.
    """
    ortho = at_least_two(*(shift(own, dr, dc) for dr, dc in ORTHO_DELTAS))
    diag = at_least_two(*(shift(own, dr, dc) for dr, dc in DIAG_DELTAS))
    return empty & (ortho | diag)


def _init_neighbor_masks() -> None:
    """Precompute orthogonal and diagonal neighbor bitboards for all squares."""
    for sq in range(NUM_SQUARES):
        row, col = sq_to_rowcol(sq)
        for table, deltas in ((ORTHO_NEIGHBORS, ORTHO_DELTAS), (DIAG_NEIGHBORS, DIAG_DELTAS)):
            mask = 0
            for dr, dc in deltas:
                r, c = row + dr, col + dc
                if is_valid_sq(r, c):
                    mask |= bit(rowcol_to_sq(r, c))
            table[sq] = mask


# Initialize lookup tables at module load
_init_neighbor_masks()
