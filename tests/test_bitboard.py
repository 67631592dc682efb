"""Tests for bitboard utilities."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sprawl.core.bitboard import (
    BOARD_SIZE, NUM_SQUARES, VALID_MASK, FIRST_COL_MASK, LAST_COL_MASK,
    ORTHO_NEIGHBORS, DIAG_NEIGHBORS,
    sq_to_rowcol, rowcol_to_sq, is_valid_sq, bit, popcount, lsb, iter_bits,
    shift, at_least_two, growable_mask
)

N = BOARD_SIZE


def sq(row, col):
    return rowcol_to_sq(row, col)


class TestSquareConversion:
    def test_sq_to_rowcol(self):
        assert sq_to_rowcol(0) == (0, 0)
        assert sq_to_rowcol(N - 1) == (0, N - 1)
        assert sq_to_rowcol(N) == (1, 0)
        assert sq_to_rowcol(NUM_SQUARES - 1) == (N - 1, N - 1)

    def test_rowcol_to_sq(self):
        assert rowcol_to_sq(0, 0) == 0
        assert rowcol_to_sq(1, 1) == N + 1
        assert rowcol_to_sq(N - 1, N - 1) == NUM_SQUARES - 1

    def test_roundtrip(self):
        for s in range(NUM_SQUARES):
            assert rowcol_to_sq(*sq_to_rowcol(s)) == s

    def test_is_valid_sq(self):
        assert is_valid_sq(0, 0)
        assert is_valid_sq(N - 1, N - 1)
        assert not is_valid_sq(-1, 0)
        assert not is_valid_sq(0, N)


class TestBitOperations:
    def test_bit(self):
        assert bit(0) == 1
        assert bit(3) == 8

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(0b1111) == 4
        assert popcount(VALID_MASK) == NUM_SQUARES

    def test_lsb(self):
        assert lsb(0) == -1
        assert lsb(0b1000) == 3

    def test_iter_bits_ascending(self):
        assert list(iter_bits(0b1010101)) == [0, 2, 4, 6]

    def test_column_masks(self):
        assert popcount(FIRST_COL_MASK) == N
        assert popcount(LAST_COL_MASK) == N
        assert FIRST_COL_MASK & bit(sq(3, 0))
        assert LAST_COL_MASK & bit(sq(3, N - 1))


class TestShift:
    def test_vertical(self):
        # (r, c) is set iff (r + dr, c + dc) was set
        assert shift(bit(sq(1, 1)), -1, 0) == bit(sq(2, 1))
        assert shift(bit(sq(1, 1)), 1, 0) == bit(sq(0, 1))

    def test_horizontal(self):
        assert shift(bit(sq(1, 1)), 0, -1) == bit(sq(1, 2))
        assert shift(bit(sq(1, 1)), 0, 1) == bit(sq(1, 0))

    def test_no_wrap_across_rows(self):
        assert shift(bit(sq(0, N - 1)), 0, -1) == 0
        assert shift(bit(sq(1, 0)), 0, 1) == 0

    def test_falls_off_top_and_bottom(self):
        assert shift(bit(sq(0, 3)), 1, 0) == 0
        assert shift(bit(sq(N - 1, 3)), -1, 0) == 0

    def test_diagonal(self):
        assert shift(bit(sq(2, 2)), -1, -1) == bit(sq(3, 3))
        assert shift(bit(sq(0, N - 1)), -1, -1) == 0


class TestNeighborTables:
    def test_corner(self):
        assert popcount(ORTHO_NEIGHBORS[sq(0, 0)]) == 2
        assert popcount(DIAG_NEIGHBORS[sq(0, 0)]) == 1

    def test_edge(self):
        assert popcount(ORTHO_NEIGHBORS[sq(0, 3)]) == 3
        assert popcount(DIAG_NEIGHBORS[sq(0, 3)]) == 2

    def test_center(self):
        center = sq(N // 2, N // 2)
        assert popcount(ORTHO_NEIGHBORS[center]) == 4
        assert popcount(DIAG_NEIGHBORS[center]) == 4
        assert ORTHO_NEIGHBORS[center] & DIAG_NEIGHBORS[center] == 0


class TestGrowableMask:
    def test_at_least_two(self):
        assert at_least_two(0b01, 0b01, 0b10, 0) == 0b01
        assert at_least_two(0b01, 0b10, 0b100, 0b1000) == 0

    def test_two_orthogonal_and_two_diagonal(self):
        own = bit(sq(0, 0)) | bit(sq(0, 2))
        empty = VALID_MASK & ~own
        grow = growable_mask(own, empty)
        # (0, 1) has two orthogonal stones, (1, 1) two diagonal ones
        assert list(iter_bits(grow)) == [sq(0, 1), sq(1, 1)]

    def test_one_of_each_group_is_not_enough(self):
        own = bit(sq(0, 0)) | bit(sq(0, 1))
        empty = VALID_MASK & ~own
        assert growable_mask(own, empty) == 0

    def test_only_empty_squares(self):
        own = bit(sq(0, 0)) | bit(sq(0, 2))
        empty = VALID_MASK & ~own & ~bit(sq(0, 1))
        assert list(iter_bits(growable_mask(own, empty))) == [sq(1, 1)]

    def test_matches_neighbor_tables(self):
        own = bit(sq(4, 4)) | bit(sq(4, 6)) | bit(sq(6, 4)) | bit(sq(0, N - 1)) | bit(sq(2, N - 1))
        empty = VALID_MASK & ~own
        grow = growable_mask(own, empty)
        for s in range(NUM_SQUARES):
            expected = bool(empty & bit(s)) and (
                popcount(ORTHO_NEIGHBORS[s] & own) >= 2 or popcount(DIAG_NEIGHBORS[s] & own) >= 2
            )
            assert bool(grow & bit(s)) == expected, sq_to_rowcol(s)
