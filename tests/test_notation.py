"""Tests for board notation and rendering."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sprawl.core.bitboard import BOARD_SIZE
from sprawl.core.state import Color, GameState, Position
from sprawl.core.notation import (
    render, parse_board, position_to_label, label_to_position, format_ranking
)

N = BOARD_SIZE


class TestLabels:
    def test_position_to_label(self):
        assert position_to_label(Position(0, 0)) == 'a1'
        assert position_to_label(Position(2, 0)) == 'a3'
        assert position_to_label(Position(0, 2)) == 'c1'

    def test_label_to_position(self):
        assert label_to_position('a1') == Position(0, 0)
        assert label_to_position('C3') == Position(2, 2)
        assert label_to_position(' b2 ') == Position(1, 1)

    def test_two_digit_rows(self):
        last = Position(N - 1, N - 1)
        assert label_to_position(position_to_label(last)) == last

    @pytest.mark.parametrize("label", ['', 'a', '1a', 'a0', 'aa1', 'z1', 'a99'])
    def test_invalid_labels(self, label):
        with pytest.raises(ValueError):
            label_to_position(label)


class TestRender:
    def test_empty_board(self):
        lines = render(GameState.new()).splitlines()
        assert lines[0] == "  |" + "ABCDEFGHIJKLMNOPQRSTUVWXYZ"[:N]
        assert lines[1] == "-" * (N + 3)
        assert lines[2] == " 1|" + "." * N
        assert len(lines) == N + 2

    def test_glyphs(self):
        state = GameState.new().place(Position(0, 0), Color.PLAYER_A).place(Position(0, 1), Color.PLAYER_B)
        lines = render(state).splitlines()
        assert lines[2] == " 1|ox" + "." * (N - 2)

    def test_str_uses_render(self):
        state = GameState.random_fill(seed=0)
        assert str(state) == render(state)

    def test_row_numbers_right_aligned(self):
        lines = render(GameState.new()).splitlines()
        assert lines[-1].startswith(f"{N:>2}|")


class TestParse:
    def test_parse_bare_rows(self):
        rows = ["." * N for _ in range(N)]
        rows[0] = "o.x" + "." * (N - 3)
        state = parse_board(rows)
        assert state.at(Position(0, 0)) == Color.PLAYER_A
        assert state.at(Position(0, 2)) == Color.PLAYER_B
        assert state.counts() == (1, 1)

    def test_parse_rendered_board(self):
        state = GameState.random_fill(seed=9)
        assert parse_board(render(state)) == state

    def test_from_strings(self):
        state = GameState.random_fill(seed=10)
        assert GameState.from_strings(str(state).splitlines()) == state

    def test_wrong_row_count(self):
        with pytest.raises(ValueError):
            parse_board(["." * N] * (N - 1))

    def test_wrong_row_length(self):
        rows = ["." * N] * N
        rows = rows[:-1] + ["." * (N - 1)]
        with pytest.raises(ValueError):
            parse_board(rows)

    def test_unknown_glyph(self):
        rows = ["." * N] * N
        rows = ["?" + "." * (N - 1)] + rows[1:]
        with pytest.raises(ValueError):
            parse_board(rows)


class TestFormatRanking:
    def test_format(self):
        moves = [(4, Position(2, 2)), (-1, Position(0, 1))]
        assert format_ranking(moves) == "c3 (+4), b1 (-1)"

    def test_empty(self):
        assert format_ranking([]) == ""
