"""
Board notation for Sprawl.

Board rendering (N = 5 shown):
```
  |ABCDE
--------
 1|o....
 2|oo...
 3|..x..
 4|.....
 5|.....
```

Rows are numbered from 1 at the top, columns lettered from A. PlayerA
stones are 'o', PlayerB stones 'x', empty cells '.'.

Positions are written column letter then row number, e.g. "a1" for the
top-left cell (row 0, col 0) and "c3" for (row 2, col 2).
"""

from __future__ import annotations
import re
from typing import Iterable, Sequence

from .bitboard import BOARD_SIZE, is_valid_sq
from .state import Color, GameState, Position

GLYPHS = {
    Color.PLAYER_A: 'o',
    Color.PLAYER_B: 'x',
    Color.EMPTY: '.',
}
GLYPH_TO_COLOR = {glyph: color for color, glyph in GLYPHS.items()}

_LABEL_RE = re.compile(r'^([a-z])(\d{1,2})$')


def position_to_label(pos: Position) -> str:
    """Convert a position to notation (e.g., Position(2, 0) -> 'a3')."""
    return chr(ord('a') + pos.col) + str(pos.row + 1)


def label_to_position(label: str) -> Position:
    """
    Parse notation into a position.

    Raises ValueError for malformed or off-board labels.
    """
    match = _LABEL_RE.match(label.strip().lower())
    if not match:
        raise ValueError(f"Invalid position: {label!r}")
    col = ord(match.group(1)) - ord('a')
    row = int(match.group(2)) - 1
    if not is_valid_sq(row, col):
        raise ValueError(f"Position off the board: {label!r}")
    return Position(row, col)


def render(state: GameState) -> str:
    """Render the board as text (see module docstring for the layout)."""
    lines = ["  |" + "".join(chr(ord('A') + col) for col in range(BOARD_SIZE))]
    lines.append("-" * (BOARD_SIZE + 3))
    for row in range(BOARD_SIZE):
        cells = "".join(GLYPHS[state.at(Position(row, col))] for col in range(BOARD_SIZE))
        lines.append(f"{row + 1:>2}|{cells}")
    return "\n".join(lines)


def parse_board(lines: Iterable[str]) -> GameState:
    """
    Build a state from rows of glyphs.

    Accepts either bare rows ("oo..x") or the full render() output; the
    header, the rule and any "NN|" row prefixes are skipped. Whitespace inside
    a row is ignored.

    Raises ValueError if the row count, a row length or a glyph is wrong.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    rows = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith('|') or set(line) == {'-'}:
            continue
        if '|' in line:
            prefix, line = line.split('|', 1)
            if not prefix.strip().isdigit():
                continue  # header row
        rows.append(line.replace(' ', ''))

    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")

    grid = []
    for r, row in enumerate(rows):
        if len(row) != BOARD_SIZE:
            raise ValueError(f"Row {r + 1} has {len(row)} cells, expected {BOARD_SIZE}")
        try:
            grid.append([GLYPH_TO_COLOR[glyph] for glyph in row])
        except KeyError as e:
            raise ValueError(f"Unknown glyph {e.args[0]!r} in row {r + 1}") from None

    return GameState.from_grid(grid)


def format_ranking(moves: Sequence[tuple[int, Position]]) -> str:
    """Format a ranked move list, e.g. 'c3 (+4), d2 (+2)'."""
    return ", ".join(f"{position_to_label(pos)} ({score:+d})" for score, pos in moves)
