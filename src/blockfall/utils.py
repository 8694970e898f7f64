"""Utility helpers for the Blockfall engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .rules import TimingRules
from .tetromino import Cell


def gravity_interval(level: int, timing: Optional[TimingRules] = None) -> float:
    """Return the seconds between gravity steps at ``level``.

    Each level shaves ``gravity_step`` off the base interval until the
    ``min_gravity`` floor is reached.
    """

    timing = timing or TimingRules()
    return max(timing.min_gravity, timing.base_gravity - level * timing.gravity_step)


def render_grid(board: Board, ghost: bool = True, visible_only: bool = True) -> List[List[int]]:
    """Return the board as rows of cell values ordered top to bottom.

    This is a convenience for renderers that draw from the top of the screen
    without mutating the board.  The active piece is already part of the
    grid; with ``ghost`` set, empty cells under the piece's landing position
    are marked ``Cell.GRAY``.
    """

    grid = [[int(v) for v in row] for row in board.grid]
    if ghost:
        shape = board.ghost_shape()
        if shape is not None:
            for r, c in shape:
                if grid[r][c] == Cell.EMPTY:
                    grid[r][c] = int(Cell.GRAY)
    rows = board.visible_height if visible_only else board.height
    return [grid[r] for r in reversed(range(rows))]


_GLYPHS = {Cell.EMPTY: ".", Cell.GRAY: ":"}


def format_grid(rows: List[List[int]]) -> str:
    """Render rows from :func:`render_grid` as ASCII art."""

    return "\n".join("".join(_GLYPHS.get(Cell(v), "#") for v in row) for row in rows)
