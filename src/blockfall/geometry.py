"""Pure geometry helpers for four-cell piece shapes.

A shape is an ordered tuple of exactly four :class:`Point` objects.  Row ``0``
is the bottom of the playfield, so moving a shape "down" means subtracting
from its rows.  Element ``1`` of every shape is the rotation pivot.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple


# First row of the hidden spawn buffer; anything locked at or above it ends
# the game.
SPAWN_LIMIT_ROW = 20

PIVOT_INDEX = 1


class Point(NamedTuple):
    """Integer ``(row, col)`` coordinate on the board."""

    row: int
    col: int


Shape = Tuple[Point, Point, Point, Point]


def make_shape(*cells: Tuple[int, int]) -> Shape:
    """Build a :data:`Shape` from four ``(row, col)`` pairs."""

    if len(cells) != 4:
        raise ValueError(f"A shape needs exactly 4 cells, got {len(cells)}")
    return tuple(Point(r, c) for r, c in cells)  # type: ignore[return-value]


def translate(shape: Shape, d_row: int, d_col: int) -> Shape:
    """Return ``shape`` shifted by ``d_row`` rows and ``d_col`` columns."""

    return tuple(Point(p.row + d_row, p.col + d_col) for p in shape)  # type: ignore[return-value]


def move_down(shape: Shape) -> Shape:
    return translate(shape, -1, 0)


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate the three non-pivot points 90 degrees about the pivot.

    With ``d_row = pivot.row - p.row`` and ``d_col = pivot.col - p.col`` each
    point maps to ``(pivot.row - d_col, pivot.col + d_row)``.  The pivot itself
    is kept as is, so four successive rotations return the original shape.
    """

    pivot = shape[PIVOT_INDEX]
    rotated = []
    for index, point in enumerate(shape):
        if index == PIVOT_INDEX:
            rotated.append(pivot)
            continue
        d_row = pivot.row - point.row
        d_col = pivot.col - point.col
        rotated.append(Point(pivot.row - d_col, pivot.col + d_row))
    return tuple(rotated)  # type: ignore[return-value]


def width(shape: Shape) -> int:
    """Return the column span (rightmost minus leftmost column)."""

    cols = [p.col for p in shape]
    return max(cols) - min(cols)


def height(shape: Shape) -> int:
    """Return the row span (topmost minus bottommost row)."""

    rows = [p.row for p in shape]
    return max(rows) - min(rows)


def is_above_spawn_limit(shape: Shape) -> bool:
    """Return ``True`` if any point sits in the hidden spawn rows."""

    return any(p.row >= SPAWN_LIMIT_ROW for p in shape)


__all__ = [
    "PIVOT_INDEX",
    "SPAWN_LIMIT_ROW",
    "Point",
    "Shape",
    "height",
    "is_above_spawn_limit",
    "make_shape",
    "move_down",
    "rotate_clockwise",
    "translate",
    "width",
]
