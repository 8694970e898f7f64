"""Piece catalog: the seven tetromino kinds, their shapes and colours.

Every canonical shape is defined in a local frame occupying rows ``0`` and
``1`` with the rotation pivot stored at index ``1``.  The square piece keeps
the same layout but is never rotated by the board.
"""

from __future__ import annotations

import random
from enum import Enum, IntEnum
from typing import Dict, Optional

from .geometry import Shape, make_shape, width


BOARD_COLUMNS = 10


class Cell(IntEnum):
    """Colour tag stored in each grid cell.  ``EMPTY`` must stay ``0``."""

    EMPTY = 0
    CYAN = 1
    BLUE = 2
    PINK = 3
    PURPLE = 4
    RED = 5
    YELLOW = 6
    GREEN = 7
    GRAY = 8
    # Reserved palette entries.  Nothing produces them yet; they render as
    # their base colour.
    CYAN_SPECIAL = 9
    BLUE_SPECIAL = 10
    PINK_SPECIAL = 11
    PURPLE_SPECIAL = 12
    RED_SPECIAL = 13
    YELLOW_SPECIAL = 14
    GREEN_SPECIAL = 15
    GRAY_SPECIAL = 16

    @property
    def base(self) -> "Cell":
        """Return the plain colour a special variant aliases."""

        if self >= Cell.CYAN_SPECIAL:
            return Cell(self - (Cell.CYAN_SPECIAL - Cell.CYAN))
        return self


class PieceKind(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


_CANONICAL_SHAPES: Dict[PieceKind, Shape] = {
    PieceKind.L: make_shape((1, 0), (1, 1), (1, 2), (0, 0)),
    PieceKind.I: make_shape((1, 0), (1, 1), (1, 2), (1, 3)),
    PieceKind.O: make_shape((1, 0), (1, 1), (0, 0), (0, 1)),
    PieceKind.T: make_shape((1, 0), (1, 1), (1, 2), (0, 1)),
    PieceKind.S: make_shape((0, 0), (0, 1), (1, 1), (1, 2)),
    PieceKind.Z: make_shape((1, 0), (1, 1), (0, 1), (0, 2)),
    PieceKind.J: make_shape((1, 0), (0, 1), (0, 0), (0, 2)),
}

_COLORS: Dict[PieceKind, Cell] = {
    PieceKind.L: Cell.CYAN,
    PieceKind.I: Cell.BLUE,
    PieceKind.O: Cell.PINK,
    PieceKind.T: Cell.PURPLE,
    PieceKind.S: Cell.RED,
    PieceKind.Z: Cell.YELLOW,
    PieceKind.J: Cell.GREEN,
}


def canonical_shape(kind: PieceKind) -> Shape:
    """Return the spawn-orientation shape for ``kind``.

    Raises:
        ValueError: If ``kind`` is not one of the seven piece kinds.
    """

    return _CANONICAL_SHAPES[PieceKind(kind)]


def color_of(kind: PieceKind) -> Cell:
    """Return the grid colour used for ``kind``."""

    return _COLORS[PieceKind(kind)]


def random_kind(rng: Optional[random.Random] = None) -> PieceKind:
    """Return a uniformly chosen piece kind drawn from ``rng``."""

    return (rng or random).choice(list(PieceKind))


def spawn_offset_range(kind: PieceKind) -> int:
    """Return the largest column offset a fresh ``kind`` may spawn at.

    The bound keeps the rightmost cell on the board: ``I`` gets ``6``, ``O``
    gets ``8`` and every three-wide piece gets ``7``.
    """

    return BOARD_COLUMNS - (width(canonical_shape(kind)) + 1)


def random_offset(kind: PieceKind, rng: Optional[random.Random] = None) -> int:
    """Pick a spawn column offset in ``[0, spawn_offset_range(kind)]``."""

    return (rng or random).randint(0, spawn_offset_range(kind))


__all__ = [
    "Cell",
    "PieceKind",
    "canonical_shape",
    "color_of",
    "random_kind",
    "random_offset",
    "spawn_offset_range",
]
