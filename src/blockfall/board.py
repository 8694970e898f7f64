"""Board representation for the Blockfall playfield.

The grid is a ``HEIGHT x WIDTH`` numpy array indexed ``grid[row, col]`` with
row ``0`` at the bottom.  The two topmost rows are the hidden spawn buffer.
The active piece is painted into the grid like any settled block, so every
operation that tests a candidate position lifts the piece out first to avoid
colliding with its own cells.
"""

from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterator, List, Optional

import numpy as np
from numpy.typing import NDArray

from .geometry import (
    SPAWN_LIMIT_ROW,
    Point,
    Shape,
    is_above_spawn_limit,
    move_down,
    rotate_clockwise,
    translate,
)
from .rules import ScoringRules
from .tetromino import (
    BOARD_COLUMNS,
    Cell,
    PieceKind,
    canonical_shape,
    color_of,
    random_kind,
    random_offset,
    spawn_offset_range,
)


LOGGER = logging.getLogger(__name__)

# Dimensions of the playfield, including the two hidden spawn rows.
WIDTH = BOARD_COLUMNS
HEIGHT = 22

Grid = NDArray[np.uint8]

# Offsets tried in order after a raw rotation: in place, one column right,
# one column left, one row down.
ROTATION_KICKS = ((0, 0), (0, 1), (0, -1), (-1, 0))


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with ``Cell.EMPTY``."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Direction(IntEnum):
    LEFT = -1
    RIGHT = 1


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece: its kind and its current board cells."""

    kind: PieceKind
    shape: Shape

    @property
    def color(self) -> Cell:
        return color_of(self.kind)


class Board:
    """Grid state plus the piece under player control.

    Mutating operations never raise for illegal moves; they leave the board
    untouched and return ``False``.  Once :attr:`game_over` is set no further
    piece is spawned and every mutation is ignored.
    """

    width: int = WIDTH
    height: int = HEIGHT
    visible_height: int = SPAWN_LIMIT_ROW

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        scoring: Optional[ScoringRules] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.scoring = scoring or ScoringRules()
        self.grid: Grid = create_empty_grid()
        self.active: Optional[ActivePiece] = None
        self.next_kind: PieceKind = random_kind(self.rng)
        self.score = 0
        self.lines_cleared = 0
        self.last_cleared = 0
        self.pieces = 0
        self.game_over = False

    # Cell access ------------------------------------------------------
    def get_cell(self, row: int, col: int) -> Cell:
        """Return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return Cell(int(self.grid[row, col]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def snapshot(self) -> Grid:
        """Return a copy of the full grid, active piece included."""

        return self.grid.copy()

    def check_collision(self, shape: Shape) -> bool:
        """Return ``True`` if ``shape`` leaves the board or hits a filled cell."""

        for row, col in shape:
            if not (0 <= row < self.height and 0 <= col < self.width):
                return True
            if self.grid[row, col] != Cell.EMPTY:
                return True
        return False

    # Active piece -----------------------------------------------------
    def _paint(self, shape: Shape, value: int) -> None:
        for row, col in shape:
            self.grid[row, col] = value

    @contextmanager
    def _lifted(self) -> Iterator[ActivePiece]:
        """Erase the active piece for the duration of the block.

        Whatever ``self.active`` holds when the block exits is painted back,
        so callers adopt a new position simply by reassigning it.
        """
        piece = self.active
        assert piece is not None
        self._paint(piece.shape, Cell.EMPTY)
        try:
            yield piece
        finally:
            if self.active is not None:
                self._paint(self.active.shape, self.active.color)

    def place_active(self, kind: PieceKind, shape: Shape) -> ActivePiece:
        """Make ``shape`` the active piece, replacing any current one.

        Raises:
            ValueError: If ``shape`` leaves the board or overlaps a settled
                cell.  The board is left unchanged.
        """

        cells = tuple(Point(*p) for p in shape)
        if self.active is None:
            blocked = self.check_collision(cells)  # type: ignore[arg-type]
        else:
            with self._lifted():
                blocked = self.check_collision(cells)  # type: ignore[arg-type]
        if blocked:
            raise ValueError(f"Cannot place {PieceKind(kind).value} at {list(cells)}")
        return self._adopt(kind, cells)  # type: ignore[arg-type]

    def _adopt(self, kind: PieceKind, shape: Shape) -> ActivePiece:
        if self.active is not None:
            self._paint(self.active.shape, Cell.EMPTY)
        self.active = ActivePiece(PieceKind(kind), shape)
        self._paint(self.active.shape, self.active.color)
        return self.active

    def spawn(
        self, kind: Optional[PieceKind] = None, offset: Optional[int] = None
    ) -> Optional[ActivePiece]:
        """Spawn a piece into the hidden top rows and roll a new ``next_kind``.

        ``kind`` defaults to the pre-rolled :attr:`next_kind` and ``offset`` to
        a random column within :func:`spawn_offset_range`.
        """

        if self.game_over:
            return None
        kind = self.next_kind if kind is None else PieceKind(kind)
        if offset is None:
            offset = random_offset(kind, self.rng)
        elif not 0 <= offset <= spawn_offset_range(kind):
            raise ValueError(f"Spawn offset {offset} out of range for {kind.value}")
        shape = translate(canonical_shape(kind), SPAWN_LIMIT_ROW, offset)
        piece = self._adopt(kind, shape)
        self.next_kind = random_kind(self.rng)
        LOGGER.debug("Spawned %s at column %d, next %s", kind.value, offset, self.next_kind.value)
        return piece

    def active_cells(self) -> List[Point]:
        return list(self.active.shape) if self.active is not None else []

    # Player actions ---------------------------------------------------
    def move_piece(self, direction: int) -> bool:
        """Shift the active piece one column left (``-1``) or right (``1``)."""

        if self.active is None or self.game_over:
            return False
        step = int(Direction(direction))
        with self._lifted() as piece:
            candidate = translate(piece.shape, 0, step)
            if self.check_collision(candidate):
                return False
            self.active = replace(piece, shape=candidate)
        return True

    def rotate_piece(self) -> bool:
        """Rotate the active piece clockwise, trying each kick in turn.

        The square piece never rotates.  If every kick collides the piece is
        left exactly where it was.
        """

        if self.active is None or self.game_over:
            return False
        if self.active.kind is PieceKind.O:
            return False
        with self._lifted() as piece:
            rotated = rotate_clockwise(piece.shape)
            for d_row, d_col in ROTATION_KICKS:
                candidate = translate(rotated, d_row, d_col)
                if not self.check_collision(candidate):
                    self.active = replace(piece, shape=candidate)
                    return True
        return False

    def is_touching_floor(self) -> bool:
        """Return ``True`` if the active piece cannot move down one row."""

        if self.active is None:
            return False
        with self._lifted() as piece:
            return self.check_collision(move_down(piece.shape))

    def ghost_shape(self) -> Optional[Shape]:
        """Return where the active piece would lock if dropped right now."""

        if self.active is None:
            return None
        with self._lifted() as piece:
            shape = piece.shape
            while not self.check_collision(move_down(shape)):
                shape = move_down(shape)
        return shape

    def apply_gravity(self) -> bool:
        """Move the active piece down one row or lock it.

        Returns ``True`` when the piece locked during this call.
        """

        if self.active is None or self.game_over:
            return False
        with self._lifted() as piece:
            below = move_down(piece.shape)
            if not self.check_collision(below):
                self.active = replace(piece, shape=below)
                return False
        self._lock()
        return True

    def instant_drop(self) -> int:
        """Apply gravity until the piece locks and return the rows fallen."""

        if self.active is None or self.game_over:
            return 0
        fallen = 0
        while not self.apply_gravity():
            fallen += 1
        return fallen

    # Locking ----------------------------------------------------------
    def _lock(self) -> None:
        piece = self.active
        assert piece is not None
        # The piece's cells are already painted; they now belong to the stack.
        self.active = None
        self.pieces += 1
        if is_above_spawn_limit(piece.shape):
            self.game_over = True

        cleared = self._complete_rows(piece.shape)
        self.last_cleared = cleared
        if cleared:
            delta = self.scoring.score_for_lines(cleared)
            self.score += delta
            self.lines_cleared += cleared
            LOGGER.debug("Cleared %d row(s) for %d points. Score: %d", cleared, delta, self.score)

        if not self.game_over:
            self.spawn()

    def _complete_rows(self, shape: Shape) -> int:
        """Delete every full row among the rows spanned by ``shape``.

        Deleting a row shifts the rows above it down, so the same row indices
        are scanned again until a pass removes nothing.
        """

        rows = [p.row for p in shape]
        cleared = 0
        deleted = True
        while deleted:
            deleted = False
            for row in rows:
                if np.all(self.grid[row] != Cell.EMPTY):
                    self._delete_row(row)
                    deleted = True
                    cleared += 1
        return cleared

    def _delete_row(self, row: int) -> None:
        remaining = np.delete(self.grid, row, axis=0)
        top = np.zeros((1, self.width), dtype=self.grid.dtype)
        self.grid = np.vstack((remaining, top))


__all__ = [
    "ActivePiece",
    "Board",
    "Direction",
    "Grid",
    "HEIGHT",
    "ROTATION_KICKS",
    "WIDTH",
    "create_empty_grid",
]
