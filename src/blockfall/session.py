"""Real-time session loop driving a :class:`~blockfall.board.Board`.

The session owns every timer.  A front-end calls :meth:`Session.tick` once per
frame with the elapsed seconds and the commands seen during that frame, then
reads the grid, score and next piece back for drawing.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Iterable, List, Optional

from .board import Board, Direction, Grid
from .geometry import Point
from .rules import ScoringRules, TimingRules
from .tetromino import PieceKind
from .utils import gravity_interval


LOGGER = logging.getLogger(__name__)


class Command(Enum):
    """Player input delivered to the session.

    ``MOVE_LEFT`` and ``MOVE_RIGHT`` are level triggered: pass them for every
    tick the key is held.  The remaining commands are edges and are sent
    once per press or release.
    """

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE = "rotate"
    SOFT_DROP_START = "soft_drop_start"
    SOFT_DROP_END = "soft_drop_end"
    HARD_DROP = "hard_drop"


class Session:
    """Mutable state for one game: the board plus every timer."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        scoring: Optional[ScoringRules] = None,
        timing: Optional[TimingRules] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.scoring = scoring or ScoringRules()
        self.timing = timing or TimingRules()
        self.paused = False
        self.reset()

    def reset(self) -> None:
        """Start a new game on an empty board."""

        self.board = Board(rng=self.rng, scoring=self.scoring)
        self.level = 0
        self.base_interval = gravity_interval(0, self.timing)
        self.gravity_interval = self.base_interval
        self.gravity_timer = 0.0
        self.level_up_timer = self.timing.level_length
        self.repeat_delay = 0.0
        self.repeat_count = 0
        self.soft_dropping = False
        self._reported_game_over = False
        self.board.spawn()
        LOGGER.info("Game started")

    # Queries ----------------------------------------------------------
    @property
    def score(self) -> int:
        return self.board.score

    @property
    def game_over(self) -> bool:
        return self.board.game_over

    @property
    def current_kind(self) -> Optional[PieceKind]:
        return self.board.active.kind if self.board.active is not None else None

    @property
    def next_kind(self) -> PieceKind:
        return self.board.next_kind

    def grid(self) -> Grid:
        return self.board.snapshot()

    def active_cells(self) -> List[Point]:
        return self.board.active_cells()

    def ghost_cells(self) -> List[Point]:
        shape = self.board.ghost_shape()
        return list(shape) if shape is not None else []

    # Controls ---------------------------------------------------------
    def pause(self) -> None:
        if not self.paused:
            self.paused = True
            LOGGER.info("Paused")

    def resume(self) -> None:
        if self.paused:
            self.paused = False
            LOGGER.info("Resumed")

    # Frame update -----------------------------------------------------
    def tick(self, dt: float, commands: Iterable[Command] = ()) -> None:
        """Advance the session by ``dt`` seconds and apply ``commands``.

        At most one gravity step runs per tick and every command is handled
        at most once, however often it appears in ``commands``.
        """

        if self.game_over:
            return
        pending = set(commands)
        if self.paused:
            # A key released during the pause must still end the soft drop.
            if Command.SOFT_DROP_END in pending:
                self._end_soft_drop()
            return

        self.gravity_timer += dt
        self.level_up_timer -= dt

        if self.gravity_timer > self.gravity_interval:
            self.gravity_timer -= self.gravity_interval
            if self.board.apply_gravity():
                self.board.score += self.scoring.gravity_lock
                if self._check_game_over():
                    return
            elif self.board.is_touching_floor():
                self.gravity_timer -= self.gravity_interval

        if self.repeat_delay > 0.0:
            self.repeat_delay = max(self.repeat_delay - dt, 0.0)

        if self.level_up_timer <= 0:
            self._level_up()

        if Command.MOVE_RIGHT in pending:
            self._repeat_move(Direction.RIGHT)
        if Command.MOVE_LEFT in pending:
            self._repeat_move(Direction.LEFT)

        if Command.SOFT_DROP_START in pending:
            self.soft_dropping = True
            self.gravity_interval = self.timing.soft_drop_gravity
            self.gravity_timer = min(self.gravity_timer, self.timing.soft_drop_gravity)
        if Command.SOFT_DROP_END in pending:
            self._end_soft_drop()

        if Command.ROTATE in pending:
            self.board.rotate_piece()
            if self.board.is_touching_floor():
                self.gravity_timer = 0.0

        if Command.HARD_DROP in pending:
            self.board.instant_drop()
            self.board.score += self.scoring.hard_drop
            if self._check_game_over():
                return

        if Command.MOVE_LEFT not in pending and Command.MOVE_RIGHT not in pending:
            self.repeat_count = 0
            self.repeat_delay = 0.0

    def _repeat_move(self, direction: Direction) -> None:
        if self.repeat_delay != 0.0:
            return
        self.board.move_piece(direction)
        if self.repeat_count > 0:
            self.repeat_delay = self.timing.repeat_delay
        else:
            self.repeat_delay = self.timing.repeat_initial_delay
        self.repeat_count += 1

    def _end_soft_drop(self) -> None:
        self.soft_dropping = False
        self.gravity_interval = self.base_interval

    def _level_up(self) -> None:
        self.level += 1
        self.base_interval = gravity_interval(self.level, self.timing)
        self.level_up_timer = self.timing.level_length
        if not self.soft_dropping:
            self.gravity_interval = self.base_interval
        LOGGER.info("Level %d: gravity every %.2fs", self.level, self.base_interval)

    def _check_game_over(self) -> bool:
        if not self.game_over:
            return False
        if not self._reported_game_over:
            self._reported_game_over = True
            LOGGER.info("Game over. Final score: %d", self.score)
        return True


__all__ = ["Command", "Session"]
