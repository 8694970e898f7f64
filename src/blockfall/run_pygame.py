"""Simple pygame front-end for the Blockfall engine.

This module provides a minimal playable version of the game on top of
:class:`~blockfall.session.Session`.  It is intentionally lightweight: it turns
keyboard state into :class:`~blockfall.session.Command` values, feeds them to
the session once per frame and draws whatever the session reports back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Mapping

import pygame

from .board import Board
from .geometry import height, width
from .session import Command, Session
from .tetromino import Cell, PieceKind, canonical_shape, color_of

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 20
# Frames per second to run the game loop at
FPS = 60
# Width of the panel on the left holding the next-piece preview
PANEL_WIDTH = 6 * CELL_SIZE

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)

# Colours for each base cell value; special variants reuse their base colour
CELL_COLORS = {
    Cell.CYAN: (0, 255, 255),
    Cell.BLUE: (0, 0, 255),
    Cell.PINK: (255, 105, 180),
    Cell.PURPLE: (128, 0, 128),
    Cell.RED: (255, 0, 0),
    Cell.YELLOW: (255, 255, 0),
    Cell.GREEN: (0, 255, 0),
    Cell.GRAY: (128, 128, 128),
}


def cell_color(value: int) -> tuple[int, int, int]:
    return CELL_COLORS[Cell(value).base]


def commands_from_input(
    events: Iterable[pygame.event.Event], pressed: Mapping[int, bool]
) -> List[Command]:
    """Translate one frame of keyboard input into session commands.

    Arrow keys left/right are reported for as long as they are held; the
    session debounces them.  Every other command is edge triggered.
    """

    commands: List[Command] = []
    for event in events:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_UP:
                commands.append(Command.ROTATE)
            elif event.key == pygame.K_DOWN:
                commands.append(Command.SOFT_DROP_START)
            elif event.key == pygame.K_SPACE:
                commands.append(Command.HARD_DROP)
        elif event.type == pygame.KEYUP and event.key == pygame.K_DOWN:
            commands.append(Command.SOFT_DROP_END)
    if pressed[pygame.K_LEFT]:
        commands.append(Command.MOVE_LEFT)
    if pressed[pygame.K_RIGHT]:
        commands.append(Command.MOVE_RIGHT)
    return commands


def cell_rect(row: int, col: int) -> pygame.Rect:
    """Return the screen rectangle for board cell ``(row, col)``.

    Row ``0`` is the bottom of the board, so rows are flipped for drawing.
    """

    top = (Board.visible_height - 1 - row) * CELL_SIZE
    return pygame.Rect(PANEL_WIDTH + col * CELL_SIZE, top, CELL_SIZE, CELL_SIZE)


def draw_board(screen: pygame.Surface, session: Session) -> None:
    """Render the visible rows of the grid, active piece included."""

    grid = session.grid()
    for r in range(Board.visible_height):
        for c in range(Board.width):
            rect = cell_rect(r, c)
            value = int(grid[r][c])
            if value != Cell.EMPTY:
                pygame.draw.rect(screen, cell_color(value), rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_ghost(screen: pygame.Surface, session: Session) -> None:
    """Render the landing position as half-size grey squares."""

    grid = session.grid()
    for r, c in session.ghost_cells():
        if r >= Board.visible_height or grid[r][c] != Cell.EMPTY:
            continue
        rect = cell_rect(r, c).inflate(-CELL_SIZE // 2, -CELL_SIZE // 2)
        pygame.draw.rect(screen, CELL_COLORS[Cell.GRAY], rect)


def draw_preview(screen: pygame.Surface, kind: PieceKind) -> None:
    """Render ``kind`` centred in the left-hand preview panel."""

    shape = canonical_shape(kind)
    span_w = (width(shape) + 1) * CELL_SIZE
    span_h = (height(shape) + 1) * CELL_SIZE
    left = (PANEL_WIDTH - span_w) // 2
    top = 4 * CELL_SIZE
    for r, c in shape:
        rect = pygame.Rect(
            left + c * CELL_SIZE, top + span_h - (r + 1) * CELL_SIZE, CELL_SIZE, CELL_SIZE
        )
        pygame.draw.rect(screen, cell_color(color_of(kind)), rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(self) -> None:
        self._running = False
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self.session: Session | None = None

    @property
    def running(self) -> bool:
        return self._running

    def handle_events(self, events: List[pygame.event.Event]) -> List[pygame.event.Event]:
        """Consume window and pause events, returning the rest."""

        remaining = []
        for event in events:
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_p:
                if self.session and self.session.paused:
                    self.resume()
                else:
                    self.pause()
            else:
                remaining.append(event)
        return remaining

    def frame(self, dt: float, events: List[pygame.event.Event], pressed: Mapping[int, bool]) -> None:
        """Run one frame of game logic; ``dt`` is in seconds."""

        if self.session is None:
            return
        events = self.handle_events(events)
        self.session.tick(dt, commands_from_input(events, pressed))
        if self.session.game_over:
            self._running = False

    def _draw(self) -> None:
        if not self._screen or not self.session:
            return
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, self.session)
        draw_ghost(self._screen, self.session)
        draw_preview(self._screen, self.session.next_kind)
        pygame.display.set_caption(
            f"Blockfall - {'Paused - ' if self.session.paused else ''}"
            f"Level {self.session.level} - Score: {self.session.score}"
        )
        pygame.display.flip()

    async def _run_loop(self) -> None:
        pygame.init()
        size = (PANEL_WIDTH + Board.width * CELL_SIZE, Board.visible_height * CELL_SIZE)
        self._screen = pygame.display.set_mode(size)
        self._clock = pygame.time.Clock()
        self.session = Session()

        self._running = True
        while self._running:
            dt = self._clock.tick(FPS) / 1000.0
            self.frame(dt, pygame.event.get(), pygame.key.get_pressed())
            self._draw()
            # Yield to the host event loop between frames
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._running:
            LOGGER.info("Game already running")
            return
        asyncio.run(self._run_loop())

    def pause(self) -> None:
        if not self.session:
            LOGGER.info("Pause ignored: game not running")
            return
        self.session.pause()

    def resume(self) -> None:
        if not self.session:
            LOGGER.info("Resume ignored: game not running")
            return
        self.session.resume()

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    GameRunner().start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
