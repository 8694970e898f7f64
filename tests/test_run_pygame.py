import os
import random
from collections import defaultdict

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # noqa: E402

from blockfall.board import Board  # noqa: E402
from blockfall.run_pygame import (  # noqa: E402
    CELL_COLORS,
    CELL_SIZE,
    GameRunner,
    cell_color,
    cell_rect,
    commands_from_input,
)
from blockfall.session import Command, Session  # noqa: E402
from blockfall.tetromino import Cell  # noqa: E402


def _keys(*held):
    pressed = defaultdict(bool)
    for key in held:
        pressed[key] = True
    return pressed


def test_key_events_map_to_edge_commands():
    events = [
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_DOWN),
        pygame.event.Event(pygame.KEYUP, key=pygame.K_DOWN),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE),
        pygame.event.Event(pygame.KEYUP, key=pygame.K_UP),
    ]
    assert commands_from_input(events, _keys()) == [
        Command.ROTATE,
        Command.SOFT_DROP_START,
        Command.SOFT_DROP_END,
        Command.HARD_DROP,
    ]


def test_held_arrows_are_level_triggered():
    commands = commands_from_input([], _keys(pygame.K_LEFT, pygame.K_RIGHT))
    assert commands == [Command.MOVE_LEFT, Command.MOVE_RIGHT]
    assert commands_from_input([], _keys()) == []


def test_cell_geometry_and_colours():
    assert cell_rect(0, 0).top == (Board.visible_height - 1) * CELL_SIZE
    assert cell_rect(Board.visible_height - 1, 0).top == 0
    assert cell_color(Cell.RED_SPECIAL) == CELL_COLORS[Cell.RED]


def test_runner_toggles_pause_and_stops_on_quit():
    runner = GameRunner()
    runner.session = Session(rng=random.Random(0))
    runner._running = True

    runner.frame(0.0, [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p)], _keys())
    assert runner.session.paused is True
    runner.frame(0.0, [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p)], _keys())
    assert runner.session.paused is False

    runner.frame(0.0, [pygame.event.Event(pygame.QUIT)], _keys())
    assert runner.running is False


def test_runner_forwards_commands_and_stops_on_game_over():
    runner = GameRunner()
    runner.session = Session(rng=random.Random(0))
    runner._running = True

    space = [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)]
    runner.frame(0.0, space, _keys())
    assert runner.session.score == 12

    for row in range(2, 20):
        for col in range(1, Board.width):
            runner.session.board.set_cell(row, col, Cell.GRAY)
    runner.frame(0.0, space, _keys())
    assert runner.session.game_over is True
    assert runner.running is False


def test_soft_drop_released_while_paused_is_not_lost():
    runner = GameRunner()
    runner.session = Session(rng=random.Random(0))
    runner._running = True

    pause = [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p)]
    runner.frame(0.0, [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_DOWN)], _keys())
    runner.frame(0.0, pause, _keys())
    runner.frame(0.0, [pygame.event.Event(pygame.KEYUP, key=pygame.K_DOWN)], _keys())
    runner.frame(0.0, pause, _keys())

    assert runner.session.paused is False
    assert runner.session.gravity_interval == runner.session.base_interval
