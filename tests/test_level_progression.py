import logging
import random

import pytest

from blockfall.geometry import make_shape
from blockfall.rules import TimingRules
from blockfall.session import Command, Session
from blockfall.tetromino import PieceKind
from blockfall.utils import gravity_interval


def _session(level_length: float) -> Session:
    session = Session(rng=random.Random(1), timing=TimingRules(level_length=level_length))
    session.board.place_active(PieceKind.I, make_shape((15, 0), (15, 1), (15, 2), (15, 3)))
    return session


def test_gravity_speed_increases_with_level():
    assert gravity_interval(1) < gravity_interval(0)
    assert gravity_interval(0) == pytest.approx(0.8)
    assert gravity_interval(3) == pytest.approx(0.5)
    assert gravity_interval(50) == pytest.approx(0.2)


def test_level_up_after_level_length():
    session = _session(level_length=1.0)
    session.tick(0.6)
    assert session.level == 0
    session.tick(0.5)
    assert session.level == 1
    assert session.gravity_interval == pytest.approx(0.7)
    assert session.level_up_timer == pytest.approx(1.0)


def test_interval_never_drops_below_floor():
    session = _session(level_length=1.0)
    for _ in range(10):
        session.tick(1.0)
    assert session.level == 10
    assert session.gravity_interval == pytest.approx(0.2)


def test_level_up_while_soft_dropping_keeps_fast_fall():
    session = _session(level_length=1.0)
    session.tick(0.0, [Command.SOFT_DROP_START])
    session.tick(1.0)
    assert session.level == 1
    assert session.gravity_interval == pytest.approx(0.08)
    session.tick(0.0, [Command.SOFT_DROP_END])
    assert session.gravity_interval == pytest.approx(0.7)


def test_level_up_is_logged(caplog):
    session = _session(level_length=1.0)
    with caplog.at_level(logging.INFO, logger="blockfall.session"):
        session.tick(1.0)
    assert "Level 1" in caplog.text
