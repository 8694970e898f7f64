"""Falling-block puzzle engine: board simulation and session loop."""

from .board import ActivePiece, Board, Direction
from .geometry import Point, Shape, rotate_clockwise, translate
from .rules import ScoringRules, TimingRules
from .session import Command, Session
from .tetromino import Cell, PieceKind, canonical_shape, color_of
from .utils import format_grid, gravity_interval, render_grid

__all__ = [
    "ActivePiece",
    "Board",
    "Cell",
    "Command",
    "Direction",
    "PieceKind",
    "Point",
    "ScoringRules",
    "Session",
    "Shape",
    "TimingRules",
    "canonical_shape",
    "color_of",
    "format_grid",
    "gravity_interval",
    "render_grid",
    "rotate_clockwise",
    "translate",
]
