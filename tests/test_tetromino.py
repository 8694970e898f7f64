from __future__ import annotations

import random

import pytest

from blockfall.geometry import translate
from blockfall.tetromino import (
    Cell,
    PieceKind,
    canonical_shape,
    color_of,
    random_kind,
    random_offset,
    spawn_offset_range,
)


def _contiguous(cells) -> bool:
    cells = set(cells)
    start = next(iter(cells))
    seen = {start}
    stack = [start]
    while stack:
        r, c = stack.pop()
        for n in ((r + 1, c), (r - 1, c), (r, c + 1), (r, c - 1)):
            if n in cells and n not in seen:
                seen.add(n)
                stack.append(n)
    return seen == cells


@pytest.mark.parametrize("kind", list(PieceKind))
def test_canonical_shapes_are_tetrominoes_in_two_rows(kind: PieceKind) -> None:
    shape = canonical_shape(kind)
    assert len(set(shape)) == 4
    assert {p.row for p in shape} <= {0, 1}
    assert min(p.col for p in shape) == 0
    assert _contiguous(shape)


def test_colors_are_one_to_one() -> None:
    colors = [color_of(kind) for kind in PieceKind]
    assert len(set(colors)) == 7
    assert Cell.EMPTY not in colors
    assert color_of(PieceKind.I) is Cell.BLUE
    assert color_of("O") is Cell.PINK


def test_invalid_kind_fails_loudly() -> None:
    with pytest.raises(ValueError):
        canonical_shape("X")
    with pytest.raises(ValueError):
        color_of("Q")


def test_special_cells_alias_their_base_colour() -> None:
    assert Cell.RED_SPECIAL.base is Cell.RED
    assert Cell.GRAY_SPECIAL.base is Cell.GRAY
    assert Cell.GREEN.base is Cell.GREEN


def test_random_kind_is_reproducible_with_seed() -> None:
    first = [random_kind(random.Random(5)) for _ in range(3)]
    rng_a, rng_b = random.Random(99), random.Random(99)
    seq_a = [random_kind(rng_a) for _ in range(50)]
    seq_b = [random_kind(rng_b) for _ in range(50)]
    assert seq_a == seq_b
    assert len(set(first)) == 1
    assert set(seq_a) <= set(PieceKind)


def test_spawn_offset_range_depends_on_width() -> None:
    assert spawn_offset_range(PieceKind.I) == 6
    assert spawn_offset_range(PieceKind.O) == 8
    for kind in (PieceKind.J, PieceKind.L, PieceKind.S, PieceKind.T, PieceKind.Z):
        assert spawn_offset_range(kind) == 7


@pytest.mark.parametrize("kind", list(PieceKind))
def test_random_offsets_keep_spawn_on_board(kind: PieceKind) -> None:
    rng = random.Random(3)
    for _ in range(200):
        offset = random_offset(kind, rng)
        assert 0 <= offset <= spawn_offset_range(kind)
        cols = [p.col for p in translate(canonical_shape(kind), 20, offset)]
        assert 0 <= min(cols) and max(cols) <= 9
