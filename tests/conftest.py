from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from falling_blocks.game import GameConfig, Piece, TetrisGame, TetrominoType  # noqa: E402


@pytest.fixture
def game() -> TetrisGame:
    g = TetrisGame(GameConfig(random_seed=7))
    g.start()
    return g


@pytest.fixture
def place_piece():
    """Replace the active (and optionally next) piece with known kinds."""

    def _place(g: TetrisGame, kind: TetrominoType, x: int, y: int, shape=None, next_kind=None) -> Piece:
        piece = Piece(kind, None if shape is None else shape.copy())
        g.current_piece = piece
        g.current_x = x
        g.current_y = y
        if next_kind is not None:
            g.next_piece = Piece(next_kind)
        return piece

    return _place
