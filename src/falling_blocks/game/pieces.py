from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    S = 6
    Z = 7


Shape = np.ndarray


# Rotation state 0 of every kind, in its natural bounding box
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
}
for _base in BASE_SHAPES.values():
    _base.setflags(write=False)

PIECE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "cyan",
    TetrominoType.O: "yellow",
    TetrominoType.T: "purple",
    TetrominoType.L: "orange",
    TetrominoType.J: "blue",
    TetrominoType.S: "green",
    TetrominoType.Z: "red",
}

PIECE_RGB: Dict[TetrominoType, Tuple[int, int, int]] = {
    TetrominoType.I: (6, 182, 212),
    TetrominoType.O: (234, 179, 8),
    TetrominoType.T: (168, 85, 247),
    TetrominoType.L: (249, 115, 22),
    TetrominoType.J: (59, 130, 246),
    TetrominoType.S: (34, 197, 94),
    TetrominoType.Z: (239, 68, 68),
}


def rotate_cw(shape: Shape) -> Shape:
    """Transpose, then reverse each row.

    This turns the matrix 90 degrees clockwise about its own bounding box, so
    non-square footprints shift inside the box. Always returns a new array.
    """
    return shape.T[:, ::-1].copy()


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.shape is None:
            self.shape = BASE_SHAPES[self.kind].copy()

    @property
    def color(self) -> str:
        return PIECE_COLORS[self.kind]

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        h, w = self.shape.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells


class PieceGenerator:
    """Uniform random source of pieces.

    Every call is independent of the previous ones: no bag, no repeat
    rejection.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def next(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece(kind)
