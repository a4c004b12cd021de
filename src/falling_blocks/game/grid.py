from __future__ import annotations

from typing import List

import numpy as np


class GameGrid:
    """Fixed-size playfield of settled cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the identity of the tetromino that filled the cell and
    map to a color through ``PIECE_COLORS``. Row 0 is the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_valid_placement(self, shape: np.ndarray, x: int, y: int) -> bool:
        """Check every occupied cell of ``shape`` anchored at (x, y).

        Cells above row 0 are free; there is no upper bound on ``y``.
        """
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                if not shape[dy, dx]:
                    continue
                bx = x + dx
                by = y + dy
                if bx < 0 or bx >= self.width:
                    return False
                if by >= self.height:
                    return False
                if by >= 0 and self.grid[by, bx] != 0:
                    return False
        return True

    def merge(self, shape: np.ndarray, x: int, y: int, value: int) -> int:
        """Write ``value`` under the occupied cells of ``shape``.

        Assumes the position was validated. Returns the number of cells written;
        cells above the board are dropped.
        """
        written = 0
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                if shape[dy, dx] and y + dy >= 0:
                    self.grid[y + dy, x + dx] = value
                    written += 1
        return written

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self.grid != 0, axis=1))[0]]

    def clear_full_rows(self) -> int:
        rows = self.full_rows()
        if not rows:
            return 0
        num = len(rows)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.grid, rows, axis=0)
        padding = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((padding, kept))
        assert self.grid.shape == (self.height, self.width)
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
