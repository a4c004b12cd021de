from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import GameSnapshot, GameStatus, PIECE_RGB

BACKGROUND = (10, 10, 14)
EMPTY = (20, 20, 26)
TEXT = (230, 230, 240)
GAME_OVER = (239, 68, 68)
UNKNOWN = (200, 200, 200)

_PALETTE = {int(kind): rgb for kind, rgb in PIECE_RGB.items()}


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY
    return _PALETTE.get(abs(v), UNKNOWN)


def compose_board(snapshot: GameSnapshot) -> np.ndarray:
    """Board cells with the active piece painted over them (rows inside the board only)."""
    state = snapshot.board.copy()
    if snapshot.active_shape is None or snapshot.active_kind is None:
        return state
    h, w = state.shape
    for dy, dx in zip(*np.nonzero(snapshot.active_shape)):
        x = snapshot.active_x + int(dx)
        y = snapshot.active_y + int(dy)
        if 0 <= y < h and 0 <= x < w:
            state[y, x] = int(snapshot.active_kind)
    return state


class Renderer:
    def __init__(self, cell_size: int = 24, margin: int = 20, panel_width: int = 160) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.panel_width + self.margin * 3,
            height * self.cell_size + self.margin * 2,
        )

    def _cells_surface(self, cells: np.ndarray, cell_size: int) -> pygame.Surface:
        h, w = cells.shape
        surf = pygame.Surface((w * cell_size, h * cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(x * cell_size, y * cell_size, cell_size - 1, cell_size - 1)
                pygame.draw.rect(surf, _color_for_value(int(cells[y, x])), rect)
        return surf

    def _next_surface(self, snapshot: GameSnapshot) -> Optional[pygame.Surface]:
        if snapshot.next_shape is None or snapshot.next_kind is None:
            return None
        cells = snapshot.next_shape.astype(np.int8) * int(snapshot.next_kind)
        return self._cells_surface(cells, self.cell_size * 3 // 4)

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        screen.fill(BACKGROUND)
        board = self._cells_surface(compose_board(snapshot), self.cell_size)
        screen.blit(board, (self.margin, self.margin))

        panel_x = self.margin * 2 + board.get_width()
        nxt = self._next_surface(snapshot)
        if nxt is not None:
            screen.blit(nxt, (panel_x, self.margin + 30))

        if pygame.font.get_init():
            if self._font is None:
                self._font = pygame.font.SysFont(None, 28)
            screen.blit(self._font.render("Next", True, TEXT), (panel_x, self.margin))
            screen.blit(self._font.render(f"Score {snapshot.score}", True, TEXT), (panel_x, self.margin + 140))
            if snapshot.status is GameStatus.GAME_OVER:
                screen.blit(self._font.render("Game Over", True, GAME_OVER), (panel_x, self.margin + 170))
            elif snapshot.status is GameStatus.IDLE:
                screen.blit(self._font.render("Enter to start", True, TEXT), (panel_x, self.margin + 170))
