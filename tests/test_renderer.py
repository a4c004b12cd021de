from __future__ import annotations

import pygame

from falling_blocks.game import GameConfig, Piece, TetrisGame, TetrominoType
from falling_blocks.visualization.human_play import KEY_TO_COMMAND
from falling_blocks.visualization.renderer import Renderer, compose_board


def test_compose_board_paints_active_piece():
    game = TetrisGame(GameConfig(random_seed=0))
    game.start()
    game.current_piece = Piece(TetrominoType.O)
    game.current_x, game.current_y = 0, -1
    game.grid.grid[19, 9] = int(TetrominoType.Z)

    cells = compose_board(game.snapshot())
    assert list(cells[0, :3]) == [2, 2, 0]
    assert cells[19, 9] == int(TetrominoType.Z)
    assert game.grid.grid[0, 0] == 0


def test_draw_onto_surface():
    game = TetrisGame()
    renderer = Renderer(cell_size=10)
    surface = pygame.Surface(renderer.window_size(game.config.width, game.config.height))
    renderer.draw(surface, game.snapshot())
    game.start()
    renderer.draw(surface, game.snapshot())
    assert tuple(surface.get_at((renderer.margin + 2, renderer.margin + 2)))[:3] == (20, 20, 26)


def test_arrow_keys_map_to_commands():
    assert set(KEY_TO_COMMAND) == {pygame.K_LEFT, pygame.K_RIGHT, pygame.K_DOWN, pygame.K_UP}


def test_unknown_cell_value_uses_fallback_color():
    from falling_blocks.visualization.renderer import EMPTY, UNKNOWN, _color_for_value

    assert _color_for_value(0) == EMPTY
    assert _color_for_value(-int(TetrominoType.I)) == _color_for_value(int(TetrominoType.I))
    assert _color_for_value(42) == UNKNOWN
