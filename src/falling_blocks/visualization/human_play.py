from __future__ import annotations

from typing import Dict

import pygame

from falling_blocks.game import Command, GameConfig, GameDriver, TetrisGame
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
}

START_KEYS = (pygame.K_RETURN, pygame.K_r)


def run(config: GameConfig | None = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(config)
        driver = GameDriver(game)
        renderer = Renderer()

        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in START_KEYS:
                        driver.start()
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            driver.submit(command)

            driver.pump(pygame.time.get_ticks())
            renderer.draw(screen, game.snapshot())
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
