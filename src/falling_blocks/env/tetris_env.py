from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, GameConfig, PIECE_RGB, ScoringRules, TetrisGame, TetrominoType

NOOP = len(Command)


class TetrisEnv(gym.Env):
    """
    Gravity-driven environment over the falling-block engine.

    Actions (5 total):
      0: Move Left
      1: Move Right
      2: Soft Drop
      3: Rotate
      4: No-op

    Every step applies the action and then one gravity tick, so a piece
    locks when the tick cannot move it down. Reward is the score gained.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 max_episode_steps: int = 10_000) -> None:
        super().__init__()
        self.game = TetrisGame(config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.config.height, self.game.config.width
        k = len(TetrominoType)

        # Observation space: board with active piece overlaid negative, next piece kind
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-k, high=k, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(k + 1),
            }
        )
        self.action_space = spaces.Discrete(NOOP + 1)

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        nxt = self.game.next_piece
        return {
            "board": self.game.get_state().astype(np.int8),
            "next_piece": int(nxt.kind) if nxt is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "max_height": self.game.grid.get_max_height(),
            "holes": self.game.grid.count_holes(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        score_before = self.game.score
        if action != NOOP:
            self.game.command(Command(action))
        self.game.on_tick()
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        info = self._get_info()
        info["lines_cleared"] = self.game.last_clear
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(state[y, x])
                    color = PIECE_RGB[TetrominoType(abs(v))] if v else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
