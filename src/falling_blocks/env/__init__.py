"""Gymnasium environments for falling_blocks."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 10x20 environment (5 discrete actions)
register(
    id="FallingBlocks-10x20-v0",
    entry_point="falling_blocks.env.tetris_env:TetrisEnv",
)

__all__ = ["FallingBlocks-10x20-v0"]
