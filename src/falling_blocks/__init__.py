"""Falling-block puzzle engine with a gymnasium environment and a pygame shell."""

from .game import Command, GameConfig, GameDriver, GameStatus, ScoringRules, TetrisGame

__all__ = ["Command", "GameConfig", "GameDriver", "GameStatus", "ScoringRules", "TetrisGame"]
