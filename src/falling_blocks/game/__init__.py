"""Game module for falling_blocks.

Exports the core game engine and supporting classes:
- GameGrid: Board representation, placement checks and line clearing
- Piece, PieceGenerator: Tetromino pieces, rotation and random supply
- TetrominoType: Enum of available piece types
- ScoringRules: Points awarded per cleared line
- TetrisGame: Engine state machine (start, ticks, commands, locking)
- GameDriver: Serialized tick/command loop around a TetrisGame
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, PIECE_COLORS, PIECE_RGB, Piece, PieceGenerator, TetrominoType, rotate_cw
from .rules import ScoringRules
from .core import Command, GameConfig, GameSnapshot, GameStatus, TetrisGame
from .driver import GameDriver, GravityTimer, Signal

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "PIECE_COLORS",
    "PIECE_RGB",
    "Piece",
    "PieceGenerator",
    "TetrominoType",
    "rotate_cw",
    "ScoringRules",
    "Command",
    "GameConfig",
    "GameSnapshot",
    "GameStatus",
    "TetrisGame",
    "GameDriver",
    "GravityTimer",
    "Signal",
]
