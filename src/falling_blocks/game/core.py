from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Any, Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece, PieceGenerator, TetrominoType, rotate_cw
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IDLE = auto()
    RUNNING = auto()
    GAME_OVER = auto()


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3


_COMMAND_DELTAS = {
    Command.MOVE_LEFT: (-1, 0),
    Command.MOVE_RIGHT: (1, 0),
    Command.SOFT_DROP: (0, 1),
}


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0
    tick_ms: int = 1000

    def __post_init__(self) -> None:
        # The widest piece needs four columns and the spawn box four rows
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")

    @property
    def spawn_x(self) -> int:
        return self.width // 2 - 2


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of the engine for a presentation layer."""

    board: np.ndarray
    active_kind: Optional[TetrominoType]
    active_shape: Optional[np.ndarray]
    active_x: int
    active_y: int
    next_kind: Optional[TetrominoType]
    next_shape: Optional[np.ndarray]
    score: int
    lines_cleared_total: int
    status: GameStatus

    @property
    def active_color(self) -> Optional[str]:
        return Piece(self.active_kind).color if self.active_kind is not None else None

    @property
    def next_color(self) -> Optional[str]:
        return Piece(self.next_kind).color if self.next_kind is not None else None


def _frozen(array: np.ndarray) -> np.ndarray:
    out = array.copy()
    out.setflags(write=False)
    return out


class TetrisGame:
    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.generator = PieceGenerator(self.rng)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.status = GameStatus.IDLE
        self.score = 0
        self.lines_cleared_total = 0
        self.last_clear = 0
        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def running(self) -> bool:
        return self.status is GameStatus.RUNNING

    def start(self) -> None:
        self.grid.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.last_clear = 0
        self.current_piece = self.generator.next()
        self.next_piece = self.generator.next()
        self.current_x = self.config.spawn_x
        self.current_y = self.config.spawn_y
        self.status = GameStatus.RUNNING
        logger.info("game started: %dx%d board", self.config.width, self.config.height)

    def restart(self) -> None:
        self.start()

    def move(self, dx: int, dy: int) -> bool:
        if not self.running or self.current_piece is None:
            return False
        new_x = self.current_x + dx
        new_y = self.current_y + dy
        if not self.grid.is_valid_placement(self.current_piece.shape, new_x, new_y):
            return False
        self.current_x = new_x
        self.current_y = new_y
        return True

    def rotate(self) -> bool:
        if not self.running or self.current_piece is None:
            return False
        rotated = rotate_cw(self.current_piece.shape)
        if not self.grid.is_valid_placement(rotated, self.current_x, self.current_y):
            return False
        self.current_piece.shape = rotated
        return True

    def command(self, kind: Any) -> bool:
        """Apply a decoded player command; anything that is not a Command is ignored."""
        if not isinstance(kind, Command):
            logger.debug("ignoring unknown command %r", kind)
            return False
        if kind is Command.ROTATE:
            return self.rotate()
        dx, dy = _COMMAND_DELTAS[kind]
        return self.move(dx, dy)

    def on_tick(self) -> bool:
        """Advance gravity by one row, locking the piece when it cannot fall."""
        if not self.running:
            return False
        if self.move(0, 1):
            return True
        self._lock_piece()
        return False

    def _lock_piece(self) -> None:
        assert self.current_piece is not None and self.next_piece is not None
        piece = self.current_piece
        self.grid.merge(piece.shape, self.current_x, self.current_y, int(piece.kind))
        lines = self.grid.clear_full_rows()
        self.last_clear = lines
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines)
        logger.debug("locked %s at (%d, %d), cleared %d", piece.kind.name, self.current_x, self.current_y, lines)
        self._spawn_piece()

    def _spawn_piece(self) -> None:
        assert self.next_piece is not None
        self.current_piece = self.next_piece
        self.next_piece = self.generator.next()
        self.current_x = self.config.spawn_x
        self.current_y = self.config.spawn_y
        # Immediate collision check: if overlaps, game over
        if not self.grid.is_valid_placement(self.current_piece.shape, self.current_x, self.current_y):
            self.status = GameStatus.GAME_OVER
            logger.info("game over: score=%d lines=%d", self.score, self.lines_cleared_total)

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and self.running:
            for x, y in self.current_piece.cells_at(self.current_x, self.current_y):
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state

    def snapshot(self) -> GameSnapshot:
        current = self.current_piece
        nxt = self.next_piece
        return GameSnapshot(
            board=_frozen(self.grid.grid),
            active_kind=current.kind if current is not None else None,
            active_shape=_frozen(current.shape) if current is not None else None,
            active_x=self.current_x,
            active_y=self.current_y,
            next_kind=nxt.kind if nxt is not None else None,
            next_shape=_frozen(nxt.shape) if nxt is not None else None,
            score=self.score,
            lines_cleared_total=self.lines_cleared_total,
            status=self.status,
        )
