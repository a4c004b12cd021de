from __future__ import annotations

import logging
import queue
from enum import Enum, auto
from typing import Callable, List, Optional, Union

from .core import Command, GameSnapshot, TetrisGame

logger = logging.getLogger(__name__)


class Signal(Enum):
    TICK = auto()
    START = auto()


Message = Union[Command, Signal]
Listener = Callable[[GameSnapshot], None]


class GravityTimer:
    """Fixed-period tick source driven by an external clock in milliseconds."""

    def __init__(self, period_ms: int) -> None:
        self.period_ms = int(period_ms)
        self._next_due: Optional[int] = None

    @property
    def armed(self) -> bool:
        return self._next_due is not None

    def arm(self, now_ms: int) -> None:
        self._next_due = now_ms + self.period_ms

    def disarm(self) -> None:
        self._next_due = None

    def poll(self, now_ms: int) -> int:
        """Return the number of periods that elapsed and move the deadline past them."""
        if self._next_due is None or now_ms < self._next_due:
            return 0
        due = 1 + (now_ms - self._next_due) // self.period_ms
        self._next_due += due * self.period_ms
        return due


class GameDriver:
    """Single owner of a TetrisGame.

    Ticks and player commands are queued and applied one at a time, in arrival
    order. ``submit`` may be called from any thread; ``pump`` must only be called
    from the thread that owns the game.
    """

    def __init__(self, game: TetrisGame, timer: Optional[GravityTimer] = None) -> None:
        self.game = game
        self.timer = timer or GravityTimer(game.config.tick_ms)
        self._queue: "queue.Queue[Message]" = queue.Queue()
        self._listeners: List[Listener] = []
        self._now_ms = 0

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def submit(self, message: Message) -> None:
        self._queue.put(message)

    def start(self) -> None:
        self.submit(Signal.START)

    def pump(self, now_ms: int) -> int:
        """Enqueue due ticks, then process everything queued. Returns messages applied."""
        self._now_ms = now_ms
        for _ in range(self.timer.poll(now_ms)):
            self._queue.put(Signal.TICK)
        processed = 0
        while True:
            try:
                message = self._queue.get_nowait()
            except queue.Empty:
                break
            self._apply(message)
            processed += 1
        return processed

    def _apply(self, message: Message) -> None:
        was_running = self.game.running
        if message is Signal.START:
            # Ticks queued before the restart belong to the old game
            self._drop_pending_ticks()
            self.game.restart()
        elif message is Signal.TICK:
            self.game.on_tick()
        else:
            self.game.command(message)

        if self.game.running and (message is Signal.START or not self.timer.armed):
            self.timer.arm(self._now_ms)
        elif not self.game.running:
            if was_running:
                logger.debug("left running state, disarming gravity")
                self._drop_pending_ticks()
            self.timer.disarm()

        snapshot = self.game.snapshot()
        for listener in self._listeners:
            listener(snapshot)

    def _drop_pending_ticks(self) -> None:
        # Filter in place under the queue lock so concurrent submits stay behind older messages
        with self._queue.mutex:
            kept: List[Message] = [m for m in self._queue.queue if m is not Signal.TICK]
            self._queue.queue.clear()
            self._queue.queue.extend(kept)
