from __future__ import annotations

import threading

from falling_blocks.game import (
    Command,
    GameConfig,
    GameDriver,
    GameStatus,
    GravityTimer,
    Piece,
    Signal,
    TetrisGame,
    TetrominoType,
)


def make_driver(tick_ms: int = 1000) -> GameDriver:
    return GameDriver(TetrisGame(GameConfig(random_seed=3, tick_ms=tick_ms)))


def test_timer_poll_counts_elapsed_periods():
    timer = GravityTimer(1000)
    assert timer.poll(5000) == 0
    timer.arm(0)
    assert timer.armed
    assert timer.poll(999) == 0
    assert timer.poll(1000) == 1
    assert timer.poll(1500) == 0
    assert timer.poll(3500) == 2
    assert timer.poll(3999) == 0
    assert timer.poll(4000) == 1
    timer.disarm()
    assert not timer.armed
    assert timer.poll(100_000) == 0


def test_idle_driver_does_nothing():
    driver = make_driver()
    assert driver.pump(10_000) == 0
    assert driver.game.status is GameStatus.IDLE
    assert not driver.timer.armed


def test_start_arms_gravity():
    driver = make_driver()
    driver.start()
    assert driver.pump(0) == 1
    assert driver.game.status is GameStatus.RUNNING
    assert driver.timer.armed

    assert driver.pump(999) == 0
    assert driver.game.current_y == 0
    assert driver.pump(1000) == 1
    assert driver.game.current_y == 1
    assert driver.pump(3000) == 2
    assert driver.game.current_y == 3


def test_commands_apply_in_arrival_order():
    driver = make_driver()
    driver.start()
    driver.pump(0)
    seen = []
    driver.subscribe(lambda snap: seen.append(snap.active_x))

    driver.submit(Command.MOVE_LEFT)
    driver.submit(Command.MOVE_LEFT)
    driver.submit(Command.MOVE_RIGHT)
    driver.submit("jump")
    assert driver.pump(0) == 4
    assert seen == [2, 1, 2, 2]


def test_submit_from_other_threads():
    driver = make_driver()
    driver.start()
    driver.pump(0)
    workers = [threading.Thread(target=driver.submit, args=(Command.SOFT_DROP,)) for _ in range(5)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    assert driver.pump(0) == 5
    assert driver.game.current_y == 5


def test_game_over_disarms_and_drops_ticks():
    driver = make_driver()
    driver.start()
    driver.pump(0)
    game = driver.game
    game.grid.grid[0:2, 3:7] = int(TetrominoType.Z)
    game.current_piece = Piece(TetrominoType.O)
    game.current_x, game.current_y = 0, 18
    game.next_piece = Piece(TetrominoType.T)

    statuses = []
    driver.subscribe(lambda snap: statuses.append(snap.status))
    for _ in range(3):
        driver.submit(Signal.TICK)
    driver.submit(Command.MOVE_LEFT)

    assert driver.pump(0) == 2
    assert statuses == [GameStatus.GAME_OVER, GameStatus.GAME_OVER]
    assert not driver.timer.armed

    board = game.grid.clone_state()
    assert driver.pump(60_000) == 0
    assert (game.grid.grid == board).all()

    driver.start()
    driver.pump(61_000)
    assert game.status is GameStatus.RUNNING
    assert driver.timer.armed
    assert driver.pump(61_999) == 0
    assert driver.pump(62_000) == 1


def test_restart_while_running_rearms_timer():
    driver = make_driver(tick_ms=100)
    driver.start()
    driver.pump(0)
    driver.pump(50)
    driver.start()
    driver.pump(90)
    # Deadline moved to 190, so 100 no longer ticks
    assert driver.pump(100) == 0
    assert driver.pump(190) == 1


def test_restart_discards_tick_from_old_game():
    driver = make_driver(tick_ms=100)
    driver.start()
    driver.pump(0)
    driver.pump(50)
    driver.start()
    # The old deadline at 100 is due in the same pump as the restart
    driver.pump(100)
    assert driver.game.current_y == 0
    assert driver.pump(199) == 0
    assert driver.pump(200) == 1
    assert driver.game.current_y == 1


def test_dropping_ticks_keeps_command_order():
    driver = make_driver()
    driver.start()
    driver.pump(0)
    driver.submit(Command.MOVE_LEFT)
    driver.submit(Signal.TICK)
    driver.submit(Command.MOVE_RIGHT)
    driver.submit(Signal.TICK)
    driver.submit(Command.SOFT_DROP)
    driver._drop_pending_ticks()
    assert list(driver._queue.queue) == [Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.SOFT_DROP]
