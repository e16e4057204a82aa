"""
Headless tick scheduling for tetrisai, plus the difficulty ramp shared with the UI.
"""

import time
from typing import Callable, Optional

from .game import Game

TICK_SECONDS = 0.1


def cadence_for_lines(lines: int, base: int) -> int:
    """Difficulty ramp: one tick faster every 10 lines, never below 1."""
    return max(1, base - lines // 10)


class TickScheduler:
    """Calls Game.tick() at a fixed cadence until the game ends or max_ticks is reached."""

    def __init__(self, game: Game, interval: float = TICK_SECONDS, ramp: bool = True):
        self.game = game
        self.interval = interval
        self.ramp = ramp
        self.base_rate = game.tick_rate
        self.ticks = 0

    def step(self):
        if self.ramp:
            self.game.set_cadence(cadence_for_lines(self.game.lines, self.base_rate))
        self.game.tick()
        self.ticks += 1

    def run(self, max_ticks: Optional[int] = None,
            on_tick: Optional[Callable[[Game], None]] = None) -> int:
        """Run until game over (or `max_ticks`); returns the number of ticks run."""
        start = self.ticks
        while not self.game.over and (max_ticks is None or self.ticks - start < max_ticks):
            self.step()
            if on_tick:
                on_tick(self.game)
            if self.interval > 0:
                time.sleep(self.interval)
        return self.ticks - start
