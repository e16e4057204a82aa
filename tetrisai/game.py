"""
Game session for tetrisai.
Coordinates the board, the piece source, scoring and autoplay. Time is driven
from outside: a scheduler calls tick() at a fixed cadence and input handlers
call move().
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .ai.autoplay import AutoPlayer
from .ai.evaluation import BoardEvaluator
from .ai.search import PlacementSearch
from .core.board import Board
from .core.catalog import PieceCatalog, standard_catalog
from .core.commands import Command
from .core.generator import PieceSource
from .core.pieces import Piece
from .core.storage import MemoryScoreStore
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

SPAWN_Y = -3


@dataclass
class GameConfig:
    """Configuration for a game session."""
    rows: int = 20
    cols: int = 12
    tick_rate: int = 8  # scheduler ticks per gravity step
    paused: bool = True
    auto: bool = False
    seed: Optional[int] = None


class Game:
    """One game session: a board, a piece supply and the running totals."""

    def __init__(self, config: Optional[GameConfig] = None, store=None,
                 catalog: Optional[PieceCatalog] = None,
                 evaluator: Optional[BoardEvaluator] = None):
        self.config = config or GameConfig()
        if self.config.tick_rate < 1:
            raise ConfigError(f"tick rate must be positive, got {self.config.tick_rate}")

        self.catalog = catalog or standard_catalog()
        self.store = store or MemoryScoreStore()
        self.board = Board(self.config.cols, self.config.rows)
        self.source = PieceSource(self.catalog, self.config.cols // 2 - 2, SPAWN_Y,
                                  seed=self.config.seed)
        self.player = AutoPlayer(PlacementSearch(self.source, evaluator))

        self.tick_rate = self.config.tick_rate
        self.clock = 0
        self.paused = self.config.paused
        self.auto = self.config.auto
        self.over = False
        self.fast_forward = False

        self.best_score = self.store.get_best_score()
        self.best_lines = self.store.get_best_lines()
        self.score = 0
        self.lines = 0
        self.next_piece: Optional[Piece] = None

        # Callbacks
        self.on_lines_cleared: Optional[Callable[[int], None]] = None
        self.on_game_over: Optional[Callable[[], None]] = None

        self.restart()

    def restart(self, seed: Optional[int] = None):
        """Start a new game with an empty board; a seed reseeds the piece source."""
        self.clock = 0
        self.over = False
        self.fast_forward = False
        self.score = 0
        self.lines = 0
        self.source.reset(seed)
        self.player.reset()
        self.board.clear()
        self.next_piece = self.source.next()
        logger.info("game restarted on a %dx%d board", self.board.width, self.board.height)

    def tick(self) -> bool:
        """
        One scheduler tick. Gravity applies every `tick_rate` ticks, or on the
        next tick after a fast-forward request. Returns whether gravity applied.
        """
        if self.paused or self.over:
            return False
        if self.auto:
            command = self.player.next_move(self.board)
            if command is not None:
                self.move(command)

        self.clock = (self.clock + 1) % self.tick_rate
        if self.clock == 0:
            self.advance()
            return True
        elif self.fast_forward:
            self.advance()
            self.fast_forward = False
            return True
        return False

    def advance(self):
        """Apply gravity; on landing, book the result and bring in the next piece."""
        if self.over:
            return
        result = self.board.tick()
        if result.success:
            return

        if result.score:
            self.add_score(result.score)
        if result.lines:
            self.add_lines(result.lines)
            if self.on_lines_cleared:
                self.on_lines_cleared(result.lines)

        if self.board.accept_piece(self.next_piece):
            self.next_piece = self.source.next()
        else:
            self.over = True
            logger.info("game over: score=%d lines=%d", self.score, self.lines)
            if self.on_game_over:
                self.on_game_over()

    def move(self, command) -> bool:
        """Handle one input command; unrecognised commands are ignored."""
        if self.paused or self.over:
            return False
        command = Command.parse(command)
        if command is None:
            return False
        if command == Command.FAST_FORWARD:
            self.fast_forward = True
            return True

        result = self.board.apply(command)
        if result.score:
            self.add_score(result.score)
        if command == Command.DROP:
            self.fast_forward = True
        return result.success

    def add_score(self, delta: int):
        self.score += delta
        if self.score > self.best_score:
            self.best_score = self.score
            self.store.set_best_score(self.best_score)

    def add_lines(self, delta: int):
        self.lines += delta
        if self.lines > self.best_lines:
            self.best_lines = self.lines
            self.store.set_best_lines(self.best_lines)

    def pause(self):
        """Toggle pause; a finished game stays as it is."""
        if self.over:
            return
        self.paused = not self.paused

    def toggle_auto(self):
        self.auto = not self.auto
        self.player.reset()

    def set_cadence(self, ticks_per_advance: int):
        """Scheduler hook: number of ticks between gravity steps."""
        if ticks_per_advance < 1:
            raise ConfigError(f"cadence must be positive, got {ticks_per_advance}")
        self.tick_rate = ticks_per_advance
        self.clock %= ticks_per_advance

    def get_stats(self) -> Dict[str, Any]:
        """Get current game statistics."""
        return {
            'score': self.score,
            'lines': self.lines,
            'best_score': self.best_score,
            'best_lines': self.best_lines,
            'pieces': self.source.draws,
            'game_over': self.over,
        }

    def __str__(self):
        """String representation of the game state."""
        result = []
        result.append(f"Score: {self.score}  (best {self.best_score})")
        result.append(f"Lines: {self.lines}  (best {self.best_lines})")
        if self.next_piece:
            result.append(f"Next: {self.next_piece.name}")
        result.append("")
        result.append(str(self.board))
        return "\n".join(result)
