"""
Board state management for tetrisai.
Handles the occupancy grid, collision checks, the live piece, landing,
line clearing and score deltas.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from ..exceptions import ConfigError
from .catalog import Cell
from .commands import Command
from .pieces import Piece

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    """Outcome of a board operation."""
    success: bool
    score: int = 0
    lines: int = 0


def row_clear_score(rows: int) -> int:
    """Score for clearing rows at once; grows faster than linearly."""
    return int(math.floor(rows ** 1.2 * 5)) * 10


def drop_score(distance: int) -> int:
    """Score for dropping a piece the given number of rows."""
    return distance // 3


def drop_distance(grid: np.ndarray, lowest: Iterable[Cell]) -> int:
    """
    Rows a piece can fall, walking each column down from its lowest cell
    until the next row is occupied or the floor is reached.
    Rows above the grid (y < 0) are empty.
    """
    height = grid.shape[0]
    distance = height
    for cx, cy in lowest:
        start = max(cy + 1, 0)
        blocked = np.flatnonzero(grid[start:, cx])
        landing = start + int(blocked[0]) - 1 if blocked.size else height - 1
        distance = min(distance, landing - cy)
    return distance


class Board:
    """The playfield: a height x width grid of tile values (0 = empty)."""

    def __init__(self, width: int = 12, height: int = 20):
        if width < 1 or height < 1:
            raise ConfigError(f"board must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.grid = np.zeros((height, width), dtype=np.int8)
        self.piece: Optional[Piece] = None
        self.shadow: Optional[Piece] = None

    def is_cell_empty(self, x: int, y: int) -> bool:
        """Rows above the board always count as empty."""
        return y < 0 or bool(self.grid[y, x] == 0)

    def within_bounds(self, cells: Iterable[Cell]) -> bool:
        """Lateral and floor bounds only; cells may stick out above the top."""
        return all(0 <= x < self.width and y < self.height for x, y in cells)

    def cells_clear(self, cells: Iterable[Cell]) -> bool:
        """Occupancy only; cells above the board are skipped."""
        return all(y < 0 or self.grid[y, x] == 0 for x, y in cells)

    def is_legal(self, cells: Iterable[Cell]) -> bool:
        cells = list(cells)
        return self.within_bounds(cells) and self.cells_clear(cells)

    def accept_piece(self, piece: Optional[Piece]) -> bool:
        """
        Make a piece the live piece. Returns False when its cells are not
        free, which means the game is lost. None removes the live piece.
        """
        if piece is not None and not self.is_legal(piece.cells):
            return False
        self.piece = piece
        self._update_shadow()
        return True

    def apply(self, command) -> MoveResult:
        """Execute one command on the live piece."""
        command = Command.parse(command)
        if self.piece is None or self.piece.grounded or command is None:
            return MoveResult(False)

        if command == Command.MOVE_DOWN:
            return MoveResult(self._move(0, 1))
        elif command == Command.LEFT:
            return MoveResult(self._move(-1, 0))
        elif command == Command.RIGHT:
            return MoveResult(self._move(1, 0))
        elif command == Command.TRANSFORM:
            return MoveResult(self._transform())
        elif command == Command.DROP:
            distance = self._drop()
            return MoveResult(distance > 0, drop_score(distance))
        return MoveResult(False)

    def tick(self) -> MoveResult:
        """
        Gravity: move the live piece down one row. When it cannot move it
        lands, full rows are cleared and the result carries the clear score.
        """
        if self.piece is None:
            return MoveResult(False)
        result = self.apply(Command.MOVE_DOWN)
        if result.success:
            return result
        return self._land()

    def distance_to_ground(self, piece: Optional[Piece] = None) -> int:
        piece = piece or self.piece
        return drop_distance(self.grid, piece.lowest_cells())

    def clear_full_rows(self, rows: Optional[Iterable[int]] = None) -> int:
        """Clear the full rows among `rows` (all rows by default); returns the count."""
        if rows is None:
            rows = range(self.height)
        full = self._full_rows(rows)
        for row in full:
            self._shift_cells_down(row)
        return len(full)

    def occupancy(self) -> np.ndarray:
        """Boolean copy of the grid."""
        return self.grid != 0

    def clear(self):
        self.grid[:, :] = 0
        self.piece = None
        self.shadow = None

    def _move(self, dx: int, dy: int) -> bool:
        piece = self.piece
        if not self.is_legal(piece.cells_at(piece.x + dx, piece.y + dy)):
            return False
        piece.shift(dx, dy)
        if dx != 0:
            self._update_shadow()
        return True

    def _transform(self) -> bool:
        piece = self.piece
        if not self.is_legal(piece.cells_at(piece.x, piece.y, piece.form + 1)):
            return False
        piece.transform(1)
        self._update_shadow()
        return True

    def _drop(self) -> int:
        distance = self.distance_to_ground()
        self.piece.grounded = True
        if distance > 0:
            self._move(0, distance)
        return distance

    def _land(self) -> MoveResult:
        piece = self.piece
        piece.grounded = True
        for x, y in piece.cells:
            if 0 <= y < self.height:
                self.grid[y, x] = piece.shape.tile
        self.piece = None
        self.shadow = None

        lines = self.clear_full_rows(piece.rows())
        if lines:
            logger.info("cleared %d row(s)", lines)
        return MoveResult(False, row_clear_score(lines), lines)

    def _full_rows(self, rows: Iterable[int]) -> List[int]:
        # Ascending order keeps the remaining indices valid while clearing.
        return [y for y in sorted(set(rows))
                if 0 <= y < self.height and np.all(self.grid[y] != 0)]

    def _shift_cells_down(self, row: int):
        """Remove a row; everything above it falls by one."""
        self.grid[1:row + 1] = self.grid[0:row].copy()
        self.grid[0] = 0

    def _update_shadow(self):
        if self.piece is None:
            self.shadow = None
            return
        shadow = self.piece.copy()
        shadow.shift(0, self.distance_to_ground(shadow))
        self.shadow = shadow

    def __str__(self):
        """String representation of the board."""
        result = []
        for y in range(self.height):
            row = ""
            for x in range(self.width):
                if self.grid[y, x]:
                    row += "█"
                else:
                    row += "·"
            result.append(row)

        if self.piece:
            for x, y in self.piece.cells:
                if 0 <= x < self.width and 0 <= y < self.height:
                    result[y] = result[y][:x] + "○" + result[y][x + 1:]

        return "\n".join(result)

    def __repr__(self):
        return f"Board({self.width}x{self.height}, piece={self.piece!r})"
