"""
Placement search for tetrisai.

A two-level expectimax over final resting placements. The max layer tries
every form and every reachable horizontal offset of a piece; the mean layer
averages the best reply of every catalog shape, standing in for the unknown
next piece. Placements are simulated on a private scratch grid by stamping
the landed cells and unstamping them after scoring.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ..core.board import Board, drop_distance
from ..core.catalog import Cell
from ..core.commands import Command
from ..core.generator import PieceSource
from ..core.pieces import Piece
from .evaluation import BoardEvaluator

logger = logging.getLogger(__name__)

# Starting best score; any legal placement beats it.
SENTINEL_SCORE = -100000.0


@dataclass
class SearchResult:
    """Chosen final form and anchor column. The score is heuristic, not game score."""
    score: float
    form: int
    x: int


class PlacementSearch:
    """
    Picks where to put a piece. The scratch grid lives for one best_move call
    and must not be shared between threads.
    """

    def __init__(self, source: PieceSource, evaluator: Optional[BoardEvaluator] = None):
        self.source = source
        self.evaluator = evaluator or BoardEvaluator()
        self._grid: Optional[np.ndarray] = None

    def best_move(self, board, piece: Optional[Piece] = None) -> Optional[SearchResult]:
        """
        Best (form, x) for `piece` on `board` (a Board, whose live piece is the
        default, or any 2D occupancy array). The board is never modified.
        Falls back to the piece's current form and column; returns None when
        there is no piece to place.
        """
        if isinstance(board, Board):
            piece = piece or board.piece
            grid = board.occupancy()
        else:
            grid = np.array(board, dtype=bool)
        if piece is None:
            return None
        self._grid = grid

        best = SearchResult(SENTINEL_SCORE, piece.form, piece.x)
        try:
            for form, dx, cells in self._placements(piece):
                dy = self._distance(piece, dx, form)
                self._stamp(cells, dx, dy, True)
                score = self._mean_node()
                self._stamp(cells, dx, dy, False)
                if score > best.score:
                    best = SearchResult(score, form, piece.x + dx)
        finally:
            self._grid = None

        logger.debug("best move for %r: %s", piece, best)
        return best

    def evaluate(self, grid) -> float:
        """Heuristic score of a grid."""
        return self.evaluator.evaluate(np.asarray(grid))

    def _mean_node(self) -> float:
        count = self.source.template_count
        total = 0.0
        for shape_id in range(count):
            total += self._max_node(self.source.piece_by_id(shape_id))
        return total / count

    def _max_node(self, piece: Piece) -> float:
        best = SENTINEL_SCORE
        for form, dx, cells in self._placements(piece):
            dy = self._distance(piece, dx, form)
            self._stamp(cells, dx, dy, True)
            best = max(best, self.evaluator.evaluate(self._grid))
            self._stamp(cells, dx, dy, False)
        return best

    def _placements(self, piece: Piece) -> Iterator[Tuple[int, int, List[Cell]]]:
        """
        Legal (form, dx, cells) at the piece's current height. Offsets sweep
        right from 0 and then left from -1, each direction stopping at the
        first offset that does not fit.
        """
        for form in range(piece.forms):
            cells = piece.cells_at(piece.x, piece.y, form)
            for start, step in ((0, 1), (-1, -1)):
                dx = start
                while self._fits(cells, dx):
                    yield form, dx, cells
                    dx += step

    def _fits(self, cells: List[Cell], dx: int) -> bool:
        height, width = self._grid.shape
        for x, y in cells:
            x += dx
            if x < 0 or x >= width or y >= height:
                return False
            if y >= 0 and self._grid[y, x]:
                return False
        return True

    def _distance(self, piece: Piece, dx: int, form: int) -> int:
        return drop_distance(self._grid, piece.lowest_cells(piece.x + dx, piece.y, form))

    def _stamp(self, cells: List[Cell], dx: int, dy: int, value: bool):
        for x, y in cells:
            if y + dy >= 0:
                self._grid[y + dy, x + dx] = value


def plan_moves(result: SearchResult, piece: Piece) -> List[Command]:
    """Commands taking `piece` to the result: transforms, then shifts, then a drop."""
    moves = [Command.TRANSFORM] * ((result.form - piece.form) % piece.forms)
    dx = result.x - piece.x
    if dx > 0:
        moves += [Command.RIGHT] * dx
    else:
        moves += [Command.LEFT] * -dx
    moves.append(Command.DROP)
    return moves
