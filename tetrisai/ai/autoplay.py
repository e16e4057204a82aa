"""
Autoplay for tetrisai: turns search results into one command per tick.
"""

import logging
from collections import deque
from typing import Deque, Optional

from ..core.board import Board
from ..core.commands import Command
from ..core.pieces import Piece
from .search import PlacementSearch, plan_moves

logger = logging.getLogger(__name__)


class AutoPlayer:
    """Player that uses the placement search for decision making."""

    def __init__(self, search: PlacementSearch):
        self.search = search
        self.moves: Deque[Command] = deque()
        self.piece: Optional[Piece] = None  # piece the queued moves belong to

    def next_move(self, board: Board) -> Optional[Command]:
        """
        Next command for the board's live piece, or None when there is no
        live piece or the plan for it is used up. A new live piece discards
        any leftover plan and triggers a fresh search.
        """
        piece = board.piece
        if piece is None:
            return None
        if piece is not self.piece:
            result = self.search.best_move(board, piece)
            self.moves = deque(plan_moves(result, piece))
            self.piece = piece
            logger.debug("planned %s", [m.name for m in self.moves])
        return self.moves.popleft() if self.moves else None

    def reset(self):
        self.moves.clear()
        self.piece = None
