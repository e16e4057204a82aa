"""
Core module for tetrisai.
Contains the piece catalog, pieces, the bag randomizer and the board.
"""

from .catalog import PieceCatalog, PieceShape, standard_catalog
from .pieces import Piece
from .commands import Command
from .generator import PieceSource
from .board import Board, MoveResult
from .storage import MemoryScoreStore, JsonScoreStore

__all__ = ['PieceCatalog', 'PieceShape', 'standard_catalog', 'Piece', 'Command',
           'PieceSource', 'Board', 'MoveResult', 'MemoryScoreStore', 'JsonScoreStore']
