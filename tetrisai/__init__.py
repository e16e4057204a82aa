"""
tetrisai: a Tetris board simulation with a two-level expectimax autoplayer.
"""

from .exceptions import TetrisAIError, CatalogError, ConfigError
from .game import Game, GameConfig

__version__ = "0.1.0"

__all__ = ['Game', 'GameConfig', 'TetrisAIError', 'CatalogError', 'ConfigError']
