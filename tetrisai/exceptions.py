"""
Exceptions for tetrisai.
Gameplay failures (illegal moves, game over) are boolean results, not exceptions;
these are raised only for invalid setup.
"""


class TetrisAIError(Exception):
    """Base class for tetrisai errors."""
    pass


class CatalogError(TetrisAIError):
    """Invalid shape registration or an unusable piece catalog."""
    pass


class ConfigError(TetrisAIError):
    """Invalid board or timing configuration."""
    pass
