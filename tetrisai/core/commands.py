"""
Discrete commands understood by the board and produced by input and autoplay.
"""

from enum import IntEnum
from typing import Optional


class Command(IntEnum):
    """Command codes understood by Board.apply and Game.move."""
    MOVE_DOWN = 0
    LEFT = 1
    RIGHT = 2
    TRANSFORM = 3
    DROP = 4
    FAST_FORWARD = 5

    @classmethod
    def parse(cls, value) -> Optional['Command']:
        """Return the command for a code or name, or None when unrecognised."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None
