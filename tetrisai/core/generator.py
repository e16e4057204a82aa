"""
Bag randomizer for tetrisai.
The queue holds every catalog shape twice, shuffled, and is drained from the
end. The first two pieces after a reset are starter-eligible, and at most
STREAK_LIMIT non-starter shapes (s and z) are drawn in a row.
"""

import logging
from typing import List, Optional

import numpy as np

from ..exceptions import CatalogError
from .catalog import PieceCatalog, PieceShape
from .pieces import Piece

logger = logging.getLogger(__name__)

BAG_COPIES = 2
STARTER_DRAWS = 2  # draws after a reset that must be starter-eligible
STREAK_LIMIT = 4  # longest run of non-starter shapes


class PieceSource:
    """Supplies pieces at the spawn point from a shuffled double bag."""

    def __init__(self, catalog: PieceCatalog, spawn_x: int, spawn_y: int,
                 seed: Optional[int] = None):
        if len(catalog) == 0:
            raise CatalogError("catalog has no shapes")
        if not any(shape.starter for shape in catalog):
            raise CatalogError("catalog has no starter-eligible shape")
        self.catalog = catalog
        self.spawn_x = spawn_x
        self.spawn_y = spawn_y
        self.draws = 0
        self.streak = 0  # consecutive non-starter draws
        self._rng = np.random.default_rng(seed)
        self._queue: List[PieceShape] = []
        self.reset()

    @property
    def template_count(self) -> int:
        return len(self.catalog)

    @property
    def remaining(self) -> int:
        """Shapes left in the current bag."""
        return len(self._queue)

    def reset(self, seed: Optional[int] = None):
        """Restart the draw count and refill the bag under the starter rule."""
        if seed is not None:
            self._rng = np.random.default_rng(seed)
        self.draws = 0
        self.streak = 0
        self._refill(starter=True)

    def _refill(self, starter: bool = False):
        self._queue = list(self.catalog) * BAG_COPIES
        self._rng.shuffle(self._queue)
        # Rejection sampling: reshuffle until the first shape drawn may start.
        while starter and not self._queue[-1].starter:
            self._rng.shuffle(self._queue)
        logger.debug("bag refilled: %s", ''.join(s.name for s in reversed(self._queue)))

    def next(self) -> Piece:
        """Draw the next piece, placed at the spawn point."""
        if not self._queue:
            self._refill()
        if self.draws < STARTER_DRAWS or self.streak >= STREAK_LIMIT:
            self._promote_starter()
        self.draws += 1
        shape = self._queue.pop()
        self.streak = 0 if shape.starter else self.streak + 1
        return self._spawn(shape)

    def _promote_starter(self):
        # Swap the starter-eligible shape nearest the tail into the draw slot.
        for i in range(len(self._queue) - 1, -1, -1):
            if self._queue[i].starter:
                self._queue[i], self._queue[-1] = self._queue[-1], self._queue[i]
                return

    def piece_by_id(self, shape_id: int) -> Piece:
        """A fresh spawn-point piece of any catalog shape, independent of the bag."""
        return self._spawn(self.catalog.by_id(shape_id))

    def _spawn(self, shape: PieceShape) -> Piece:
        return Piece(shape, self.spawn_x, self.spawn_y)
