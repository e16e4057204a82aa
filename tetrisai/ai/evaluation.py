"""
Board evaluation functions for tetrisai.
Scores an occupancy grid by holes, full rows, stack height and surface roughness.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np


@dataclass
class HeuristicWeights:
    """Weights for the board evaluation heuristics."""
    base: float = 1000.0
    hole: float = 20.0
    hole_depth: float = 2.0  # extra per row between the hole and the floor
    full_row: float = 65.0
    edge_height_exponent: float = 1.6
    height_exponent: float = 1.7
    bumpiness_tolerance: int = 3
    bumpiness: float = 5.0


def surface_heights(grid: np.ndarray) -> np.ndarray:
    """Row index of the topmost occupied cell of each column, or the board height."""
    occupied = grid.astype(bool, copy=False)
    return np.where(occupied.any(axis=0), occupied.argmax(axis=0), occupied.shape[0])


class BoardEvaluator:
    """Heuristic evaluation of occupancy grids. Higher is better."""

    def __init__(self, weights: Optional[HeuristicWeights] = None):
        self.weights = weights or HeuristicWeights()

    def evaluate(self, grid: np.ndarray) -> float:
        """Evaluate a grid (any dtype; non-zero means occupied)."""
        _, hole_penalty, full_rows, _, _, height_penalty, bumpiness_penalty = self._terms(grid)
        return self._total(hole_penalty, full_rows, height_penalty, bumpiness_penalty)

    def get_detailed_evaluation(self, grid: np.ndarray) -> Dict[str, Any]:
        """All terms of the evaluation, for diagnostics."""
        holes, hole_penalty, full_rows, surface, stack, height_penalty, bumpiness_penalty = \
            self._terms(grid)
        return {
            'holes': holes,
            'hole_penalty': hole_penalty,
            'full_rows': full_rows,
            'surface': surface.tolist(),
            'max_height': int(stack.max()) if stack.size else 0,
            'height_penalty': height_penalty,
            'bumpiness_penalty': bumpiness_penalty,
            'overall_score': self._total(hole_penalty, full_rows, height_penalty, bumpiness_penalty),
        }

    def _total(self, hole_penalty: float, full_rows: int, height_penalty: float,
               bumpiness_penalty: float) -> float:
        w = self.weights
        return float(w.base - hole_penalty + full_rows * w.full_row
                     - height_penalty - bumpiness_penalty)

    def _terms(self, grid: np.ndarray) -> Tuple[int, float, int, np.ndarray, np.ndarray, float, float]:
        w = self.weights
        occupied = grid.astype(bool, copy=False)
        height, width = occupied.shape

        # A hole is an empty cell with something above it in its column.
        covered = np.logical_or.accumulate(occupied, axis=0)
        holes = covered & ~occupied
        depth = (height - np.arange(height))[:, None]
        hole_penalty = float(np.sum(holes * (w.hole + depth * w.hole_depth)))

        full_rows = int(np.all(occupied, axis=1).sum())

        surface = surface_heights(occupied)
        stack = (height - surface).astype(float)
        exponents = np.full(width, w.height_exponent)
        exponents[0] = exponents[-1] = w.edge_height_exponent
        height_penalty = float(np.sum(stack ** exponents))

        steps = np.abs(np.diff(surface))
        bumpiness_penalty = float(np.sum(steps[steps > w.bumpiness_tolerance]) * w.bumpiness)

        return (int(holes.sum()), hole_penalty, full_rows, surface, stack,
                height_penalty, bumpiness_penalty)
