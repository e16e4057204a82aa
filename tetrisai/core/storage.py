"""
Best score and best line count persistence for tetrisai.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)


class MemoryScoreStore:
    """Keeps the bests for the lifetime of the process."""

    def __init__(self, best_score: int = 0, best_lines: int = 0):
        self._best_score = best_score
        self._best_lines = best_lines

    def get_best_score(self) -> int:
        return self._best_score

    def set_best_score(self, score: int):
        self._best_score = score

    def get_best_lines(self) -> int:
        return self._best_lines

    def set_best_lines(self, lines: int):
        self._best_lines = lines


class JsonScoreStore(MemoryScoreStore):
    """Bests stored as two integers in a JSON file, rewritten on every update."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(**self._load())

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
            return {
                'best_score': int(data.get('best_score', 0)),
                'best_lines': int(data.get('best_lines', 0)),
            }
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("ignoring unreadable score file %s: %s", self.path, e)
            return {}

    def _save(self):
        with open(self.path, 'w') as f:
            json.dump({'best_score': self._best_score, 'best_lines': self._best_lines}, f)

    def set_best_score(self, score: int):
        super().set_best_score(score)
        self._save()

    def set_best_lines(self, lines: int):
        super().set_best_lines(lines)
        self._save()
