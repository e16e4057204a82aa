"""
Gymnasium environment for tetrisai.
Each step applies one command to the live piece and then one gravity step.
"""

from typing import Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .core.commands import Command
from .game import Game, GameConfig

# Action index -> command; None lets gravity act alone.
ACTIONS = [None, Command.LEFT, Command.RIGHT, Command.TRANSFORM, Command.DROP]


class TetrisEnv(gym.Env):
    """
    Observation:
    - board: the grid of tile values (0 empty, shape id + 1 otherwise)
    - current_piece_id: live piece shape id + 1, 0 when none
    - next_piece_id: shape id + 1 of the prepared next piece

    Reward is the game score gained during the step. The episode terminates
    on game over.
    """
    metadata = {'render_modes': ['human', 'ansi'], 'render_fps': 10}

    def __init__(self, rows: int = 20, cols: int = 12, render_mode: Optional[str] = None):
        super().__init__()
        self.render_mode = render_mode
        self.game = Game(GameConfig(rows=rows, cols=cols, paused=False))
        shapes = len(self.game.catalog)

        self.action_space = spaces.Discrete(len(ACTIONS))
        self.observation_space = spaces.Dict({
            "board": spaces.Box(low=0, high=shapes, shape=(rows, cols), dtype=np.uint8),
            "current_piece_id": spaces.Discrete(shapes + 1),
            "next_piece_id": spaces.Discrete(shapes + 1),
        })

    def _get_observation(self):
        piece = self.game.board.piece
        return {
            "board": self.game.board.grid.astype(np.uint8),
            "current_piece_id": piece.shape.tile if piece else 0,
            "next_piece_id": self.game.next_piece.shape.tile if self.game.next_piece else 0,
        }

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.game.restart(seed)
        self.game.advance()  # bring in the first piece
        return self._get_observation(), {}

    def step(self, action):
        if self.game.over:
            return self._get_observation(), 0.0, True, False, {"reason": "game already over"}

        score_before = self.game.score
        command = ACTIONS[int(action)]
        if command is not None:
            self.game.move(command)
        self.game.advance()

        reward = float(self.game.score - score_before)
        info = {"lines": self.game.lines, "score": self.game.score}
        if self.render_mode == 'human':
            self.render()
        return self._get_observation(), reward, self.game.over, False, info

    def render(self):
        text = str(self.game)
        if self.render_mode == 'ansi':
            return text
        print(text)
        return None

    def close(self):
        pass
