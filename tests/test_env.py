"""
Tests for the gymnasium environment.
"""

import unittest

from tetrisai.env import ACTIONS, TetrisEnv


class TestTetrisEnv(unittest.TestCase):

    def setUp(self):
        self.env = TetrisEnv(rows=12, cols=8, render_mode='ansi')

    def tearDown(self):
        self.env.close()

    def test_spaces(self):
        self.assertEqual(self.env.action_space.n, len(ACTIONS))
        self.assertEqual(self.env.observation_space['board'].shape, (12, 8))

    def test_reset(self):
        obs, info = self.env.reset(seed=0)
        self.assertTrue(self.env.observation_space.contains(obs))
        self.assertGreater(obs['current_piece_id'], 0)
        self.assertGreater(obs['next_piece_id'], 0)
        self.assertEqual(info, {})

    def test_seeded_reset_is_reproducible(self):
        first, _ = self.env.reset(seed=9)
        second, _ = self.env.reset(seed=9)
        self.assertEqual(first['current_piece_id'], second['current_piece_id'])
        self.assertEqual(first['next_piece_id'], second['next_piece_id'])

    def test_step(self):
        self.env.reset(seed=0)
        obs, reward, terminated, truncated, info = self.env.step(4)  # drop
        self.assertGreaterEqual(reward, 0.0)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertIn('score', info)
        self.assertTrue(self.env.observation_space.contains(obs))

    def test_episode_terminates(self):
        self.env.reset(seed=0)
        terminated = False
        total = 0.0
        for _ in range(2000):
            _, reward, terminated, _, _ = self.env.step(4)
            total += reward
            if terminated:
                break
        self.assertTrue(terminated)
        self.assertEqual(total, float(self.env.game.score))

        _, reward, terminated, _, _ = self.env.step(0)
        self.assertTrue(terminated)
        self.assertEqual(reward, 0.0)

    def test_render(self):
        self.env.reset(seed=0)
        text = self.env.render()
        self.assertIn("Score:", text)


if __name__ == '__main__':
    unittest.main()
