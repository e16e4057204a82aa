"""
Tests for the bag randomizer.
"""

import unittest
from collections import Counter

from tetrisai.core.catalog import PieceCatalog, standard_catalog
from tetrisai.core.generator import BAG_COPIES, STREAK_LIMIT, PieceSource
from tetrisai.exceptions import CatalogError


class TestPieceSource(unittest.TestCase):

    def setUp(self):
        self.catalog = standard_catalog()

    def test_first_piece_is_starter(self):
        for seed in range(50):
            source = PieceSource(self.catalog, 4, -3, seed=seed)
            self.assertTrue(source.next().shape.starter, f"seed {seed}")

    def test_first_piece_after_reset_is_starter(self):
        source = PieceSource(self.catalog, 4, -3, seed=1)
        for _ in range(20):
            for _ in range(9):
                source.next()
            source.reset()
            self.assertEqual(source.draws, 0)
            self.assertTrue(source.next().shape.starter)

    def test_first_two_pieces_are_starters(self):
        for seed in range(300):
            source = PieceSource(self.catalog, 4, -3, seed=seed)
            first, second = source.next(), source.next()
            self.assertTrue(first.shape.starter, f"seed {seed}")
            self.assertTrue(second.shape.starter, f"seed {seed}")

    def test_non_starter_streak_is_capped(self):
        longest = 0
        for seed in range(300):
            source = PieceSource(self.catalog, 4, -3, seed=seed)
            run = 0
            for _ in range(200):
                run = 0 if source.next().shape.starter else run + 1
                longest = max(longest, run)
        self.assertLessEqual(longest, STREAK_LIMIT)

    def test_streak_resets(self):
        source = PieceSource(self.catalog, 4, -3, seed=3)
        for _ in range(30):
            source.next()
        source.reset()
        self.assertEqual(source.streak, 0)

    def test_each_shape_twice_per_bag(self):
        for seed in range(10):
            source = PieceSource(self.catalog, 4, -3, seed=seed)
            bag_size = len(self.catalog) * BAG_COPIES
            for _ in range(3):
                counts = Counter(source.next().name for _ in range(bag_size))
                self.assertEqual(set(counts.values()), {2})
                self.assertEqual(len(counts), len(self.catalog))

    def test_draw_counter_and_remaining(self):
        source = PieceSource(self.catalog, 4, -3, seed=0)
        self.assertEqual(source.remaining, 14)
        source.next()
        source.next()
        self.assertEqual(source.draws, 2)
        self.assertEqual(source.remaining, 12)

    def test_pieces_spawn_at_spawn_point(self):
        source = PieceSource(self.catalog, 4, -3, seed=0)
        piece = source.next()
        self.assertEqual((piece.x, piece.y, piece.form), (4, -3, 0))

    def test_seed_reproducible(self):
        a = PieceSource(self.catalog, 4, -3, seed=42)
        b = PieceSource(self.catalog, 4, -3, seed=42)
        self.assertEqual([a.next().name for _ in range(30)],
                         [b.next().name for _ in range(30)])

    def test_reset_with_seed(self):
        source = PieceSource(self.catalog, 4, -3, seed=5)
        first = [source.next().name for _ in range(10)]
        source.reset(seed=5)
        self.assertEqual([source.next().name for _ in range(10)], first)

    def test_templates(self):
        source = PieceSource(self.catalog, 4, -3, seed=0)
        self.assertEqual(source.template_count, 7)
        piece = source.piece_by_id(4)
        self.assertEqual(piece.name, 't')
        self.assertEqual((piece.x, piece.y), (4, -3))
        self.assertEqual(source.draws, 0)

    def test_no_starter_shape(self):
        catalog = PieceCatalog()
        catalog.add_shape('s', 1, False, [[1]])
        with self.assertRaises(CatalogError):
            PieceSource(catalog, 0, 0)

    def test_empty_catalog(self):
        with self.assertRaises(CatalogError):
            PieceSource(PieceCatalog(), 0, 0)


if __name__ == '__main__':
    unittest.main()
