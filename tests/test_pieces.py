"""
Tests for pieces: cell caching, transforms and column extremes.
"""

import unittest

from tetrisai.core.catalog import standard_catalog
from tetrisai.core.pieces import Piece


class TestPiece(unittest.TestCase):

    def setUp(self):
        self.catalog = standard_catalog()

    def _piece(self, name, x=0, y=0, form=0):
        return Piece(self.catalog.by_name(name), x, y, form)

    def test_absolute_cells(self):
        piece = self._piece('i', 3, -3)
        self.assertEqual(piece.cells, ((4, -3), (4, -2), (4, -1), (4, 0)))

    def test_form_is_wrapped(self):
        piece = self._piece('i', form=3)
        self.assertEqual(piece.form, 1)

    def test_cells_at_does_not_move(self):
        piece = self._piece('o', 2, 2)
        cells = piece.cells_at(5, 7)
        self.assertEqual(cells, [(6, 9), (7, 9), (6, 10), (7, 10)])
        self.assertEqual((piece.x, piece.y), (2, 2))

    def test_transform_cycle_is_identity(self):
        for shape in self.catalog:
            piece = Piece(shape, 4, -3)
            cells = piece.cells
            for _ in range(shape.forms):
                piece.transform()
            self.assertEqual(piece.form, 0, shape.name)
            self.assertEqual(piece.cells, cells, shape.name)

    def test_transform_negative_delta(self):
        piece = self._piece('t')
        piece.transform(-1)
        self.assertEqual(piece.form, 3)

    def test_cache_round_trip(self):
        piece = self._piece('j', 4, -3)
        for step in [(1, 0), 'T', (0, 2), 'T', (-3, 1), 'T', 'T', 'T', (2, 5)]:
            if step == 'T':
                piece.transform()
            else:
                piece.shift(*step)
            self.assertEqual(piece.cells_at(piece.x, piece.y, piece.form), list(piece.cells))

    def test_position_is_read_only(self):
        piece = self._piece('o')
        with self.assertRaises(AttributeError):
            piece.x = 3

    def test_highest_and_lowest_cells(self):
        # t form 0: (1, 1) above (0, 2), (1, 2), (2, 2)
        piece = self._piece('t')
        self.assertEqual(sorted(piece.highest_cells()), [(0, 2), (1, 1), (2, 2)])
        self.assertEqual(sorted(piece.lowest_cells()), [(0, 2), (1, 2), (2, 2)])

    def test_vertical_bar_extremes(self):
        piece = self._piece('i', 0, 0)
        self.assertEqual(piece.highest_cells(), [(1, 0)])
        self.assertEqual(piece.lowest_cells(), [(1, 3)])

    def test_extremes_for_hypothetical_placement(self):
        piece = self._piece('i', 0, 0)
        self.assertEqual(sorted(piece.lowest_cells(x=5, form=1)),
                         [(5, 2), (6, 2), (7, 2), (8, 2)])
        self.assertEqual((piece.x, piece.form), (0, 0))

    def test_rows(self):
        piece = self._piece('t', 0, 5)
        self.assertEqual(piece.rows(), [6, 7])

    def test_copy(self):
        piece = self._piece('l', 2, 3, 1)
        piece.grounded = True
        clone = piece.copy()
        self.assertEqual(clone.cells, piece.cells)
        self.assertFalse(clone.grounded)
        clone.shift(1, 0)
        self.assertNotEqual(clone.cells, piece.cells)


if __name__ == '__main__':
    unittest.main()
