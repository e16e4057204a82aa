"""
The active piece for tetrisai.
A piece is a shape reference plus an anchor (top-left of the shape's bit grid)
and a form index. Its absolute cells are cached and re-derived on every move.
"""

from typing import List, Optional, Tuple

from .catalog import Cell, PieceShape


class Piece:
    """A piece on (or above) the board."""

    def __init__(self, shape: PieceShape, x: int, y: int, form: int = 0):
        self.shape = shape
        self.grounded = False  # latched once the piece has touched down
        self._x = 0
        self._y = 0
        self._form = 0
        self._cells: Tuple[Cell, ...] = ()
        self._place(x, y, form)

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def form(self) -> int:
        return self._form

    @property
    def forms(self) -> int:
        return self.shape.forms

    @property
    def name(self) -> str:
        return self.shape.name

    @property
    def cells(self) -> Tuple[Cell, ...]:
        """Absolute cells at the current anchor and form."""
        return self._cells

    def _place(self, x: int, y: int, form: int):
        # Anchor, form and cell cache only ever change together here.
        self._x = x
        self._y = y
        self._form = form % self.shape.forms
        self._cells = tuple(self.cells_at(x, y, self._form))

    def cells_at(self, x: int, y: int, form: Optional[int] = None) -> List[Cell]:
        """Absolute cells for a hypothetical anchor and form; does not move the piece."""
        if form is None:
            form = self._form
        return [(cx + x, cy + y) for cx, cy in self.shape.cells(form)]

    def shift(self, dx: int, dy: int):
        """Move the anchor. Legality is checked by the caller."""
        self._place(self._x + dx, self._y + dy, self._form)

    def transform(self, delta: int = 1):
        """Advance the form by delta, wrapping modulo the form count."""
        self._place(self._x, self._y, self._form + delta)

    def highest_cells(self, x: Optional[int] = None, y: Optional[int] = None,
                      form: Optional[int] = None) -> List[Cell]:
        """Topmost occupied cell of each column the piece covers."""
        return self._column_extremes(self._resolve(x, y, form), reverse=False)

    def lowest_cells(self, x: Optional[int] = None, y: Optional[int] = None,
                     form: Optional[int] = None) -> List[Cell]:
        """Bottommost occupied cell of each column the piece covers."""
        return self._column_extremes(self._resolve(x, y, form), reverse=True)

    def rows(self) -> List[int]:
        """Distinct absolute rows occupied, ascending."""
        return [row + self._y for row in self.shape.rows(self._form)]

    def copy(self) -> 'Piece':
        """Same shape, anchor and form; the copy is not grounded."""
        return Piece(self.shape, self._x, self._y, self._form)

    def _resolve(self, x, y, form) -> List[Cell]:
        if x is None and y is None and form is None:
            return list(self._cells)
        return self.cells_at(self._x if x is None else x,
                             self._y if y is None else y,
                             form)

    @staticmethod
    def _column_extremes(cells: List[Cell], reverse: bool) -> List[Cell]:
        # Cells come in row-major order, so the first hit per column scanning
        # forwards is the highest and scanning backwards is the lowest.
        seen = set()
        result = []
        for cell in (reversed(cells) if reverse else cells):
            if cell[0] not in seen:
                seen.add(cell[0])
                result.append(cell)
        return result

    def __repr__(self):
        return f"Piece({self.shape.name}, x={self._x}, y={self._y}, form={self._form})"
