"""
Piece shape catalog for tetrisai.
Shapes are registered from bit-encoded grids: bit f of cell (x, y) is set when
the cell is occupied in form f. Cell lists are derived once at registration.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple

from ..exceptions import CatalogError

Cell = Tuple[int, int]


@dataclass(frozen=True)
class PieceShape:
    """Immutable description of one piece type."""
    id: int
    name: str
    forms: int
    starter: bool  # allowed as the first piece of a session
    size: int  # largest dimension of the source bit grid
    form_cells: Tuple[Tuple[Cell, ...], ...] = field(repr=False)

    @property
    def tile(self) -> int:
        """Value stored in the board grid for a landed cell of this shape."""
        return self.id + 1

    def cells(self, form: int) -> Tuple[Cell, ...]:
        """Relative (x, y) cells of a form, in row-major order."""
        return self.form_cells[form % self.forms]

    def rows(self, form: int) -> List[int]:
        """Distinct relative rows occupied by a form, ascending."""
        return sorted({y for _, y in self.cells(form)})


def decode_forms(forms: int, bit_grid: Sequence[Sequence[int]]) -> Tuple[Tuple[Cell, ...], ...]:
    """Expand a bit grid into one cell tuple per form."""
    decoded = []
    for form in range(forms):
        cells = tuple(
            (x, y)
            for y, row in enumerate(bit_grid)
            for x, bits in enumerate(row)
            if (bits >> form) & 1
        )
        if not cells:
            raise CatalogError(f"form {form} has no occupied cells")
        decoded.append(cells)
    return tuple(decoded)


class PieceCatalog:
    """Registry of piece shapes, indexed by registration order."""

    def __init__(self):
        self._shapes: List[PieceShape] = []
        self._by_name: Dict[str, PieceShape] = {}
        self._largest = 0

    def add_shape(self, name: str, forms: int, starter: bool,
                  bit_grid: Sequence[Sequence[int]]) -> PieceShape:
        """Register a shape and precompute the cells of every form."""
        if forms < 1:
            raise CatalogError(f"shape {name!r} needs at least one form")
        if name in self._by_name:
            raise CatalogError(f"shape {name!r} is already registered")
        if not bit_grid or not bit_grid[0]:
            raise CatalogError(f"shape {name!r} has an empty grid")
        width = len(bit_grid[0])
        if any(len(row) != width for row in bit_grid):
            raise CatalogError(f"shape {name!r} has a ragged grid")

        try:
            form_cells = decode_forms(forms, bit_grid)
        except CatalogError as e:
            raise CatalogError(f"shape {name!r}: {e}") from e

        size = max(len(bit_grid), width)
        shape = PieceShape(len(self._shapes), name, forms, starter, size, form_cells)
        self._shapes.append(shape)
        self._by_name[name] = shape
        self._largest = max(self._largest, size)
        return shape

    def by_id(self, shape_id: int) -> PieceShape:
        return self._shapes[shape_id]

    def by_name(self, name: str) -> PieceShape:
        return self._by_name[name]

    def max_bounding_size(self) -> int:
        """Largest bit grid dimension over all shapes (next-piece preview size)."""
        return self._largest

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[PieceShape]:
        return iter(self._shapes)

    def __repr__(self):
        return f"PieceCatalog({', '.join(s.name for s in self._shapes)})"


# Bit grids of the seven standard shapes: (name, forms, starter, grid).
# Form 0 is the right-most bit of each element, form 1 the next bit, and so on.
STANDARD_SHAPES = [
    ('i', 2, True, [
        [0, 1, 0, 0],
        [0, 1, 0, 0],
        [2, 3, 2, 2],
        [0, 1, 0, 0]]),
    ('j', 4, True, [
        [0, 0, 0, 0],
        [0, 4, 5, 0],
        [8, 14, 9, 0],
        [0, 7, 11, 2]]),
    ('l', 4, True, [
        [0, 0, 0, 0],
        [0, 5, 4, 0],
        [0, 3, 14, 2],
        [8, 11, 13, 0]]),
    ('o', 1, True, [
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 1, 1, 0],
        [0, 1, 1, 0]]),
    ('t', 4, True, [
        [0, 0, 0, 0],
        [0, 11, 0, 0],
        [13, 15, 7, 0],
        [0, 14, 0, 0]]),
    ('s', 2, False, [
        [0, 0, 0, 0],
        [0, 2, 0, 0],
        [0, 3, 3, 0],
        [1, 1, 2, 0]]),
    ('z', 2, False, [
        [0, 0, 0, 0],
        [0, 0, 2, 0],
        [1, 3, 2, 0],
        [0, 3, 1, 0]]),
]


def standard_catalog() -> PieceCatalog:
    """Build the catalog of the seven standard shapes."""
    catalog = PieceCatalog()
    for name, forms, starter, grid in STANDARD_SHAPES:
        catalog.add_shape(name, forms, starter, grid)
    return catalog
