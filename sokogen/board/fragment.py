"""Square template fragments and their symmetry variants.

A TileFragment is a small square block of tile symbols (5x5 by default)
loaded from the template library. The generator never places a library
fragment directly: it works on copies that are rotated and mirrored into
symmetry variants, so the library originals stay untouched for the whole
run.

Variant enumeration comes in two flavours (see SymmetryMode):

- LITERAL: for each rotation r in 0..3 try the rotated copy, then the same
  copy flipped horizontally, then that copy flipped vertically as well.
  Flipping both ways equals a half turn, so every third try repeats a plain
  rotation: 12 tries for at most 8 distinct layouts.
- FULL: for each rotation try the rotated copy and its horizontal mirror,
  the eight layouts of the square's symmetry group with no repeats.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import IntEnum, StrEnum

import numpy as np

from .tiles import TILE_DTYPE


class Edge(IntEnum):
    """Fragment edges, clockwise from the top."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3


EDGES = (Edge.TOP, Edge.RIGHT, Edge.BOTTOM, Edge.LEFT)


class SymmetryMode(StrEnum):
    """Which symmetry variants are tried for each fragment."""

    LITERAL = "literal"
    FULL = "full"


class TileFragment:
    """A square block of tile symbols.

    Attributes:
        cells: 2D numpy array of single-character symbols, shape (side, side).
            Read-only for fragments owned by a TemplateLibrary.
        library_index: Position of the base fragment in its library, or -1
            for fragments built outside a library. Copies and variants keep
            the index of the fragment they were derived from.
    """

    def __init__(self, cells: np.ndarray, library_index: int = -1) -> None:
        cells = np.asarray(cells, dtype=TILE_DTYPE)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1] or cells.size == 0:
            raise ValueError(f"Fragment must be a non-empty square, got {cells.shape}")
        self.cells = cells
        self.library_index = library_index

    @classmethod
    def from_rows(cls, rows: Sequence[str], library_index: int = -1) -> TileFragment:
        """Build a fragment from text rows, one character per cell."""
        cells = np.array([list(row) for row in rows], dtype=TILE_DTYPE)
        return cls(cells, library_index)

    @property
    def side(self) -> int:
        return self.cells.shape[0]

    @property
    def frozen(self) -> bool:
        return not self.cells.flags.writeable

    def freeze(self) -> TileFragment:
        """Make this fragment read-only and return it."""
        self.cells.setflags(write=False)
        return self

    def copy(self) -> TileFragment:
        """Return an independent, writable copy."""
        return TileFragment(self.cells.copy(), self.library_index)

    def _require_writable(self) -> None:
        if self.frozen:
            raise ValueError(
                "Fragment is read-only; transform a copy() instead of the original"
            )

    # -------------------------------------------------------------------------
    # In-place transformations
    # -------------------------------------------------------------------------

    def rotate(self, count: int = 1) -> None:
        """Rotate clockwise by a quarter turn, ``count`` times, in place.

        Each pass moves cells four at a time around the concentric rings of
        the square, which works for odd and even sides alike.
        """
        if count < 0:
            raise ValueError(f"Rotation count must be non-negative, got {count}")
        self._require_writable()

        c = self.cells
        n = self.side
        for _ in range(count):
            for i in range((n + 1) // 2):
                for j in range(n // 2):
                    temp = c[n - 1 - j, i]
                    c[n - 1 - j, i] = c[n - 1 - i, n - 1 - j]
                    c[n - 1 - i, n - 1 - j] = c[j, n - 1 - i]
                    c[j, n - 1 - i] = c[i, j]
                    c[i, j] = temp

    def flip_horizontal(self) -> None:
        """Mirror across the vertical mid-line (left and right swap)."""
        self._require_writable()
        self.cells[:, :] = self.cells[:, ::-1].copy()

    def flip_vertical(self) -> None:
        """Mirror across the horizontal mid-line (top and bottom swap)."""
        self._require_writable()
        self.cells[:, :] = self.cells[::-1, :].copy()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def edge(self, edge: Edge) -> np.ndarray:
        """Cells along one edge.

        Top and bottom edges read left to right, left and right edges read
        top to bottom, matching the orientation of BoundaryStrips.
        """
        match edge:
            case Edge.TOP:
                return self.cells[0, :]
            case Edge.RIGHT:
                return self.cells[:, -1]
            case Edge.BOTTOM:
                return self.cells[-1, :]
            case Edge.LEFT:
                return self.cells[:, 0]
        raise ValueError(f"Unknown edge: {edge!r}")

    def same_layout(self, other: TileFragment) -> bool:
        """True if every cell matches ``other``."""
        return bool(np.array_equal(self.cells, other.cells))

    def rows(self) -> list[str]:
        return ["".join(row) for row in self.cells.tolist()]

    def __repr__(self) -> str:
        return f"TileFragment(index={self.library_index}, rows={self.rows()!r})"


def iter_variants(
    fragment: TileFragment, mode: SymmetryMode = SymmetryMode.LITERAL
) -> Iterator[TileFragment]:
    """Yield the symmetry variants of ``fragment`` in trial order.

    Every yielded variant is a fresh copy; ``fragment`` itself is never
    modified. Variants may repeat (a symmetric fragment looks the same after
    some transforms); callers filter duplicates.
    """
    for rotation in range(4):
        working = fragment.copy()
        working.rotate(rotation)
        yield working.copy()

        working.flip_horizontal()
        yield working.copy()

        if mode == SymmetryMode.LITERAL:
            working.flip_vertical()
            yield working.copy()
