"""Boundary matching and compositing for lattice placement.

Before a fragment variant is committed at an anchor, its four edges are
compared with the board cells just outside the footprint it would cover
(the boundary strips). The rule is one-sided: an OPEN cell on a fragment
edge needs an OPEN cell right next to it on the board, while WALL and
PLACEHOLDER edge cells fit against anything. Where the footprint touches the
board edge the strip is a sentinel of UNDECIDED cells, so nothing open can
face the outside of the board.

Once a variant is chosen it is painted onto the board with composite(),
which lets placeholders defer to cells an earlier, overlapping fragment has
already decided.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from sokogen import config

from .fragment import EDGES, Edge, TileFragment
from .tiles import DECIDED_TILES, OPEN, PLACEHOLDER, TILE_DTYPE, UNDECIDED

if TYPE_CHECKING:
    from sokogen.types import Grid


@dataclass(frozen=True)
class BoundaryStrips:
    """The board cells bordering a prospective fragment footprint.

    Top and bottom strips read left to right, left and right strips read top
    to bottom, so position k of a strip sits next to position k of the
    matching fragment edge.
    """

    top: np.ndarray
    right: np.ndarray
    bottom: np.ndarray
    left: np.ndarray

    def for_edge(self, edge: Edge) -> np.ndarray:
        return (self.top, self.right, self.bottom, self.left)[edge]


class BoundaryMatcher:
    """Decides whether a fragment variant may be committed at an anchor."""

    def __init__(self, side: int = config.FRAGMENT_SIDE) -> None:
        self.side = side

    def _sentinel(self) -> np.ndarray:
        return np.full(self.side, UNDECIDED, dtype=TILE_DTYPE)

    def strips_at(self, grid: Grid, row: int, col: int) -> BoundaryStrips:
        """Read the four strips around the footprint anchored at (row, col).

        Raises:
            ValueError: If the footprint does not fit on the board.
        """
        side = self.side
        height, width = grid.shape
        if row < 0 or col < 0 or row + side > height or col + side > width:
            raise ValueError(
                f"Footprint at ({row}, {col}) with side {side} does not fit "
                f"a {height}x{width} board"
            )

        top = grid[row - 1, col : col + side].copy() if row > 0 else self._sentinel()
        right = (
            grid[row : row + side, col + side].copy()
            if col + side < width
            else self._sentinel()
        )
        bottom = (
            grid[row + side, col : col + side].copy()
            if row + side < height
            else self._sentinel()
        )
        left = grid[row : row + side, col - 1].copy() if col > 0 else self._sentinel()

        return BoundaryStrips(top=top, right=right, bottom=bottom, left=left)

    def compatible(
        self,
        fragment: TileFragment,
        top: np.ndarray,
        right: np.ndarray,
        bottom: np.ndarray,
        left: np.ndarray,
    ) -> bool:
        """True if every OPEN edge cell of ``fragment`` faces an OPEN strip cell."""
        for edge, strip in zip(EDGES, (top, right, bottom, left), strict=True):
            edge_cells = fragment.edge(edge)
            if np.any((edge_cells == OPEN) & (strip != OPEN)):
                return False
        return True

    def accepts(self, fragment: TileFragment, strips: BoundaryStrips) -> bool:
        return self.compatible(
            fragment, strips.top, strips.right, strips.bottom, strips.left
        )


def composite(grid: Grid, fragment: TileFragment, row: int, col: int) -> None:
    """Paint ``fragment`` onto ``grid`` with its top-left cell at (row, col).

    A board cell that is already WALL or OPEN stays as it is where the
    fragment holds a PLACEHOLDER. Every other cell takes the fragment's
    value, including UNDECIDED cells (which may thereby become PLACEHOLDER)
    and decided cells under a concrete fragment value.
    """
    side = fragment.side
    target = grid[row : row + side, col : col + side]
    if target.shape != fragment.cells.shape:
        raise ValueError(
            f"Fragment of side {side} does not fit at ({row}, {col}) "
            f"on a {grid.shape[0]}x{grid.shape[1]} board"
        )

    keep = np.isin(target, DECIDED_TILES) & (fragment.cells == PLACEHOLDER)
    np.copyto(target, fragment.cells, where=~keep)
