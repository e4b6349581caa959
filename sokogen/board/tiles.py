"""Tile alphabet and board grid helpers.

Boards and template fragments share one single-character alphabet, the same
characters used in template files:

- WALL ("#"): solid wall.
- OPEN (" "): open floor.
- PLACEHOLDER ("0"): fragment cell that leaves the value to whatever the
  board (or a later, overlapping fragment) already holds.
- UNDECIDED ("9"): board cell nothing has been written to yet. Also used as
  the sentinel strip outside the board edge.

Grids are numpy arrays of dtype "<U1", shape (height, width), indexed
[row, col].
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from sokogen import config

if TYPE_CHECKING:
    from sokogen.types import Grid

WALL = "#"
OPEN = " "
PLACEHOLDER = "0"
UNDECIDED = "9"

# Values an earlier fragment has committed to. A PLACEHOLDER never
# overwrites these.
DECIDED_TILES: tuple[str, ...] = (WALL, OPEN)

TILE_DTYPE = "<U1"


def board_size_for_rooms(
    rooms: int,
    lattice_step: int = config.LATTICE_STEP,
    fragment_side: int = config.FRAGMENT_SIDE,
) -> int:
    """Cells along one axis of a board holding ``rooms`` lattice steps.

    With the default 5-cell fragments stepped by 3 this is ``rooms * 3 + 2``.
    """
    if rooms < 1:
        raise ValueError(f"Room count must be at least 1, got {rooms}")
    return rooms * lattice_step + (fragment_side - lattice_step)


def create_grid(height: int, width: int, fill: str = UNDECIDED) -> Grid:
    """Create a new board with every cell set to ``fill``."""
    return np.full((height, width), fill, dtype=TILE_DTYPE)


def grid_from_lines(lines: Iterable[str]) -> Grid:
    """Build a grid from equal-length text rows."""
    rows = [list(line) for line in lines]
    if not rows:
        raise ValueError("Cannot build a grid from zero rows")
    width = len(rows[0])
    if width == 0 or any(len(row) != width for row in rows):
        raise ValueError("All grid rows must have the same, non-zero length")
    return np.array(rows, dtype=TILE_DTYPE)


def grid_to_lines(grid: Grid) -> list[str]:
    """Render a grid as text rows in the template alphabet."""
    return ["".join(row) for row in grid.tolist()]


def open_mask(grid: Grid) -> np.ndarray:
    """Boolean array marking OPEN cells."""
    return grid == OPEN


def count_open(grid: Grid) -> int:
    """Number of OPEN cells on the board."""
    return int(np.count_nonzero(grid == OPEN))


def border_mask(height: int, width: int) -> np.ndarray:
    """Boolean array marking the outermost ring of cells."""
    mask = np.zeros((height, width), dtype=bool)
    mask[0, :] = True
    mask[-1, :] = True
    mask[:, 0] = True
    mask[:, -1] = True
    return mask
