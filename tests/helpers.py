from __future__ import annotations

import numpy as np

from sokogen.board import (
    OPEN,
    WALL,
    StructuralValidator,
    TemplateLibrary,
    TileFragment,
    count_open,
    reachable_open_count,
)
from sokogen.types import Grid

ALL_WALL_ROWS = ("#####",) * 5

# Every ring cell open: each symmetry variant has OPEN on all four edges, so
# nothing fits next to the board's edge.
OPEN_RING_ROWS = (
    "     ",
    " ### ",
    " ### ",
    " ### ",
    "     ",
)

# Fully open room, placeholders around it.
OPEN_ROOM_ROWS = (
    "00000",
    "0   0",
    "0   0",
    "0   0",
    "00000",
)

# A single open cell walled in on all sides.
CELL_ROWS = (
    "00000",
    "0###0",
    "0# #0",
    "0###0",
    "00000",
)

# Corridor that needs an open cell to its left.
LEFT_CORRIDOR_ROWS = (
    "00000",
    "0###0",
    "    0",
    "0###0",
    "00000",
)

# Two walls along the top-left corner: no symmetry besides the identity.
DOMINO_ROWS = (
    "##000",
    "00000",
    "00000",
    "00000",
    "00000",
)

# All 25 cells distinct, for checking transformations by position.
LETTER_ROWS = (
    "abcde",
    "fghij",
    "klmno",
    "pqrst",
    "uvwxy",
)


def make_fragment(rows: tuple[str, ...], index: int = -1) -> TileFragment:
    return TileFragment.from_rows(rows, library_index=index)


def make_library(*blocks: tuple[str, ...]) -> TemplateLibrary:
    return TemplateLibrary([TileFragment.from_rows(rows) for rows in blocks])


def assert_valid_board(grid: Grid, height: int, width: int) -> None:
    """Shared invariants of every board the generator returns."""
    assert grid.shape == (height, width)

    assert np.all(grid[0, :] == WALL)
    assert np.all(grid[-1, :] == WALL)
    assert np.all(grid[:, 0] == WALL)
    assert np.all(grid[:, -1] == WALL)

    assert set(np.unique(grid)) <= {WALL, OPEN}

    assert reachable_open_count(grid) == count_open(grid)
    assert not StructuralValidator().has_degenerate_area(grid)
