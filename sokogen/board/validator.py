"""Structural checks on finished boards.

Two independent checks, either of which rejects a board:

- Degenerate open area: a fully open 3x3 window whose probe cell (by default
  the cell diagonally beyond the window's far corner) is open too. Such
  areas mean neighbouring fragments failed to constrain each other and left
  a large featureless room.
- Connectivity: every OPEN cell must be reachable from every other through
  4-neighbour OPEN steps. A board without OPEN cells passes trivially.

The connectivity check can be switched off to reproduce the older generator,
which accepted every board here.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from enum import Enum, auto
from typing import TYPE_CHECKING

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from sokogen import config

from .tiles import count_open, open_mask

if TYPE_CHECKING:
    from sokogen.types import CellOffset, Grid

AREA_WINDOW = 3

_NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class ValidationOutcome(Enum):
    VALID = auto()
    DEGENERATE_AREA = auto()
    DISCONNECTED = auto()


def reachable_open_count(grid: Grid) -> int:
    """Count OPEN cells reachable from the first OPEN cell in row-major order.

    Uses an explicit queue, so board size is not limited by recursion depth.
    Returns 0 when the board has no OPEN cell.
    """
    is_open = open_mask(grid)
    starts = np.argwhere(is_open)
    if len(starts) == 0:
        return 0

    height, width = grid.shape
    visited = np.zeros((height, width), dtype=bool)
    start_row, start_col = (int(v) for v in starts[0])
    visited[start_row, start_col] = True
    queue = deque([(start_row, start_col)])
    reached = 0

    while queue:
        row, col = queue.popleft()
        reached += 1
        for d_row, d_col in _NEIGHBOR_OFFSETS:
            n_row, n_col = row + d_row, col + d_col
            if (
                0 <= n_row < height
                and 0 <= n_col < width
                and not visited[n_row, n_col]
                and is_open[n_row, n_col]
            ):
                visited[n_row, n_col] = True
                queue.append((n_row, n_col))

    return reached


class StructuralValidator:
    """Accepts or rejects a placed, border-repaired board."""

    def __init__(
        self,
        connectivity_check: bool = config.CONNECTIVITY_CHECK_ENABLED,
        area_probes: Sequence[CellOffset] = config.DEGENERATE_AREA_PROBES,
    ) -> None:
        """Initialize the validator.

        Args:
            connectivity_check: Run the flood-fill check. False makes it
                always pass.
            area_probes: (row, col) offsets from a 3x3 window's top-left
                cell that are tested once the window is fully open. Each
                offset must lie outside the window.
        """
        for d_row, d_col in area_probes:
            inside_window = d_row < AREA_WINDOW and d_col < AREA_WINDOW
            if d_row < 0 or d_col < 0 or inside_window:
                raise ValueError(
                    f"Probe offset {(d_row, d_col)} must lie below or right of "
                    "the 3x3 window"
                )
        self.connectivity_check = connectivity_check
        self.area_probes = tuple((int(r), int(c)) for r, c in area_probes)

    def degenerate_areas(self, grid: Grid) -> list[tuple[int, int]]:
        """Top-left cells of every fully open 3x3 window with an open probe."""
        height, width = grid.shape
        if height < AREA_WINDOW or width < AREA_WINDOW:
            return []

        is_open = open_mask(grid)
        # full_windows[r, c]: the 3x3 window with top-left (r, c) is all OPEN
        full_windows = sliding_window_view(is_open, (AREA_WINDOW, AREA_WINDOW)).all(
            axis=(2, 3)
        )

        flagged = np.zeros_like(full_windows)
        for d_row, d_col in self.area_probes:
            rows = min(full_windows.shape[0], height - d_row)
            cols = min(full_windows.shape[1], width - d_col)
            if rows <= 0 or cols <= 0:
                continue
            probe_open = is_open[d_row : d_row + rows, d_col : d_col + cols]
            flagged[:rows, :cols] |= full_windows[:rows, :cols] & probe_open

        return [(int(r), int(c)) for r, c in np.argwhere(flagged)]

    def has_degenerate_area(self, grid: Grid) -> bool:
        return bool(self.degenerate_areas(grid))

    def is_fully_connected(self, grid: Grid) -> bool:
        """True if all OPEN cells form one 4-connected region.

        Always True when the connectivity check is disabled.
        """
        if not self.connectivity_check:
            return True
        return reachable_open_count(grid) == count_open(grid)

    def check(self, grid: Grid) -> ValidationOutcome:
        if self.has_degenerate_area(grid):
            return ValidationOutcome.DEGENERATE_AREA
        if not self.is_fully_connected(grid):
            return ValidationOutcome.DISCONNECTED
        return ValidationOutcome.VALID

    def is_valid(self, grid: Grid) -> bool:
        return self.check(grid) is ValidationOutcome.VALID
