from __future__ import annotations

from typing import TypeAlias

import numpy as np

# =============================================================================
# SPATIAL TYPES
# =============================================================================

CellCoord: TypeAlias = int  # Always integer cell position

# Board positions are (row, col), row 0 at the top.
CellPos: TypeAlias = tuple[CellCoord, CellCoord]  # Example: (3, 0) = row 3, column 0

# Offset from a cell, (d_row, d_col).
CellOffset: TypeAlias = tuple[int, int]

# (height, width) of a board in cells.
BoardShape: TypeAlias = tuple[int, int]

# =============================================================================
# BOARD DATA
# =============================================================================

# A board is a 2D numpy array of single-character tile symbols ("<U1"),
# shape (height, width), indexed [row, col].
Grid: TypeAlias = np.ndarray

# =============================================================================
# RANDOMNESS
# =============================================================================

RandomSeed = int | str | None
