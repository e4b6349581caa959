"""
Configuration constants.

Centralizes the magic numbers and tuning switches used by the board generator.
Organized by functional area for easy maintenance.
"""

from pathlib import Path
from typing import Literal

# =============================================================================
# GENERAL
# =============================================================================

PACKAGE_ROOT_PATH = Path(__file__).resolve().parent

# RANDOM_SEED = "tiles1"
RANDOM_SEED = None

# =============================================================================
# TEMPLATE LIBRARY
# =============================================================================

# Side length of every template fragment. Template files must use exactly
# this many rows per block and this many characters per row.
FRAGMENT_SIDE = 5

DEFAULT_TEMPLATES_PATH = PACKAGE_ROOT_PATH / "data" / "templates.txt"

# =============================================================================
# BOARD LAYOUT
# =============================================================================

# Distance between lattice anchors. Fragments are FRAGMENT_SIDE wide, so
# neighbouring placements share FRAGMENT_SIDE - LATTICE_STEP rows/columns.
LATTICE_STEP = 3

# Rooms per axis. Each axis gets rooms * LATTICE_STEP + 2 cells, the extra
# two being the wall border.
MIN_ROOMS = 2
MAX_ROOMS = 2

# =============================================================================
# GENERATION LOOP
# =============================================================================

# Attempts allowed per level before giving up with GenerationExhausted.
# None restores the old unbounded loop.
MAX_GENERATION_ATTEMPTS: int | None = 10_000

# Wall-clock budget per level in seconds. None disables the deadline.
GENERATION_TIME_LIMIT: float | None = None

# Symmetry variants tried per fragment and lattice cell.
# "literal": rotation, then +horizontal flip, then +vertical flip on top (12 tries)
# "full": all 4 rotations with and without a horizontal flip (8 tries)
SYMMETRY_MODE: Literal["literal", "full"] = "literal"

# =============================================================================
# VALIDATION
# =============================================================================

# Reject boards whose open cells are split into several pockets.
# Set to False to reproduce the historical behaviour where this check
# always passed.
CONNECTIVITY_CHECK_ENABLED = True

# Cells probed beyond a fully open 3x3 window, as (row, col) offsets from the
# window's top-left cell. Any probe that is also open marks the area as
# degenerate. (3, 3) is the cell diagonally past the far corner; the older
# generator probed ((3, 2), (2, 3)) instead.
DEGENERATE_AREA_PROBES: tuple[tuple[int, int], ...] = ((3, 3),)
