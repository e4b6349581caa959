"""Board topology generation from template fragments.

This package tiles small, hand-authored fragments across a board:
- TemplateLibrary: Loads the base fragments from template text
- TileFragment: A square fragment with rotate/flip symmetry variants
- BoundaryMatcher: Checks a variant's edges against the board around it
- LatticePlacer: Walks the placement lattice and composites candidates
- StructuralValidator: Rejects degenerate open areas and disconnected boards
- LevelGenerator: Retries placement and validation until boards are accepted
"""

from .boundary import BoundaryMatcher, BoundaryStrips, composite
from .fragment import Edge, SymmetryMode, TileFragment, iter_variants
from .generator import (
    GenerationExhausted,
    GeneratorSettings,
    LevelGenerator,
    LevelStats,
)
from .library import MalformedTemplateError, TemplateLibrary, load_fragments
from .placer import (
    LatticePlacer,
    PlacementAttempt,
    PlacementFailed,
    PlacementState,
    lattice_anchors,
    repair_border,
)
from .tiles import (
    OPEN,
    PLACEHOLDER,
    UNDECIDED,
    WALL,
    board_size_for_rooms,
    count_open,
    create_grid,
    grid_from_lines,
    grid_to_lines,
)
from .validator import StructuralValidator, ValidationOutcome, reachable_open_count

__all__ = [
    "OPEN",
    "PLACEHOLDER",
    "UNDECIDED",
    "WALL",
    "BoundaryMatcher",
    "BoundaryStrips",
    "Edge",
    "GenerationExhausted",
    "GeneratorSettings",
    "LatticePlacer",
    "LevelGenerator",
    "LevelStats",
    "MalformedTemplateError",
    "PlacementAttempt",
    "PlacementFailed",
    "PlacementState",
    "StructuralValidator",
    "SymmetryMode",
    "TemplateLibrary",
    "TileFragment",
    "ValidationOutcome",
    "board_size_for_rooms",
    "composite",
    "count_open",
    "create_grid",
    "grid_from_lines",
    "grid_to_lines",
    "iter_variants",
    "lattice_anchors",
    "load_fragments",
    "reachable_open_count",
    "repair_border",
]
