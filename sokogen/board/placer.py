"""Lattice placement: tiling a board with template fragments.

The placer walks a fixed lattice of anchors spaced LATTICE_STEP cells apart,
so neighbouring 5x5 footprints overlap by two rows or columns. At each anchor:

1. SCANNING: move to the next anchor.
2. ENUMERATING: collect every symmetry variant of every library fragment
   whose edges fit the board around the footprint (see BoundaryMatcher).
3. COMMITTING: pick one candidate uniformly at random and composite it.

If an anchor yields no candidates the attempt is FAILED and PlacementFailed
is raised. There is no backtracking: the caller throws the whole board away
and starts again. After the last anchor the border is repaired and the
attempt is COMPLETE.

All per-attempt state lives in a PlacementAttempt, so two attempts never
share anything except the read-only library.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

import numpy as np

from sokogen import config
from sokogen.util import rng

from .boundary import BoundaryMatcher, composite
from .fragment import SymmetryMode, TileFragment, iter_variants
from .tiles import PLACEHOLDER, UNDECIDED, WALL, border_mask, create_grid

if TYPE_CHECKING:
    from sokogen.types import CellPos, Grid
    from sokogen.util.rng import RNG

    from .library import TemplateLibrary

logger = logging.getLogger(__name__)

_lattice_rng = rng.get("board.lattice")


class PlacementState(Enum):
    """Where a placement attempt is in its lattice walk."""

    SCANNING = auto()
    ENUMERATING = auto()
    COMMITTING = auto()
    COMPLETE = auto()
    FAILED = auto()


class PlacementFailed(Exception):
    """Raised when no fragment variant fits at a lattice anchor.

    This is recoverable: the board being built is discarded and generation
    starts over from an empty board.
    """

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"No compatible fragment at lattice anchor ({row}, {col})")
        self.row = row
        self.col = col


@dataclass
class PlacementAttempt:
    """Mutable state of one placement attempt.

    Attributes:
        grid: The board being built, shape (height, width).
        state: Current PlacementState.
        anchor: Lattice anchor currently being resolved, if any.
        candidates: Variants found compatible at the current anchor.
        accepted_by_index: Variants accepted at the current anchor, keyed by
            the library index of their base fragment. Used to skip duplicates.
        anchors_resolved: Number of anchors committed so far.
    """

    grid: Grid
    state: PlacementState = PlacementState.SCANNING
    anchor: CellPos | None = None
    candidates: list[TileFragment] = field(default_factory=list)
    accepted_by_index: dict[int, list[TileFragment]] = field(default_factory=dict)
    anchors_resolved: int = 0

    @classmethod
    def start(cls, height: int, width: int) -> PlacementAttempt:
        """Create an attempt on a board of UNDECIDED cells."""
        return cls(grid=create_grid(height, width))

    def already_accepted(self, variant: TileFragment) -> bool:
        """True if an identical variant of the same base fragment was accepted."""
        accepted = self.accepted_by_index.get(variant.library_index, ())
        return any(variant.same_layout(other) for other in accepted)

    def accept(self, variant: TileFragment) -> None:
        self.accepted_by_index.setdefault(variant.library_index, []).append(variant)
        self.candidates.append(variant)

    def clear_cell(self) -> None:
        """Forget the candidates and duplicate tracking of the resolved anchor."""
        self.candidates.clear()
        self.accepted_by_index.clear()
        self.anchor = None


def lattice_anchors(
    height: int,
    width: int,
    side: int = config.FRAGMENT_SIDE,
    step: int = config.LATTICE_STEP,
) -> Iterator[CellPos]:
    """Top-left anchors of every lattice footprint that fits the board, row-major."""
    for row in range(0, height - side + 1, step):
        for col in range(0, width - side + 1, step):
            yield row, col


def repair_border(grid: Grid) -> None:
    """Force the outer ring to WALL and settle leftover cells.

    Cells still PLACEHOLDER or UNDECIDED after the lattice walk become WALL,
    leaving only WALL, OPEN and any custom template symbols on the board.
    """
    height, width = grid.shape
    grid[border_mask(height, width)] = WALL
    grid[np.isin(grid, (PLACEHOLDER, UNDECIDED))] = WALL


class LatticePlacer:
    """Tiles a board with fragment variants along the placement lattice."""

    def __init__(
        self,
        library: TemplateLibrary,
        rng: RNG | None = None,
        symmetry_mode: SymmetryMode | str = config.SYMMETRY_MODE,
        step: int = config.LATTICE_STEP,
    ) -> None:
        """Initialize the placer.

        Args:
            library: Base fragments to place.
            rng: Random source for candidate selection. Defaults to the
                "board.lattice" stream.
            symmetry_mode: Which symmetry variants to try per fragment.
            step: Distance between lattice anchors.
        """
        if step < 1:
            raise ValueError(f"Lattice step must be positive, got {step}")
        self.library = library
        self.rng = rng if rng is not None else _lattice_rng
        self.symmetry_mode = SymmetryMode(symmetry_mode)
        self.step = step
        self.matcher = BoundaryMatcher(library.side)

    def anchors(self, height: int, width: int) -> Iterator[CellPos]:
        return lattice_anchors(height, width, self.library.side, self.step)

    def enumerate_candidates(
        self, attempt: PlacementAttempt, row: int, col: int
    ) -> list[TileFragment]:
        """Collect the compatible variants for the anchor at (row, col).

        Variants identical to one already accepted for the same base fragment
        are skipped before the compatibility test.
        """
        attempt.state = PlacementState.ENUMERATING
        attempt.anchor = (row, col)
        strips = self.matcher.strips_at(attempt.grid, row, col)

        for base in self.library:
            for variant in iter_variants(base, self.symmetry_mode):
                if attempt.already_accepted(variant):
                    continue
                if self.matcher.accepts(variant, strips):
                    attempt.accept(variant)

        return attempt.candidates

    def commit(self, attempt: PlacementAttempt) -> TileFragment:
        """Composite one random candidate at the current anchor."""
        if attempt.anchor is None or not attempt.candidates:
            raise RuntimeError("commit() needs an anchor with candidates")

        attempt.state = PlacementState.COMMITTING
        row, col = attempt.anchor
        chosen = self.rng.choice(attempt.candidates)
        composite(attempt.grid, chosen, row, col)

        attempt.anchors_resolved += 1
        attempt.clear_cell()
        attempt.state = PlacementState.SCANNING
        return chosen

    def run(self, attempt: PlacementAttempt) -> Grid:
        """Walk the whole lattice for ``attempt``.

        Returns:
            The finished, border-repaired board.

        Raises:
            PlacementFailed: If some anchor has no compatible candidate.
        """
        height, width = attempt.grid.shape
        for row, col in self.anchors(height, width):
            attempt.state = PlacementState.SCANNING
            if not self.enumerate_candidates(attempt, row, col):
                attempt.state = PlacementState.FAILED
                logger.debug(
                    f"Placement failed at ({row}, {col}) after "
                    f"{attempt.anchors_resolved} anchors"
                )
                raise PlacementFailed(row, col)
            self.commit(attempt)

        repair_border(attempt.grid)
        attempt.state = PlacementState.COMPLETE
        return attempt.grid

    def place(self, height: int, width: int) -> PlacementAttempt:
        """Run a fresh attempt on a new height x width board.

        Raises:
            PlacementFailed: If some anchor has no compatible candidate.
        """
        attempt = PlacementAttempt.start(height, width)
        self.run(attempt)
        return attempt
