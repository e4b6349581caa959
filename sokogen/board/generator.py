"""Level generation: placement, validation and retry.

LevelGenerator ties the pieces together. For every requested level it picks
board dimensions, then repeats placement and validation until a board is
accepted. A placement failure and a validation rejection are treated the
same way: the board is discarded and the next attempt starts from an empty
board. Attempts are counted per level, and the loop gives up with
GenerationExhausted once the configured attempt ceiling or time limit is
reached.

Example:
    from sokogen.board import LevelGenerator, TemplateLibrary

    generator = LevelGenerator(TemplateLibrary.default())
    boards = generator.generate(3)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sokogen import config
from sokogen.util import rng

from .fragment import SymmetryMode
from .placer import LatticePlacer, PlacementFailed
from .tiles import board_size_for_rooms, count_open
from .validator import StructuralValidator, ValidationOutcome

if TYPE_CHECKING:
    from sokogen.types import BoardShape, CellOffset, Grid
    from sokogen.util.rng import RNG

    from .library import TemplateLibrary

logger = logging.getLogger(__name__)

_dimensions_rng = rng.get("board.dimensions")


@dataclass
class GeneratorSettings:
    """Tuning knobs for LevelGenerator. Defaults come from sokogen.config.

    Attributes:
        min_rooms: Fewest rooms per axis.
        max_rooms: Most rooms per axis. Width and height are drawn
            independently from [min_rooms, max_rooms].
        max_attempts: Attempts allowed per level, or None for no ceiling.
        time_limit: Seconds allowed per level, or None for no deadline.
        connectivity_check: Reject boards with isolated open pockets.
        symmetry_mode: Symmetry variants tried per fragment.
        area_probes: Probe offsets for the degenerate-area check.
    """

    min_rooms: int = config.MIN_ROOMS
    max_rooms: int = config.MAX_ROOMS
    max_attempts: int | None = config.MAX_GENERATION_ATTEMPTS
    time_limit: float | None = config.GENERATION_TIME_LIMIT
    connectivity_check: bool = config.CONNECTIVITY_CHECK_ENABLED
    symmetry_mode: SymmetryMode = SymmetryMode(config.SYMMETRY_MODE)
    area_probes: tuple[CellOffset, ...] = config.DEGENERATE_AREA_PROBES

    def __post_init__(self) -> None:
        if self.min_rooms < 1 or self.max_rooms < self.min_rooms:
            raise ValueError(
                f"Invalid room range [{self.min_rooms}, {self.max_rooms}]"
            )
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")
        self.symmetry_mode = SymmetryMode(self.symmetry_mode)


@dataclass
class LevelStats:
    """Bookkeeping for one level's generation.

    Attributes:
        shape: (height, width) of the board.
        attempts: Attempts started, including the accepted one.
        placement_failures: Attempts abandoned because an anchor had no
            compatible candidate.
        degenerate_rejections: Boards rejected for a degenerate open area.
        disconnected_rejections: Boards rejected for isolated open pockets.
        elapsed: Seconds spent on this level.
        accepted: Whether a board was produced.
    """

    shape: BoardShape
    attempts: int = 0
    placement_failures: int = 0
    degenerate_rejections: int = 0
    disconnected_rejections: int = 0
    elapsed: float = 0.0
    accepted: bool = False

    @property
    def rejections(self) -> int:
        return self.degenerate_rejections + self.disconnected_rejections


class GenerationExhausted(RuntimeError):
    """Raised when a level could not be produced within the attempt budget.

    Attributes:
        stats: What happened during the failed level.
    """

    def __init__(self, message: str, stats: LevelStats) -> None:
        super().__init__(message)
        self.stats = stats


class LevelGenerator:
    """Produces validated boards from a template library.

    Attributes:
        levels: Boards accepted by the most recent generate() call.
        history: LevelStats for every level attempted by this generator.
    """

    def __init__(
        self,
        library: TemplateLibrary,
        settings: GeneratorSettings | None = None,
        rng: RNG | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            library: Base fragments, shared read-only by every attempt.
            settings: Generation settings. Defaults to GeneratorSettings().
            rng: Random source for dimensions and candidate choice. Defaults
                to the "board.dimensions" and "board.lattice" streams.
        """
        self.library = library
        self.settings = settings if settings is not None else GeneratorSettings()
        self.rng = rng
        self.levels: list[Grid] = []
        self.history: list[LevelStats] = []

        self.placer = LatticePlacer(
            self.library,
            rng=self.rng,
            symmetry_mode=self.settings.symmetry_mode,
        )
        self.validator = StructuralValidator(
            connectivity_check=self.settings.connectivity_check,
            area_probes=self.settings.area_probes,
        )

    @property
    def attempts_made(self) -> int:
        """Total attempts across every level this generator has worked on."""
        return sum(stats.attempts for stats in self.history)

    def pick_dimensions(self) -> BoardShape:
        """Draw (height, width) for the next level."""
        dice = self.rng if self.rng is not None else _dimensions_rng
        rows = dice.randint(self.settings.min_rooms, self.settings.max_rooms)
        cols = dice.randint(self.settings.min_rooms, self.settings.max_rooms)
        step = self.placer.step
        side = self.library.side
        return (
            board_size_for_rooms(rows, step, side),
            board_size_for_rooms(cols, step, side),
        )

    def _out_of_budget(self, stats: LevelStats, started: float) -> str | None:
        max_attempts = self.settings.max_attempts
        if max_attempts is not None and stats.attempts >= max_attempts:
            return f"no valid board after {stats.attempts} attempts"
        time_limit = self.settings.time_limit
        if time_limit is not None and time.perf_counter() - started >= time_limit:
            return (
                f"no valid board within {time_limit:.2f}s ({stats.attempts} attempts)"
            )
        return None

    def generate_level(self) -> Grid:
        """Produce one accepted board.

        Raises:
            GenerationExhausted: If the attempt ceiling or time limit is hit.
        """
        height, width = self.pick_dimensions()
        stats = LevelStats(shape=(height, width))
        self.history.append(stats)
        started = time.perf_counter()

        while True:
            reason = self._out_of_budget(stats, started)
            if reason is not None:
                stats.elapsed = time.perf_counter() - started
                logger.warning(f"Giving up on {height}x{width} board: {reason}")
                raise GenerationExhausted(reason, stats)

            stats.attempts += 1
            try:
                grid = self.placer.place(height, width).grid
            except PlacementFailed as e:
                stats.placement_failures += 1
                logger.debug(f"Attempt {stats.attempts}: {e}")
                continue

            outcome = self.validator.check(grid)
            if outcome is ValidationOutcome.DEGENERATE_AREA:
                stats.degenerate_rejections += 1
                logger.debug(f"Attempt {stats.attempts}: degenerate open area")
                continue
            if outcome is ValidationOutcome.DISCONNECTED:
                stats.disconnected_rejections += 1
                logger.debug(f"Attempt {stats.attempts}: open cells not connected")
                continue

            stats.accepted = True
            stats.elapsed = time.perf_counter() - started
            logger.info(
                f"Accepted {height}x{width} board after {stats.attempts} attempts "
                f"({count_open(grid)} open cells, {stats.elapsed:.3f}s)"
            )
            return grid

    def generate(self, level_count: int) -> list[Grid]:
        """Produce ``level_count`` accepted boards, one after another.

        Raises:
            ValueError: If level_count is not a positive integer.
            GenerationExhausted: If any level runs out of attempts.
        """
        if isinstance(level_count, bool) or not isinstance(level_count, int):
            raise ValueError(f"level_count must be an integer, got {level_count!r}")
        if level_count < 1:
            raise ValueError(f"level_count must be positive, got {level_count}")

        self.levels.clear()
        for _ in range(level_count):
            self.levels.append(self.generate_level())
        return list(self.levels)
