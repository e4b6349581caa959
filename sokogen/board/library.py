"""Template library loading.

Template text is a sequence of square blocks, one text row per fragment row:

    00000
    0###0
        0
    0###0
    00000

    00 00
    0# #0
    ...

Consecutive non-blank lines are grouped into blocks of exactly ``side`` rows.
Blank lines separate blocks and are otherwise ignored. Only truly empty lines
count as blank: a row of spaces is a row of OPEN cells. Characters are copied
one-to-one, without checking them against the tile alphabet.

Any structural problem (wrong row width, a blank line inside a block, or the
text ending part way through a block) raises MalformedTemplateError and no
fragments are returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import TextIO

from sokogen import config

from .fragment import TileFragment

logger = logging.getLogger(__name__)


class MalformedTemplateError(ValueError):
    """Raised when template text does not split into square blocks.

    Attributes:
        line_number: 1-based line where the problem was detected, if known.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def load_fragments(
    source: TextIO | Iterable[str] | str, side: int = config.FRAGMENT_SIDE
) -> list[TileFragment]:
    """Parse template text into read-only fragments.

    Args:
        source: A text stream, an iterable of lines, or the whole text.
        side: Required fragment side length.

    Returns:
        The fragments in file order, each tagged with its index.

    Raises:
        MalformedTemplateError: If the text is not a clean run of
            side x side blocks.
    """
    if side < 1:
        raise ValueError(f"Fragment side must be positive, got {side}")
    if isinstance(source, str):
        source = source.splitlines()

    fragments: list[TileFragment] = []
    block: list[str] = []
    block_start = 0
    line_number = 0

    for line_number, raw_line in enumerate(source, start=1):
        line = raw_line.rstrip("\r\n")

        if not line:
            if block:
                raise MalformedTemplateError(
                    f"block starting at line {block_start} has {len(block)} rows, "
                    f"expected {side}",
                    line_number,
                )
            continue

        if len(line) != side:
            raise MalformedTemplateError(
                f"row is {len(line)} characters wide, expected {side}", line_number
            )

        if not block:
            block_start = line_number
        block.append(line)

        if len(block) == side:
            fragment = TileFragment.from_rows(block, library_index=len(fragments))
            fragments.append(fragment.freeze())
            block = []

    if block:
        raise MalformedTemplateError(
            f"text ended inside the block starting at line {block_start} "
            f"({len(block)} of {side} rows)",
            line_number,
        )

    return fragments


class TemplateLibrary:
    """Read-only collection of base fragments for one generation run.

    Fragments are frozen on the way in and re-tagged with their position in
    the library, which is the key the placer uses for duplicate tracking.
    """

    def __init__(self, fragments: Sequence[TileFragment], origin: str = "<memory>"):
        if not fragments:
            raise ValueError("Template library needs at least one fragment")

        sides = {fragment.side for fragment in fragments}
        if len(sides) != 1:
            raise ValueError(f"All fragments must share one side length, got {sides}")

        self._fragments = tuple(
            TileFragment(fragment.cells.copy(), index).freeze()
            for index, fragment in enumerate(fragments)
        )
        self.side = sides.pop()
        self.origin = origin

    @classmethod
    def from_text(
        cls, text: str, side: int = config.FRAGMENT_SIDE, origin: str = "<text>"
    ) -> TemplateLibrary:
        return cls(load_fragments(text, side), origin=origin)

    @classmethod
    def from_path(
        cls, path: Path | str, side: int = config.FRAGMENT_SIDE
    ) -> TemplateLibrary:
        """Load a template file.

        Raises:
            OSError: If the file cannot be read.
            MalformedTemplateError: If its contents are malformed.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            fragments = load_fragments(f, side)
        logger.info(f"Loaded {len(fragments)} templates from {path}")
        return cls(fragments, origin=str(path))

    @classmethod
    def default(cls) -> TemplateLibrary:
        """The template set shipped with the package."""
        return cls.from_path(config.DEFAULT_TEMPLATES_PATH)

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[TileFragment]:
        return iter(self._fragments)

    def __getitem__(self, index: int) -> TileFragment:
        return self._fragments[index]

    def __repr__(self) -> str:
        return (
            f"TemplateLibrary({len(self._fragments)} fragments, "
            f"side={self.side}, origin={self.origin!r})"
        )
