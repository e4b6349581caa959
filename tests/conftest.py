from __future__ import annotations

from collections.abc import Iterator

import pytest

from sokogen.util import rng


@pytest.fixture(autouse=True)
def seeded_board_rng() -> Iterator[None]:
    """Give every test the same master seed for the board RNG streams."""
    rng.init(1234)
    yield
    rng.init(1234)
