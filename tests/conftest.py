"""Shared test fixtures.

Provides small deterministic grids so individual test modules stay focused.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
import pytest

from models.color import Color
from models.pixel_grid import PixelGrid


@pytest.fixture()
def random_grid() -> Callable[[int, int], PixelGrid]:
    """Factory for a reproducible random grid of the given width and height."""
    rng = np.random.default_rng(1234)

    def _make(width: int, height: int) -> PixelGrid:
        pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
        return PixelGrid(pixels)

    return _make


@pytest.fixture()
def solid_grid() -> Callable[[Color, int, int], PixelGrid]:
    """Factory for a grid filled with one colour."""

    def _make(color: Color, width: int, height: int) -> PixelGrid:
        grid = PixelGrid.allocate(width, height)
        grid.pixels[:, :] = color.as_tuple()
        return grid

    return _make


@pytest.fixture()
def wide_grid(random_grid) -> PixelGrid:
    """A non-square 4x3 grid, so width/height mix-ups show up."""
    return random_grid(4, 3)
