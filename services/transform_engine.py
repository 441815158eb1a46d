from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence, Tuple

import numpy as np

from models.color import MAX_INTENSITY
from models.exceptions import InvalidDimension, OutOfBounds
from models.pixel_grid import PixelGrid

logger = logging.getLogger(__name__)

BLUR_KERNEL = 3  # 3x3 box, centre cell included

Mapping = Callable[[np.ndarray, np.ndarray], Tuple[np.ndarray, np.ndarray]]


# ─── Dimension helpers ─────────────────────────────────────────────────
def min_dimensions(width: int, height: int, grids: Iterable[PixelGrid]) -> Tuple[int, int]:
    """
    Smallest width and height across (width, height) and every grid.

    Returns:
        (min_width, min_height)
    """
    for grid in grids:
        width = min(width, grid.width)
        height = min(height, grid.height)
    return width, height


def trim_dimensions(width: int, height: int, tile_size: int) -> Tuple[int, int]:
    """Round both dimensions down to the nearest multiple of *tile_size*."""
    if tile_size <= 0:
        raise InvalidDimension(f"tile size must be positive, got {tile_size}")
    return width - width % tile_size, height - height % tile_size


def _allocate_or_empty(width: int, height: int) -> PixelGrid:
    if width <= 0 or height <= 0:
        return PixelGrid.empty()
    return PixelGrid.allocate(width, height)


class TransformEngine:
    """
    Applies one transformation at a time to the grid it owns.
    *   invert / grayscale mutate the held grid in place.
    *   every other operation reads the held grid, fills a freshly allocated
        destination and only then swaps it in.
    *   width / height are captured once at construction and bound every
        pass, even after the held grid has been replaced.
    """

    def __init__(self, grid: PixelGrid):
        self._grid = grid
        self.width = grid.width
        self.height = grid.height

    @property
    def grid(self) -> PixelGrid:
        return self._grid

    # ─── Internal helpers ──────────────────────────────────────────
    def _source(self) -> np.ndarray:
        """
        Read-only view of the held pixels restricted to the captured extent.
        Raises OutOfBounds if the held grid no longer covers that extent.
        """
        grid = self._grid
        if grid.width < self.width or grid.height < self.height:
            raise OutOfBounds(self.width - 1, self.height - 1, grid.width, grid.height)
        view = grid.pixels[:self.height, :self.width]
        view.flags.writeable = False
        return view

    def _replace(self, new_grid: PixelGrid) -> None:
        logger.debug("Replacing %r with %r", self._grid, new_grid)
        self._grid = new_grid

    def _write_in_place(self, new_pixels: np.ndarray) -> None:
        self._grid.pixels[:self.height, :self.width] = new_pixels

    def _remap(self, dest_width: int, dest_height: int, mapping: Mapping) -> None:
        """Move every source cell (x, y) to mapping(x, y) in a new grid."""
        src = self._source()
        ys, xs = np.indices((self.height, self.width))
        dest_xs, dest_ys = mapping(xs, ys)
        new_grid = PixelGrid.allocate(dest_width, dest_height)
        new_grid.pixels[dest_ys, dest_xs] = src[ys, xs]
        self._replace(new_grid)

    def _sources(self, others: Sequence[PixelGrid]) -> list[np.ndarray]:
        return [self._source()] + [other.pixels for other in others]

    # ─── Per-pixel colour operations ──────────────────────────────
    def invert(self) -> None:
        logger.debug("invert %dx%d", self.width, self.height)
        src = self._source()
        self._write_in_place(MAX_INTENSITY - src)

    def grayscale(self) -> None:
        logger.debug("grayscale %dx%d", self.width, self.height)
        src = self._source()
        avg = src.astype(np.int32).sum(axis=2) // 3
        self._write_in_place(np.repeat(avg[:, :, np.newaxis], 3, axis=2))

    # ─── Geometry ─────────────────────────────────────────────────
    def rotate90(self) -> None:
        """Clockwise quarter turn: (x, y) -> (height - 1 - y, x)."""
        logger.debug("rotate90 %dx%d", self.width, self.height)
        h = self.height
        self._remap(self.height, self.width, lambda xs, ys: (h - 1 - ys, xs))

    def rotate180(self) -> None:
        logger.debug("rotate180 %dx%d", self.width, self.height)
        w, h = self.width, self.height
        self._remap(w, h, lambda xs, ys: (w - 1 - xs, h - 1 - ys))

    def rotate270(self) -> None:
        self.rotate180()
        self.rotate90()

    def flip_horizontal(self) -> None:
        """Mirror across the vertical axis."""
        logger.debug("flip_horizontal %dx%d", self.width, self.height)
        w = self.width
        self._remap(w, self.height, lambda xs, ys: (w - 1 - xs, ys))

    def flip_vertical(self) -> None:
        """Mirror across the horizontal axis."""
        logger.debug("flip_vertical %dx%d", self.width, self.height)
        h = self.height
        self._remap(self.width, h, lambda xs, ys: (xs, h - 1 - ys))

    # ─── Multi-source operations ──────────────────────────────────
    def blend(self, others: Sequence[PixelGrid]) -> None:
        """
        Average the held grid with every grid in *others*.

        Channels are summed over all N sources first and the total is
        divided once by N (truncating). The result is cropped to the
        smallest width and height among the sources.
        """
        sources = self._sources(others)
        width, height = min_dimensions(self.width, self.height, others)
        logger.debug("blend %d sources -> %dx%d", len(sources), width, height)

        new_grid = _allocate_or_empty(width, height)
        if not new_grid.is_empty():
            total = np.zeros((height, width, 3), dtype=np.int64)
            for src in sources:
                total += src[:height, :width]
            new_grid.pixels[:] = total // len(sources)
        self._replace(new_grid)

    def mosaic(self, tile_size: int, others: Sequence[PixelGrid]) -> None:
        """
        Tile the held grid and *others* into one picture.

        The tile at tile-row r, tile-column c is copied from source
        (r + c) mod N at the same absolute coordinates. The output is the
        smallest common size trimmed to a multiple of *tile_size*; it is
        the empty grid when trimming leaves nothing.
        """
        sources = self._sources(others)
        min_w, min_h = min_dimensions(self.width, self.height, others)
        width, height = trim_dimensions(min_w, min_h, tile_size)
        logger.debug("mosaic %d sources, tile %d -> %dx%d",
                     len(sources), tile_size, width, height)

        new_grid = _allocate_or_empty(width, height)
        n = len(sources)
        for row, y in enumerate(range(0, height, tile_size)):
            for col, x in enumerate(range(0, width, tile_size)):
                src = sources[(row + col) % n]
                new_grid.pixels[y:y + tile_size, x:x + tile_size] = \
                    src[y:y + tile_size, x:x + tile_size]
        self._replace(new_grid)

    # ─── Filtering ────────────────────────────────────────────────
    def blur(self) -> None:
        """
        3x3 box blur of interior cells.
        Border cells are copied unchanged; no clamping or wrap-around.
        """
        logger.debug("blur %dx%d", self.width, self.height)
        src = self._source()
        w, h = self.width, self.height
        new_grid = PixelGrid.from_array(src)

        if w >= BLUR_KERNEL and h >= BLUR_KERNEL:
            acc = np.zeros((h - 2, w - 2, 3), dtype=np.int32)
            for dy in range(BLUR_KERNEL):
                for dx in range(BLUR_KERNEL):
                    acc += src[dy:h - 2 + dy, dx:w - 2 + dx]
            new_grid.pixels[1:h - 1, 1:w - 1] = acc // (BLUR_KERNEL * BLUR_KERNEL)
        self._replace(new_grid)
