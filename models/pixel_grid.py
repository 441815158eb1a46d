from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import numpy as np

from models.color import Color, MAX_INTENSITY
from models.exceptions import InvalidDimension, OutOfBounds


@dataclass(eq=False)
class PixelGrid:
    """
    Simple data object: a fixed-size RGB pixel buffer addressed by (x, y)
    (+ optional source path for bookkeeping).
    No OpenCV logic outside the repository layer.
    """
    pixels: np.ndarray  # Shape (H, W, 3), dtype uint8, RGB order.
    path: Path | None = None  # Source of the image.

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise InvalidDimension(f"expected (H, W, 3) pixels, got shape {self.pixels.shape}")

    # ── Construction ─────────────────────────────────────────────────
    @classmethod
    def allocate(cls, width: int, height: int) -> PixelGrid:
        """Zero-filled grid of width x height cells."""
        if width <= 0 or height <= 0:
            raise InvalidDimension(f"cannot allocate a {width}x{height} grid")
        return cls(np.zeros((height, width, 3), dtype=np.uint8))

    @classmethod
    def empty(cls) -> PixelGrid:
        """The 0x0 grid produced when a mosaic trims every dimension away."""
        return cls(np.zeros((0, 0, 3), dtype=np.uint8))

    @classmethod
    def from_array(cls, pixels: np.ndarray, path: Path | None = None) -> PixelGrid:
        """Wrap an (H, W, 3) array, clamping it into uint8."""
        arr = np.clip(np.asarray(pixels), 0, MAX_INTENSITY).astype(np.uint8)
        return cls(np.ascontiguousarray(arr), path)

    # ── Dimensions ───────────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    # ── Cell access ──────────────────────────────────────────────────
    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        return Color.from_sequence(self.pixels[y, x])

    def set(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self.pixels[y, x] = color.clamped().as_tuple()

    def copy(self) -> PixelGrid:
        return PixelGrid(self.pixels.copy(), self.path)

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self):
        return f"PixelGrid({self.width}x{self.height}, path={self.path})"
