from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

MAX_INTENSITY = 255


def _clamp(channel: int) -> int:
    return max(0, min(MAX_INTENSITY, channel))


@dataclass
class Color:
    """
    Mutable RGB value object used for single-cell access on a PixelGrid.
    Whole-grid arithmetic happens on numpy arrays in the engine.
    """
    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def from_sequence(cls, channels: Sequence[int]) -> Color:
        red, green, blue = (int(c) for c in channels)
        return cls(red, green, blue)

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue

    def clamped(self) -> Color:
        return Color(_clamp(self.red), _clamp(self.green), _clamp(self.blue))
