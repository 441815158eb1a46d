# pipeline/commands.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union

from models.exceptions import InvalidDimension
from models.pixel_grid import PixelGrid
from services.transform_engine import TransformEngine

ROTATION_ANGLES = (90, 180, 270)
FLIP_AXES = ("H", "V")


# ------------------------------------------------------------------
# One value per operation the driver can request.
# Multi-source commands carry the *locations* of their extra pictures;
# the runner resolves them into grids before dispatch.
@dataclass(frozen=True)
class Invert:
    pass


@dataclass(frozen=True)
class Grayscale:
    pass


@dataclass(frozen=True)
class Blur:
    pass


@dataclass(frozen=True)
class Rotate:
    angle: int

    def __post_init__(self):
        if self.angle not in ROTATION_ANGLES:
            raise ValueError(f"rotation angle must be one of {ROTATION_ANGLES}, got {self.angle}")


@dataclass(frozen=True)
class Flip:
    axis: str  # "H" or "V"

    def __post_init__(self):
        if self.axis not in FLIP_AXES:
            raise ValueError(f"flip axis must be one of {FLIP_AXES}, got {self.axis!r}")


@dataclass(frozen=True)
class Blend:
    sources: Tuple[Union[str, Path], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Mosaic:
    tile_size: int
    sources: Tuple[Union[str, Path], ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.tile_size <= 0:
            raise InvalidDimension(f"tile size must be positive, got {self.tile_size}")


Command = Union[Invert, Grayscale, Blur, Rotate, Flip, Blend, Mosaic]


# ------------------------------------------------------------------
def apply_command(
    engine: TransformEngine,
    command: Command,
    others: Tuple[PixelGrid, ...] = (),
) -> PixelGrid:
    """
    Run exactly one *command* on *engine* and return the resulting grid.
    *others* are the already-decoded auxiliary grids for Blend / Mosaic.
    """
    if isinstance(command, Invert):
        engine.invert()
    elif isinstance(command, Grayscale):
        engine.grayscale()
    elif isinstance(command, Blur):
        engine.blur()
    elif isinstance(command, Rotate):
        {90: engine.rotate90,
         180: engine.rotate180,
         270: engine.rotate270}[command.angle]()
    elif isinstance(command, Flip):
        if command.axis == "H":
            engine.flip_horizontal()
        else:
            engine.flip_vertical()
    elif isinstance(command, Blend):
        engine.blend(others)
    elif isinstance(command, Mosaic):
        engine.mosaic(command.tile_size, others)
    else:
        raise TypeError(f"Unknown command: {command!r}")
    return engine.grid
