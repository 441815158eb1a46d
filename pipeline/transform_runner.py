# pipeline/transform_runner.py
from pathlib import Path
from typing import Union
import logging

from models.pixel_grid import PixelGrid
from pipeline.commands import Blend, Command, Mosaic, apply_command
from services.image_service import ImageService
from services.transform_engine import TransformEngine

logger = logging.getLogger(__name__)


def transform_grid(
    grid: PixelGrid,
    command: Command,
    *,
    image_service: ImageService | None = None,
) -> PixelGrid:
    """
    In-memory step: build an engine around *grid*, load any auxiliary
    pictures the command names and apply the command once.
    """
    others = ()
    if isinstance(command, (Blend, Mosaic)):
        image_service = image_service or ImageService()
        others = tuple(image_service.load_many(command.sources))

    engine = TransformEngine(grid)
    result = apply_command(engine, command, others)
    logger.info("%s: %dx%d -> %dx%d", type(command).__name__,
                grid.width, grid.height, result.width, result.height)
    return result


def run_transformation(
    command: Command,
    source: Union[str, Path],
    destination: Union[str, Path],
    *,
    image_service: ImageService | None = None,
) -> Path:
    """
    Load *source*, apply *command*, save to *destination*.
    Any LoadError / SaveError propagates to the caller untouched.
    """
    image_service = image_service or ImageService()
    grid = image_service.load(source)
    result = transform_grid(grid, command, image_service=image_service)
    return image_service.save(result, destination)
