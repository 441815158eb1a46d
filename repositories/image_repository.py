from __future__ import annotations

from pathlib import Path
from typing import Union
import logging
import os
import signal
import threading

import numpy as np
import cv2
from PIL import Image as PILImage
from dotenv import load_dotenv

from models.exceptions import LoadError, SaveError
from models.pixel_grid import PixelGrid

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O for PixelGrid entities: decode a location into a grid,
    encode a grid back to a file.
    """

    @staticmethod
    def _imread(path: Path, timeout: int) -> np.ndarray | None:
        # SIGALRM only exists on POSIX and only fires in the main thread
        if not hasattr(signal, "SIGALRM") or threading.current_thread() is not threading.main_thread():
            return cv2.imread(str(path), cv2.IMREAD_COLOR)

        # ─── timeout wrapper (5 s default) ────────────────────────────────
        def _handler(signum, frame):
            raise TimeoutError(f"cv2.imread timed-out after {timeout}s: {path}")

        previous = signal.signal(signal.SIGALRM, _handler)
        signal.alarm(timeout)
        try:
            return cv2.imread(str(path), cv2.IMREAD_COLOR)
        finally:
            signal.alarm(0)  # always disarm
            signal.signal(signal.SIGALRM, previous)
        # ──────────────────────────────────────────────────────────────────

    @staticmethod
    def load(path: Union[str, Path], timeout: int | None = None) -> PixelGrid:
        """
        Decode *path* into an RGB PixelGrid.
        Raises LoadError for a missing, unreadable or unsupported file.
        """
        path = Path(path)
        if timeout is None:
            timeout = int(os.getenv("IMAGE_LOAD_TIMEOUT", "5"))

        if not path.is_file():
            raise LoadError(f"Image not found: {path}")
        try:
            arr_bgr = ImageRepository._imread(path, timeout)
        except (TimeoutError, cv2.error) as err:
            raise LoadError(f"Could not decode {path}: {err}") from err

        if arr_bgr is None:
            raise LoadError(f"Image unreadable or unsupported format: {path}")

        grid = PixelGrid.from_array(arr_bgr[:, :, ::-1], path)
        logger.info("Loaded %s (%dx%d)", path, grid.width, grid.height)
        return grid

    @staticmethod
    def save(grid: PixelGrid, path: Union[str, Path]) -> Path:
        """
        Encode *grid* to *path*. Pillow picks the format from the suffix.
        The grid's own source path is never used as a destination.
        """
        target = Path(path)
        if grid.is_empty():
            raise SaveError(f"Cannot write an empty {grid.width}x{grid.height} grid to {target}")
        try:
            PILImage.fromarray(np.ascontiguousarray(grid.pixels)).save(target)
        except (OSError, ValueError, KeyError) as err:
            raise SaveError(f"Could not write {target}: {err}") from err
        logger.info("Saved %s (%dx%d)", target, grid.width, grid.height)
        return target
