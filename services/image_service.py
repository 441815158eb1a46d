from pathlib import Path
from typing import Iterable, List, Union
from models.pixel_grid import PixelGrid
from repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No transformation logic here."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def load(self, path: str | Path) -> PixelGrid:
        """Load a single image from disk into a PixelGrid."""
        return self.image_repository.load(path)

    def load_many(self, paths: Iterable[Union[str, Path]]) -> List[PixelGrid]:
        """
        Load every path, in order.  The first failure aborts the whole batch:
        a transformation never runs on a partially loaded source list.
        """
        return [self.load(p) for p in paths]

    def save(self, grid: PixelGrid, path: Union[str, Path]) -> Path:
        """
        Business-level method to save the grid to a specific path.
        """
        return self.image_repository.save(grid, path)
