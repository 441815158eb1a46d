class PictureError(Exception):
    """Base class for every error raised while loading, transforming or saving pictures."""


class InvalidDimension(PictureError, ValueError):
    """A grid (or tile) was requested with a non-positive size or a malformed shape."""


class OutOfBounds(PictureError, IndexError):
    """
    A pixel was addressed outside the grid extents.
    Always a defect in coordinate arithmetic, never a recoverable condition.
    """

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"pixel ({x}, {y}) outside {width}x{height} grid")
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class LoadError(PictureError, OSError):
    """The decoder could not turn a location into a grid."""


class SaveError(PictureError, OSError):
    """The encoder could not write a grid to the destination."""
