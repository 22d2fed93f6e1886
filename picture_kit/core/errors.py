"""Exceptions raised by the pixel buffer and the storage surface."""


class PictureError(Exception):
    """Base class for picture_kit errors."""


class DimensionMismatch(PictureError, ValueError):
    """Pixel data does not fit the given width/height, or a grid is irregular."""


class UninitializedBuffer(PictureError, RuntimeError):
    """Pixel data was read before any was set."""
