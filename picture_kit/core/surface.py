"""Pillow-backed display/storage surface.

Images live under an images directory (default `images/`, see
picture_kit.core.env.Settings). Loading converts any Pillow-readable file to
RGBA and packs it into 0xAARRGGBB ints. Rendering rasterises a buffer into an
offscreen RGB frame; saving writes the last rendered frame.

Packed alpha is ignored when rendering, matching unpack_colour.
"""

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from picture_kit.core.buffer import PixelBuffer
from picture_kit.core.errors import UninitializedBuffer


def image_to_packed(image: Image.Image) -> np.ndarray:
    """Pack a Pillow image into a flat row-major uint32 ARGB array."""
    arr = np.array(image.convert('RGBA'), dtype=np.uint32)
    r, g, b, a = arr[..., 0], arr[..., 1], arr[..., 2], arr[..., 3]
    packed = (a << 24) | (r << 16) | (g << 8) | b
    return packed.reshape(-1).astype(np.uint32)


def packed_to_image(pixels: np.ndarray, width: int, height: int) -> Image.Image:
    """Build an RGB Pillow image from flat packed pixels."""
    p = np.asarray(pixels, dtype=np.uint32).reshape(height, width)
    rgb = np.empty((height, width, 3), dtype=np.uint8)
    rgb[..., 0] = (p >> 16) & 0xFF
    rgb[..., 1] = (p >> 8) & 0xFF
    rgb[..., 2] = p & 0xFF
    return Image.fromarray(rgb)


class PillowSurface:
    def __init__(self, images_dir: str | Path = 'images'):
        self.images_dir = Path(images_dir)
        self.frame: Image.Image | None = None
        self.render_count = 0

    def render(self, buffer: PixelBuffer) -> None:
        self.frame = packed_to_image(buffer.get_pixels(), buffer.width, buffer.height)
        self.render_count += 1

    def load(self, name: str) -> PixelBuffer:
        """Read images_dir/name into a fresh buffer.

        Raises:
            FileNotFoundError: if the file does not exist.
            ValueError: if Pillow cannot identify the file as an image.
        """
        path = self.images_dir / name
        if not path.is_file():
            raise FileNotFoundError(f'Image not found: {path}')
        try:
            with Image.open(path) as image:
                width, height = image.size
                pixels = image_to_packed(image)
        except UnidentifiedImageError as exc:
            raise ValueError(f'Not an image: {path}') from exc
        return PixelBuffer.from_pixels(width, height, pixels)

    def save(self, name: str) -> None:
        """Write the last rendered frame to images_dir/name (format from suffix)."""
        if self.frame is None:
            raise UninitializedBuffer('nothing has been rendered yet')
        path = self.images_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        self.frame.save(path)
