"""Invert the red, green and blue channels of every pixel.

Each packed pixel is XORed with 0x00FFFFFF, so alpha is kept as-is.
Applying invert twice restores the original pixels.

Example:
    picture-tool invert photo.png -o photo_inverted.png
"""

from picture_kit.core.buffer import PixelBuffer
from picture_kit.core.types import Operation

operation = Operation(
    name='invert',
    help='Invert RGB channels, keep alpha.',
)


@operation.transform
def invert(buffer: PixelBuffer) -> PixelBuffer:
    return PixelBuffer.from_pixels(buffer.width, buffer.height, buffer.get_pixels() ^ 0x00FFFFFF)
