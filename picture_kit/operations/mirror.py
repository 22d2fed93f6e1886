"""Flip the picture horizontally: out[x][y] = in[width-1-x][y].

Example:
    picture-tool mirror photo.png -o photo_mirrored.png
"""

from picture_kit.core.buffer import PixelBuffer, pixels_flatten
from picture_kit.core.types import Operation

operation = Operation(
    name='mirror',
    help='Flip horizontally (left <-> right).',
)


@operation.transform
def mirror(buffer: PixelBuffer) -> PixelBuffer:
    table = buffer.get_pixels_table()
    if table.size == 0:
        return buffer.copy()
    return PixelBuffer.from_pixels(buffer.width, buffer.height, pixels_flatten(table[::-1]))
