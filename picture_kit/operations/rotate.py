"""Rotate the picture 90 degrees clockwise.

The output is height × width: out[x][y] = in[y][height-1-x].
Applying rotate four times restores the original.

Example:
    picture-tool rotate photo.png -o photo_rotated.png
"""

from picture_kit.core.buffer import PixelBuffer, pixels_flatten
from picture_kit.core.types import Operation

operation = Operation(
    name='rotate',
    help='Rotate 90° clockwise. Width and height swap.',
)


@operation.transform
def rotate(buffer: PixelBuffer) -> PixelBuffer:
    table = buffer.get_pixels_table()
    if table.size == 0:
        return PixelBuffer.from_pixels(buffer.height, buffer.width, [])
    rotated = table[:, ::-1].T
    return PixelBuffer.from_pixels(buffer.height, buffer.width, pixels_flatten(rotated))
