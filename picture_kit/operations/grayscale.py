"""Convert every pixel to grey using Rec. 601 luma weights.

    grey = 0.299 * red + 0.587 * green + 0.114 * blue

Channels go through the colour codec, so the packed alpha is dropped and
every output pixel is opaque (alpha 0xFF).

Example:
    picture-tool grayscale photo.png -o photo_grey.png
"""

import numpy as np

from picture_kit.core.buffer import PixelBuffer
from picture_kit.core.codec import pack_colours, unpack_colours
from picture_kit.core.types import Operation

operation = Operation(
    name='grayscale',
    help='Convert to grey (Rec. 601 luma). Output is opaque.',
)

LUMA = np.array([0.299, 0.587, 0.114])


@operation.transform
def grayscale(buffer: PixelBuffer) -> PixelBuffer:
    colours = unpack_colours(buffer.get_pixels())
    grey = colours[..., :3] @ LUMA
    colours[..., 0] = grey
    colours[..., 1] = grey
    colours[..., 2] = grey
    return PixelBuffer.from_pixels(buffer.width, buffer.height, pack_colours(colours))
