"""Packed ARGB <-> float colour conversion.

A packed colour is a 32-bit int laid out as 0xAARRGGBB. A StructColour holds
four float channels, conventionally in [0, 1].

Packing rounds half-up and keeps only the low 8 bits of each rounded channel,
so out-of-range inputs wrap instead of saturating (rounded 300 -> 44).
Non-finite channels never raise: NaN packs to 0x00, +inf to 0xFF, -inf to 0x00.
Unpacking always reports alpha 1.0; the packed alpha byte is ignored.
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class StructColour:
    red: float
    green: float
    blue: float
    alpha: float = 1.0


# rounded values outside the 64-bit range saturate before the low byte is taken
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63


def _channel(value: float) -> int:
    scaled = 255 * value + 0.5
    if math.isnan(scaled) or scaled < _LONG_MIN:
        return 0
    if scaled >= _LONG_MAX:
        return 0xFF
    return math.floor(scaled) & 0xFF


def pack_colour(colour: StructColour) -> int:
    """Pack a StructColour into an unsigned 0xAARRGGBB int."""
    a = _channel(colour.alpha)
    r = _channel(colour.red)
    g = _channel(colour.green)
    b = _channel(colour.blue)
    return (a << 24) | (r << 16) | (g << 8) | b


def unpack_colour(packed: int) -> StructColour:
    """Unpack an ARGB int. Alpha is always 1.0."""
    packed = int(packed)
    r = ((packed >> 16) & 0xFF) / 255.0
    g = ((packed >> 8) & 0xFF) / 255.0
    b = (packed & 0xFF) / 255.0
    return StructColour(r, g, b, 1.0)


def pack_colours(colours: np.ndarray) -> np.ndarray:
    """Vectorised pack_colour over an array of shape (..., 4) in RGBA order."""
    arr = np.asarray(colours, dtype=np.float64)
    if arr.shape[-1:] != (4,):
        raise ValueError(f'expected trailing dimension of 4 (RGBA), got shape {arr.shape}')
    rounded = np.floor(arr * 255 + 0.5)
    high = rounded >= _LONG_MAX
    in_range = np.isfinite(rounded) & ~high & (rounded >= _LONG_MIN)
    channels = np.where(in_range, rounded, 0).astype(np.int64) & 0xFF
    channels[high] = 0xFF
    r, g, b, a = (channels[..., i] for i in range(4))
    return ((a << 24) | (r << 16) | (g << 8) | b).astype(np.uint32)


def unpack_colours(packed: np.ndarray) -> np.ndarray:
    """Vectorised unpack_colour. Returns float64 (..., 4) RGBA with alpha 1.0."""
    p = np.asarray(packed).astype(np.int64) & 0xFFFFFFFF
    out = np.empty(p.shape + (4,), dtype=np.float64)
    out[..., 0] = ((p >> 16) & 0xFF) / 255.0
    out[..., 1] = ((p >> 8) & 0xFF) / 255.0
    out[..., 2] = (p & 0xFF) / 255.0
    out[..., 3] = 1.0
    return out


def to_hex(colour: StructColour) -> str:
    """Format the RGB channels of a colour as #rrggbb."""
    packed = pack_colour(colour)
    return f'#{(packed >> 16) & 0xFF:02x}{(packed >> 8) & 0xFF:02x}{packed & 0xFF:02x}'
