"""In-memory pixel buffer: packed ARGB pixels as a flat array and as a table.

Flat data is row-major, `index = x + y*width`. Tables are numpy arrays of
shape (width, height) indexed `table[x][y]`, so `table[x][y] == flat[x + y*width]`.

Mutations emit change signals instead of returning anything:
  - setting `width` or `height` emits `size_changed`
  - every set_pixels* call emits `pixels_changed`
Resizing does not touch the pixel data. Until the next set_pixels the buffer
may be inconsistent (`len(pixels) != width*height`); that is allowed.

Display, load and save go through an optional Surface handle. Without one,
load/save return SessionResult.NO_ACTIVE_SESSION and change nothing.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import numpy as np

from picture_kit.core.codec import StructColour, pack_colour, unpack_colour
from picture_kit.core.errors import DimensionMismatch, UninitializedBuffer
from picture_kit.core.signal import ChangeSignal
from picture_kit.core.types import SessionResult, Surface

DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 400


def _as_packed(pixels: Any) -> np.ndarray:
    """Reduce ints of any size modulo 2**32 into a uint32 array.

    uint32 arrays are returned as-is. Non-integer data raises DimensionMismatch.
    """
    if isinstance(pixels, np.ndarray) and pixels.dtype == np.uint32:
        return pixels
    try:
        arr = np.asarray(pixels)
    except ValueError as exc:
        raise DimensionMismatch(f'irregular pixel data: {exc}') from exc

    if arr.size == 0:
        return np.zeros(arr.shape, dtype=np.uint32)
    if arr.dtype.kind in 'bi':
        return (arr.astype(np.int64) & 0xFFFFFFFF).astype(np.uint32)
    if arr.dtype.kind == 'u':
        return (arr.astype(np.uint64) & 0xFFFFFFFF).astype(np.uint32)
    # Python ints beyond 64 bits end up in an object array
    if arr.dtype.kind == 'O' and all(isinstance(v, numbers.Integral) for v in arr.flat):
        return _reduce_big_ints(arr).astype(np.uint32)
    raise DimensionMismatch(f'pixel data must be integers, got {arr.dtype}')


_reduce_big_ints = np.frompyfunc(lambda v: int(v) & 0xFFFFFFFF, 1, 1)


def _check_dimensions(flat: np.ndarray, width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise DimensionMismatch(f'negative dimensions {width}x{height}')
    if flat.ndim != 1:
        raise DimensionMismatch(f'expected flat pixel data, got shape {flat.shape}')
    if flat.size != width * height:
        raise DimensionMismatch(f'{flat.size} pixels do not fit {width}x{height} ({width * height} expected)')


def pixels_explode(pixels: Sequence[int] | np.ndarray, width: int, height: int) -> np.ndarray:
    """Reshape flat pixel data into a new (width, height) table."""
    flat = _as_packed(pixels)
    _check_dimensions(flat, width, height)
    return flat.reshape(height, width).T.copy()


def pixels_colour_explode(pixels: Sequence[int] | np.ndarray, width: int, height: int) -> list[list[StructColour]]:
    """Like pixels_explode, but every cell is unpacked to a StructColour."""
    table = pixels_explode(pixels, width, height)
    return [[unpack_colour(p) for p in column] for column in table]


def pixels_flatten(table: Sequence[Sequence[int]] | np.ndarray) -> np.ndarray:
    """Flatten a [x][y] table of packed colours into row-major flat data."""
    arr = _as_packed(table)
    if arr.ndim != 2 or 0 in arr.shape:
        raise DimensionMismatch(f'expected a non-empty 2D table, got shape {arr.shape}')
    return np.ascontiguousarray(arr.T).reshape(-1)


def pixels_flatten_colours(table: Iterable[Iterable[StructColour]]) -> np.ndarray:
    """Flatten a [x][y] table of StructColours into row-major packed data."""
    columns = [list(column) for column in table]
    if not columns or not columns[0]:
        raise DimensionMismatch('expected a non-empty 2D table')
    width, height = len(columns), len(columns[0])
    if any(len(column) != height for column in columns):
        raise DimensionMismatch('irregular colour table: columns differ in length')

    flat = np.empty(width * height, dtype=np.uint32)
    for x, column in enumerate(columns):
        for y, colour in enumerate(column):
            flat[x + y * width] = pack_colour(colour)
    return flat


class PixelBuffer:
    """A mutable grid of packed ARGB pixels with change signals.

    Created empty (600x400, no pixel data) or with a deferred `source`
    file name that is loaded when the buffer is first displayed.
    """

    def __init__(self, source: str | None = None, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        if width < 0 or height < 0:
            raise DimensionMismatch(f'negative dimensions {width}x{height}')
        self.source = source
        self._width = width
        self._height = height
        self._pixels: np.ndarray | None = None
        self.pixels_changed = ChangeSignal('pixels')
        self.size_changed = ChangeSignal('size')
        self._surface: Surface | None = None
        self._unsubscribers: list[Callable[[], None]] = []

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Sequence[int] | np.ndarray) -> PixelBuffer:
        """Build a buffer whose pixel data must match width*height."""
        flat = _as_packed(pixels)
        _check_dimensions(flat, width, height)
        buffer = cls(width=width, height=height)
        buffer._pixels = flat
        return buffer

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, width: int) -> None:
        if width < 0:
            raise DimensionMismatch(f'negative width {width}')
        self._width = int(width)
        self.size_changed.emit()

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, height: int) -> None:
        if height < 0:
            raise DimensionMismatch(f'negative height {height}')
        self._height = int(height)
        self.size_changed.emit()

    @property
    def is_initialized(self) -> bool:
        return self._pixels is not None

    @property
    def is_consistent(self) -> bool:
        """True when pixel data is set and matches width*height."""
        return self._pixels is not None and self._pixels.size == self._width * self._height

    def get_pixels(self) -> np.ndarray:
        """Return the stored flat uint32 pixel array (not a copy)."""
        if self._pixels is None:
            raise UninitializedBuffer('no pixel data has been set')
        return self._pixels

    def get_pixels_as_colours(self) -> list[StructColour]:
        return [unpack_colour(p) for p in self.get_pixels()]

    def get_pixels_table(self) -> np.ndarray:
        return pixels_explode(self.get_pixels(), self._width, self._height)

    def get_pixels_table_as_colours(self) -> list[list[StructColour]]:
        return pixels_colour_explode(self.get_pixels(), self._width, self._height)

    def set_pixels(self, pixels: Sequence[int] | np.ndarray) -> None:
        """Replace the flat pixel data. Width and height are left alone."""
        flat = _as_packed(pixels)
        if flat.ndim != 1:
            raise DimensionMismatch(f'expected flat pixel data, got shape {flat.shape}')
        self._pixels = flat
        self.pixels_changed.emit()

    def set_pixels_table(self, table: Sequence[Sequence[int]] | np.ndarray) -> None:
        self.set_pixels(pixels_flatten(table))

    def set_pixels_table_from_colours(self, table: Iterable[Iterable[StructColour]]) -> None:
        self.set_pixels(pixels_flatten_colours(table))

    def copy(self) -> PixelBuffer:
        """Deep copy: same size, duplicated pixels, fresh signals, no surface."""
        cpy = PixelBuffer(width=self._width, height=self._height)
        if self._pixels is not None:
            cpy._pixels = self._pixels.copy()
        return cpy

    def apply_operation(self, op: Any) -> PixelBuffer:
        """Apply op, adopt its result's size and pixels, and return the result.

        `op` is anything with an `apply(buffer) -> buffer` method.
        """
        result = op.apply(self)
        self._adopt(result.width, result.height, result.get_pixels())
        return result

    def _adopt(self, width: int, height: int, pixels: np.ndarray) -> None:
        # assign everything before emitting so observers see a consistent buffer
        self._width = width
        self._height = height
        self._pixels = _as_packed(pixels)
        self.size_changed.emit()
        self.pixels_changed.emit()

    @property
    def is_displayed(self) -> bool:
        return self._surface is not None

    def display(self, surface: Surface) -> None:
        """Attach a surface and render to it on every change.

        A no-op if a surface is already attached. Loads the deferred source,
        if any; otherwise emits both signals so the surface draws once.
        """
        if self._surface is not None:
            return
        self._surface = surface
        self._unsubscribers = [
            self.size_changed.subscribe(self._redraw),
            self.pixels_changed.subscribe(self._redraw),
        ]
        if self.source:
            try:
                self.load(self.source)
            except Exception:
                self.hide()
                raise
        else:
            self.size_changed.emit()
            self.pixels_changed.emit()

    def hide(self) -> None:
        """Detach the surface. Later load/save calls become no-ops."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._surface = None

    def _redraw(self) -> None:
        if self._surface is not None and self.is_consistent:
            self._surface.render(self)

    def load(self, name: str) -> SessionResult:
        """Load `name` through the attached surface and adopt it."""
        if self._surface is None:
            return SessionResult.NO_ACTIVE_SESSION
        loaded = self._surface.load(name)
        self._adopt(loaded.width, loaded.height, loaded.get_pixels())
        return SessionResult.OK

    def save(self, name: str) -> SessionResult:
        """Persist the currently displayed frame as `name`."""
        if self._surface is None:
            return SessionResult.NO_ACTIVE_SESSION
        self._surface.save(name)
        return SessionResult.OK

    def __repr__(self) -> str:
        state = 'empty' if self._pixels is None else f'{self._pixels.size} pixels'
        return f'PixelBuffer({self._width}x{self._height}, {state})'
