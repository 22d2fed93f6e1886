"""Shared types for picture-kit: Operation, Surface, SessionResult."""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from picture_kit.core.buffer import PixelBuffer


class SessionResult(enum.Enum):
    """Outcome of a load/save request on a pixel buffer."""

    OK = 'ok'
    NO_ACTIVE_SESSION = 'no-active-session'


class Surface(Protocol):
    """Display/storage collaborator a buffer renders to and loads from."""

    def render(self, buffer: PixelBuffer) -> None: ...

    def load(self, name: str) -> PixelBuffer: ...

    def save(self, name: str) -> None: ...


class Operation:
    """A self-registering pure pixel transform.

    Usage in an operation module:

        operation = Operation(name='invert', help='Invert RGB channels')

        @operation.transform
        def invert(buffer):
            ...
            return PixelBuffer.from_pixels(buffer.width, buffer.height, out)

    The transform must return a new buffer and leave its input untouched.
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._transform_fn: Callable[[PixelBuffer], PixelBuffer] | None = None

    def transform(self, fn: Callable[[PixelBuffer], PixelBuffer]) -> Callable[[PixelBuffer], PixelBuffer]:
        """Decorator to register the transform function."""
        self._transform_fn = fn
        return fn

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """Run the transform on buffer and return its result."""
        if self._transform_fn is None:
            raise RuntimeError(f'Operation {self.name} has no transform function')
        return self._transform_fn(buffer)

    def __repr__(self) -> str:
        return f'Operation({self.name!r})'
