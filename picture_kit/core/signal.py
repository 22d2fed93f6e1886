"""Change signals for pixel buffers.

A signal is emitted once per completed mutation. Each emission inverts
`flag` and increments `version`, then calls subscribers with no arguments.
Observers should compare versions (or react to the callback), never read
`flag` as a dirty bit.
"""

from collections.abc import Callable


class ChangeSignal:
    def __init__(self, name: str = ''):
        self.name = name
        self.flag = False
        self.version = 0
        self._subscribers: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback. Returns a function that removes it again."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self) -> None:
        self.flag = not self.flag
        self.version += 1
        for callback in list(self._subscribers):
            callback()

    def __repr__(self) -> str:
        return f'ChangeSignal({self.name!r}, flag={self.flag}, version={self.version})'
