"""
Base protocols and shared abstractions for pixtone.

The pixel algorithms only ever talk to an image through the small
PixelImage protocol, and only ever report progress through a
ProgressReporter. Both are defined here.
"""

import sys
from typing import Callable, Protocol, TextIO, runtime_checkable


# Per-pixel callback used by the walker: (x, y) -> new packed pixel
PixelCallback = Callable[[int, int], int]


@runtime_checkable
class PixelImage(Protocol):
    """Protocol for a mutable raster addressed by packed pixels."""

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def get_pixel(self, x: int, y: int) -> int:
        """Return the packed pixel at (x, y)."""
        ...

    def set_pixel(self, x: int, y: int, pixel: int) -> None:
        """Store a packed pixel at (x, y)."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Protocol for the optional diagnostic progress channel."""

    def start(self, label: str) -> None:
        """An operation named `label` has begun."""
        ...

    def update(self, percent: int) -> None:
        """A pixel pass crossed the given 10% bucket."""
        ...

    def skip(self) -> None:
        """The operation had nothing to do."""
        ...

    def done(self) -> None:
        """The operation finished."""
        ...


class NullProgress:
    """Progress reporter that discards everything."""

    def start(self, label: str) -> None:
        pass

    def update(self, percent: int) -> None:
        pass

    def skip(self) -> None:
        pass

    def done(self) -> None:
        pass


class ConsoleProgress:
    """
    Text progress reporter.

    Renders one line per operation, e.g.::

        Shifting hue... [**********] done.
        Altering brightness... skipping.
    """

    def __init__(self, stream: TextIO | None = None, enabled: bool = True):
        self.stream = stream
        self.enabled = enabled
        self._in_bar = False

    def _write(self, text: str) -> None:
        if not self.enabled:
            return
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def start(self, label: str) -> None:
        self._in_bar = False
        self._write(f"{label}... ")

    def update(self, percent: int) -> None:
        if not self._in_bar:
            self._write("[")
            self._in_bar = True
        self._write("*")

    def skip(self) -> None:
        self._in_bar = False
        self._write("skipping.\n")

    def done(self) -> None:
        if self._in_bar:
            self._write("] ")
            self._in_bar = False
        self._write("done.\n")


def resolve_progress(progress: ProgressReporter | None) -> ProgressReporter:
    """Return `progress`, or a NullProgress when none was given."""
    return progress if progress is not None else NullProgress()
