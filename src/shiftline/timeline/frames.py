"""Frame-coalesced recomputation.

High-frequency inputs (pointer moves, hover, scroll settles) are funnelled through a
:class:`CoalescedTask`: submitting stores the latest input and requests a single frame; when the
frame fires the task runs once with whatever input is pending. Hosts plug in their own tick
source (vsync callback, timer, render loop) by implementing :class:`FrameSource`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

__all__ = [
    "FrameSource",
    "ManualFrameSource",
    "ImmediateFrameSource",
    "CoalescedTask",
]

T = TypeVar("T")


class FrameSource(Protocol):
    """Schedules ``callback`` to run on the next tick."""

    def request_frame(self, callback: Callable[[], None], /) -> None:  # pragma: no cover
        ...


class ManualFrameSource:
    """Frame source driven explicitly by :meth:`tick` (tests, scripted replays)."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[], None]] = []

    def request_frame(self, callback: Callable[[], None], /) -> None:
        self._callbacks.append(callback)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def tick(self) -> int:
        """Run every callback requested before this tick; return how many ran."""

        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()
        return len(callbacks)


class ImmediateFrameSource:
    """Runs callbacks synchronously; useful for hosts without a render loop."""

    def request_frame(self, callback: Callable[[], None], /) -> None:
        callback()


_EMPTY = object()


class CoalescedTask(Generic[T]):
    """At most one execution of ``fn`` per frame, always with the newest input."""

    def __init__(self, source: FrameSource, fn: Callable[[T], None]) -> None:
        self._source = source
        self._fn = fn
        self._pending: object = _EMPTY
        self._frame_requested = False

    @property
    def has_pending(self) -> bool:
        return self._pending is not _EMPTY

    def submit(self, value: T) -> None:
        self._pending = value
        if not self._frame_requested:
            self._frame_requested = True
            self._source.request_frame(self._run)

    def flush(self) -> None:
        """Run the pending input now instead of waiting for the frame."""

        if self._pending is _EMPTY:
            return
        value, self._pending = self._pending, _EMPTY
        self._fn(value)  # type: ignore[arg-type]

    def cancel(self) -> None:
        self._pending = _EMPTY

    def _run(self) -> None:
        self._frame_requested = False
        self.flush()
