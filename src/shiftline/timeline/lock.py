"""Exclusive interaction lock (pointer capture)."""

from __future__ import annotations

from typing import Protocol

from shiftline.core.errors import PointerCaptureError

__all__ = ["InteractionLock", "InProcessLock", "PointerCaptureError"]


class InteractionLock(Protocol):
    """Capability granting one pointer exclusive ownership of the timeline.

    ``acquire`` returns ``False`` when another pointer already holds the lock and raises
    :class:`PointerCaptureError` when the platform cannot capture at all.
    """

    def acquire(self, pointer_id: int, /) -> bool:  # pragma: no cover - interface only
        ...

    def release(self, pointer_id: int, /) -> None:  # pragma: no cover - interface only
        ...


class InProcessLock:
    """Single nullable holder."""

    def __init__(self) -> None:
        self.holder: int | None = None

    def acquire(self, pointer_id: int, /) -> bool:
        if self.holder is not None and self.holder != pointer_id:
            return False
        self.holder = pointer_id
        return True

    def release(self, pointer_id: int, /) -> None:
        if self.holder == pointer_id:
            self.holder = None
