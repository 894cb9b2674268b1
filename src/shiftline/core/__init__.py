"""Core utilities shared across shiftline modules."""

from .errors import PointerCaptureError, ShiftlineValueError

__all__ = ["ShiftlineValueError", "PointerCaptureError"]
