"""Common shiftline-specific exceptions."""


class ShiftlineValueError(ValueError):
    """Raised when shiftline detects invalid user-provided data."""


class PointerCaptureError(RuntimeError):
    """Raised by an interaction lock when the platform refuses pointer capture."""


__all__ = ["ShiftlineValueError", "PointerCaptureError"]
