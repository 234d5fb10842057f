from __future__ import annotations

from typing import Optional


class ConversionError(ValueError):
    """Base class for per-value MGRS failures.

    ``kind`` is a short machine-readable tag ("format" or "range") and
    ``reason`` the human-readable explanation without the offending text.
    """

    kind = "conversion"

    def __init__(self, reason: str, text: Optional[str] = None):
        self.reason = reason
        self.text = text
        if text is not None:
            super().__init__(f"{reason}: {text!r}")
        else:
            super().__init__(reason)


class FormatError(ConversionError):
    """The text does not follow the MGRS grammar."""

    kind = "format"


class RangeError(ConversionError):
    """A well-formed reference that cannot be placed on the globe."""

    kind = "range"


__all__ = ["ConversionError", "FormatError", "RangeError"]
