"""Exception classes for spanmark.

Malformed markup is never an error: the scanner and builder recover from it
locally. Only precondition violations and sink misuse surface to the caller.
"""

from __future__ import annotations


class SpanmarkError(Exception):
    """Base exception for all spanmark errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidConfigurationError(SpanmarkError):
    """Conversion was requested with an unusable configuration.

    Raised before any scanning happens, e.g. when no resolver is supplied
    or a config option has an unknown value.
    """

    def __init__(self, message: str, option: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Description of the problem
            option: Name of the offending option (optional)
        """
        self.option = option
        prefix = f"{option}: " if option else ""
        super().__init__(f"{prefix}{message}")


class RangeError(SpanmarkError, IndexError):
    """Attributes were applied outside the bounds of a styled text."""

    def __init__(self, start: int, length: int, text_length: int) -> None:
        self.start = start
        self.length = length
        self.text_length = text_length
        super().__init__(
            f"Range ({start}, {length}) is out of bounds for text of length {text_length}"
        )
