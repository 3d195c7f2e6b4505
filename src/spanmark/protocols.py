"""Protocols for spanmark.

Defines the contract for styled-text sinks: the rich-text representation the
span builder writes into. ``StyledText`` is the built-in implementation; any
object with the same three methods (for example an adapter around a GUI
toolkit's attributed string) can be passed as ``sink`` to ``convert()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class StyledTextSink(Protocol):
    """Protocol for styled-text outputs.

    The builder appends all text first, then applies base attributes over the
    converted text, then every style range in emission order. Text already in
    the sink is kept: ranges are offset by ``len(sink)`` at the start of the
    call. It never applies a range outside ``[0, len(sink)]``.

    """

    def append(self, text: str) -> None:
        """Append plain text to the end of the sink."""
        ...

    def apply_attributes(self, start: int, length: int, attributes: Mapping[str, Any]) -> None:
        """Layer attributes over ``[start, start + length)``.

        Keys in ``attributes`` override keys already present on the range;
        other keys are left alone.
        """
        ...

    def __len__(self) -> int:
        """Current text length in characters."""
        ...
