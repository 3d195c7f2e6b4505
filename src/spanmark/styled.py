"""Styled text: plain text plus attribute ranges.

``StyleRange`` is the unit the span builder emits. ``StyledText`` is the
default sink: it keeps the text and the ranges in the order they were applied,
and answers "what attributes are in effect here" by replaying them with
last-write-wins semantics per key.

Thread Safety:
StyleRange is frozen and safe to share. StyledText is mutable while a
conversion writes into it; treat it as read-only afterwards.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from spanmark.errors import RangeError
from spanmark.stringbuilder import StringBuilder


@dataclass(frozen=True, slots=True)
class StyleRange:
    """Attributes applied over a contiguous run of the output text.

    Attributes:
        start: Offset of the first styled character
        length: Number of styled characters
        attributes: Attribute set applied over the run

    """

    start: int
    length: int
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def end(self) -> int:
        """Offset one past the last styled character."""
        return self.start + self.length

    def covers(self, index: int) -> bool:
        return self.start <= index < self.end


class StyledText:
    """Default styled-text sink.

    Usage:
        >>> styled = StyledText()
        >>> styled.append("Hello world")
        >>> styled.apply_attributes(0, 5, {"bold": True})
        >>> list(styled.runs())
        [('Hello', {'bold': True}), (' world', {})]

    """

    __slots__ = ("_builder", "_ranges")

    def __init__(self, text: str = "", ranges: list[StyleRange] | None = None) -> None:
        self._builder = StringBuilder().append(text)
        self._ranges: list[StyleRange] = []
        for style_range in ranges or ():
            self.apply_attributes(style_range.start, style_range.length, style_range.attributes)

    @property
    def text(self) -> str:
        """The plain text payload."""
        return self._builder.build()

    @property
    def ranges(self) -> tuple[StyleRange, ...]:
        """Applied ranges, in application order."""
        return tuple(self._ranges)

    def append(self, text: str) -> None:
        self._builder.append(text)

    def apply_attributes(self, start: int, length: int, attributes: Mapping[str, Any]) -> None:
        """Layer attributes over ``[start, start + length)``.

        Raises:
            RangeError: If the range is negative or extends past the text.
        """
        if start < 0 or length < 0 or start + length > len(self._builder):
            raise RangeError(start, length, len(self._builder))
        if length and attributes:
            self._ranges.append(StyleRange(start, length, dict(attributes)))

    def attributes_at(self, index: int) -> dict[str, Any]:
        """Attributes in effect at a character, later ranges winning per key."""
        if not 0 <= index < len(self._builder):
            raise RangeError(index, 1, len(self._builder))
        composed: dict[str, Any] = {}
        for style_range in self._ranges:
            if style_range.covers(index):
                composed.update(style_range.attributes)
        return composed

    def runs(self) -> Iterator[tuple[str, dict[str, Any]]]:
        """Yield maximal ``(text, attributes)`` segments with uniform attributes.

        Segments are cut at every range boundary and adjacent segments with
        equal attributes are coalesced. One sweep over the sorted boundaries;
        only the ranges active at a boundary are composed there.
        """
        text = self.text
        if not text:
            return
        starts: dict[int, list[int]] = {}
        ends: dict[int, list[int]] = {}
        for index, style_range in enumerate(self._ranges):
            starts.setdefault(style_range.start, []).append(index)
            ends.setdefault(style_range.end, []).append(index)
        cuts = sorted({0, len(text), *starts, *ends})

        active: set[int] = set()
        pending_start = 0
        pending_attrs: dict[str, Any] | None = None
        for seg_start in cuts[:-1]:
            active.difference_update(ends.get(seg_start, ()))
            active.update(starts.get(seg_start, ()))
            attrs: dict[str, Any] = {}
            # Application order decides which range wins a shared key.
            for index in sorted(active):
                attrs.update(self._ranges[index].attributes)
            if pending_attrs is not None and attrs != pending_attrs:
                yield text[pending_start:seg_start], pending_attrs
                pending_start = seg_start
            pending_attrs = attrs
        if pending_attrs is not None:
            yield text[pending_start:], pending_attrs

    def plain(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self._builder)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        text = self.text
        if len(text) > 20:
            text = text[:17] + "..."
        return f"StyledText({text!r}, ranges={len(self._ranges)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyledText):
            return NotImplemented
        return self.text == other.text and self._ranges == other._ranges

    __hash__ = None  # type: ignore[assignment]
