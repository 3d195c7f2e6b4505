"""Span builder: turns a token stream into styled text.

Consumes tokens from the scanner, keeps the set of open tags, asks the
resolver for each tag's attributes and writes text plus style ranges into a
sink.

Ranges are emitted when their tag closes (the end offset is unknown before),
so emission order is close order: innermost first. Each range carries the
attributes composed at open time, which already include the enclosing tags'
attributes with the inner overrides on top. An enclosing range skips the
spans its already-closed descendants emitted, so replaying ranges in
emission order with last-write-wins per key keeps inner overrides intact.

Thread Safety:
SpanBuilder instances are single-use and hold only call-local state.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from spanmark.attributes import Attributes, Resolver, freeze_attributes, merge_attributes
from spanmark.config import get_convert_config
from spanmark.protocols import StyledTextSink
from spanmark.stringbuilder import StringBuilder
from spanmark.styled import StyleRange, StyledText
from spanmark.tokens import Token, TokenType
from spanmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class OpenTagFrame:
    """A tag that has been opened and not yet closed.

    Attributes:
        name: Tag name, compared case-sensitively against close tags
        start: Output offset at which the tag opened
        attributes: Composed attributes in effect inside the tag
        resolved: The resolver's own contribution for this tag
        sequence: Open order, used to tell descendants from ancestors
        covered: Output spans already emitted by closed descendants

    """

    name: str
    start: int
    attributes: dict[str, Any]
    resolved: dict[str, Any]
    sequence: int
    covered: list[tuple[int, int]] = field(default_factory=list)


class SpanBuilder:
    """Builds styled text from scanner tokens.

    Usage:
        >>> from spanmark.scanner import scan
        >>> def resolver(tag, attrs):
        ...     return {"bold": True} if tag == "b" else None
        >>> styled = SpanBuilder(resolver).build(scan("<b>Hi</b> there"))
        >>> styled.text, styled.ranges
        ('Hi there', (StyleRange(start=0, length=2, attributes={'bold': True}),))

    Configuration (nesting, unmatched-close policy) is read from the current
    ConvertConfig context when the builder is created.

    """

    __slots__ = (
        "_resolver",
        "_base",
        "_config",
        "_stack",
        "_text",
        "_active",
        "_ranges",
        "_ignored",
        "_sequence",
    )

    def __init__(self, resolver: Resolver, attributes: Attributes | None = None) -> None:
        self._resolver = resolver
        self._base = freeze_attributes(attributes)
        self._config = get_convert_config()
        self._stack: list[OpenTagFrame] = []
        self._text = StringBuilder()
        self._active: dict[str, Any] = dict(self._base)
        self._ranges: list[StyleRange] = []
        # Non-nesting mode: names of opens swallowed while a span was active
        self._ignored: list[str] = []
        self._sequence = 0

    @property
    def ranges(self) -> list[StyleRange]:
        """Ranges emitted so far, in close order."""
        return list(self._ranges)

    def build(self, tokens: Iterable[Token], sink: StyledTextSink | None = None) -> StyledTextSink:
        """Consume every token and write the result into ``sink``.

        Args:
            tokens: Scanner output, in input order
            sink: Destination for text and ranges (a new StyledText if None).
                Text already in the sink is kept; the converted text is
                appended after it and ranges are shifted to match.

        Returns:
            The sink that was written to.
        """
        if sink is None:
            sink = StyledText()
        offset = len(sink)

        for token in tokens:
            if token.type is TokenType.TEXT:
                self._emit_text(token.value, sink)
            elif token.type is TokenType.OPEN_TAG:
                self._open(token)
            elif self._config.support_nesting:
                self._close_nested(token, sink)
            else:
                self._close_flat(token, sink)

        self._finish()

        length = len(self._text)
        if self._base and length:
            sink.apply_attributes(offset, length, self._base)
        for style_range in self._ranges:
            sink.apply_attributes(
                offset + style_range.start, style_range.length, style_range.attributes
            )
        return sink

    def _emit_text(self, text: str, sink: StyledTextSink) -> None:
        self._text.append(text)
        sink.append(text)

    # ------------------------------------------------------------------
    # Open tags
    # ------------------------------------------------------------------

    def _open(self, token: Token) -> None:
        if self._stack and not self._config.support_nesting:
            logger.debug(
                "Ignoring nested <%s> at offset %d (nesting disabled)", token.value, token.start
            )
            self._ignored.append(token.value)
            return

        resolved = self._resolver(token.value, dict(self._active))
        resolved_attrs = freeze_attributes(resolved)
        self._active = merge_attributes(self._active, resolved_attrs)

        self._stack.append(
            OpenTagFrame(
                name=token.value,
                start=len(self._text),
                attributes=dict(self._active),
                resolved=resolved_attrs,
                sequence=self._sequence,
            )
        )
        self._sequence += 1

    # ------------------------------------------------------------------
    # Close tags
    # ------------------------------------------------------------------

    def _close_nested(self, token: Token, sink: StyledTextSink) -> None:
        name = token.value
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index].name == name:
                frame = self._stack.pop(index)
                self._close_frame(frame)
                self._active = merge_attributes(
                    self._base, *(open_frame.resolved for open_frame in self._stack)
                )
                return
        self._unmatched_close(token, sink)

    def _close_flat(self, token: Token, sink: StyledTextSink) -> None:
        if token.value in self._ignored:
            self._ignored.remove(token.value)
            return
        if not self._stack:
            self._unmatched_close(token, sink)
            return

        frame = self._stack.pop()
        self._ignored.clear()
        self._close_frame(frame)
        self._active = dict(self._base)

    def _unmatched_close(self, token: Token, sink: StyledTextSink) -> None:
        logger.debug("Unmatched </%s> at offset %d", token.value, token.start)
        if self._config.unmatched_close == "literal":
            self._emit_text(token.raw, sink)

    def _close_frame(self, frame: OpenTagFrame) -> None:
        """Emit the frame's range, minus spans its closed descendants own."""
        if not frame.resolved:
            # Nothing layered: enclosing tags paint this span themselves.
            return

        end = len(self._text)
        cursor = frame.start
        for covered_start, covered_end in sorted(frame.covered):
            if covered_start > cursor:
                self._add_range(cursor, covered_start, frame.attributes)
            cursor = max(cursor, covered_end)
        if end > cursor:
            self._add_range(cursor, end, frame.attributes)

        if end == frame.start:
            return

        # Ancestors still open must not repaint this span.
        for open_frame in self._stack:
            if open_frame.sequence < frame.sequence:
                open_frame.covered.append((frame.start, end))

    def _add_range(self, start: int, end: int, attributes: dict[str, Any]) -> None:
        self._ranges.append(StyleRange(start, end - start, dict(attributes)))

    def _finish(self) -> None:
        """Force-close tags left open at end of input, innermost first."""
        while self._stack:
            frame = self._stack.pop()
            logger.debug("Unterminated <%s>, closing at end of input", frame.name)
            self._close_frame(frame)
        self._ignored.clear()
        self._active = dict(self._base)


__all__ = ["OpenTagFrame", "SpanBuilder"]
