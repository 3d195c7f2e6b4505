"""
spanmark: lightweight HTML-like markup to styled text

Converts strings such as "<b>Hello</b> world, how are <i>you</i> today!" into
plain text plus attribute ranges. What each tag means is up to you: a resolver
callback maps a tag name (and the attributes already in effect) to the
attributes to layer over the tag's span.

Quick Start:
    >>> from spanmark import convert
    >>> def resolver(tag, current):
    ...     return {"b": {"bold": True}, "i": {"italic": True}}.get(tag)
    >>> styled = convert("<b>Hello</b> world", {"font": "body"}, resolver)
    >>> styled.text
    'Hello world'
    >>> list(styled.runs())
    [('Hello', {'font': 'body', 'bold': True}), (' world', {'font': 'body'})]

    >>> # Or keep a configured Formatter around
    >>> from spanmark import Formatter
    >>> fmt = Formatter(resolver, support_nesting=False)
    >>> fmt("<i>flat</i> input").text
    'flat input'

Malformed markup never raises: unterminated and empty tags stay in the text,
unmatched close tags stay in the text (or are dropped, if configured), and
tags still open at the end of input are closed there.
"""

from collections.abc import Iterable

from spanmark.attributes import Attributes, Resolver, merge_attributes
from spanmark.builder import OpenTagFrame, SpanBuilder
from spanmark.config import (
    ConvertConfig,
    convert_config_context,
    get_convert_config,
    reset_convert_config,
    set_convert_config,
)
from spanmark.errors import InvalidConfigurationError, RangeError, SpanmarkError
from spanmark.protocols import StyledTextSink
from spanmark.scanner import Scanner, scan
from spanmark.serialization import from_dict, from_json, to_dict, to_json
from spanmark.styled import StyledText, StyleRange
from spanmark.tokens import Token, TokenType

__version__ = "0.1.0"


def _check_resolver(resolver: Resolver | None) -> None:
    if resolver is None:
        raise InvalidConfigurationError("a resolver is required", option="resolver")
    if not callable(resolver):
        raise InvalidConfigurationError(
            f"resolver must be callable, got {type(resolver).__name__}", option="resolver"
        )


def _build(
    markup: str | None,
    resolver: Resolver,
    attributes: Attributes | None,
    sink: StyledTextSink | None = None,
) -> StyledTextSink | None:
    if markup is None:
        return None
    return SpanBuilder(resolver, attributes).build(Scanner(markup).tokenize(), sink)


def convert(
    markup: str | None,
    attributes: Attributes | None = None,
    resolver: Resolver | None = None,
    *,
    support_nesting: bool = True,
    sink: StyledTextSink | None = None,
) -> StyledTextSink | None:
    """Convert markup into styled text.

    Args:
        markup: Markup such as "<b>Hello</b> world". None yields None.
        attributes: Base attributes applied to the whole text, below every tag
        resolver: Called as resolver(tag_name, current_attributes) for each
            open tag; returns attributes to layer over the tag's span, or None
        support_nesting: Track nested tags on a stack. Pass False as a speed
            option when the input never nests tags.
        sink: Destination for text and ranges (a new StyledText if None)

    Returns:
        The styled text (the given sink, if any), or None when markup is None.

    Raises:
        InvalidConfigurationError: If resolver is missing or not callable.

    Example:
        >>> styled = convert("<b>x</b>", None, lambda tag, attrs: {"bold": True})
        >>> styled.attributes_at(0)
        {'bold': True}
    """
    _check_resolver(resolver)
    if markup is None:
        return None

    with convert_config_context(ConvertConfig(support_nesting=support_nesting)):
        return _build(markup, resolver, attributes, sink)


def convert_many(
    markups: Iterable[str | None],
    attributes: Attributes | None = None,
    resolver: Resolver | None = None,
    *,
    support_nesting: bool = True,
) -> list[StyledTextSink | None]:
    """Convert several markup strings with the same attributes and resolver.

    Sets config once for the whole batch and restores the previous config after.
    """
    _check_resolver(resolver)
    with convert_config_context(ConvertConfig(support_nesting=support_nesting)):
        return [_build(markup, resolver, attributes) for markup in markups]


class Formatter:
    """Reusable converter bound to a resolver, base attributes and config.

    Usage:
        >>> fmt = Formatter(lambda tag, attrs: {"tag": tag}, attributes={"size": 12})
        >>> fmt("<em>hi</em>").attributes_at(0)
        {'size': 12, 'tag': 'em'}

    Thread Safety:
        Holds only immutable config. Sets it via ContextVar per call, so one
        Formatter can be shared between threads.

    """

    __slots__ = ("_attributes", "_config", "_resolver")

    def __init__(
        self,
        resolver: Resolver,
        *,
        attributes: Attributes | None = None,
        support_nesting: bool = True,
        unmatched_close: str = "literal",
    ) -> None:
        """Initialize the formatter.

        Args:
            resolver: Tag resolver, see convert()
            attributes: Base attributes applied to every converted string
            support_nesting: Track nested tags on a stack
            unmatched_close: "literal" keeps unmatched close tags as text,
                "drop" discards them

        Raises:
            InvalidConfigurationError: On a missing resolver or unknown policy.
        """
        _check_resolver(resolver)
        self._resolver = resolver
        self._attributes = dict(attributes) if attributes else {}
        self._config = ConvertConfig(
            support_nesting=support_nesting,
            unmatched_close=unmatched_close,
        )

    @property
    def config(self) -> ConvertConfig:
        return self._config

    def __call__(
        self, markup: str | None, *, sink: StyledTextSink | None = None
    ) -> StyledTextSink | None:
        """Convert one markup string."""
        if markup is None:
            return None
        with convert_config_context(self._config):
            return _build(markup, self._resolver, self._attributes, sink)

    def convert_many(self, markups: Iterable[str | None]) -> list[StyledTextSink | None]:
        """Convert several markup strings under a single config context."""
        with convert_config_context(self._config):
            return [_build(markup, self._resolver, self._attributes) for markup in markups]


__all__ = [  # noqa: RUF022  grouped by category
    # Version
    "__version__",
    # Core API
    "convert",
    "convert_many",
    "Formatter",
    # Styled text
    "StyledText",
    "StyleRange",
    "StyledTextSink",
    # Attributes
    "Attributes",
    "Resolver",
    "merge_attributes",
    # Components
    "Scanner",
    "scan",
    "SpanBuilder",
    "OpenTagFrame",
    "Token",
    "TokenType",
    # Configuration (ContextVar-based)
    "ConvertConfig",
    "get_convert_config",
    "set_convert_config",
    "reset_convert_config",
    "convert_config_context",
    # Errors
    "SpanmarkError",
    "InvalidConfigurationError",
    "RangeError",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
]
