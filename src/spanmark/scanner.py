"""Tag scanner: splits markup into text runs and tag tokens.

Single forward pass over the markup with ``str.find``; no regex, no
backtracking beyond the lookahead for a closing ``>``. O(n) in input length.

Malformed markup never raises. Anything that cannot form a tag comes out as
TEXT, so concatenating ``token.raw`` over the stream always reproduces the
input exactly.

Thread Safety:
Scanner instances hold only their own cursor. Create one per markup string,
or call tokenize() again to restart from the beginning.

"""

from __future__ import annotations

from collections.abc import Iterator

from spanmark.tokens import Token, TokenType
from spanmark.utils.logger import get_logger

logger = get_logger(__name__)


class Scanner:
    """Tag scanner for lightweight HTML-like markup.

    Usage:
            >>> for token in Scanner("<b>Hi</b>!").tokenize():
            ...     print(token)
        Token(OPEN_TAG, 'b', 0:3)
        Token(TEXT, 'Hi', 3:5)
        Token(CLOSE_TAG, 'b', 5:9)
        Token(TEXT, '!', 9:10)

    """

    __slots__ = ("_source", "_source_len", "_pos")

    def __init__(self, source: str) -> None:
        self._source = source
        self._source_len = len(source)
        self._pos = 0

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens in input order, restarting from offset 0."""
        self._pos = 0
        source = self._source
        source_len = self._source_len

        while self._pos < source_len:
            start = self._pos
            lt = source.find("<", start)

            if lt == -1:
                yield self._text(start, source_len)
                return
            if lt > start:
                yield self._text(start, lt)

            yield from self._scan_tag(lt)

    def _scan_tag(self, lt: int) -> Iterator[Token]:
        """Scan from a ``<`` at ``lt``; always advances the cursor."""
        source = self._source
        gt = source.find(">", lt + 1)

        if gt == -1:
            logger.debug("Unterminated tag at offset %d, keeping as text", lt)
            yield self._text(lt, self._source_len)
            return

        # Tag names cannot contain "<"; a second "<" restarts tag detection there.
        next_lt = source.find("<", lt + 1, gt)
        if next_lt != -1:
            yield self._text(lt, next_lt)
            return

        inner = source[lt + 1 : gt]
        is_close = inner.startswith("/")
        name = inner[1:] if is_close else inner

        if not name:
            logger.debug("Empty tag %r at offset %d, keeping as text", inner, lt)
            yield self._text(lt, gt + 1)
            return

        self._pos = gt + 1
        yield Token(
            TokenType.CLOSE_TAG if is_close else TokenType.OPEN_TAG,
            name,
            lt,
            gt + 1,
            source[lt : gt + 1],
        )

    def _text(self, start: int, end: int) -> Token:
        self._pos = end
        run = self._source[start:end]
        return Token(TokenType.TEXT, run, start, end, run)


def scan(source: str) -> list[Token]:
    """Scan markup eagerly into a list of tokens."""
    return list(Scanner(source).tokenize())


__all__ = ["Scanner", "scan"]
