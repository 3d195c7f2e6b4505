"""Tests for the tag scanner.

Covers tokenization of well-formed tags, offsets, laziness and restart, and
the recovery rules that turn malformed markup into literal text.
"""

import pytest

from spanmark.scanner import Scanner, scan
from spanmark.tokens import Token, TokenType


def _kinds(source: str) -> list[tuple[TokenType, str]]:
    return [(t.type, t.value) for t in scan(source)]


class TestWellFormedTags:
    """Open and close tags around literal runs."""

    def test_simple_span(self) -> None:
        tokens = scan("<b>Hi</b>!")
        assert tokens == [
            Token(TokenType.OPEN_TAG, "b", 0, 3, "<b>"),
            Token(TokenType.TEXT, "Hi", 3, 5, "Hi"),
            Token(TokenType.CLOSE_TAG, "b", 5, 9, "</b>"),
            Token(TokenType.TEXT, "!", 9, 10, "!"),
        ]

    def test_plain_text_is_one_token(self) -> None:
        assert _kinds("just words") == [(TokenType.TEXT, "just words")]

    def test_empty_input(self) -> None:
        assert scan("") == []

    def test_sentence_with_two_spans(self) -> None:
        assert _kinds("<b>Hello</b> world, how are <i>you</i> today!") == [
            (TokenType.OPEN_TAG, "b"),
            (TokenType.TEXT, "Hello"),
            (TokenType.CLOSE_TAG, "b"),
            (TokenType.TEXT, " world, how are "),
            (TokenType.OPEN_TAG, "i"),
            (TokenType.TEXT, "you"),
            (TokenType.CLOSE_TAG, "i"),
            (TokenType.TEXT, " today!"),
        ]

    def test_adjacent_tags(self) -> None:
        assert _kinds("<b><i></i></b>") == [
            (TokenType.OPEN_TAG, "b"),
            (TokenType.OPEN_TAG, "i"),
            (TokenType.CLOSE_TAG, "i"),
            (TokenType.CLOSE_TAG, "b"),
        ]

    def test_name_keeps_spaces_and_case(self) -> None:
        assert _kinds("<Font Big>x</Font Big>") == [
            (TokenType.OPEN_TAG, "Font Big"),
            (TokenType.TEXT, "x"),
            (TokenType.CLOSE_TAG, "Font Big"),
        ]

    def test_only_first_slash_marks_close(self) -> None:
        assert _kinds("<//x>") == [(TokenType.CLOSE_TAG, "/x")]

    def test_stray_greater_than_is_text(self) -> None:
        assert _kinds("a > b") == [(TokenType.TEXT, "a > b")]

    def test_is_tag(self) -> None:
        open_tag, text, close_tag = scan("<b>x</b>")
        assert open_tag.is_tag and close_tag.is_tag
        assert not text.is_tag


class TestRecovery:
    """Malformed markup becomes literal text, never an error."""

    def test_unterminated_tag_keeps_remainder(self) -> None:
        assert _kinds("a <b") == [(TokenType.TEXT, "a "), (TokenType.TEXT, "<b")]

    def test_unterminated_after_valid_tag(self) -> None:
        assert _kinds("<b>x</b") == [
            (TokenType.OPEN_TAG, "b"),
            (TokenType.TEXT, "x"),
            (TokenType.TEXT, "</b"),
        ]

    @pytest.mark.parametrize("source", ["<>", "</>"])
    def test_empty_tag_is_text(self, source: str) -> None:
        assert _kinds(source) == [(TokenType.TEXT, source)]

    def test_empty_tag_between_text(self) -> None:
        assert _kinds("a<>b") == [
            (TokenType.TEXT, "a"),
            (TokenType.TEXT, "<>"),
            (TokenType.TEXT, "b"),
        ]

    def test_second_open_bracket_restarts_tag(self) -> None:
        assert _kinds("<a<b>x") == [
            (TokenType.TEXT, "<a"),
            (TokenType.OPEN_TAG, "b"),
            (TokenType.TEXT, "x"),
        ]

    def test_lone_open_bracket(self) -> None:
        assert _kinds("<") == [(TokenType.TEXT, "<")]

    @pytest.mark.parametrize(
        "source",
        ["a <b", "<>", "<a<b>x", "x</b", "<<<>>>", "</ >< />", "1 < 2 > 0"],
    )
    def test_raw_reassembles_input(self, source: str) -> None:
        assert "".join(t.raw for t in scan(source)) == source


class TestScannerLifecycle:
    """Laziness and restart-per-call behavior."""

    def test_tokenize_is_lazy(self) -> None:
        stream = Scanner("<b>x</b>").tokenize()
        first = next(stream)
        assert first.type is TokenType.OPEN_TAG

    def test_tokenize_restarts(self) -> None:
        scanner = Scanner("<b>x</b> y")
        assert list(scanner.tokenize()) == list(scanner.tokenize())

    def test_offsets_are_contiguous(self) -> None:
        tokens = scan("pre <i>mid</i> <>post")
        assert tokens[0].start == 0
        for prev, cur in zip(tokens, tokens[1:]):
            assert prev.end == cur.start
        assert tokens[-1].end == len("pre <i>mid</i> <>post")

    def test_repr_is_compact(self) -> None:
        token = scan("x" * 40)[0]
        assert repr(token) == f"Token(TEXT, {'x' * 17 + '...'!r}, 0:40)"
