"""Tests for spanmark.serialization: styled text JSON round-trip."""

import json

import pytest

from spanmark import convert
from spanmark.errors import RangeError
from spanmark.serialization import from_dict, from_json, to_dict, to_json
from spanmark.styled import StyledText, StyleRange


def _sample(resolver) -> StyledText:
    return convert("<b>Hello</b> <i>world</i>", {"font": "body"}, resolver)


class TestToDict:
    def test_structure(self, resolver) -> None:
        data = to_dict(_sample(resolver))
        assert data == {
            "text": "Hello world",
            "ranges": [
                {"start": 0, "length": 11, "attributes": {"font": "body"}},
                {"start": 0, "length": 5, "attributes": {"font": "body", "bold": True}},
                {"start": 6, "length": 5, "attributes": {"font": "body", "italic": True}},
            ],
        }

    def test_empty(self) -> None:
        assert to_dict(StyledText()) == {"text": "", "ranges": []}


class TestFromDict:
    def test_restores_equal_value(self, resolver) -> None:
        styled = _sample(resolver)
        assert from_dict(to_dict(styled)) == styled

    def test_missing_ranges_key(self) -> None:
        assert from_dict({"text": "abc"}) == StyledText("abc")

    def test_out_of_bounds_range_rejected(self) -> None:
        with pytest.raises(RangeError):
            from_dict({"text": "a", "ranges": [{"start": 0, "length": 3, "attributes": {"x": 1}}]})

    def test_missing_text_rejected(self) -> None:
        with pytest.raises(KeyError):
            from_dict({"ranges": []})


class TestJson:
    def test_round_trip(self, resolver) -> None:
        styled = _sample(resolver)
        assert from_json(to_json(styled)) == styled

    def test_sorted_keys_are_deterministic(self) -> None:
        styled = StyledText("ab", [StyleRange(0, 1, {"z": 1, "a": 2})])
        out = to_json(styled)
        assert out == to_json(StyledText("ab", [StyleRange(0, 1, {"a": 2, "z": 1})]))
        assert out.index('"a"') < out.index('"z"')

    def test_indent(self) -> None:
        assert "\n" in to_json(StyledText("x"), indent=2)

    def test_non_ascii_kept(self) -> None:
        assert "héllo" in to_json(StyledText("héllo"))

    def test_valid_json(self, resolver) -> None:
        assert json.loads(to_json(_sample(resolver)))["text"] == "Hello world"
