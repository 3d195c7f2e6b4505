"""Serialization for styled text: JSON round-trip.

Converts StyledText to/from JSON-compatible dicts. Useful for caching
converted strings, shipping them to a client that does its own rendering,
and debugging.

All JSON output is deterministic (sorted keys) for cache-key stability.
Attribute values must themselves be JSON-compatible for to_json().

Example:
    from spanmark import convert
    from spanmark.serialization import to_json, from_json

    styled = convert("<b>Hi</b>", None, lambda tag, attrs: {"bold": True})
    assert from_json(to_json(styled)) == styled

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from spanmark.styled import StyledText, StyleRange


def to_dict(styled: StyledText) -> dict[str, Any]:
    """Convert styled text to a JSON-compatible dict."""
    return {
        "text": styled.text,
        "ranges": [
            {
                "start": style_range.start,
                "length": style_range.length,
                "attributes": dict(style_range.attributes),
            }
            for style_range in styled.ranges
        ],
    }


def from_dict(data: dict[str, Any]) -> StyledText:
    """Rebuild styled text from a dict produced by to_dict().

    Raises:
        KeyError: If "text" is missing.
        RangeError: If a stored range lies outside the text.
    """
    ranges = [
        StyleRange(
            start=item["start"],
            length=item["length"],
            attributes=item.get("attributes", {}),
        )
        for item in data.get("ranges", ())
    ]
    return StyledText(data["text"], ranges)


def to_json(styled: StyledText, *, indent: int | None = None) -> str:
    """Serialize styled text to a JSON string."""
    return json.dumps(to_dict(styled), indent=indent, sort_keys=True, ensure_ascii=False)


def from_json(json_str: str) -> StyledText:
    """Deserialize a JSON string produced by to_json()."""
    return from_dict(json.loads(json_str))


__all__ = ["to_dict", "from_dict", "to_json", "from_json"]
