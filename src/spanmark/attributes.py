"""Attribute sets and the merge helper.

Attribute keys and values are opaque to spanmark. The only operation the core
performs on them is a right-biased merge: keys from later layers override keys
from earlier ones, keys not mentioned by a later layer persist.

Example:
    >>> merge_attributes({"font": "body", "bold": False}, {"bold": True})
    {'font': 'body', 'bold': True}

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

Attributes = Mapping[str, Any]

# resolver(tag_name, current_attributes) -> attributes to layer, or None
Resolver = Callable[[str, dict[str, Any]], Attributes | None]


def merge_attributes(*layers: Attributes | None) -> dict[str, Any]:
    """Merge attribute layers left to right into a new dict.

    Args:
        *layers: Attribute mappings, lowest priority first. None is skipped.

    Returns:
        A fresh dict; none of the inputs is modified.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def freeze_attributes(attributes: Attributes | None) -> dict[str, Any]:
    """Copy an attribute mapping so later caller mutations cannot leak in."""
    return dict(attributes) if attributes else {}
