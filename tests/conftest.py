"""Shared fixtures for spanmark tests."""

from collections.abc import Callable
from typing import Any

import pytest

STYLES: dict[str, dict[str, Any]] = {
    "b": {"bold": True},
    "i": {"italic": True},
    "u": {"underline": True},
    "red": {"color": "red"},
    "dark": {"color": "darkred"},
}


class RecordingResolver:
    """Resolver that maps tags through a style table and remembers every call."""

    def __init__(self, styles: dict[str, dict[str, Any]]) -> None:
        self.styles = styles
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, tag: str, current: dict[str, Any]) -> dict[str, Any] | None:
        self.calls.append((tag, dict(current)))
        return self.styles.get(tag)

    @property
    def tags(self) -> list[str]:
        return [tag for tag, _ in self.calls]


@pytest.fixture
def resolver() -> RecordingResolver:
    return RecordingResolver(STYLES)


@pytest.fixture
def make_resolver() -> Callable[[dict[str, dict[str, Any]]], RecordingResolver]:
    return RecordingResolver
