"""Token and TokenType definitions for the spanmark scanner.

The scanner produces a stream of Token objects that the span builder consumes.
Each Token has a type, a value, the raw source slice, and source offsets.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types produced by the scanner."""

    TEXT = auto()  # Literal run, including recovered malformed markup
    OPEN_TAG = auto()  # <name>
    CLOSE_TAG = auto()  # </name>


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the scanner.

    Attributes:
        type: The token type (from TokenType enum)
        value: Literal text for TEXT, tag name for OPEN_TAG / CLOSE_TAG
        start: Absolute start offset in the markup
        end: Absolute end offset in the markup (exclusive)
        raw: Exact source slice, e.g. "</b>" for a close tag

    """

    type: TokenType
    value: str
    start: int
    end: int
    raw: str

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.start}:{self.end})"

    @property
    def is_tag(self) -> bool:
        """True for open and close tag tokens."""
        return self.type is not TokenType.TEXT
