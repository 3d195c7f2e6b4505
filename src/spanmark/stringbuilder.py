"""StringBuilder for O(n) text accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. Unlike a plain list of parts it also keeps a
running character count, which the span builder uses as the current output
offset when tags open and close.

Thread Safety:
StringBuilder instances are local to each conversion call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator with character-length tracking.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("Hello").append(", world")
            >>> len(sb)
            12
            >>> sb.build()
            'Hello, world'

    """

    __slots__ = ("_parts", "_length")

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []
        self._length = 0

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
            self._length += len(s)
        return self

    def build(self) -> str:
        """Join all parts into final string.

        The joined result is cached as the single remaining part, so repeated
        calls stay cheap.
        """
        if len(self._parts) > 1:
            self._parts[:] = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts."""
        self._parts.clear()
        self._length = 0
        return self

    def __len__(self) -> int:
        """Return total number of characters appended."""
        return self._length

    def __bool__(self) -> bool:
        """Return True if any text has been appended."""
        return self._length > 0
