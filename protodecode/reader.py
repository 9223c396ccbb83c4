"""
Character cursor over schema source text.
"""


class Reader:
    """
    Wraps an immutable string and an integer cursor.

    The cursor is the only mutable state. `position` and `seek()` let a
    caller snapshot it and put it back, which is how the lexer looks ahead.
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0

    def peek(self, n: int = 1) -> str:
        """Return the next n characters without advancing."""
        return self.source[self.position:self.position + n]

    def consume(self, n: int = 1) -> str:
        """Return the next n characters and advance past them (fewer at end)."""
        result = self.source[self.position:self.position + n]
        self.position += len(result)
        return result

    def at_end(self) -> bool:
        return self.position >= len(self.source)

    def seek(self, position: int):
        if not 0 <= position <= len(self.source):
            raise ValueError(f"Position {position} outside source (length {len(self.source)})")
        self.position = position

    def __repr__(self):
        return f"Reader(position={self.position}, length={len(self.source)})"
