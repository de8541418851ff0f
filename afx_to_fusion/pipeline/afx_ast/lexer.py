"""
Character cursor used by the AFX parser.
"""

from __future__ import annotations

from ..errors import AfxParseError

IDENTIFIER_CHARACTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789@.:-_")


class AfxLexer:
    """Walks the AFX source one character at a time."""

    def __init__(self, source: str):
        self.source = source
        self.position = 0

    def is_end(self) -> bool:
        return self.position >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """Return the character at the cursor (plus offset), or "" past the end."""
        index = self.position + offset
        if index < len(self.source):
            return self.source[index]
        return ""

    def starts_with(self, text: str) -> bool:
        return self.source.startswith(text, self.position)

    def consume(self, count: int = 1) -> str:
        consumed = self.source[self.position : self.position + count]
        self.position += len(consumed)
        return consumed

    def expect(self, text: str, context: str) -> None:
        """Consume `text` or raise a parse error mentioning `context`."""
        if self.is_end():
            raise self.error(f"Unexpected end of input in {context}, expected {text!r}")
        if not self.starts_with(text):
            raise self.error(f"Unexpected character {self.peek()!r} in {context}, expected {text!r}")
        self.consume(len(text))

    def is_whitespace(self) -> bool:
        return self.peek().isspace()

    def is_identifier_character(self) -> bool:
        return self.peek() in IDENTIFIER_CHARACTERS

    def skip_whitespace(self) -> None:
        while not self.is_end() and self.is_whitespace():
            self.position += 1

    def error(self, message: str, position: int | None = None) -> AfxParseError:
        return AfxParseError(message, self.source, self.position if position is None else position)
