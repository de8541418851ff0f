"""
Exceptions raised while converting AFX to Fusion.

Parse errors and generation errors share a common base so callers can
catch everything at once, but stay distinguishable by type.
"""

from __future__ import annotations


class AfxError(Exception):
    """Base class for all errors raised by this package."""

    pass


class AfxParseError(AfxError):
    """Raised when the AFX source is malformed.

    This can happen when:
    - A tag, attribute value, expression, spread or comment is not terminated
    - A closing tag does not match the tag it closes
    - An unexpected character appears inside a tag
    """

    def __init__(self, message: str, source: str = "", position: int | None = None):
        self.source = source
        self.position = position
        if position is not None:
            line, column = self._line_and_column(source, position)
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)

    @staticmethod
    def _line_and_column(source: str, position: int) -> tuple[int, int]:
        consumed = source[:position]
        line = consumed.count("\n") + 1
        column = position - (consumed.rfind("\n") + 1) + 1
        return line, column


class FusionGenerationError(AfxError):
    """Raised when an AST violates a generator contract.

    Examples: a `@path`, `@key` or `@children` directive with a non-string
    payload, a spread without an expression, or an unknown AST value.
    """

    pass


class OutputWriteError(AfxError):
    """Raised when generated Fusion cannot be written safely."""

    pass
