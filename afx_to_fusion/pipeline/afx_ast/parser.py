"""
AFX parser that builds an AST.

Phase 1 of the pipeline: turn AFX source text into an ordered list of
AST values. No Fusion-specific processing happens here; meta attributes
like `@key` or `@path` are kept as ordinary props for the generator.
"""

from __future__ import annotations

from .lexer import AfxLexer
from .nodes import (
    AstValue,
    Attribute,
    Boolean,
    Comment,
    Expression,
    Node,
    Prop,
    Spread,
    StringLiteral,
    Text,
)

QUOTES = "\"'`"


class AfxParser:
    """Parses AFX source into an AST."""

    def __init__(self, source: str):
        self.lexer = AfxLexer(source)

    def parse(self) -> list[AstValue]:
        """
        Parse the whole source.

        Returns:
            The top-level AST values in source order

        Raises:
            AfxParseError: If the source is not valid AFX
        """
        return self._parse_contents()

    def _parse_contents(self, parent: str | None = None, parent_start: int = 0) -> list[AstValue]:
        """Parse siblings until the parent's closing tag (or the end of input)."""
        lexer = self.lexer
        contents: list[AstValue] = []
        while True:
            if lexer.is_end():
                if parent is not None:
                    raise lexer.error(f"Unexpected end of input, tag <{parent}> is not closed", parent_start)
                return contents

            if lexer.starts_with("<!--"):
                contents.append(self._parse_comment())
            elif lexer.starts_with("</"):
                if parent is None:
                    raise lexer.error("Unexpected closing tag")
                return contents
            elif lexer.peek() == "<":
                contents.append(self._parse_node())
            elif lexer.peek() == "{":
                contents.append(Expression(self._parse_braced("expression")))
            else:
                contents.append(self._parse_text())

    def _parse_text(self) -> Text:
        lexer = self.lexer
        start = lexer.position
        while not lexer.is_end() and lexer.peek() not in "<{":
            lexer.consume()
        return Text(lexer.source[start : lexer.position])

    def _parse_comment(self) -> Comment:
        lexer = self.lexer
        start = lexer.position
        lexer.consume(len("<!--"))
        end = lexer.source.find("-->", lexer.position)
        if end == -1:
            raise lexer.error("Unterminated comment", start)
        text = lexer.source[lexer.position : end]
        lexer.position = end + len("-->")
        return Comment(text)

    def _parse_identifier(self, context: str) -> str:
        lexer = self.lexer
        start = lexer.position
        while not lexer.is_end() and lexer.is_identifier_character():
            lexer.consume()
        if lexer.position == start:
            if lexer.is_end():
                raise lexer.error(f"Unexpected end of input, expected {context}")
            raise lexer.error(f"Unexpected character {lexer.peek()!r}, expected {context}")
        return lexer.source[start : lexer.position]

    def _parse_node(self) -> Node:
        lexer = self.lexer
        start = lexer.position
        lexer.expect("<", "tag")
        identifier = self._parse_identifier("tag name")

        attributes: list[Attribute] = []
        while True:
            lexer.skip_whitespace()
            if lexer.is_end():
                raise lexer.error(f"Unexpected end of input in tag <{identifier}>", start)
            if lexer.starts_with("/>"):
                lexer.consume(2)
                return Node(identifier, True, tuple(attributes), ())
            if lexer.peek() == ">":
                lexer.consume()
                break
            if lexer.peek() == "{":
                attributes.append(self._parse_spread())
            elif lexer.is_identifier_character():
                attributes.append(self._parse_prop())
            else:
                raise lexer.error(f"Unexpected character {lexer.peek()!r} in tag <{identifier}>")

        children = self._parse_contents(identifier, start)

        closing_start = lexer.position
        lexer.expect("</", f"closing tag of <{identifier}>")
        closing_identifier = self._parse_identifier("closing tag name")
        if closing_identifier != identifier:
            raise lexer.error(
                f"Closing tag </{closing_identifier}> does not match opening tag <{identifier}>",
                closing_start,
            )
        lexer.skip_whitespace()
        lexer.expect(">", f"closing tag </{identifier}>")
        return Node(identifier, False, tuple(attributes), tuple(children))

    def _parse_prop(self) -> Prop:
        lexer = self.lexer
        identifier = self._parse_identifier("attribute name")
        lexer.skip_whitespace()
        if lexer.peek() != "=":
            # Bare attributes like <input disabled /> are boolean flags
            return Prop(identifier, Boolean(True))

        lexer.consume()
        lexer.skip_whitespace()
        if lexer.is_end():
            raise lexer.error(f"Unexpected end of input, expected value of attribute {identifier!r}")
        if lexer.peek() in "\"'":
            return Prop(identifier, StringLiteral(self._parse_string()))
        if lexer.peek() == "{":
            return Prop(identifier, Expression(self._parse_braced("expression")))
        raise lexer.error(f"Unexpected character {lexer.peek()!r}, expected value of attribute {identifier!r}")

    def _parse_spread(self) -> Spread:
        lexer = self.lexer
        if not lexer.starts_with("{..."):
            raise lexer.error("Expected spread '{...expression}' in tag")
        code = self._parse_braced("spread")
        return Spread(Expression(code[len("...") :]))

    def _parse_string(self) -> str:
        """Parse a quoted attribute value. A backslash escapes the next character."""
        lexer = self.lexer
        start = lexer.position
        quote = lexer.consume()
        characters: list[str] = []
        while True:
            if lexer.is_end():
                raise lexer.error("Unterminated string literal", start)
            character = lexer.consume()
            if character == "\\":
                if lexer.is_end():
                    raise lexer.error("Unterminated string literal", start)
                characters.append(lexer.consume())
            elif character == quote:
                return "".join(characters)
            else:
                characters.append(character)

    def _parse_braced(self, context: str) -> str:
        """Parse `{...}` with nested braces and return the code between the outer braces."""
        lexer = self.lexer
        start = lexer.position
        lexer.expect("{", context)
        code_start = lexer.position
        depth = 0
        while True:
            if lexer.is_end():
                raise lexer.error(f"Unterminated {context}", start)
            character = lexer.peek()
            if character in QUOTES:
                self._skip_quoted(context, start)
                continue
            if character == "{":
                depth += 1
            elif character == "}":
                if depth == 0:
                    code = lexer.source[code_start : lexer.position]
                    lexer.consume()
                    return code
                depth -= 1
            lexer.consume()

    def _skip_quoted(self, context: str, start: int) -> None:
        """Skip a quoted string inside an expression so its braces are not counted."""
        lexer = self.lexer
        quote = lexer.consume()
        while True:
            if lexer.is_end():
                raise lexer.error(f"Unterminated {context}", start)
            character = lexer.consume()
            if character == "\\":
                lexer.consume()
            elif character == quote:
                return
