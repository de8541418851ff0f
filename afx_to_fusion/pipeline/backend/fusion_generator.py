"""
Fusion generator.

Walks an AFX AST and produces Fusion source:
- Nodes become `Neos.Fusion:Tag` objects or prototype objects
- Sibling lists become a single value or a `Neos.Fusion:Join`
- Leaves become Eel expressions, quoted strings or boolean literals

Lines are joined with a newline and every nesting level adds one
indentation unit. There is no newline after the final closing brace.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..afx_ast.nodes import (
    AstValue,
    Boolean,
    Comment,
    Expression,
    Node,
    Prop,
    PropList,
    Spread,
    StringLiteral,
    Text,
    kind_of,
)
from ..config import GeneratorConfig
from ..errors import FusionGenerationError
from .attribute_pipeline import directive_value, process_attributes

# Whitespace runs containing a newline are dropped at the edges of a text
# and collapsed to a single space inside it
_WHITESPACE_RUN = re.compile(r"\s+")

_STRING_ESCAPES = {"\\": "\\\\", "'": "\\'", '"': '\\"', "\0": "\\0"}


def normalize_text(raw: str) -> str:
    """Apply the whitespace rules for text between tags."""

    def collapse(match: re.Match) -> str:
        run = match.group(0)
        if "\n" not in run:
            return run
        if match.start() == 0 or match.end() == len(raw):
            return ""
        return " "

    return _WHITESPACE_RUN.sub(collapse, raw)


class FusionGenerator:
    """Generates Fusion source from an AFX AST."""

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            config: Generation configuration (defaults are the Neos prototypes)
        """
        self.config = config or GeneratorConfig()

    def generate(self, ast: Sequence[AstValue], indentation: str = "") -> str:
        """
        Generate Fusion for a parsed AFX document.

        Args:
            ast: Top-level AST values
            indentation: Base indentation of the emitted code

        Returns:
            Fusion source

        Raises:
            FusionGenerationError: If the AST violates a generator contract
        """
        try:
            return self.render_node_list(ast, indentation)
        except RecursionError:
            raise FusionGenerationError("AFX nodes are nested too deeply to generate Fusion") from None

    def render_value(self, value: AstValue, indentation: str = "") -> str | None:
        """Render a single AST value. Comments render as nothing."""
        if isinstance(value, Node):
            return self.render_node(value, indentation)
        if isinstance(value, Expression):
            return self.render_expression(value)
        if isinstance(value, StringLiteral):
            return self.render_string(value.text)
        if isinstance(value, Text):
            return self.render_string(value.raw)
        if isinstance(value, Boolean):
            return self.render_boolean(value)
        if isinstance(value, Comment):
            return None
        raise FusionGenerationError(f"AST type {kind_of(value)} is unknown")

    def render_expression(self, expression: Expression) -> str:
        return "${" + expression.code + "}"

    def render_string(self, text: str) -> str:
        return "'" + "".join(_STRING_ESCAPES.get(character, character) for character in text) + "'"

    def render_boolean(self, boolean: Boolean) -> str:
        return "true" if boolean.value else "false"

    def render_node(self, node: Node, indentation: str = "") -> str:
        """Render a tag or prototype node as a Fusion object."""
        inner = indentation + self.config.indentation
        lines: list[str] = []

        if node.is_prototype:
            lines.append(f"{node.identifier} {{")
            prefix = ""
        else:
            lines.append(f"{self.config.tag_prototype} {{")
            lines.append(f"{inner}tagName = {self.render_string(node.identifier)}")
            if node.self_closing:
                lines.append(f"{inner}selfClosingTag = true")
            prefix = "attributes."

        attributes, children_property = process_attributes(node.attributes, self.config.children_property)
        spread_index = 1
        for attribute in attributes:
            if isinstance(attribute, Prop):
                prop_line = self._render_prop(attribute, prefix, inner)
                if prop_line is not None:
                    lines.append(prop_line)
            elif isinstance(attribute, Spread):
                if not isinstance(attribute.value, Expression):
                    raise FusionGenerationError(f"Spreads only support expression payloads, {kind_of(attribute.value)} found")
                lines.append(f"{inner}{prefix}@apply.spread_{spread_index} = {self.render_expression(attribute.value)}")
                spread_index += 1
            elif isinstance(attribute, PropList):
                lines.extend(self._render_prop_list(attribute, f"{prefix}@apply.spread_{spread_index}", inner))
                spread_index += 1
            else:
                raise FusionGenerationError(f"Attribute type {kind_of(attribute)} is unknown")

        path_children, content_children = self._partition_children(node.children)
        for path, child in path_children.items():
            lines.append(f"{inner}{path} = {self.render_node(child, inner)}")
        if content_children:
            lines.append(f"{inner}{children_property} = {self.render_node_list(content_children, inner)}")

        lines.append(f"{indentation}}}")
        return "\n".join(lines)

    def render_node_list(self, values: Sequence[AstValue], indentation: str = "") -> str:
        """Render siblings as nothing (''), a single value or a Join."""
        entries = [entry for entry in (self._normalize(value) for value in values) if entry is not None]

        if not entries:
            return "''"
        if len(entries) == 1:
            return self.render_value(entries[0], indentation)

        inner = indentation + self.config.indentation
        lines = [f"{self.config.join_prototype} {{"]
        for index, entry in enumerate(entries, start=1):
            key = f"item_{index}"
            if isinstance(entry, Node):
                key_prop = entry.find_prop("@key")
                if key_prop is not None:
                    key = directive_value(key_prop)
            lines.append(f"{inner}{key} = {self.render_value(entry, inner)}")
        lines.append(f"{indentation}}}")
        return "\n".join(lines)

    def _normalize(self, value: AstValue) -> AstValue | None:
        """Drop comments and blank text, normalize whitespace of the remaining text."""
        if isinstance(value, Comment):
            return None
        if isinstance(value, Text):
            text = normalize_text(value.raw)
            return Text(text) if text else None
        return value

    def _render_prop(self, prop: Prop, prefix: str, indentation: str) -> str | None:
        """Render `name = value`. Meta props are never prefixed."""
        name = prop.identifier if prop.is_meta else prefix + prop.identifier
        value = self.render_value(prop.value, indentation)
        if value is None:
            return None
        return f"{indentation}{name} = {value}"

    def _render_prop_list(self, prop_list: PropList, name: str, indentation: str) -> list[str]:
        lines = [f"{indentation}{name} = {self.config.data_structure_prototype} {{"]
        for prop in prop_list.props:
            prop_line = self._render_prop(prop, "", indentation + self.config.indentation)
            if prop_line is not None:
                lines.append(prop_line)
        lines.append(f"{indentation}}}")
        return lines

    def _partition_children(self, children: Sequence[AstValue]) -> tuple[dict[str, Node], list[AstValue]]:
        """Split children into nodes placed at an @path and content children.

        A repeated path keeps the position of its first occurrence and
        renders the last node carrying it.
        """
        path_children: dict[str, Node] = {}
        content_children: list[AstValue] = []
        for child in children:
            if isinstance(child, Node):
                path_prop = child.find_prop("@path")
                if path_prop is not None:
                    path_children[directive_value(path_prop)] = child
                    continue
            content_children.append(child)
        return path_children, content_children
