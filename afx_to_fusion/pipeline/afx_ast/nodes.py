"""
AST node definitions for AFX.

These nodes represent the parsed structure of AFX source. They are
immutable: the generator only reads them, and attribute rewrites build
new values instead of changing existing ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union


@dataclass(frozen=True)
class Expression:
    """An Eel expression, `{code}` in AFX, rendered as `${code}`."""

    kind: ClassVar[str] = "expression"

    code: str = ""


@dataclass(frozen=True)
class StringLiteral:
    """A quoted attribute value."""

    kind: ClassVar[str] = "string"

    text: str = ""


@dataclass(frozen=True)
class Text:
    """Raw text between tags, whitespace not yet normalized."""

    kind: ClassVar[str] = "text"

    raw: str = ""


@dataclass(frozen=True)
class Boolean:
    """A boolean attribute value (`<input disabled />`)."""

    kind: ClassVar[str] = "boolean"

    value: bool = True


@dataclass(frozen=True)
class Comment:
    """An `<!-- ... -->` comment. Never rendered."""

    kind: ClassVar[str] = "comment"

    text: str = ""


@dataclass(frozen=True)
class Prop:
    """A named attribute (`name="value"`, `name={expr}` or bare `name`)."""

    kind: ClassVar[str] = "prop"

    identifier: str = ""
    value: AstValue = field(default_factory=Boolean)

    @property
    def is_meta(self) -> bool:
        return self.identifier.startswith("@")


@dataclass(frozen=True)
class Spread:
    """A `{...expression}` attribute merging all properties of an expression."""

    kind: ClassVar[str] = "spread"

    value: AstValue = field(default_factory=Expression)


@dataclass(frozen=True)
class PropList:
    """Props trailing a spread, grouped so they render as one data structure.

    Never produced by the parser.
    """

    kind: ClassVar[str] = "propList"

    props: tuple[Prop, ...] = ()


@dataclass(frozen=True)
class Node:
    """A tag (`<div>`) or a prototype reference (`<Vendor.Site:Card>`)."""

    kind: ClassVar[str] = "node"
    prototype_separator: ClassVar[str] = ":"

    identifier: str = ""
    self_closing: bool = False
    attributes: tuple[Attribute, ...] = ()
    children: tuple[AstValue, ...] = ()

    @property
    def is_prototype(self) -> bool:
        return self.prototype_separator in self.identifier

    def find_prop(self, identifier: str) -> Prop | None:
        """Return the last prop with the given identifier, if any."""
        found = None
        for attribute in self.attributes:
            if isinstance(attribute, Prop) and attribute.identifier == identifier:
                found = attribute
        return found


def kind_of(value: object) -> str:
    """Return the AST kind of a value, or its type name for foreign objects."""
    return getattr(value, "kind", type(value).__name__)


AstValue = Union[Node, Expression, StringLiteral, Text, Boolean, Comment]
Attribute = Union[Prop, Spread, PropList]
