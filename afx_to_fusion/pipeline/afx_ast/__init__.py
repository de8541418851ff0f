"""
AFX AST (Abstract Syntax Tree) module.

Contains the AST node definitions and parser for AFX.
"""

from __future__ import annotations

from .nodes import (
    AstValue,
    Attribute,
    Boolean,
    Comment,
    Expression,
    Node,
    Prop,
    PropList,
    Spread,
    StringLiteral,
    Text,
)
from .parser import AfxParser

__all__ = [
    "AstValue",
    "Attribute",
    "Node",
    "Expression",
    "StringLiteral",
    "Text",
    "Boolean",
    "Comment",
    "Prop",
    "Spread",
    "PropList",
    "AfxParser",
]
