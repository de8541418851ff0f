"""
Attribute pipeline for AFX nodes.

Three transforms applied in fixed order to the attributes of one node:

1. filter_attributes: drop @key/@path, extract @children
2. expand_shorthand_meta_paths: @if -> @if.if_1, @process -> @process.process_1, ...
3. sort_attributes: group props trailing a spread and defer meta props

Each transform returns new lists and never touches the AST it reads.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from ..afx_ast.nodes import Attribute, Prop, PropList, Spread, StringLiteral, kind_of
from ..errors import FusionGenerationError

# Meta paths whose bare form is expanded with a counter so repeated
# directives don't collide on the same Fusion path
SHORTHAND_META_PATHS = ("@if", "@process")

# Directives consumed by the parent context instead of the node itself
PARENT_DIRECTIVES = ("@key", "@path")

CHILDREN_DIRECTIVE = "@children"


def directive_value(prop: Prop) -> str:
    """Return the string payload of a @key/@path/@children directive.

    Raises:
        FusionGenerationError: If the payload is not a string
    """
    if not isinstance(prop.value, StringLiteral):
        raise FusionGenerationError(f"{prop.identifier} only supports string payloads, {kind_of(prop.value)} found")
    return prop.value.text


def filter_attributes(attributes: Iterable[Attribute], children_property: str = "content") -> tuple[list[Attribute], str]:
    """
    Remove directives that are not rendered as props.

    Args:
        attributes: The raw attributes of a node
        children_property: Default name of the children property

    Returns:
        The remaining attributes and the effective children property name
    """
    filtered: list[Attribute] = []
    for attribute in attributes:
        if isinstance(attribute, Prop):
            if attribute.identifier in PARENT_DIRECTIVES:
                directive_value(attribute)
                continue
            if attribute.identifier == CHILDREN_DIRECTIVE:
                children_property = directive_value(attribute)
                continue
        filtered.append(attribute)
    return filtered, children_property


def expand_shorthand_meta_paths(attributes: Iterable[Attribute]) -> list[Attribute]:
    """
    Suffix shorthand meta paths with a per-identifier counter.

    `@if` becomes `@if.if_1`, a second `@if` on the same node `@if.if_2`.
    Only the final path segment is checked, so `@if.hasTitle` is left alone.
    """
    counters: dict[str, int] = {}
    expanded: list[Attribute] = []
    for attribute in attributes:
        if isinstance(attribute, Prop):
            last_segment = attribute.identifier.split(".")[-1]
            if last_segment in SHORTHAND_META_PATHS:
                counters[attribute.identifier] = counters.get(attribute.identifier, 0) + 1
                suffix = f"{last_segment[1:]}_{counters[attribute.identifier]}"
                attribute = replace(attribute, identifier=f"{attribute.identifier}.{suffix}")
        expanded.append(attribute)
    return expanded


def sort_attributes(attributes: Iterable[Attribute]) -> list[Attribute]:
    """
    Order attributes for rendering.

    Props before the first spread stay in place. Props after a spread are
    collected into a PropList that is emitted right before the next spread
    (or at the end). Meta props are emitted last in their original order.
    """
    sorted_attributes: list[Attribute] = []
    meta_props: list[Prop] = []
    pending_props: list[Prop] = []
    spread_is_present = False

    for attribute in attributes:
        if isinstance(attribute, Prop) and attribute.is_meta:
            meta_props.append(attribute)
        elif isinstance(attribute, Prop) and spread_is_present:
            pending_props.append(attribute)
        elif isinstance(attribute, Spread):
            if pending_props:
                sorted_attributes.append(PropList(tuple(pending_props)))
                pending_props = []
            sorted_attributes.append(attribute)
            spread_is_present = True
        else:
            sorted_attributes.append(attribute)

    if pending_props:
        sorted_attributes.append(PropList(tuple(pending_props)))
    sorted_attributes.extend(meta_props)
    return sorted_attributes


def process_attributes(attributes: Iterable[Attribute], children_property: str = "content") -> tuple[list[Attribute], str]:
    """Run the full pipeline. Returns the attributes to render and the children property name."""
    filtered, children_property = filter_attributes(attributes, children_property)
    return sort_attributes(expand_shorthand_meta_paths(filtered)), children_property
