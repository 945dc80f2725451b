"""Decode a struct member or function parameter into an Input."""

from __future__ import annotations
from wgslr.analysis.model import Input, InputAttribute
from wgslr.errors import MissingRequiredChild, NodeTypeMismatch
from wgslr.parser.node_kinds import NodeKind
from wgslr.parser.syntax_tree import SyntaxNode


def parse_input(node: SyntaxNode) -> Input:
    name = None
    type_name = None
    attributes: list[InputAttribute] = []

    for child in node.named_children:
        if child.kind == NodeKind.VARIABLE_IDENTIFIER_DECLARATION:
            name, type_name = identifier_declaration(child)
        elif child.kind == NodeKind.ATTRIBUTE:
            attributes.append(input_attribute(child))
        else:
            raise NodeTypeMismatch(
                f"Unexpected '{child.type}' in {node.type} '{node.text}'"
            )

    if name is None:
        raise MissingRequiredChild(f"{node.type} '{node.text}' has no name")
    return Input(name, type_name, tuple(attributes))


def identifier_declaration(node: SyntaxNode) -> tuple[str, str]:
    """Return (name, type text) of a variable_identifier_declaration."""
    name = node.child_by_field_name("name")
    type_decl = node.child_by_field_name("type")
    if name is None or type_decl is None:
        raise MissingRequiredChild(f"Incomplete declaration '{node.text}'")
    return name.text, type_decl.text


def input_attribute(node: SyntaxNode) -> InputAttribute:
    # Positional: @name(value, ...); arguments past the first are not kept
    named = node.named_children
    value = named[1].text if len(named) > 1 else ""
    return InputAttribute(named[0].text, value)
