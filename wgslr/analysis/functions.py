"""Second pass: collect function signatures.

Struct-typed parameters are flattened into the struct's member list, so
this pass needs the structure map from the first pass.
"""

from __future__ import annotations
from typing import Mapping
from wgslr.analysis.inputs import parse_input
from wgslr.analysis.model import Function, Input, Structure
from wgslr.errors import MissingRequiredChild, NodeTypeMismatch
from wgslr.parser.node_kinds import NodeKind
from wgslr.parser.query import Query
from wgslr.parser.syntax_tree import SyntaxNode, SyntaxTree

FUNCTION_QUERY = Query("(function_declaration) @func")


def extract_functions(tree: SyntaxTree, structures: Mapping[str, Structure]) -> dict[str, Function]:
    """Map function name -> Function. A later declaration replaces an earlier one."""
    functions: dict[str, Function] = {}
    for match in tree.query(FUNCTION_QUERY):
        function = build_function(match["func"], structures)
        functions[function.name] = function
    return functions


def build_function(node: SyntaxNode, structures: Mapping[str, Structure]) -> Function:
    if node.kind != NodeKind.FUNCTION_DECLARATION:
        raise NodeTypeMismatch(f"Expected function_declaration, got '{node.type}'")

    name = node.child_by_field_name("name")
    if name is None:
        raise MissingRequiredChild(f"Function declaration without a name: '{node.text}'")

    attributes: dict[str, str] = {}
    inputs: list[Input] = []
    return_type = None

    for child in node.named_children:
        if child.kind == NodeKind.ATTRIBUTE:
            attr_name, value = attribute_text(child)
            attributes[attr_name] = value
        elif child.kind == NodeKind.PARAMETER_LIST:
            inputs.extend(_flatten_parameters(child, structures))
        elif child.kind == NodeKind.FUNCTION_RETURN_TYPE:
            type_decl = child.child_by_field_name("type")
            return_type = type_decl.text if type_decl is not None else None
        elif child.kind in (NodeKind.IDENTIFIER, NodeKind.COMPOUND_STATEMENT):
            continue
        else:
            raise NodeTypeMismatch(
                f"Unexpected '{child.type}' in function '{name.text}'"
            )

    return Function(name.text, attributes, tuple(inputs), return_type)


def attribute_text(node: SyntaxNode) -> tuple[str, str]:
    """Return (name, argument text) of an attribute.

    The argument text is every token after the name with the enclosing
    parentheses dropped: ``@workgroup_size(8, 8, 1)`` gives "8,8,1".
    Nested parentheses inside an argument are kept verbatim.
    """
    name = node.named_child(0)
    parts = []
    sibling = name.next_sibling
    while sibling is not None:
        if sibling.text not in ("(", ")"):
            parts.append(sibling.text)
        sibling = sibling.next_sibling
    return name.text, "".join(parts)


def _flatten_parameters(node: SyntaxNode, structures: Mapping[str, Structure]) -> list[Input]:
    inputs = []
    for param in node.named_children:
        if param.kind != NodeKind.PARAMETER:
            raise NodeTypeMismatch(f"Expected parameter, got '{param.type}'")
        parsed = parse_input(param)
        struct = structures.get(parsed.type)
        if struct is not None:
            # One level only: struct-typed members stay as they are
            inputs.extend(struct.members)
        else:
            inputs.append(parsed)
    return inputs
