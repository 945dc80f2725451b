"""First pass: collect struct declarations."""

from __future__ import annotations
from wgslr.analysis.inputs import parse_input
from wgslr.analysis.model import Structure
from wgslr.errors import MissingRequiredChild, NodeTypeMismatch
from wgslr.parser.node_kinds import NodeKind
from wgslr.parser.query import Query
from wgslr.parser.syntax_tree import SyntaxNode, SyntaxTree

_STRUCT_QUERY = Query("(struct_declaration) @struct")


def extract_structures(tree: SyntaxTree) -> dict[str, Structure]:
    """Map struct name -> Structure. A later declaration replaces an earlier one."""
    structures: dict[str, Structure] = {}
    for match in tree.query(_STRUCT_QUERY):
        struct = build_structure(match["struct"])
        structures[struct.name] = struct
    return structures


def build_structure(node: SyntaxNode) -> Structure:
    if node.kind != NodeKind.STRUCT_DECLARATION:
        raise NodeTypeMismatch(f"Expected struct_declaration, got '{node.type}'")

    name = node.child_by_field_name("name")
    if name is None:
        raise MissingRequiredChild(f"Struct declaration without a name: '{node.text}'")

    members = []
    for child in node.named_children:
        if child.kind == NodeKind.STRUCT_MEMBER:
            members.append(parse_input(child))
        elif child.kind == NodeKind.IDENTIFIER:
            continue
        else:
            raise NodeTypeMismatch(
                f"Unexpected '{child.type}' in struct '{name.text}'"
            )
    return Structure(name.text, tuple(members))
