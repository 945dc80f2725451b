"""Resource bindings: module-scope `var` declarations with @group/@binding.

Independent of the other passes. The binding category comes from the
address space (uniform/storage buffers) or, for handle types such as
textures and samplers, from the declared type name itself.
"""

from __future__ import annotations
import re
from wgslr.analysis.inputs import identifier_declaration
from wgslr.analysis.model import Binding
from wgslr.errors import (
    MalformedBinding, MissingRequiredChild, NodeTypeMismatch,
    UnparsableTypeDeclaration, UnsupportedAddressSpace, UnsupportedLiteralType,
)
from wgslr.parser.node_kinds import NodeKind
from wgslr.parser.query import Query
from wgslr.parser.syntax_tree import SyntaxNode, SyntaxTree

_GLOBAL_QUERY = Query("(global_variable_declaration) @global")

_BUFFER_ADDRESS_SPACES = frozenset({"uniform", "storage"})

# texture_2d<f32>, sampler, ...
_HANDLE_TYPE_RE = re.compile(r"^(\w+) ?(?:<(\w+)>)?$")


def extract_bindings(tree: SyntaxTree) -> tuple[Binding, ...]:
    """All module-scope variables in declaration order."""
    return tuple(build_binding(m["global"]) for m in tree.query(_GLOBAL_QUERY))


def build_binding(node: SyntaxNode) -> Binding:
    if node.kind != NodeKind.GLOBAL_VARIABLE_DECLARATION:
        raise NodeTypeMismatch(f"Expected global_variable_declaration, got '{node.type}'")

    fields: dict[str, object] = {
        "group": None,
        "binding": None,
        "name": None,
        "type": None,
        "binding_type": None,
    }

    for child in node.named_children:
        if child.kind == NodeKind.ATTRIBUTE:
            attr_name = child.named_child(0).text
            if attr_name in ("group", "binding"):
                fields[attr_name] = _int_attribute(child, attr_name)
        elif child.kind == NodeKind.VARIABLE_DECLARATION:
            _read_variable_declaration(child, fields)
        else:
            continue  # initializer expression

    missing = [k for k, v in fields.items() if v is None]
    if missing:
        raise MalformedBinding(
            f"Global '{node.text}' is missing: {', '.join(missing)}"
        )
    return Binding(**fields)


def _int_attribute(node: SyntaxNode, attr_name: str) -> int:
    if node.named_child_count < 2:
        raise MissingRequiredChild(f"@{attr_name} requires a value")
    value = node.named_child(1)
    if value.kind != NodeKind.INT_LITERAL:
        raise UnsupportedLiteralType(
            f"{attr_name} value of type {value.type} unsupported: {value.text}"
        )
    # Decimal, plus 0x hex; suffixes are i/u only so stripping them keeps hex digits
    digits = value.text.rstrip("iu")
    if digits[:2] in ("0x", "0X"):
        return int(digits[2:], 16)
    return int(digits, 10)


def _read_variable_declaration(node: SyntaxNode, fields: dict[str, object]) -> None:
    qualifier = node.child_by_field_name("qualifier")
    if qualifier is not None:
        address_space = qualifier.child_by_field_name("address_space")
        if address_space is not None:
            if address_space.text not in _BUFFER_ADDRESS_SPACES:
                raise UnsupportedAddressSpace(
                    f"Unknown address_space: {address_space.text}"
                )
            fields["binding_type"] = "buffer"
        # access_mode (read, read_write, ...) has no bearing on reflection

    idecl = node.first_child_of_kind(NodeKind.VARIABLE_IDENTIFIER_DECLARATION)
    if idecl is None:
        return
    fields["name"], type_text = identifier_declaration(idecl)
    type_decl = idecl.child_by_field_name("type")

    if fields["binding_type"] is None:
        match = _HANDLE_TYPE_RE.match(type_text)
        if match is None:
            raise UnparsableTypeDeclaration(f"Unable to parse type decl: {type_text}")
        fields["binding_type"] = match.group(1)
        fields["type"] = match.group(1)
    else:
        # Buffer element type: first template argument or the named type itself
        named = type_decl.named_children
        fields["type"] = named[0].text if named else type_decl.text
