"""Tests for struct extraction and the shared input decoder."""

import pytest
from wgslr.analysis.inputs import parse_input
from wgslr.analysis.model import Input, InputAttribute
from wgslr.analysis.structures import build_structure, extract_structures
from wgslr.errors import MissingRequiredChild, NodeTypeMismatch
from wgslr.parser.node_kinds import NodeKind
from wgslr.parser.syntax_tree import parse_wgsl


def _structures(src):
    return extract_structures(parse_wgsl(src))


class TestStructureExtraction:
    def test_members_in_source_order(self):
        s = _structures("struct S { c: f32, a: vec2<f32>, b: u32, }")["S"]
        assert s.name == "S"
        assert [m.name for m in s.members] == ["c", "a", "b"]
        assert [m.type for m in s.members] == ["f32", "vec2<f32>", "u32"]

    def test_member_count(self):
        fields = ", ".join(f"m{i}: f32" for i in range(12))
        s = _structures(f"struct Big {{ {fields} }}")["Big"]
        assert len(s.members) == 12

    def test_member_attributes(self):
        src = """
        struct VertexOutput {
            @builtin(position) clip: vec4<f32>,
            @location(0) @interpolate(flat) id: u32,
            @invariant pos: vec4<f32>,
        }
        """
        members = _structures(src)["VertexOutput"].members
        assert members[0].attributes == (InputAttribute("builtin", "position"),)
        assert members[1].attributes == (
            InputAttribute("location", "0"),
            InputAttribute("interpolate", "flat"),
        )
        assert members[1].attribute("interpolate") == "flat"
        assert members[1].attribute("builtin") is None
        assert members[2].attributes == (InputAttribute("invariant", ""),)

    def test_several_structs(self):
        structures = _structures("struct A { x: f32 } struct B { a: A }")
        assert list(structures) == ["A", "B"]
        assert structures["B"].members == (Input("a", "A"),)

    def test_duplicate_name_last_wins(self):
        # Intentional: a redeclaration silently replaces the earlier struct
        structures = _structures("struct A { x: f32 } struct A { y: u32, z: u32 }")
        assert len(structures) == 1
        assert [m.name for m in structures["A"].members] == ["y", "z"]

    def test_no_structs(self):
        assert _structures("fn main() {}") == {}


class TestNodeValidation:
    def test_wrong_node_kind(self):
        tree = parse_wgsl("fn main() {}")
        fn = tree.root_node.named_child(0)
        with pytest.raises(NodeTypeMismatch, match="struct_declaration"):
            build_structure(fn)

    def test_input_rejects_unexpected_child(self):
        tree = parse_wgsl("struct A { x: f32 }")
        struct = tree.root_node.named_child(0)
        # A struct declaration is not a member: its identifier is unexpected here
        with pytest.raises(NodeTypeMismatch):
            parse_input(struct)

    def test_input_from_parameter(self):
        tree = parse_wgsl("fn f(@location(2) uv: vec2<f32>) {}")
        param = next(n for n in tree.root_node.walk() if n.kind == NodeKind.PARAMETER)
        assert parse_input(param) == Input(
            "uv", "vec2<f32>", (InputAttribute("location", "2"),)
        )

    def test_input_without_declaration(self):
        tree = parse_wgsl("fn f() {}")
        body = next(n for n in tree.root_node.walk() if n.kind == NodeKind.COMPOUND_STATEMENT)
        with pytest.raises(MissingRequiredChild, match="has no name"):
            parse_input(body)
