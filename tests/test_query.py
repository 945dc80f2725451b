"""Tests for pattern queries over the syntax tree."""

import pytest
from wgslr.errors import QuerySyntaxError
from wgslr.parser.query import Query
from wgslr.parser.syntax_tree import parse_wgsl

SOURCE = """
struct A { x: f32 }
@vertex fn vs() {}
struct B { y: u32, z: u32 }
@fragment fn fs(@location(0) c: vec4<f32>) {}
"""


class TestQueryMatching:
    def test_single_kind_in_document_order(self):
        tree = parse_wgsl(SOURCE)
        names = [m["s"].child_by_field_name("name").text
                 for m in tree.query("(struct_declaration) @s")]
        assert names == ["A", "B"]

    def test_matches_are_lazy(self):
        tree = parse_wgsl(SOURCE)
        matches = tree.query("(function_declaration) @f")
        first = next(matches)
        assert first["f"].child_by_field_name("name").text == "vs"

    def test_nested_capture(self):
        tree = parse_wgsl(SOURCE)
        matches = list(tree.query("(function_declaration (attribute) @attr (identifier) @name)"))
        assert [(m["attr"].named_child(0).text, m["name"].text) for m in matches] == [
            ("vertex", "vs"), ("fragment", "fs"),
        ]

    def test_field_pattern(self):
        tree = parse_wgsl(SOURCE)
        matches = list(tree.query("(variable_identifier_declaration type: (type_declaration) @t)"))
        assert [m["t"].text for m in matches] == ["f32", "u32", "u32", "vec4<f32>"]

    def test_child_order_is_respected(self):
        tree = parse_wgsl(SOURCE)
        # the name identifier follows the attributes, never precedes them
        assert list(tree.query("(function_declaration (identifier) (attribute)) @f")) == []

    def test_wildcard(self):
        tree = parse_wgsl("struct A { x: f32 }")
        kinds = [m["n"].type for m in tree.query("(struct_member (_) @n)")]
        assert kinds == ["variable_identifier_declaration"]

    def test_multiple_patterns(self):
        tree = parse_wgsl(SOURCE)
        matches = list(tree.query("(struct_declaration) @s (function_declaration) @f"))
        assert [m.pattern_index for m in matches] == [0, 1, 0, 1]

    def test_query_object_reuse(self):
        query = Query("(struct_member) @m")
        first = list(parse_wgsl(SOURCE).query(query))
        second = list(parse_wgsl("struct C { w: f32 }").query(query))
        assert len(first) == 3
        assert len(second) == 1

    def test_missing_capture(self):
        tree = parse_wgsl(SOURCE)
        match = next(tree.query("(struct_declaration) @s"))
        with pytest.raises(KeyError, match="nope"):
            match["nope"]


class TestQueryErrors:
    def test_unbalanced(self):
        with pytest.raises(QuerySyntaxError):
            Query("(struct_declaration @s")

    def test_unknown_kind(self):
        with pytest.raises(QuerySyntaxError, match="Unknown node kind 'structure'"):
            Query("(structure) @s")
