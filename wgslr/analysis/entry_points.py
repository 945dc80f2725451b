"""Third pass: tag functions with the pipeline stage attributes they carry."""

from __future__ import annotations
from typing import Mapping
from wgslr.analysis.functions import FUNCTION_QUERY
from wgslr.analysis.model import EntryPoints, Function
from wgslr.errors import MissingRequiredChild, ParserInvariantViolation
from wgslr.parser.node_kinds import NodeKind
from wgslr.parser.syntax_tree import SyntaxTree

STAGES = ("vertex", "fragment", "compute")


def classify_entry_points(tree: SyntaxTree, functions: Mapping[str, Function]) -> EntryPoints:
    """Build the vertex/fragment/compute lists in declaration order.

    Must run after extract_functions(): every tagged declaration is looked
    up in the finished function map.
    """
    stages: dict[str, list[Function]] = {stage: [] for stage in STAGES}

    for match in tree.query(FUNCTION_QUERY):
        node = match["func"]
        name_node = node.child_by_field_name("name")
        if name_node is None:
            raise MissingRequiredChild(f"Function declaration without a name: '{node.text}'")
        name = name_node.text

        seen = set()
        for child in node.named_children:
            if child.kind != NodeKind.ATTRIBUTE:
                continue
            stage = child.named_child(0).text
            if stage not in stages or stage in seen:
                continue
            function = functions.get(name)
            if function is None:
                raise ParserInvariantViolation(
                    f"Entry point '{name}' is missing from the function table"
                )
            stages[stage].append(function)
            seen.add(stage)

    return EntryPoints(
        vertex=tuple(stages["vertex"]),
        fragment=tuple(stages["fragment"]),
        compute=tuple(stages["compute"]),
    )
