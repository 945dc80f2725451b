"""Concrete syntax tree for WGSL source, built with Lark.

The grammar keeps every token, so each rule becomes a named node and each
keyword or punctuation token an anonymous one. SyntaxNode wraps the Lark
objects with the navigation the extractors need: positional and field
access, sibling links, and the source text a node spans.
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterator
from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from wgslr.errors import ShaderSyntaxError
from wgslr.parser.node_kinds import NodeKind, FIELDS
from wgslr.parser.query import Query, QueryMatch

_GRAMMAR_PATH = Path(__file__).parent.parent / "grammar" / "wgsl.lark"

_parser = Lark(
    _GRAMMAR_PATH.read_text(encoding="utf-8"),
    start="translation_unit",
    parser="lalr",
    lexer="contextual",
    keep_all_tokens=True,
    propagate_positions=True,
)

# Tokens from these terminals report the terminal name as their type;
# every other token reports its literal text.
_PATTERN_TERMINALS = frozenset({
    "IDENT", "INT_LITERAL", "FLOAT_LITERAL", "STRING", "BODY_TEXT",
})


class SyntaxNode:
    __slots__ = ("tree", "parent", "_item", "_index", "_children")

    def __init__(self, tree: SyntaxTree, item: Tree | Token,
                 parent: SyntaxNode | None = None, index: int = 0):
        self.tree = tree
        self.parent = parent
        self._item = item
        self._index = index
        self._children: list[SyntaxNode] | None = None

    # --- Identity ---

    @property
    def is_named(self) -> bool:
        return isinstance(self._item, Tree)

    @property
    def type(self) -> str:
        if isinstance(self._item, Tree):
            return str(self._item.data)
        if self._item.type in _PATTERN_TERMINALS:
            return self._item.type
        return str(self._item)

    @property
    def kind(self) -> NodeKind:
        if isinstance(self._item, Tree):
            return NodeKind(str(self._item.data))
        return NodeKind.ANONYMOUS

    # --- Source span ---

    @property
    def start_pos(self) -> int:
        return self._span()[0]

    @property
    def end_pos(self) -> int:
        return self._span()[1]

    @property
    def start_byte(self) -> int:
        return self.tree.byte_offset(self.start_pos)

    @property
    def end_byte(self) -> int:
        return self.tree.byte_offset(self.end_pos)

    @property
    def text(self) -> str:
        start, end = self._span()
        return self.tree.source[start:end]

    def _span(self) -> tuple[int, int]:
        if isinstance(self._item, Token):
            return self._item.start_pos, self._item.end_pos
        meta = self._item.meta
        if meta.empty:
            # Only the root can be empty (source with no declarations)
            return 0, len(self.tree.source)
        return meta.start_pos, meta.end_pos

    # --- Children ---

    @property
    def children(self) -> list[SyntaxNode]:
        if self._children is None:
            if isinstance(self._item, Tree):
                self._children = [
                    SyntaxNode(self.tree, c, self, i)
                    for i, c in enumerate(self._item.children)
                ]
            else:
                self._children = []
        return self._children

    @property
    def named_children(self) -> list[SyntaxNode]:
        return [c for c in self.children if c.is_named]

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def named_child_count(self) -> int:
        return len(self.named_children)

    def child(self, i: int) -> SyntaxNode:
        if not 0 <= i < self.child_count:
            raise IndexError(f"Out of range child index {i} on '{self.type}'")
        return self.children[i]

    def named_child(self, i: int) -> SyntaxNode:
        named = self.named_children
        if not 0 <= i < len(named):
            raise IndexError(f"Out of range named child index {i} on '{self.type}'")
        return named[i]

    def child_by_field_name(self, field: str) -> SyntaxNode | None:
        fields = FIELDS.get(self.kind, {})
        if field not in fields:
            return None
        return self.first_child_of_kind(fields[field])

    def first_child_of_kind(self, kind: NodeKind) -> SyntaxNode | None:
        for c in self.children:
            if c.kind == kind:
                return c
        return None

    # --- Siblings ---

    @property
    def next_sibling(self) -> SyntaxNode | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        if self._index + 1 < len(siblings):
            return siblings[self._index + 1]
        return None

    @property
    def prev_sibling(self) -> SyntaxNode | None:
        if self.parent is None or self._index == 0:
            return None
        return self.parent.children[self._index - 1]

    @property
    def next_named_sibling(self) -> SyntaxNode | None:
        node = self.next_sibling
        while node is not None and not node.is_named:
            node = node.next_sibling
        return node

    @property
    def prev_named_sibling(self) -> SyntaxNode | None:
        node = self.prev_sibling
        while node is not None and not node.is_named:
            node = node.prev_sibling
        return node

    # --- Traversal ---

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def sexp(self) -> str:
        """S-expression of the named nodes below this one."""
        if not self.is_named:
            return ""
        inner = [c.sexp() for c in self.named_children]
        if not inner:
            return f"({self.type} {self.text!r})"
        return f"({self.type} {' '.join(inner)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self.tree is other.tree and self._item is other._item

    def __hash__(self) -> int:
        return hash((id(self.tree), id(self._item)))

    def __repr__(self) -> str:
        return f"<SyntaxNode {self.type} [{self.start_byte}, {self.end_byte})>"


class SyntaxTree:
    def __init__(self, source: str, root: Tree):
        self.source = source
        self.root_node = SyntaxNode(self, root)

    def byte_offset(self, pos: int) -> int:
        return len(self.source[:pos].encode("utf-8"))

    def query(self, pattern: str | Query) -> Iterator[QueryMatch]:
        """Run a pattern query; matches are produced lazily in document order."""
        if isinstance(pattern, str):
            pattern = Query(pattern)
        return pattern.matches(self.root_node)


def parse_wgsl(source: str) -> SyntaxTree:
    try:
        root = _parser.parse(source)
    except UnexpectedInput as e:
        detail = str(e).strip().splitlines()[0] if str(e).strip() else type(e).__name__
        raise ShaderSyntaxError(
            f"Syntax error at line {e.line}, column {e.column}: {detail}",
            e.line, e.column,
        ) from e
    return SyntaxTree(source, root)
