"""Declarative pattern queries over the WGSL syntax tree.

Patterns are S-expressions naming node kinds, optionally nesting child
patterns (matched in order against direct named children, or against a
field with ``field: (...)``) and binding matched nodes to captures with
``@name``. ``_`` matches any named node.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Iterator
from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput

from wgslr.errors import QuerySyntaxError
from wgslr.parser.node_kinds import NodeKind

if TYPE_CHECKING:
    from wgslr.parser.syntax_tree import SyntaxNode

_GRAMMAR_PATH = Path(__file__).parent.parent / "grammar" / "query.lark"

_parser = Lark(
    _GRAMMAR_PATH.read_text(encoding="utf-8"),
    start="patterns",
    parser="lalr",
)

_KNOWN_KINDS = frozenset(k.value for k in NodeKind if k is not NodeKind.ANONYMOUS)


@dataclass(frozen=True)
class Pattern:
    kind: str
    children: tuple[Pattern, ...] = ()
    field: str | None = None
    capture: str | None = None


@dataclass(frozen=True)
class QueryMatch:
    pattern_index: int
    captures: dict[str, SyntaxNode] = field(default_factory=dict)

    def __getitem__(self, name: str) -> SyntaxNode:
        try:
            return self.captures[name]
        except KeyError:
            raise KeyError(f"No capture named '{name}' in match") from None


class _PatternBuilder(Transformer):
    def patterns(self, args):
        return list(args)

    def pattern(self, args):
        kind = str(args[0])
        children = []
        capture = None
        for a in args[1:]:
            if isinstance(a, Pattern):
                children.append(a)
            else:
                capture = a
        return Pattern(kind, tuple(children), capture=capture)

    def field_pattern(self, args):
        return replace(args[1], field=str(args[0]))

    def capture(self, args):
        return str(args[0])


class Query:
    def __init__(self, source: str):
        self.source = source
        try:
            tree = _parser.parse(source)
        except UnexpectedInput as e:
            raise QuerySyntaxError(
                f"Invalid query pattern at column {e.column}: {source!r}"
            ) from e
        self.patterns: list[Pattern] = _PatternBuilder().transform(tree)
        for p in self.patterns:
            _check_kinds(p)

    def matches(self, root: SyntaxNode) -> Iterator[QueryMatch]:
        for node in root.walk():
            if not node.is_named:
                continue
            for index, pattern in enumerate(self.patterns):
                captures: dict[str, SyntaxNode] = {}
                if _match(pattern, node, captures):
                    yield QueryMatch(index, captures)


def _check_kinds(pattern: Pattern) -> None:
    if pattern.kind != "_" and pattern.kind not in _KNOWN_KINDS:
        raise QuerySyntaxError(f"Unknown node kind '{pattern.kind}' in query")
    for child in pattern.children:
        _check_kinds(child)


def _match(pattern: Pattern, node: SyntaxNode, captures: dict[str, SyntaxNode]) -> bool:
    if not node.is_named:
        return False
    if pattern.kind != "_" and node.type != pattern.kind:
        return False

    local: dict[str, SyntaxNode] = {}
    candidates = node.named_children
    pos = 0
    for child_pattern in pattern.children:
        if child_pattern.field is not None:
            target = node.child_by_field_name(child_pattern.field)
            if target is None or not _match(child_pattern, target, local):
                return False
            continue
        # Ordered, non-overlapping assignment to the remaining named children
        while pos < len(candidates):
            trial: dict[str, SyntaxNode] = {}
            candidate = candidates[pos]
            pos += 1
            if _match(child_pattern, candidate, trial):
                local.update(trial)
                break
        else:
            return False

    if pattern.capture is not None:
        local[pattern.capture] = node
    captures.update(local)
    return True
