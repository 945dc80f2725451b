"""Top-level reflection orchestration."""

from __future__ import annotations
from pathlib import Path
from wgslr.parser.syntax_tree import parse_wgsl
from wgslr.analysis.model import Reflection
from wgslr.analysis.structures import extract_structures
from wgslr.analysis.functions import extract_functions
from wgslr.analysis.entry_points import classify_entry_points
from wgslr.analysis.bindings import extract_bindings


def reflect(source: str) -> Reflection:
    """Reflect WGSL source text.

    Passes run in dependency order: structures, then functions (which
    flatten struct-typed parameters), then entry points (which look up the
    finished functions). Bindings are independent. Any error aborts the
    whole reflection; no partial model is returned.
    """
    tree = parse_wgsl(source)

    structures = extract_structures(tree)
    functions = extract_functions(tree, structures)
    entry_points = classify_entry_points(tree, functions)
    bindings = extract_bindings(tree)

    return Reflection(
        structures=structures,
        functions=functions,
        entry_points=entry_points,
        bindings=bindings,
    )


def reflect_file(path: str | Path) -> Reflection:
    return reflect(Path(path).read_text(encoding="utf-8"))
