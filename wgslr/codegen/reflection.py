"""Reflection metadata emitter.

Serializes a Reflection into a JSON sidecar so pipeline tooling can build
bind group layouts and vertex layouts without parsing WGSL itself.
"""

from __future__ import annotations

import json
from wgslr.analysis.model import Binding, Function, Input, Reflection, Structure


def generate_reflection(reflection: Reflection, source_name: str = "") -> dict:
    """Generate the reflection metadata dict.

    Args:
        reflection: The reflected module.
        source_name: Original .wgsl filename for metadata.

    Returns:
        A dict matching the .reflect.json schema.
    """
    entry_points = reflection.entry_points
    return {
        "version": 1,
        "source": source_name,
        "structures": [_reflect_structure(s) for s in reflection.structures.values()],
        "functions": [_reflect_function(f) for f in reflection.functions.values()],
        "entry_points": {
            "vertex": [f.name for f in entry_points.vertex],
            "fragment": [f.name for f in entry_points.fragment],
            "compute": [f.name for f in entry_points.compute],
        },
        "bindings": [_reflect_binding(b) for b in reflection.bindings],
    }


def emit_reflection_json(reflection: dict) -> str:
    """Serialize reflection metadata to a JSON string."""
    return json.dumps(reflection, indent=2, sort_keys=False) + "\n"


def _reflect_input(inp: Input) -> dict:
    return {
        "name": inp.name,
        "type": inp.type,
        "attributes": {a.name: a.value for a in inp.attributes},
    }


def _reflect_structure(s: Structure) -> dict:
    return {
        "name": s.name,
        "members": [_reflect_input(m) for m in s.members],
    }


def _reflect_function(f: Function) -> dict:
    return {
        "name": f.name,
        "attributes": dict(f.attributes),
        "inputs": [_reflect_input(i) for i in f.inputs],
        "return_type": f.return_type,
    }


def _reflect_binding(b: Binding) -> dict:
    return {
        "group": b.group,
        "binding": b.binding,
        "name": b.name,
        "type": b.type,
        "binding_type": b.binding_type,
    }
