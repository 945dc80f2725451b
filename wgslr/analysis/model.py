"""Reflection model: the read-only result of reflecting a WGSL module."""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class InputAttribute:
    name: str
    value: str


@dataclass(frozen=True)
class Input:
    """A struct member or function parameter."""
    name: str
    type: str
    attributes: tuple[InputAttribute, ...] = ()

    def attribute(self, name: str) -> Optional[str]:
        for attr in self.attributes:
            if attr.name == name:
                return attr.value
        return None


@dataclass(frozen=True)
class Structure:
    name: str
    members: tuple[Input, ...] = ()


@dataclass(frozen=True)
class Function:
    name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    inputs: tuple[Input, ...] = ()  # struct-typed parameters already flattened
    return_type: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)


@dataclass(frozen=True)
class EntryPoints:
    vertex: tuple[Function, ...] = ()
    fragment: tuple[Function, ...] = ()
    compute: tuple[Function, ...] = ()


@dataclass(frozen=True)
class Binding:
    group: int
    binding: int
    name: str
    type: str
    binding_type: str  # "buffer" for uniform/storage, else the resource type name


@dataclass(frozen=True)
class Reflection:
    structures: Mapping[str, Structure] = field(default_factory=dict)
    functions: Mapping[str, Function] = field(default_factory=dict)
    entry_points: EntryPoints = field(default_factory=EntryPoints)
    bindings: tuple[Binding, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "structures", MappingProxyType(dict(self.structures)))
        object.__setattr__(self, "functions", MappingProxyType(dict(self.functions)))

    def structure(self, name: str) -> Optional[Structure]:
        return self.structures.get(name)

    def function(self, name: str) -> Optional[Function]:
        return self.functions.get(name)

    def vertex(self, i: int) -> Function:
        return _entry_at(self.entry_points.vertex, i, "vertex")

    def fragment(self, i: int) -> Function:
        return _entry_at(self.entry_points.fragment, i, "fragment")

    def compute(self, i: int) -> Function:
        return _entry_at(self.entry_points.compute, i, "compute")


def _entry_at(entries: tuple[Function, ...], i: int, stage: str) -> Function:
    if not 0 <= i < len(entries):
        raise IndexError(
            f"{stage} entry point index {i} out of range ({len(entries)} available)"
        )
    return entries[i]
