"""Compiled type nodes.

A registry turns entity annotations into these immutable nodes once; the
decoder only ever walks nodes, never raw ``typing`` objects. Entity and
variant references are by name so self-referencing types (a ``Message``
replying to a ``Message``) stay finite.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Tuple, Type, Union


@dataclass(frozen=True)
class StrNode:
    def describe(self) -> str:
        return "string"


@dataclass(frozen=True)
class BoolNode:
    def describe(self) -> str:
        return "boolean"


@dataclass(frozen=True)
class FloatNode:
    def describe(self) -> str:
        return "number"


@dataclass(frozen=True)
class IntNode:
    low: int
    high: int

    def describe(self) -> str:
        return "integer"


@dataclass(frozen=True)
class LiteralNode:
    values: Tuple[Any, ...]

    def describe(self) -> str:
        return " | ".join(repr(v) for v in self.values)


@dataclass(frozen=True)
class EnumNode:
    enum: Type[Enum]

    def describe(self) -> str:
        return self.enum.__name__


@dataclass(frozen=True)
class ListNode:
    item: "TypeNode"

    def describe(self) -> str:
        return f"list of {self.item.describe()}"


@dataclass(frozen=True)
class NullableNode:
    inner: "TypeNode"

    def describe(self) -> str:
        return f"{self.inner.describe()} or null"


@dataclass(frozen=True)
class EntityRef:
    name: str

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class VariantRef:
    name: str

    def describe(self) -> str:
        return self.name


TypeNode = Union[
    StrNode,
    BoolNode,
    FloatNode,
    IntNode,
    LiteralNode,
    EnumNode,
    ListNode,
    NullableNode,
    EntityRef,
    VariantRef,
]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    wire_name: str
    node: TypeNode
    required: bool


@dataclass(frozen=True)
class EntitySpec:
    name: str
    model: type
    fields: Tuple[FieldSpec, ...]
    by_wire: Mapping[str, FieldSpec] = field(init=False, repr=False, compare=False)
    required_wire: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "by_wire", MappingProxyType({f.wire_name: f for f in self.fields})
        )
        object.__setattr__(
            self, "required_wire", frozenset(f.wire_name for f in self.fields if f.required)
        )


@dataclass(frozen=True)
class VariantGroupSpec:
    name: str
    members: Tuple[str, ...]
