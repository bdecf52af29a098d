"""Structural resolution of variant groups.

The wire format carries no tag for these groups, so a member is chosen from
the shape of the document:

1. a member is a candidate when all of its required fields are present and
   no present field it declares has an incompatible JSON kind (or literal);
2. a single candidate wins;
3. among several, the candidate whose required fields are a strict superset
   of every other candidate's wins (most specific);
4. anything else is an error. Declaration order never breaks a tie.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, List

from telegram_types.core.exceptions import AmbiguousVariant, NoMatchingVariant
from telegram_types.schema.entity import TolerantEnum
from telegram_types.schema.nodes import (
    BoolNode,
    EntityRef,
    EntitySpec,
    EnumNode,
    FloatNode,
    IntNode,
    ListNode,
    LiteralNode,
    NullableNode,
    StrNode,
    TypeNode,
    VariantGroupSpec,
    VariantRef,
)
from telegram_types.schema.registry import TypeRegistry


def literal_matches(node: LiteralNode, value: Any) -> bool:
    # 1 == True in Python, so compare types as well.
    return any(value == v and type(value) is type(v) for v in node.values)


def shallow_compatible(node: TypeNode, value: Any) -> bool:
    """Whether ``value`` has the right JSON kind for ``node``, without recursing."""
    if isinstance(node, NullableNode):
        return value is None or shallow_compatible(node.inner, value)
    if value is None:
        return False
    if isinstance(node, IntNode):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(node, FloatNode):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if isinstance(node, StrNode):
        return isinstance(value, str)
    if isinstance(node, BoolNode):
        return isinstance(value, bool)
    if isinstance(node, LiteralNode):
        return literal_matches(node, value)
    if isinstance(node, EnumNode):
        if issubclass(node.enum, TolerantEnum):
            return isinstance(value, str)
        return any(value == member.value for member in node.enum)
    if isinstance(node, ListNode):
        return isinstance(value, (list, tuple))
    if isinstance(node, (EntityRef, VariantRef)):
        return isinstance(value, Mapping)
    return False


def accepts_shape(spec: EntitySpec, document: Mapping) -> bool:
    if not spec.required_wire.issubset(document.keys()):
        return False
    for key, value in document.items():
        field = spec.by_wire.get(key)
        if field is not None and not shallow_compatible(field.node, value):
            return False
    return True


def select_member(
    registry: TypeRegistry,
    group: VariantGroupSpec,
    document: Mapping,
    path: str,
) -> EntitySpec:
    """Pick the single member of ``group`` that fits ``document``."""
    candidates: List[EntitySpec] = [
        spec
        for spec in (registry.entity(name) for name in group.members)
        if accepts_shape(spec, document)
    ]

    if not candidates:
        raise NoMatchingVariant(path, group.name, document.keys())
    if len(candidates) == 1:
        return candidates[0]

    for candidate in candidates:
        if all(
            candidate.required_wire > other.required_wire
            for other in candidates
            if other is not candidate
        ):
            return candidate

    raise AmbiguousVariant(path, group.name, [c.name for c in candidates])


def enum_member(enum: type, value: Any) -> Enum:
    """Look up ``value`` in ``enum``; ``ValueError`` when it is not a member."""
    if isinstance(value, bool):
        raise ValueError(value)
    return enum(value)
