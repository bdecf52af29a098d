from typing import Annotated, List, Optional, Tuple, Union

import pytest
from pydantic import Field

from telegram_types.bootstrap import build_registry, get_default_registry
from telegram_types.core.exceptions import RegistryError
from telegram_types.schema.entity import INT32_BOUNDS, INT64_BOUNDS, Entity, Int32, Variants
from telegram_types.schema.nodes import (
    EntityRef,
    IntNode,
    ListNode,
    LiteralNode,
    NullableNode,
    StrNode,
    VariantRef,
)
from telegram_types.schema.registry import TypeRegistry


class Point(Entity):
    x: Int32
    y: Int32
    label: Optional[str] = None


class Polyline(Entity):
    points: Tuple[Point, ...]
    closed: bool = False


class Sender(Entity):
    from_user: int = Field(alias="from")


class TreeNode(Entity):
    value: int
    children: Optional[Tuple["TreeNode", ...]] = None


class Circle(Entity):
    kind: str
    radius: float


class Square(Entity):
    kind: str
    side: float


Shape = Annotated[Union[Circle, Square], Variants("Shape")]


class Drawing(Entity):
    shapes: List[Shape]
    background: Optional[Shape] = None


def test_register_entity_compiles_fields():
    registry = TypeRegistry()
    spec = registry.register_entity(Point)

    assert spec.name == "Point"
    assert spec.required_wire == frozenset({"x", "y"})
    assert spec.by_wire["x"].node == IntNode(*INT32_BOUNDS)
    assert spec.by_wire["label"].node == NullableNode(StrNode())
    assert spec.by_wire["label"].required is False


def test_bare_int_is_64_bit():
    registry = TypeRegistry()
    spec = registry.register_entity(TreeNode)

    assert spec.by_wire["value"].node == IntNode(*INT64_BOUNDS)


def test_nested_entities_are_registered_transitively():
    registry = TypeRegistry()
    registry.register_entity(Polyline)

    assert "Point" in registry
    assert registry.entity("Polyline").by_wire["points"].node == ListNode(EntityRef("Point"))
    # A default makes the field optional on the wire.
    assert "closed" not in registry.entity("Polyline").required_wire


def test_alias_becomes_wire_name():
    registry = TypeRegistry()
    spec = registry.register_entity(Sender)

    field = spec.by_wire["from"]
    assert field.name == "from_user"
    assert "from_user" not in spec.by_wire


def test_self_referencing_entity_registers():
    registry = TypeRegistry()
    spec = registry.register_entity(TreeNode)

    assert spec.by_wire["children"].node == NullableNode(ListNode(EntityRef("TreeNode")))


def test_variant_group_alias_registers_members():
    registry = TypeRegistry()
    group = registry.register_group(Shape)

    assert group.name == "Shape"
    assert group.members == ("Circle", "Square")
    assert registry.resolve(Shape) == VariantRef("Shape")
    assert registry.resolve("Shape") == VariantRef("Shape")


def test_group_used_in_fields_keeps_its_name():
    registry = TypeRegistry()
    spec = registry.register_entity(Drawing)

    assert spec.by_wire["shapes"].node == ListNode(VariantRef("Shape"))
    assert spec.by_wire["background"].node == NullableNode(VariantRef("Shape"))
    assert registry.group_names == ("Shape",)


def test_unnamed_union_gets_a_derived_group_name():
    registry = TypeRegistry()
    node = registry.resolve(Union[Circle, Square])

    assert node == VariantRef("Circle | Square")


def test_literal_field_compiles_to_literal_node():
    registry = get_default_registry()

    assert registry.entity("ChatMemberMember").by_wire["status"].node == LiteralNode(("member",))


def test_register_group_rejects_plain_union():
    registry = TypeRegistry()

    with pytest.raises(RegistryError, match="not a Variants-annotated union"):
        registry.register_group(Union[Circle, Square])


def test_register_entity_rejects_non_entities():
    registry = TypeRegistry()

    with pytest.raises(RegistryError, match="not an Entity subclass"):
        registry.register_entity(dict)


def test_unsupported_annotation_raises_and_leaves_no_trace():
    class Loose(Entity):
        payload: dict

    registry = TypeRegistry()

    with pytest.raises(RegistryError, match="Unsupported field annotation"):
        registry.register_entity(Loose)
    assert "Loose" not in registry


def test_duplicate_entity_name_raises():
    registry = TypeRegistry()
    registry.register_entity(Point)

    class Point2(Entity):
        x: int

    with pytest.raises(RegistryError, match="already registered"):
        registry.register_entity(Point2, name="Point")


def test_frozen_registry_rejects_registration():
    registry = TypeRegistry()
    registry.register_entity(Point)
    registry.freeze()

    assert registry.frozen
    with pytest.raises(RegistryError, match="frozen"):
        registry.register_entity(Polyline)


def test_frozen_registry_rejects_unknown_targets():
    registry = TypeRegistry()
    registry.register_entity(Point)
    registry.freeze()

    with pytest.raises(RegistryError, match="not registered and the registry is frozen"):
        registry.resolve(Polyline)
    with pytest.raises(RegistryError, match="No entity or variant group registered"):
        registry.resolve("Polyline")


def test_lookup_errors_name_the_missing_type():
    registry = TypeRegistry().freeze()

    with pytest.raises(RegistryError, match="name='Nope'"):
        registry.entity("Nope")
    with pytest.raises(RegistryError, match="name='Nope'"):
        registry.group("Nope")
    assert registry.try_entity("Nope") is None


def test_resolve_type_expressions():
    registry = TypeRegistry()
    registry.register_entity(Point)

    assert registry.resolve(List[Point]) == ListNode(EntityRef("Point"))
    assert registry.resolve(Optional[Point]) == NullableNode(EntityRef("Point"))
    assert registry.resolve("Point[]") == ListNode(EntityRef("Point"))
    assert registry.resolve("Point[][]") == ListNode(ListNode(EntityRef("Point")))


def test_spec_for_returns_registered_spec():
    registry = TypeRegistry()
    registry.register_entity(Point, name="Vertex")

    assert registry.spec_for(Point).name == "Vertex"
    with pytest.raises(RegistryError, match="is not registered"):
        registry.spec_for(Polyline)


def test_default_registry_is_frozen_and_shared():
    registry = get_default_registry()

    assert registry.frozen
    assert get_default_registry() is registry
    for name in (
        "Update",
        "Message",
        "Chat",
        "User",
        "CallbackQuery",
        "InlineQuery",
        "ChatMemberUpdated",
        "ResponseEnvelope",
    ):
        assert name in registry.entity_names
    for name in (
        "ChatMember",
        "InlineKeyboardButton",
        "InputMessageContent",
        "InlineQueryResult",
        "ReplyMarkup",
        "InputMedia",
    ):
        assert name in registry.group_names


def test_build_registry_returns_independent_instances():
    first = build_registry()
    second = build_registry()

    assert first is not second
    assert first.entity_names == second.entity_names
    assert first.frozen and second.frozen
