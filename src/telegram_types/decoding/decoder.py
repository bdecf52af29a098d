from __future__ import annotations

import json
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple, Union

from telegram_types.bootstrap import get_default_registry
from telegram_types.core.exceptions import (
    IntegerOutOfRange,
    MalformedInput,
    MissingRequiredField,
    NestingTooDeep,
    TypeMismatch,
    UnknownField,
)
from telegram_types.core.logger import get_logger
from telegram_types.decoding.variants import enum_member, literal_matches, select_member
from telegram_types.models.decoder_config import DecoderConfig
from telegram_types.schema.entity import Entity, FrozenDict, TolerantEnum
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
    VariantRef,
)
from telegram_types.schema.registry import TypeRegistry

logger = get_logger(__name__)


def json_kind(value: Any) -> str:
    """Name the JSON kind of a parsed value for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"


@dataclass(frozen=True)
class Decoded:
    """Result of one decoding pass.

    ``value`` is the immutable typed tree. ``unknown_fields`` lists the paths
    of every undeclared field found in the document (empty unless the
    unknown-field policy is ``preserve`` or ``ignore``), in document order.
    """

    value: Any
    target: str
    unknown_fields: Tuple[str, ...] = ()

    @property
    def has_drift(self) -> bool:
        return bool(self.unknown_fields)


class _DecodePass:
    """State for a single ``Decoder.decode`` call; never shared between calls."""

    def __init__(self, registry: TypeRegistry, config: DecoderConfig):
        self.registry = registry
        self.config = config
        self.unknown: List[str] = []
        self.depth = 0

    def decode(self, node: TypeNode, value: Any, path: str) -> Any:
        if isinstance(node, NullableNode):
            if value is None:
                return None
            return self.decode(node.inner, value, path)

        if value is None:
            raise TypeMismatch(path, expected=node.describe(), actual="null")

        if isinstance(node, IntNode):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeMismatch(path, expected=node.describe(), actual=json_kind(value))
            if not node.low <= value <= node.high:
                raise IntegerOutOfRange(path, value, (node.low, node.high))
            return value

        if isinstance(node, FloatNode):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeMismatch(path, expected=node.describe(), actual=json_kind(value))
            try:
                return float(value)
            except OverflowError:
                raise TypeMismatch(
                    path, expected=node.describe(), actual="integer out of float range"
                ) from None

        if isinstance(node, StrNode):
            if not isinstance(value, str):
                raise TypeMismatch(path, expected=node.describe(), actual=json_kind(value))
            return value

        if isinstance(node, BoolNode):
            if not isinstance(value, bool):
                raise TypeMismatch(path, expected=node.describe(), actual=json_kind(value))
            return value

        if isinstance(node, LiteralNode):
            if not literal_matches(node, value):
                raise TypeMismatch(path, expected=node.describe(), actual=repr(value))
            return value

        if isinstance(node, EnumNode):
            return self.decode_enum(node, value, path)

        if isinstance(node, ListNode):
            if not isinstance(value, (list, tuple)):
                raise TypeMismatch(path, expected=node.describe(), actual=json_kind(value))
            with self.nested(path):
                return tuple(
                    self.decode(node.item, item, index_path(path, i)) for i, item in enumerate(value)
                )

        if isinstance(node, EntityRef):
            return self.decode_entity(self.registry.entity(node.name), value, path)

        if isinstance(node, VariantRef):
            group = self.registry.group(node.name)
            if not isinstance(value, Mapping):
                raise TypeMismatch(path, expected=group.name, actual=json_kind(value))
            member = select_member(self.registry, group, value, path)
            return self.decode_entity(member, value, path)

        raise TypeError(f"Unsupported type node {node!r}")

    def decode_enum(self, node: EnumNode, value: Any, path: str) -> Any:
        tolerant = issubclass(node.enum, TolerantEnum)
        if tolerant and not isinstance(value, str):
            raise TypeMismatch(path, expected=node.describe(), actual=json_kind(value))
        try:
            member = enum_member(node.enum, value)
        except ValueError:
            raise TypeMismatch(path, expected=node.describe(), actual=repr(value)) from None
        if tolerant and not member.is_known and self.config.unknown_enum_values == "forbid":
            raise TypeMismatch(
                path,
                expected=node.describe(),
                actual=repr(value),
                message=f"unknown {node.describe()} value {value!r}",
            )
        return member

    def decode_entity(self, spec: EntitySpec, document: Any, path: str) -> Entity:
        if not isinstance(document, Mapping):
            raise TypeMismatch(path, expected=spec.name, actual=json_kind(document))
        with self.nested(path):
            return self._decode_fields(spec, document, path)

    def _decode_fields(self, spec: EntitySpec, document: Mapping, path: str) -> Entity:
        values: Dict[str, Any] = {}
        fields_set: Set[str] = set()
        for field in spec.fields:
            field_path = child_path(path, field.wire_name)
            if field.wire_name not in document:
                if field.required:
                    raise MissingRequiredField(field_path)
                continue
            values[field.name] = self.decode(field.node, document[field.wire_name], field_path)
            fields_set.add(field.name)

        extra: Dict[str, Any] = {}
        for key, raw in document.items():
            if key in spec.by_wire:
                continue
            if self.config.unknown_fields == "forbid":
                raise UnknownField(child_path(path, key), key)
            self.unknown.append(child_path(path, key))
            if self.config.unknown_fields == "preserve":
                extra[key] = self.freeze(raw, child_path(path, key))

        instance = spec.model.model_construct(_fields_set=fields_set, **values)
        # Set after construction so an undeclared key can never shadow a field.
        object.__setattr__(instance, "__pydantic_extra__", FrozenDict(extra))
        return instance

    def freeze(self, raw: Any, path: str) -> Any:
        """Copy a preserved raw value into read-only containers."""
        if isinstance(raw, Mapping):
            with self.nested(path):
                return FrozenDict(
                    (key, self.freeze(item, child_path(path, key))) for key, item in raw.items()
                )
        if isinstance(raw, (list, tuple)):
            with self.nested(path):
                return tuple(self.freeze(item, index_path(path, i)) for i, item in enumerate(raw))
        return raw

    @contextmanager
    def nested(self, path: str) -> Iterator[None]:
        if self.depth >= self.config.max_depth:
            raise NestingTooDeep(path, self.config.max_depth)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1


class Decoder:
    """
    Maps parsed documents onto registered entity types.

    A decoder holds only read-only references (a frozen registry and an
    immutable config), so one instance can serve any number of threads.

    Example:
        >>> decoder = Decoder(config=DecoderConfig.strict())
        >>> decoded = decoder.decode({"id": 1, "is_bot": False, "first_name": "A"}, User)
        >>> decoded.value.first_name
        'A'
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        config: Optional[DecoderConfig] = None,
    ):
        self.registry = registry or get_default_registry()
        self.config = config or DecoderConfig()

    def decode(self, document: Any, target: Any, *, path: str = "") -> Decoded:
        """
        Decode ``document`` as ``target``.

        Args:
            document: Parsed JSON tree (dicts, lists, scalars).
            target: Entity class, registered name, variant alias, or a type
                    expression over them such as ``List[Update]``.
            path: Prefix for error and unknown-field paths, e.g. ``"result"``.

        Returns:
            Decoded value plus the paths of unknown fields.

        Raises:
            DecodeError: On the first field that does not fit the schema.
            RegistryError: If ``target`` is not known to the registry.
        """
        node = self.registry.resolve(target)
        run = _DecodePass(self.registry, self.config)
        value = run.decode(node, document, path)
        if run.unknown:
            logger.debug(f"Decoded {node.describe()} with unknown fields: {run.unknown}")
        return Decoded(value=value, target=node.describe(), unknown_fields=tuple(run.unknown))

    def decode_json(self, raw: Union[str, bytes, bytearray], target: Any) -> Decoded:
        """Parse ``raw`` JSON text and decode it; syntax errors become ``MalformedInput``."""
        try:
            document = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedInput(str(exc)) from exc
        return self.decode(document, target)


def decode(
    document: Any,
    target: Any,
    *,
    config: Optional[DecoderConfig] = None,
    registry: Optional[TypeRegistry] = None,
) -> Decoded:
    """Decode ``document`` as ``target`` with the default registry unless one is given."""
    return Decoder(registry=registry, config=config).decode(document, target)


def decode_json(
    raw: Union[str, bytes, bytearray],
    target: Any,
    *,
    config: Optional[DecoderConfig] = None,
    registry: Optional[TypeRegistry] = None,
) -> Decoded:
    return Decoder(registry=registry, config=config).decode_json(raw, target)
