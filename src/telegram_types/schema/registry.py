from __future__ import annotations

import types
from enum import Enum
from types import MappingProxyType
from typing import (
    Annotated,
    Any,
    Dict,
    Iterable,
    List,
    Literal,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
)

from telegram_types.core.exceptions import RegistryError
from telegram_types.core.logger import get_logger
from telegram_types.schema.entity import INT64_BOUNDS, Entity, Variants
from telegram_types.schema.nodes import (
    BoolNode,
    EntityRef,
    EntitySpec,
    EnumNode,
    FieldSpec,
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

logger = get_logger(__name__)

_NONE_TYPE = type(None)
_UNION_ORIGINS: Tuple[Any, ...] = (Union,)
if hasattr(types, "UnionType"):
    _UNION_ORIGINS += (types.UnionType,)


def _variants_marker(metadata: Iterable[Any]) -> Optional[Variants]:
    for item in metadata:
        if isinstance(item, Variants):
            return item
    return None


def _int_bounds(metadata: Iterable[Any]) -> Tuple[int, int]:
    """Read ge/le (or gt/lt) constraints from pydantic/annotated-types metadata."""
    low, high = INT64_BOUNDS
    pending: List[Any] = list(metadata)
    while pending:
        item = pending.pop(0)
        nested = getattr(item, "metadata", None)
        if isinstance(nested, list):
            pending.extend(nested)
            continue
        if getattr(item, "ge", None) is not None:
            low = max(low, item.ge)
        if getattr(item, "gt", None) is not None:
            low = max(low, item.gt + 1)
        if getattr(item, "le", None) is not None:
            high = min(high, item.le)
        if getattr(item, "lt", None) is not None:
            high = min(high, item.lt - 1)
    return low, high


class TypeRegistry:
    """Catalogue of entity and variant group specs.

    Build it once (register entities, modules or variant aliases), then call
    ``freeze``. A frozen registry never changes and can be shared across
    threads; registering on it raises ``RegistryError``.

    Example:
        >>> registry = TypeRegistry()
        >>> registry.register_entity(User)
        >>> registry.freeze()
        >>> registry.entity("User").required_wire
        frozenset({'id', 'is_bot', 'first_name'})
    """

    def __init__(self) -> None:
        self._entities: Dict[str, EntitySpec] = {}
        self._groups: Dict[str, VariantGroupSpec] = {}
        self._model_names: Dict[type, str] = {}
        self._frozen = False

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryError("Registry is frozen; build a new registry to add types")

    def register_entity(self, model: type, *, name: Optional[str] = None) -> EntitySpec:
        """Register an entity class and every entity or group it refers to."""
        self._check_mutable()
        if not (isinstance(model, type) and issubclass(model, Entity)):
            raise RegistryError(f"{model!r} is not an Entity subclass")
        registered = self._ensure_entity(model, name=name)
        return self._entities[registered]

    def register_group(self, alias: Any) -> VariantGroupSpec:
        """Register a variant group alias, ``Annotated[Union[...], Variants(name)]``."""
        self._check_mutable()
        if get_origin(alias) is not Annotated or _variants_marker(get_args(alias)[1:]) is None:
            raise RegistryError(f"{alias!r} is not a Variants-annotated union")
        node = self._compile(alias)
        if not isinstance(node, VariantRef):
            raise RegistryError(f"{alias!r} did not compile to a variant group")
        return self._groups[node.name]

    def register_module(self, module: types.ModuleType) -> None:
        """Register every entity class and variant alias defined in ``module``."""
        self._check_mutable()
        for value in list(vars(module).values()):
            if isinstance(value, type) and issubclass(value, Entity) and value is not Entity:
                if value.__module__ == module.__name__:
                    self._ensure_entity(value)
            elif get_origin(value) is Annotated and _variants_marker(get_args(value)[1:]):
                self.register_group(value)

    def freeze(self) -> "TypeRegistry":
        if self._frozen:
            return self
        self._entities = MappingProxyType(dict(self._entities))  # type: ignore[assignment]
        self._groups = MappingProxyType(dict(self._groups))  # type: ignore[assignment]
        self._model_names = MappingProxyType(dict(self._model_names))  # type: ignore[assignment]
        self._frozen = True
        logger.debug(
            f"Registry frozen with {len(self._entities)} entities and {len(self._groups)} variant groups"
        )
        return self

    # ------------------------------------------------------------------
    # lookup
    # ------------------------------------------------------------------

    def entity(self, name: str) -> EntitySpec:
        try:
            return self._entities[name]
        except KeyError as exc:
            raise RegistryError(f"No entity registered under name={name!r}") from exc

    def group(self, name: str) -> VariantGroupSpec:
        try:
            return self._groups[name]
        except KeyError as exc:
            raise RegistryError(f"No variant group registered under name={name!r}") from exc

    def try_entity(self, name: str) -> Optional[EntitySpec]:
        return self._entities.get(name)

    def spec_for(self, model: type) -> EntitySpec:
        try:
            return self._entities[self._model_names[model]]
        except KeyError as exc:
            raise RegistryError(f"Entity {model!r} is not registered") from exc

    @property
    def entity_names(self) -> Tuple[str, ...]:
        return tuple(self._entities)

    @property
    def group_names(self) -> Tuple[str, ...]:
        return tuple(self._groups)

    def __contains__(self, name: object) -> bool:
        return name in self._entities or name in self._groups

    def resolve(self, target: Any) -> TypeNode:
        """Turn a decode target into a type node.

        Accepts an entity class, a registered entity or group name, a variant
        alias, or a type expression such as ``List[Update]``. A name suffixed
        with ``[]`` (``"Update[]"``) means a list of that type. On a frozen
        registry every entity mentioned must already be registered.
        """
        if isinstance(target, str):
            if target.endswith("[]"):
                return ListNode(self.resolve(target[:-2]))
            if target in self._entities:
                return EntityRef(target)
            if target in self._groups:
                return VariantRef(target)
            raise RegistryError(f"No entity or variant group registered under name={target!r}")
        return self._compile(target)

    # ------------------------------------------------------------------
    # compilation
    # ------------------------------------------------------------------

    def _ensure_entity(self, model: type, *, name: Optional[str] = None) -> str:
        known = self._model_names.get(model)
        if known is not None:
            return known
        name = name or model.__name__
        if self._frozen:
            raise RegistryError(f"Entity {name!r} is not registered and the registry is frozen")
        if name in self._entities or any(
            m is not model and n == name for m, n in self._model_names.items()
        ):
            raise RegistryError(f"Entity name {name!r} already registered for another class")
        self._model_names[model] = name
        try:
            model.model_rebuild()
            fields = tuple(
                FieldSpec(
                    name=field_name,
                    wire_name=info.alias or field_name,
                    node=self._compile(info.annotation, metadata=tuple(info.metadata)),
                    required=info.is_required(),
                )
                for field_name, info in model.model_fields.items()
            )
        except Exception:
            del self._model_names[model]
            raise

        self._entities[name] = EntitySpec(name=name, model=model, fields=fields)
        return name

    def _ensure_group(self, members: List[Any], name: Optional[str]) -> str:
        member_names: List[str] = []
        for member in members:
            if not (isinstance(member, type) and issubclass(member, Entity)):
                raise RegistryError(
                    f"Variant group members must be Entity subclasses, got {member!r}"
                )
            member_names.append(self._ensure_entity(member))

        group_name = name or " | ".join(member_names)
        spec = VariantGroupSpec(name=group_name, members=tuple(member_names))
        existing = self._groups.get(group_name)
        if existing is not None:
            if existing != spec:
                raise RegistryError(
                    f"Variant group {group_name!r} already registered with members {existing.members}"
                )
            return group_name
        if self._frozen:
            raise RegistryError(f"Variant group {group_name!r} is not registered and the registry is frozen")
        self._groups[group_name] = spec
        return group_name

    def _compile(self, tp: Any, *, metadata: Tuple[Any, ...] = ()) -> TypeNode:
        origin = get_origin(tp)

        if origin is Annotated:
            base, *extra = get_args(tp)
            return self._compile(base, metadata=metadata + tuple(extra))

        if origin in _UNION_ORIGINS:
            args = get_args(tp)
            members = [a for a in args if a is not _NONE_TYPE]
            if len(members) < len(args):
                inner = members[0] if len(members) == 1 else Union[tuple(members)]
                return NullableNode(self._compile(inner, metadata=metadata))
            marker = _variants_marker(metadata)
            return VariantRef(self._ensure_group(members, marker.name if marker else None))

        if origin is Literal:
            return LiteralNode(tuple(get_args(tp)))

        if origin in (list, List):
            (item,) = get_args(tp)
            return ListNode(self._compile(item))

        if origin in (tuple, Tuple):
            args = get_args(tp)
            if len(args) != 2 or args[1] is not Ellipsis:
                raise RegistryError(f"Only homogeneous tuples are supported, got {tp!r}")
            return ListNode(self._compile(args[0]))

        if isinstance(tp, type):
            if issubclass(tp, Enum):
                return EnumNode(tp)
            if issubclass(tp, Entity):
                return EntityRef(self._ensure_entity(tp))
            if tp is bool:
                return BoolNode()
            if tp is int:
                return IntNode(*_int_bounds(metadata))
            if tp is float:
                return FloatNode()
            if tp is str:
                return StrNode()

        raise RegistryError(f"Unsupported field annotation {tp!r}")
