from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

INT32_BOUNDS = (-(2**31), 2**31 - 1)
INT64_BOUNDS = (-(2**63), 2**63 - 1)

# Integer widths. A bare ``int`` annotation is treated as Int64.
Int32 = Annotated[int, Field(ge=INT32_BOUNDS[0], le=INT32_BOUNDS[1])]
Int64 = Annotated[int, Field(ge=INT64_BOUNDS[0], le=INT64_BOUNDS[1])]


@dataclass(frozen=True)
class Variants:
    """Marks a ``Union`` of entities as a named variant group.

    Members are told apart by the shape of the document, not by a tag field:

        ChatMember = Annotated[
            Union[ChatMemberOwner, ChatMemberMember, ...],
            Variants("ChatMember"),
        ]
    """

    name: str


class Entity(BaseModel):
    """Base class for every decoded Bot API object.

    Instances are immutable. Fields the schema does not declare are kept in
    ``model_extra`` (read-only) so upstream additions survive a decode/encode round trip.
    Optional fields missing from the document read as ``None`` and are left
    out of ``model_fields_set``; see ``is_present``.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class FrozenDict(dict):
    """Read-only ``dict`` used for preserved unknown fields.

    A real ``dict`` subclass, so pydantic accepts it as ``__pydantic_extra__``.
    """

    def _read_only(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = __delitem__ = __ior__ = _read_only
    clear = pop = popitem = setdefault = update = _read_only

    def __reduce__(self):
        return (type(self), (dict(self),))


def is_present(entity: Entity, name: str) -> bool:
    """True when ``name`` was present in the source document, even as ``null``."""
    if name not in type(entity).model_fields:
        raise AttributeError(f"{type(entity).__name__} has no field {name!r}")
    return name in entity.model_fields_set


class TolerantEnum(str, Enum):
    """String enum that accepts values it has never seen.

    Unseen values become ``UNKNOWN`` pseudo-members that keep the raw string,
    so ``ChatType("forum").value == "forum"`` and re-encoding is lossless.
    """

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = "UNKNOWN"
        member._value_ = value
        return member

    @property
    def is_known(self) -> bool:
        return self._name_ != "UNKNOWN"
