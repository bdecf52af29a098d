from __future__ import annotations

from enum import Enum
from typing import Any

from telegram_types.schema.entity import Entity


def encode(value: Any) -> Any:
    """Turn a decoded value back into a JSON-compatible document.

    Only fields that were present in the source document are written, under
    their wire names; preserved unknown fields are merged back in as plain
    dicts and lists. Decoding the result yields a value equal to ``value``.
    """
    if isinstance(value, Entity):
        document = {}
        fields = type(value).model_fields
        for name, info in fields.items():
            if name in value.model_fields_set:
                document[info.alias or name] = encode(getattr(value, name))
        for key, raw in (value.model_extra or {}).items():
            document[key] = encode(raw)
        return document
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [encode(item) for item in value]
    if isinstance(value, dict):
        return {key: encode(item) for key, item in value.items()}
    return value
