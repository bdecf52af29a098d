from __future__ import annotations

import importlib
import threading
from typing import Iterable, Optional

from telegram_types.schema.registry import TypeRegistry


BUILTIN_SCHEMA_MODULES: tuple[str, ...] = (
    "telegram_types.api.types",
    "telegram_types.api.inline_mode",
    "telegram_types.api.update",
    "telegram_types.api.response",
)


_DEFAULT_REGISTRY: Optional[TypeRegistry] = None
_LOCK = threading.Lock()


def build_registry(modules: Iterable[str] = BUILTIN_SCHEMA_MODULES) -> TypeRegistry:
    """Import schema modules and compile every entity and variant group they define.

    The returned registry is frozen.
    """
    registry = TypeRegistry()
    for module_name in modules:
        registry.register_module(importlib.import_module(module_name))
    return registry.freeze()


def get_default_registry() -> TypeRegistry:
    """Return the process-wide registry, building it on first use.

    Construction runs under a lock, so it happens-before any decode that uses
    the result.
    """
    global _DEFAULT_REGISTRY

    registry = _DEFAULT_REGISTRY
    if registry is not None:
        return registry

    with _LOCK:
        if _DEFAULT_REGISTRY is None:
            _DEFAULT_REGISTRY = build_registry()
        return _DEFAULT_REGISTRY
