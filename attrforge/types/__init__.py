"""Type registry and the built-in type catalog.

Exports default_registry(), the process-wide TypeRegistry populated with the
built-in types plus any modules listed in config `registry.type_modules`.

A type module exposes a `register_types(registry)` hook:

    def register_types(registry):
        registry.register("money", MONEY_SCHEMA, description="Amount of money")
"""

import importlib
import logging
import threading

from .builtins import register_builtin_types
from .registry import ITEMS_KEY, TypeRegistry, list_constraints


logger = logging.getLogger(__name__)

# Name of the hook a type module must define
REGISTER_HOOK = "register_types"

_default_registry: TypeRegistry | None = None
_lock = threading.Lock()


def default_registry() -> TypeRegistry:
    """Get the process-wide registry, populating it on first use."""
    global _default_registry
    if _default_registry is None:
        with _lock:
            if _default_registry is None:
                _default_registry = _build_default_registry()
    return _default_registry


def reset_default_registry() -> None:
    """Drop the process-wide registry (forces a rebuild on next use)."""
    global _default_registry
    with _lock:
        _default_registry = None


def load_type_module(registry: TypeRegistry, module_name: str) -> None:
    """Import a type module and run its register_types() hook against registry.

    Raises:
        ImportError: If the module can't be imported or has no hook.
    """
    module = importlib.import_module(module_name)
    hook = getattr(module, REGISTER_HOOK, None)
    if not callable(hook):
        raise ImportError(
            f"Type module {module_name!r} does not define {REGISTER_HOOK}(registry)"
        )
    logger.info("Loading type module %s", module_name)
    hook(registry)


def _build_default_registry() -> TypeRegistry:
    from ..config import get_config

    # Fully populated before the caller publishes it
    registry = register_builtin_types(TypeRegistry())
    for module_name in get_config().registry.type_modules:
        load_type_module(registry, module_name)
    return registry


__all__ = [
    "ITEMS_KEY",
    "REGISTER_HOOK",
    "TypeRegistry",
    "default_registry",
    "list_constraints",
    "load_type_module",
    "register_builtin_types",
    "reset_default_registry",
]
