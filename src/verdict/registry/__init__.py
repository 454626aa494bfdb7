"""Constraint registry keyed by value type and name."""

from .context import (
    REGISTRY_CONTEXT,
    deregister_for,
    get_for,
    get_registry,
    register_for,
    registry_scope,
    try_get_for,
)
from .lock import ReadWriteLock
from .service import ConstraintRegistry, default_registry, normalize_name

__all__ = [
    "ConstraintRegistry",
    "default_registry",
    "normalize_name",
    "ReadWriteLock",
    "REGISTRY_CONTEXT",
    "get_registry",
    "registry_scope",
    "register_for",
    "deregister_for",
    "get_for",
    "try_get_for",
]
