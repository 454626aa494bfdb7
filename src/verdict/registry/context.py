"""Selection of the registry used by the module-level helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from verdict.constraints.base import SupportsCheck
from verdict.registry.service import ConstraintRegistry, default_registry


REGISTRY_CONTEXT: ContextVar[ConstraintRegistry | None] = ContextVar("registry_context", default=None)


def get_registry() -> ConstraintRegistry:
    """Return the registry bound by :func:`registry_scope`, else the default one."""
    registry = REGISTRY_CONTEXT.get()
    return registry if registry is not None else default_registry


@contextmanager
def registry_scope(registry: ConstraintRegistry) -> Iterator[ConstraintRegistry]:
    """Use ``registry`` for the module-level helpers within the ``with`` block.

    The binding follows the current context, so tasks started inside the
    block inherit it and concurrent tasks outside it are unaffected.
    """
    if registry is None:
        raise ValueError("registry must not be None")
    token = REGISTRY_CONTEXT.set(registry)
    try:
        yield registry
    finally:
        REGISTRY_CONTEXT.reset(token)


def register_for(value_type: type[Any], constraint: SupportsCheck, name: str | None = None) -> None:
    get_registry().register_for(value_type, constraint, name)


def deregister_for(value_type: type[Any], name: str | None = None) -> None:
    get_registry().deregister_for(value_type, name)


def get_for(value_type: type[Any], name: str | None = None) -> SupportsCheck:
    return get_registry().get_for(value_type, name)


def try_get_for(value_type: type[Any], name: str | None = None) -> SupportsCheck | None:
    return get_registry().try_get_for(value_type, name)
