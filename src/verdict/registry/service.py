"""Registry of constraints keyed by value type and optional name."""

import logging
from typing import Any

from verdict.constraints.base import SupportsCheck
from verdict.errors import ConstraintAlreadyRegisteredError, ConstraintNotRegisteredError
from verdict.registry.lock import ReadWriteLock

logger = logging.getLogger(__name__)

RegistryKey = tuple[type[Any], str | None]


def normalize_name(name: str | None) -> str | None:
    """Trim and casefold ``name``; ``None`` selects the default slot."""
    if name is None:
        return None
    return name.strip().casefold()


class ConstraintRegistry:
    """Thread-safe store holding one constraint per (value type, name).

    Names are trimmed and compared case-insensitively. Each value type has
    its own unnamed default slot. Constraints are stored by reference.

    Example:
        >>> registry = ConstraintRegistry()
        >>> registry.register_for(User, user_constraint)
        >>> registry.register_for(User, signup_constraint, name="signup")
        >>> await registry.get_for(User, "SignUp").check(user)
    """

    def __init__(self) -> None:
        self._constraints: dict[RegistryKey, SupportsCheck] = {}
        self._lock = ReadWriteLock()

    @staticmethod
    def _key(value_type: type[Any], name: str | None) -> RegistryKey:
        if value_type is None:
            raise ValueError("value_type must not be None")
        return (value_type, normalize_name(name))

    def register_for(self, value_type: type[Any], constraint: SupportsCheck, name: str | None = None) -> None:
        """Register ``constraint`` for ``value_type`` under ``name``.

        Raises:
            ValueError: If ``constraint`` is ``None``.
            ConstraintAlreadyRegisteredError: If the slot is already taken.
        """
        if constraint is None:
            raise ValueError("constraint must not be None")
        key = self._key(value_type, name)

        with self._lock.write_locked():
            if key in self._constraints:
                raise ConstraintAlreadyRegisteredError(value_type, name)
            self._constraints[key] = constraint
        logger.debug("Registered %r for %s (name=%r)", constraint, value_type.__qualname__, name)

    def deregister_for(self, value_type: type[Any], name: str | None = None) -> None:
        """Remove the constraint registered for ``value_type`` under ``name``, if any."""
        key = self._key(value_type, name)

        with self._lock.write_locked():
            removed = self._constraints.pop(key, None)
        if removed is not None:
            logger.debug("Deregistered %r for %s (name=%r)", removed, value_type.__qualname__, name)

    def get_for(self, value_type: type[Any], name: str | None = None) -> SupportsCheck:
        """Return the registered constraint.

        Raises:
            ConstraintNotRegisteredError: If nothing is registered.
        """
        key = self._key(value_type, name)

        with self._lock.read_locked():
            constraint = self._constraints.get(key)
        if constraint is None:
            raise ConstraintNotRegisteredError(value_type, name)
        return constraint

    def try_get_for(self, value_type: type[Any], name: str | None = None) -> SupportsCheck | None:
        """Return the registered constraint, or ``None`` if there is none."""
        key = self._key(value_type, name)

        with self._lock.read_locked():
            return self._constraints.get(key)

    def clear(self) -> None:
        """Remove every registration."""
        with self._lock.write_locked():
            self._constraints.clear()

    def __contains__(self, key: object) -> bool:
        """Support ``(value_type, name) in registry``."""
        if not (isinstance(key, tuple) and len(key) == 2):
            return False
        value_type, name = key
        with self._lock.read_locked():
            return (value_type, normalize_name(name)) in self._constraints

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._constraints)

    def __repr__(self) -> str:
        return f"ConstraintRegistry(entries={len(self)})"


default_registry = ConstraintRegistry()
