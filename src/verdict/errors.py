"""Exceptions raised by verdict.

Invalid arguments are reported with the built-in ``ValueError``; everything
below is specific to builders and the constraint registry.
"""

from typing import Any


class VerdictError(Exception):
    """Base class for verdict errors."""


class BuilderStateError(VerdictError, RuntimeError):
    """A builder phase was used after it had been closed."""


class RegistryError(VerdictError, LookupError):
    """Base class for constraint registry lookups and registrations."""

    def __init__(self, message: str, value_type: type[Any], name: str | None) -> None:
        self.value_type = value_type
        self.name = name
        super().__init__(message)


class ConstraintAlreadyRegisteredError(RegistryError):
    """A constraint is already registered under the same type and name."""

    def __init__(self, value_type: type[Any], name: str | None) -> None:
        super().__init__(
            f"A constraint is already registered for {value_type.__qualname__!s} (name={name!r})",
            value_type,
            name,
        )


class ConstraintNotRegisteredError(RegistryError):
    """No constraint is registered under the requested type and name."""

    def __init__(self, value_type: type[Any], name: str | None) -> None:
        super().__init__(
            f"No constraint registered for {value_type.__qualname__!s} (name={name!r})",
            value_type,
            name,
        )
