"""Verdict - composable constraint checking."""

from .cancellation import CancellationToken
from .config import VerdictSettings, get_settings
from .constraints import (
    AnyConstraint,
    Constraint,
    LinearConstraint,
    any_of,
    as_constraint,
    constraint,
    starting_with,
)
from .errors import (
    BuilderStateError,
    ConstraintAlreadyRegisteredError,
    ConstraintNotRegisteredError,
    RegistryError,
    VerdictError,
)
from .registry import (
    ConstraintRegistry,
    default_registry,
    deregister_for,
    get_for,
    get_registry,
    register_for,
    registry_scope,
    try_get_for,
)
from .requirement import Requirement
from .tracing import trace_step
from .version import __version__


__all__ = [
    # Core
    "Requirement",
    "Constraint",
    "constraint",
    "as_constraint",
    "CancellationToken",
    # Combinators
    "any_of",
    "AnyConstraint",
    "starting_with",
    "LinearConstraint",
    # Registry
    "ConstraintRegistry",
    "default_registry",
    "get_registry",
    "registry_scope",
    "register_for",
    "deregister_for",
    "get_for",
    "try_get_for",
    # Errors
    "VerdictError",
    "BuilderStateError",
    "RegistryError",
    "ConstraintAlreadyRegisteredError",
    "ConstraintNotRegisteredError",
    # Configuration and tracing
    "VerdictSettings",
    "get_settings",
    "trace_step",
]
