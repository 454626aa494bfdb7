"""Constraints and the builders that combine them."""

from .base import (
    AsyncCallback,
    AsyncCallbackConstraint,
    AsyncPredicate,
    AsyncPredicateConstraint,
    Callback,
    CallbackConstraint,
    Constraint,
    Predicate,
    PredicateConstraint,
    SupportsCheck,
    as_constraint,
    constraint,
    default_requirement,
)
from .any import AlternativesBuilder, AnyConstraint, FallbackBuilder, any_of
from .linear import LinearConstraint, LinearConstraintBuilder, starting_with

__all__ = [
    # Contract
    "Constraint",
    "SupportsCheck",
    "Callback",
    "AsyncCallback",
    "Predicate",
    "AsyncPredicate",
    # Adapters
    "CallbackConstraint",
    "AsyncCallbackConstraint",
    "PredicateConstraint",
    "AsyncPredicateConstraint",
    "as_constraint",
    "constraint",
    "default_requirement",
    # Disjunction
    "any_of",
    "AnyConstraint",
    "AlternativesBuilder",
    "FallbackBuilder",
    # Batches
    "starting_with",
    "LinearConstraint",
    "LinearConstraintBuilder",
]
