"""Disjunctive constraints: satisfied when any alternative is satisfied.

Built in two phases::

    any_of(is_email)
        .or_(is_phone_number)
        .fulfils(Requirement("Must be an email or a phone number", ["contact"]))
        .as_one_constraint()

Alternatives are checked in the order they were added and the first one
that reports no requirements ends the check. When every alternative fails,
the requirements given through ``fulfils``/``and_`` are reported instead of
the alternatives' own.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from verdict.cancellation import CancellationToken
from verdict.constraints.base import (
    AsyncPredicate,
    Constraint,
    Predicate,
    SupportsCheck,
    as_predicate_constraint,
    run_check,
)
from verdict.errors import BuilderStateError
from verdict.requirement import Requirement
from verdict.tracing import trace_step

logger = logging.getLogger(__name__)

RequirementProvider = Callable[[], Requirement | Iterable[Requirement] | None]
Alternative = SupportsCheck | Predicate | AsyncPredicate
Fallback = Requirement | RequirementProvider


class AnyConstraint(Constraint):
    """Satisfied as soon as one of its alternatives is satisfied.

    Attributes:
        alternatives: The constraints tried, in order.
        requirement_providers: Zero-argument callables producing the
            requirements reported when no alternative is satisfied.
    """

    def __init__(
        self,
        alternatives: Iterable[SupportsCheck],
        requirement_providers: Iterable[RequirementProvider],
    ) -> None:
        if alternatives is None:
            raise ValueError("alternatives must not be None")
        if requirement_providers is None:
            raise ValueError("requirement_providers must not be None")

        self.alternatives: tuple[SupportsCheck, ...] = tuple(alternatives)
        self.requirement_providers: tuple[RequirementProvider, ...] = tuple(requirement_providers)

        if any(alternative is None for alternative in self.alternatives):
            raise ValueError("alternatives must not contain None")
        if any(provider is None for provider in self.requirement_providers):
            raise ValueError("requirement_providers must not contain None")

    async def _on_check(self, value: Any, cancellation: CancellationToken) -> list[Requirement]:
        with trace_step("verdict.any", {"verdict.alternatives": len(self.alternatives)}) as span:
            for index, alternative in enumerate(self.alternatives):
                if not await run_check(alternative, value, cancellation):
                    logger.debug("Alternative %d of %d satisfied %r", index + 1, len(self.alternatives), self)
                    span.set_attribute("verdict.satisfied_by", index)
                    return []

            requirements = self._collect_requirements()
            span.set_attribute("verdict.requirements", len(requirements))
            return requirements

    def _collect_requirements(self) -> list[Requirement]:
        requirements: list[Requirement] = []
        for provider in self.requirement_providers:
            provided = provider()
            if provided is None:
                continue
            if isinstance(provided, Requirement):
                requirements.append(provided)
            else:
                requirements.extend(requirement for requirement in provided if requirement is not None)
        return requirements

    def __repr__(self) -> str:
        return f"AnyConstraint(alternatives={len(self.alternatives)}, fallbacks={len(self.requirement_providers)})"


def _as_provider(fallback: Fallback, name: str) -> RequirementProvider:
    if fallback is None:
        raise ValueError(f"{name} must not be None")
    if isinstance(fallback, Requirement):
        return lambda: fallback
    if callable(fallback):
        return fallback
    raise TypeError(f"{name} must be a Requirement or a callable returning requirements, got {type(fallback).__name__}")


class AlternativesBuilder:
    """First phase: collects the alternatives to try.

    Obtained from :func:`any_of`. Calling :meth:`fulfils` moves on to the
    :class:`FallbackBuilder`; this builder cannot be used afterwards.
    """

    def __init__(self, alternative: Alternative, requirement: Requirement | None = None) -> None:
        self._alternatives: list[SupportsCheck] = []
        self._closed = False
        self._append(alternative, requirement)

    def _append(self, alternative: Alternative, requirement: Requirement | None) -> None:
        self._ensure_open()
        self._alternatives.append(as_predicate_constraint(alternative, requirement, name="alternative"))

    def _ensure_open(self) -> None:
        if self._closed:
            raise BuilderStateError("Alternatives can no longer be added once fulfils() was called")

    def or_(self, alternative: Alternative, requirement: Requirement | None = None) -> "AlternativesBuilder":
        """Add an alternative: a constraint, a predicate or an async predicate.

        ``requirement`` replaces the default requirement reported by a
        failing predicate. It is ignored for constraints.
        """
        self._append(alternative, requirement)
        return self

    def fulfils(self, fallback: Fallback) -> "FallbackBuilder":
        """Set the first requirement reported when no alternative is satisfied.

        Args:
            fallback: A :class:`Requirement`, or a zero-argument callable
                returning one requirement or an iterable of requirements.
        """
        self._ensure_open()
        provider = _as_provider(fallback, "fallback")
        self._closed = True
        return FallbackBuilder(tuple(self._alternatives), provider)


class FallbackBuilder:
    """Second phase: collects the requirements reported on failure."""

    def __init__(self, alternatives: Sequence[SupportsCheck], provider: RequirementProvider) -> None:
        self._alternatives = tuple(alternatives)
        self._providers: list[RequirementProvider] = [provider]
        self._built = False

    def _ensure_open(self) -> None:
        if self._built:
            raise BuilderStateError("The constraint has already been built")

    def and_(self, fallback: Fallback) -> "FallbackBuilder":
        """Add another requirement (or requirement provider) reported on failure."""
        self._ensure_open()
        self._providers.append(_as_provider(fallback, "fallback"))
        return self

    def as_one_constraint(self) -> AnyConstraint:
        """Build the constraint. The builder cannot be used afterwards."""
        self._ensure_open()
        self._built = True
        return AnyConstraint(self._alternatives, self._providers)

    build = as_one_constraint


def any_of(alternative: Alternative, requirement: Requirement | None = None) -> AlternativesBuilder:
    """Start a disjunctive constraint with its first alternative.

    Args:
        alternative: A constraint, a predicate ``fn(value) -> bool`` or an
            async predicate ``fn(value, cancellation) -> Awaitable[bool]``.
        requirement: Reported by a failing predicate instead of the default
            requirement. Ignored for constraints.

    Raises:
        ValueError: If ``alternative`` is ``None``.
    """
    return AlternativesBuilder(alternative, requirement)
