"""Linear constraints: batches of constraints checked one batch at a time.

Every constraint of a batch is checked and their requirements are reported
together. The next batch is only checked when the current one reports no
requirements, so cheap checks can guard expensive ones::

    starting_with(has_name)
        .followed_by(has_email)
        .checked_and_ended_with(email_is_not_taken)

Here ``email_is_not_taken`` only runs once both the name and the email are
present.
"""

import logging
from collections.abc import Iterable
from typing import Any

from verdict.cancellation import CancellationToken
from verdict.constraints.base import AsyncCallback, Callback, Constraint, SupportsCheck, as_constraint, run_check
from verdict.errors import BuilderStateError
from verdict.requirement import Requirement
from verdict.tracing import trace_step

logger = logging.getLogger(__name__)

Member = SupportsCheck | Callback | AsyncCallback


class LinearConstraint(Constraint):
    """Checks batches in order and stops at the first one reporting requirements.

    The cancellation token is consulted after each batch. Checks inside a
    batch are left to observe it themselves.
    """

    def __init__(self, batches: Iterable[Iterable[SupportsCheck]]) -> None:
        if batches is None:
            raise ValueError("batches must not be None")

        self.batches: tuple[tuple[SupportsCheck, ...], ...] = tuple(tuple(batch) for batch in batches)

        if any(member is None for batch in self.batches for member in batch):
            raise ValueError("batches must not contain None")

    async def _on_check(self, value: Any, cancellation: CancellationToken) -> list[Requirement]:
        with trace_step("verdict.linear", {"verdict.batches": len(self.batches)}) as span:
            requirements: list[Requirement] = []
            evaluated = 0
            for batch in self.batches:
                requirements = await self._check_batch(batch, value, cancellation)
                evaluated += 1
                cancellation.raise_if_cancelled()
                if requirements:
                    logger.debug(
                        "Batch %d of %d reported %d requirement(s), skipping the rest",
                        evaluated,
                        len(self.batches),
                        len(requirements),
                    )
                    break

            span.set_attribute("verdict.batches_evaluated", evaluated)
            span.set_attribute("verdict.requirements", len(requirements))
            return requirements

    @staticmethod
    async def _check_batch(
        batch: Iterable[SupportsCheck],
        value: Any,
        cancellation: CancellationToken,
    ) -> list[Requirement]:
        requirements: list[Requirement] = []
        for member in batch:
            requirements.extend(await run_check(member, value, cancellation))
        return requirements

    def __repr__(self) -> str:
        sizes = ", ".join(str(len(batch)) for batch in self.batches)
        return f"LinearConstraint(batches=[{sizes}])"


class LinearConstraintBuilder:
    """Collects constraints into batches until one of the ``*ended_with`` calls.

    Each method accepts a constraint, a callback ``fn(value)`` or an async
    callback ``fn(value, cancellation)``. Invalid arguments leave the builder
    unchanged.
    """

    def __init__(self, first: Member) -> None:
        self._batches: list[list[SupportsCheck]] = [[as_constraint(first)]]
        self._built = False

    def _ensure_open(self) -> None:
        if self._built:
            raise BuilderStateError("The constraint has already been built")

    def _coerce(self, member: Member) -> SupportsCheck:
        self._ensure_open()
        return as_constraint(member)

    def followed_by(self, member: Member) -> "LinearConstraintBuilder":
        """Add a constraint to the current batch."""
        self._batches[-1].append(self._coerce(member))
        return self

    def checked_and_followed_by(self, member: Member) -> "LinearConstraintBuilder":
        """Close the current batch and start a new one with ``member``."""
        self._batches.append([self._coerce(member)])
        return self

    def and_ended_with(self, member: Member) -> LinearConstraint:
        """Add a last constraint to the current batch and build."""
        return self.followed_by(member)._build()

    def checked_and_ended_with(self, member: Member) -> LinearConstraint:
        """Close the current batch, add a final batch holding only ``member`` and build."""
        return self.checked_and_followed_by(member)._build()

    def _build(self) -> LinearConstraint:
        self._built = True
        return LinearConstraint(self._batches)


def starting_with(first: Member) -> LinearConstraintBuilder:
    """Start a linear constraint; ``first`` opens the first batch.

    Raises:
        ValueError: If ``first`` is ``None``.
    """
    return LinearConstraintBuilder(first)
