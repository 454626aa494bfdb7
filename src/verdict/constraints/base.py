"""Base constraint contract and adapters for plain and async callables."""

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Iterable
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from verdict.cancellation import CancellationToken
from verdict.config import get_settings
from verdict.requirement import Requirement

logger = logging.getLogger(__name__)


# Protocols for the callables accepted by the adapters

class Callback(Protocol):
    """Inline check: returns the requirements ``value`` does not meet."""

    def __call__(self, value: Any) -> Iterable[Requirement] | None: ...


class AsyncCallback(Protocol):
    """Suspending check: awaits and returns the requirements ``value`` does not meet."""

    def __call__(
        self,
        value: Any,
        cancellation: CancellationToken,
    ) -> Awaitable[Iterable[Requirement] | None] | None: ...


class Predicate(Protocol):
    def __call__(self, value: Any) -> bool: ...


class AsyncPredicate(Protocol):
    def __call__(self, value: Any, cancellation: CancellationToken) -> Awaitable[bool] | None: ...


@runtime_checkable
class SupportsCheck(Protocol):
    """Anything that can be checked like a :class:`Constraint`."""

    def check(
        self,
        value: Any,
        cancellation: CancellationToken | None = None,
    ) -> Awaitable[list[Requirement]]: ...


class Constraint(ABC):
    """A check that reports the requirements an object fails to meet.

    Subclasses implement :meth:`_on_check`. It may be a coroutine or a plain
    method, and may return ``None`` to mean "no requirements".

    Example:
        >>> class NotEmpty(Constraint):
        >>>     def _on_check(self, value, cancellation):
        >>>         if not value:
        >>>             return [Requirement("Must not be empty")]
        >>>
        >>> await NotEmpty().check("")
    """

    async def check(
        self,
        value: Any,
        cancellation: CancellationToken | None = None,
    ) -> list[Requirement]:
        """Check ``value`` and return the requirements it does not meet.

        Args:
            value: The object to check. Must not be ``None``.
            cancellation: Token forwarded to nested checks. A fresh token
                that is never cancelled is used when omitted.

        Returns:
            The unmet requirements, empty when ``value`` satisfies the
            constraint.

        Raises:
            ValueError: If ``value`` is ``None``.
        """
        if value is None:
            raise ValueError("value must not be None")
        token = cancellation if cancellation is not None else CancellationToken()

        result = self._on_check(value, token)
        if inspect.isawaitable(result):
            result = await result
        return _as_requirement_list(result)

    @abstractmethod
    def _on_check(
        self,
        value: Any,
        cancellation: CancellationToken,
    ) -> Awaitable[Iterable[Requirement] | None] | Iterable[Requirement] | None:
        """Perform the actual check for a non-``None`` value."""

    @staticmethod
    def from_callback(callback: Callback) -> "Constraint":
        """Create a constraint from an inline (non-suspending) callback."""
        return CallbackConstraint(callback)

    @staticmethod
    def from_async_callback(callback: AsyncCallback) -> "Constraint":
        """Create a constraint from a callback that may suspend."""
        return AsyncCallbackConstraint(callback)

    @staticmethod
    def from_predicate(predicate: Predicate, requirement: Requirement | None = None) -> "Constraint":
        """Create a constraint reporting ``requirement`` whenever ``predicate`` is false."""
        return PredicateConstraint(predicate, requirement)

    @staticmethod
    def from_async_predicate(predicate: AsyncPredicate, requirement: Requirement | None = None) -> "Constraint":
        """Async variant of :meth:`from_predicate`."""
        return AsyncPredicateConstraint(predicate, requirement)


def _require_callable(fn: Any, name: str) -> None:
    if fn is None:
        raise ValueError(f"{name} must not be None")
    if not callable(fn):
        raise TypeError(f"{name} must be callable, got {type(fn).__name__}")


def _callable_name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or type(fn).__qualname__


def _as_requirement_list(result: Any) -> list[Requirement]:
    # A Requirement is itself iterable (pydantic yields its fields), so it must be wrapped first.
    if result is None:
        return []
    if isinstance(result, Requirement):
        return [result]
    return list(result)


class CallbackConstraint(Constraint):
    """Delegates to ``callback(value)`` once per check."""

    def __init__(self, callback: Callback) -> None:
        _require_callable(callback, "callback")
        self._callback = callback

    def _on_check(self, value: Any, cancellation: CancellationToken) -> Iterable[Requirement] | None:
        return self._callback(value)

    def __repr__(self) -> str:
        return f"CallbackConstraint({_callable_name(self._callback)})"


class AsyncCallbackConstraint(Constraint):
    """Delegates to ``callback(value, cancellation)`` once per check."""

    def __init__(self, callback: AsyncCallback) -> None:
        _require_callable(callback, "callback")
        self._callback = callback

    def _on_check(
        self,
        value: Any,
        cancellation: CancellationToken,
    ) -> Awaitable[Iterable[Requirement] | None] | None:
        return self._callback(value, cancellation)

    def __repr__(self) -> str:
        return f"AsyncCallbackConstraint({_callable_name(self._callback)})"


@lru_cache(maxsize=8)
def _default_requirement(text: str) -> Requirement:
    return Requirement(text)


def default_requirement() -> Requirement:
    """Requirement reported by predicates created without one.

    The same instance is returned for as long as the configured text does
    not change.
    """
    return _default_requirement(get_settings().default_requirement_text)


class PredicateConstraint(Constraint):
    """Reports a single fixed requirement when ``predicate(value)`` is false."""

    def __init__(self, predicate: Predicate, requirement: Requirement | None = None) -> None:
        _require_callable(predicate, "predicate")
        self._predicate = predicate
        self._requirements = (requirement if requirement is not None else default_requirement(),)

    def _on_check(self, value: Any, cancellation: CancellationToken) -> Iterable[Requirement]:
        return () if self._predicate(value) else self._requirements

    def __repr__(self) -> str:
        return f"PredicateConstraint({_callable_name(self._predicate)})"


class AsyncPredicateConstraint(Constraint):
    """Async variant of :class:`PredicateConstraint`.

    A predicate that returns ``None`` instead of an awaitable is treated as
    satisfied.
    """

    def __init__(self, predicate: AsyncPredicate, requirement: Requirement | None = None) -> None:
        _require_callable(predicate, "predicate")
        self._predicate = predicate
        self._requirements = (requirement if requirement is not None else default_requirement(),)

    async def _on_check(self, value: Any, cancellation: CancellationToken) -> Iterable[Requirement]:
        pending = self._predicate(value, cancellation)
        if pending is None:
            return ()
        outcome = await pending if inspect.isawaitable(pending) else pending
        return () if outcome else self._requirements

    def __repr__(self) -> str:
        return f"AsyncPredicateConstraint({_callable_name(self._predicate)})"


def is_async_callable(fn: Any) -> bool:
    """Return True for coroutine functions and objects with an async ``__call__``."""
    if inspect.iscoroutinefunction(fn):
        return True
    call = getattr(fn, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)


def accepts_cancellation(fn: Any) -> bool:
    """Return True when ``fn`` needs at least two positional arguments.

    Such callables are called as ``fn(value, cancellation)`` and their result
    is awaited when it is awaitable, so ``lambda v, c: remote(v, c)`` behaves
    like ``remote`` itself.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    required = [
        p for p in signature.parameters.values()
        if p.kind in positional and p.default is inspect.Parameter.empty
    ]
    return len(required) >= 2


def _takes_cancellation(fn: Any) -> bool:
    return is_async_callable(fn) or accepts_cancellation(fn)


def _reject_class(obj: Any, name: str) -> None:
    # Protocol checks match class objects too, since the class has a ``check`` attribute.
    if isinstance(obj, type):
        raise TypeError(f"{name} must be an instance, got the class {obj.__qualname__}")


def as_constraint(obj: Any, *, name: str = "constraint") -> SupportsCheck:
    """Coerce a constraint, a callback or an async callback into something checkable.

    Objects that already provide ``check`` are returned unchanged. Coroutine
    functions and callables taking ``(value, cancellation)`` become async
    callbacks; other callables are called with ``(value)``. Classes are
    rejected with ``TypeError``.
    """
    if obj is None:
        raise ValueError(f"{name} must not be None")
    _reject_class(obj, name)
    if isinstance(obj, (Constraint, SupportsCheck)):
        return obj
    if _takes_cancellation(obj):
        return AsyncCallbackConstraint(obj)
    if callable(obj):
        return CallbackConstraint(obj)
    raise TypeError(f"{name} must be a constraint or a callable, got {type(obj).__name__}")


def as_predicate_constraint(
    obj: Any,
    requirement: Requirement | None = None,
    *,
    name: str = "predicate",
) -> SupportsCheck:
    """Coerce a constraint, a predicate or an async predicate into something checkable.

    Dispatch follows :func:`as_constraint`.
    """
    if obj is None:
        raise ValueError(f"{name} must not be None")
    _reject_class(obj, name)
    if isinstance(obj, (Constraint, SupportsCheck)):
        return obj
    if _takes_cancellation(obj):
        return AsyncPredicateConstraint(obj, requirement)
    if callable(obj):
        return PredicateConstraint(obj, requirement)
    raise TypeError(f"{name} must be a constraint or a callable, got {type(obj).__name__}")


def constraint(func: Callback | AsyncCallback) -> Constraint:
    """Decorator turning a check function into a :class:`Constraint`.

    Coroutine functions and functions taking two positional arguments are
    called with ``(value, cancellation)``, other functions with ``(value)``.

    Example:
        >>> @constraint
        >>> def has_name(user):
        >>>     if not user.name:
        >>>         return [Requirement("Name is required", ["name"])]
        >>>
        >>> await has_name.check(user)
    """
    _require_callable(func, "func")
    if _takes_cancellation(func):
        return AsyncCallbackConstraint(func)
    return CallbackConstraint(func)


async def run_check(
    target: SupportsCheck,
    value: Any,
    cancellation: CancellationToken,
) -> list[Requirement]:
    """Await ``target.check`` and normalize a missing result to no requirements."""
    pending = target.check(value, cancellation)
    if pending is None:
        return []
    return _as_requirement_list(await pending)
