"""Tests for verdict.constraints.base module."""

import asyncio

import pytest

from verdict.cancellation import CancellationToken
from verdict.constraints.base import (
    AsyncCallbackConstraint,
    AsyncPredicateConstraint,
    CallbackConstraint,
    Constraint,
    PredicateConstraint,
    as_constraint,
    as_predicate_constraint,
    constraint,
    default_requirement,
)
from verdict.requirement import Requirement


class TestInlineCallback:
    """Constraints created from plain callbacks."""

    @pytest.mark.asyncio
    async def test_calls_callback_once(self):
        calls = []
        inline = Constraint.from_callback(lambda value: calls.append(value) or [])

        value = object()
        assert await inline.check(value) == []
        assert calls == [value]

    @pytest.mark.asyncio
    async def test_returns_callback_requirements(self):
        expected = Requirement("test requirement")
        inline = Constraint.from_callback(lambda value: [expected])

        actual = await inline.check(object())

        assert len(actual) == 1
        assert actual[0] is expected

    @pytest.mark.asyncio
    async def test_none_result_means_no_requirements(self):
        inline = Constraint.from_callback(lambda value: None)

        assert await inline.check(object()) == []

    @pytest.mark.asyncio
    async def test_checking_none_raises_before_callback(self):
        calls = []
        inline = Constraint.from_callback(lambda value: calls.append(value) or [])

        with pytest.raises(ValueError):
            await inline.check(None)
        assert calls == []

    def test_create_with_none_raises(self):
        with pytest.raises(ValueError):
            Constraint.from_callback(None)  # type: ignore[arg-type]

    def test_create_with_non_callable_raises(self):
        with pytest.raises(TypeError):
            Constraint.from_callback("not callable")  # type: ignore[arg-type]


class TestAsyncCallback:
    """Constraints created from callbacks that may suspend."""

    @pytest.mark.asyncio
    async def test_calls_callback_once_with_token(self):
        seen: list[tuple[object, CancellationToken]] = []

        async def check(value, cancellation):
            seen.append((value, cancellation))
            return []

        token = CancellationToken()
        value = object()
        await Constraint.from_async_callback(check).check(value, token)

        assert len(seen) == 1
        assert seen[0][0] is value
        assert seen[0][1] is token

    @pytest.mark.asyncio
    async def test_single_argument_check_passes_uncancelled_token(self):
        tokens: list[CancellationToken] = []

        async def check(value, cancellation):
            tokens.append(cancellation)
            return []

        await Constraint.from_async_callback(check).check(object())

        assert isinstance(tokens[0], CancellationToken)
        assert tokens[0].is_cancelled is False

    @pytest.mark.asyncio
    async def test_returns_awaited_requirements(self):
        expected = Requirement("test requirement")

        async def check(value, cancellation):
            await asyncio.sleep(0)
            return (expected,)

        actual = await Constraint.from_async_callback(check).check(object())

        assert actual == [expected]
        assert actual[0] is expected

    @pytest.mark.asyncio
    async def test_callback_returning_no_awaitable_means_no_requirements(self):
        suspending = Constraint.from_async_callback(lambda value, cancellation: None)

        assert await suspending.check(object()) == []

    @pytest.mark.asyncio
    async def test_awaited_none_means_no_requirements(self):
        async def check(value, cancellation):
            return None

        assert await Constraint.from_async_callback(check).check(object()) == []

    @pytest.mark.asyncio
    async def test_checking_none_raises(self):
        async def check(value, cancellation):
            return []

        with pytest.raises(ValueError):
            await Constraint.from_async_callback(check).check(None)

    def test_create_with_none_raises(self):
        with pytest.raises(ValueError):
            Constraint.from_async_callback(None)  # type: ignore[arg-type]


class TestPredicates:
    """Constraints created from boolean predicates."""

    @pytest.mark.asyncio
    async def test_true_predicate_reports_nothing(self):
        assert await Constraint.from_predicate(lambda value: True).check(object()) == []

    @pytest.mark.asyncio
    async def test_false_predicate_reports_default_requirement(self):
        actual = await Constraint.from_predicate(lambda value: False).check(object())

        assert actual == [default_requirement()]
        assert actual[0] is default_requirement()

    @pytest.mark.asyncio
    async def test_false_predicate_reports_given_requirement(self):
        expected = Requirement("Must be positive")

        actual = await Constraint.from_predicate(lambda value: value > 0, expected).check(-1)

        assert actual[0] is expected

    @pytest.mark.asyncio
    async def test_async_predicate(self):
        async def is_positive(value, cancellation):
            return value > 0

        positive = Constraint.from_async_predicate(is_positive)

        assert await positive.check(1) == []
        assert await positive.check(-1) == [default_requirement()]

    @pytest.mark.asyncio
    async def test_async_predicate_returning_no_awaitable_is_satisfied(self):
        assert await Constraint.from_async_predicate(lambda value, cancellation: None).check(object()) == []

    def test_create_with_none_raises(self):
        with pytest.raises(ValueError):
            Constraint.from_predicate(None)  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            Constraint.from_async_predicate(None)  # type: ignore[arg-type]


class TestSubclassing:
    """Custom constraints implement _on_check."""

    @pytest.mark.asyncio
    async def test_sync_on_check(self):
        class NotEmpty(Constraint):
            def _on_check(self, value, cancellation):
                if not value:
                    return [Requirement("Must not be empty")]
                return None

        assert await NotEmpty().check("text") == []
        assert [r.text for r in await NotEmpty().check("")] == ["Must not be empty"]

    @pytest.mark.asyncio
    async def test_async_on_check(self):
        class AlwaysFails(Constraint):
            async def _on_check(self, value, cancellation):
                return [Requirement("Always fails")]

        assert len(await AlwaysFails().check(object())) == 1


class TestCoercion:
    """Tests for as_constraint and the @constraint decorator."""

    def test_constraint_passes_through(self):
        inline = Constraint.from_callback(lambda value: [])

        assert as_constraint(inline) is inline

    def test_duck_typed_checkable_passes_through(self):
        class Checkable:
            async def check(self, value, cancellation=None):
                return []

        checkable = Checkable()

        assert as_constraint(checkable) is checkable

    def test_plain_function_becomes_callback_constraint(self):
        assert isinstance(as_constraint(lambda value: []), CallbackConstraint)

    def test_coroutine_function_becomes_async_callback_constraint(self):
        async def check(value, cancellation):
            return []

        assert isinstance(as_constraint(check), AsyncCallbackConstraint)

    def test_object_with_async_call_becomes_async_callback_constraint(self):
        class Remote:
            async def __call__(self, value, cancellation):
                return []

        assert isinstance(as_constraint(Remote()), AsyncCallbackConstraint)

    def test_none_raises(self):
        with pytest.raises(ValueError):
            as_constraint(None)

    def test_non_callable_raises(self):
        with pytest.raises(TypeError):
            as_constraint(42)

    @pytest.mark.asyncio
    async def test_decorator(self):
        @constraint
        def has_name(user: dict) -> list[Requirement]:
            if not user.get("name"):
                return [Requirement("Name is required", ["name"])]
            return []

        assert isinstance(has_name, CallbackConstraint)
        assert await has_name.check({"name": "Ada"}) == []
        assert (await has_name.check({}))[0].member_names == ("name",)

    @pytest.mark.asyncio
    async def test_decorator_on_coroutine(self):
        @constraint
        async def is_available(username: str, cancellation: CancellationToken) -> list[Requirement]:
            await asyncio.sleep(0)
            return [Requirement("Username is taken")] if username == "admin" else []

        assert isinstance(is_available, AsyncCallbackConstraint)
        assert await is_available.check("ada") == []
        assert len(await is_available.check("admin")) == 1

    def test_predicate_adapters_are_constraints(self):
        assert isinstance(Constraint.from_predicate(lambda value: True), PredicateConstraint)
        assert isinstance(
            Constraint.from_async_predicate(lambda value, cancellation: None),
            AsyncPredicateConstraint,
        )


class TestSingleRequirementResult:
    """A bare Requirement returned by a check counts as one requirement."""

    @pytest.mark.asyncio
    async def test_callback_returning_one_requirement(self):
        expected = Requirement("Must not be null", ["name"])

        actual = await Constraint.from_callback(lambda value: expected).check(object())

        assert len(actual) == 1
        assert actual[0] is expected

    @pytest.mark.asyncio
    async def test_async_callback_returning_one_requirement(self):
        expected = Requirement("Username is taken")

        async def is_available(value, cancellation):
            return expected

        actual = await Constraint.from_async_callback(is_available).check("admin")

        assert len(actual) == 1
        assert actual[0] is expected


class TestTwoArgumentCallables:
    """Plain callables taking (value, cancellation) are treated as async callbacks."""

    @pytest.mark.asyncio
    async def test_lambda_returning_coroutine(self):
        expected = Requirement("Username is taken")
        tokens: list[CancellationToken] = []

        async def remote(value, cancellation):
            tokens.append(cancellation)
            await asyncio.sleep(0)
            return [expected]

        coerced = as_constraint(lambda value, cancellation: remote(value, cancellation))
        token = CancellationToken()

        assert isinstance(coerced, AsyncCallbackConstraint)
        assert await coerced.check("admin", token) == [expected]
        assert tokens == [token]

    @pytest.mark.asyncio
    async def test_sync_two_argument_function(self):
        expected = Requirement("test requirement")

        def check(value, cancellation):
            return [expected] if not cancellation.is_cancelled else []

        assert await as_constraint(check).check(object()) == [expected]

    def test_optional_second_argument_stays_inline(self):
        assert isinstance(as_constraint(lambda value, extra=None: []), CallbackConstraint)

    @pytest.mark.asyncio
    async def test_decorator_on_two_argument_function(self):
        @constraint
        def needs_token(value, cancellation):
            return []

        assert isinstance(needs_token, AsyncCallbackConstraint)
        assert await needs_token.check(object()) == []

    @pytest.mark.asyncio
    async def test_async_predicate_returning_plain_bool(self):
        expected = Requirement("test requirement")
        predicate = AsyncPredicateConstraint(lambda value, cancellation: False, expected)

        assert await predicate.check(object()) == [expected]


class TestClassObjectsRejected:
    """Constraint classes must be instantiated before use."""

    class NotEmpty(Constraint):
        def _on_check(self, value, cancellation):
            return [] if value else [Requirement("Must not be empty")]

    def test_as_constraint_rejects_constraint_class(self):
        with pytest.raises(TypeError):
            as_constraint(self.NotEmpty)

    def test_as_predicate_constraint_rejects_constraint_class(self):
        with pytest.raises(TypeError):
            as_predicate_constraint(self.NotEmpty)

    def test_instance_is_accepted(self):
        instance = self.NotEmpty()

        assert as_constraint(instance) is instance
