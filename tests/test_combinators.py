"""Tests for the color-polymorphic combinators."""

from collections.abc import Callable
from typing import Any

import pytest
from hypothesis import given
from polyresult import (
    Deferred,
    Failure,
    NotAnOutcomeError,
    Pending,
    Success,
    catch_error,
    failure,
    flat_map,
    flat_map_error,
    is_pending,
    map,  # noqa: A004
    map_error,
    match,
    pipe,
    success,
    tap,
    tap_both,
    tap_error,
)

from tests.helpers import later, raise_later
from tests.strategies import error_codes, int_binds, int_functions, integers, outcomes


class Spy:
    """Callable recording its arguments."""

    def __init__(self, result: Any = None) -> None:
        self.calls: list[Any] = []
        self.result = result

    def __call__(self, arg: Any) -> Any:
        self.calls.append(arg)
        return self.result


def _boom(_: Any) -> Any:
    msg = 'boom'
    raise RuntimeError(msg)


class TestMap:
    """Tests for map."""

    def test_transforms_success(self) -> None:
        assert map(success(2), lambda x: x * 3) == Success(6)

    def test_failure_passes_through(self) -> None:
        spy = Spy()
        assert map(failure('e'), spy) == Failure('e')
        assert spy.calls == []

    def test_inactive_channel_returns_equal_new_outcome(self) -> None:
        original = failure('e')
        out = map(original, lambda x: x)
        assert out == original
        assert out is not original

    def test_data_last(self) -> None:
        assert map(lambda x: x + 1)(success(1)) == Success(2)

    def test_immediate_stays_immediate(self) -> None:
        assert not is_pending(map(success(1), lambda x: x + 1))

    def test_defect_propagates(self) -> None:
        with pytest.raises(RuntimeError, match='boom'):
            map(success(1), _boom)

    def test_non_outcome_subject(self) -> None:
        with pytest.raises(NotAnOutcomeError) as exc_info:
            map(42, lambda x: x)
        assert exc_info.value.value == 42
        assert isinstance(exc_info.value, TypeError)

    async def test_pending_subject(self) -> None:
        out = map(later(success(2)), lambda x: x * 3)
        assert isinstance(out, Deferred)
        assert await out == Success(6)

    async def test_pending_transform(self) -> None:
        out = map(success(2), lambda x: later(x * 3))
        assert isinstance(out, Deferred)
        assert await out == Success(6)

    async def test_pending_subject_and_transform(self) -> None:
        assert await map(later(success(2)), lambda x: later(x * 3)) == Success(6)

    async def test_pending_failure_passes_through(self) -> None:
        spy = Spy()
        assert await map(later(failure('e')), spy) == Failure('e')
        assert spy.calls == []

    async def test_pending_defect_propagates_on_await(self) -> None:
        out = map(later(success(1)), _boom)
        with pytest.raises(RuntimeError, match='boom'):
            await out

    async def test_rejected_subject_propagates(self) -> None:
        out = map(raise_later(KeyError('k')), lambda x: x)
        with pytest.raises(KeyError):
            await out

    async def test_pending_non_outcome(self) -> None:
        with pytest.raises(NotAnOutcomeError):
            await map(later(42), lambda x: x)

    @given(value=integers, fn=int_functions)
    def test_identity_law(self, value: int, fn: Callable[[int], int]) -> None:
        """map(s, id) == s and map(s, f) == Success(f(v))."""
        assert map(success(value), lambda x: x) == success(value)
        assert map(success(value), fn) == success(fn(value))

    @given(value=integers, f=int_functions, g=int_functions)
    def test_composition_law(self, value: int, f: Callable[[int], int], g: Callable[[int], int]) -> None:
        assert map(map(success(value), f), g) == map(success(value), lambda x: g(f(x)))


class TestMapError:
    """Tests for map_error."""

    def test_transforms_failure(self) -> None:
        assert map_error(failure('e'), str.upper) == Failure('E')

    def test_success_passes_through(self) -> None:
        spy = Spy()
        assert map_error(success(1), spy) == Success(1)
        assert spy.calls == []

    async def test_pending_transform(self) -> None:
        assert await map_error(failure('e'), lambda e: later(e * 2)) == Failure('ee')

    async def test_pending_subject(self) -> None:
        assert await map_error(later(failure(1)), lambda e: e + 1) == Failure(2)


class TestCatchError:
    """Tests for catch_error."""

    def test_recovers(self) -> None:
        assert catch_error(failure('e'), lambda e: f'default for {e}') == Success('default for e')

    def test_success_passes_through(self) -> None:
        spy = Spy()
        assert catch_error(success(1), spy) == Success(1)
        assert spy.calls == []

    async def test_pending_recovery(self) -> None:
        assert await catch_error(failure('e'), lambda e: later(0)) == Success(0)

    @given(outcome=outcomes)
    def test_always_success(self, outcome: Success[Any] | Failure[Any]) -> None:
        assert catch_error(outcome, lambda e: e).ok is True


class TestFlatMap:
    """Tests for flat_map."""

    def test_flattens(self) -> None:
        assert flat_map(success(2), lambda x: success(x + 1)) == Success(3)

    def test_transform_failure(self) -> None:
        assert flat_map(success(2), lambda x: failure('no')) == Failure('no')

    def test_failure_passes_through(self) -> None:
        spy = Spy(success(1))
        assert flat_map(failure('e'), spy) == Failure('e')
        assert spy.calls == []

    def test_transform_must_return_outcome(self) -> None:
        with pytest.raises(NotAnOutcomeError):
            flat_map(success(1), lambda x: x)

    async def test_pending_transform(self) -> None:
        out = flat_map(success(2), lambda x: later(failure(f'bad {x}')))
        assert isinstance(out, Deferred)
        assert await out == Failure('bad 2')

    async def test_pending_transform_must_settle_to_outcome(self) -> None:
        with pytest.raises(NotAnOutcomeError):
            await flat_map(success(2), lambda x: later(x))

    async def test_chain_of_pending_steps(self) -> None:
        out = flat_map(flat_map(later(success(1)), lambda x: later(success(x + 1))), lambda x: success(x * 10))
        assert await out == Success(20)

    async def test_async_transform_returning_chain(self) -> None:
        """An async def that returns another chain is flattened to that chain's outcome."""

        async def step(x: int) -> Any:
            return map(later(success(x)), lambda v: v * 10)

        assert await flat_map(success(1), step) == Success(10)

    async def test_pending_subject_settling_to_pending(self) -> None:
        async def nested() -> Any:
            return later(success(2))

        assert await flat_map(nested(), lambda x: success(x + 1)) == Success(3)

    @given(value=integers, fn=int_binds)
    def test_left_identity(self, value: int, fn: Callable[[int], Any]) -> None:
        assert flat_map(success(value), fn) == fn(value)

    @given(outcome=outcomes)
    def test_right_identity(self, outcome: Success[Any] | Failure[Any]) -> None:
        assert flat_map(outcome, success) == outcome

    @given(value=integers, f=int_binds, g=int_binds)
    def test_associativity(self, value: int, f: Callable[[int], Any], g: Callable[[Any], Any]) -> None:
        def safe_g(x: Any) -> Any:
            return g(x) if isinstance(x, int) else success(x)

        left = flat_map(flat_map(success(value), f), safe_g)
        right = flat_map(success(value), lambda x: flat_map(f(x), safe_g))
        assert left == right


class TestFlatMapError:
    """Tests for flat_map_error."""

    def test_recovers_with_outcome(self) -> None:
        assert flat_map_error(failure('e'), lambda e: success(0)) == Success(0)

    def test_replaces_failure(self) -> None:
        assert flat_map_error(failure('e'), lambda e: failure(f'wrapped {e}')) == Failure('wrapped e')

    def test_success_passes_through(self) -> None:
        spy = Spy(success(0))
        assert flat_map_error(success(1), spy) == Success(1)
        assert spy.calls == []

    async def test_pending(self) -> None:
        assert await flat_map_error(later(failure('e')), lambda e: later(success(e))) == Success('e')


class TestTap:
    """Tests for tap, tap_error and tap_both."""

    def test_tap_calls_once_and_passes_through(self) -> None:
        spy = Spy()
        out = tap(success(5), spy)
        assert spy.calls == [5]
        assert out == Success(5)

    def test_tap_ignores_return_value(self) -> None:
        assert tap(success(5), lambda x: 'ignored') == Success(5)

    def test_tap_skips_failure(self) -> None:
        spy = Spy()
        assert tap(failure('e'), spy) == Failure('e')
        assert spy.calls == []

    def test_tap_error(self) -> None:
        spy = Spy()
        assert tap_error(failure('e'), spy) == Failure('e')
        assert spy.calls == ['e']

    def test_tap_error_skips_success(self) -> None:
        spy = Spy()
        assert tap_error(success(1), spy) == Success(1)
        assert spy.calls == []

    def test_tap_both_receives_outcome(self) -> None:
        spy = Spy()
        tap_both(success(1), spy)
        tap_both(failure('e'), spy)
        assert spy.calls == [Success(1), Failure('e')]

    def test_tap_defect_propagates(self) -> None:
        with pytest.raises(RuntimeError, match='boom'):
            tap(success(1), _boom)

    async def test_async_callback_is_awaited_first(self) -> None:
        events: list[str] = []

        async def record(value: int) -> None:
            await later(None)
            events.append(f'tapped {value}')

        out = tap(success(5), record)
        assert isinstance(out, Deferred)
        assert await out == Success(5)
        assert events == ['tapped 5']

    async def test_pending_subject(self) -> None:
        spy = Spy()
        assert await tap(later(success(5)), spy) == Success(5)
        assert spy.calls == [5]

    async def test_async_callback_defect_propagates(self) -> None:
        out = tap_error(failure('e'), lambda e: raise_later(ValueError(e)))
        with pytest.raises(ValueError, match='e'):
            await out


class TestMatch:
    """Tests for match."""

    def test_success_handler(self) -> None:
        assert match(success(2), lambda v: f'value {v}', lambda e: f'error {e}') == 'value 2'

    def test_failure_handler(self) -> None:
        assert match(failure('x'), lambda v: f'value {v}', lambda e: f'error {e}') == 'error x'

    def test_returns_handler_result_as_is(self) -> None:
        """An immediate subject never wraps or awaits the handler result."""
        coro = later(1)
        try:
            assert match(success(0), lambda v: coro, lambda e: None) is coro
        finally:
            coro.close()

    def test_data_last(self) -> None:
        assert match(str, len)(failure('abc')) == 3

    async def test_pending_subject(self) -> None:
        out = match(later(failure('x')), lambda v: v, lambda e: e.upper())
        assert isinstance(out, Pending)
        assert not isinstance(out, Deferred)
        assert await out == 'X'

    async def test_pending_subject_awaits_pending_handler(self) -> None:
        assert await match(later(success(2)), lambda v: later(v * 2), lambda e: 0) == 4


class TestPipelines:
    """Combinators chained with pipe."""

    def test_validation_short_circuits(self) -> None:
        """A failed validation skips later steps and keeps its error."""

        def validate(name: str) -> Any:
            return failure('SHORT') if len(name) <= 2 else success(name)

        mapper = Spy('unused')
        out = flat_map(success('zu'), validate)
        assert out == Failure('SHORT')
        assert pipe(out, map(mapper)) == Failure('SHORT')
        assert mapper.calls == []

    def test_two_letter_name_passes_strict_check(self) -> None:
        def validate(name: str) -> Any:
            return failure('SHORT') if len(name) < 2 else success(name)

        assert pipe(success('zu'), flat_map(validate), map(str.upper)) == Success('ZU')
        assert pipe(success('z'), flat_map(validate), map(str.upper)) == Failure('SHORT')

    async def test_color_contagion_through_pipe(self) -> None:
        out = pipe(
            success(1),
            map(lambda x: x + 1),
            flat_map(lambda x: later(success(x * 10))),
            map(lambda x: x + 1),
        )
        assert isinstance(out, Deferred)
        assert await out == Success(21)

    @given(outcome=outcomes, error=error_codes)
    def test_failure_channel_untouched_by_success_steps(
        self, outcome: Success[Any] | Failure[Any], error: str
    ) -> None:
        out = pipe(failure(error), map(lambda x: x), flat_map(success), tap(lambda x: None))
        assert out == Failure(error)
        assert pipe(outcome) == outcome
