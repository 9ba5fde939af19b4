"""
Try — a deferred, exception-safe computation.

A Try[T] wraps a zero-argument thunk that produces an Outcome[T]. Nothing
runs until the Try is invoked, and every invocation runs the thunk again:
there is no cached result. Invoking a Try never raises; anything the thunk
raises comes back as a Fault and is reported once to the diagnostic hook.

    ┌──────────┐    map     ┌──────────┐   bind     ┌──────────┐   if_fail(-1)
    │ Try.of   │──Success──→│  x + 1   │──Success──→│ lookup   │──Success──→ value
    │ (10 / x) │            │          │            │          │
    └────┬─────┘            └────┬─────┘            └────┬─────┘
         │ Fault                 │ Fault                 │ Fault
         └───────────────────────┴───────────────────────┴──────────────→ -1

Combinators build new Try values; they never mutate the one they are
called on. Terminal operations (match, if_fail, fold, count, ...) invoke
the Try once and eliminate the Outcome.

    >>> Try.of(lambda: 10 / 2).map(lambda x: x + 1).if_fail(-1)
    6.0
    >>> Try.of(lambda: 10 / 0).map(lambda x: x + 1).if_fail(-1)
    -1
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, TypeVar

from tryline.contexts import SuccContext, SuccUnitContext
from tryline.effects import NOTHING, Either, Left, Option, Right, Some
from tryline.errors import FilteredError, describe_error
from tryline.interception import expect, invoke
from tryline.outcome import Fault, Outcome, Success
from tryline.try_option import TryOption

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")
S = TypeVar("S")


class Try(Generic[T]):
    """
    Deferred computation yielding Success(value) or Fault(error) when run.

    Construct explicitly — there is no implicit lifting of raw values:

        Try(lambda: Success(42))        # thunk returning an Outcome
        Try.of(lambda: int(text))       # thunk returning a plain value
        Try.success(42)
        Try.fault(ValueError("bad"))
    """

    __slots__ = ("_thunk",)

    def __init__(self, thunk: Callable[[], Outcome[T]]) -> None:
        if not callable(thunk):
            raise TypeError("Try requires a zero-argument callable returning an Outcome")
        self._thunk = thunk

    # ──────────────────────── Construction ────────────────────────

    @staticmethod
    def of(computation: Callable[[], T]) -> Try[T]:
        """Wrap a computation returning a plain value; raising inside it yields a Fault."""
        if not callable(computation):
            raise TypeError("Try.of requires a zero-argument callable")
        return Try(lambda: Success(computation()))

    @staticmethod
    def success(value: T) -> Try[T]:
        """A Try that always succeeds with value."""
        outcome = Success(value)
        return Try(lambda: outcome)

    @staticmethod
    def fault(error: Exception) -> Try[T]:
        """A Try that always yields Fault(error). The hook is not called: nothing was captured."""
        outcome: Outcome[T] = Fault(error)
        return Try(lambda: outcome)

    # ──────────────────────── Invocation ────────────────────────

    def run(self) -> Outcome[T]:
        """
        Invoke the computation and return its Outcome. Never raises.

        Each call re-runs the thunk; a fault raised during the run is
        reported to the diagnostic hook before it is returned.
        """
        return invoke(self._thunk)

    def __call__(self) -> Outcome[T]:
        return self.run()

    def if_fail_throw(self) -> T:
        """
        Return the success value, or raise the captured error.

        The one sanctioned way to turn a Fault back into a raised exception.
        """
        match self.run():
            case Success(value):
                return value
            case Fault(error):
                raise error
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core combinators ────────────────────────

    def map(self, mapper: Callable[[T], U]) -> Try[U]:
        """
        Transform the success value. Faults pass through and mapper is never called.

            Try.success(5).map(lambda x: x * 2)   # runs to Success(10)
        """

        def mapped() -> Outcome[U]:
            outcome = self.run()
            match outcome:
                case Success(value):
                    return Success(mapper(value))
            return outcome

        return Try(mapped)

    def bind(self, binder: Callable[[T], Try[U]]) -> Try[U]:
        """
        Chain a Try-returning function. Short-circuits on fault.

        A binder that raises, or returns something other than a Try, is captured.
        """

        def bound() -> Outcome[U]:
            outcome = self.run()
            match outcome:
                case Success(value):
                    return expect(binder(value), Try, "bind step").run()
            return outcome

        return Try(bound)

    def filter(self, predicate: Callable[[T], bool]) -> Try[T]:
        """
        Keep the success value only when predicate holds.

        A rejected value becomes Fault(FilteredError()); an accepted one is
        passed through as the very same Outcome.
        """

        def filtered() -> Outcome[T]:
            outcome = self.run()
            match outcome:
                case Success(value) if not predicate(value):
                    return Fault(FilteredError())
            return outcome

        return Try(filtered)

    def where(self, predicate: Callable[[T], bool]) -> Try[T]:
        """Alias of filter."""
        return self.filter(predicate)

    # ──────────────────────── Elimination ────────────────────────

    def match(
        self,
        on_success: Callable[[T], R],
        on_fault: Callable[[Exception], R],
    ) -> R:
        """
        Run once and apply exactly one of the handlers.

            Try.of(load).match(
                on_success=lambda cfg: cfg.name,
                on_fault=lambda err: f"unavailable: {err}",
            )

        Handlers are plain code: what they raise is not captured.
        """
        return self.run().match(on_success, on_fault)

    def match_or(self, on_success: Callable[[T], R], fail_value: R) -> R:
        """Run once; apply on_success, or return fail_value on fault. fail_value must not be None."""
        if fail_value is None:
            raise TypeError("fail_value must not be None")
        return self.run().match(on_success, lambda _error: fail_value)

    def if_fail(self, default_value: T) -> T:
        """
        Return the success value, or default_value on fault.

        None is rejected before the Try is run.
        """
        if default_value is None:
            raise TypeError("default_value must not be None")
        match self.run():
            case Success(value):
                return value
        return default_value

    def if_fail_with(self, fallback: Callable[[], T]) -> T:
        """Return the success value, or the result of fallback() on fault."""
        match self.run():
            case Success(value):
                return value
        return fallback()

    def if_succ(self, action: Callable[[T], Any]) -> None:
        """Run action on the success value for its side effect. Nothing happens on fault."""
        match self.run():
            case Success(value):
                action(value)

    def iter(self, action: Callable[[T], Any]) -> None:
        """Alias of if_succ."""
        self.if_succ(action)

    def fold(self, state: S, folder: Callable[[S, T], S]) -> S:
        """folder(state, value) on success; state unchanged on fault."""
        match self.run():
            case Success(value):
                return folder(state, value)
        return state

    def exists(self, predicate: Callable[[T], bool]) -> bool:
        """predicate(value) on success; False on fault."""
        match self.run():
            case Success(value):
                return bool(predicate(value))
        return False

    def for_all(self, predicate: Callable[[T], bool]) -> bool:
        """
        predicate(value) on success; False on fault.

        A Try holds at most one value, so this agrees with exists() by
        definition, fault case included.
        """
        match self.run():
            case Success(value):
                return bool(predicate(value))
        return False

    def count(self) -> int:
        """1 on success (whatever the value, None included), 0 on fault."""
        return 1 if self.run().is_success() else 0

    def sum(self) -> Any:
        """The success value of a numeric Try, 0 on fault."""
        match self.run():
            case Success(value):
                return value
        return 0

    def as_string(self) -> str:
        """'Succ(value)', 'Succ(None)' or 'Fail(message)'."""
        return self.run().match(
            lambda value: "Succ(None)" if value is None else f"Succ({value})",
            lambda error: f"Fail({describe_error(error)})",
        )

    # ──────────────────────── Conversion adapters ────────────────────────

    def to_optional(self) -> Option[T]:
        """Run once. Some(value) on success, NOTHING on fault; the error is dropped."""
        match self.run():
            case Success(value):
                return Some(value)
        return NOTHING

    def to_deferred_optional(self) -> TryOption[T]:
        """
        A TryOption that runs this Try when it is run, collapsing faults to NOTHING.

        Building it does not run anything.
        """
        return TryOption(lambda: Success(self.to_optional()))

    def as_enumerable(self) -> Iterator[Either[Exception, T]]:
        """
        Lazily yield one Either: Left(error) when faulted, Right(value) otherwise.

        Unlike to_optional, the error stays observable.
        """
        yield self.run().match(Right, Left)

    def to_list(self) -> list[Either[Exception, T]]:
        return list(self.as_enumerable())

    def to_array(self) -> tuple[Either[Exception, T], ...]:
        return tuple(self.as_enumerable())

    # ──────────────────────── Fluent contexts ────────────────────────

    def succ(self, handler: Callable[[T], R]) -> SuccContext[T, R]:
        """
        Stage a success handler; complete with .fail(...) or .fail_value(...).

            label = Try.of(load).succ(lambda cfg: cfg.name).fail_value("default")
        """
        return SuccContext(self, handler)

    def succ_do(self, action: Callable[[T], Any]) -> SuccUnitContext[T]:
        """Stage an effect-only success handler; complete with .fail(action)."""
        return SuccUnitContext(self, action)

    # ──────────────────────── Dunder methods ────────────────────────

    def __repr__(self) -> str:
        return f"Try({getattr(self._thunk, '__qualname__', repr(self._thunk))})"
