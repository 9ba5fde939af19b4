"""
TryOption — a deferred, exception-safe computation of an optional value.

Running a TryOption yields one of three outcomes:

    Success(Some(value))   a value was produced
    Success(NOTHING)       the computation ran and produced nothing
    Fault(error)           the computation raised

Like Try, it caches nothing and never raises when run.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from tryline.effects import NOTHING, Option, Some
from tryline.interception import expect, invoke
from tryline.outcome import Fault, Outcome, Success

T = TypeVar("T")
R = TypeVar("R")


class TryOption(Generic[T]):
    __slots__ = ("_thunk",)

    def __init__(self, thunk: Callable[[], Outcome[Option[T]]]) -> None:
        if not callable(thunk):
            raise TypeError("TryOption requires a zero-argument callable returning an Outcome")
        self._thunk = thunk

    @staticmethod
    def some(value: T) -> TryOption[T]:
        outcome = Success(Some(value))
        return TryOption(lambda: outcome)

    @staticmethod
    def none() -> TryOption[T]:
        outcome: Outcome[Option[T]] = Success(NOTHING)
        return TryOption(lambda: outcome)

    @staticmethod
    def fault(error: Exception) -> TryOption[T]:
        outcome: Outcome[Option[T]] = Fault(error)
        return TryOption(lambda: outcome)

    def run(self) -> Outcome[Option[T]]:
        """Invoke and return the Outcome; a success that is not an Option is captured as a fault."""
        return invoke(lambda: self._checked(self._thunk()))

    def __call__(self) -> Outcome[Option[T]]:
        return self.run()

    def match(
        self,
        on_some: Callable[[T], R],
        on_none: Callable[[], R],
        on_fault: Callable[[Exception], R],
    ) -> R:
        """Run once and apply exactly one of the three handlers."""
        match self.run():
            case Success(Some(value)):
                return on_some(value)
            case Success(_):
                return on_none()
            case Fault(error):
                return on_fault(error)
        raise TypeError("unreachable")  # pragma: no cover

    def to_optional(self) -> Option[T]:
        """Run once; faults collapse to NOTHING."""
        match self.run():
            case Success(option):
                return option
        return NOTHING

    @staticmethod
    def _checked(outcome: Outcome[Option[T]]) -> Outcome[Option[T]]:
        match outcome:
            case Success(option):
                expect(option, Option, "deferred optional computation")
        return outcome

    def __repr__(self) -> str:
        return f"TryOption({getattr(self._thunk, '__qualname__', repr(self._thunk))})"
