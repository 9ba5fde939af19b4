"""
Outcome — the result of invoking a Try.

An Outcome[T] is either Success(value: T) or Fault(error: Exception).
Exactly one of the two is populated: a Fault never carries a value and a
Success never carries an error. Unlike a deferred Try, an Outcome is a
plain value: reading it any number of times never re-runs anything.

    Try ──run()──→ Outcome
                     ├── Success(value)
                     └── Fault(error)

A Success may hold None (a computation is allowed to succeed with
"nothing"); only Fault insists on a real exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from tryline.errors import describe_error

T = TypeVar("T")
R = TypeVar("R")


class Outcome(Generic[T]):
    """
    Sum type produced by invoking a deferred computation.

        >>> Success(42).is_success()
        True
        >>> Fault(ValueError("boom")).match(str, lambda e: f"error: {e}")
        'error: boom'
    """

    def __new__(cls, *args, **kwargs):
        # Only the two tracks exist; a bare Outcome would be neither.
        if cls is Outcome:
            raise TypeError("Outcome cannot be instantiated; use Success or Fault")
        return super().__new__(cls)

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Outcome is a Success."""
        return isinstance(self, Success)

    def is_fault(self) -> bool:
        """Check if this Outcome is a Fault."""
        return isinstance(self, Fault)

    def get(self) -> T:
        """
        Extract the success value. Raises ValueError if called on a Fault.

        Prefer .match() or match/case for safe access.
        """
        match self:
            case Success(value):
                return value
            case Fault(error):
                raise ValueError(f"Cannot get value from a Fault: {describe_error(error)}")
        raise TypeError("unreachable")  # pragma: no cover

    def get_error(self) -> Exception:
        """
        Extract the captured error. Raises ValueError if called on a Success.

        Prefer .match() or match/case for safe access.
        """
        match self:
            case Fault(error):
                return error
            case Success(value):
                raise ValueError(f"Cannot get error from a Success: {value!r}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Elimination ────────────────────────

    def match(
        self,
        on_success: Callable[[T], R],
        on_fault: Callable[[Exception], R],
    ) -> R:
        """
        Apply exactly one of two functions depending on the state.

        Reading an Outcome never re-runs the computation that produced it,
        so matching it repeatedly never reports the fault again.
        """
        match self:
            case Success(value):
                return on_success(value)
            case Fault(error):
                return on_fault(error)
        raise TypeError("unreachable")  # pragma: no cover

    def __bool__(self) -> bool:
        """Allow truthiness check: `if outcome: ...` succeeds only on Success."""
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success(Outcome[T]):
    """The success track — wraps a value of type T (None included)."""

    value: T

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True, slots=True, eq=False)
class Fault(Outcome[T]):
    """The fault track — wraps the captured exception."""

    error: Exception

    def __post_init__(self) -> None:
        if self.error is None:
            raise TypeError("Fault error must not be None")
        if not isinstance(self.error, Exception):
            raise TypeError(f"Fault error must be an Exception, got {type(self.error).__name__}")

    def __repr__(self) -> str:
        return f"Fault({type(self.error).__name__}: {describe_error(self.error)!r})"

    def __eq__(self, other: object) -> bool:
        # Exceptions compare by identity; two faults are equal only when
        # they carry the very same captured error.
        if isinstance(other, Fault):
            return self.error is other.error
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Fault", id(self.error)))
