"""
Run-and-capture — the single place where raised exceptions become Faults.

Every combinator, adapter and fusion step crosses its boundary through
invoke() or capture(); nothing else in the package catches exceptions
raised by user code. A capture reports the error to the diagnostic hook
exactly once, at the moment it is caught. Faults that merely pass through
a later step are returned as they are and never reported again.

Only Exception is intercepted. KeyboardInterrupt, SystemExit and the other
BaseException subclasses keep propagating.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from tryline import diagnostics
from tryline.outcome import Fault, Outcome, Success

T = TypeVar("T")


def invoke(thunk: Callable[[], Outcome[T]]) -> Outcome[T]:
    """
    Run a zero-argument step that yields an Outcome, capturing anything it raises.

    The glue around the step is covered too: a step that returns something
    other than an Outcome is captured as a TypeError fault.
    """
    try:
        outcome = thunk()
        if not isinstance(outcome, (Success, Fault)):
            raise TypeError(
                f"deferred computation must return an Outcome, got {type(outcome).__name__}"
            )
        return outcome
    except Exception as error:
        diagnostics.report(error)
        return Fault(error)


def capture(fn: Callable[..., T], *args: Any) -> Outcome[T]:
    """Call fn(*args) and wrap its return value as Success, or its exception as Fault."""
    return invoke(lambda: Success(fn(*args)))


def expect(value: Any, shape: type | tuple[type, ...], what: str) -> Any:
    """Raise TypeError unless value is an instance of the expected shape."""
    if not isinstance(value, shape):
        raise TypeError(f"{what} must return {_shape_name(shape)}, got {type(value).__name__}")
    return value


def _shape_name(shape: type | tuple[type, ...]) -> str:
    if isinstance(shape, tuple):
        return " or ".join(s.__name__ for s in shape)
    return shape.__name__
