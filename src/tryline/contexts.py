"""
Fluent contexts — stage a success handler now, supply the fault handler later.

    greeting = (
        Try.of(lambda: users[user_id])
        .succ(lambda user: f"Hello {user.name}")
        .fail(lambda err: f"Unknown user: {err}")
    )

A staged context has nothing to observe on its own; it only becomes a
value once a fault handler (or a fallback value) completes it. Each
completion runs the underlying Try once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from tryline.try_ import Try

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class SuccContext(Generic[T, R]):
    """A Try paired with a staged success handler."""

    source: Try[T]
    succ_handler: Callable[[T], R]

    def fail(self, fail_handler: Callable[[Exception], R]) -> R:
        return self.source.match(self.succ_handler, fail_handler)

    def fail_value(self, fail_value: R) -> R:
        return self.source.match(self.succ_handler, lambda _error: fail_value)


@dataclass(frozen=True, slots=True)
class SuccUnitContext(Generic[T]):
    """A Try paired with a staged effect-only success handler."""

    source: Try[T]
    succ_handler: Callable[[T], Any]

    def fail(self, fail_handler: Callable[[Exception], Any]) -> None:
        self.source.match(self.succ_handler, fail_handler)
