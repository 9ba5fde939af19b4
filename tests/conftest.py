"""
Shared test fixtures for the tryline test suite.

The diagnostic hook is process-wide state: every test starts and ends
with the no-op default so that nothing leaks from one test to the next.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tryline import error_hook, reset_error_hook


@pytest.fixture(autouse=True)
def _isolated_error_hook() -> Iterator[None]:
    """Reset the diagnostic hook around every test."""
    reset_error_hook()
    yield
    reset_error_hook()


@pytest.fixture()
def captured_faults() -> Iterator[list[Exception]]:
    """Record every error handed to the diagnostic hook during the test."""
    seen: list[Exception] = []
    with error_hook(seen.append):
        yield seen


def divide(a: int, b: int) -> float:
    """Plain division — raises ZeroDivisionError for b == 0."""
    return a / b


class CallCounter:
    """Callable wrapper that counts how often it is invoked."""

    def __init__(self, fn=lambda *args: args[0] if args else None) -> None:
        self.fn = fn
        self.calls = 0

    def __call__(self, *args):
        self.calls += 1
        return self.fn(*args)
