"""
Test assertions for Try values.

Each assertion runs the Try exactly once and produces a clear message
when it does not hold.

Usage in tests:
    from tryline import TryAssertions

    def test_parse_port():
        value = TryAssertions.assert_success(parse_port("8080"))
        assert value == 8080

    def test_parse_port_rejects_text():
        TryAssertions.assert_fault(parse_port("http"), ValueError)
        TryAssertions.assert_fault_message_contains(parse_port("http"), "invalid literal")
"""

from __future__ import annotations

from typing import Any, TypeVar

from tryline.errors import describe_error
from tryline.outcome import Fault, Success
from tryline.try_ import Try

T = TypeVar("T")


class TryAssertions:
    """Expressive test assertions for Try values."""

    @staticmethod
    def assert_success(computation: Try[T], message: str = "") -> T:
        """
        Assert the Try runs to a Success and return the value.

            value = TryAssertions.assert_success(computation)
        """
        context = f" — {message}" if message else ""
        match computation.run():
            case Success(value):
                return value
            case Fault(error):
                raise AssertionError(
                    f"Expected Success but got Fault("
                    f"{type(error).__name__}: {describe_error(error)!r}){context}"
                )
        raise TypeError("unreachable")  # pragma: no cover

    @staticmethod
    def assert_fault(
        computation: Try[T],
        expected_type: type[Exception] | None = None,
        message: str = "",
    ) -> Exception:
        """
        Assert the Try runs to a Fault, optionally of a given exception type.

            error = TryAssertions.assert_fault(computation, ZeroDivisionError)
        """
        context = f" — {message}" if message else ""
        match computation.run():
            case Success(value):
                raise AssertionError(f"Expected Fault but got Success({value!r}){context}")
            case Fault(error):
                if expected_type is not None:
                    assert isinstance(error, expected_type), (
                        f"Expected fault of type {expected_type.__name__} "
                        f"but got {type(error).__name__}: {describe_error(error)!r}{context}"
                    )
                return error
        raise TypeError("unreachable")  # pragma: no cover

    @staticmethod
    def assert_fault_message_contains(computation: Try[T], substring: str) -> None:
        """Assert that the fault description contains the given substring (case-insensitive)."""
        description = describe_error(TryAssertions.assert_fault(computation))
        assert substring.lower() in description.lower(), (
            f"Expected fault message to contain {substring!r} "
            f"but message was: {description!r}"
        )

    @staticmethod
    def assert_fault_message_equals(computation: Try[T], expected_message: str) -> None:
        """Assert that the fault description exactly equals the expected message."""
        description = describe_error(TryAssertions.assert_fault(computation))
        assert description == expected_message, (
            f"Expected fault message {expected_message!r} but got {description!r}"
        )

    @staticmethod
    def assert_success_value(computation: Try[T], expected_value: Any) -> None:
        """Assert the Try runs to a Success with the specific value."""
        value = TryAssertions.assert_success(computation)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )
