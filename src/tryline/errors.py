"""
Error values — what a Fault carries and how to describe it.

The error value of a Fault is the captured exception itself: its identity
survives every pass-through, so the object a caller receives in a fault
handler is the one that was raised.

One error is produced by the library rather than captured from user code:
FilteredError, the sentinel a filter step produces when its predicate
rejects the success value.
"""

from __future__ import annotations

import traceback

FILTERED_MESSAGE = "Filtered"


class FilteredError(Exception):
    """
    Sentinel fault produced when a filter predicate rejects a value.

    >>> str(FilteredError())
    'Filtered'
    """

    def __init__(self, message: str = FILTERED_MESSAGE) -> None:
        super().__init__(message)


def describe_error(error: BaseException) -> str:
    """Textual description of an error value: its message, or its type name when empty."""
    message = str(error)
    return message if message else type(error).__name__


def full_stack_trace(error: BaseException) -> str:
    """
    Description followed by the formatted traceback, cause chain included.

    Errors that were never raised have no traceback; the description alone is returned.
    """
    if error.__traceback__ is None and error.__cause__ is None and error.__context__ is None:
        return describe_error(error)
    tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return f"{describe_error(error)}\n{tb}"
