"""
tryline — deferred, exception-safe computations for Python.

A Try wraps a computation that may raise. Nothing runs until the Try is
invoked; invoking it never raises, it yields an Outcome instead.

    from tryline import Try

    def divide(a: int, b: int) -> float:
        return a / b

    Try.of(lambda: divide(10, 2)).map(lambda x: x + 1).if_fail(-1)   # 6.0
    Try.of(lambda: divide(10, 0)).map(lambda x: x + 1).if_fail(-1)   # -1

Combinators (map, bind, filter, ...) build new Try values, the fusion
functions compose a Try with Option, Either, Reader, Writer, State and
collection steps, and every captured exception is reported once to the
diagnostic hook.
"""

from tryline.outcome import Outcome, Success, Fault
from tryline.errors import FilteredError, describe_error, full_stack_trace
from tryline.diagnostics import (
    error_hook,
    get_error_hook,
    logging_hook,
    reset_error_hook,
    set_error_hook,
)
from tryline.effects import (
    NOTHING,
    Either,
    Left,
    Nothing,
    Option,
    Reader,
    ReaderResult,
    Right,
    Some,
    State,
    StateResult,
    Writer,
    WriterResult,
)
from tryline.try_ import Try
from tryline.try_option import TryOption
from tryline.contexts import SuccContext, SuccUnitContext
from tryline.fusion import (
    fuse_either,
    fuse_mapping,
    fuse_option,
    fuse_reader,
    fuse_sequence,
    fuse_state,
    fuse_try,
    fuse_try_option,
    fuse_writer,
)
from tryline.config import TrySettings, configure
from tryline.assertions import TryAssertions

__all__ = [
    "Outcome",
    "Success",
    "Fault",
    "FilteredError",
    "describe_error",
    "full_stack_trace",
    "error_hook",
    "get_error_hook",
    "logging_hook",
    "reset_error_hook",
    "set_error_hook",
    "NOTHING",
    "Either",
    "Left",
    "Nothing",
    "Option",
    "Reader",
    "ReaderResult",
    "Right",
    "Some",
    "State",
    "StateResult",
    "Writer",
    "WriterResult",
    "Try",
    "TryOption",
    "SuccContext",
    "SuccUnitContext",
    "fuse_either",
    "fuse_mapping",
    "fuse_option",
    "fuse_reader",
    "fuse_sequence",
    "fuse_state",
    "fuse_try",
    "fuse_try_option",
    "fuse_writer",
    "TrySettings",
    "configure",
    "TryAssertions",
]

__version__ = "1.0.0"
