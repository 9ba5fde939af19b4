"""
Diagnostic hook — the one process-wide observer of captured faults.

Every time a raised exception is captured into a Fault, the registered
hook is called once with the error, synchronously, before the Fault is
handed back to anyone. Reading that Fault later (matching it, passing it
through map/bind) never calls the hook again.

The default hook does nothing. Applications register a hook once at
startup, either directly:

    set_error_hook(lambda error: sentry_sdk.capture_exception(error))

or through tryline.config.configure(), which installs logging_hook when
TRYLINE_LOG_CAPTURED_FAULTS is set. Tests swap it for the duration of a
block with the error_hook() context manager.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeAlias

import structlog

from tryline.errors import describe_error

ErrorHook: TypeAlias = Callable[[Exception], None]


def _no_op(error: Exception) -> None:
    """Default hook."""


_hook: ErrorHook = _no_op


# ──────────────────────── Registration ────────────────────────


def get_error_hook() -> ErrorHook:
    """Return the currently registered hook."""
    return _hook


def set_error_hook(hook: ErrorHook) -> ErrorHook:
    """
    Register the process-wide hook and return the one it replaces.

    Passing None is a programming error, not a way to disable the hook;
    use reset_error_hook() for that.
    """
    global _hook
    if hook is None or not callable(hook):
        raise TypeError("error hook must be a callable taking one exception")
    previous = _hook
    _hook = hook
    return previous


def reset_error_hook() -> None:
    """Restore the no-op default."""
    global _hook
    _hook = _no_op


@contextmanager
def error_hook(hook: ErrorHook) -> Iterator[ErrorHook]:
    """
    Install a hook for the duration of a with-block.

        seen = []
        with error_hook(seen.append):
            Try.of(lambda: 1 / 0).run()
        assert len(seen) == 1
    """
    previous = set_error_hook(hook)
    try:
        yield hook
    finally:
        set_error_hook(previous)


# ──────────────────────── Reporting ────────────────────────


def report(error: Exception) -> None:
    """
    Hand a freshly captured error to the hook.

    The logger is looked up on every call so that a later
    structlog.configure() (or capture_logs) applies to these events.

    A hook that raises is logged and otherwise ignored: capturing a fault
    must never itself raise.
    """
    hook = _hook
    try:
        hook(error)
    except Exception as hook_error:
        structlog.get_logger().error(
            "diagnostic_hook.failed",
            hook=getattr(hook, "__qualname__", repr(hook)),
            error=describe_error(hook_error),
            captured_error=describe_error(error),
        )


def logging_hook(error: Exception) -> None:
    """Hook that logs every captured fault as a structlog warning."""
    structlog.get_logger().warning(
        "try.fault_captured",
        error_type=type(error).__name__,
        error=describe_error(error),
        exc_info=error,
    )


# ──────────────────────── structlog setup ────────────────────────


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for human-readable console output.

    Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
