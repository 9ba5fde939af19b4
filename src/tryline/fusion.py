"""
Fusion — bind-then-project a Try through a step of another effect shape.

Every member takes the same three pieces:

    source   Try[T]
    step     T -> E[U]          (E is the foreign shape)
    project  (T, U) -> V

and returns an E[V] (a Try[V] when E is Try itself). All members follow
the same sequence, strictly in order:

    1. run source       fault          → E's failure/empty value
    2. step(value)      raises / empty → E's failure/empty value
                                         (a Left is passed on as it is)
    3. project(v, u)    raises         → E's failure/empty value
    4. wrap the projection in E's success representative

Once a stage fails nothing after it is called. Every exception raised on
the way is captured through tryline.interception and so reaches the
diagnostic hook exactly once.

Value shapes (Option, Either, sequences, mappings) run the source as soon
as the fusion is applied, just like Try.to_optional(). Deferred shapes
(Try, TryOption, Reader, Writer, State) run nothing until the fused result
is itself run, and run everything again on every invocation.

    >>> fuse_option(Try.success(2), lambda x: Some(x * 10), lambda x, y: x + y)
    Some(22)
    >>> fuse_option(Try.of(lambda: 1 / 0), lambda x: Some(x), lambda x, y: y)
    NOTHING
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, Callable, TypeVar

from tryline.effects import (
    NOTHING,
    BottomResult,
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
from tryline.interception import capture, expect
from tryline.outcome import Fault, Outcome, Success
from tryline.try_ import Try
from tryline.try_option import TryOption

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
K = TypeVar("K")
L = TypeVar("L")
Env = TypeVar("Env")
S = TypeVar("S")
W = TypeVar("W")

__all__ = [
    "fuse_try",
    "fuse_try_option",
    "fuse_option",
    "fuse_either",
    "fuse_sequence",
    "fuse_mapping",
    "fuse_reader",
    "fuse_writer",
    "fuse_state",
]


# ──────────────────────── Shared stages ────────────────────────


def _run_step(
    source: Try[T],
    step: Callable[[T], Any],
    shape: type | tuple[type, ...],
    what: str,
) -> Outcome[tuple[T, Any]]:
    """
    Stages 1 and 2: run source, then step on its value.

    Success((value, effect)) when both got through, otherwise the Fault of
    whichever stage stopped.
    """
    outcome = source.run()
    match outcome:
        case Success(value):
            return capture(lambda: (value, expect(step(value), shape, what)))
    return outcome


def _project_result(
    ran: Outcome[BottomResult],
    value: T,
    project: Callable[[T, Any], V],
    fallback: Callable[[], BottomResult],
) -> Any:
    """
    Stages 3 and 4 for shapes whose result carries a bottom marker.

    The foreign result is rebuilt with dataclasses.replace so whatever else
    it carries (written output, threaded state) is kept as it was.
    """
    match ran:
        case Success(result) if result.is_bottom:
            return replace(result, value=None)
        case Success(result):
            match capture(project, value, result.value):
                case Success(projected):
                    return replace(result, value=projected)
            return replace(result, value=None, is_bottom=True)
    return fallback()


# ──────────────────────── Deferred shapes ────────────────────────


def fuse_try(
    source: Try[T],
    step: Callable[[T], Try[U]],
    project: Callable[[T, U], V],
) -> Try[V]:
    """
    Try through a Try step — collapses back to a single Try[V].

    The fault that stops the chain is returned as it is, so the error seen
    downstream is the very object that was raised.
    """

    def fused() -> Outcome[V]:
        outcome = source.run()
        match outcome:
            case Success(value):
                inner = expect(step(value), Try, "try step").run()
                match inner:
                    case Success(inner_value):
                        return Success(project(value, inner_value))
                return inner
        return outcome

    return Try(fused)


def fuse_try_option(
    source: Try[T],
    step: Callable[[T], TryOption[U]],
    project: Callable[[T, U], V],
) -> TryOption[V]:
    """Try through a TryOption step. Faults stay faults, NOTHING stays NOTHING."""

    def fused() -> Outcome[Option[V]]:
        outcome = source.run()
        match outcome:
            case Success(value):
                inner = expect(step(value), TryOption, "try-option step").run()
                match inner:
                    case Success(Some(inner_value)):
                        return Success(Some(project(value, inner_value)))
                return inner
        return outcome

    return TryOption(fused)


def fuse_reader(
    source: Try[T],
    step: Callable[[T], Reader[Env, U]],
    project: Callable[[T, U], V],
) -> Reader[Env, V]:
    """Try through a Reader step. Any failure reads as a bottom ReaderResult."""

    def run(env: Env) -> ReaderResult[V]:
        match _run_step(source, step, Reader, "reader step"):
            case Success((value, reader)):
                ran = capture(lambda: expect(reader(env), ReaderResult, "reader"))
                return _project_result(ran, value, project, ReaderResult.bottom)
        return ReaderResult.bottom()

    return Reader(run)


def fuse_writer(
    source: Try[T],
    step: Callable[[T], Writer[W, U]],
    project: Callable[[T, U], V],
) -> Writer[W, V]:
    """
    Try through a Writer step.

    Output the step's writer produced is kept even when the result ends up bottom.
    """

    def run() -> WriterResult[W, V]:
        match _run_step(source, step, Writer, "writer step"):
            case Success((value, writer)):
                ran = capture(lambda: expect(writer(), WriterResult, "writer"))
                return _project_result(ran, value, project, WriterResult.bottom)
        return WriterResult.bottom()

    return Writer(run)


def fuse_state(
    source: Try[T],
    step: Callable[[T], State[S, U]],
    project: Callable[[T, U], V],
) -> State[S, V]:
    """
    Try through a State step.

    A bottom result carries the latest state known: the step's own when it
    got that far, the incoming state otherwise.
    """

    def run(state: S) -> StateResult[S, V]:
        match _run_step(source, step, State, "state step"):
            case Success((value, stateful)):
                ran = capture(lambda: expect(stateful(state), StateResult, "state"))
                return _project_result(ran, value, project, lambda: StateResult.bottom(state))
        return StateResult.bottom(state)

    return State(run)


# ──────────────────────── Value shapes ────────────────────────


def fuse_option(
    source: Try[T],
    step: Callable[[T], Option[U]],
    project: Callable[[T, U], V],
) -> Option[V]:
    """Try through an Option step. Every failure, and every NOTHING, gives NOTHING."""
    match _run_step(source, step, (Some, Nothing), "option step"):
        case Success((value, Some(inner))):
            match capture(project, value, inner):
                case Success(projected):
                    return Some(projected)
    return NOTHING


def fuse_either(
    source: Try[T],
    step: Callable[[T], Either[L, U]],
    project: Callable[[T, U], V],
) -> Either[L | Exception, V]:
    """
    Try through an Either step.

    A Left from the step is passed on unchanged; a captured error becomes Left(error).
    """
    match _run_step(source, step, (Left, Right), "either step"):
        case Success((value, Right(inner))):
            return capture(project, value, inner).match(Right, Left)
        case Success((_, Left() as left)):
            return left
        case Fault(error):
            return Left(error)
    raise TypeError("unreachable")  # pragma: no cover


def fuse_sequence(
    source: Try[T],
    step: Callable[[T], Iterable[U]],
    project: Callable[[T, U], V],
) -> list[V]:
    """Try through a sequence step: project every element. Any failure gives []."""
    match _run_step(source, step, Iterable, "sequence step"):
        case Success((value, items)):
            match capture(lambda: [project(value, item) for item in items]):
                case Success(projected):
                    return projected
    return []


def fuse_mapping(
    source: Try[T],
    step: Callable[[T], Mapping[K, U]],
    project: Callable[[T, U], V],
) -> dict[K, V]:
    """
    Try through a mapping step: project every value, keys in ascending order.

    Any failure, unorderable keys included, gives {}.
    """
    match _run_step(source, step, Mapping, "mapping step"):
        case Success((value, mapping)):
            match capture(lambda: {key: project(value, mapping[key]) for key in sorted(mapping)}):
                case Success(projected):
                    return projected
    return {}
