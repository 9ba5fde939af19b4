"""
Foreign effect shapes — the other deferred and value effects a Try composes with.

Each shape is deliberately minimal: the fusion layer only needs a way to
run it, a way to tell its failure/empty case apart, and a way to read its
success payload.

    Option[T]       Some(value) | NOTHING
    Either[L, R]    Left(value) | Right(value)
    Reader[E, T]    env   -> ReaderResult(value, is_bottom)
    Writer[W, T]    ()    -> WriterResult(value, output, is_bottom)
    State[S, T]     state -> StateResult(state, value, is_bottom)

Reader, Writer and State are deferred: nothing runs until they are called.
Their failure case is a bottom-marked result rather than an error value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
U = TypeVar("U")
L = TypeVar("L")
R = TypeVar("R")
E = TypeVar("E")
S = TypeVar("S")
W = TypeVar("W")


# ──────────────────────── Option ────────────────────────


class Option(Generic[T]):
    """
    An optional value: Some(value) or NOTHING.

        >>> Some(3).get_or_else(0)
        3
        >>> NOTHING.get_or_else(0)
        0
    """

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return isinstance(self, Nothing)

    def get_or_else(self, default: T) -> T:
        match self:
            case Some(value):
                return value
            case _:
                return default

    def __bool__(self) -> bool:
        return self.is_some()


@dataclass(frozen=True, slots=True)
class Some(Option[T]):
    """A present value. None is a legal payload."""

    value: T

    def __repr__(self) -> str:
        return f"Some({self.value!r})"


@dataclass(frozen=True, slots=True)
class Nothing(Option[Any]):
    """The absent value. Use the NOTHING singleton."""

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING: Option[Any] = Nothing()


# ──────────────────────── Either ────────────────────────


class Either(Generic[L, R]):
    """Two-branch value: Left carries the failure branch, Right the success branch."""

    def is_left(self) -> bool:
        return isinstance(self, Left)

    def is_right(self) -> bool:
        return isinstance(self, Right)


@dataclass(frozen=True, slots=True)
class Left(Either[L, Any]):
    value: L

    def __repr__(self) -> str:
        return f"Left({self.value!r})"


@dataclass(frozen=True, slots=True)
class Right(Either[Any, R]):
    value: R

    def __repr__(self) -> str:
        return f"Right({self.value!r})"


# ──────────────────────── Capability protocol ────────────────────────


@runtime_checkable
class BottomResult(Protocol):
    """
    What the fusion layer needs from the result of running a deferred shape.

    ReaderResult, WriterResult and StateResult all satisfy it structurally.
    """

    value: Any
    is_bottom: bool


# ──────────────────────── Reader ────────────────────────


@dataclass(frozen=True, slots=True)
class ReaderResult(Generic[T]):
    value: T | None
    is_bottom: bool = False

    @staticmethod
    def bottom() -> ReaderResult[Any]:
        return ReaderResult(None, is_bottom=True)


class Reader(Generic[E, T]):
    """
    A computation that reads an environment.

        >>> Reader.asks(lambda env: env["port"])({"port": 8080}).value
        8080
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[E], ReaderResult[T]]) -> None:
        if not callable(run):
            raise TypeError("Reader requires a callable taking the environment")
        self._run = run

    def __call__(self, env: E) -> ReaderResult[T]:
        return self._run(env)

    @staticmethod
    def pure(value: T) -> Reader[Any, T]:
        return Reader(lambda _env: ReaderResult(value))

    @staticmethod
    def asks(selector: Callable[[E], T]) -> Reader[E, T]:
        return Reader(lambda env: ReaderResult(selector(env)))

    @staticmethod
    def bottom() -> Reader[Any, Any]:
        return Reader(lambda _env: ReaderResult.bottom())


# ──────────────────────── Writer ────────────────────────


@dataclass(frozen=True, slots=True)
class WriterResult(Generic[W, T]):
    value: T | None
    output: tuple[W, ...] = field(default=())
    is_bottom: bool = False

    @staticmethod
    def bottom(output: tuple[Any, ...] = ()) -> WriterResult[Any, Any]:
        return WriterResult(None, output, is_bottom=True)


class Writer(Generic[W, T]):
    """
    A computation that produces a value together with accumulated output.

        >>> Writer.tell("started")().output
        ('started',)
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[], WriterResult[W, T]]) -> None:
        if not callable(run):
            raise TypeError("Writer requires a zero-argument callable")
        self._run = run

    def __call__(self) -> WriterResult[W, T]:
        return self._run()

    @staticmethod
    def pure(value: T) -> Writer[Any, T]:
        return Writer(lambda: WriterResult(value))

    @staticmethod
    def tell(*entries: W) -> Writer[W, None]:
        return Writer(lambda: WriterResult(None, tuple(entries)))

    @staticmethod
    def bottom(*entries: W) -> Writer[W, Any]:
        return Writer(lambda: WriterResult.bottom(tuple(entries)))


# ──────────────────────── State ────────────────────────


@dataclass(frozen=True, slots=True)
class StateResult(Generic[S, T]):
    state: S
    value: T | None
    is_bottom: bool = False

    @staticmethod
    def bottom(state: Any) -> StateResult[Any, Any]:
        return StateResult(state, None, is_bottom=True)


class State(Generic[S, T]):
    """
    A computation that threads a state value through.

        >>> State.modify(lambda n: n + 1)(41).state
        42
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[S], StateResult[S, T]]) -> None:
        if not callable(run):
            raise TypeError("State requires a callable taking the current state")
        self._run = run

    def __call__(self, state: S) -> StateResult[S, T]:
        return self._run(state)

    @staticmethod
    def pure(value: T) -> State[Any, T]:
        return State(lambda state: StateResult(state, value))

    @staticmethod
    def get() -> State[S, S]:
        return State(lambda state: StateResult(state, state))

    @staticmethod
    def put(new_state: S) -> State[S, None]:
        return State(lambda _state: StateResult(new_state, None))

    @staticmethod
    def modify(fn: Callable[[S], S]) -> State[S, None]:
        return State(lambda state: StateResult(fn(state), None))

    @staticmethod
    def bottom() -> State[Any, Any]:
        return State(lambda state: StateResult.bottom(state))
