"""
Tests for the fusion layer — a Try bound through a step of another shape.

Each shape is checked for:
  - the happy path: step and projector run once, result is the shape's success
  - source fault: neither step nor projector runs, result is the shape's empty/failure
  - step failure (raised, wrong shape, or the shape's own empty/failure)
  - projector failure
"""

from __future__ import annotations

import pytest

from tests.conftest import CallCounter, divide
from tryline import (
    NOTHING,
    Left,
    Reader,
    ReaderResult,
    Right,
    Some,
    State,
    StateResult,
    Success,
    Try,
    TryOption,
    Writer,
    WriterResult,
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


def _faulted() -> Try[int]:
    return Try.of(lambda: divide(1, 0))


def _boom(*_args):
    raise RuntimeError("boom")


def _add(x, y):
    return x + y


# ═══════════════════════════════════════════════════════════════
# 1. Source fault short-circuits every shape
# ═══════════════════════════════════════════════════════════════


SHORT_CIRCUIT_CASES = [
    ("try", lambda s, st, p: fuse_try(s, st, p).run().is_fault()),
    ("try_option", lambda s, st, p: fuse_try_option(s, st, p).run().is_fault()),
    ("option", lambda s, st, p: fuse_option(s, st, p) is NOTHING),
    ("either", lambda s, st, p: isinstance(fuse_either(s, st, p), Left)),
    ("sequence", lambda s, st, p: fuse_sequence(s, st, p) == []),
    ("mapping", lambda s, st, p: fuse_mapping(s, st, p) == {}),
    ("reader", lambda s, st, p: fuse_reader(s, st, p)("env") == ReaderResult.bottom()),
    ("writer", lambda s, st, p: fuse_writer(s, st, p)() == WriterResult.bottom()),
    ("state", lambda s, st, p: fuse_state(s, st, p)(0) == StateResult.bottom(0)),
]


class TestSourceFaultShortCircuits:
    @pytest.mark.parametrize(
        "check", [case[1] for case in SHORT_CIRCUIT_CASES], ids=[case[0] for case in SHORT_CIRCUIT_CASES]
    )
    def test_step_and_projector_never_run(self, check, captured_faults):
        step = CallCounter()
        project = CallCounter()
        assert check(_faulted(), step, project)
        assert step.calls == 0
        assert project.calls == 0
        assert len(captured_faults) == 1


# ═══════════════════════════════════════════════════════════════
# 2. Try and TryOption
# ═══════════════════════════════════════════════════════════════


class TestFuseTry:
    def test_happy_path(self):
        fused = fuse_try(Try.success(2), lambda x: Try.success(x * 10), _add)
        assert fused.run() == Success(22)

    def test_is_deferred(self):
        source = CallCounter(lambda: 1)
        fused = fuse_try(Try.of(source), Try.success, _add)
        assert source.calls == 0
        fused.run()
        fused.run()
        assert source.calls == 2

    def test_step_fault_keeps_error_identity(self, captured_faults):
        outcome = fuse_try(Try.success(1), lambda x: Try.of(lambda: divide(x, 0)), _add).run()
        assert captured_faults == [outcome.get_error()]

    def test_step_raising_is_captured(self):
        outcome = fuse_try(Try.success(1), _boom, _add).run()
        assert str(outcome.get_error()) == "boom"

    def test_step_wrong_shape_is_captured(self):
        outcome = fuse_try(Try.success(1), lambda x: x, _add).run()
        assert isinstance(outcome.get_error(), TypeError)

    def test_projector_raising_is_captured(self, captured_faults):
        outcome = fuse_try(Try.success(1), Try.success, _boom).run()
        assert str(outcome.get_error()) == "boom"
        assert len(captured_faults) == 1


class TestFuseTryOption:
    def test_happy_path(self):
        fused = fuse_try_option(Try.success(2), lambda x: TryOption.some(x + 1), _add)
        assert fused.run() == Success(Some(5))

    def test_step_none_gives_none(self):
        project = CallCounter(_add)
        fused = fuse_try_option(Try.success(2), lambda x: TryOption.none(), project)
        assert fused.run() == Success(NOTHING)
        assert project.calls == 0

    def test_step_fault_propagates(self):
        error = KeyError("missing")
        fused = fuse_try_option(Try.success(2), lambda x: TryOption.fault(error), _add)
        assert fused.run().get_error() is error

    def test_projector_raising_is_captured(self):
        fused = fuse_try_option(Try.success(2), lambda x: TryOption.some(x), _boom)
        assert str(fused.run().get_error()) == "boom"


# ═══════════════════════════════════════════════════════════════
# 3. Value shapes
# ═══════════════════════════════════════════════════════════════


class TestFuseOption:
    def test_happy_path(self):
        assert fuse_option(Try.success(2), lambda x: Some(x * 10), _add) == Some(22)

    def test_step_nothing(self):
        project = CallCounter(_add)
        assert fuse_option(Try.success(2), lambda x: NOTHING, project) is NOTHING
        assert project.calls == 0

    def test_step_raising(self, captured_faults):
        assert fuse_option(Try.success(2), _boom, _add) is NOTHING
        assert len(captured_faults) == 1

    def test_step_wrong_shape(self):
        assert fuse_option(Try.success(2), lambda x: x, _add) is NOTHING

    def test_projector_raising(self):
        assert fuse_option(Try.success(2), Some, _boom) is NOTHING


class TestFuseEither:
    def test_happy_path(self):
        assert fuse_either(Try.success(2), lambda x: Right(x + 1), _add) == Right(5)

    def test_step_left_passes_through(self):
        project = CallCounter(_add)
        assert fuse_either(Try.success(2), lambda x: Left("nope"), project) == Left("nope")
        assert project.calls == 0

    def test_source_fault_is_left_error(self):
        result = fuse_either(_faulted(), Right, _add)
        assert isinstance(result.value, ZeroDivisionError)

    def test_step_raising_is_left_error(self):
        result = fuse_either(Try.success(1), _boom, _add)
        assert isinstance(result, Left)
        assert str(result.value) == "boom"

    def test_projector_raising_is_left_error(self):
        result = fuse_either(Try.success(1), Right, _boom)
        assert isinstance(result, Left)
        assert str(result.value) == "boom"


class TestFuseSequence:
    def test_projects_every_element(self):
        assert fuse_sequence(Try.success(10), lambda x: [1, 2, 3], _add) == [11, 12, 13]

    def test_accepts_any_iterable(self):
        assert fuse_sequence(Try.success(1), lambda x: range(3), _add) == [1, 2, 3]

    def test_empty_step(self):
        assert fuse_sequence(Try.success(1), lambda x: [], _add) == []

    def test_projector_raising_gives_empty(self):
        def project(x, y):
            if y == 2:
                raise ValueError("bad element")
            return x + y

        assert fuse_sequence(Try.success(1), lambda x: [1, 2, 3], project) == []

    def test_step_wrong_shape_gives_empty(self):
        assert fuse_sequence(Try.success(1), lambda x: 5, _add) == []


class TestFuseMapping:
    def test_projects_values_in_key_order(self):
        result = fuse_mapping(Try.success(100), lambda x: {"b": 2, "a": 1}, _add)
        assert result == {"a": 101, "b": 102}
        assert list(result) == ["a", "b"]

    def test_step_raising_gives_empty(self):
        assert fuse_mapping(Try.success(1), _boom, _add) == {}

    def test_unorderable_keys_give_empty(self):
        assert fuse_mapping(Try.success(1), lambda x: {1: 1, "a": 2}, _add) == {}


# ═══════════════════════════════════════════════════════════════
# 4. Reader / Writer / State
# ═══════════════════════════════════════════════════════════════


class TestFuseReader:
    def test_happy_path(self):
        fused = fuse_reader(Try.success(2), lambda x: Reader.asks(lambda env: env["n"] * x), _add)
        assert fused({"n": 5}) == ReaderResult(12)

    def test_is_deferred(self):
        source = CallCounter(lambda: 1)
        fused = fuse_reader(Try.of(source), lambda x: Reader.pure(x), _add)
        assert source.calls == 0
        fused(None)
        assert source.calls == 1

    def test_step_bottom_stays_bottom(self):
        project = CallCounter(_add)
        fused = fuse_reader(Try.success(2), lambda x: Reader.bottom(), project)
        assert fused({}) == ReaderResult.bottom()
        assert project.calls == 0

    def test_reader_raising_is_bottom(self, captured_faults):
        fused = fuse_reader(Try.success(2), lambda x: Reader.asks(lambda env: env["missing"]), _add)
        assert fused({}).is_bottom
        assert len(captured_faults) == 1

    def test_projector_raising_is_bottom(self):
        fused = fuse_reader(Try.success(2), Reader.pure, _boom)
        assert fused({}) == ReaderResult.bottom()


class TestFuseWriter:
    def test_happy_path_keeps_output(self):
        step = lambda x: Writer(lambda: WriterResult(x * 2, ("doubled",)))  # noqa: E731
        assert fuse_writer(Try.success(3), step, _add)() == WriterResult(9, ("doubled",))

    def test_step_bottom_keeps_output(self):
        fused = fuse_writer(Try.success(3), lambda x: Writer.bottom("gave up"), _add)
        assert fused() == WriterResult(None, ("gave up",), is_bottom=True)

    def test_projector_raising_keeps_output(self):
        step = lambda x: Writer(lambda: WriterResult(x, ("ran",)))  # noqa: E731
        assert fuse_writer(Try.success(3), step, _boom)() == WriterResult(None, ("ran",), is_bottom=True)

    def test_step_raising_is_bottom(self):
        assert fuse_writer(Try.success(3), _boom, _add)() == WriterResult.bottom()


class TestFuseState:
    def test_happy_path_threads_state(self):
        step = lambda x: State(lambda s: StateResult(s + 1, s * x))  # noqa: E731
        assert fuse_state(Try.success(3), step, _add)(10) == StateResult(11, 33)

    def test_step_bottom_keeps_its_state(self):
        step = lambda x: State(lambda s: StateResult.bottom(s + 5))  # noqa: E731
        assert fuse_state(Try.success(3), step, _add)(10) == StateResult(15, None, is_bottom=True)

    def test_step_raising_keeps_incoming_state(self):
        assert fuse_state(Try.success(3), _boom, _add)(10) == StateResult.bottom(10)

    def test_projector_raising_keeps_step_state(self):
        step = lambda x: State.put("next")  # noqa: E731
        assert fuse_state(Try.success(3), step, _boom)("start") == StateResult("next", None, is_bottom=True)
