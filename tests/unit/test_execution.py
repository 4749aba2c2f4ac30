"""Tests for ExecutionContext implementations."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from railtrack import (
    ComposableExecutionContext,
    ExecutionContext,
    Failure,
    LoggingExecutionContext,
    NoOpExecutionContext,
    Result,
    Success,
    with_context,
)


class TestNoOpExecutionContext:
    def test_passthrough(self):
        assert NoOpExecutionContext().execute(lambda: Result.success(42)) == Success(42)

    def test_passthrough_failure(self):
        assert NoOpExecutionContext().execute(lambda: Result.failure("gone")) == Failure("gone")

    def test_satisfies_protocol(self):
        assert isinstance(NoOpExecutionContext(), ExecutionContext)


class TestLoggingExecutionContext:
    def test_logs_success(self):
        ctx = LoggingExecutionContext(operation="TestOp")
        with capture_logs() as logs:
            result = ctx.execute(lambda: Result.success("ok"))
        assert result == Success("ok")
        assert [entry["event"] for entry in logs] == ["execution.started", "execution.completed"]
        assert logs[-1]["operation"] == "TestOp"
        assert logs[-1]["outcome"] == "SUCCESS"
        assert logs[-1]["log_level"] == "info"

    def test_logs_failure(self):
        ctx = LoggingExecutionContext(operation="TestOp")
        with capture_logs() as logs:
            result = ctx.execute(lambda: Result.failure("missing"))
        assert result.is_failure()
        assert logs[-1]["outcome"] == "FAILURE"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValueError, match="Log level must be one of"):
            LoggingExecutionContext(operation="TestOp", log_level="verbose")

    def test_accepts_level_in_any_case(self):
        ctx = LoggingExecutionContext(operation="TestOp", log_level=" Debug ")
        with capture_logs() as logs:
            ctx.execute(lambda: Result.success("ok"))
        assert logs[-1]["log_level"] == "debug"

    def test_converts_exception_to_failure(self):
        def failing():
            raise RuntimeError("exploded")

        ctx = LoggingExecutionContext(operation="Boom", error_mapper=lambda e: f"technical: {e}")
        with capture_logs() as logs:
            result = ctx.execute(failing)
        assert result == Failure("technical: exploded")
        assert logs[-1]["event"] == "execution.failed"
        assert logs[-1]["log_level"] == "error"
        assert logs[-1]["error"] == "exploded"

    def test_exception_is_error_without_mapper(self):
        def failing():
            raise RuntimeError("exploded")

        result = LoggingExecutionContext(operation="Boom").execute(failing)
        assert isinstance(result.error(), RuntimeError)

    def test_log_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("RAILTRACK_EXECUTION_LOG_LEVEL", "debug")
        ctx = LoggingExecutionContext(operation="Quiet")
        with capture_logs() as logs:
            ctx.execute(lambda: Result.success(1))
        assert {entry["log_level"] for entry in logs} == {"debug"}

    def test_wraps_inner_context(self):
        ctx = LoggingExecutionContext(inner=NoOpExecutionContext(), operation="Wrapped")
        assert ctx.execute(lambda: Result.success(99)) == Success(99)


class TestComposableExecutionContext:
    def test_composes_multiple_contexts(self):
        order: list[str] = []

        class TrackingContext:
            def __init__(self, name: str):
                self.name = name

            def execute(self, computation):
                order.append(f"before-{self.name}")
                result = computation()
                order.append(f"after-{self.name}")
                return result

        composed = ComposableExecutionContext(
            TrackingContext("outer"),
            TrackingContext("inner"),
        )
        assert composed.execute(lambda: Result.success("done")) == Success("done")
        assert order == ["before-outer", "before-inner", "after-inner", "after-outer"]

    def test_requires_at_least_one_context(self):
        with pytest.raises(ValueError, match="(?i)at least one"):
            ComposableExecutionContext()


class TestWithContextDecorator:
    def test_decorator_wraps_function(self):
        @with_context(NoOpExecutionContext())
        def handle(x: int) -> Result[int, str]:
            return Result.success(x * 2)

        assert handle(5) == Success(10)

    def test_decorator_preserves_name(self):
        @with_context(NoOpExecutionContext())
        def my_handler(x: int) -> Result[int, str]:
            """Handler docstring."""
            return Result.success(x)

        assert my_handler.__name__ == "my_handler"
        assert my_handler.__doc__ == "Handler docstring."


class TestWithinMethod:
    def test_pipeline_within_context(self):
        result = (
            Result.success(5)
            .map(lambda x: x * 2)
            .flat_map(lambda x: Result.success(x + 1))
            .within(NoOpExecutionContext())
        )
        assert result == Success(11)
