"""
Execution contexts — separate WHAT (the pure pipeline) from HOW it runs.

  - Pure functions describe WHAT should happen → return Result[T, E]
  - An ExecutionContext describes HOW it happens → logging, timing, transactions
  - They are never mixed: pipeline stages do not log or commit themselves

Usage:
    def pipeline(cmd: CreateOrder) -> Result[Order, DomainError]:
        return (
            Result.success(cmd)
            .flat_map(validate)
            .flat_map(enrich)
            .flat_map(persist)
        )

    # Execute within a boundary
    result = LoggingExecutionContext(operation="CreateOrder").execute(lambda: pipeline(cmd))

    # Or using the decorator
    @with_context(LoggingExecutionContext(operation="CreateOrder"))
    def handle(cmd: CreateOrder) -> Result[Order, DomainError]:
        return pipeline(cmd)
"""

from __future__ import annotations

import functools
import time
from typing import Any, Callable, Optional, Protocol, TypeVar, cast, runtime_checkable

import structlog

from railtrack.config import get_settings, normalize_level
from railtrack.result import Failure, Result

T = TypeVar("T")
E = TypeVar("E")

log = structlog.get_logger()


# ──────────────────────── Protocol (Interface) ────────────────────────


@runtime_checkable
class ExecutionContext(Protocol):
    """
    Protocol for execution contexts.

    Any class implementing execute(computation) satisfies this protocol
    via structural typing, no explicit inheritance needed.
    """

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        """Execute a Result-returning computation within this context."""
        ...


# ──────────────────────── NoOp (Testing) ────────────────────────


class NoOpExecutionContext:
    """
    Passthrough execution context — runs the computation without any wrapper.

    Use for unit tests and for pure logic with no side effects.
    """

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        return computation()


# ──────────────────────── Logging ────────────────────────


class LoggingExecutionContext:
    """
    Execution context that logs entry, exit, duration, and the final track.

    Wraps another context (decorator pattern). An exception escaping the
    computation is logged and turned into a Failure through `error_mapper`
    (default: the exception itself becomes the error).

        ctx = LoggingExecutionContext(tx_context, operation="CreateOrder")
    """

    def __init__(
        self,
        inner: ExecutionContext | None = None,
        operation: str = "unknown",
        log_level: Optional[str] = None,
        error_mapper: Optional[Callable[[Exception], Any]] = None,
    ) -> None:
        self._inner = inner or NoOpExecutionContext()
        self._operation = operation
        self._log_level = normalize_level(log_level or get_settings().execution_log_level).lower()
        self._error_mapper = error_mapper

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        emit = getattr(log, self._log_level)
        emit("execution.started", operation=self._operation)
        start = time.monotonic()

        try:
            result = self._inner.execute(computation)
        except Exception as e:
            log.error(
                "execution.failed",
                operation=self._operation,
                elapsed_seconds=round(time.monotonic() - start, 3),
                error=str(e),
                exc_info=e,
            )
            error = self._error_mapper(e) if self._error_mapper is not None else e
            return Failure(cast(E, error))

        emit(
            "execution.completed",
            operation=self._operation,
            elapsed_seconds=round(time.monotonic() - start, 3),
            outcome="SUCCESS" if result.is_success() else "FAILURE",
        )
        return result


# ──────────────────────── Composable ────────────────────────


class ComposableExecutionContext:
    """
    Compose multiple execution contexts into a single one.

    The first context is the outermost:

        composed = ComposableExecutionContext(
            LoggingExecutionContext(operation="CreateOrder"),
            TransactionContext(session),
        )
        # Logging wraps Transaction wraps computation
    """

    def __init__(self, *contexts: ExecutionContext) -> None:
        if not contexts:
            raise ValueError("At least one execution context is required")
        self._contexts = list(contexts)

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        # Build the onion: innermost context wraps the computation first
        wrapped = computation
        for ctx in reversed(self._contexts):
            wrapped = functools.partial(ctx.execute, wrapped)
        return wrapped()


# ──────────────────────── Decorator Helper ────────────────────────


def with_context(ctx: ExecutionContext) -> Callable:
    """
    Decorator that runs a Result-returning function inside an execution context.

        @with_context(LoggingExecutionContext(operation="Handle"))
        def handle(cmd: Command) -> Result[Order, DomainError]:
            return Result.success(cmd).flat_map(validate).flat_map(persist)
    """

    def decorator(fn: Callable[..., Result[T, E]]) -> Callable[..., Result[T, E]]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Result[T, E]:
            return ctx.execute(lambda: fn(*args, **kwargs))

        return wrapper

    return decorator
