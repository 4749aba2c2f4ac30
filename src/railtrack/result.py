"""
Result — the two-track value at the heart of Railway-Oriented Programming.

A Result[T, E] is either Success(value: T) or Failure(error: E). Every
operation returns a new Result and never raises for a domain failure: once a
step produces a Failure, every later map/flat_map/tap is skipped and the
failure travels unchanged to whoever terminates the chain.

    ┌───────────┐   flat_map    ┌───────────┐   flat_map    ┌──────────┐
    │ validate  │──Success──────│  enrich   │──Success──────│ persist  │──→ Result[T, E]
    │           │               │           │               │          │
    └─────┬─────┘               └─────┬─────┘               └─────┬────┘
          │ Failure                   │ Failure                   │ Failure
          └───────────────────────────┴───────────────────────────┴──→ Result[T, E]

Design choices:
  - Success and Failure are frozen, slotted dataclasses; they are the only
    two subclasses Result will ever have, so match/case over them is exhaustive.
  - T and E are unconstrained: None is a legal value on either track.
  - The error type is whatever the caller wants. railtrack.domain provides a
    structured DomainError for applications that want one.
  - Exceptions enter the algebra only through from_exception (here) and the
    async bridge (railtrack.bridge). A function passed to map/flat_map/recover
    that raises is a programming error and the exception propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Optional,
    TypeVar,
    cast,
)

from railtrack.errors import UnwrapFailedError

if TYPE_CHECKING:
    from railtrack.execution import ExecutionContext

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
R = TypeVar("R")

_VARIANTS = ("Success", "Failure")


class Result(Generic[T, E]):
    """
    Railway-Oriented Programming Result.

    Two possible states:
      - Success(value: T) — the happy path
      - Failure(error: E) — the error track

    All transformations short-circuit on failure, so you only write
    the success path and errors propagate automatically.

        >>> Result.success(21).map(lambda x: x * 2)
        Success(42)

        >>> Result.failure("bad input").map(lambda x: x * 2)
        Failure('bad input')
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__ or cls.__name__ not in _VARIANTS:
            raise TypeError(
                f"Result is closed to Success and Failure; cannot subclass as {cls.__qualname__}"
            )

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Result is a Success."""
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        """Check if this Result is a Failure."""
        return isinstance(self, Failure)

    def value(self) -> T:
        """
        Extract the success value. Raises UnwrapFailedError on a Failure.

        Prefer .match() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise UnwrapFailedError(f"Cannot get value from a Failure: {err!r}", err)
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> E:
        """
        Extract the error. Raises UnwrapFailedError on a Success.

        Prefer .match() or match/case for safe access.
        """
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise UnwrapFailedError(f"Cannot get error from a Success: {v!r}", v)
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Transformations ────────────────────────

    def match(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[E], R],
    ) -> R:
        """
        Apply exactly one of two functions depending on the track.

        The sanctioned way to leave the Result world with a plain value.

            result.match(
                on_success=lambda user: f"Hello {user.name}",
                on_failure=lambda err: f"Error: {err}",
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(err):
                return on_failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map(self, mapper: Callable[[T], U]) -> Result[U, E]:
        """
        Transform the success value. Short-circuits on failure.

        `mapper` must be total; if it can fail, return a Result and use flat_map.

            Result.success(5).map(lambda x: x * 2)   # → Success(10)
            Result.failure("e").map(lambda x: x * 2) # → Failure('e'), mapper never called
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(_):
                return cast(Result[U, E], self)
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, mapper: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Chain a Result-returning function. Short-circuits on failure.

        This is the KEY operator of ROP: it connects railway segments.
        The Result returned by `mapper` is passed through as is (no re-wrapping).

            def validate(x: int) -> Result[int, str]:
                return Result.success(x) if x > 0 else Result.failure("must be positive")

            Result.success(5).flat_map(validate)   # → Success(5)
            Result.success(-1).flat_map(validate)  # → Failure('must be positive')
        """
        match self:
            case Success(v):
                return mapper(v)
            case Failure(_):
                return cast(Result[U, E], self)
        raise TypeError("unreachable")  # pragma: no cover

    def map_error(self, mapper: Callable[[E], F]) -> Result[T, F]:
        """
        Transform the error. Passes through success unchanged.

            result.map_error(lambda err: f"while loading config: {err}")
        """
        match self:
            case Success(_):
                return cast(Result[T, F], self)
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(self, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
        """
        Validate the success value against a condition.
        Short-circuits on existing failure.

            Result.success(order).ensure(lambda o: o.total > 0, "Order total must be positive")
        """
        return self.flat_map(
            lambda v: Success(v) if predicate(v) else Failure(error)
        )

    # ──────────────────────── Side Effects ────────────────────────

    def tap(self, action: Callable[[T], Any]) -> Result[T, E]:
        """
        Execute a side effect on the success value without altering the Result.

        Useful for logging, metrics, debugging.

            result.tap(lambda user: log.info("user.created", user_id=user.id))
        """
        match self:
            case Success(v):
                action(v)
        return self

    def tap_error(self, action: Callable[[E], Any]) -> Result[T, E]:
        """Execute a side effect on the error without altering the Result."""
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[E], T]) -> Result[T, E]:
        """
        Recover from failure by producing a success value.

            result.recover(lambda err: default_user)
        """
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def recover_with(self, recovery_fn: Callable[[E], Result[T, E]]) -> Result[T, E]:
        """
        Recover from failure with an alternate strategy that may itself fail.

            load_from_cache(key).recover_with(lambda _: load_from_disk(key))
        """
        match self:
            case Success(_):
                return self
            case Failure(err):
                return recovery_fn(err)
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Terminal Extraction ────────────────────────

    def get_value_or_default(self, default: T) -> T:
        """Extract value or return a default on failure."""
        match self:
            case Success(v):
                return v
            case _:
                return default

    def get_value_or_else(self, fallback: Callable[[E], T]) -> T:
        """Extract value or compute one from the error."""
        return self.match(lambda v: v, fallback)

    def get_value_or_throw(
        self,
        error_fn: Optional[Callable[[E], BaseException]] = None,
    ) -> T:
        """
        Extract value or raise. The one place a Result re-enters exception flow.

        On Failure:
          - error_fn given: raise error_fn(error)
          - error is already an exception: raise it
          - otherwise: raise UnwrapFailedError carrying the error
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                if error_fn is not None:
                    raise error_fn(err)
                if isinstance(err, BaseException):
                    raise err
                raise UnwrapFailedError(f"Result is a Failure: {err!r}", err)
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Execution Context ────────────────────────

    def within(self, execution_context: ExecutionContext) -> Result[T, E]:
        """
        Run this Result pipeline within an execution context.

            result = (
                Result.success(data)
                .flat_map(validate)
                .flat_map(persist)
                .within(LoggingExecutionContext(operation="CreateOrder"))
            )
        """
        return execution_context.execute(lambda: self)

    # ──────────────────────── Async Support ────────────────────────

    async def map_async(
        self,
        mapper: Callable[[T], Awaitable[U]],
        error_mapper: Optional[Callable[[BaseException], E]] = None,
    ) -> Result[U, E]:
        """
        Async map — apply an async function to the success value.

            result = await Result.success(user_id).map_async(fetch_user_from_api)
        """
        from railtrack import bridge  # bridge imports this module

        return await bridge.map_async(self, mapper, error_mapper)

    async def flat_map_async(
        self,
        mapper: Callable[[T], Awaitable[Result[U, E]]],
        error_mapper: Optional[Callable[[BaseException], E]] = None,
    ) -> Result[U, E]:
        """
        Async flat_map — chain an async Result-returning function.

            result = await Result.success(order).flat_map_async(persist_order)
        """
        from railtrack import bridge

        return await bridge.flat_map_async(self, mapper, error_mapper)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Result[T, Any]:
        """Create a successful Result wrapping the given value."""
        return Success(value)

    @staticmethod
    def failure(error: E) -> Result[Any, E]:
        """Create a failed Result wrapping the given error."""
        return Failure(error)

    @staticmethod
    def from_exception(
        computation: Callable[[], T],
        error_mapper: Optional[Callable[[Exception], E]] = None,
    ) -> Result[T, E]:
        """
        Create a Result from a computation that may raise.

        Wraps exceptions into a Failure, replacing try/except boilerplate.
        Without an error_mapper the exception object itself is the error.

        Before:
            try:
                return Result.success(repo.find(user_id))
            except Exception as e:
                return Result.failure(f"lookup failed: {e}")

        After:
            return Result.from_exception(
                lambda: repo.find(user_id),
                lambda e: f"lookup failed: {e}",
            )
        """
        try:
            value = computation()
        except Exception as e:
            return Failure(error_mapper(e) if error_mapper is not None else cast(E, e))
        return Success(value)

    @staticmethod
    def from_optional(value: Optional[T], error: E) -> Result[T, E]:
        """
        Create a Result from an Optional value.

            Result.from_optional(users.get(user_id), f"no user {user_id}")
        """
        if value is not None:
            return Success(value)
        return Failure(error)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Allow truthiness check: `if result: ...` succeeds only on Success."""
        return self.is_success()


@dataclass(frozen=True, slots=True, repr=False)
class Success(Result[T, E]):
    """The success track — wraps a value of type T."""

    _value: T

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Failure(Result[T, E]):
    """The failure track — wraps an error of type E."""

    _error: E

    def __init__(self, error: E) -> None:
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"
