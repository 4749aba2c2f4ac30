"""
Domain specialization — Result[T, DomainError] with named constructors.

A narrowing of the core type for applications that want one structured error
shape with three kinds:

  - VALIDATION: bad input, a field failed a rule
  - NOT_FOUND:  an entity that should exist does not
  - SERVICE:    anything failing outside the domain (I/O, remote calls)

Usage:
    from railtrack.domain import DomainResults

    def register(data: dict) -> DomainResult[User]:
        return DomainResults.ensure_valid(
            DomainResults.success(data),
            lambda d: "@" in d.get("email", ""),
            "email",
            "Email must contain '@'",
        ).map(User.from_dict)

Nothing here adds runtime behaviour: every helper is built from
Result.success / Result.failure / flat_map.
"""

from __future__ import annotations

import dataclasses
import traceback
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum, unique
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeAlias, TypeVar

from railtrack import bridge
from railtrack.errors import DomainException
from railtrack.result import Failure, Result, Success

T = TypeVar("T")


@unique
class ErrorKind(Enum):
    """The three domain error kinds."""

    VALIDATION = "VALIDATION"
    """Invalid input: missing fields, wrong format, rule violated."""

    NOT_FOUND = "NOT_FOUND"
    """The requested entity does not exist."""

    SERVICE = "SERVICE"
    """Infrastructure or external dependency failed."""


@dataclass(frozen=True, slots=True)
class DomainError:
    """
    Immutable domain error: kind, message, and whatever context the kind carries.

    Equality ignores the timestamp and the cause, so two errors describing the
    same problem compare equal.

    >>> err = DomainError(ErrorKind.VALIDATION, "Email is required", field="email")
    >>> err.kind
    <ErrorKind.VALIDATION: 'VALIDATION'>
    >>> err.field
    'email'
    """

    kind: ErrorKind
    message: str
    field: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    cause: Optional[BaseException] = dataclasses.field(default=None, repr=False, compare=False)
    context: Mapping[str, Any] = dataclasses.field(default_factory=dict, compare=False, hash=False)
    timestamp: datetime = dataclasses.field(
        default_factory=lambda: datetime.now(UTC), repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    def is_validation(self) -> bool:
        return self.kind is ErrorKind.VALIDATION

    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND

    def is_service(self) -> bool:
        return self.kind is ErrorKind.SERVICE

    def full_stack_trace(self) -> str:
        """Message followed by the formatted cause chain, if there is a cause."""
        if self.cause is None:
            return self.message
        tb = "".join(
            traceback.format_exception(type(self.cause), self.cause, self.cause.__traceback__)
        )
        return f"{self.message}\n{tb}"

    def to_exception(self) -> DomainException:
        """Raisable form, for get_value_or_throw at a system edge."""
        exc = DomainException(self)
        exc.__cause__ = self.cause
        return exc


DomainResult: TypeAlias = Result[T, DomainError]


def classify_exception(exception: BaseException) -> ErrorKind:
    """
    Map a Python exception type to the closest ErrorKind.

    Mapping:
      - ValueError, TypeError → VALIDATION
      - LookupError (KeyError, IndexError) → NOT_FOUND
      - Everything else → SERVICE
    """
    match exception:
        case ValueError() | TypeError():
            return ErrorKind.VALIDATION
        case LookupError():
            return ErrorKind.NOT_FOUND
        case _:
            return ErrorKind.SERVICE


class DomainResults:
    """Factory methods for Result[T, DomainError]."""

    @staticmethod
    def success(value: T) -> DomainResult[T]:
        return Success(value)

    @staticmethod
    def invalid(field_name: str, message: str, **context: Any) -> DomainResult[Any]:
        """Validation failure on a named field."""
        return Failure(
            DomainError(ErrorKind.VALIDATION, message, field=field_name, context=context)
        )

    @staticmethod
    def not_found(entity_type: str, entity_id: Any) -> DomainResult[Any]:
        """The entity `entity_type` with identifier `entity_id` does not exist."""
        return Failure(
            DomainError(
                ErrorKind.NOT_FOUND,
                f"{entity_type} not found with identifier: {entity_id}",
                entity_type=entity_type,
                entity_id=str(entity_id),
            )
        )

    @staticmethod
    def from_error(message: str, cause: Optional[BaseException] = None) -> DomainResult[Any]:
        """Service failure, optionally keeping the exception that caused it."""
        return Failure(DomainError(ErrorKind.SERVICE, message, cause=cause))

    @staticmethod
    def ensure_valid(
        result: DomainResult[T],
        predicate: Callable[[T], bool],
        field_name: str,
        message: str,
    ) -> DomainResult[T]:
        """Turn a Success whose value fails `predicate` into a validation Failure."""
        return result.flat_map(
            lambda v: Success(v) if predicate(v) else DomainResults.invalid(field_name, message)
        )

    @staticmethod
    def ensure_exists(
        result: DomainResult[T],
        predicate: Callable[[T], bool],
        entity_type: str,
        entity_id: Any,
    ) -> DomainResult[T]:
        """Turn a Success whose value fails `predicate` into a not-found Failure."""
        return result.flat_map(
            lambda v: Success(v) if predicate(v) else DomainResults.not_found(entity_type, entity_id)
        )

    @staticmethod
    def error_mapper(message: str) -> Callable[[BaseException], DomainError]:
        """Build an error_mapper that classifies the exception and keeps it as cause."""

        def _map(exception: BaseException) -> DomainError:
            return DomainError(
                classify_exception(exception),
                f"{message}: {exception}" if str(exception) else message,
                cause=exception,
            )

        return _map

    @staticmethod
    def from_exception(computation: Callable[[], T], message: str) -> DomainResult[T]:
        """
        Run a computation that may raise, classifying any exception.

            DomainResults.from_exception(lambda: int(raw_age), "Age is not a number")
        """
        return Result.from_exception(computation, DomainResults.error_mapper(message))

    @staticmethod
    async def from_awaitable(awaitable: Awaitable[T], message: str) -> DomainResult[T]:
        """Async counterpart of from_exception."""
        return await bridge.from_awaitable(awaitable, DomainResults.error_mapper(message))
