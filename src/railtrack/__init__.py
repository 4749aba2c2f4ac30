"""
railtrack — Railway-Oriented error propagation for Python.

Explicit, composable error handling: fallible steps return a Result, the
pipeline short-circuits on the first Failure, no exceptions in business logic.

    from railtrack import Result

    def validate_age(age: int) -> Result[int, str]:
        if age < 0:
            return Result.failure("Age must be non-negative")
        return Result.success(age)

    result = (
        Result.success({"name": "Alice", "age": 30})
        .flat_map(lambda d: validate_age(d["age"]))
        .map(lambda age: f"Valid user, age {age}")
    )
"""

from railtrack.result import Result, Success, Failure
from railtrack.errors import DomainException, RailtrackError, UnwrapFailedError
from railtrack.combinators import (
    combine2,
    combine3,
    combine_with,
    partition,
    sequence,
    traverse,
    traverse_array,
)
from railtrack.bridge import (
    flat_map_async,
    from_awaitable,
    map_async,
    sequence_async,
    traverse_async,
    with_timeout,
)
from railtrack.domain import (
    DomainError,
    DomainResult,
    DomainResults,
    ErrorKind,
    classify_exception,
)
from railtrack.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
    ComposableExecutionContext,
    with_context,
)
from railtrack.assertions import ResultAssertions
from railtrack.config import RailtrackSettings, get_settings
from railtrack.log import configure_logging

__all__ = [
    "Result",
    "Success",
    "Failure",
    "RailtrackError",
    "UnwrapFailedError",
    "DomainException",
    "combine2",
    "combine3",
    "combine_with",
    "partition",
    "sequence",
    "traverse",
    "traverse_array",
    "from_awaitable",
    "map_async",
    "flat_map_async",
    "sequence_async",
    "traverse_async",
    "with_timeout",
    "DomainError",
    "DomainResult",
    "DomainResults",
    "ErrorKind",
    "classify_exception",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ComposableExecutionContext",
    "with_context",
    "ResultAssertions",
    "RailtrackSettings",
    "get_settings",
    "configure_logging",
]

__version__ = "1.0.0"
