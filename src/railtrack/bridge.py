"""
Async bridge — the Result algebra across an await boundary.

Every function here is a boundary: exceptions raised while awaiting
(including asyncio.CancelledError and timeouts) are caught and turned into a
Failure through `error_mapper`. When no mapper is given, the exception object
itself becomes the error. Nothing raised by the awaited computation escapes.

Scheduling contract:
  - map_async / flat_map_async suspend exactly once, at the await of the
    mapper's awaitable. On a Failure they return immediately; the mapper is
    never called and nothing is scheduled.
  - sequence_async / traverse_async start every input concurrently
    (asyncio.gather) and suspend until all have settled. The output order is
    the input order, whatever the completion order.

    user = await from_awaitable(client.get_user(user_id), to_service_error)
    order = await flat_map_async(user, place_order)
    rows = await sequence_async([fetch(i) for i in ids])
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar, cast

from railtrack.combinators import sequence, traverse
from railtrack.config import get_settings
from railtrack.result import Failure, Result, Success

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")

ErrorMapper = Callable[[BaseException], E]

# asyncio.CancelledError is a BaseException; cancellation is a failure mode here.
_CAUGHT = (Exception, asyncio.CancelledError)


def _map_error(exc: BaseException, error_mapper: Optional[ErrorMapper[E]]) -> E:
    return error_mapper(exc) if error_mapper is not None else cast(E, exc)


def _to_failure(exc: BaseException, error_mapper: Optional[ErrorMapper[E]]) -> Result[T, E]:
    return Failure(_map_error(exc, error_mapper))


async def from_awaitable(
    awaitable: Awaitable[T],
    error_mapper: Optional[ErrorMapper[E]] = None,
) -> Result[T, E]:
    """
    Await a computation and capture its outcome as a Result.

        result = await from_awaitable(http.get(url), lambda e: f"fetch failed: {e}")
    """
    try:
        value = await awaitable
    except _CAUGHT as e:
        return _to_failure(e, error_mapper)
    return Success(value)


async def map_async(
    result: Result[T, E],
    mapper: Callable[[T], Awaitable[U]],
    error_mapper: Optional[ErrorMapper[E]] = None,
) -> Result[U, E]:
    """Apply an async function to the success value; failures pass through unawaited."""
    match result:
        case Success(v):
            try:
                mapped = await mapper(v)
            except _CAUGHT as e:
                return _to_failure(e, error_mapper)
            return Success(mapped)
        case Failure(_):
            return cast(Result[U, E], result)
    raise TypeError("unreachable")  # pragma: no cover


async def flat_map_async(
    result: Result[T, E],
    mapper: Callable[[T], Awaitable[Result[U, E]]],
    error_mapper: Optional[ErrorMapper[E]] = None,
) -> Result[U, E]:
    """Chain an async Result-returning function; its Result is returned as is."""
    match result:
        case Success(v):
            try:
                return await mapper(v)
            except _CAUGHT as e:
                return _to_failure(e, error_mapper)
        case Failure(_):
            return cast(Result[U, E], result)
    raise TypeError("unreachable")  # pragma: no cover


async def _settle(
    awaitable: Awaitable[Result[T, E]],
    error_mapper: Optional[ErrorMapper[E]],
) -> Result[T, E]:
    try:
        return await awaitable
    except _CAUGHT as e:
        return _to_failure(e, error_mapper)


async def _gather(
    awaitables: Iterable[Awaitable[Result[T, E]]],
    error_mapper: Optional[ErrorMapper[E]],
) -> List[Result[T, E]]:
    return list(await asyncio.gather(*(_settle(a, error_mapper) for a in awaitables)))


async def sequence_async(
    awaitables: Iterable[Awaitable[Result[T, E]]],
    error_mapper: Optional[ErrorMapper[E]] = None,
) -> Result[List[T], E]:
    """
    Await all inputs concurrently, then fail fast in input order.

    The first Failure by input position wins, not the first to complete.
    Cancelling the caller while it waits is itself a Failure.
    """
    try:
        results = await _gather(awaitables, error_mapper)
    except _CAUGHT as e:
        return _to_failure(e, error_mapper)
    return sequence(results)


async def traverse_async(
    awaitables: Iterable[Awaitable[Result[T, E]]],
    error_mapper: Optional[ErrorMapper[E]] = None,
) -> Result[List[T], List[E]]:
    """Await all inputs concurrently, then collect every error in input order."""
    try:
        results = await _gather(awaitables, error_mapper)
    except _CAUGHT as e:
        return Failure([_map_error(e, error_mapper)])
    return traverse(results)


async def with_timeout(
    awaitable: Awaitable[T],
    seconds: Optional[float] = None,
    error_mapper: Optional[ErrorMapper[E]] = None,
) -> Result[T, E]:
    """
    Await with a deadline; running out of time is a Failure like any other.

    `seconds=None` falls back to RAILTRACK_DEFAULT_TIMEOUT_SECONDS; when that
    is unset too, no deadline is applied.
    """
    if seconds is None:
        seconds = get_settings().default_timeout_seconds
    if seconds is None:
        return await from_awaitable(awaitable, error_mapper)
    return await from_awaitable(asyncio.wait_for(awaitable, seconds), error_mapper)
