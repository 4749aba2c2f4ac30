"""
Combinators — aggregate operations over several Results.

Two policies, on purpose:
  - fail-fast (combine2, combine3, sequence, traverse_array): stop at the
    first Failure in input order and return it unchanged.
  - fail-collect (traverse): look at every Result and report all errors.

    fields = sequence([validate_email(d), validate_password(d), validate_age(d)])
    report = traverse([validate_email(d), validate_password(d), validate_age(d)])

None of these evaluate anything: callers pass already-produced Results and the
combinators only branch on the variants.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Tuple, TypeVar, cast

from railtrack.result import Failure, Result, Success

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
R = TypeVar("R")


def combine2(ra: Result[A, E], rb: Result[B, E]) -> Result[Tuple[A, B], E]:
    """
    Pair two Results. Both must succeed; otherwise the leftmost Failure is returned.

        combine2(Result.success("Alice"), Result.success(30))  # → Success(('Alice', 30))
    """
    return ra.flat_map(lambda a: rb.map(lambda b: (a, b)))


def combine3(
    ra: Result[A, E],
    rb: Result[B, E],
    rc: Result[C, E],
) -> Result[Tuple[A, B, C], E]:
    """Triple of three Results, built from two right-associated combine2 calls."""
    return combine2(ra, combine2(rb, rc)).map(lambda pair: (pair[0], *pair[1]))


def combine_with(
    ra: Result[A, E],
    rb: Result[B, E],
    combiner: Callable[[A, B], R],
) -> Result[R, E]:
    """
    Combine two Results with a function. Both must succeed.

        order = combine_with(
            validate_customer(cmd),
            validate_products(cmd),
            lambda customer, products: Order(customer, products),
        )
    """
    return combine2(ra, rb).map(lambda pair: combiner(*pair))


def sequence(results: Iterable[Result[T, E]]) -> Result[List[T], E]:
    """
    Collect Results into a Result of list. Returns the first Failure encountered.

    Iteration stops at that Failure, so a lazy iterable is not consumed past it.
    """
    values: list[T] = []
    for r in results:
        match r:
            case Success(v):
                values.append(v)
            case Failure(_):
                return cast(Result[List[T], E], r)
    return Success(values)


def partition(results: Iterable[Result[T, E]]) -> Tuple[List[T], List[E]]:
    """Split Results into (values, errors), both in input order."""
    values: list[T] = []
    errors: list[E] = []
    for r in results:
        match r:
            case Success(v):
                values.append(v)
            case Failure(err):
                errors.append(err)
    return values, errors


def traverse(results: Iterable[Result[T, E]]) -> Result[List[T], List[E]]:
    """
    Validate everything, report every problem.

    Failure(all errors) if any input failed, else Success(all values).
    """
    values, errors = partition(results)
    if errors:
        return Failure(errors)
    return Success(values)


def traverse_array(items: Iterable[T], fn: Callable[[T], Result[U, E]]) -> Result[List[U], E]:
    """
    Apply `fn` to every item, then sequence the outcomes.

        traverse_array(raw_ids, parse_id)  # Result[list[int], str]
    """
    return sequence([fn(item) for item in items])
