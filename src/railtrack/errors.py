"""
Exceptions raised by railtrack itself.

The algebra never raises for a domain failure; those travel as values on the
failure track. These exceptions only appear at the edges:

  - UnwrapFailedError: a terminal extraction was asked for a value that is not
    there (get_value_or_throw without a throwable error, value() on a Failure).
  - DomainException: the raisable form of a DomainError, for system edges that
    must leave the Result world by raising.
"""

from __future__ import annotations

from typing import Any


class RailtrackError(Exception):
    """Base class for every exception raised by the library."""


class UnwrapFailedError(RailtrackError, ValueError):
    """
    Raised when a Result is unwrapped on the wrong track.

    The original error (or success value, for error() on a Success) is kept
    in `.error` so the caller can still inspect it after catching.
    """

    def __init__(self, message: str, error: Any = None) -> None:
        super().__init__(message)
        self.error = error


class DomainException(RailtrackError):
    """Exception wrapper around a DomainError."""

    def __init__(self, domain_error: Any) -> None:
        super().__init__(f"{domain_error.kind.value}: {domain_error.message}")
        self.domain_error = domain_error
