"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages.

Usage in tests:
    from railtrack import ResultAssertions

    def test_create_user():
        user = ResultAssertions.assert_success(create_user(valid_command))
        assert user.name == "Alice"

    def test_invalid_email():
        result = create_user(bad_command)
        ResultAssertions.assert_failure_message_contains(result, "email")
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from railtrack.result import Result

T = TypeVar("T")
E = TypeVar("E")

_MISSING = object()


def _message_of(error: Any) -> str:
    message = getattr(error, "message", None)
    return message if isinstance(message, str) else str(error)


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T, E], message: str = "") -> T:
        """
        Assert the Result is a Success and return the value.

            value = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        assert result.is_success(), f"Expected Success but got {result!r}{context}"
        return result.value()

    @staticmethod
    def assert_success_value(result: Result[T, E], expected_value: Any) -> None:
        """Assert the Result is a Success with the specific value."""
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )

    @staticmethod
    def assert_failure(
        result: Result[T, E],
        expected_error: Any = _MISSING,
        message: str = "",
    ) -> E:
        """
        Assert the Result is a Failure, optionally checking the error by equality.

            error = ResultAssertions.assert_failure(result, "must be positive")
        """
        context = f" — {message}" if message else ""
        assert result.is_failure(), f"Expected Failure but got {result!r}{context}"
        error = result.error()
        if expected_error is not _MISSING:
            assert error == expected_error, (
                f"Expected error {expected_error!r} but got {error!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_matches(result: Result[T, E], predicate: Callable[[E], bool]) -> E:
        """Assert the Result is a Failure whose error satisfies `predicate`."""
        error = ResultAssertions.assert_failure(result)
        assert predicate(error), f"Failure error {error!r} does not match predicate"
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[T, E], substring: str) -> None:
        """Assert the failure message (`.message` or str(error)) contains the substring."""
        error = ResultAssertions.assert_failure(result)
        text = _message_of(error)
        assert substring.lower() in text.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {text!r}"
        )
