"""Tests for DomainError and the DomainResults factory."""

from __future__ import annotations

import pytest

from railtrack import (
    DomainError,
    DomainException,
    DomainResults,
    ErrorKind,
    Result,
    Success,
    classify_exception,
)


class TestErrorKind:
    def test_three_kinds(self):
        assert {k.value for k in ErrorKind} == {"VALIDATION", "NOT_FOUND", "SERVICE"}


class TestDomainError:
    def test_creation(self):
        err = DomainError(ErrorKind.VALIDATION, "Email is required", field="email")
        assert err.is_validation()
        assert not err.is_not_found()
        assert err.field == "email"
        assert err.cause is None
        assert err.timestamp is not None

    def test_is_immutable(self):
        err = DomainError(ErrorKind.SERVICE, "down")
        with pytest.raises(AttributeError):
            err.message = "up"  # type: ignore[misc]

    def test_context_is_read_only(self):
        err = DomainError(ErrorKind.VALIDATION, "bad", context={"min": 8})
        with pytest.raises(TypeError):
            err.context["min"] = 1  # type: ignore[index]

    def test_equality_ignores_timestamp_and_cause(self):
        a = DomainError(ErrorKind.SERVICE, "down", cause=RuntimeError("a"))
        b = DomainError(ErrorKind.SERVICE, "down", cause=RuntimeError("b"))
        assert a == b
        assert hash(a) == hash(b)

    def test_full_stack_trace_without_cause(self):
        assert DomainError(ErrorKind.SERVICE, "down").full_stack_trace() == "down"

    def test_full_stack_trace_with_cause(self):
        try:
            raise ConnectionError("refused")
        except ConnectionError as e:
            err = DomainError(ErrorKind.SERVICE, "db down", cause=e)
        trace = err.full_stack_trace()
        assert trace.startswith("db down")
        assert "ConnectionError: refused" in trace

    def test_to_exception(self):
        cause = ConnectionError("refused")
        err = DomainError(ErrorKind.SERVICE, "db down", cause=cause)
        with pytest.raises(DomainException, match="SERVICE: db down") as exc_info:
            Result.failure(err).get_value_or_throw(DomainError.to_exception)
        assert exc_info.value.domain_error is err
        assert exc_info.value.__cause__ is cause


class TestConstructors:
    def test_success(self):
        assert DomainResults.success(1) == Success(1)

    def test_invalid(self):
        err = DomainResults.invalid("email", "Email is required", max_length=255).error()
        assert err.kind is ErrorKind.VALIDATION
        assert err.field == "email"
        assert err.message == "Email is required"
        assert err.context == {"max_length": 255}

    def test_not_found(self):
        err = DomainResults.not_found("User", 123).error()
        assert err.kind is ErrorKind.NOT_FOUND
        assert err.entity_type == "User"
        assert err.entity_id == "123"
        assert err.message == "User not found with identifier: 123"

    def test_from_error(self):
        cause = TimeoutError("slow")
        err = DomainResults.from_error("Payment gateway unreachable", cause).error()
        assert err.kind is ErrorKind.SERVICE
        assert err.cause is cause


class TestEnsure:
    def test_ensure_valid_passes(self):
        result = DomainResults.ensure_valid(Result.success("a@b.c"), lambda v: "@" in v, "email", "bad")
        assert result == Success("a@b.c")

    def test_ensure_valid_fails(self):
        result = DomainResults.ensure_valid(Result.success("abc"), lambda v: "@" in v, "email", "Missing @")
        assert result.error() == DomainError(ErrorKind.VALIDATION, "Missing @", field="email")

    def test_ensure_valid_keeps_existing_failure(self, call_counter):
        original = DomainResults.not_found("User", 1)
        result = DomainResults.ensure_valid(original, call_counter, "email", "bad")
        assert result == original
        assert call_counter.calls == []

    def test_ensure_exists_fails(self):
        result = DomainResults.ensure_exists(Result.success(None), lambda v: v is not None, "Order", "o-1")
        assert result.error().is_not_found()
        assert result.error().entity_id == "o-1"

    def test_ensure_exists_passes(self):
        result = DomainResults.ensure_exists(Result.success({"id": 1}), bool, "Order", 1)
        assert result == Success({"id": 1})


class TestExceptionClassification:
    @pytest.mark.parametrize(
        ("exception", "kind"),
        [
            (ValueError("v"), ErrorKind.VALIDATION),
            (TypeError("t"), ErrorKind.VALIDATION),
            (KeyError("k"), ErrorKind.NOT_FOUND),
            (IndexError("i"), ErrorKind.NOT_FOUND),
            (ConnectionError("c"), ErrorKind.SERVICE),
            (RuntimeError("r"), ErrorKind.SERVICE),
        ],
    )
    def test_classify(self, exception, kind):
        assert classify_exception(exception) is kind

    def test_from_exception(self):
        result = DomainResults.from_exception(lambda: int("abc"), "Age is not a number")
        err = result.error()
        assert err.kind is ErrorKind.VALIDATION
        assert err.message.startswith("Age is not a number: ")
        assert isinstance(err.cause, ValueError)

    def test_from_exception_success(self):
        assert DomainResults.from_exception(lambda: int("42"), "unused") == Success(42)

    @pytest.mark.asyncio
    async def test_from_awaitable(self):
        async def lookup():
            raise KeyError("user-9")

        result = await DomainResults.from_awaitable(lookup(), "User lookup failed")
        assert result.error().is_not_found()
