"""Unit tests for the Result pattern."""

import pytest

from src.domain.entities.result import DomainError, ErrorType, Result, ResultAccessError


class TestResult:
    """Tests for Result success and failure behavior."""

    def test_success(self):
        result = Result.success(42)

        assert result.is_success
        assert not result.is_failure
        assert result.value == 42
        with pytest.raises(ResultAccessError):
            _ = result.error

    def test_failure(self):
        error = DomainError.validation("INVALID_SQL_QUERY", "Only SELECT queries are allowed")
        result = Result.failure(error)

        assert result.is_failure
        assert result.error.code == "INVALID_SQL_QUERY"
        assert result.error.error_type is ErrorType.VALIDATION
        with pytest.raises(ValueError):
            _ = result.value

    def test_failure_requires_error(self):
        with pytest.raises(ValueError):
            Result.failure(None)

    def test_match(self):
        ok = Result.success("x")
        failed = Result.failure(DomainError("BOOM", "failed"))

        assert ok.match(lambda v: v.upper(), lambda e: e.code) == "X"
        assert failed.match(lambda v: v.upper(), lambda e: e.code) == "BOOM"

    def test_equality_and_repr(self):
        assert Result.success(1) == Result.success(1)
        assert Result.success(1) != Result.failure(DomainError("E", "m"))
        assert repr(Result.success(1)) == "Result.success(1)"

    def test_error_factories(self):
        assert DomainError("E", "m").error_type is ErrorType.FAILURE
        assert DomainError.not_found("E", "m").error_type is ErrorType.NOT_FOUND
        assert DomainError.forbidden("E", "m").error_type is ErrorType.FORBIDDEN
