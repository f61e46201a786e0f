"""Result pattern for caller-recoverable domain failures.

Domain service methods that can fail on expected business rules return a
Result instead of raising, so the API layer can map the error code to an
HTTP response without catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ErrorType(str, Enum):
    """Category of a domain error, used by the API layer for status mapping."""

    FAILURE = "failure"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class DomainError:
    """Structured error carried by a failed Result.

    Attributes:
        code: Machine-readable error code (e.g., "SQL_QUERY_TOO_COMPLEX")
        message: Human-readable explanation
        error_type: Error category
    """

    code: str
    message: str
    error_type: ErrorType = ErrorType.FAILURE

    @classmethod
    def validation(cls, code: str, message: str) -> "DomainError":
        return cls(code=code, message=message, error_type=ErrorType.VALIDATION)

    @classmethod
    def not_found(cls, code: str, message: str) -> "DomainError":
        return cls(code=code, message=message, error_type=ErrorType.NOT_FOUND)

    @classmethod
    def forbidden(cls, code: str, message: str) -> "DomainError":
        return cls(code=code, message=message, error_type=ErrorType.FORBIDDEN)


class ResultAccessError(ValueError):
    """Raised when reading the value of a failure or the error of a success."""


class Result(Generic[T]):
    """Outcome of an operation: either a success value or a DomainError."""

    __slots__ = ("_value", "_error")

    def __init__(self, value: T | None = None, error: DomainError | None = None):
        if error is not None and value is not None:
            raise ValueError("Result cannot carry both a value and an error")
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        if error is None:
            raise ValueError("failure requires an error")
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ResultAccessError(
                f"Cannot access value of a failed result ({self._error.code})"
            )
        return self._value  # type: ignore[return-value]

    @property
    def error(self) -> DomainError:
        if self._error is None:
            raise ResultAccessError("Cannot access error of a successful result")
        return self._error

    def match(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[DomainError], U],
    ) -> U:
        """Dispatch to one of two callables depending on the outcome."""
        if self._error is None:
            return on_success(self._value)  # type: ignore[arg-type]
        return on_failure(self._error)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._value == other._value and self._error == other._error

    def __repr__(self) -> str:
        if self._error is None:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error!r})"
