"""
Result type returned by every ledger service operation.

A Result is either a success carrying a value, or a failure carrying a
message and exactly one error code from services.error_codes. Services
never let store exceptions escape; callers branch on ``success`` and
``error_code``.

Usage:
    result = account_service.get_balance(account_id)
    if result:
        print(result.value)
    elif result.error_code == error_codes.ACCOUNT_NOT_FOUND:
        print("no such account")
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a ledger operation.

    Attributes:
        success: Whether the operation succeeded
        value: The return value if successful (None for void operations)
        error: Human-readable failure message
        error_code: Stable error code for programmatic handling
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        """Create a successful result with an optional value."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        """Create a failed result with an error message and optional error code."""
        return cls(success=False, error=error, error_code=code)

    @classmethod
    def from_error(cls, exc) -> "Result[T]":
        """Create a failed result from a LedgerError (uses its message and code)."""
        return cls.fail(exc.message, code=exc.code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Get the value, raising ValueError if the result is a failure.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        """Get the value or a default if the result is a failure."""
        return self.value if self.success else default  # type: ignore

    def map(self, fn: Callable[[T], "Result"]) -> "Result":
        """
        Chain a Result-returning operation onto a successful result.

        Failures are returned unchanged, so the first failing step wins.
        """
        if not self.success:
            return self
        return fn(self.value)
