"""
Result type shared by the application layer.

Use cases return ``Result[T]`` instead of raising for expected failures so the
API layer can map error codes onto HTTP statuses in one place.
"""

from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class Error:
    """Stable error code plus a human readable message."""

    def __init__(self, code: str, message: str, details: Optional[str] = None):
        self.code = code
        self.message = message
        self.details = details

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return (self.code, self.message, self.details) == (other.code, other.message, other.details)

    def __repr__(self) -> str:
        return f"Error(code={self.code!r}, message={self.message!r})"


class Result(Generic[T]):
    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result is an error: {self._error!r}")
        return self._value

    @property
    def error(self) -> Error:
        if self._error is None:
            raise ValueError("Result is ok")
        return self._error


class Return:
    """Constructors for ``Result``."""

    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result[Any]:
        return Result(error=error)
