"""
Result types shared by every use case.

A use case returns ``Result[T]``: either an ok value or an ``Error`` with a
machine-readable code. Routers translate error codes into HTTP responses.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Error:
    """Expected failure with a stable code and a human-readable message"""

    def __init__(
        self,
        code: str,
        message: str,
        field: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.field = field

    def __repr__(self) -> str:
        return f"Error(code={self.code!r}, message={self.message!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return (self.code, self.message, self.field) == (
            other.code,
            other.message,
            other.field,
        )


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
            raise ValueError("Result is ok, it has no error")
        return self._error


class Return:
    @staticmethod
    def ok(value: Optional[T] = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
