"""The outcome of a request that waits for a reply."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

__all__ = ["CallStatus", "CallResultError", "CallResult"]

T = TypeVar("T")
O = TypeVar("O")


class CallStatus(Enum):
    """How a call finished."""

    SUCCESS = "Success"
    TIMEOUT = "Timeout"
    SENDER_ERROR = "SenderError"


class CallResultError(RuntimeError):
    """Raised when a value is taken from a call that did not succeed."""

    def __init__(self, message: str, status: CallStatus) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """A successful reply, a timeout, or a reply channel dropped without a reply."""

    status: CallStatus
    value: Any = None

    @classmethod
    def success(cls, value: T) -> CallResult[T]:
        return cls(CallStatus.SUCCESS, value)

    @classmethod
    def timeout(cls) -> CallResult[Any]:
        return cls(CallStatus.TIMEOUT)

    @classmethod
    def sender_error(cls) -> CallResult[Any]:
        return cls(CallStatus.SENDER_ERROR)

    def is_success(self) -> bool:
        return self.status is CallStatus.SUCCESS

    def is_timeout(self) -> bool:
        return self.status is CallStatus.TIMEOUT

    def is_send_error(self) -> bool:
        return self.status is CallStatus.SENDER_ERROR

    def unwrap(self) -> T:
        """Return the reply, raising CallResultError on any other outcome."""
        if self.is_success():
            return self.value
        raise CallResultError(
            f"called CallResult.unwrap() on a `{self.status.value}` value", self.status
        )

    def expect(self, msg: str) -> T:
        """Return the reply, raising CallResultError with ``msg`` on any other outcome."""
        if self.is_success():
            return self.value
        raise CallResultError(
            f"{msg} - called CallResult.expect() on a `{self.status.value}` value",
            self.status,
        )

    def unwrap_or(self, default: T) -> T:
        return self.value if self.is_success() else default

    def unwrap_or_else(self, func: Callable[[], T]) -> T:
        return self.value if self.is_success() else func()

    def success_or(self, error: BaseException) -> T:
        """Return the reply, or raise ``error`` if the call did not succeed."""
        if self.is_success():
            return self.value
        raise error

    def success_or_else(self, func: Callable[[], BaseException]) -> T:
        """Return the reply, or raise the exception built by ``func``."""
        if self.is_success():
            return self.value
        raise func()

    def map(self, mapping: Callable[[T], O]) -> CallResult[O]:
        if self.is_success():
            return CallResult.success(mapping(self.value))
        return CallResult(self.status)

    def map_or(self, default: O, mapping: Callable[[T], O]) -> O:
        return mapping(self.value) if self.is_success() else default

    def map_or_else(self, default: Callable[[], O], mapping: Callable[[T], O]) -> O:
        return mapping(self.value) if self.is_success() else default()

    def __repr__(self) -> str:
        if self.is_success():
            return f"Success({self.value!r})"
        return self.status.value