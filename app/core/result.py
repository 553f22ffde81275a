"""
Result type for business operations.
Design: Service returns a value or a typed error; the HTTP layer matches on the kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Business error kinds the service can report."""

    EMAIL_ALREADY_EXISTS = "EmailAlreadyExists"
    USER_NOT_FOUND = "UserNotFound"
    INVALID_STATE = "InvalidState"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either ``value`` (success) or ``error`` (failure), never both."""

    value: T | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message))
