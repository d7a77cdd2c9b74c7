"""Typed outcomes returned by the lifecycle services.

Callers branch on ``kind`` and map it to their own transport status.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, Self, TypeVar

if TYPE_CHECKING:
    from activities.domain.errors import DomainError, ErrorCode

T = TypeVar("T")


class OutcomeKind(Enum):
    OK = "OK"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a service operation: a payload or a failure reason."""

    kind: OutcomeKind
    payload: T | None = None
    message: str = ""
    code: "ErrorCode | None" = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @classmethod
    def success(cls, payload: T | None = None, message: str = "") -> Self:
        return cls(kind=OutcomeKind.OK, payload=payload, message=message)

    @classmethod
    def failure(cls, error: "DomainError") -> Self:
        return cls(kind=error.kind, message=error.message, code=error.code)
