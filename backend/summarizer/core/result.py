"""
Tagged results passed between pipeline stages.

Each stage returns Ok(value) or Err(kind, message, details) instead of raising
for failures the caller is expected to handle.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FETCH = "fetch"
    COMPLETION = "completion"
    PERSISTENCE = "persistence"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FETCH: 500,
    ErrorKind.COMPLETION: 500,
    ErrorKind.PERSISTENCE: 500,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    details: Optional[str] = None

    @property
    def status_code(self) -> int:
        return self.kind.status_code


Result = Union[Ok[T], Err]
