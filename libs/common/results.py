"""Result values returned by the XML and storage operations.

Expected failures (malformed XML, missing files, empty file names) are
reported as data instead of exceptions so the HTTP layer can map each
:class:`ErrorKind` to a response without ``try``/``except`` chains.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    PARSE = "parse"
    IO = "io"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


@dataclass(frozen=True)
class OperationError:
    kind: ErrorKind
    message: str
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: OperationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> Result[T]:
        return cls(error=OperationError(kind=kind, message=message, line=line, column=column))
