"""
Result-or-error values returned at the fetch, parse, resolve and download
boundaries.

Callers inspect :attr:`Result.ok` and the :class:`ErrorKind` of a failure
to decide whether to skip a page, drop a URL or retry a download.
"""

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(enum.Enum):
    FETCH = "fetch"
    PARSE = "parse"
    RESOLVE = "resolve"
    DOWNLOAD = "download"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a ``value`` or an ``error``, never both."""

    value: T | None = None
    error: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=Failure(kind, message))
