"""Errors raised inside the framework and rejections produced by filters."""

from __future__ import annotations

import enum
from typing import Iterator, TypeVar

T = TypeVar("T")


class ErrorKind(enum.Enum):
    """Where an internal error came from."""

    HYPER = "hyper"
    MULTIPART = "multipart"
    WS = "ws"


class Error(Exception):
    """An error that happened inside the framework.

    Its text and representation are those of the underlying cause, so the
    wrapper itself stays out of the way.
    """

    def __init__(self, kind: ErrorKind, cause: BaseException) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError(f"kind must be an ErrorKind, not {type(kind).__name__}")
        super().__init__(cause)
        self.kind = kind
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.cause)

    def __repr__(self) -> str:
        return repr(self.cause)


class Rejection(Exception):
    """Raised by a filter that does not match a request.

    A rejection carries the reasons it was made; a rejection with no reasons
    means that nothing matched at all. Rejections from alternative filters
    are merged with :meth:`combine`.
    """

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        self.causes: tuple[object, ...] = tuple(args)

    @property
    def is_not_found(self) -> bool:
        """True when the rejection carries no reason."""
        return not self.causes

    def __iter__(self) -> Iterator[object]:
        return iter(self.causes)

    def combine(self, other: "Rejection") -> "Rejection":
        """Merge this rejection with another, keeping the reasons of both."""
        if not isinstance(other, Rejection):
            raise TypeError(f"cannot combine a rejection with {type(other).__name__}")
        return Rejection(*self.causes, *other.causes)

    def find(self, kind: type[T]) -> T | None:
        """Return the first reason that is an instance of ``kind``, if any."""
        return next((cause for cause in self.causes if isinstance(cause, kind)), None)

    def __repr__(self) -> str:
        if self.is_not_found:
            return "Rejection(NotFound)"
        return f"Rejection({', '.join(repr(c) for c in self.causes)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rejection):
            return NotImplemented
        return self.causes == other.causes

    __hash__ = Exception.__hash__