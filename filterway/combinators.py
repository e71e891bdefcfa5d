"""Combinators that build new filters out of existing ones.

A filter is any object whose ``filter()`` method returns an awaitable. The
awaitable resolves to the tuple of values extracted from the current
request, or raises :class:`~filterway.errors.Rejection` when the request
does not match.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol

from .errors import Rejection
from .route import current_route


class FilterLike(Protocol):
    """Anything that can filter the current request."""

    def filter(self) -> Awaitable[tuple]:
        ...


@dataclass(frozen=True)
class Either:
    """The extract of one of two alternative filters.

    ``value`` is the extracted tuple of whichever side matched; ``is_a``
    tells whether that was the first side.
    """

    value: tuple
    is_a: bool = True

    @classmethod
    def a(cls, value: tuple) -> "Either":
        """Wrap the extract of the first alternative."""
        return cls(_as_tuple(value, "Either value"), True)

    @classmethod
    def b(cls, value: tuple) -> "Either":
        """Wrap the extract of the second alternative."""
        return cls(_as_tuple(value, "Either value"), False)

    @property
    def is_b(self) -> bool:
        return not self.is_a


def _as_tuple(value: Any, what: str) -> tuple:
    if not isinstance(value, tuple):
        raise TypeError(f"{what} must be a tuple, not {type(value).__name__}")
    return value


def combine(first: tuple, second: tuple) -> tuple:
    """Join two extracted tuples into one flat tuple."""
    return (*_as_tuple(first, "extract"), *_as_tuple(second, "extract"))


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _as_extract(value: Any) -> tuple:
    """Accept a callback result meant to stand in for an extract."""
    if value is None:
        return ()
    return _as_tuple(value, "extract")


@dataclass(frozen=True)
class And:
    """Requires both filters to match; extracts the values of both."""

    first: FilterLike
    second: FilterLike

    async def filter(self) -> tuple:
        extracted = await self.first.filter()
        return combine(extracted, await self.second.filter())


@dataclass(frozen=True)
class AndThen:
    """Passes the extract to a callback that may be asynchronous or reject."""

    inner: FilterLike
    callback: Callable[..., Any]

    async def filter(self) -> tuple:
        extracted = await self.inner.filter()
        return (await _resolve(self.callback(*extracted)),)


@dataclass(frozen=True)
class Map:
    """Passes the extract to a plain function and extracts its result."""

    inner: FilterLike
    callback: Callable[..., Any]

    async def filter(self) -> tuple:
        extracted = await self.inner.filter()
        return (self.callback(*extracted),)


@dataclass(frozen=True)
class MapErr:
    """Turns a rejection of the inner filter into another error."""

    inner: FilterLike
    callback: Callable[[Rejection], BaseException]

    async def filter(self) -> tuple:
        try:
            return await self.inner.filter()
        except Rejection as err:
            mapped = self.callback(err)
            if not isinstance(mapped, BaseException):
                raise TypeError(
                    f"map_err callback must return an exception, not {type(mapped).__name__}"
                ) from err
            raise mapped from err


@dataclass(frozen=True)
class Or:
    """Tries the first filter, and the second if the first rejects.

    The matched path is rolled back before trying the second filter. When
    both reject, the rejections are combined.
    """

    first: FilterLike
    second: FilterLike

    async def filter(self) -> tuple:
        route = current_route()
        index = route.matched_path_index()
        try:
            extracted = await self.first.filter()
        except Rejection as first_err:
            route.reset_matched_path_index(index)
            try:
                extracted = await self.second.filter()
            except Rejection as second_err:
                route.reset_matched_path_index(index)
                raise second_err.combine(first_err) from None
            return (Either.b(extracted),)
        return (Either.a(extracted),)


@dataclass(frozen=True)
class OrElse:
    """Hands a rejection to a callback that yields the same kind of extract."""

    inner: FilterLike
    callback: Callable[[Rejection], Any]

    async def filter(self) -> tuple:
        route = current_route()
        index = route.matched_path_index()
        try:
            return await self.inner.filter()
        except Rejection as err:
            route.reset_matched_path_index(index)
            return _as_extract(await _resolve(self.callback(err)))


@dataclass(frozen=True)
class Recover:
    """Hands a rejection to a callback that yields a new value."""

    inner: FilterLike
    callback: Callable[[Rejection], Any]

    async def filter(self) -> tuple:
        route = current_route()
        index = route.matched_path_index()
        try:
            extracted = await self.inner.filter()
        except Rejection as err:
            route.reset_matched_path_index(index)
            recovered = await _resolve(self.callback(err))
            return (Either.b((recovered,)),)
        return (Either.a(extracted),)


def _single(extracted: tuple, what: str) -> Any:
    _as_tuple(extracted, "extract")
    if len(extracted) != 1:
        raise TypeError(f"{what} needs a filter extracting one value, got {len(extracted)}")
    return extracted[0]


@dataclass(frozen=True)
class Unify:
    """Extracts the inner value of an :class:`Either`, whichever side it is."""

    inner: FilterLike

    async def filter(self) -> tuple:
        either = _single(await self.inner.filter(), "unify")
        if not isinstance(either, Either):
            raise TypeError(f"unify needs an Either, not {type(either).__name__}")
        return either.value


@dataclass(frozen=True)
class UntupleOne:
    """Removes one layer of tupling from a single extracted tuple."""

    inner: FilterLike

    async def filter(self) -> tuple:
        return _as_extract(_single(await self.inner.filter(), "untuple_one"))