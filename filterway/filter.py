"""The composable :class:`Filter` type and the basic ways to build one."""

from __future__ import annotations

import abc
import inspect
from dataclasses import dataclass
from typing import Any, Callable

from .combinators import And, AndThen, Map, MapErr, Or, OrElse, Recover, Unify, UntupleOne
from .route import Route, current_route


def _require_filter(obj: Any, what: str) -> Any:
    if not callable(getattr(obj, "filter", None)):
        raise TypeError(f"{what} must be a filter, not {type(obj).__name__}")
    return obj


def _require_callable(fun: Any, what: str) -> Callable[..., Any]:
    if not callable(fun):
        raise TypeError(f"{what} must be callable, not {type(fun).__name__}")
    return fun


class Filter:
    """A composable request filter.

    Filtering yields the tuple of values extracted from the current request,
    or raises :class:`~filterway.errors.Rejection` when the request does not
    match. Combining filters with :meth:`and_` flattens their extracts, so a
    callback given to :meth:`map` receives them as separate arguments.
    """

    __slots__ = ("core",)

    def __init__(self, core: Any) -> None:
        self.core = _require_filter(core, "core")

    def filter(self) -> Any:
        """Return an awaitable filtering the current request."""
        return self.core.filter()

    def and_(self, other: Any) -> "Filter":
        """Require both this and ``other`` to match, extracting the values of both."""
        return Filter(And(self, _require_filter(other, "other")))

    def or_(self, other: Any) -> "Filter":
        """Match either this filter or, failing that, ``other``."""
        return Filter(Or(self, _require_filter(other, "other")))

    def map(self, fun: Callable[..., Any]) -> "Filter":
        """Extract the result of calling ``fun`` with the extracted values."""
        return Filter(Map(self, _require_callable(fun, "map callback")))

    def and_then(self, fun: Callable[..., Any]) -> "Filter":
        """Like :meth:`map`, but ``fun`` may be asynchronous and may reject."""
        return Filter(AndThen(self, _require_callable(fun, "and_then callback")))

    def or_else(self, fun: Callable[..., Any]) -> "Filter":
        """On rejection, extract what ``fun`` returns for the rejection instead."""
        return Filter(OrElse(self, _require_callable(fun, "or_else callback")))

    def recover(self, fun: Callable[..., Any]) -> "Filter":
        """On rejection, extract a new value that ``fun`` makes from it."""
        return Filter(Recover(self, _require_callable(fun, "recover callback")))

    def unify(self) -> "Filter":
        """Extract the inner values of an :class:`Either`, whichever side matched."""
        return Filter(Unify(self))

    def untuple_one(self) -> "Filter":
        """Remove one layer of tupling from a single extracted value."""
        return Filter(UntupleOne(self))

    def map_err(self, fun: Callable[..., Any]) -> "Filter":
        """Turn a rejection into the error that ``fun`` returns for it."""
        return Filter(MapErr(self, _require_callable(fun, "map_err callback")))

    def with_(self, wrapper: Any) -> "Filter":
        """Wrap this filter with ``wrapper`` and return the wrapped filter."""
        wrap = getattr(wrapper, "wrap", None)
        if not callable(wrap):
            raise TypeError(f"{type(wrapper).__name__} is not a wrapper")
        wrapped = wrap(self)
        if isinstance(wrapped, Filter):
            return wrapped
        return Filter(_require_filter(wrapped, "wrapped filter"))

    def boxed(self) -> "BoxedFilter":
        """Return this filter behind a uniform, opaque type."""
        return BoxedFilter(self)

    def __repr__(self) -> str:
        return f"Filter({self.core!r})"


class BoxedFilter(Filter):
    """A filter whose composition is hidden behind a single type."""

    __slots__ = ()

    def __init__(self, core: Any) -> None:
        if isinstance(core, BoxedFilter):
            core = core.core
        super().__init__(core)

    async def filter(self) -> tuple:
        return await self.core.filter()

    def __repr__(self) -> str:
        return "BoxedFilter"


class Wrap(abc.ABC):
    """Something that wraps a filter in another, as used by :meth:`Filter.with_`."""

    @abc.abstractmethod
    def wrap(self, filter: Filter) -> Filter:
        """Return a filter that runs around ``filter``."""


@dataclass(frozen=True)
class _FnCore:
    func: Callable[[Route], Any]
    one: bool = False

    async def filter(self) -> tuple:
        result = self.func(current_route())
        if inspect.isawaitable(result):
            result = await result
        if self.one:
            return (result,)
        if not isinstance(result, tuple):
            raise TypeError(f"filter function must return a tuple, not {type(result).__name__}")
        return result


def filter_fn(func: Callable[[Route], Any]) -> Filter:
    """Build a filter from a function of the current route returning a tuple."""
    return Filter(_FnCore(_require_callable(func, "filter function")))


def filter_fn_one(func: Callable[[Route], Any]) -> Filter:
    """Build a filter from a function of the current route returning one value."""
    return Filter(_FnCore(_require_callable(func, "filter function"), one=True))


def _extract_nothing(route: Route) -> tuple:
    return ()


def any_filter() -> Filter:
    """A filter that matches any request and extracts nothing."""
    return filter_fn(_extract_nothing)