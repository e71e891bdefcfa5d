"""The request being filtered, and the context that makes it current."""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Iterator

_CURRENT: contextvars.ContextVar["Route | None"] = contextvars.ContextVar(
    "filterway_route", default=None
)


class Route:
    """A request together with how much of its path has been matched."""

    def __init__(self, request: Any, remote_addr: Any = None) -> None:
        self.request = request
        self.remote_addr = remote_addr
        self._matched_index = 0

    def matched_path_index(self) -> int:
        """Return how far into the path matching has progressed."""
        return self._matched_index

    def set_matched_path_index(self, index: int) -> None:
        """Record that the path has been matched up to ``index``."""
        self._matched_index = _check_index(index)

    def reset_matched_path_index(self, index: int) -> None:
        """Roll the matched path back to an index saved earlier."""
        self._matched_index = _check_index(index)

    def __repr__(self) -> str:
        return (
            f"Route(request={self.request!r}, remote_addr={self.remote_addr!r}, "
            f"matched={self._matched_index})"
        )


def _check_index(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"path index must be an int, not {type(index).__name__}")
    if index < 0:
        raise ValueError(f"path index must not be negative: {index}")
    return index


def current_route() -> Route:
    """Return the route being filtered.

    Raises RuntimeError when called outside of filtering.
    """
    route = _CURRENT.get()
    if route is None:
        raise RuntimeError("route accessed outside of a filter")
    return route


def is_set() -> bool:
    """Tell whether a route is current."""
    return _CURRENT.get() is not None


@contextmanager
def set_route(route: Route) -> Iterator[Route]:
    """Make ``route`` current for the duration of the block."""
    if not isinstance(route, Route):
        raise TypeError(f"expected a Route, not {type(route).__name__}")
    if is_set():
        raise RuntimeError("nested route::set calls")
    token = _CURRENT.set(route)
    try:
        yield route
    finally:
        _CURRENT.reset(token)