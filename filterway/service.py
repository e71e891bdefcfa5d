"""Running a filter against incoming requests."""

from __future__ import annotations

from typing import Any

from .combinators import Either
from .route import Route, set_route


def _into_reply(extracted: tuple) -> Any:
    while True:
        if not isinstance(extracted, tuple) or len(extracted) != 1:
            raise TypeError("a service filter must extract exactly one reply")
        reply = extracted[0]
        if not isinstance(reply, Either):
            return reply
        extracted = reply.value


class FilteredService:
    """Serves requests by running them through a filter."""

    def __init__(self, filter: Any) -> None:
        if not callable(getattr(filter, "filter", None)):
            raise TypeError(f"expected a filter, not {type(filter).__name__}")
        self.filter = filter

    async def call(self, request: Any, remote_addr: Any = None) -> Any:
        """Filter ``request`` and return the reply it extracts.

        Raises :class:`~filterway.errors.Rejection` when the filter rejects.
        """
        with set_route(Route(request, remote_addr)):
            extracted = await self.filter.filter()
        return _into_reply(extracted)

    def __repr__(self) -> str:
        return f"FilteredService({self.filter!r})"


def into_service(filter: Any) -> FilteredService:
    """Return a service for ``filter``, or ``filter`` itself if it is one."""
    if isinstance(filter, FilteredService):
        return filter
    return FilteredService(filter)