# filterway

Composable, asynchronous request filters.

A *filter* looks at the request currently being handled and either extracts
a tuple of values from it or rejects it by raising `Rejection`. Small filters
are combined into larger ones, and a filter that extracts a single reply can
be turned into a service that answers requests.

## Installation

```
pip install filterway
```

With the test dependencies:

```
pip install "filterway[test]"
```

## Modules

- `filterway.errors` – `Rejection`, `Error` and `ErrorKind`.
- `filterway.route` – `Route`, `set_route`, `current_route`, `is_set`.
- `filterway.combinators` – `Either`, `combine` and the combinator classes
  (`And`, `AndThen`, `Map`, `MapErr`, `Or`, `OrElse`, `Recover`, `Unify`,
  `UntupleOne`).
- `filterway.filter` – `Filter`, `BoxedFilter`, `Wrap`, `filter_fn`,
  `filter_fn_one`, `any_filter`.
- `filterway.service` – `FilteredService`, `into_service`.

## Routes

A `Route` holds the request being filtered (any object), an optional remote
address and how far into the path matching has progressed
(`matched_path_index()`, `set_matched_path_index()`,
`reset_matched_path_index()`; indices must be non-negative ints).

`set_route(route)` is a context manager that makes the route current for the
block. Nesting it raises `RuntimeError`. `current_route()` returns the current
route, or raises `RuntimeError` outside of filtering; `is_set()` tells whether
one is current.

## Building filters

- `any_filter()` matches every request and extracts `()`.
- `filter_fn(func)` calls `func(current_route())` and uses its result, which
  must be a tuple; `func` may be a plain or an async function.
- `filter_fn_one(func)` does the same, wrapping a single returned value as a
  one-element tuple.
- `Filter(core)` wraps any object that has a `filter()` method returning an
  awaitable.

Extracted values are flattened: joining a filter that extracts `()` with one
that extracts `("warp",)` gives `("warp",)`.

## Combinators

| Method             | Meaning                                                                 |
|--------------------|-------------------------------------------------------------------------|
| `a.and_(b)`        | both must match; their extracted tuples are joined                      |
| `a.or_(b)`         | try `a`, and if it rejects, try `b`; extracts an `Either`               |
| `a.map(fun)`       | call `fun` with the extracted values; its result is extracted           |
| `a.and_then(fun)`  | like `map`, but `fun` may be async and may raise `Rejection`            |
| `a.or_else(fun)`   | on rejection, `fun(rejection)` supplies a tuple (or `None` for `()`)    |
| `a.recover(fun)`   | on rejection, `fun(rejection)` supplies a new value, as `Either.b`      |
| `a.unify()`        | extract the inner values of an `Either`, whichever side it is           |
| `a.untuple_one()`  | remove one layer of tupling from a single extracted tuple (or `None`)   |
| `a.map_err(fun)`   | on rejection, raise the exception that `fun(rejection)` returns         |
| `a.with_(wrapper)` | return what `wrapper.wrap(a)` gives, as a `Filter`                      |
| `a.boxed()`        | hide the filter's structure behind a `BoxedFilter`                      |

`Either` holds the extracted tuple in `value`; `is_a` / `is_b` tell which side
matched. `Wrap` is an abstract base class with a single `wrap(filter)` method.

When `or_`, `or_else` or `recover` fall back, the route's matched path index
is restored to what it was before the first branch ran. When both branches of
`or_` reject, the two rejections are combined.

Filters read the current route, so they run inside `set_route`:

```python
import asyncio

from filterway.filter import any_filter
from filterway.route import Route, set_route

word = any_filter().map(lambda: "warp")
flag = any_filter().map(lambda: True)
both = word.and_(flag)


async def main():
    with set_route(Route({"path": "/"})):
        print(await both.filter())   # ('warp', True)


asyncio.run(main())
```

## Serving

```python
import asyncio

from filterway.filter import any_filter
from filterway.service import into_service

hello = any_filter().map(lambda: "Hello, World!")
service = into_service(hello)

print(asyncio.run(service.call({"path": "/"})))   # Hello, World!
```

`FilteredService.call(request, remote_addr=None)` creates a `Route` for the
request, makes it current, runs the filter and returns the single value it
extracts, unwrapping any `Either`. A filter that extracts anything but one
value raises `TypeError`; a rejection propagates as `Rejection`.
`into_service` returns a `FilteredService` as-is.

## Errors

- `Rejection(*causes)` is raised when a filter does not match. A rejection
  with no causes means nothing matched (`is_not_found`).
  `combine(other)` returns a rejection holding the causes of both;
  `find(kind)` returns the first cause that is an instance of `kind`, or
  `None`.
- `Error(kind, cause)` reports a failure inside the framework, labelled with an
  `ErrorKind` (`HYPER`, `MULTIPART`, `WS`); its text and representation are
  those of `cause`.

## What this package does not do

It provides the filter machinery only. There is no network server, no HTTP
parsing, and no ready-made filters for paths, methods, headers, query strings,
bodies, cookies, files or websockets, nor reply types: requests are whatever
objects you pass to `Route` or `FilteredService.call`, and replies are
whatever your filters extract.