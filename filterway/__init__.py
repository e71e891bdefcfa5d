"""Composable asynchronous request filters, their combinators and a service that runs them."""

__version__ = "0.1.0"

__all__ = ["errors", "route", "combinators", "filter", "service"]