"""Request context helpers using ContextVars.

``request_id_var`` is set by the observability middleware for every HTTP
request; ``route_var`` is set by the search pipeline ("JFK-LAX") so that
upstream log lines can be correlated with the search that caused them.
"""

from contextvars import ContextVar
from typing import Optional


request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
route_var: ContextVar[Optional[str]] = ContextVar("route", default=None)


def clear_context() -> None:
    """Reset context variables to defaults."""
    request_id_var.set(None)
    route_var.set(None)
