"""Per-task navigation state using ContextVars."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# Number of Location headers followed by the request currently in flight.
_redirect_depth_var: ContextVar[int] = ContextVar("redirect_depth", default=0)


def get_redirect_depth() -> int:
    return _redirect_depth_var.get()


@contextmanager
def following_redirect() -> Iterator[int]:
    """Increment the redirect depth for the duration of a followed request."""
    depth = _redirect_depth_var.get() + 1
    token = _redirect_depth_var.set(depth)
    try:
        yield depth
    finally:
        _redirect_depth_var.reset(token)


__all__ = ["get_redirect_depth", "following_redirect"]
