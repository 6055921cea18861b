"""Small helpers shared by the extension pipeline."""

from __future__ import annotations

import inspect
from typing import Any


async def maybe_await(value: Any) -> Any:
    """Return *value*, awaiting it first when it is awaitable.

    Hooks, ``on_create`` resolvers, API builders and API methods may each be
    plain functions or coroutine functions; every call site funnels its
    result through here so both kinds compose in one fold.
    """
    if inspect.isawaitable(value):
        return await value
    return value
