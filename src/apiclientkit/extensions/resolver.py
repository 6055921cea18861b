"""Resolve per-request hook sets from the registered extensions.

Every extension with a ``hooks`` callable is asked for its hook set with the
ambient request and response. The calls are independent of each other, so
by default they run concurrently under :func:`asyncio.gather`; the result
still follows registration order regardless of which call finishes first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Iterable, Optional

from apiclientkit.extensions.base import Extension, LifecycleHooks
from apiclientkit.extensions.hooks import ResolvedLifecycle
from apiclientkit.helpers import maybe_await

logger = logging.getLogger(__name__)


async def _resolve_one(extension: Extension, req: Any, res: Any) -> Optional[LifecycleHooks]:
    logger.debug("Resolving hooks for extension '%s'", extension.name)
    try:
        result = await maybe_await(extension.hooks(req, res))
    except Exception:
        logger.debug("Hook resolution failed for extension '%s'", extension.name)
        raise
    return LifecycleHooks.coerce(result)


async def _gather_or_cancel(coroutines: list[Awaitable[Any]]) -> list[Any]:
    """Await *coroutines* concurrently, in order.

    On the first failure the remaining tasks are cancelled and drained
    before the error is re-raised, so no ``hooks`` call outlives a failed
    creation.
    """
    tasks = [asyncio.ensure_future(coroutine) for coroutine in coroutines]
    try:
        return await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def resolve_lifecycle(
    extensions: Iterable[Extension],
    req: Any = None,
    res: Any = None,
    *,
    concurrent: bool = True,
) -> ResolvedLifecycle:
    """Produce the :class:`ResolvedLifecycle` for one client creation.

    Extensions without a ``hooks`` callable are skipped, as are extensions
    whose ``hooks`` returned ``None``.

    Args:
        extensions: Registered extensions, in registration order.
        req: Ambient request object handed to every ``hooks`` call.
        res: Ambient response object handed to every ``hooks`` call.
        concurrent: Run the ``hooks`` calls concurrently. When ``False``
            they are awaited one after another.

    Returns:
        The resolved lifecycle, ordered by registration.

    Raises:
        Exception: Whatever a ``hooks`` call raised, unchanged. No partial
            lifecycle is returned, and ``hooks`` calls still in flight are
            cancelled.
        ExtensionError: If a ``hooks`` call returned an unsupported value.
    """
    with_hooks = [extension for extension in extensions if extension.hooks is not None]

    if concurrent:
        results = await _gather_or_cancel(
            [_resolve_one(extension, req, res) for extension in with_hooks]
        )
    else:
        results = [await _resolve_one(extension, req, res) for extension in with_hooks]

    lifecycle = ResolvedLifecycle(hook_set for hook_set in results if hook_set is not None)
    logger.debug(
        "Resolved %d hook set(s) from %d extension(s)", len(lifecycle), len(with_hooks)
    )
    return lifecycle
