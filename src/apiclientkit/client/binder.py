"""Wrap method tables so every call passes through the call-time hook chain."""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import Any, Callable

from apiclientkit.client.context import CallContext
from apiclientkit.client.pipeline import CallHookChain
from apiclientkit.exceptions import FactoryError
from apiclientkit.extensions.hooks import CallHookParams
from apiclientkit.helpers import maybe_await

logger = logging.getLogger(__name__)


def bind_method(
    name: str,
    method: Callable[..., Any],
    context: CallContext,
    chain: CallHookChain,
) -> Callable[..., Any]:
    """Return a coroutine function running *method* inside the hook chain.

    Calling the result with ``(*args, **kwargs)``:

    1. folds ``before_call`` hooks over ``args``;
    2. calls ``method(context, *args, **kwargs)`` with the folded args;
    3. folds ``after_call`` hooks over the method's result;
    4. returns the folded result.

    Raises:
        FactoryError: If *method* is not callable.
    """
    if not callable(method):
        raise FactoryError(f"API member '{name}' is not callable")

    @functools.wraps(method)
    async def bound(*args: Any, **kwargs: Any) -> Any:
        params = CallHookParams(method=name, context=context, args=args, kwargs=kwargs)
        final_args = await chain.before(params)
        response = await maybe_await(method(context, *final_args, **kwargs))
        return await chain.after(
            CallHookParams(
                method=name,
                context=context,
                args=final_args,
                kwargs=kwargs,
                response=response,
            )
        )

    return bound


def bind_methods(
    methods: Mapping[str, Callable[..., Any]],
    context: CallContext,
    chain: CallHookChain,
) -> dict[str, Callable[..., Any]]:
    """Bind every member of a method table; see :func:`bind_method`.

    Works the same for the base API, the shared extension table and any
    single namespace table.
    """
    bound = {name: bind_method(name, method, context, chain) for name, method in methods.items()}
    logger.debug("Bound %d method(s)", len(bound))
    return bound
