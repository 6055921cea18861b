"""Example extension that logs every API call and its result.

Also declares a small in-memory shop factory using it, so the command line
has something to inspect::

    PYTHONPATH=examples apiclientkit inspect request_logging.extension:factory
"""

from __future__ import annotations

import logging
from typing import Any

from apiclientkit import (
    CallHookParams,
    CreateHookParams,
    Extension,
    LifecycleHooks,
    api_client_factory,
)

logger = logging.getLogger("request_logging")


def _hooks(req: Any, res: Any) -> LifecycleHooks:
    def before_create(params: CreateHookParams) -> Any:
        return {"request_log": [], **params.configuration}

    def before_call(params: CallHookParams) -> tuple[Any, ...]:
        logger.info("[request-logging] %s%r", params.method, params.args)
        return params.args

    def after_call(params: CallHookParams) -> Any:
        params.configuration["request_log"].append(params.method)
        return params.response

    return LifecycleHooks(
        before_create=before_create,
        before_call=before_call,
        after_call=after_call,
    )


def request_log(context: Any) -> list[str]:
    """Return the methods called so far on this client."""
    return list(context.config["request_log"])


request_logging = Extension(
    name="request-logging",
    hooks=_hooks,
    extend_api_methods={"request_log": request_log},
)


PRODUCTS = {1: {"id": 1, "name": "Kettle"}, 2: {"id": 2, "name": "Teapot"}}


async def get_product(context: Any, product_id: int) -> dict[str, Any]:
    return PRODUCTS[product_id]


async def list_products(context: Any) -> list[dict[str, Any]]:
    return [await context.api.get_product(product_id) for product_id in PRODUCTS]


factory = api_client_factory(
    api={"get_product": get_product, "list_products": list_products},
    extensions=[request_logging],
)
