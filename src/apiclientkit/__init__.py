"""apiclientkit -- API clients transparently augmented by ordered extensions.

A factory is declared once with a base API (method table or builder), an
optional ``on_create`` settings resolver and its extensions. Each call to
``create_api_client`` resolves the extensions' lifecycle hooks, folds the
creation configuration through them, and returns an API whose every method
runs through the ``before_call``/``after_call`` chain.

Typical usage::

    from apiclientkit import Extension, LifecycleHooks, api_client_factory

    factory = api_client_factory(api={"get_product": get_product})
    created = await factory.create_api_client({"base_url": "https://shop"})
    await created.api.get_product(42)

Modules:
    extensions: Extension and hook-set definitions, hook resolution.
    client: The factory and its creation pipeline.
    config: Option resolution and creation-config file loading.
    models: Pydantic option models.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer command line (``apiclientkit inspect``).
"""

__version__ = "0.1.0"

from apiclientkit.client import (  # noqa: E402
    ApiClient,
    ApiClientFactory,
    ApiNamespace,
    CallContext,
    MiddlewareContext,
    Settings,
    api_client_factory,
)
from apiclientkit.extensions import (  # noqa: E402
    CallHookParams,
    CreateHookParams,
    Extension,
    LifecycleHooks,
)

__all__ = [
    "ApiClient",
    "ApiClientFactory",
    "ApiNamespace",
    "CallContext",
    "CallHookParams",
    "CreateHookParams",
    "Extension",
    "LifecycleHooks",
    "MiddlewareContext",
    "Settings",
    "api_client_factory",
]
