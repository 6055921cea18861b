"""The API client factory -- orchestrates the extension lifecycle pipeline.

:func:`api_client_factory` returns an :class:`ApiClientFactory`, whose
:meth:`~ApiClientFactory.create_api_client` coroutine builds one client:

1. resolve the extensions' hook sets for the current request,
2. run the creation folds to produce the final settings,
3. build the shared call context,
4. resolve the base API (static table or builder),
5. bind the base, shared and namespaced method tables,
6. merge them and attach the bound base API to the call context.

Any exception along the way aborts the whole creation; no partially
built client is returned.

Example::

    async def get_product(context, product_id):
        return await context.client.fetch(f"/products/{product_id}")

    factory = api_client_factory(
        api={"get_product": get_product},
        on_create=lambda config: Settings(config=config, client=make_http(config)),
    )
    created = await factory.create_api_client({"base_url": "https://shop"})
    product = await created.api.get_product(42)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from apiclientkit.client.binder import bind_methods
from apiclientkit.client.context import ApiNamespace, CallContext, MiddlewareContext, Settings
from apiclientkit.client.merge import MethodTable, merge_api, partition_extension_methods
from apiclientkit.client.pipeline import CallHookChain, run_config_pipeline
from apiclientkit.config import resolve_options
from apiclientkit.exceptions import FactoryError
from apiclientkit.extensions.base import Extension
from apiclientkit.extensions.resolver import resolve_lifecycle
from apiclientkit.helpers import maybe_await
from apiclientkit.models import FactoryOptions

logger = logging.getLogger(__name__)

ApiBuilder = Callable[[Settings], Any]


@dataclass(frozen=True)
class ApiSource:
    """The base API as either a static method table or a builder.

    Exactly one of ``table`` and ``builder`` is set. Builders receive the
    final :class:`Settings` and may be async.
    """

    table: Optional[MethodTable] = None
    builder: Optional[ApiBuilder] = None

    @classmethod
    def from_value(cls, value: Union[MethodTable, ApiBuilder, None]) -> ApiSource:
        if value is None:
            return cls(table={})
        if isinstance(value, Mapping):
            return cls(table=dict(value))
        if callable(value):
            return cls(builder=value)
        raise FactoryError(
            f"api must be a method table or a builder function, got {type(value).__name__}"
        )

    async def resolve(self, settings: Settings) -> MethodTable:
        if self.builder is None:
            return self.table or {}
        table = await maybe_await(self.builder(settings))
        if not isinstance(table, Mapping):
            raise FactoryError(
                f"API builder must return a method table, got {type(table).__name__}"
            )
        return table


@dataclass(frozen=True)
class ApiClient:
    """A created client.

    Attributes:
        api: The merged, bound API.
        client: The client handle from the settings.
        settings: The final configuration.
    """

    api: ApiNamespace
    client: Any
    settings: Any


class ApiClientFactory:
    """Creates API clients whose methods run through the extensions' hooks.

    Args:
        api: Base API -- a method table or a builder ``(settings) -> table``.
        on_create: Optional ``(config) -> Settings`` resolver; the only party
            allowed to construct the client handle.
        extensions: Extensions declared together with the factory. The
            hosting middleware is expected to register these; they are used
            directly when no live extension list is supplied.
        options: Behaviour switches. Resolved from the environment when
            omitted.
    """

    def __init__(
        self,
        api: Union[MethodTable, ApiBuilder, None] = None,
        on_create: Optional[Callable[[Any], Any]] = None,
        extensions: Optional[Sequence[Extension]] = None,
        options: Optional[FactoryOptions] = None,
    ) -> None:
        self._api_source = ApiSource.from_value(api)
        self._on_create = on_create
        self._predefined_extensions = tuple(extensions or ())
        self._options = options or resolve_options()

    @property
    def predefined_extensions(self) -> tuple[Extension, ...]:
        return self._predefined_extensions

    @property
    def options(self) -> FactoryOptions:
        return self._options

    async def create_api_client(
        self,
        config: Any,
        custom_api: Optional[MethodTable] = None,
        *,
        middleware: Optional[MiddlewareContext] = None,
    ) -> ApiClient:
        """Create one client.

        Args:
            config: The creation configuration, passed through the
                ``before_create`` fold.
            custom_api: Extra methods, overridden by same-named shared
                extension methods.
            middleware: Ambient context with the live extension list,
                request and response.

        Returns:
            The created :class:`ApiClient`.

        Raises:
            Exception: Whatever an extension hook, ``on_create`` or the API
                builder raised, unchanged.
            ExtensionError: If an extension produced a malformed hook set.
            FactoryError: If a factory input turned out malformed.
        """
        middleware = middleware or MiddlewareContext()
        if middleware.extensions is not None:
            extensions = tuple(middleware.extensions)
        else:
            extensions = self._predefined_extensions

        try:
            lifecycle = await resolve_lifecycle(
                extensions,
                middleware.req,
                middleware.res,
                concurrent=self._options.concurrent_hook_resolution,
            )
            settings = await run_config_pipeline(lifecycle, config, self._on_create)

            chain = CallHookChain(lifecycle, settings)
            context = CallContext(
                settings,
                MiddlewareContext(
                    extensions=extensions,
                    req=middleware.req,
                    res=middleware.res,
                    extra=dict(middleware.extra),
                ),
            )

            base_api = await self._api_source.resolve(settings)
            tables = partition_extension_methods(extensions, custom_api)

            integration_api = ApiNamespace(bind_methods(base_api, context, chain))
            shared_api = bind_methods(tables.shared, context, chain)
            namespaced_api = {
                namespace: bind_methods(methods, context, chain)
                for namespace, methods in tables.namespaced.items()
            }
            merged = merge_api(integration_api, shared_api, namespaced_api)

            # Nothing bound has been callable from outside yet.
            context.attach_api(integration_api)
        except Exception:
            logger.debug("API client creation aborted", exc_info=True)
            raise

        logger.debug(
            "Created API client: %d base, %d shared, %d namespace(s)",
            len(integration_api),
            len(shared_api),
            len(namespaced_api),
        )
        return ApiClient(api=merged, client=settings.client, settings=settings.config)


def api_client_factory(
    api: Union[MethodTable, ApiBuilder, None] = None,
    *,
    on_create: Optional[Callable[[Any], Any]] = None,
    extensions: Optional[Sequence[Extension]] = None,
    options: Optional[FactoryOptions] = None,
) -> ApiClientFactory:
    """Build an :class:`ApiClientFactory`; see its docstring for the arguments."""
    return ApiClientFactory(
        api=api, on_create=on_create, extensions=extensions, options=options
    )
