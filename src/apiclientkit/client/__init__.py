"""Client factory and the pieces of its creation pipeline.

* :mod:`~apiclientkit.client.factory` -- :func:`api_client_factory` and
  :class:`ApiClientFactory`, the orchestrator.
* :mod:`~apiclientkit.client.pipeline` -- creation and call-time folds.
* :mod:`~apiclientkit.client.binder` -- wraps method tables in the call-time
  hook chain.
* :mod:`~apiclientkit.client.merge` -- shared/namespaced method partitioning
  and final API merging.
* :mod:`~apiclientkit.client.context` -- settings, middleware and call
  contexts.
"""

from apiclientkit.client.context import ApiNamespace, CallContext, MiddlewareContext, Settings
from apiclientkit.client.factory import ApiClient, ApiClientFactory, ApiSource, api_client_factory

__all__ = [
    "ApiClient",
    "ApiClientFactory",
    "ApiNamespace",
    "ApiSource",
    "CallContext",
    "MiddlewareContext",
    "Settings",
    "api_client_factory",
]
