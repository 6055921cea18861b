"""Partition extension methods and merge them with the base API.

Precedence, lowest first:

1. caller-supplied custom methods,
2. shared (non-namespaced) extension methods, in registration order,

which together form the shared table, and then for the final API:

1. base API,
2. shared table,
3. namespace groups (``api[extension.name]``).

Later layers override earlier ones on a name collision.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from apiclientkit.client.context import ApiNamespace
from apiclientkit.extensions.base import Extension

MethodTable = Mapping[str, Callable[..., Any]]


@dataclass
class ExtensionTables:
    """Extension-contributed methods split into the shared and namespaced tables."""

    shared: dict[str, Callable[..., Any]] = field(default_factory=dict)
    namespaced: dict[str, dict[str, Callable[..., Any]]] = field(default_factory=dict)


def partition_extension_methods(
    extensions: Iterable[Extension],
    custom_api: Optional[MethodTable] = None,
) -> ExtensionTables:
    """Split ``extend_api_methods`` of every extension by ``is_namespaced``.

    Shared methods are merged flatly on top of *custom_api*; namespaced ones
    are merged per extension name. In both, the later-registered extension
    wins a name collision.
    """
    tables = ExtensionTables(shared=dict(custom_api or {}))
    for extension in extensions:
        if extension.is_namespaced:
            tables.namespaced.setdefault(extension.name, {}).update(
                extension.extend_api_methods
            )
        else:
            tables.shared.update(extension.extend_api_methods)
    return tables


def merge_api(
    base: MethodTable,
    shared: MethodTable,
    namespaced: Mapping[str, MethodTable],
) -> ApiNamespace:
    """Build the client's final API.

    A namespace whose name matches a base or shared method replaces that
    method.
    """
    merged: dict[str, Any] = {**base, **shared}
    for namespace, methods in namespaced.items():
        merged[namespace] = methods if isinstance(methods, ApiNamespace) else ApiNamespace(methods)
    return ApiNamespace(merged)
