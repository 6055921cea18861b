"""Settings, ambient middleware context and the per-client call context.

* :class:`Settings` -- the ``(config, client)`` pair produced once per
  client creation.
* :class:`MiddlewareContext` -- what the hosting middleware layer knows
  about the current request: the live extension list, request and response
  objects, and any other cross-cutting fields.
* :class:`CallContext` -- the bundle every bound API method receives as its
  first argument. Shared by reference across all methods of one client.
* :class:`ApiNamespace` -- a read-only method table with attribute access.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Optional, Sequence

from apiclientkit.exceptions import FactoryError


@dataclass(frozen=True)
class Settings:
    """Resolved settings of one client.

    The ``client`` handle is fixed when the settings are first built;
    ``after_create`` hooks only ever produce a new instance with a different
    ``config``.
    """

    config: Any
    client: Any = None

    @classmethod
    def coerce(cls, value: Any) -> Settings:
        """Accept what an ``on_create`` resolver returned.

        Raises:
            FactoryError: If *value* is neither :class:`Settings` nor a
                mapping with a ``config`` key.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping) and "config" in value:
            return cls(config=value["config"], client=value.get("client"))
        raise FactoryError(
            "on_create must return Settings or a mapping with 'config' and 'client', "
            f"got {type(value).__name__}"
        )


@dataclass
class MiddlewareContext:
    """Ambient context supplied by the middleware hosting the factory.

    Attributes:
        extensions: The live extension list. ``None`` means "use the
            factory's predefined extensions".
        req: The incoming request object, handed to every ``hooks`` call.
        res: The outgoing response object, handed to every ``hooks`` call.
        extra: Any other cross-cutting fields to expose to API methods.
    """

    extensions: Optional[Sequence[Any]] = None
    req: Any = None
    res: Any = None
    extra: dict[str, Any] = field(default_factory=dict)


class CallContext:
    """Read-only context handed to every bound API method.

    Exposes the client's settings (``config``, ``client``), the ambient
    middleware fields (``req``, ``res``, ``extensions``, ``extra``) and,
    once attached, ``api``: the bound base API, so a method can call its
    siblings through ``context.api``.
    """

    __slots__ = ("_config", "_client", "_middleware", "_api")

    def __init__(self, settings: Settings, middleware: Optional[MiddlewareContext] = None) -> None:
        self._config = settings.config
        self._client = settings.client
        self._middleware = middleware or MiddlewareContext()
        self._api: Optional[ApiNamespace] = None

    @property
    def config(self) -> Any:
        return self._config

    @property
    def client(self) -> Any:
        return self._client

    @property
    def req(self) -> Any:
        return self._middleware.req

    @property
    def res(self) -> Any:
        return self._middleware.res

    @property
    def extensions(self) -> Sequence[Any]:
        return tuple(self._middleware.extensions or ())

    @property
    def extra(self) -> Mapping[str, Any]:
        return MappingProxyType(self._middleware.extra)

    @property
    def api(self) -> ApiNamespace:
        """The bound base API.

        Raises:
            FactoryError: If read before the factory attached it.
        """
        if self._api is None:
            raise FactoryError("The call context has no API attached yet")
        return self._api

    def attach_api(self, api: ApiNamespace) -> None:
        """Attach the bound base API. Allowed exactly once."""
        if self._api is not None:
            raise FactoryError("The call context already has an API attached")
        self._api = api

    def __repr__(self) -> str:
        return f"CallContext(config={self._config!r}, client={self._client!r})"


class ApiNamespace(Mapping[str, Any]):
    """Read-only method table supporting ``api["name"]`` and ``api.name``.

    Values are bound methods or, for namespaced extensions, nested
    :class:`ApiNamespace` instances.
    """

    __slots__ = ("_members",)

    def __init__(self, members: Mapping[str, Callable[..., Any] | ApiNamespace] = ()) -> None:
        object.__setattr__(self, "_members", dict(members))

    def __getitem__(self, name: str) -> Any:
        return self._members[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __getattr__(self, name: str) -> Any:
        members = object.__getattribute__(self, "_members")
        try:
            return members[name]
        except KeyError:
            raise AttributeError(f"API has no method or namespace '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ApiNamespace is read-only")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._members))

    def __repr__(self) -> str:
        return f"ApiNamespace({', '.join(self._members)})"
