"""Extension and lifecycle hook-set definitions.

An :class:`Extension` is a pluggable unit that can contribute two things to
a client built by :func:`~apiclientkit.client.factory.api_client_factory`:

* **Lifecycle hooks** -- a ``hooks(req, res)`` callable returning a
  :class:`LifecycleHooks` set. Each present hook becomes one step of a
  sequential fold (``before_create``/``after_create`` at creation time,
  ``before_call``/``after_call`` around every method call).
* **API methods** -- ``extend_api_methods``, merged flatly into the client
  API or, for namespaced extensions, grouped under ``api[extension.name]``.

Example:
    A namespaced extension adding a method and a response transform::

        def hooks(req, res):
            return LifecycleHooks(after_call=lambda params: params.response)

        cms = Extension(
            name="cms",
            is_namespaced=True,
            hooks=hooks,
            extend_api_methods={"get_page": get_page},
        )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Optional

from apiclientkit.exceptions import ExtensionError

HOOK_KINDS = ("before_create", "after_create", "before_call", "after_call")
"""Lifecycle hook names, in the order they fire over a client's lifetime."""


@dataclass(frozen=True)
class LifecycleHooks:
    """The hook set one extension produces for one client creation.

    Every member is optional. An absent hook is not a no-op step: it simply
    does not take part in the corresponding fold.

    Attributes:
        before_create: ``(CreateHookParams) -> configuration``.
        after_create: ``(CreateHookParams) -> configuration``.
        before_call: ``(CallHookParams) -> args``.
        after_call: ``(CallHookParams) -> response``.
    """

    before_create: Optional[Callable[..., Any]] = None
    after_create: Optional[Callable[..., Any]] = None
    before_call: Optional[Callable[..., Any]] = None
    after_call: Optional[Callable[..., Any]] = None

    def __post_init__(self) -> None:
        for hook in fields(self):
            value = getattr(self, hook.name)
            if value is not None and not callable(value):
                raise ExtensionError(
                    f"Lifecycle hook '{hook.name}' must be callable, "
                    f"got {type(value).__name__}"
                )

    @classmethod
    def coerce(cls, value: Any) -> Optional[LifecycleHooks]:
        """Normalize whatever an extension's ``hooks()`` returned.

        Args:
            value: A :class:`LifecycleHooks`, a mapping keyed by hook name,
                or ``None``.

        Returns:
            A :class:`LifecycleHooks` instance, or ``None`` when the
            extension produced no hook set.

        Raises:
            ExtensionError: If *value* is of any other type or the mapping
                contains unknown hook names.
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            unknown = sorted(set(value) - set(HOOK_KINDS))
            if unknown:
                raise ExtensionError(f"Unknown lifecycle hook(s): {', '.join(unknown)}")
            return cls(**value)
        raise ExtensionError(
            f"Extension hooks must return LifecycleHooks, a mapping or None, "
            f"got {type(value).__name__}"
        )

    def get(self, kind: str) -> Optional[Callable[..., Any]]:
        """Return the hook registered for *kind*, or ``None``."""
        if kind not in HOOK_KINDS:
            raise ExtensionError(f"Unknown lifecycle hook '{kind}'")
        return getattr(self, kind)


@dataclass(frozen=True)
class Extension:
    """A registered extension.

    Extensions are immutable once built; their registration order is the
    single source of truth for fold order and for which method wins a name
    collision (later wins).

    Attributes:
        name: Extension name. Also the namespace key when
            ``is_namespaced`` is true; several extensions may share one.
        is_namespaced: Group ``extend_api_methods`` under ``api[name]``
            instead of merging them into the top-level API.
        hooks: Optional ``(req, res) -> LifecycleHooks | Mapping | None``,
            sync or async.
        extend_api_methods: Methods contributed to the client API. Each
            receives the call context as its first argument.
    """

    name: str
    is_namespaced: bool = False
    hooks: Optional[Callable[[Any, Any], Any]] = None
    extend_api_methods: Optional[Mapping[str, Callable[..., Any]]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ExtensionError("Extension name must be a non-empty string")
        object.__setattr__(self, "extend_api_methods", dict(self.extend_api_methods or {}))
        if self.hooks is not None and not callable(self.hooks):
            raise ExtensionError(f"Extension '{self.name}': hooks must be callable")
        for method_name, method in self.extend_api_methods.items():
            if not callable(method):
                raise ExtensionError(
                    f"Extension '{self.name}': API method '{method_name}' is not callable"
                )
