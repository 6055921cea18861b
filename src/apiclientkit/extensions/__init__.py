"""Extension model for apiclientkit -- definitions, hook sets and resolution.

Key classes:

* :class:`Extension` -- A pluggable unit contributing hooks and/or methods.
* :class:`LifecycleHooks` -- The optional ``before_create``,
  ``after_create``, ``before_call`` and ``after_call`` hooks of one
  extension.
* :class:`ResolvedLifecycle` -- The ordered hook sets of one client
  creation, as produced by :func:`resolve_lifecycle`.
* :class:`CreateHookParams` / :class:`CallHookParams` -- The argument
  objects hooks receive.
"""

from apiclientkit.extensions.base import HOOK_KINDS, Extension, LifecycleHooks
from apiclientkit.extensions.hooks import CallHookParams, CreateHookParams, ResolvedLifecycle
from apiclientkit.extensions.resolver import resolve_lifecycle

__all__ = [
    "HOOK_KINDS",
    "Extension",
    "LifecycleHooks",
    "CallHookParams",
    "CreateHookParams",
    "ResolvedLifecycle",
    "resolve_lifecycle",
]
