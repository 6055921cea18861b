"""Sequential hook folds: creation-time configuration and call-time hooks.

Two kinds of fold live here:

* :func:`run_config_pipeline` -- ``before_create`` over the caller's
  configuration, one settings derivation, then ``after_create`` over the
  resulting ``settings.config``.
* :class:`CallHookChain` -- ``before_call`` over a call's positional
  arguments and ``after_call`` over its response.

Every fold is strictly sequential: each step awaits its hook before the
next one starts, so a hook always observes the committed output of the
hook registered before it.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from apiclientkit.client.context import Settings
from apiclientkit.exceptions import ExtensionError
from apiclientkit.extensions.hooks import CallHookParams, CreateHookParams, ResolvedLifecycle
from apiclientkit.helpers import maybe_await

logger = logging.getLogger(__name__)


async def fold_configuration(
    lifecycle: ResolvedLifecycle, kind: str, configuration: Any
) -> Any:
    """Fold the *kind* creation hooks (``before_create`` or ``after_create``) over *configuration*.

    The input configuration is never mutated by the fold itself; each hook
    receives the previous hook's result.
    """
    for index, hook in enumerate(lifecycle.steps(kind)):
        logger.debug("Running %s hook %d", kind, index)
        configuration = await maybe_await(hook(CreateHookParams(configuration=configuration)))
    return configuration


async def run_config_pipeline(
    lifecycle: ResolvedLifecycle,
    config: Any,
    on_create: Optional[Callable[[Any], Any]] = None,
) -> Settings:
    """Turn the caller's configuration into final :class:`Settings`.

    1. ``before_create`` fold over *config*.
    2. ``on_create`` called once with the folded configuration, or, without
       a resolver, settings built from it with ``client`` read from its
       ``client`` key.
    3. ``after_create`` fold over ``settings.config``; the result replaces
       the configuration while keeping the same ``client``.

    Args:
        lifecycle: The resolved hook sets.
        config: The caller-supplied creation configuration.
        on_create: Optional settings resolver, sync or async.

    Returns:
        The final settings.

    Raises:
        Exception: Whatever a hook or ``on_create`` raised, unchanged.
        FactoryError: If ``on_create`` returned an unsupported value.
    """
    configuration = await fold_configuration(lifecycle, "before_create", config)

    if on_create is not None:
        settings = Settings.coerce(await maybe_await(on_create(configuration)))
    else:
        settings = Settings(config=configuration, client=_default_client(configuration))

    final = await fold_configuration(lifecycle, "after_create", settings.config)
    return dataclasses.replace(settings, config=final)


def _default_client(configuration: Any) -> Any:
    if isinstance(configuration, Mapping):
        return configuration.get("client")
    return getattr(configuration, "client", None)


class CallHookChain:
    """The ``before``/``after`` call-time folds of one client.

    Closed over the resolved lifecycle and the final settings. Each call to
    :meth:`before` or :meth:`after` runs its own fold; nothing is shared
    between invocations apart from the read-only settings.
    """

    def __init__(self, lifecycle: ResolvedLifecycle, settings: Settings) -> None:
        self._before = lifecycle.steps("before_call")
        self._after = lifecycle.steps("after_call")
        self._settings = settings

    async def before(self, params: CallHookParams) -> tuple[Any, ...]:
        """Fold ``before_call`` hooks over ``params.args`` and return the final args.

        Raises:
            ExtensionError: If a hook returned anything but a tuple or list.
        """
        args = tuple(params.args)
        for hook in self._before:
            step = dataclasses.replace(params, configuration=self._settings.config, args=args)
            result = await maybe_await(hook(step))
            if not isinstance(result, (tuple, list)):
                raise ExtensionError(
                    f"before_call hook for '{params.method}' must return a tuple or list "
                    f"of arguments, got {type(result).__name__}"
                )
            args = tuple(result)
        return args

    async def after(self, params: CallHookParams) -> Any:
        """Fold ``after_call`` hooks over ``params.response`` and return the final response."""
        response = params.response
        for hook in self._after:
            step = dataclasses.replace(
                params, configuration=self._settings.config, response=response
            )
            response = await maybe_await(hook(step))
        return response
