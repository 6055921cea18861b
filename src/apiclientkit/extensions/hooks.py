"""Hook parameter objects and the resolved lifecycle of one client creation.

This module provides three components:

* :class:`CreateHookParams` -- the single argument passed to every
  ``before_create`` / ``after_create`` hook.
* :class:`CallHookParams` -- the single argument passed to every
  ``before_call`` / ``after_call`` hook.
* :class:`ResolvedLifecycle` -- the ordered hook sets produced by the
  registered extensions, with the present hooks of each kind gathered
  once up front so the folds never re-check which hooks exist.

The folds follow a pipeline pattern: each hook receives the output of the
previous one, in extension registration order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable

from apiclientkit.extensions.base import HOOK_KINDS, LifecycleHooks

if TYPE_CHECKING:
    from apiclientkit.client.context import CallContext


@dataclass(frozen=True)
class CreateHookParams:
    """Argument passed to ``before_create`` and ``after_create`` hooks.

    Attributes:
        configuration: The configuration produced by the previous step of
            the fold (the caller's configuration for the first step).
    """

    configuration: Any


@dataclass(frozen=True)
class CallHookParams:
    """Argument passed to ``before_call`` and ``after_call`` hooks.

    A fresh instance is built for every step of every call, so hooks may
    keep it around without observing later steps.

    Attributes:
        method: Name of the API method being invoked.
        context: The call context shared by the client's bound methods.
        configuration: The client's final configuration.
        args: Positional arguments; the ``before_call`` accumulator.
        kwargs: Keyword arguments, passed through to the method unchanged.
        response: The method's result; the ``after_call`` accumulator.
    """

    method: str
    context: "CallContext"
    configuration: Any = None
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)
    response: Any = None


class ResolvedLifecycle:
    """Ordered hook sets for one client creation.

    Holds one :class:`~apiclientkit.extensions.base.LifecycleHooks` per
    extension that produced a hook set, in registration order, and the
    normalized sequence of present hooks for each hook kind.
    """

    def __init__(self, hook_sets: Iterable[LifecycleHooks] = ()) -> None:
        self._hook_sets = tuple(hook_sets)
        self._steps: dict[str, tuple[Callable[..., Any], ...]] = {
            kind: tuple(
                hook
                for hook in (hook_set.get(kind) for hook_set in self._hook_sets)
                if hook is not None
            )
            for kind in HOOK_KINDS
        }

    @property
    def hook_sets(self) -> tuple[LifecycleHooks, ...]:
        return self._hook_sets

    def steps(self, kind: str) -> tuple[Callable[..., Any], ...]:
        """Return the present hooks of *kind*, in registration order."""
        return self._steps[kind]

    def __len__(self) -> int:
        return len(self._hook_sets)

    def __repr__(self) -> str:
        counts = ", ".join(f"{kind}={len(steps)}" for kind, steps in self._steps.items())
        return f"ResolvedLifecycle({len(self)} hook sets; {counts})"
