"""Shared test fixtures for apiclientkit.

Provides reusable extensions, method tables and an isolated environment so
option resolution never picks up ``APICLIENTKIT_*`` variables from the
developer's shell.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from apiclientkit.client.context import CallContext, Settings
from apiclientkit.extensions.base import Extension, LifecycleHooks
from apiclientkit.extensions.hooks import CallHookParams, CreateHookParams
from apiclientkit.output import reset_output


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear apiclientkit env vars and reset the global OutputManager after every test."""
    for var in ["APICLIENTKIT_CONCURRENT_HOOKS", "APICLIENTKIT_LOG_LEVEL", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Hook builders
# ---------------------------------------------------------------------------


def _increment_args(params: CallHookParams) -> tuple[Any, ...]:
    first, *rest = params.args
    return (first + 1, *rest)


async def _double_response(params: CallHookParams) -> Any:
    return params.response * 2


@pytest.fixture
def appending_hook() -> Callable[..., Callable[[CreateHookParams], dict[str, Any]]]:
    """Build creation hooks that return a copy of the configuration with a value appended."""

    def build(value: str, key: str = "trail") -> Callable[[CreateHookParams], dict[str, Any]]:
        def hook(params: CreateHookParams) -> dict[str, Any]:
            configuration = params.configuration
            return {**configuration, key: [*configuration.get(key, []), value]}

        return hook

    return build


@pytest.fixture
def increment_args() -> Callable[[CallHookParams], tuple[Any, ...]]:
    """A before_call hook adding one to the first positional argument."""
    return _increment_args


@pytest.fixture
def double_response() -> Callable[[CallHookParams], Any]:
    """An async after_call hook doubling the response."""
    return _double_response


@pytest.fixture
def hooks_extension() -> Callable[..., Extension]:
    """Build extensions whose ``hooks()`` returns a fixed LifecycleHooks set."""

    def build(name: str, **hooks: Any) -> Extension:
        hook_set = LifecycleHooks(**hooks)
        return Extension(name=name, hooks=lambda req, res: hook_set)

    return build


# ---------------------------------------------------------------------------
# Base API
# ---------------------------------------------------------------------------


def _get_product(context: CallContext, product_id: int) -> dict[str, Any]:
    return {"id": product_id, "currency": context.config.get("currency")}


async def _times_ten(context: CallContext, value: int) -> int:
    return value * 10


@pytest.fixture
def get_product() -> Callable[..., dict[str, Any]]:
    return _get_product


@pytest.fixture
def times_ten() -> Callable[..., Any]:
    return _times_ten


@pytest.fixture
def base_api(
    get_product: Callable[..., Any], times_ten: Callable[..., Any]
) -> dict[str, Callable[..., Any]]:
    return {"get_product": get_product, "times_ten": times_ten}


@pytest.fixture
def settings() -> Settings:
    return Settings(config={"currency": "EUR"}, client="http-client")


@pytest.fixture
def call_context(settings: Settings) -> CallContext:
    return CallContext(settings)
