"""Tests for hook-set resolution across extensions."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from apiclientkit.exceptions import ExtensionError
from apiclientkit.extensions.base import Extension, LifecycleHooks
from apiclientkit.extensions.resolver import resolve_lifecycle


def _noop(params):
    return params


class TestResolveLifecycle:
    """resolve_lifecycle ordering, skipping and failure behaviour."""

    @pytest.mark.asyncio
    async def test_no_extensions(self) -> None:
        lifecycle = await resolve_lifecycle([])
        assert len(lifecycle) == 0

    @pytest.mark.asyncio
    async def test_extensions_without_hooks_are_skipped(self) -> None:
        hooks = LifecycleHooks(before_call=_noop)
        lifecycle = await resolve_lifecycle(
            [
                Extension(name="methods-only", extend_api_methods={"ping": _noop}),
                Extension(name="with-hooks", hooks=lambda req, res: hooks),
            ]
        )
        assert lifecycle.hook_sets == (hooks,)

    @pytest.mark.asyncio
    async def test_none_hook_sets_are_dropped(self) -> None:
        lifecycle = await resolve_lifecycle(
            [Extension(name="silent", hooks=lambda req, res: None)]
        )
        assert len(lifecycle) == 0

    @pytest.mark.asyncio
    async def test_request_and_response_passed_to_hooks(self) -> None:
        seen: list[Any] = []

        def hooks(req: Any, res: Any) -> LifecycleHooks:
            seen.append((req, res))
            return LifecycleHooks()

        await resolve_lifecycle([Extension(name="spy", hooks=hooks)], "REQ", "RES")
        assert seen == [("REQ", "RES")]

    @pytest.mark.asyncio
    async def test_order_follows_registration_not_completion(self) -> None:
        """The first extension finishes last but still comes first."""
        second_done = asyncio.Event()
        slow_hooks = LifecycleHooks(before_create=_noop)
        fast_hooks = LifecycleHooks(after_create=_noop)

        async def slow(req: Any, res: Any) -> LifecycleHooks:
            await second_done.wait()
            return slow_hooks

        async def fast(req: Any, res: Any) -> LifecycleHooks:
            second_done.set()
            return fast_hooks

        lifecycle = await resolve_lifecycle(
            [Extension(name="slow", hooks=slow), Extension(name="fast", hooks=fast)]
        )
        assert lifecycle.hook_sets == (slow_hooks, fast_hooks)

    @pytest.mark.asyncio
    async def test_sequential_resolution(self) -> None:
        calls: list[str] = []

        def recorder(name: str):
            async def hooks(req: Any, res: Any) -> LifecycleHooks:
                calls.append(name)
                await asyncio.sleep(0)
                calls.append(f"{name}-done")
                return LifecycleHooks()

            return hooks

        await resolve_lifecycle(
            [Extension(name="a", hooks=recorder("a")), Extension(name="b", hooks=recorder("b"))],
            concurrent=False,
        )
        assert calls == ["a", "a-done", "b", "b-done"]

    @pytest.mark.asyncio
    async def test_mapping_hook_sets_are_coerced(self) -> None:
        lifecycle = await resolve_lifecycle(
            [Extension(name="dict", hooks=lambda req, res: {"after_call": _noop})]
        )
        assert lifecycle.steps("after_call") == (_noop,)

    @pytest.mark.asyncio
    async def test_hooks_failure_propagates_unchanged(self) -> None:
        boom = RuntimeError("cannot resolve")

        def failing(req: Any, res: Any) -> LifecycleHooks:
            raise boom

        with pytest.raises(RuntimeError) as excinfo:
            await resolve_lifecycle(
                [Extension(name="ok", hooks=lambda req, res: None), Extension(name="bad", hooks=failing)]
            )
        assert excinfo.value is boom

    @pytest.mark.asyncio
    async def test_failure_cancels_pending_siblings(self) -> None:
        finished: list[str] = []

        async def slow(req: Any, res: Any) -> LifecycleHooks:
            await asyncio.sleep(0.05)
            finished.append("slow")
            return LifecycleHooks()

        async def failing(req: Any, res: Any) -> LifecycleHooks:
            raise RuntimeError("cannot resolve")

        with pytest.raises(RuntimeError, match="cannot resolve"):
            await resolve_lifecycle(
                [Extension(name="slow", hooks=slow), Extension(name="bad", hooks=failing)]
            )
        await asyncio.sleep(0.1)
        assert finished == []

    @pytest.mark.asyncio
    async def test_second_failure_is_retrieved(self) -> None:
        """Every sibling failure is collected, only the first is raised."""
        unhandled: list[dict[str, Any]] = []
        asyncio.get_running_loop().set_exception_handler(
            lambda loop, context: unhandled.append(context)
        )

        async def fails_first(req: Any, res: Any) -> LifecycleHooks:
            raise RuntimeError("first")

        async def fails_later(req: Any, res: Any) -> LifecycleHooks:
            try:
                await asyncio.sleep(0.05)
            finally:
                raise ValueError("second")

        with pytest.raises(RuntimeError, match="first"):
            await resolve_lifecycle(
                [Extension(name="a", hooks=fails_first), Extension(name="b", hooks=fails_later)]
            )
        await asyncio.sleep(0.1)
        assert unhandled == []

    @pytest.mark.asyncio
    async def test_invalid_hook_set_type(self) -> None:
        with pytest.raises(ExtensionError):
            await resolve_lifecycle([Extension(name="bad", hooks=lambda req, res: 42)])
