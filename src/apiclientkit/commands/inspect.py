"""Inspect command -- show the merged method surface of a client factory.

``apiclientkit inspect package.module:factory`` imports an
:class:`~apiclientkit.client.factory.ApiClientFactory`, creates a client with
its predefined extensions and an optional configuration file, and lists every
method the resulting API exposes, including namespaced ones.
"""

from __future__ import annotations

import asyncio
import importlib
from typing import Any, Optional

import typer

from apiclientkit.client.context import ApiNamespace
from apiclientkit.client.factory import ApiClientFactory
from apiclientkit.config import load_creation_config
from apiclientkit.exceptions import ApiClientKitError, InvalidUsageError
from apiclientkit.output import get_output


def load_factory(target: str) -> ApiClientFactory:
    """Import ``module:attribute`` and return the factory it names.

    Raises:
        InvalidUsageError: If the target is malformed, cannot be imported or
            is not an :class:`ApiClientFactory`.
    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise InvalidUsageError(f"Target must look like 'module:attribute', got '{target}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise InvalidUsageError(f"Cannot import '{module_name}': {exc}") from exc

    factory: Any = module
    for part in attribute.split("."):
        try:
            factory = getattr(factory, part)
        except AttributeError:
            raise InvalidUsageError(f"'{module_name}' has no attribute '{attribute}'") from None
    if not isinstance(factory, ApiClientFactory):
        raise InvalidUsageError(
            f"'{target}' is a {type(factory).__name__}, not an ApiClientFactory"
        )
    return factory


def describe_api(api: ApiNamespace, namespace: str = "") -> list[list[str]]:
    """Flatten a bound API into ``[method, namespace, implementation]`` rows."""
    rows: list[list[str]] = []
    for name, member in api.items():
        if isinstance(member, ApiNamespace):
            rows.extend(describe_api(member, namespace=name))
            continue
        impl = getattr(member, "__wrapped__", member)
        module = getattr(impl, "__module__", None) or "?"
        qualname = getattr(impl, "__qualname__", None) or type(impl).__name__
        rows.append([name, namespace or "-", f"{module}.{qualname}"])
    return rows


def inspect_command(
    target: str = typer.Argument(..., help="Factory to inspect, as module:attribute."),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="JSON/YAML creation config file, or '-' for stdin."
    ),
) -> None:
    """List the methods of a client created by TARGET.

    Example::

        apiclientkit inspect shop.client:factory --config shop.yaml
        apiclientkit --json inspect shop.client:factory
    """
    output = get_output()
    try:
        factory = load_factory(target)
        config = load_creation_config(config_file) if config_file else {}
        output.debug(f"Creating client from {target}")
        created = asyncio.run(factory.create_api_client(config))
    except ApiClientKitError as exc:
        output.error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    rows = describe_api(created.api)
    output.print_table(
        ["Method", "Namespace", "Implementation"],
        rows,
        title=f"{target} -- Methods ({len(rows)})",
    )
