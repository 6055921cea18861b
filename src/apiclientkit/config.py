"""Option resolution and creation-config loading.

* **Options** -- :func:`resolve_options` merges explicit arguments and
  ``APICLIENTKIT_*`` environment variables over the defaults of
  :class:`~apiclientkit.models.FactoryOptions`.
* **Creation config** -- :func:`load_creation_config` reads a JSON or YAML
  mapping from a file (or stdin) for callers that keep their client
  configuration on disk. The factory itself never reads files.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from apiclientkit.exceptions import ConfigError
from apiclientkit.models import FactoryOptions

_ENV_PREFIX = "APICLIENTKIT_"
_ENV_FIELDS = {
    "concurrent_hook_resolution": f"{_ENV_PREFIX}CONCURRENT_HOOKS",
    "log_level": f"{_ENV_PREFIX}LOG_LEVEL",
}


# --- Options ---


def resolve_options(**overrides: Any) -> FactoryOptions:
    """Resolve :class:`FactoryOptions` with full precedence chain.

    Precedence (high to low):
        1. Explicit keyword arguments that are not ``None``
        2. Environment variables (``APICLIENTKIT_CONCURRENT_HOOKS``,
           ``APICLIENTKIT_LOG_LEVEL``)
        3. Defaults

    Raises:
        ConfigError: On unknown option names or values that fail
            validation.
    """
    unknown = sorted(set(overrides) - set(FactoryOptions.model_fields))
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")

    data: dict[str, Any] = {}
    for name, env_var in _ENV_FIELDS.items():
        env_value = os.environ.get(env_var)
        if env_value:
            data[name] = env_value
    data.update({name: value for name, value in overrides.items() if value is not None})

    try:
        return FactoryOptions.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid apiclientkit options: {exc}") from exc


# --- Creation config ---


def load_creation_config(source: str) -> dict[str, Any]:
    """Load a creation configuration mapping from a file path or ``-`` (stdin).

    ``.json`` files are parsed as JSON and ``.yaml``/``.yml`` files as YAML;
    anything else is tried as JSON first, then YAML.

    Raises:
        ConfigError: If the source cannot be read, cannot be parsed, or
            does not contain a mapping.
    """
    if source == "-":
        content = sys.stdin.read()
        hint = ""
    else:
        path = Path(source)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {source}")
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read config file {source}: {exc}") from exc
        suffix = path.suffix.lower()
        hint = "json" if suffix == ".json" else "yaml" if suffix in (".yaml", ".yml") else ""

    if not content.strip():
        return {}
    return _parse_content(content, hint)


def _parse_content(content: str, hint: str) -> dict[str, Any]:
    result: Any
    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise ConfigError(f"Invalid JSON config: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config as JSON or YAML: {exc}") from exc
    return _require_mapping(result)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise ConfigError(f"Config must be a JSON/YAML object (got {kind})")
    return result
