"""Pydantic models for apiclientkit configuration.

The creation configuration a caller hands to
:meth:`~apiclientkit.client.factory.ApiClientFactory.create_api_client` is
opaque to the library and is not modelled here. What is modelled are the
knobs of the library itself, resolved by
:func:`~apiclientkit.config.resolve_options`.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator


class FactoryOptions(BaseModel):
    """Behaviour switches for an :class:`~apiclientkit.client.factory.ApiClientFactory`.

    Fields here can be overridden by environment variables or explicit
    arguments; see :func:`~apiclientkit.config.resolve_options` for the
    precedence chain.
    """

    concurrent_hook_resolution: bool = Field(
        default=True,
        description="Run the extensions' hooks() calls concurrently; "
        "the resolved order always follows registration order",
    )
    log_level: str = Field(
        default="WARNING", description="Log level used by the command line"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level
