"""Exception hierarchy for apiclientkit.

All exceptions inherit from :class:`ApiClientKitError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`apiclientkit.exit_codes`. These exceptions describe problems with the
*shape* of what was handed to the factory. Exceptions raised by user code
(extension hooks, ``on_create``, API builders and API methods) are never
wrapped in these types; they propagate unchanged to whoever awaited the
client creation or the method call.

Subclass hierarchy::

    ApiClientKitError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ExtensionError      (exit 10)
    +-- FactoryError        (exit 11)
    +-- ConfigError         (exit 1)
"""

from apiclientkit.exit_codes import (
    EXIT_EXTENSION_ERROR,
    EXIT_FACTORY_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class ApiClientKitError(Exception):
    """Base exception for all apiclientkit errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApiClientKitError):
    """Raised for invalid CLI arguments, such as an unimportable factory target."""

    exit_code = EXIT_INVALID_USAGE


class ExtensionError(ApiClientKitError):
    """Raised when an extension or the hook set it produces is malformed."""

    exit_code = EXIT_EXTENSION_ERROR


class FactoryError(ApiClientKitError):
    """Raised for malformed factory inputs (non-callable API members, bad ``on_create`` results)."""

    exit_code = EXIT_FACTORY_ERROR


class ConfigError(ApiClientKitError):
    """Raised for configuration problems (unreadable files, invalid environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
