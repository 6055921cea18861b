"""Numeric process exit codes used by the ``apiclientkit`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~apiclientkit.exceptions.ApiClientKitError` subclass.
Scripts wrapping the CLI can inspect the exit code to tell a broken
extension apart from a broken config file without parsing stderr.
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (e.g. a bad import target)."""

EXIT_EXTENSION_ERROR = 10
"""An extension or one of its hook sets is malformed."""

EXIT_FACTORY_ERROR = 11
"""The factory inputs (API table, ``on_create`` result) are malformed."""
