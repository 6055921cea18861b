"""Typer application and CLI entry point for apiclientkit.

The command line is a debugging aid around the library: it imports a client
factory and shows what a created client looks like. :func:`main` is the
console-script entry point declared in ``pyproject.toml``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer

from apiclientkit import __version__
from apiclientkit.commands.inspect import inspect_command
from apiclientkit.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="apiclientkit",
    help="Inspect API clients built from extensible client factories.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("inspect")(inspect_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"apiclientkit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Library log level (default: APICLIENTKIT_LOG_LEVEL or WARNING)."
    ),
) -> None:
    """Configure output and logging before every command."""
    from apiclientkit.config import resolve_options
    from apiclientkit.exceptions import ApiClientKitError
    from apiclientkit.output import OutputFormat, OutputManager, set_output

    output = OutputManager(
        format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
        no_color=no_color,
        verbose=verbose,
    )
    set_output(output)

    try:
        options = resolve_options(log_level="DEBUG" if verbose else log_level)
    except ApiClientKitError as exc:
        output.error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    logging.basicConfig(
        level=options.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point invoked by the ``apiclientkit`` console script.

    Errors raised by user code while creating the inspected client are
    reported on stderr and exit with :data:`EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from apiclientkit.output import get_output

        get_output().error(f"{type(exc).__name__}: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
