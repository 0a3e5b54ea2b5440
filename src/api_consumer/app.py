"""Typer application and CLI entry point for api-consumer.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``serve``, ``import``, ``tools``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Typed errors exit with their own exit code; any other exception is written to
a crash log under the data directory.

See Also:
    :mod:`api_consumer.config`: Configuration resolution.
    :mod:`api_consumer.output`: Output formatting initialised in
    :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from api_consumer import __version__
from api_consumer.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="api-consumer",
    help="MCP server for consuming and testing HTTP APIs described by OpenAPI.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"api-consumer {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write primary output to a file."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~api_consumer.output.OutputManager` from
    CLI flags and stores ``verbose`` in the Typer context so that ``serve``
    can pick its log level.
    """
    from api_consumer.output import OutputFormat, OutputManager, set_output

    output = OutputManager(
        format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# ------------------------------------------------------------------ #
# Built-in commands
# ------------------------------------------------------------------ #

from api_consumer.commands.config import config_app  # noqa: E402
from api_consumer.commands.import_spec import import_command  # noqa: E402
from api_consumer.commands.serve import serve_command  # noqa: E402
from api_consumer.commands.tools import tools_command  # noqa: E402

app.command("serve")(serve_command)
app.command("import")(import_command)
app.command("tools")(tools_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from api_consumer.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``api-consumer`` console script.

    Unhandled :class:`~api_consumer.exceptions.ApiConsumerError` instances
    cause a clean exit with the error's ``exit_code``; import validation
    failures also list every violation. All other exceptions produce a crash
    log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from api_consumer.exceptions import ApiConsumerError, SpecValidationError
        from api_consumer.output import error

        if isinstance(exc, SpecValidationError):
            error(exc.message)
            for violation in exc.errors:
                error(f"  - {violation}")
            sys.exit(exc.exit_code)
        elif isinstance(exc, ApiConsumerError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
