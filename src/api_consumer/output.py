"""Terminal output for the ``import``, ``tools`` and ``config`` commands.

Imported specifications, endpoint listings and tool tables are written to
stdout so they can be piped into ``jq`` or saved with ``--output``. Progress
notes and error messages go to stderr. Rich styling is used only when stdout
is a terminal and neither ``--no-color``, ``NO_COLOR`` nor ``TERM=dumb``
turns it off.

The MCP ``serve`` command never writes through this module: there stdout is
the protocol channel and diagnostics go through :mod:`logging`.

The root callback in :mod:`api_consumer.app` builds one :class:`OutputManager`
from the global flags and installs it with :func:`set_output`; commands then
call the module-level functions below.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How command results are rendered (``--json`` selects ``JSON``).

    ``AUTO`` becomes ``RICH`` on a colour terminal and ``PLAIN`` elsewhere.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Renders command results to stdout and status messages to stderr.

    Args:
        format: Rendering for results; ``AUTO`` picks by terminal.
        no_color: Print status messages without Rich markup.
        quiet: Drop ``info`` and ``success`` messages.
        verbose: Show ``debug`` messages.
        output_file: Write ``format_data`` results to this path instead of
            stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format == OutputFormat.AUTO:
            self._format = (
                OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
            )
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def format(self) -> OutputFormat:
        """Format in effect after ``AUTO`` was resolved."""
        return self._format

    @property
    def is_verbose(self) -> bool:
        """True when ``--verbose`` was given."""
        return self._verbose

    # -- results ---------------------------------------------------------

    def format_data(self, data: Any) -> None:
        """Emit a JSON-compatible result, e.g. an imported specification.

        The text is always indented JSON; on a Rich terminal it is highlighted.
        """
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._output_file:
            with open(self._output_file, "w", encoding="utf-8") as f:
                f.write(text + "\n")
            return

        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self.print_data(text)

    def print_data(self, text: str) -> None:
        """Write one line to stdout."""
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Emit rows such as the endpoint or tool listing.

        ``JSON`` gives a list of objects keyed by *headers*, ``PLAIN`` gives a
        header line and tab-separated rows, and ``RICH`` draws a table.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))

        elif self._format == OutputFormat.PLAIN:
            self.print_data("\t".join(headers))
            for row in rows:
                self.print_data("\t".join(row))

        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for h in headers:
                table.add_column(h)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # -- status messages -------------------------------------------------

    def info(self, message: str) -> None:
        """Status note on stderr, hidden by ``--quiet``."""
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(message)

    def success(self, message: str) -> None:
        """Completion note on stderr (green), hidden by ``--quiet``."""
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[green]{message}[/green]")

    def error(self, message: str) -> None:
        """Error line on stderr, prefixed ``Error:``; shown even with ``--quiet``."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Diagnostic line on stderr, shown only with ``--verbose``."""
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim][debug] {message}[/dim]")


# -- environment -----------------------------------------------------


def _is_tty() -> bool:
    """True when stdout is attached to a terminal."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """Colour is off when ``NO_COLOR`` exists, even empty, or ``TERM`` is ``dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# -- shared instance -------------------------------------------------

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Installed manager, or a default one when no CLI callback has run."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Make *output* the manager used by the module-level functions."""
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; the next :func:`get_output` builds a new one."""
    global _output
    _output = None


# -- shortcuts -------------------------------------------------------


def format_data(data: Any) -> None:
    """See :meth:`OutputManager.format_data`."""
    get_output().format_data(data)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    """See :meth:`OutputManager.print_table`."""
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
