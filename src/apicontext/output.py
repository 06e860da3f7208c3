"""Output formatting with strict stdout/stderr discipline.

* **stdout** -- the rendered context only (JSON or YAML), so the command can
  be piped straight into a template engine.
* **stderr** -- all diagnostics: status, warnings, errors.
* **TTY detection** -- syntax-highlighted output when stdout is an
  interactive terminal, plain text when piped or written to a file.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb`` and the
  ``--no-color`` flag.

:class:`OutputManager` holds the preferences and Rich consoles; it is
created once by the ``generate`` command and installed with
:func:`set_output`; :func:`error` reports through that instance.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax

from apicontext.serialization import to_json, to_yaml


class OutputFormat(str, Enum):
    """Serialization used for the context on stdout."""

    JSON = "json"
    YAML = "yaml"


class OutputManager:
    """Central manager for all command output.

    Args:
        format: Serialization for :meth:`render`.
        no_color: Disable colour, markup and syntax highlighting.
        quiet: Suppress success messages on stderr.
        verbose: Show debug messages on stderr.
        output_file: Write rendered data to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.JSON,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._format = format
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        self._stdout = Console(file=sys.stdout, no_color=self._no_color)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def render(self, data: Any) -> None:
        """Serialize *data* in the configured format and emit it.

        Highlighting is applied only for an interactive, coloured stdout;
        files and pipes always receive the plain serialization.
        """
        if self._format == OutputFormat.YAML:
            text, lexer = to_yaml(data), "yaml"
        else:
            text, lexer = to_json(data), "json"

        if self._output_file or self._no_color or not _is_tty():
            self.print_data(text)
        else:
            self._stdout.print(Syntax(text, lexer, theme="monokai", word_wrap=True))

    def print_data(self, text: str) -> None:
        """Write raw *text* to stdout or the output file, newline-terminated."""
        if self._output_file:
            with open(self._output_file, "w", encoding="utf-8") as f:
                f.write(text)
                if not text.endswith("\n"):
                    f.write("\n")
        else:
            print(text.rstrip("\n"), file=sys.stdout, flush=True)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        """Green success message. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Yellow warning. NOT suppressed by ``--quiet``."""
        self._emit(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Bold-red error. Never suppressed."""
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Debug message, shown only with ``--verbose``."""
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def _emit(self, plain: str, markup: Optional[str] = None) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup if markup is not None else plain)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the global manager. Used by tests for a clean state."""
    global _output
    _output = None


def error(message: str) -> None:
    get_output().error(message)
