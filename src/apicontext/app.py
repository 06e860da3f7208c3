"""Typer application and console-script entry point for apicontext.

``apicontext SOURCE`` loads an OpenAPI 3.x document, builds its template
context with :func:`~apicontext.generator.context_builder.transform` and
writes the context to stdout (or ``--output``) as JSON or YAML.

Options reach the transform from three places, later ones winning: an
options file (``--config``), the dedicated flags (``--language``,
``--lint``...), and ``--set KEY=VALUE`` overrides.

:func:`main` is the entry point declared in ``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from apicontext import __version__
from apicontext.exit_codes import EXIT_GENERIC_FAILURE
from apicontext.models import MessageLevel
from apicontext.output import OutputFormat

app = typer.Typer(
    name="apicontext",
    help="Build template contexts from OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

logger = logging.getLogger("apicontext")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"apicontext {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool, no_color: bool) -> None:
    """Route library logging through Rich on stderr."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
        show_time=False,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


@app.command()
def generate(
    source: str = typer.Argument(
        ..., help="OpenAPI document: file path, http(s) URL, or '-' for stdin."
    ),
    language: str = typer.Option(
        "", "--language", "-l", help="Type-map dialect (nop, java, javascript, typescript)."
    ),
    original: Optional[str] = typer.Option(
        None, "--original", help="Pre-conversion document to echo as 'swagger'."
    ),
    lint: bool = typer.Option(False, "--lint", help="Apply lint rules during validation."),
    config_name: str = typer.Option(
        "", "--config-name", help="Generator configuration name."
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", help="JSON/YAML file of transform options."
    ),
    set_options: Optional[list[str]] = typer.Option(
        None, "--set", help="Override an option: KEY=VALUE (repeatable)."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.JSON, "--format", help="Context serialization."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the context to a file."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit non-zero when validation reports an error."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    debug: bool = typer.Option(
        False, "--debug", help="Attach JSON dumps of operations and models."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Build the template context for SOURCE and print it."""
    from apicontext.config import load_options_file, parse_set_options
    from apicontext.exceptions import ApiContextError, ValidationFailedError
    from apicontext.generator.context_builder import transform
    from apicontext.output import OutputManager, get_output, set_output
    from apicontext.parser import load_document, validate_openapi_version

    set_output(
        OutputManager(
            format=output_format,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )
    _configure_logging(verbose, quiet, no_color)
    out = get_output()

    try:
        options: dict[str, Any] = {}
        if config_file:
            options.update(load_options_file(config_file))
        if language:
            options["language"] = language
        if config_name:
            options["configName"] = config_name
        if lint:
            options["lint"] = True
        if verbose:
            options["verbose"] = True
        if debug:
            options["debug"] = True
        if original:
            options["swagger"] = load_document(original)
        options.update(parse_set_options(set_options or []))

        out.debug(f"Loading document from {source}")
        document = load_document(source)
        version_str = validate_openapi_version(document)
        out.debug(f"OpenAPI version {version_str}")

        context = transform(document, options)

        out.render(context.to_dict())

        failed = [m for m in context.messages if m.level == MessageLevel.ERROR]
        if failed:
            out.warning(f"Validation: {failed[0].message} ({failed[0].element_id})")
            if strict:
                raise ValidationFailedError(
                    f"Document failed validation at {failed[0].element_id}"
                )
        elif output_file:
            out.success(f"Context written to {output_file}")

    except ApiContextError as exc:
        out.error(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``apicontext`` console script.

    Errors from apicontext itself are reported by the command and mapped to
    their exit codes; anything else is logged with its traceback and exits
    with a generic failure.

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
    except Exception:
        from apicontext.output import error

        logger.exception("Unexpected error")
        error("Unexpected error. Re-run with --verbose for details.")
        sys.exit(EXIT_GENERIC_FAILURE)
