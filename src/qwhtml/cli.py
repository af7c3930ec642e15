"""qwhtml CLI

Usage:
    qwhtml render page.yaml                       # render to stdout
    qwhtml render page.yaml --var name=World      # bind a string variable
    qwhtml render page.yaml -c context.yaml       # bind variables from a file
    qwhtml render page.yaml --dump                # print the lowered program
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from qwhtml import __version__
from qwhtml.ast import parse_file
from qwhtml.compiler import Compiler, Printer
from qwhtml.config import CompilerConfig
from qwhtml.exceptions import BuilderConsumedError, QwhtmlError
from qwhtml.sink import StreamSink

log = logging.getLogger(__name__)

console = Console(stderr=True)

app = typer.Typer()

# builder misuse is a bug in qwhtml, not in the template
EXIT_INTERNAL = 70


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the qwhtml CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (QWHTML_DEBUG=1): DEBUG level, including per-compile summaries
    """
    debug = bool(os.environ.get("QWHTML_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("qwhtml")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Report a compile or render failure and exit.

    Template and sink problems exit with 1; builder misuse exits with
    EXIT_INTERNAL.
    """
    if isinstance(error, BuilderConsumedError):
        exit_with_error(f"internal error: {error}", EXIT_INTERNAL)
    if isinstance(error, QwhtmlError):
        exit_with_error(str(error))
    typer.echo(f"Unexpected error: {error}", err=True)
    sys.exit(1)


def parse_vars(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse ``key=value`` pairs into a mapping."""
    result: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            exit_with_error(f"Invalid --var '{pair}', expected key=value")
        result[key] = value
    return result


def load_context(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        exit_with_error(f"Context file {path} must contain a mapping")
    return data


@app.command()
def render(
    template: Path = typer.Argument(..., help="Template tree (.yaml, .yml or .json)."),
    var: Optional[List[str]] = typer.Option(
        None, "--var", help="Variable binding as key=value. Repeatable."
    ),
    context: Optional[Path] = typer.Option(
        None, "-c", "--context", help="YAML file with variable bindings."
    ),
    config: Path = typer.Option(
        Path("qwhtml.yaml"), "--config", help="Compiler configuration file."
    ),
    dump: bool = typer.Option(
        False, "--dump", help="Print the lowered program instead of rendering."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Lower a template tree and render it to stdout."""
    setup_logging(verbose)

    try:
        cfg = CompilerConfig.load(config)
        document = parse_file(template)
        compiled = Compiler(cfg).compile(document)
        log.info("Compiled %s (%d instructions)", template, len(compiled))

        if dump:
            sys.stdout.write(Printer().render(compiled))
            return

        scope = {**load_context(context), **parse_vars(var)}
        sink = StreamSink(sys.stdout)
        compiled.render_to(sink, scope)
        sink.flush()
    except Exception as e:
        log.debug("Render failed", exc_info=True)
        handle_error(e)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """HTML markup lowering engine."""


if __name__ == "__main__":
    app()
