from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer

from tailn.config import TailConfig, load_config, merge_config
from tailn.errors import TailError
from tailn.reader import open_source, read_lines, source_name
from tailn.tail import write_tail
from tailn.tool_logging import setup_logging

app = typer.Typer(help="tailn - print the last N lines of a file")

LOGGER = logging.getLogger(__name__)


def _build_config(
    config_path: Optional[Path],
    lines: Optional[int],
    encoding: Optional[str],
    max_line_length: Optional[int],
    verbosity: int,
) -> TailConfig:
    base = load_config(config_path)
    return merge_config(
        base,
        {
            "input": {"encoding": encoding, "max_line_length": max_line_length},
            "output": {"line_count": lines},
            "verbosity": verbosity or None,
        },
    )


def _fail(message: str) -> NoReturn:
    LOGGER.error(message)
    typer.echo(f"ERROR: {message}", err=True)
    raise typer.Exit(code=1)


@app.command()
def tail(
    file: Optional[Path] = typer.Argument(None, help="Input file, '-' or omitted for stdin"),
    lines: Optional[int] = typer.Option(None, "-n", "--lines", help="Number of lines to print"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file path"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Input encoding"),
    max_line_length: Optional[int] = typer.Option(
        None, "--max-line-length", help="Longest accepted line, excluding terminator"
    ),
    verbosity: int = typer.Option(0, "-v", "--verbose", count=True, help="Increase verbosity"),
) -> None:
    """Print the last N lines of FILE (default 10)."""
    setup_logging(verbosity, source_name(file))
    try:
        config_model = _build_config(config, lines, encoding, max_line_length, verbosity)
    except (FileNotFoundError, ValueError) as exc:
        _fail(str(exc))
    if config_model.verbosity != verbosity:
        setup_logging(config_model.verbosity, source_name(file))
    LOGGER.info("Keeping last %d lines", config_model.output.line_count)
    try:
        with open_source(file, config_model.input.encoding, config_model.input.errors) as handle:
            write_tail(
                read_lines(handle, config_model.input.max_line_length),
                config_model.output.line_count,
                sys.stdout.write,
                config_model.input.max_line_length,
            )
        sys.stdout.flush()
    except TailError as exc:
        _fail(str(exc))
    except UnicodeDecodeError as exc:
        _fail(f"Cannot decode input: {exc.reason}")


if __name__ == "__main__":
    app()
