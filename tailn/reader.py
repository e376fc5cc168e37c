from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from tailn.errors import SourceError

LOGGER = logging.getLogger(__name__)


def read_lines(handle: IO[str], max_line_length: int) -> Iterator[str]:
    """Yield lines from ``handle`` with their terminators intact.

    Each read is capped so an over-long line is never held in full; the capped
    chunk is yielded as-is and rejected downstream by its length.
    """
    # room for the longest accepted line plus a "\r\n" terminator
    limit = max_line_length + 2
    while True:
        line = handle.readline(limit)
        if not line:
            return
        yield line


@contextmanager
def open_source(path: Path | str | None, encoding: str = "utf-8", errors: str = "strict") -> Iterator[IO[str]]:
    if _is_stdin(path):
        LOGGER.debug("Reading from stdin")
        yield sys.stdin
        return
    source = Path(path)  # type: ignore[arg-type]
    try:
        handle = source.open("r", encoding=encoding, errors=errors, newline="")
    except OSError as exc:
        raise SourceError(f"Cannot open {source}: {exc.strerror or exc}") from exc
    LOGGER.debug("Reading from %s", source)
    with handle:
        yield handle


def source_name(path: Path | str | None) -> str | None:
    if _is_stdin(path):
        return None
    return str(path)


def _is_stdin(path: Path | str | None) -> bool:
    return path is None or str(path) == "-"
