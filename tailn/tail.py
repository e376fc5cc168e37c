from __future__ import annotations

import logging
from typing import Callable, Iterable

from tailn.errors import LineTooLong
from tailn.ring import MAX_LINE_LENGTH, LineRing

LOGGER = logging.getLogger(__name__)


def collect(
    lines: Iterable[str],
    capacity: int,
    max_line_length: int = MAX_LINE_LENGTH,
    on_release: Callable[[str], None] | None = None,
) -> LineRing:
    ring = LineRing(capacity, max_line_length, on_release)
    line_number = 0
    try:
        for line_number, line in enumerate(lines, start=1):
            ring.push(line)
    except LineTooLong as exc:
        ring.close()
        raise exc.at_line(line_number)
    except BaseException:
        ring.close()
        raise
    LOGGER.debug("Read %d lines, holding %d", line_number, len(ring))
    return ring


def tail_lines(lines: Iterable[str], count: int, max_line_length: int = MAX_LINE_LENGTH) -> list[str]:
    with collect(lines, count, max_line_length) as ring:
        return list(ring.drain(count))


def write_tail(
    lines: Iterable[str],
    count: int,
    sink: Callable[[str], object],
    max_line_length: int = MAX_LINE_LENGTH,
) -> int:
    written = 0
    with collect(lines, count, max_line_length) as ring:
        for line in ring.drain(count):
            sink(line)
            written += 1
    LOGGER.debug("Wrote %d lines", written)
    return written
