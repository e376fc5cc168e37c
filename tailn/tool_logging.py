from __future__ import annotations

import logging


class ContextFilter(logging.Filter):
    def __init__(self, source: str | None) -> None:
        super().__init__()
        self.source = source

    def filter(self, record: logging.LogRecord) -> bool:
        record.source = self.source or "stdin"
        return True


def setup_logging(verbosity: int, source: str | None) -> None:
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(source)s] %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter(source))
    logging.basicConfig(level=level, handlers=[handler], force=True)
