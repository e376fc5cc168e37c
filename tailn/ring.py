from __future__ import annotations

from typing import Callable, Iterable, Iterator

from tailn.errors import AllocationError, BufferClosed, InvalidCapacity, LineTooLong

MAX_LINE_LENGTH = 4095
TERMINATORS = ("\r\n", "\n", "\r")


def content_length(line: str) -> int:
    """Length of ``line`` without its trailing terminator."""
    for terminator in TERMINATORS:
        if line.endswith(terminator):
            return len(line) - len(terminator)
    return len(line)


class LineRing:
    """Fixed-capacity FIFO of lines that overwrites the oldest entry when full.

    Slots are reused cyclically: ``_write`` is the next slot to fill and
    ``_read`` is the oldest occupied slot. Once full the two cursors coincide
    and every push evicts the line sitting there.
    """

    def __init__(
        self,
        capacity: int,
        max_line_length: int = MAX_LINE_LENGTH,
        on_release: Callable[[str], None] | None = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidCapacity(capacity)
        if max_line_length <= 0:
            raise ValueError("max_line_length must be positive")
        try:
            self._slots: list[str | None] | None = [None] * capacity
        except (MemoryError, OverflowError) as exc:
            raise AllocationError(f"Cannot allocate {capacity} line slots") from exc
        self._capacity = capacity
        self._max_line_length = max_line_length
        self._on_release = on_release
        self._write = 0
        self._read = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __enter__(self) -> "LineRing":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_line_length(self) -> int:
        return self._max_line_length

    @property
    def is_full(self) -> bool:
        return self._count == self._capacity

    @property
    def closed(self) -> bool:
        return self._slots is None

    def push(self, line: str) -> None:
        slots = self._live_slots()
        if not isinstance(line, str):
            raise TypeError(f"line must be str, not {type(line).__name__}")
        length = content_length(line)
        if length > self._max_line_length:
            raise LineTooLong(length, self._max_line_length)

        evicted = slots[self._write]
        slots[self._write] = line
        self._write = (self._write + 1) % self._capacity
        if self._count < self._capacity:
            self._count += 1
        else:
            self._read = self._write
        if evicted is not None:
            self._release(evicted)

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.push(line)

    def pop(self) -> str | None:
        if self._count == 0 or self._slots is None:
            return None
        line = self._slots[self._read]
        self._slots[self._read] = None
        self._read = (self._read + 1) % self._capacity
        self._count -= 1
        return line

    def drain(self, n: int) -> Iterator[str]:
        """Pop and yield up to ``n`` lines, oldest first.

        The number of lines is fixed when ``drain`` is called; pushes made while
        the iterator is being consumed do not extend it.
        """
        limit = min(n, self._count) if n > 0 else 0
        return self._drain(limit)

    def _drain(self, limit: int) -> Iterator[str]:
        for _ in range(limit):
            line = self.pop()
            if line is None:
                break
            yield line

    def snapshot(self) -> list[str]:
        if self._slots is None:
            return []
        return [
            self._slots[(self._read + offset) % self._capacity]  # type: ignore[misc]
            for offset in range(self._count)
        ]

    def close(self) -> None:
        if self._slots is None:
            return
        while self._count:
            line = self.pop()
            if line is not None:
                self._release(line)
        self._slots = None

    def _live_slots(self) -> list[str | None]:
        if self._slots is None:
            raise BufferClosed("Line buffer is closed")
        return self._slots

    def _release(self, line: str) -> None:
        if self._on_release is not None:
            self._on_release(line)
