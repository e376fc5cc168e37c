from __future__ import annotations


class TailError(RuntimeError):
    pass


class AllocationError(TailError):
    pass


class BufferClosed(TailError):
    pass


class SourceError(TailError):
    pass


class InvalidCapacity(TailError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid number of lines: {value!r}")
        self.value = value


class LineTooLong(TailError):
    def __init__(self, length: int, limit: int, line_number: int | None = None) -> None:
        self.length = length
        self.limit = limit
        self.line_number = line_number
        super().__init__(self._message())

    def at_line(self, line_number: int) -> "LineTooLong":
        self.line_number = line_number
        self.args = (self._message(),)
        return self

    def _message(self) -> str:
        where = f" (line {self.line_number})" if self.line_number is not None else ""
        return f"Line is too long{where}: {self.length} > {self.limit} characters"
