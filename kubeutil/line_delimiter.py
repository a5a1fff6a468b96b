"""A writer that brackets every line of its input with a delimiter."""

from __future__ import annotations

from typing import TextIO, Union


class LineDelimiter:
    """Collects text and, on flush, writes each line wrapped in ``delimiter``.

    Useful in output tests where trailing whitespace is hard to see.
    Used as a context manager, it flushes on exit.
    """

    def __init__(self, output: TextIO, delimiter: str) -> None:
        self._output = output
        self._delimiter = delimiter
        self._buffer: list = []

    def write(self, data: Union[str, bytes]) -> int:
        """Buffer ``data`` and return its length."""
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        self._buffer.append(data)
        return len(data)

    def flush(self) -> None:
        """Write every line buffered so far, treating the end as a line break."""
        for line in "".join(self._buffer).split("\n"):
            self._output.write(f"{self._delimiter}{line}{self._delimiter}\n")

    def __enter__(self) -> "LineDelimiter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.flush()