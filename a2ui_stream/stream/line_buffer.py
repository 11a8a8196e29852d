"""Line reassembly for JSONL bodies split across stream chunks."""
from __future__ import annotations

from typing import Iterator


class LineReassembler:
    """
    Buffers partial lines across chunks.

    Usage::

        lines = LineReassembler()
        for chunk in chunks:
            for line in lines.feed(chunk):
                handle(line)

    Content-agnostic: blank lines are yielded like any other.
    """

    def __init__(self, separator: str = "\n") -> None:
        if not separator:
            raise ValueError("Line separator must not be empty")
        self._separator = separator
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Unterminated tail waiting for its separator."""
        return self._buffer

    def feed(self, chunk: str) -> Iterator[str]:
        """
        Append chunk and iterate over every line it completes, in order.

        The buffer is updated before this returns, whether or not the
        result is consumed.
        """
        self._buffer += chunk
        if self._separator not in self._buffer:
            return iter(())
        *lines, self._buffer = self._buffer.split(self._separator)
        return iter(lines)

    def flush(self) -> str:
        """Return and clear the unterminated tail."""
        tail, self._buffer = self._buffer, ""
        return tail

    def reset(self) -> None:
        self._buffer = ""
