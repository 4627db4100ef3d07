"""Read a file's lines from the last one to the first."""

import os
from typing import BinaryIO, Iterator, Optional

DEFAULT_CHUNK_SIZE = 8192


class BackwardsReader:
    """Yield physical lines of a binary file, newest first.

    The file is read in ``chunk_size`` blocks from the end toward the start,
    so only one block and one partial line are held in memory. Lines are
    decoded as UTF-8 and returned without their terminator. A newline at the
    very end of the file does not produce an empty last line.

    The reader makes a single pass; once exhausted it stays exhausted.
    """

    def __init__(self, handle: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")

        self._handle = handle
        self._chunk_size = chunk_size
        self._position = handle.seek(0, os.SEEK_END)
        self._at_tail = True
        # Chunks of the line before the earliest newline seen so far, in
        # reverse file order; None once exhausted.
        self._partial: Optional[list[bytes]] = [] if self._position else None
        self._lines: list[bytes] = []

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        while not self._lines:
            if self._partial is None:
                raise StopIteration
            if self._position == 0:
                chunks, self._partial = self._partial, None
                return _decode(b"".join(reversed(chunks)))
            self._read_chunk()
        return _decode(self._lines.pop())

    def readline(self) -> Optional[str]:
        """Return the previous line, or None at the start of the file."""
        return next(self, None)

    def _read_chunk(self) -> None:
        size = min(self._chunk_size, self._position)
        self._position -= size
        self._handle.seek(self._position)
        data = self._handle.read(size)

        if self._at_tail:
            self._at_tail = False
            if data.endswith(b"\n"):
                data = data[:-1]

        if b"\n" not in data:
            self._partial.append(data)
            return

        parts = data.split(b"\n")
        parts[-1] = b"".join([parts[-1]] + self._partial[::-1])
        self._partial = [parts[0]]
        self._lines = parts[1:]


def _decode(line: bytes) -> str:
    if line.endswith(b"\r"):
        line = line[:-1]
    return line.decode("utf-8")
