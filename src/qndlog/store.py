"""Append-only log file of one-line JSON entries separated by blank lines.

Writers take an exclusive ``flock`` for the duration of one append. Readers
take a shared ``flock`` for as long as their cursor is open, walking the file
from the newest entry to the oldest.

Note that an open read cursor blocks every cooperating writer until it is
closed, either by reading past the oldest entry, by ``end_read()``, or when
the store is discarded. Keep cursors short-lived.
"""

import fcntl
import json
import os
from os import PathLike, fspath
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Optional, Union

from qndlog.backwards import DEFAULT_CHUNK_SIZE, BackwardsReader

SEPARATOR = b"\n\n"


def append_line(path: Union[str, PathLike], line: str) -> bool:
    """Append ``line`` to the log at ``path`` under an exclusive lock.

    The file is created if needed. If it already has content, a blank line
    is written first. No newline is written after the entry.
    """
    if "\n" in line or "\r" in line:
        raise ValueError("log entry must be a single line")
    # Encode before touching the file so a bad line writes nothing.
    data = line.encode("utf-8")

    with open(path, "ab") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        try:
            if f.seek(0, os.SEEK_END):
                f.write(SEPARATOR)
            f.write(data)
            f.flush()
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    return True


class LogStore:
    """Read and write a log file.

    Parameters
    ----------
    path:
        Log file location. It does not need to exist yet.
    chunk_size:
        Block size used when reading the file backwards.
    """

    def __init__(self, path: Union[str, PathLike], chunk_size: int = DEFAULT_CHUNK_SIZE):
        if path is None or not fspath(path):
            raise ValueError("did not get defined path to log file")
        self.path = Path(path)
        self.chunk_size = chunk_size
        self._handle: Optional[BinaryIO] = None
        self._reader: Optional[BackwardsReader] = None

    @classmethod
    def create(cls, path: Union[str, PathLike]) -> "LogStore":
        return cls(path)

    def append(self, line: str) -> bool:
        """Append an already-serialized entry to the log."""
        return append_line(self.path, line)

    write_entry = append

    @property
    def is_reading(self) -> bool:
        """True while a read cursor (and its shared lock) is held."""
        return self._reader is not None

    def next_entry(self) -> Any:
        """Return the next entry going backwards, or None past the oldest.

        The first call locks the file for reading. The lock is held until
        this returns None or ``end_read()`` is called.

        Raises json.JSONDecodeError if a non-blank line is not valid JSON
        (including invalid UTF-8). The cursor moves past the bad line.
        """
        if self._reader is None:
            if not self.path.exists():
                return None
            self._open_cursor()

        while True:
            try:
                line = next(self._reader)
            except StopIteration:
                break
            except UnicodeDecodeError as e:
                raise json.JSONDecodeError(
                    f"invalid UTF-8: {e.reason}",
                    e.object.decode("utf-8", "replace"),
                    e.start,
                ) from e
            if not line.strip():
                continue
            return json.loads(line)

        self.end_read()
        return None

    get_entry = next_entry

    def end_read(self) -> None:
        """Close the read cursor and release the read lock."""
        handle = self._handle
        self._reader = None
        self._handle = None
        if handle is not None:
            handle.close()

    def entries(self, limit: Optional[int] = None) -> list:
        """Return up to ``limit`` entries, newest first, then end the read."""
        results = []
        try:
            while limit is None or len(results) < limit:
                entry = self.next_entry()
                if entry is None:
                    break
                results.append(entry)
        finally:
            self.end_read()
        return results

    def _open_cursor(self) -> None:
        handle = open(self.path, "rb")
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_SH)
            self._reader = BackwardsReader(handle, self.chunk_size)
        except BaseException:
            handle.close()
            raise
        self._handle = handle

    def __iter__(self) -> Iterator[Any]:
        while True:
            entry = self.next_entry()
            if entry is None:
                self.end_read()
                return
            yield entry

    def __enter__(self) -> "LogStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end_read()

    def __del__(self):
        if getattr(self, "_handle", None) is not None:
            self.end_read()

    def __repr__(self) -> str:
        return f"LogStore({str(self.path)!r})"
