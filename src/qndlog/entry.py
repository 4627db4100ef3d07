"""Log entries that save themselves when they go out of scope.

An :class:`Entry` is a plain dict with two fields filled in at creation:

    {"time": "Tue May 20 17:13:22 2014", "entry-id": "7WHHJ"}

Put anything JSON-serializable into it. When the entry is finalized (the
``with`` block ends, or the object is garbage collected) it is written to its
log file as a single line of JSON, unless autosave was cancelled.
"""

import json
import random
import string
import sys
from contextlib import contextmanager
from datetime import datetime
from os import PathLike, fspath
from typing import Any, Iterator, Optional, Union

from qndlog.store import LogStore

ENTRY_ID_ALPHABET = string.ascii_letters + string.digits
ENTRY_ID_LENGTH = 5


def random_word(length: int = ENTRY_ID_LENGTH) -> str:
    """Return a random alphanumeric string. Not checked for uniqueness."""
    return "".join(random.choice(ENTRY_ID_ALPHABET) for _ in range(length))


def entry_time(moment: Optional[datetime] = None) -> str:
    """Format a timestamp like ``Tue May 20 17:13:22 2014`` (local time)."""
    return (moment or datetime.now()).ctime()


class Entry(dict):
    """A single log entry bound to a log file path."""

    def __init__(self, path: Union[str, PathLike], *args: Any, **fields: Any):
        if path is None or not fspath(path):
            raise ValueError("did not get defined path to log file")

        super().__init__()
        self.path = fspath(path)
        self.autosave = True

        self["time"] = entry_time()
        self["entry-id"] = random_word()
        self.update(*args, **fields)
        self.finalized = False

    @classmethod
    def create(cls, path: Union[str, PathLike], **fields: Any) -> "Entry":
        return cls(path, **fields)

    def cancel(self) -> None:
        """Don't save this entry when it is finalized."""
        self.autosave = False

    def uncancel(self) -> None:
        """Save this entry when it is finalized (the default)."""
        self.autosave = True

    cancel_autosave = cancel
    enable_autosave = uncancel

    def to_json(self) -> str:
        """Serialize the entry to one line of JSON."""
        text = json.dumps(self, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        # One entry per physical line.
        return text.replace("\r", " ").replace("\n", " ")

    def log_file(self) -> LogStore:
        """Return a new LogStore for this entry's path."""
        return LogStore(self.path)

    def save(self) -> bool:
        """Append the entry to its log file. Each call appends a new line."""
        return self.log_file().append(self.to_json())

    def finalize(self) -> bool:
        """Save once if autosave is on. Returns True if a line was written."""
        if self.finalized:
            return False
        self.finalized = True
        if not self.autosave:
            return False
        return self.save()

    def __enter__(self) -> "Entry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.finalize()
            return
        # The block already failed; don't mask its exception with ours.
        try:
            self.finalize()
        except Exception as e:
            _warn(f"could not save log entry {self.get('entry-id')} to {self.path}: {e}")

    def __del__(self):
        if getattr(self, "finalized", True):
            return
        try:
            self.finalize()
        except Exception as e:
            _warn(f"could not save log entry {self.get('entry-id')} to {self.path}: {e}")

    def __repr__(self) -> str:
        return f"Entry({self.path!r}, {dict.__repr__(self)})"


def _warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


@contextmanager
def log_entry(path: Union[str, PathLike], **fields: Any) -> Iterator[Entry]:
    """Create an entry and guarantee it is finalized when the block exits.

        with log_entry("./log-file", stage=1) as entry:
            entry["coord"] = {"x": 1, "z": 42}
    """
    with Entry(path, **fields) as entry:
        yield entry
