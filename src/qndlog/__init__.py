"""qndlog: quick and dirty JSON entry log."""

__version__ = "0.1.0"

from qndlog.entry import Entry, log_entry, random_word
from qndlog.store import LogStore, append_line

__all__ = ["Entry", "LogStore", "append_line", "log_entry", "random_word"]
