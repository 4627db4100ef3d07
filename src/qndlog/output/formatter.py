"""Terminal-friendly rendering of log entries."""

import json
from typing import Any, Optional

RESERVED_FIELDS = ("time", "entry-id")


def format_value(value: Any, max_len: int = 60) -> str:
    """Format a single field value for display."""
    if isinstance(value, str):
        text = value
    else:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    if len(text) > max_len:
        text = text[: max_len - 3] + "..."
    return text


def format_fields(entry: Any) -> str:
    """Format the non-reserved fields of an entry as ``key=value`` pairs."""
    if not isinstance(entry, dict):
        return format_value(entry)
    parts = [
        f"{key}={format_value(value)}"
        for key, value in entry.items()
        if key not in RESERVED_FIELDS
    ]
    return " ".join(parts)


def format_error(
    error_type: str,
    error_msg: str,
    line_content: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> str:
    """Format an error with helpful context."""

    lines = [f"Error: {error_type}: {error_msg}"]

    if line_content:
        lines.append("")
        lines.append(f"Line: {line_content}")

    if suggestion:
        lines.append("")
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def parse_field(assignment: str) -> tuple[str, Any]:
    """Parse a ``key=value`` argument. The value is JSON if it parses."""
    key, sep, raw = assignment.partition("=")
    if not sep or not key:
        raise ValueError(f"expected key=value, got {assignment!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value
