"""Output formatting package."""

from .formatter import (
    format_error,
    format_fields,
    format_value,
    parse_field
)

__all__ = [
    "format_error",
    "format_fields",
    "format_value",
    "parse_field"
]
