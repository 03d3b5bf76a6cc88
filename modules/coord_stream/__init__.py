"""
Convenience exports for the stream adapter.
"""

from .adapter import (
    convert_record,
    convert_stream,
    convert_text,
    format_record,
    iter_records,
    parse_record,
)

__all__ = [
    "convert_record",
    "convert_stream",
    "convert_text",
    "format_record",
    "iter_records",
    "parse_record",
]
