"""Durable storage module."""

from .file_sink import FileSink, IDurableSink
from .line_format import PersistedRecord, format_line, parse_line

__all__ = ["FileSink", "IDurableSink", "PersistedRecord", "format_line", "parse_line"]
