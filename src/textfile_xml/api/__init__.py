"""Public API for reading and writing text resource XML files.

Key Components:
    read_file, read_bytes: Level 1 reading functions
    write_file, write_bytes: Level 1 writing functions
    TextFileXmlStream: Level 2 configured reader/writer
    ReadResult, WriteResult: Outcome objects with diagnostics and metrics
"""

from .stream import (
    ReadResult,
    TextFileXmlStream,
    WriteResult,
    read_bytes,
    read_file,
    write_bytes,
    write_file,
)

__all__ = [
    "ReadResult",
    "TextFileXmlStream",
    "WriteResult",
    "read_bytes",
    "read_file",
    "write_bytes",
    "write_file",
]
