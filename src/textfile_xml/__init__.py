"""Text file XML streaming.

Reads and writes text resource files: a ``<strings>`` root holding numbered
``<group>`` elements, each holding zero-indexed ``<string>`` elements. Reading
is streamed over a pull token stream and fails with a typed diagnostic on the
first structural problem; writing is canonical and pretty-printed.

Progressive API Disclosure:
- Level 1: Simple functions - read_file(), read_bytes(), write_file(), write_bytes()
- Level 2: Configured stream - TextFileXmlStream class
"""

__version__ = "0.1.0"
__author__ = "Text File XML Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured stream
from .api import (
    ReadResult,
    TextFileXmlStream,
    WriteResult,
    read_bytes,
    read_file,
    write_bytes,
    write_file,
)

# Document model
from .model import TextFile, TextGroup

# Configuration classes for advanced usage
from .shared.config import ReaderConfig, StreamConfig, WriterConfig

# Error taxonomy
from .shared.errors import ErrorKind, TextFileXmlError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions (progressive disclosure entry point)
    "read_file",
    "read_bytes",
    "write_file",
    "write_bytes",

    # Level 2: Configured stream
    "TextFileXmlStream",

    # Result objects and data structures
    "ReadResult",
    "WriteResult",
    "TextFile",
    "TextGroup",

    # Configuration classes for advanced usage
    "StreamConfig",
    "ReaderConfig",
    "WriterConfig",

    # Errors
    "ErrorKind",
    "TextFileXmlError",
]
