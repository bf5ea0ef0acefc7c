"""Shared utilities for text file XML streaming.

This module provides shared configuration objects, the error taxonomy,
diagnostic types and logging helpers used by every layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ReaderConfig,
    StreamConfig,
    WriterConfig,
)
from .errors import (
    ChannelError,
    ChannelIOError,
    ChannelOpenError,
    ErrorKind,
    InvalidIntegerAttributeError,
    MalformedInputError,
    MissingAttributeError,
    MissingCloseTagError,
    OutOfOrderIndexError,
    RootElementNotFoundError,
    StructureMismatchError,
    TextFileXmlError,
    UnexpectedEndOfInputError,
)
from .logging import (
    CorrelationLogger,
    ErrorSink,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ReaderConfig",
    "StreamConfig",
    "WriterConfig",
    "ChannelError",
    "ChannelIOError",
    "ChannelOpenError",
    "ErrorKind",
    "InvalidIntegerAttributeError",
    "MalformedInputError",
    "MissingAttributeError",
    "MissingCloseTagError",
    "OutOfOrderIndexError",
    "RootElementNotFoundError",
    "StructureMismatchError",
    "TextFileXmlError",
    "UnexpectedEndOfInputError",
    "CorrelationLogger",
    "ErrorSink",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
