"""Diagnostic and metric types shared by the reader and writer.

This module defines the diagnostic entries attached to every read and write
result, along with the performance counters collected while streaming.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional

from .errors import TextFileXmlError


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Warnings about potential issues
    ERROR = auto()      # Errors that aborted the operation


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    @classmethod
    def from_error(
        cls,
        error: TextFileXmlError,
        component: str,
        correlation_id: Optional[str] = None
    ) -> "DiagnosticEntry":
        """Build an ERROR entry describing a raised text file XML error."""
        details: Dict[str, Any] = {"error_kind": error.kind.name}
        details.update(error.details)
        return cls(
            severity=DiagnosticSeverity.ERROR,
            message=error.message,
            component=component,
            position=error.position,
            details=details,
            correlation_id=correlation_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
        }


@dataclass
class PerformanceMetrics:
    """Counters collected during a single read or write."""

    processing_time_ms: float = 0.0
    bytes_processed: int = 0
    tokens_consumed: int = 0
    groups_processed: int = 0
    strings_processed: int = 0

    @property
    def bytes_per_second(self) -> float:
        """Calculate bytes processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.bytes_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens consumed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_consumed * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a JSON-friendly dictionary."""
        return {
            "processing_time_ms": self.processing_time_ms,
            "bytes_processed": self.bytes_processed,
            "tokens_consumed": self.tokens_consumed,
            "groups_processed": self.groups_processed,
            "strings_processed": self.strings_processed,
        }
