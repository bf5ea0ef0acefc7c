"""Tests for diagnostics and performance metrics."""

import pytest

from textfile_xml.shared.errors import OutOfOrderIndexError
from textfile_xml.shared.result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)


class TestDiagnosticEntry:
    """Test DiagnosticEntry creation and validation."""

    def test_valid_entry(self):
        """Test creating a valid diagnostic entry."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message="Something odd",
            component="document_reader",
        )

        assert entry.severity is DiagnosticSeverity.WARNING
        assert entry.position is None
        assert entry.timestamp > 0

    def test_empty_message_rejected(self):
        """Test that an empty message is rejected."""
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "", "reader")

    def test_empty_component_rejected(self):
        """Test that an empty component is rejected."""
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "Broken", "")

    def test_from_error(self):
        """Test building an entry from a raised error."""
        error = OutOfOrderIndexError(2, 0, 1, position={"line": 3, "column": 5, "offset": 40})
        entry = DiagnosticEntry.from_error(error, "document_reader", "req-9")

        assert entry.severity is DiagnosticSeverity.ERROR
        assert entry.message == "Strings in group 2 are not ordered properly"
        assert entry.position == {"line": 3, "column": 5, "offset": 40}
        assert entry.details["error_kind"] == "OUT_OF_ORDER_INDEX"
        assert entry.details["group_id"] == 2
        assert entry.correlation_id == "req-9"

    def test_to_dict(self):
        """Test dictionary conversion."""
        entry = DiagnosticEntry(DiagnosticSeverity.INFO, "Done", "writer")
        data = entry.to_dict()

        assert data["severity"] == "INFO"
        assert data["message"] == "Done"
        assert data["component"] == "writer"


class TestPerformanceMetrics:
    """Test PerformanceMetrics calculations."""

    def test_defaults(self):
        """Test that all counters start at zero."""
        metrics = PerformanceMetrics()

        assert metrics.processing_time_ms == 0.0
        assert metrics.bytes_processed == 0
        assert metrics.bytes_per_second == 0.0
        assert metrics.tokens_per_second == 0.0

    def test_rates(self):
        """Test throughput calculations."""
        metrics = PerformanceMetrics(
            processing_time_ms=500.0, bytes_processed=1000, tokens_consumed=50
        )

        assert metrics.bytes_per_second == 2000.0
        assert metrics.tokens_per_second == 100.0

    def test_to_dict(self):
        """Test dictionary conversion."""
        metrics = PerformanceMetrics(groups_processed=2, strings_processed=5)
        data = metrics.to_dict()

        assert data["groups_processed"] == 2
        assert data["strings_processed"] == 5
