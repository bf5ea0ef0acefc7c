"""Public read/write API with progressive disclosure.

Level 1 is the module functions ``read_file``, ``read_bytes``, ``write_file``
and ``write_bytes``. Level 2 is ``TextFileXmlStream``, which carries a
configuration and an error sink across calls. Neither level raises for
malformed documents or channel failures: the outcome is always a result
object with ``success``, diagnostics and metrics.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from textfile_xml.channel import BufferChannel, ChannelMode, ChannelSource, as_channel
from textfile_xml.model import TextFile
from textfile_xml.shared import (
    ChannelIOError,
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    ErrorKind,
    ErrorSink,
    PerformanceMetrics,
    StreamConfig,
    TextFileXmlError,
    get_logger,
)
from textfile_xml.stream import DocumentReader, DocumentWriter
from textfile_xml.tokenization import XMLTokenStream, XMLTokenWriter

MS_PER_SECOND = 1000


@dataclass
class ReadResult:
    """Outcome of reading one document.

    ``document`` is only set when ``success`` is True; after a failure no
    partially read document is returned.
    """

    document: Optional[TextFile] = None
    success: bool = True
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    error: Optional[TextFileXmlError] = None
    correlation_id: Optional[str] = None
    source: Optional[str] = None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Kind of the error that aborted the read, if any."""
        return self.error.kind if self.error else None

    @property
    def has_errors(self) -> bool:
        """Check if any ERROR diagnostic was recorded."""
        return any(d.severity is DiagnosticSeverity.ERROR for d in self.diagnostics)

    def summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the read."""
        return {
            "source": self.source,
            "success": self.success,
            "error_kind": self.error_kind.name if self.error_kind else None,
            "name": self.document.name if self.document else None,
            "group_count": self.document.group_count if self.document else 0,
            "string_count": self.document.string_count if self.document else 0,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "performance": self.performance.to_dict(),
        }


@dataclass
class WriteResult:
    """Outcome of writing one document.

    ``data`` holds the serialized bytes when the target was in memory.
    """

    success: bool = True
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    error: Optional[TextFileXmlError] = None
    correlation_id: Optional[str] = None
    target: Optional[str] = None
    data: Optional[bytes] = None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Kind of the error that aborted the write, if any."""
        return self.error.kind if self.error else None

    @property
    def has_errors(self) -> bool:
        """Check if any ERROR diagnostic was recorded."""
        return any(d.severity is DiagnosticSeverity.ERROR for d in self.diagnostics)

    def summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the write."""
        return {
            "target": self.target,
            "success": self.success,
            "error_kind": self.error_kind.name if self.error_kind else None,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "performance": self.performance.to_dict(),
        }


class TextFileXmlStream:
    """Configured reader/writer for ``<strings>`` XML documents.

    Each call acquires its channel, works on its own token stream or writer
    and releases the channel before returning. Nothing but usage counters is
    kept between calls.

    Examples:
        >>> stream = TextFileXmlStream()
        >>> result = stream.read(b'<strings name="ui"><group id="0"/></strings>')
        >>> result.document.name
        'ui'
        >>> stream.write(result.document, "ui.xml").success
        True
    """

    def __init__(
        self,
        config: Optional[StreamConfig] = None,
        error_sink: Optional[ErrorSink] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the stream.

        Args:
            config: Stream configuration (defaults to ``StreamConfig.default()``)
            error_sink: Receiver for error messages; defaults to the package logger
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or StreamConfig.default()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "textfile_xml_stream")
        self.error_sink = error_sink

        self._read_count = 0
        self._write_count = 0
        self._failure_count = 0

    @property
    def statistics(self) -> Dict[str, int]:
        """Usage counters across all calls on this instance."""
        return {
            "read_count": self._read_count,
            "write_count": self._write_count,
            "failure_count": self._failure_count,
        }

    def read(
        self,
        source: ChannelSource,
        correlation_id_override: Optional[str] = None
    ) -> ReadResult:
        """Read a document.

        Args:
            source: Channel, path, bytes or binary file object to read from
            correlation_id_override: Optional correlation ID for this call

        Returns:
            ReadResult with the document on success, diagnostics on failure
        """
        start_time = time.time()
        correlation_id = correlation_id_override or self.correlation_id
        logger = self.logger.bind(correlation_id)
        channel = as_channel(source)
        result = ReadResult(correlation_id=correlation_id, source=channel.describe())
        self._read_count += 1

        logger.info("Starting read", extra={"channel": result.source})

        stream: Optional[XMLTokenStream] = None
        try:
            with channel.open(ChannelMode.READ) as handle:
                stream = XMLTokenStream(
                    handle,
                    chunk_size=self.config.reader.chunk_size,
                    encoding=self.config.reader.encoding,
                )
                document = DocumentReader(stream, correlation_id).read()
        except TextFileXmlError as e:
            self._fail(result, e, "document_reader", logger)
        except OSError as e:
            self._fail(
                result,
                ChannelIOError(f"I/O error on XML file: {e.strerror or e}"),
                "document_reader",
                logger,
            )
        else:
            result.document = document
            result.performance.groups_processed = document.group_count
            result.performance.strings_processed = document.string_count

        if stream is not None:
            result.performance.bytes_processed = stream.bytes_read
            result.performance.tokens_consumed = stream.tokens_read
        result.performance.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND

        logger.info(
            "Read completed" if result.success else "Read failed",
            extra={
                "channel": result.source,
                "success": result.success,
                "group_count": result.performance.groups_processed,
                "processing_time_ms": result.performance.processing_time_ms,
            }
        )
        return result

    def write(
        self,
        document: TextFile,
        target: ChannelSource,
        correlation_id_override: Optional[str] = None
    ) -> WriteResult:
        """Write a document.

        Args:
            document: Document to serialize; it is not modified
            target: Channel, path or binary file object to write to
            correlation_id_override: Optional correlation ID for this call

        Returns:
            WriteResult describing the outcome
        """
        start_time = time.time()
        correlation_id = correlation_id_override or self.correlation_id
        logger = self.logger.bind(correlation_id)
        channel = as_channel(target)
        result = WriteResult(correlation_id=correlation_id, target=channel.describe())
        self._write_count += 1
        writer_config = self.config.writer

        logger.info("Starting write", extra={"channel": result.target})

        writer: Optional[XMLTokenWriter] = None
        try:
            with channel.open(ChannelMode.WRITE) as handle:
                writer = XMLTokenWriter(
                    handle,
                    encoding=writer_config.encoding,
                    auto_formatting=writer_config.auto_formatting,
                    indent=writer_config.indent,
                )
                DocumentWriter(
                    writer,
                    write_declaration=writer_config.write_declaration,
                    correlation_id=correlation_id,
                ).write(document)
        except TextFileXmlError as e:
            self._fail(result, e, "document_writer", logger)
        except OSError as e:
            self._fail(
                result,
                ChannelIOError(f"I/O error on XML file: {e.strerror or e}"),
                "document_writer",
                logger,
            )
        else:
            result.performance.groups_processed = document.group_count
            result.performance.strings_processed = document.string_count
            if isinstance(channel, BufferChannel):
                result.data = channel.data

        if writer is not None:
            result.performance.bytes_processed = writer.bytes_written
        result.performance.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND

        logger.info(
            "Write completed" if result.success else "Write failed",
            extra={
                "channel": result.target,
                "success": result.success,
                "bytes": result.performance.bytes_processed,
                "processing_time_ms": result.performance.processing_time_ms,
            }
        )
        return result

    def _fail(
        self,
        result: Union[ReadResult, WriteResult],
        error: TextFileXmlError,
        component: str,
        logger: CorrelationLogger,
    ) -> None:
        """Record ``error`` on the result and report it once to the error sink."""
        result.success = False
        result.error = error
        self._failure_count += 1
        if self.config.enable_diagnostics:
            result.diagnostics.append(
                DiagnosticEntry.from_error(error, component, result.correlation_id)
            )
        sink = self.error_sink if self.error_sink is not None else logger
        sink.error(error.message)


def read_file(
    file_path: Union[str, Path],
    config: Optional[StreamConfig] = None,
    correlation_id: Optional[str] = None
) -> ReadResult:
    """Read a document from a file.

    Examples:
        >>> result = read_file("strings.xml")
        >>> result.success
        True
    """
    return TextFileXmlStream(config, correlation_id=correlation_id).read(Path(file_path))


def read_bytes(
    data: bytes,
    config: Optional[StreamConfig] = None,
    correlation_id: Optional[str] = None
) -> ReadResult:
    """Read a document from bytes in memory.

    Examples:
        >>> result = read_bytes(b'<strings><group id="0"/></strings>')
        >>> result.document.index_with_counts
        True
    """
    return TextFileXmlStream(config, correlation_id=correlation_id).read(BufferChannel(data))


def write_file(
    document: TextFile,
    file_path: Union[str, Path],
    config: Optional[StreamConfig] = None,
    correlation_id: Optional[str] = None
) -> WriteResult:
    """Write a document to a file."""
    return TextFileXmlStream(config, correlation_id=correlation_id).write(
        document, Path(file_path)
    )


def write_bytes(
    document: TextFile,
    config: Optional[StreamConfig] = None,
    correlation_id: Optional[str] = None
) -> WriteResult:
    """Serialize a document in memory; the bytes are in ``result.data``."""
    return TextFileXmlStream(config, correlation_id=correlation_id).write(
        document, BufferChannel()
    )
