"""Encoding of ``TextFile`` documents to XML tokens."""

from typing import Optional

from textfile_xml.model import TextFile, TextGroup
from textfile_xml.shared.logging import get_logger
from textfile_xml.tokenization import XMLTokenWriter

from .decoder import GROUP_TAG, ROOT_TAG, STRING_TAG


class GroupEncoder:
    """Writes one group and its strings."""

    def __init__(self, writer: XMLTokenWriter) -> None:
        self.writer = writer

    def encode(self, group: TextGroup) -> None:
        writer = self.writer
        writer.write_start_element(GROUP_TAG)
        writer.write_attribute("id", str(group.id))
        for index, text in enumerate(group.strings):
            writer.write_start_element(STRING_TAG)
            writer.write_attribute("id", str(index))
            writer.write_characters(text)
            writer.write_end_element()
        writer.write_end_element()


class DocumentWriter:
    """Writes a complete document, attributes and groups in canonical order."""

    def __init__(
        self,
        writer: XMLTokenWriter,
        write_declaration: bool = True,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.writer = writer
        self.write_declaration = write_declaration
        self.group_encoder = GroupEncoder(writer)
        self.logger = get_logger(__name__, correlation_id, "document_writer")

    def write(self, document: TextFile) -> None:
        """Emit ``document``; the document itself is not modified."""
        writer = self.writer
        if self.write_declaration:
            writer.write_start_document()
        writer.write_start_element(ROOT_TAG)
        writer.write_attribute("name", document.name)
        writer.write_attribute("indexWithCounts", "true" if document.index_with_counts else "false")

        for group in document.groups:
            self.group_encoder.encode(group)

        writer.write_end_element()
        writer.write_end_document()
        self.logger.debug(
            "Encoded document",
            extra={"group_count": document.group_count, "bytes": writer.bytes_written},
        )
