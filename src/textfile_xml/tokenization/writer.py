"""Streaming XML writer with optional auto formatting.

Output is written to a binary stream as it is produced. Start tags stay open
until content, a child, or the end tag arrives, so attributes can be added
right after ``write_start_element``. With auto formatting, each element
starts on its own line and elements without content are self-closed.
"""

import codecs
from typing import BinaryIO, List
from xml.sax.saxutils import escape, quoteattr

# Carriage returns would otherwise be normalised away by any XML reader
_TEXT_ENTITIES = {"\r": "&#13;"}


class _OpenElement:
    __slots__ = ("name", "has_children", "has_text")

    def __init__(self, name: str) -> None:
        self.name = name
        self.has_children = False
        self.has_text = False


class XMLTokenWriter:
    """Writes XML elements, attributes and character data to a binary stream."""

    def __init__(
        self,
        sink: BinaryIO,
        encoding: str = "UTF-8",
        auto_formatting: bool = False,
        indent: int = 4,
    ) -> None:
        """Initialize the writer.

        Args:
            sink: Binary stream receiving the encoded output
            encoding: Output encoding, also named in the XML declaration
            auto_formatting: Put elements on separate, indented lines
            indent: Spaces per nesting level when auto formatting
        """
        if indent < 0:
            raise ValueError("indent must be >= 0")

        self._sink = sink
        self.encoding = encoding
        self.auto_formatting = auto_formatting
        self.indent = indent
        self._encoder = codecs.getincrementalencoder(encoding)(errors="xmlcharrefreplace")
        self._stack: List[_OpenElement] = []
        self._start_tag_open = False
        self._wrote_anything = False
        self.bytes_written = 0

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack)

    def write_start_document(self) -> None:
        """Write the XML declaration."""
        self._write(f'<?xml version="1.0" encoding="{self.encoding}"?>')

    def write_end_document(self) -> None:
        """Close every open element and flush the encoder."""
        while self._stack:
            self.write_end_element()
        if self.auto_formatting:
            self._write("\n")
        tail = self._encoder.encode("", final=True)
        if tail:
            self._sink.write(tail)
            self.bytes_written += len(tail)

    def write_start_element(self, name: str) -> None:
        """Open an element; attributes may follow until any other write."""
        self._close_start_tag()
        if self._stack:
            self._stack[-1].has_children = True
        if self.auto_formatting and self._wrote_anything:
            parent_has_text = bool(self._stack) and self._stack[-1].has_text
            if not parent_has_text:
                self._newline()
        self._write(f"<{name}")
        self._stack.append(_OpenElement(name))
        self._start_tag_open = True

    def write_attribute(self, name: str, value: str) -> None:
        """Add an attribute to the element opened last.

        Raises:
            ValueError: If no start tag is open
        """
        if not self._start_tag_open:
            raise ValueError(f"Attribute {name!r} written outside a start tag")
        self._write(f" {name}={quoteattr(value)}")

    def write_characters(self, text: str) -> None:
        """Write escaped character data inside the current element."""
        if not self._stack:
            raise ValueError("Character data written outside the root element")
        self._close_start_tag()
        self._stack[-1].has_text = True
        self._write(escape(text, _TEXT_ENTITIES))

    def write_end_element(self) -> None:
        """Close the element opened last."""
        if not self._stack:
            raise ValueError("No open element to close")
        element = self._stack.pop()
        if self._start_tag_open:
            self._start_tag_open = False
            self._write("/>")
            return
        if self.auto_formatting and element.has_children and not element.has_text:
            self._newline()
        self._write(f"</{element.name}>")

    def _close_start_tag(self) -> None:
        if self._start_tag_open:
            self._start_tag_open = False
            self._write(">")

    def _newline(self) -> None:
        self._write("\n" + " " * (self.indent * len(self._stack)))

    def _write(self, text: str) -> None:
        data = self._encoder.encode(text)
        self._sink.write(data)
        self.bytes_written += len(data)
        self._wrote_anything = True
