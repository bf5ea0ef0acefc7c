"""Decoding of ``<strings>`` documents from an XML token stream.

Grammar::

    <strings name="..."? indexWithCounts="true|false"?>
      <group id="INTEGER">
        <string id="INTEGER">TEXT</string> *
      </group> *
    </strings>
"""

import re
from typing import Dict, Optional

from textfile_xml.model import TextFile, TextGroup
from textfile_xml.shared.errors import (
    InvalidIntegerAttributeError,
    MissingAttributeError,
    OutOfOrderIndexError,
    RootElementNotFoundError,
    StructureMismatchError,
)
from textfile_xml.shared.logging import get_logger
from textfile_xml.tokenization import XMLTokenStream

from .matcher import TagMatch, TagMatcher

ROOT_TAG = "strings"
GROUP_TAG = "group"
STRING_TAG = "string"

_INTEGER_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*")


def parse_integer(value: str) -> Optional[int]:
    """Parse a decimal integer attribute value.

    Surrounding whitespace and a leading sign are accepted, nothing else.

    Returns:
        The integer, or None if the value is not an integer
    """
    if not _INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def parse_flag(value: str) -> bool:
    """Interpret an ``indexWithCounts`` value: anything but ``false`` is true."""
    return value != "false"


class GroupDecoder:
    """Builds one ``TextGroup`` from a ``<group>`` subtree."""

    def __init__(self, matcher: TagMatcher, correlation_id: Optional[str] = None) -> None:
        self.matcher = matcher
        self.stream = matcher.stream
        self.logger = get_logger(__name__, correlation_id, "group_decoder")

    def decode(self) -> TextGroup:
        """Decode the group whose start element is the current token.

        The strings are read up to, but not including, the ``</group>`` end
        element, which is left for the caller to consume.

        Raises:
            MissingAttributeError: If the group or a string has no ``id``
            InvalidIntegerAttributeError: If an ``id`` is not an integer
            OutOfOrderIndexError: If a string ``id`` differs from its position
            TextFileXmlError: Any tag matching error
        """
        group = TextGroup(self._read_group_id())

        while self.matcher.expect_open_tag(STRING_TAG) is TagMatch.FOUND:
            index = self._read_id(STRING_TAG)
            if index != group.size:
                raise OutOfOrderIndexError(
                    group.id, group.size, index, position=self.stream.position()
                )
            group.add(self.stream.read_element_text())
            self.matcher.expect_close_tag(STRING_TAG)

        self.logger.debug(
            "Decoded group",
            extra={"group_id": group.id, "string_count": group.size},
        )
        return group

    def _read_group_id(self) -> int:
        group_id = self._read_id(GROUP_TAG)
        if group_id < 0:
            raise InvalidIntegerAttributeError(
                GROUP_TAG, self.stream.attributes["id"], position=self.stream.position()
            )
        return group_id

    def _read_id(self, element: str) -> int:
        attributes = self.stream.attributes
        if "id" not in attributes:
            raise MissingAttributeError(element, position=self.stream.position())
        value = attributes["id"]
        parsed = parse_integer(value)
        if parsed is None:
            raise InvalidIntegerAttributeError(element, value, position=self.stream.position())
        return parsed


class DocumentReader:
    """Reads a complete ``TextFile`` from a token stream."""

    def __init__(self, stream: XMLTokenStream, correlation_id: Optional[str] = None) -> None:
        self.stream = stream
        self.matcher = TagMatcher(stream, correlation_id)
        self.group_decoder = GroupDecoder(self.matcher, correlation_id)
        self.logger = get_logger(__name__, correlation_id, "document_reader")

    def read(self) -> TextFile:
        """Read the document.

        Returns:
            The fully populated document

        Raises:
            RootElementNotFoundError: If the document is not rooted at ``<strings>``
            TextFileXmlError: The first error found in the document
        """
        self._expect_root()
        document = TextFile()
        self._read_root_attributes(document, self.stream.attributes)

        while self.matcher.expect_open_tag(GROUP_TAG) is TagMatch.FOUND:
            document.add_group(self.group_decoder.decode())
            self.matcher.expect_close_tag(GROUP_TAG)

        self.matcher.expect_close_tag(ROOT_TAG)
        return document

    def _expect_root(self) -> None:
        try:
            found = self.matcher.expect_open_tag(ROOT_TAG)
        except StructureMismatchError as e:
            raise RootElementNotFoundError(e.actual, e.position) from e
        if found is not TagMatch.FOUND:
            raise RootElementNotFoundError(position=self.stream.position())

    @staticmethod
    def _read_root_attributes(document: TextFile, attributes: Dict[str, str]) -> None:
        if "name" in attributes:
            document.name = attributes["name"]
        if "indexWithCounts" in attributes:
            document.index_with_counts = parse_flag(attributes["indexWithCounts"])
