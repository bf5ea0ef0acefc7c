"""Tag matching state machine over an XML token stream.

``expect_open_tag`` has three outcomes: the tag was found, the tag is absent
because the enclosing element ended (``TagMatch.NOT_PRESENT``), or the input
is broken (an exception). Callers loop on it to read zero or more repeated
children; ``NOT_PRESENT`` ends such a loop without reporting anything.
"""

from enum import Enum, auto
from typing import Optional

from textfile_xml.shared.errors import (
    MalformedInputError,
    MissingCloseTagError,
    StructureMismatchError,
    UnexpectedEndOfInputError,
)
from textfile_xml.shared.logging import get_logger
from textfile_xml.tokenization import TokenType, XMLTokenStream

_SKIPPED_TOKENS = frozenset({
    TokenType.START_DOCUMENT,
    TokenType.COMMENT,
    TokenType.DTD,
    TokenType.CHARACTERS,
    TokenType.ENTITY_REFERENCE,
    TokenType.PROCESSING_INSTRUCTION,
})


class TagMatch(Enum):
    """Non-error outcomes of ``expect_open_tag``."""

    FOUND = auto()
    NOT_PRESENT = auto()


class TagMatcher:
    """Advances a token stream until a required open or close tag is reached."""

    def __init__(self, stream: XMLTokenStream, correlation_id: Optional[str] = None) -> None:
        self.stream = stream
        self.logger = get_logger(__name__, correlation_id, "tag_matcher")

    def expect_open_tag(self, tag: str) -> TagMatch:
        """Move to the next ``<tag>`` start element.

        Succeeds at once if the current token already is that start element.
        Otherwise skips document start, comments, DTDs, character data, entity
        references and processing instructions.

        Returns:
            FOUND when positioned on ``<tag>``; NOT_PRESENT when an end element
            or the end of the document is reached first

        Raises:
            StructureMismatchError: If a different start element is found
            MalformedInputError: If the tokenizer reports invalid XML
            UnexpectedEndOfInputError: If the input runs out
        """
        stream = self.stream
        if stream.is_start_element(tag):
            return TagMatch.FOUND

        while not stream.at_end:
            token = stream.read_next()
            if token is None:
                break
            if token.type in _SKIPPED_TOKENS:
                continue
            if token.type is TokenType.INVALID:
                raise MalformedInputError(token.value, stream.position())
            if token.type in (TokenType.END_DOCUMENT, TokenType.END_ELEMENT):
                self.logger.debug(
                    f"<{tag}> not present",
                    extra={"terminator": token.type.name, "element": token.name},
                )
                return TagMatch.NOT_PRESENT
            if token.name == tag:
                return TagMatch.FOUND
            raise StructureMismatchError(tag, token.name, position=stream.position())

        raise UnexpectedEndOfInputError(stream.position())

    def expect_close_tag(self, tag: str) -> None:
        """Move to the next ``</tag>`` end element.

        Everything in between is skipped, including other elements, whatever
        their nesting.

        Raises:
            MissingCloseTagError: If the input ends before ``</tag>``
        """
        stream = self.stream
        if stream.is_end_element(tag):
            return

        while not stream.at_end:
            token = stream.read_next()
            if token is None:
                break
            if token.type is TokenType.END_ELEMENT and token.name == tag:
                return

        raise MissingCloseTagError(tag, stream.position())
