"""Pull-based XML token stream over the expat push parser.

This module turns a binary stream into a lazy sequence of XML tokens. Bytes
are fed to expat one chunk at a time, and the tokens reported for that chunk
are handed out one by one through ``read_next``, so a consumer can stop as
soon as it has seen what it needs.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import BinaryIO, Deque, Dict, Iterator, List, Optional
from xml.parsers import expat

from textfile_xml.shared.errors import (
    ChannelIOError,
    MalformedInputError,
    UnexpectedEndOfInputError,
)
from textfile_xml.shared.logging import get_logger

DEFAULT_CHUNK_SIZE = 8192

# Errors expat raises on the final feed when the input simply stopped early
_TRUNCATION_ERROR_CODES = frozenset(
    expat.errors.codes[message]
    for message in (
        expat.errors.XML_ERROR_NO_ELEMENTS,
        expat.errors.XML_ERROR_UNCLOSED_TOKEN,
        expat.errors.XML_ERROR_PARTIAL_CHAR,
        expat.errors.XML_ERROR_UNCLOSED_CDATA_SECTION,
    )
)


class TokenType(Enum):
    """XML token types produced by the token stream."""

    START_DOCUMENT = auto()
    END_DOCUMENT = auto()
    START_ELEMENT = auto()
    END_ELEMENT = auto()
    CHARACTERS = auto()
    COMMENT = auto()
    DTD = auto()
    ENTITY_REFERENCE = auto()
    PROCESSING_INSTRUCTION = auto()
    INVALID = auto()


@dataclass
class TokenPosition:
    """Position information for XML tokens."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column, "offset": self.offset}


@dataclass
class Token:
    """Single XML token.

    ``name`` is set for element tokens, the DTD name, entity name and PI
    target; ``value`` holds character data, comment text, PI data or the
    tokenizer's message for ``INVALID`` tokens.
    """

    type: TokenType
    name: str = ""
    value: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    position: Optional[TokenPosition] = None

    @property
    def is_start_element(self) -> bool:
        return self.type is TokenType.START_ELEMENT

    @property
    def is_end_element(self) -> bool:
        return self.type is TokenType.END_ELEMENT


class XMLTokenStream:
    """Lazy XML token stream with a current-token cursor.

    The stream ends after ``END_DOCUMENT`` or ``INVALID`` has been read, or
    when the input runs out with the document still open; in that last case
    neither terminal token is produced.
    """

    def __init__(
        self,
        source: BinaryIO,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: Optional[str] = None,
    ) -> None:
        """Initialize the token stream.

        Args:
            source: Binary stream to read the document from
            chunk_size: Number of bytes fed to the parser at a time
            encoding: Optional override for the document's declared encoding
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")

        self._source = source
        self._chunk_size = chunk_size
        self._parser = expat.ParserCreate(encoding)
        self._parser.buffer_text = True
        self._parser.StartElementHandler = self._on_start_element
        self._parser.EndElementHandler = self._on_end_element
        self._parser.CharacterDataHandler = self._on_characters
        self._parser.CommentHandler = self._on_comment
        self._parser.ProcessingInstructionHandler = self._on_processing_instruction
        self._parser.StartDoctypeDeclHandler = self._on_doctype
        self._parser.SkippedEntityHandler = self._on_skipped_entity

        self._pending: Deque[Token] = deque(
            [Token(TokenType.START_DOCUMENT, position=TokenPosition(1, 1, 0))]
        )
        self._current: Optional[Token] = None
        self._source_drained = False
        self._terminated = False

        self.tokens_read = 0
        self.bytes_read = 0
        self.logger = get_logger(__name__, None, "token_stream")

    # Cursor inspection

    @property
    def current(self) -> Optional[Token]:
        """Most recently read token, or None before the first read and after the end."""
        return self._current

    @property
    def at_end(self) -> bool:
        """True once no further tokens can be produced."""
        if self._terminated:
            return True
        return self._source_drained and not self._pending

    @property
    def name(self) -> str:
        return self._current.name if self._current else ""

    @property
    def attributes(self) -> Dict[str, str]:
        return self._current.attributes if self._current else {}

    def is_start_element(self, name: Optional[str] = None) -> bool:
        """Check whether the current token is a start element, optionally named ``name``."""
        token = self._current
        if token is None or not token.is_start_element:
            return False
        return name is None or token.name == name

    def is_end_element(self, name: Optional[str] = None) -> bool:
        """Check whether the current token is an end element, optionally named ``name``."""
        token = self._current
        if token is None or not token.is_end_element:
            return False
        return name is None or token.name == name

    def position(self) -> Dict[str, int]:
        """Position of the current token, or the parser's position when there is none."""
        if self._current is not None and self._current.position is not None:
            return self._current.position.to_dict()
        return {
            "line": self._parser.CurrentLineNumber,
            "column": self._parser.CurrentColumnNumber + 1,
            "offset": max(self._parser.CurrentByteIndex, 0),
        }

    # Reading

    def read_next(self) -> Optional[Token]:
        """Advance to the next token.

        Returns:
            The new current token, or None if the stream has ended

        Raises:
            ChannelIOError: If reading from the source fails
        """
        if self._terminated:
            self._current = None
            return None

        while not self._pending:
            if self._source_drained:
                self._current = None
                return None
            self._feed_next_chunk()

        token = self._pending.popleft()
        self._current = token
        self.tokens_read += 1
        if token.type in (TokenType.END_DOCUMENT, TokenType.INVALID):
            self._terminated = True
            self._pending.clear()
        return token

    def read_element_text(self) -> str:
        """Read the text content of the current element.

        The current token must be a start element. On return the current token
        is the matching end element.

        Raises:
            MalformedInputError: If a child element or invalid XML is encountered
            UnexpectedEndOfInputError: If the input ends inside the element
        """
        if not self.is_start_element():
            raise MalformedInputError(
                "Expected a start element before reading text", self.position()
            )

        parts: List[str] = []
        while True:
            token = self.read_next()
            if token is None or token.type is TokenType.END_DOCUMENT:
                raise UnexpectedEndOfInputError(self.position())
            if token.type is TokenType.CHARACTERS:
                parts.append(token.value)
            elif token.type is TokenType.END_ELEMENT:
                return "".join(parts)
            elif token.type is TokenType.START_ELEMENT:
                raise MalformedInputError("Expected character data.", self.position())
            elif token.type is TokenType.INVALID:
                raise MalformedInputError(token.value, self.position())

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.read_next()
            if token is None:
                return
            yield token

    # Feeding the parser

    def _feed_next_chunk(self) -> None:
        try:
            chunk = self._source.read(self._chunk_size)
        except OSError as e:
            raise ChannelIOError(f"I/O error on XML file: {e.strerror or e}") from e

        final = not chunk
        self.bytes_read += len(chunk)
        try:
            self._parser.Parse(chunk, final)
        except expat.ExpatError as e:
            self._source_drained = True
            if final and e.code in _TRUNCATION_ERROR_CODES:
                self.logger.debug(
                    "Input ended inside the document",
                    extra={"reason": expat.ErrorString(e.code), "line": e.lineno},
                )
                return
            self._pending.append(
                Token(
                    TokenType.INVALID,
                    value=expat.ErrorString(e.code),
                    position=TokenPosition(max(e.lineno, 1), e.offset + 1, self.bytes_read),
                )
            )
            return
        except ValueError as e:
            # Raised by pyexpat for declared encodings it cannot decode
            self._source_drained = True
            self._pending.append(Token(TokenType.INVALID, value=str(e), position=self._here()))
            return

        if final:
            self._source_drained = True
            self._pending.append(Token(TokenType.END_DOCUMENT, position=self._here()))

    def _here(self) -> TokenPosition:
        return TokenPosition(
            max(self._parser.CurrentLineNumber, 1),
            self._parser.CurrentColumnNumber + 1,
            max(self._parser.CurrentByteIndex, 0),
        )

    def _on_start_element(self, name: str, attributes: Dict[str, str]) -> None:
        self._pending.append(
            Token(TokenType.START_ELEMENT, name=name, attributes=attributes, position=self._here())
        )

    def _on_end_element(self, name: str) -> None:
        self._pending.append(Token(TokenType.END_ELEMENT, name=name, position=self._here()))

    def _on_characters(self, data: str) -> None:
        self._pending.append(Token(TokenType.CHARACTERS, value=data, position=self._here()))

    def _on_comment(self, data: str) -> None:
        self._pending.append(Token(TokenType.COMMENT, value=data, position=self._here()))

    def _on_processing_instruction(self, target: str, data: str) -> None:
        self._pending.append(
            Token(TokenType.PROCESSING_INSTRUCTION, name=target, value=data, position=self._here())
        )

    def _on_doctype(
        self,
        doctype_name: str,
        system_id: Optional[str],
        public_id: Optional[str],
        has_internal_subset: bool,
    ) -> None:
        self._pending.append(Token(TokenType.DTD, name=doctype_name, position=self._here()))

    def _on_skipped_entity(self, entity_name: str, is_parameter_entity: bool) -> None:
        self._pending.append(
            Token(TokenType.ENTITY_REFERENCE, name=entity_name, position=self._here())
        )
