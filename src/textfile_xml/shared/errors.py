"""Error taxonomy for reading and writing text file XML documents.

Every failure the reader or writer can report is one of the exceptions below.
They are raised inside the core and converted into failed result objects at
the public API boundary, so callers of ``TextFileXmlStream`` never see them
raised.
"""

from enum import Enum, auto
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Categories of read and write failures."""

    CHANNEL_OPEN = auto()
    CHANNEL_IO = auto()
    STRUCTURE_MISMATCH = auto()
    MALFORMED_INPUT = auto()
    UNEXPECTED_END_OF_INPUT = auto()
    MISSING_ATTRIBUTE = auto()
    INVALID_INTEGER_ATTRIBUTE = auto()
    OUT_OF_ORDER_INDEX = auto()
    MISSING_CLOSE_TAG = auto()


class TextFileXmlError(Exception):
    """Base exception for all text file XML errors."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        position: Optional[Dict[str, int]] = None,
        **details: Any
    ) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        self.details = details


class ChannelError(TextFileXmlError):
    """Base exception for byte channel failures."""

    kind = ErrorKind.CHANNEL_IO


class ChannelOpenError(ChannelError):
    """The input or output channel could not be opened."""

    kind = ErrorKind.CHANNEL_OPEN


class ChannelIOError(ChannelError):
    """Reading from or writing to an open channel failed."""

    kind = ErrorKind.CHANNEL_IO


class StructureMismatchError(TextFileXmlError):
    """A different element was found where a specific one was required."""

    kind = ErrorKind.STRUCTURE_MISMATCH

    def __init__(
        self,
        expected: str,
        actual: Optional[str],
        message: Optional[str] = None,
        position: Optional[Dict[str, int]] = None
    ) -> None:
        super().__init__(
            message or f"Invalid XML: expected tag <{expected}>, got <{actual}>",
            position,
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class RootElementNotFoundError(StructureMismatchError):
    """The document does not start with the ``<strings>`` root element."""

    def __init__(
        self,
        actual: Optional[str] = None,
        position: Optional[Dict[str, int]] = None
    ) -> None:
        super().__init__(
            "strings",
            actual,
            message="Unable to find root <strings> element",
            position=position,
        )


class MalformedInputError(TextFileXmlError):
    """The tokenizer reported that the input is not well-formed XML."""

    kind = ErrorKind.MALFORMED_INPUT

    def __init__(self, reason: str, position: Optional[Dict[str, int]] = None) -> None:
        super().__init__(f"Invalid XML: {reason}", position, reason=reason)
        self.reason = reason


class UnexpectedEndOfInputError(TextFileXmlError):
    """The input ended before the required structure was complete."""

    kind = ErrorKind.UNEXPECTED_END_OF_INPUT

    def __init__(self, position: Optional[Dict[str, int]] = None) -> None:
        super().__init__("Invalid XML: unexpected end of file", position)


class MissingAttributeError(TextFileXmlError):
    """A required ``id`` attribute is absent."""

    kind = ErrorKind.MISSING_ATTRIBUTE

    def __init__(
        self,
        element: str,
        attribute: str = "id",
        position: Optional[Dict[str, int]] = None
    ) -> None:
        label = element.capitalize()
        super().__init__(
            f"{label} does not have an ID attribute",
            position,
            element=element,
            attribute=attribute,
        )
        self.element = element
        self.attribute = attribute


class InvalidIntegerAttributeError(TextFileXmlError):
    """An ``id`` attribute cannot be parsed as an integer."""

    kind = ErrorKind.INVALID_INTEGER_ATTRIBUTE

    def __init__(
        self,
        element: str,
        value: str,
        position: Optional[Dict[str, int]] = None
    ) -> None:
        label = element.capitalize()
        super().__init__(
            f"{label} ID is not an integer: {value}",
            position,
            element=element,
            value=value,
        )
        self.element = element
        self.value = value


class OutOfOrderIndexError(TextFileXmlError):
    """A string's declared index does not match its position in the group."""

    kind = ErrorKind.OUT_OF_ORDER_INDEX

    def __init__(
        self,
        group_id: int,
        expected: int,
        actual: int,
        position: Optional[Dict[str, int]] = None
    ) -> None:
        super().__init__(
            f"Strings in group {group_id} are not ordered properly",
            position,
            group_id=group_id,
            expected=expected,
            actual=actual,
        )
        self.group_id = group_id
        self.expected = expected
        self.actual = actual


class MissingCloseTagError(TextFileXmlError):
    """The end element for an open tag was never found."""

    kind = ErrorKind.MISSING_CLOSE_TAG

    def __init__(self, tag: str, position: Optional[Dict[str, int]] = None) -> None:
        super().__init__(f"Invalid XML: end element </{tag}> not found", position, tag=tag)
        self.tag = tag
