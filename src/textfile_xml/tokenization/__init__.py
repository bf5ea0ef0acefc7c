"""XML token reading and writing.

This module provides the pull-based token stream consumed by the reader and
the streaming writer used by the encoder.

Key Components:
    XMLTokenStream: Lazy token sequence with a current-token cursor
    Token: Single XML token with name, value, attributes and position
    TokenType: Enumeration of all token types
    TokenPosition: Line, column and byte offset of a token
    XMLTokenWriter: Element/attribute/characters writer with auto formatting
"""

from .tokenizer import (
    DEFAULT_CHUNK_SIZE,
    Token,
    TokenPosition,
    TokenType,
    XMLTokenStream,
)
from .writer import XMLTokenWriter

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "Token",
    "TokenPosition",
    "TokenType",
    "XMLTokenStream",
    "XMLTokenWriter",
]
