"""Reading and writing ``<strings>`` documents over XML token streams.

Key Components:
    TagMatcher: Open/close tag state machine with three-way outcome
    TagMatch: FOUND / NOT_PRESENT results of open tag matching
    GroupDecoder: Builds a TextGroup from a ``<group>`` subtree
    DocumentReader: Reads a complete TextFile
    GroupEncoder: Writes a TextGroup
    DocumentWriter: Writes a complete TextFile
"""

from .decoder import (
    GROUP_TAG,
    ROOT_TAG,
    STRING_TAG,
    DocumentReader,
    GroupDecoder,
    parse_flag,
    parse_integer,
)
from .encoder import DocumentWriter, GroupEncoder
from .matcher import TagMatch, TagMatcher

__all__ = [
    "GROUP_TAG",
    "ROOT_TAG",
    "STRING_TAG",
    "DocumentReader",
    "DocumentWriter",
    "GroupDecoder",
    "GroupEncoder",
    "TagMatch",
    "TagMatcher",
    "parse_flag",
    "parse_integer",
]
