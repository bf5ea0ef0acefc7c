"""Document model for text resource files.

Key Components:
    TextFile: Root document with name, index-with-counts flag and groups
    TextGroup: Integer-identified group of zero-indexed strings
"""

from .textfile import TextFile, TextGroup

__all__ = [
    "TextFile",
    "TextGroup",
]
