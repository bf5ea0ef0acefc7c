"""Command-line interface module for text resource XML files.

This module provides the ``textfile-xml`` tool for validating files,
rewriting them in canonical form and converting them to and from JSON.
"""

from .main import main

__all__ = ["main"]
