"""Tests for the open/close tag matcher."""

import io

import pytest

from textfile_xml.shared.errors import (
    MalformedInputError,
    MissingCloseTagError,
    StructureMismatchError,
    UnexpectedEndOfInputError,
)
from textfile_xml.stream import TagMatch, TagMatcher
from textfile_xml.tokenization import TokenType, XMLTokenStream


def matcher_for(data: bytes) -> TagMatcher:
    return TagMatcher(XMLTokenStream(io.BytesIO(data)))


class TestExpectOpenTag:
    """Test the three outcomes of expect_open_tag."""

    def test_found_after_skipping(self):
        """Test that prolog tokens and whitespace are skipped."""
        matcher = matcher_for(
            b'<?xml version="1.0"?>\n<!DOCTYPE strings>\n<!-- c -->\n<?pi x?>\n<strings/>'
        )

        assert matcher.expect_open_tag("strings") is TagMatch.FOUND
        assert matcher.stream.is_start_element("strings")

    def test_found_without_consuming(self):
        """Test that the current start element satisfies the call."""
        matcher = matcher_for(b"<strings><group/></strings>")
        matcher.expect_open_tag("strings")
        tokens_before = matcher.stream.tokens_read

        assert matcher.expect_open_tag("strings") is TagMatch.FOUND
        assert matcher.stream.tokens_read == tokens_before

    def test_not_present_on_end_element(self):
        """Test that an end element means the tag is absent."""
        matcher = matcher_for(b"<strings>\n  </strings>")
        matcher.expect_open_tag("strings")

        assert matcher.expect_open_tag("group") is TagMatch.NOT_PRESENT
        assert matcher.stream.is_end_element("strings")

    def test_not_present_on_end_document(self):
        """Test that the end of the document means the tag is absent."""
        matcher = matcher_for(b"<strings/>")
        matcher.expect_open_tag("strings")
        matcher.expect_close_tag("strings")

        assert matcher.expect_open_tag("group") is TagMatch.NOT_PRESENT
        assert matcher.stream.current.type is TokenType.END_DOCUMENT

    def test_structure_mismatch(self):
        """Test that a different start element is an error naming both tags."""
        matcher = matcher_for(b"<strings><item/></strings>")
        matcher.expect_open_tag("strings")

        with pytest.raises(StructureMismatchError) as exc_info:
            matcher.expect_open_tag("group")

        assert exc_info.value.expected == "group"
        assert exc_info.value.actual == "item"
        assert exc_info.value.message == "Invalid XML: expected tag <group>, got <item>"
        assert exc_info.value.position["line"] == 1

    def test_malformed_input(self):
        """Test that an invalid token carries the tokenizer message."""
        matcher = matcher_for(b"<strings><group></strings>")
        matcher.expect_open_tag("strings")
        matcher.expect_open_tag("group")

        with pytest.raises(MalformedInputError, match="mismatched tag"):
            matcher.expect_open_tag("string")

    def test_unexpected_end_of_input(self):
        """Test that running out of input is an error."""
        matcher = matcher_for(b"<strings>\n")
        matcher.expect_open_tag("strings")

        with pytest.raises(UnexpectedEndOfInputError):
            matcher.expect_open_tag("group")

    def test_empty_input(self):
        """Test empty input."""
        with pytest.raises(UnexpectedEndOfInputError):
            matcher_for(b"").expect_open_tag("strings")

    def test_loop_over_repeated_children(self):
        """Test driving a zero-or-more loop with expect_open_tag."""
        matcher = matcher_for(b"<r><item/><item/><item/></r>")
        matcher.expect_open_tag("r")

        count = 0
        while matcher.expect_open_tag("item") is TagMatch.FOUND:
            count += 1
            matcher.expect_close_tag("item")

        assert count == 3


class TestExpectCloseTag:
    """Test expect_close_tag."""

    def test_already_on_close_tag(self):
        """Test that the current end element satisfies the call."""
        matcher = matcher_for(b"<a></a>")
        matcher.expect_open_tag("a")
        matcher.stream.read_next()
        tokens_before = matcher.stream.tokens_read

        matcher.expect_close_tag("a")

        assert matcher.stream.tokens_read == tokens_before

    def test_skips_nested_structure(self):
        """Test that intervening elements of any depth are skipped."""
        matcher = matcher_for(b"<a><b><c>text</c><b/></b><d/></a><!-- tail -->")
        matcher.expect_open_tag("a")

        matcher.expect_close_tag("a")

        assert matcher.stream.is_end_element("a")

    def test_missing_close_tag(self):
        """Test that running out of input is a missing close tag."""
        matcher = matcher_for(b"<a><b>")
        matcher.expect_open_tag("a")

        with pytest.raises(MissingCloseTagError) as exc_info:
            matcher.expect_close_tag("a")

        assert exc_info.value.tag == "a"
        assert exc_info.value.message == "Invalid XML: end element </a> not found"

    def test_invalid_tokens_are_skipped(self):
        """Test that the close tag scan does not stop on invalid input."""
        matcher = matcher_for(b"<a><b></a>")
        matcher.expect_open_tag("a")

        with pytest.raises(MissingCloseTagError):
            matcher.expect_close_tag("a")
