"""Tests for the text file document model."""

import pytest

from textfile_xml.model import TextFile, TextGroup


class TestTextGroup:
    """Test TextGroup behaviour."""

    def test_empty_group(self):
        """Test a newly created group."""
        group = TextGroup(4)

        assert group.id == 4
        assert group.size == 0
        assert len(group) == 0
        assert list(group) == []

    def test_add_returns_index(self):
        """Test that add returns consecutive indices."""
        group = TextGroup(0)

        assert group.add("first") == 0
        assert group.add("") == 1
        assert group.add("third") == 2
        assert group.size == 3
        assert group[1] == ""
        assert group[2] == "third"

    def test_negative_id_rejected(self):
        """Test that group IDs must be non-negative."""
        with pytest.raises(ValueError, match="Group ID must be >= 0"):
            TextGroup(-1)

    def test_groups_do_not_share_strings(self):
        """Test that default string lists are independent."""
        first, second = TextGroup(0), TextGroup(1)
        first.add("x")

        assert second.size == 0


class TestTextFile:
    """Test TextFile behaviour."""

    def test_defaults(self):
        """Test default document values."""
        document = TextFile()

        assert document.name == ""
        assert document.index_with_counts is True
        assert document.group_count == 0
        assert document.string_count == 0

    def test_counts(self):
        """Test group and string counting."""
        document = TextFile(
            name="ui",
            groups=[TextGroup(0, ["a", "b"]), TextGroup(1), TextGroup(5, ["c"])],
        )

        assert document.group_count == 3
        assert document.string_count == 3

    def test_duplicate_group_ids_kept_in_order(self):
        """Test that duplicate group IDs are allowed and ordered."""
        document = TextFile()
        document.add_group(TextGroup(2, ["one"]))
        document.add_group(TextGroup(1))
        document.add_group(TextGroup(2, ["two"]))

        assert [g.id for g in document.groups] == [2, 1, 2]
        assert [g.strings for g in document.find_groups(2)] == [["one"], ["two"]]
        assert document.find_groups(9) == []

    def test_to_dict(self):
        """Test conversion to the JSON-friendly form."""
        document = TextFile(name="menu", index_with_counts=False, groups=[TextGroup(3, ["Open"])])

        assert document.to_dict() == {
            "name": "menu",
            "indexWithCounts": False,
            "groups": [{"id": 3, "strings": ["Open"]}],
        }

    def test_from_dict(self):
        """Test building a document from its dictionary form."""
        document = TextFile.from_dict({
            "name": "menu",
            "indexWithCounts": False,
            "groups": [{"id": 3, "strings": ["Open", "Close"]}, {"id": 4}],
        })

        assert document.name == "menu"
        assert document.index_with_counts is False
        assert document.groups[0] == TextGroup(3, ["Open", "Close"])
        assert document.groups[1] == TextGroup(4)

    def test_from_dict_defaults(self):
        """Test that missing keys take model defaults."""
        document = TextFile.from_dict({})

        assert document == TextFile()

    def test_from_dict_rejects_non_text_strings(self):
        """Test that strings must be text."""
        with pytest.raises(ValueError, match="must all be text"):
            TextFile.from_dict({"groups": [{"id": 0, "strings": [1, 2]}]})

    @pytest.mark.parametrize(
        "value,expected",
        [(False, False), (True, True), ("false", False), ("true", True), ("0", True)],
    )
    def test_from_dict_index_with_counts(self, value, expected):
        """Test that only a false boolean or the literal "false" disables counts."""
        document = TextFile.from_dict({"indexWithCounts": value})
        assert document.index_with_counts is expected

    def test_from_dict_rejects_non_boolean_flag(self):
        """Test that other indexWithCounts values are rejected."""
        with pytest.raises(ValueError, match="indexWithCounts must be a boolean"):
            TextFile.from_dict({"indexWithCounts": 0})
