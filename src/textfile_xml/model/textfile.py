"""In-memory document model for text resource files.

A text file is a named, ordered list of groups; each group holds strings
addressed by their zero-based position.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List


@dataclass
class TextGroup:
    """Ordered, zero-indexed strings identified by an integer group ID."""

    id: int
    strings: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate group values."""
        if self.id < 0:
            raise ValueError("Group ID must be >= 0")

    @property
    def size(self) -> int:
        """Number of strings in the group, which is also the next free index."""
        return len(self.strings)

    def add(self, text: str) -> int:
        """Append a string and return its index."""
        self.strings.append(text)
        return len(self.strings) - 1

    def __len__(self) -> int:
        return len(self.strings)

    def __iter__(self) -> Iterator[str]:
        return iter(self.strings)

    def __getitem__(self, index: int) -> str:
        return self.strings[index]


@dataclass
class TextFile:
    """Root document: a name, the index-with-counts flag and the groups.

    Group IDs are not required to be unique; groups are kept in document order.
    """

    name: str = ""
    index_with_counts: bool = True
    groups: List[TextGroup] = field(default_factory=list)

    @property
    def group_count(self) -> int:
        """Number of groups in the document."""
        return len(self.groups)

    @property
    def string_count(self) -> int:
        """Total number of strings across all groups."""
        return sum(group.size for group in self.groups)

    def add_group(self, group: TextGroup) -> None:
        """Append a group at the end of the document."""
        self.groups.append(group)

    def find_groups(self, group_id: int) -> List[TextGroup]:
        """Return every group with the given ID, in document order."""
        return [group for group in self.groups if group.id == group_id]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the document to a JSON-friendly dictionary."""
        return {
            "name": self.name,
            "indexWithCounts": self.index_with_counts,
            "groups": [
                {"id": group.id, "strings": list(group.strings)}
                for group in self.groups
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextFile":
        """Create a document from the dictionary form produced by ``to_dict``."""
        groups = []
        for entry in data.get("groups", []):
            strings = entry.get("strings", [])
            if not all(isinstance(text, str) for text in strings):
                raise ValueError(f"Strings of group {entry.get('id')} must all be text")
            groups.append(TextGroup(int(entry["id"]), list(strings)))

        index_with_counts = data.get("indexWithCounts", True)
        if isinstance(index_with_counts, str):
            # Same rule as the XML attribute: only the literal "false" is false
            index_with_counts = index_with_counts != "false"
        elif not isinstance(index_with_counts, bool):
            raise ValueError(
                f"indexWithCounts must be a boolean, got {index_with_counts!r}"
            )

        return cls(
            name=str(data.get("name", "")),
            index_with_counts=index_with_counts,
            groups=groups,
        )
