"""Configuration classes for text file XML streaming.

This module provides configuration objects for the reader and writer,
enabling control over chunking, output encoding and formatting.
"""

import codecs
import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Decoded by expat itself; any other encoding must map each byte to one character
EXPAT_NATIVE_ENCODINGS = ("utf-8", "utf-16", "iso8859-1", "ascii")


def _is_known_codec(encoding: str) -> bool:
    """Check that ``encoding`` is a text codec the XML tokenizer can decode."""
    try:
        info = codecs.lookup(encoding)
    except LookupError:
        return False
    if not getattr(info, "_is_text_encoding", True):
        return False
    if info.name in EXPAT_NATIVE_ENCODINGS:
        return True
    try:
        return len(bytes(range(256)).decode(info.name, "replace")) == 256
    except ValueError:
        return False


@dataclass
class ReaderConfig:
    """Configuration for reading documents."""

    chunk_size: int = 8192
    encoding: Optional[str] = None  # overrides the encoding declared in the document

    def __post_init__(self) -> None:
        """Validate reader configuration."""
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if self.encoding is not None and not _is_known_codec(self.encoding):
            raise ValueError(
                f"encoding must be a known codec readable as XML, got {self.encoding!r}"
            )


@dataclass
class WriterConfig:
    """Configuration for writing documents."""

    encoding: str = "UTF-8"
    auto_formatting: bool = True
    indent: int = 4
    write_declaration: bool = True

    def __post_init__(self) -> None:
        """Validate writer configuration."""
        if not _is_known_codec(self.encoding):
            raise ValueError(
                f"encoding must be a known codec readable as XML, got {self.encoding!r}"
            )
        if self.indent < 0:
            raise ValueError("indent must be >= 0")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class StreamConfig:
    """Complete configuration for reading and writing text file documents.

    Immutable, so a single instance can be shared between streams.
    """

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)

    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True
    logging_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate the complete stream configuration."""
        try:
            self.reader.__post_init__()
            self.writer.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=VALID_LOGGING_LEVELS,
            )

    @classmethod
    def default(cls) -> "StreamConfig":
        """Create the default configuration (pretty-printed UTF-8 output)."""
        return cls()

    @classmethod
    def compact(cls) -> "StreamConfig":
        """Create a configuration that writes without indentation or line breaks."""
        return cls(writer=WriterConfig(auto_formatting=False))

    def override(self, **kwargs: Any) -> "StreamConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override

        Returns:
            New StreamConfig instance with overrides applied

        Example:
            >>> config = StreamConfig()
            >>> new_config = config.override(
            ...     reader__chunk_size=1024,
            ...     writer__indent=2
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in ("reader", "writer") and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "reader": {
                "chunk_size": self.reader.chunk_size,
                "encoding": self.reader.encoding,
            },
            "writer": {
                "encoding": self.writer.encoding,
                "auto_formatting": self.writer.auto_formatting,
                "indent": self.writer.indent,
                "write_declaration": self.writer.write_declaration,
            },
            "correlation_id": self.correlation_id,
            "enable_diagnostics": self.enable_diagnostics,
            "logging_level": self.logging_level,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamConfig":
        """Create configuration from dictionary.

        Unknown keys raise ConfigValidationError.
        """
        known = {"reader", "writer", "correlation_id", "enable_diagnostics", "logging_level"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                suggestions=sorted(known),
            )

        fields: Dict[str, Any] = {
            key: value for key, value in data.items() if key not in ("reader", "writer")
        }
        try:
            if "reader" in data:
                fields["reader"] = ReaderConfig(**data["reader"])
            if "writer" in data:
                fields["writer"] = WriterConfig(**data["writer"])
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

        return cls(**fields)

    @classmethod
    def from_json(cls, json_str: str) -> "StreamConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Configuration is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)
