"""Tests for the stream configuration system."""

import json

import pytest

from textfile_xml.shared.config import (
    ConfigError,
    ConfigValidationError,
    ReaderConfig,
    StreamConfig,
    WriterConfig,
)


class TestReaderConfig:
    """Test suite for ReaderConfig."""

    def test_default_configuration(self):
        """Test default reader configuration values."""
        config = ReaderConfig()

        assert config.chunk_size == 8192
        assert config.encoding is None

    def test_reader_config_validation_failures(self):
        """Test reader configuration validation failures."""
        with pytest.raises(ValueError, match="chunk_size must be > 0"):
            ReaderConfig(chunk_size=0)

        with pytest.raises(ValueError, match="encoding must be a known codec"):
            ReaderConfig(encoding="no-such-codec")

    def test_encoding_override_accepted(self):
        """Test that a known codec is accepted as encoding override."""
        config = ReaderConfig(encoding="ISO-8859-1")
        assert config.encoding == "ISO-8859-1"

    def test_multi_byte_encoding_override_rejected(self):
        """Test that overrides the XML tokenizer cannot decode are rejected."""
        with pytest.raises(ValueError, match="encoding must be a known codec"):
            ReaderConfig(encoding="Shift_JIS")


class TestWriterConfig:
    """Test suite for WriterConfig."""

    def test_default_configuration(self):
        """Test default writer configuration values."""
        config = WriterConfig()

        assert config.encoding == "UTF-8"
        assert config.auto_formatting is True
        assert config.indent == 4
        assert config.write_declaration is True

    def test_writer_config_validation_failures(self):
        """Test writer configuration validation failures."""
        with pytest.raises(ValueError, match="indent must be >= 0"):
            WriterConfig(indent=-1)

        with pytest.raises(ValueError, match="encoding must be a known codec"):
            WriterConfig(encoding="bogus")

    @pytest.mark.parametrize("encoding", ["UTF-32", "shift_jis", "rot13", "hex"])
    def test_unreadable_encodings_rejected(self, encoding):
        """Test that non-text codecs and encodings the reader cannot decode are rejected."""
        with pytest.raises(ValueError, match="encoding must be a known codec"):
            WriterConfig(encoding=encoding)

        with pytest.raises(ConfigValidationError, match="encoding must be a known codec"):
            StreamConfig().override(writer__encoding=encoding)

    @pytest.mark.parametrize("encoding", ["UTF-8", "utf-16", "latin-1", "US-ASCII", "cp1252"])
    def test_readable_encodings_accepted(self, encoding):
        """Test the encodings whose output can be read back."""
        assert WriterConfig(encoding=encoding).encoding == encoding


class TestStreamConfig:
    """Test suite for StreamConfig."""

    def test_default_preset(self):
        """Test the default preset."""
        config = StreamConfig.default()

        assert config.reader == ReaderConfig()
        assert config.writer == WriterConfig()
        assert config.correlation_id is None
        assert config.enable_diagnostics is True
        assert config.logging_level == "INFO"

    def test_compact_preset(self):
        """Test the compact preset disables auto formatting."""
        config = StreamConfig.compact()
        assert config.writer.auto_formatting is False

    def test_invalid_logging_level(self):
        """Test logging level validation."""
        with pytest.raises(ConfigValidationError) as exc_info:
            StreamConfig(logging_level="LOUD")

        assert exc_info.value.field_name == "logging_level"
        assert "DEBUG" in exc_info.value.suggestions

    def test_config_is_immutable(self):
        """Test that the aggregate configuration is frozen."""
        config = StreamConfig()
        with pytest.raises(AttributeError):
            config.logging_level = "DEBUG"

    def test_override_nested_fields(self):
        """Test overriding nested configuration fields."""
        config = StreamConfig()
        new_config = config.override(reader__chunk_size=16, writer__indent=2)

        assert new_config.reader.chunk_size == 16
        assert new_config.writer.indent == 2
        # Original is unchanged
        assert config.reader.chunk_size == 8192
        assert config.writer.indent == 4

    def test_override_top_level_fields(self):
        """Test overriding top-level configuration fields."""
        config = StreamConfig().override(correlation_id="abc", enable_diagnostics=False)

        assert config.correlation_id == "abc"
        assert config.enable_diagnostics is False

    def test_override_invalid_value(self):
        """Test that invalid overrides raise a validation error."""
        with pytest.raises(ConfigValidationError):
            StreamConfig().override(reader__chunk_size=0)

        with pytest.raises(ConfigValidationError):
            StreamConfig().override(writer__no_such_field=1)

    def test_to_dict_and_from_dict(self):
        """Test dictionary conversion in both directions."""
        config = StreamConfig.compact().override(correlation_id="req-1")
        data = config.to_dict()

        assert data["writer"]["auto_formatting"] is False
        assert data["reader"]["chunk_size"] == 8192
        assert StreamConfig.from_dict(data) == config

    def test_to_json_and_from_json(self):
        """Test JSON conversion in both directions."""
        config = StreamConfig().override(writer__indent=2)
        json_str = config.to_json()

        assert json.loads(json_str)["writer"]["indent"] == 2
        assert StreamConfig.from_json(json_str) == config

    def test_from_dict_partial(self):
        """Test that missing sections fall back to defaults."""
        config = StreamConfig.from_dict({"reader": {"chunk_size": 64}})

        assert config.reader.chunk_size == 64
        assert config.writer == WriterConfig()

    def test_from_dict_unknown_keys(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration keys: colour"):
            StreamConfig.from_dict({"colour": "blue"})

    def test_from_dict_invalid_section(self):
        """Test that invalid nested values are rejected."""
        with pytest.raises(ConfigValidationError, match="chunk_size"):
            StreamConfig.from_dict({"reader": {"chunk_size": -5}})

    def test_from_json_invalid(self):
        """Test that malformed JSON is rejected."""
        with pytest.raises(ConfigValidationError, match="not valid JSON"):
            StreamConfig.from_json("{not json")

        with pytest.raises(ConfigValidationError, match="must be an object"):
            StreamConfig.from_json("[1, 2]")

    def test_validation_error_is_config_error(self):
        """Test the configuration exception hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)
