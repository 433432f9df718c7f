"""Tests for the configuration system."""

import json

import pytest

from slimxml.shared.config import (
    DEFAULT_BUFFER_LENGTH,
    XML_FIRST_LINE,
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    TokenizationConfig,
    TreeConfig,
)


class TestTokenizationConfig:
    """Test suite for TokenizationConfig."""

    def test_default_configuration(self):
        """Test default tokenization configuration values."""
        config = TokenizationConfig()

        assert config.buffer_length == 200
        assert config.buffer_length == DEFAULT_BUFFER_LENGTH
        assert config.skip_leading_whitespace is True

    def test_validation_failures(self):
        """Test tokenization configuration validation failures."""
        with pytest.raises(ValueError, match="buffer_length must be > 0"):
            TokenizationConfig(buffer_length=0)

        with pytest.raises(ValueError, match="buffer_length must be > 0"):
            TokenizationConfig(buffer_length=-5)


class TestTreeConfig:
    """Test suite for TreeConfig."""

    def test_default_configuration(self):
        """Test default tree configuration values."""
        assert TreeConfig().max_depth == 1000

    def test_validation_failures(self):
        """Test tree configuration validation failures."""
        with pytest.raises(ValueError, match="max_depth must be > 0"):
            TreeConfig(max_depth=0)


class TestParserConfig:
    """Test suite for ParserConfig."""

    def test_default_configuration(self):
        """Test default parser configuration values."""
        config = ParserConfig()

        assert config.encoding == "utf-8"
        assert config.expect_declaration is True
        assert config.strict_declaration is False
        assert config.buffer_length == 200
        assert config.tree.max_depth == 1000
        assert config.name is None

    def test_config_is_frozen(self):
        """Test that parser configuration cannot be mutated."""
        config = ParserConfig()

        with pytest.raises(AttributeError):
            config.encoding = "latin-1"  # type: ignore[misc]

    def test_empty_encoding_rejected(self):
        """Test that an empty encoding fails validation."""
        with pytest.raises(ConfigValidationError, match="encoding cannot be empty"):
            ParserConfig(encoding="")

    def test_strict_requires_declaration(self):
        """Test that strict declaration checking needs a declaration."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig(expect_declaration=False, strict_declaration=True)

        assert exc_info.value.field_name == "strict_declaration"
        assert exc_info.value.suggestions
        assert isinstance(exc_info.value, ConfigError)

    def test_override_nested_field(self):
        """Test overriding a component field with double underscore notation."""
        config = ParserConfig()

        updated = config.override(tokenization__buffer_length=64, tree__max_depth=3)

        assert updated.buffer_length == 64
        assert updated.tree.max_depth == 3
        assert config.buffer_length == 200

    def test_override_top_level_field(self):
        """Test overriding a top-level field."""
        updated = ParserConfig().override(encoding="latin-1", name="custom")

        assert updated.encoding == "latin-1"
        assert updated.name == "custom"

    def test_override_unknown_component(self):
        """Test that unknown components are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component"):
            ParserConfig().override(network__timeout=3)

    def test_override_invalid_value(self):
        """Test that overrides are validated."""
        with pytest.raises(ConfigValidationError, match="buffer_length must be > 0"):
            ParserConfig().override(tokenization__buffer_length=0)

    def test_dict_round_trip(self):
        """Test conversion to and from a dictionary."""
        config = ParserConfig().override(tokenization__buffer_length=50, name="small")

        data = config.to_dict()
        restored = ParserConfig.from_dict(data)

        assert data["tokenization"]["buffer_length"] == 50
        assert restored == config

    def test_json_round_trip(self):
        """Test conversion to and from JSON."""
        config = ParserConfig.strict()

        text = config.to_json()
        restored = ParserConfig.from_json(text)

        assert json.loads(text)["strict_declaration"] is True
        assert restored == config

    def test_from_dict_rejects_unknown_fields(self):
        """Test that unknown keys in a dictionary are reported."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration fields"):
            ParserConfig.from_dict({"buffer": 10})

    def test_from_dict_rejects_invalid_component(self):
        """Test that invalid component values are reported."""
        with pytest.raises(ConfigValidationError):
            ParserConfig.from_dict({"tree": {"max_depth": -1}})

    def test_presets(self):
        """Test strict and lenient presets."""
        strict = ParserConfig.strict()
        lenient = ParserConfig.lenient()

        assert strict.strict_declaration is True
        assert strict.expect_declaration is True
        assert strict.name == "strict"
        assert lenient.expect_declaration is False
        assert lenient.name == "lenient"

    def test_canonical_first_line(self):
        """Test the canonical declaration constant."""
        assert XML_FIRST_LINE == '<?xml version="1.0" encoding="UTF-8"?>'
