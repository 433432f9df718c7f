"""Configuration classes for slimxml.

Component configurations validate themselves in ``__post_init__``; the
top-level ``ParserConfig`` is frozen and offers ``override`` with
``component__field`` notation plus dict/JSON round-tripping.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

# Mandatory first line of a document accepted in strict mode.
XML_FIRST_LINE = '<?xml version="1.0" encoding="UTF-8"?>'

DEFAULT_BUFFER_LENGTH = 200
DEFAULT_MAX_DEPTH = 1000


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class TokenizationConfig:
    """Configuration for the tag tokenizer and text-value reader."""

    # Capacity of the scratch buffer used for names, values and path segments
    buffer_length: int = DEFAULT_BUFFER_LENGTH
    skip_leading_whitespace: bool = True

    def __post_init__(self) -> None:
        """Validate tokenization configuration."""
        if self.buffer_length <= 0:
            raise ValueError("buffer_length must be > 0")


@dataclass
class TreeConfig:
    """Configuration for tree building."""

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


_COMPONENTS = ("tokenization", "tree")


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for loading and parsing a document.

    Immutable; use ``override`` to derive variants.
    """

    tokenization: TokenizationConfig = field(default_factory=TokenizationConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)

    encoding: str = "utf-8"
    expect_declaration: bool = True
    strict_declaration: bool = False

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.tokenization.__post_init__()
            self.tree.__post_init__()
            if not self.encoding:
                raise ValueError("encoding cannot be empty")
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.strict_declaration and not self.expect_declaration:
            raise ConfigValidationError(
                "strict_declaration requires expect_declaration",
                field_name="strict_declaration",
                suggestions=["Set expect_declaration=True",
                             "Disable strict_declaration"],
            )

    @property
    def buffer_length(self) -> int:
        """Shortcut to the tokenizer buffer capacity."""
        return self.tokenization.buffer_length

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig()
            >>> config.override(tokenization__buffer_length=64).buffer_length
            64
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for component in _COMPONENTS:
            current = getattr(self, component)
            if component in nested_overrides and isinstance(
                nested_overrides[component], dict
            ):
                try:
                    new_fields[component] = replace(
                        current, **nested_overrides.pop(component)
                    )
                except ValueError as e:
                    raise ConfigValidationError(str(e), field_name=component) from e
        new_fields.update(nested_overrides)

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys raise ``ConfigValidationError``.
        """
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {sorted(unknown)}"
            )

        values = dict(data)
        try:
            if "tokenization" in values:
                values["tokenization"] = TokenizationConfig(**values["tokenization"])
            if "tree" in values:
                values["tree"] = TreeConfig(**values["tree"])
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Preset requiring the canonical declaration line."""
        return cls(
            expect_declaration=True,
            strict_declaration=True,
            name="strict",
            description="Canonical declaration required",
        )

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Preset for fragments that carry no declaration line."""
        return cls(
            expect_declaration=False,
            name="lenient",
            description="No declaration line expected",
        )
