"""Shared utilities for slimxml.

This module provides configuration objects, the exception hierarchy, parse
metrics and the correlation-aware logger used across all layers.
"""

from .config import (
    XML_FIRST_LINE,
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    TokenizationConfig,
    TreeConfig,
)
from .errors import (
    BufferOverflowError,
    ConversionError,
    DeclarationError,
    DepthLimitError,
    InvalidOperationError,
    MalformedPathError,
    MalformedTagError,
    SlimXMLError,
    StreamDecodeError,
    StreamPosition,
    UnbalancedDocumentError,
    UnexpectedEndOfInputError,
    XMLParseError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
    new_correlation_id,
    resolve_logger,
)
from .result import ParseMetrics

__all__ = [
    "XML_FIRST_LINE",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "TokenizationConfig",
    "TreeConfig",
    "BufferOverflowError",
    "ConversionError",
    "DeclarationError",
    "DepthLimitError",
    "InvalidOperationError",
    "MalformedPathError",
    "MalformedTagError",
    "SlimXMLError",
    "StreamDecodeError",
    "StreamPosition",
    "UnbalancedDocumentError",
    "UnexpectedEndOfInputError",
    "XMLParseError",
    "CorrelationLogger",
    "get_logger",
    "new_correlation_id",
    "resolve_logger",
    "ParseMetrics",
]
