"""Exception hierarchy for slimxml.

Structural parse errors are fatal to one parse attempt and carry the stream
position where the problem was detected. Query misses are not errors: the
resolvers return ``None`` and the typed accessors return the caller's default.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StreamPosition:
    """Line/column/offset of a character in the input stream."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class SlimXMLError(Exception):
    """Base exception for all slimxml errors."""


class XMLParseError(SlimXMLError):
    """A document could not be parsed. No partial tree survives."""

    def __init__(self, message: str, position: Optional[StreamPosition] = None):
        if position is not None:
            message = f"{message} ({position})"
        super().__init__(message)
        self.position = position


class MalformedTagError(XMLParseError):
    """A tag or attribute deviates from the accepted grammar."""


class UnexpectedEndOfInputError(XMLParseError):
    """The stream ended in the middle of a tag, attribute or document."""


class UnbalancedDocumentError(XMLParseError):
    """Tag nesting does not close back to the root."""


class DepthLimitError(UnbalancedDocumentError):
    """Nesting exceeds the configured maximum depth."""


class BufferOverflowError(XMLParseError):
    """A name, value or path segment exceeds the scratch buffer capacity."""


class DeclarationError(XMLParseError):
    """The mandatory XML declaration line is missing or not accepted."""


class StreamDecodeError(XMLParseError):
    """Input bytes could not be decoded with the configured codec."""


class MalformedPathError(SlimXMLError, ValueError):
    """A value path or node-search path is syntactically invalid."""


class InvalidOperationError(SlimXMLError):
    """A tree operation was attempted on a node in the wrong state."""


class ConversionError(SlimXMLError):
    """A tree cannot be represented in an adapter's target library."""
