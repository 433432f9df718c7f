"""Document loading API for slimxml.

Simple module-level functions cover the common cases; ``SlimXMLParser`` keeps
a configuration and correlation ID for repeated use and tracks statistics.

Every loader validates the XML declaration line according to the
configuration, hands the rest of the stream to the document parser and wraps
the resulting tree in an ``XMLDocument``. Parse failures propagate as
``XMLParseError`` subclasses; no partial document is ever returned.
"""

import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, TextIO, Union

from slimxml.character import CharacterStream
from slimxml.shared import (
    XML_FIRST_LINE,
    DeclarationError,
    ParserConfig,
    get_logger,
    new_correlation_id,
)
from slimxml.shared.logging import CorrelationLogger
from slimxml.tree import DocumentParser, XMLDocument

# Type definitions for input data
InputType = Union[str, bytes, bytearray, BinaryIO, TextIO, Path]
PathType = Union[str, Path]

DECLARATION_START = "<?xml"
DECLARATION_END = "?>"
BYTE_ORDER_MARK = "\ufeff"

MS_PER_SECOND = 1000  # Milliseconds per second conversion


def _read_declaration(
    stream: CharacterStream, config: ParserConfig, logger: CorrelationLogger
) -> str:
    """Consume and validate the declaration line.

    Returns:
        The declaration without its line terminator.

    Raises:
        DeclarationError: the line is missing or not accepted by the policy
    """
    position = stream.position
    line = stream.read_line().rstrip("\r\n").lstrip(BYTE_ORDER_MARK)

    if config.strict_declaration:
        accepted = line == XML_FIRST_LINE
        expected = XML_FIRST_LINE
    else:
        stripped = line.strip()
        accepted = stripped.startswith(DECLARATION_START) and stripped.endswith(
            DECLARATION_END
        )
        expected = f"{DECLARATION_START} ... {DECLARATION_END}"

    if not accepted:
        logger.error(
            "Invalid XML declaration",
            extra={"found": line[:80], "strict": config.strict_declaration},
        )
        if not line:
            raise DeclarationError("Missing XML declaration", position)
        raise DeclarationError(
            f"Expected declaration {expected!r}, found {line[:80]!r}", position
        )
    return line


def _load_stream(
    stream: CharacterStream,
    source: str,
    config: Optional[ParserConfig],
    correlation_id: Optional[str],
) -> XMLDocument:
    """Run declaration handling and tree building on an open stream."""
    config = config or ParserConfig()
    correlation_id = correlation_id or new_correlation_id()
    logger = get_logger(__name__, correlation_id, "loader")

    logger.info(
        "Starting document load",
        extra={
            "source": source,
            "config_name": config.name,
            "expect_declaration": config.expect_declaration,
        },
    )

    declaration = None
    if config.expect_declaration:
        declaration = _read_declaration(stream, config, logger)

    parser = DocumentParser(config, logger)
    root = parser.parse(stream)

    document = XMLDocument(
        root=root,
        source=source,
        metrics=parser.metrics,
        correlation_id=correlation_id,
        declaration=declaration,
        buffer_length=config.buffer_length,
    )
    logger.info(
        "Document load completed",
        extra={
            "source": source,
            "nodes_created": parser.metrics.nodes_created,
            "processing_time_ms": parser.metrics.processing_time_ms,
        },
    )
    return document


def load_file(
    file_path: PathType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> XMLDocument:
    """Load a document from a file.

    The file is opened in binary mode, decoded with ``config.encoding`` and
    closed once parsing finishes, whether or not it succeeded.

    Args:
        file_path: Path to the XML file
        config: Parser configuration (defaults to ``ParserConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The parsed document

    Raises:
        OSError: the file cannot be opened
        XMLParseError: the content is not an accepted document

    Examples:
        >>> doc = load_file("settings.xml")
        >>> doc.get_string("settings/server:host")
        'localhost'
    """
    config = config or ParserConfig()
    path_obj = Path(file_path)

    with path_obj.open("rb") as file:
        stream = CharacterStream(file, config.encoding)
        return _load_stream(stream, str(path_obj), config, correlation_id)


def load_string(
    content: Union[str, bytes, bytearray],
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> XMLDocument:
    """Load a document from text or encoded bytes.

    Examples:
        >>> doc = load_string('<a><b>42</b></a>', ParserConfig.lenient())
        >>> doc.get_value("a/b$")
        '42'
    """
    if not isinstance(content, (str, bytes, bytearray)):
        raise TypeError(f"Expected str or bytes, got {type(content).__name__}")

    config = config or ParserConfig()
    stream = CharacterStream(content, config.encoding)
    return _load_stream(stream, "<string>", config, correlation_id)


def parse(
    input_data: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> XMLDocument:
    """Load a document from any supported input.

    Strings and bytes are treated as document content, ``Path`` objects as
    files to open, and objects with ``read`` as already open files which
    are left open.
    """
    if isinstance(input_data, Path):
        return load_file(input_data, config, correlation_id)
    if isinstance(input_data, (str, bytes, bytearray)):
        return load_string(input_data, config, correlation_id)
    if hasattr(input_data, "read"):
        config = config or ParserConfig()
        stream = CharacterStream(input_data, config.encoding)
        source = str(getattr(input_data, "name", "<stream>"))
        return _load_stream(stream, source, config, correlation_id)
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


parse_string = load_string
parse_file = load_file


class SlimXMLParser:
    """Reusable parser holding a configuration and a correlation ID.

    Attributes:
        config: Configuration applied to every parse
        correlation_id: Correlation ID stamped on every log record

    Examples:
        >>> parser = SlimXMLParser(ParserConfig.lenient())
        >>> docs = [parser.parse_string(text) for text in texts]
        >>> parser.statistics["total_parses"] == len(texts)
        True
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration (defaults to ``ParserConfig()``)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or new_correlation_id()
        self.logger = get_logger(__name__, self.correlation_id, "slimxml_parser")

        self._parse_count = 0
        self._successful_parses = 0
        self._failed_parses = 0
        self._total_processing_time = 0.0

        self.logger.info(
            "SlimXMLParser initialized",
            extra={"config_name": self.config.name},
        )

    def _run(self, loader: Any, source: Any) -> XMLDocument:
        start_time = time.time()
        try:
            document = loader(source, self.config, self.correlation_id)
        except Exception:
            self._failed_parses += 1
            raise
        else:
            self._successful_parses += 1
            return document
        finally:
            self._parse_count += 1
            self._total_processing_time += (time.time() - start_time) * MS_PER_SECOND

    def parse(self, input_data: InputType) -> XMLDocument:
        """Parse any supported input with this parser's configuration."""
        return self._run(parse, input_data)

    def parse_file(self, file_path: PathType) -> XMLDocument:
        """Parse a file with this parser's configuration."""
        return self._run(load_file, file_path)

    def parse_string(self, content: Union[str, bytes, bytearray]) -> XMLDocument:
        """Parse text or bytes with this parser's configuration."""
        return self._run(load_string, content)

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration used for later parses."""
        self.config = config
        self.logger.info(
            "Parser reconfigured",
            extra={"config_name": config.name},
        )

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "failed_parses": self._failed_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._failed_parses = 0
        self._total_processing_time = 0.0

        self.logger.info("Parser statistics reset")
