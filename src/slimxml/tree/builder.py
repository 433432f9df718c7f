"""Document parser: turns a linear tag stream into a node tree.

The parser keeps a single ``current`` cursor on the node whose children are
being read. Opening tags descend, unique tags add a leaf and stay, closing
tags ascend; the document is complete when the root itself is closed. Text
found right after an opening tag becomes that node's value.

Parsing is all-or-nothing: on any structural error the partially built tree
is destroyed before the exception reaches the caller.
"""

from enum import Enum, auto
from typing import Optional

from slimxml.character import EOF, CharacterStream
from slimxml.shared.config import ParserConfig
from slimxml.shared.errors import (
    DepthLimitError,
    UnbalancedDocumentError,
    UnexpectedEndOfInputError,
    XMLParseError,
)
from slimxml.shared.logging import CorrelationLogger, resolve_logger
from slimxml.shared.result import ParseMetrics
from slimxml.tokenization import ScratchBuffer, Tag, TagKind, TagTokenizer

from .node import Node

TAG_OPEN = "<"
_END_OF_LINE = ("\n", "\r")


class ParserState(Enum):
    """States of the document parser."""

    BEFORE_ROOT = auto()    # Waiting for the root tag
    IN_TREE = auto()        # Reading the root's descendants
    DONE = auto()           # Root closed


class DocumentParser:
    """Builds a node tree from a character stream."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        logger: Optional[CorrelationLogger] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize document parser.

        Args:
            config: Parser configuration
            logger: Injected correlation logger
            correlation_id: Correlation ID used when no logger is injected
        """
        self.config = config or ParserConfig()
        self.logger = resolve_logger(logger, __name__, "document_parser", correlation_id)
        self.state = ParserState.BEFORE_ROOT
        self.metrics = ParseMetrics()

    def parse(self, stream: CharacterStream) -> Node:
        """Parse one document from ``stream`` and return its root node.

        The stream must be positioned after the XML declaration.

        Raises:
            UnexpectedEndOfInputError: the input holds no tag at all
            UnbalancedDocumentError: nesting does not close back to the root
            MalformedTagError: a tag deviates from the grammar
            BufferOverflowError: a name or value exceeds the buffer capacity
        """
        self.state = ParserState.BEFORE_ROOT
        self.metrics = ParseMetrics()
        tokenizer = TagTokenizer(stream, self.config.tokenization, self.logger)
        root: Optional[Node] = None

        self.logger.debug("Starting document parse")

        try:
            root = self._build(stream, tokenizer)
        except XMLParseError as e:
            self.logger.error(
                "Document parse failed",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "tags_read": tokenizer.tags_read,
                },
            )
            raise
        finally:
            self.metrics.tags_read = tokenizer.tags_read
            self.metrics.characters_processed = stream.characters_read
            self.metrics.finish()

        self.logger.debug(
            "Document parse completed",
            extra=self.metrics.to_dict(),
        )
        return root

    def _build(self, stream: CharacterStream, tokenizer: TagTokenizer) -> Node:
        tag = tokenizer.read_tag()
        if tag is None:
            raise UnexpectedEndOfInputError(
                "Nothing to parse: input ended before the first tag", stream.position
            )
        if tag.kind is TagKind.CLOSING:
            raise UnbalancedDocumentError(
                f"First tag </{tag.name}> closes nothing", tag.position
            )

        root = self._create_node(tag)
        self.metrics.record_depth(1)
        if tag.kind is TagKind.UNIQUE:
            self.state = ParserState.DONE
            return root

        self.state = ParserState.IN_TREE
        try:
            last_closed = self._read_tree(stream, tokenizer, root)
            if last_closed is not root:
                raise UnbalancedDocumentError("Last closed node isn't the root node")
        except XMLParseError:
            root.destroy()
            raise
        return root

    def _read_tree(
        self, stream: CharacterStream, tokenizer: TagTokenizer, root: Node
    ) -> Node:
        """Run the IN_TREE loop; return the node closed last."""
        current = root
        last_closed = root
        depth = 1
        awaiting_value = True

        while self.state is ParserState.IN_TREE:
            if awaiting_value:
                self._read_value(current, stream)
                awaiting_value = False
            else:
                self._skip_text(stream)

            tag = tokenizer.read_tag()
            if tag is None:
                raise UnbalancedDocumentError(
                    f"Input ended while <{current.name}> is still open",
                    stream.position,
                )

            if tag.kind is TagKind.OPENING:
                depth += 1
                self._check_depth(depth, tag)
                child = self._create_node(tag)
                current.add_child(child)
                current = child
                awaiting_value = True
            elif tag.kind is TagKind.UNIQUE:
                self._check_depth(depth + 1, tag)
                current.add_child(self._create_node(tag))
            else:
                last_closed = current
                parent = current.parent
                if parent is not None:
                    current = parent
                    depth -= 1
                else:
                    self.state = ParserState.DONE

        return last_closed

    def _check_depth(self, depth: int, tag: Tag) -> None:
        max_depth = self.config.tree.max_depth
        if depth > max_depth:
            raise DepthLimitError(
                f"Nesting of <{tag.name}> exceeds maximum depth of {max_depth}",
                tag.position,
            )
        self.metrics.record_depth(depth)

    def _create_node(self, tag: Tag) -> Node:
        self.metrics.nodes_created += 1
        return Node.from_tag(tag)

    def _read_value(self, node: Node, stream: CharacterStream) -> None:
        """Read the text that directly follows ``node``'s opening tag.

        Leading whitespace is skipped. If the next meaningful character is
        ``<`` it is left in the stream and no value is set. Otherwise
        printable characters are collected up to ``<``, end of line or end of
        input; whatever remains before the next ``<`` is discarded.
        """
        while True:
            char = stream.peek()
            if char == EOF or char == TAG_OPEN:
                return
            if char.isprintable() and not char.isspace():
                break
            stream.read()

        buffer = ScratchBuffer(self.config.tokenization.buffer_length, "node value")
        while True:
            char = stream.peek()
            if char in (TAG_OPEN, EOF) or char in _END_OF_LINE:
                break
            stream.read()
            if char.isprintable():
                buffer.append(char, stream.position)

        node.value = buffer.take()
        self.metrics.values_read += 1
        self._skip_text(stream)

    def _skip_text(self, stream: CharacterStream) -> None:
        """Discard text up to the next ``<`` (or end of input)."""
        text = stream.skip_until(TAG_OPEN)
        if text and text.strip():
            self.logger.debug(
                "Discarding text outside a node value",
                extra={"text": text.strip()[:40], "position": str(stream.position)},
            )


def parse_stream(
    stream: CharacterStream,
    config: Optional[ParserConfig] = None,
    logger: Optional[CorrelationLogger] = None,
) -> Node:
    """Parse a document from an already positioned stream."""
    return DocumentParser(config, logger).parse(stream)
