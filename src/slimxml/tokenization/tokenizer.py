"""Tag tokenizer for slimxml.

Reads one ``<...>`` markup unit per call from a ``CharacterStream`` and turns
it into a transient ``Tag`` token: a name, a kind (opening, closing or unique)
and the attributes found between the name and the terminator.

Accepted grammar::

    tag        := '<' '/'? name ( ws+ attribute )* ws* ( '>' | '/>' )
    attribute  := name '=' '"' value '"'

Closing tags carry no attributes and cannot be self-closing.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Tuple

from slimxml.character import EOF, CharacterStream
from slimxml.shared.config import TokenizationConfig
from slimxml.shared.errors import (
    MalformedTagError,
    StreamPosition,
    UnexpectedEndOfInputError,
)
from slimxml.shared.logging import CorrelationLogger, resolve_logger

from .attribute import AttributeList, read_attribute
from .buffer import ScratchBuffer

TAG_OPEN = "<"
TAG_CLOSE = ">"
CLOSING_MARKER = "/"


class TagKind(Enum):
    """Kinds of tag tokens."""

    OPENING = auto()    # <name ...>
    CLOSING = auto()    # </name>
    UNIQUE = auto()     # <name .../>
    UNKNOWN = auto()    # Not yet determined while reading


@dataclass
class Tag:
    """Transient token describing one markup unit."""

    name: str = ""
    kind: TagKind = TagKind.UNKNOWN
    attributes: AttributeList = field(default_factory=AttributeList)
    position: Optional[StreamPosition] = None

    @property
    def is_opening(self) -> bool:
        return self.kind is TagKind.OPENING

    @property
    def is_closing(self) -> bool:
        return self.kind is TagKind.CLOSING

    @property
    def is_unique(self) -> bool:
        return self.kind is TagKind.UNIQUE


class TagTokenizer:
    """Produces tag tokens from a character stream.

    The tokenizer only reads markup. Text between tags is consumed by the
    document parser's value reader, which leaves the stream positioned on the
    next ``<``.
    """

    def __init__(
        self,
        stream: CharacterStream,
        config: Optional[TokenizationConfig] = None,
        logger: Optional[CorrelationLogger] = None,
    ) -> None:
        """Initialize the tokenizer.

        Args:
            stream: Character source positioned before the next tag
            config: Tokenization configuration (buffer capacity)
            logger: Injected correlation logger
        """
        self.stream = stream
        self.config = config or TokenizationConfig()
        self.logger = resolve_logger(logger, __name__, "tag_tokenizer")
        self.tags_read = 0

    def read_tag(self) -> Optional[Tag]:
        """Read the next tag.

        Returns:
            The tag token, or None when the input ends before any tag
            character is found.

        Raises:
            MalformedTagError: the markup deviates from the grammar
            UnexpectedEndOfInputError: the input ends inside the tag
            BufferOverflowError: name or attribute longer than the buffer
        """
        stream = self.stream
        if self.config.skip_leading_whitespace:
            stream.skip_whitespace()

        tag = Tag(position=stream.position)
        char = stream.read()
        if char == EOF:
            return None

        if char == TAG_OPEN:
            char = stream.read()
        if char == CLOSING_MARKER:
            tag.kind = TagKind.CLOSING
            char = stream.read()

        tag.name, char = self._read_name(char)

        if char == TAG_CLOSE:
            if tag.kind is TagKind.UNKNOWN:
                tag.kind = TagKind.OPENING
        elif char == CLOSING_MARKER:
            if tag.kind is TagKind.CLOSING:
                raise MalformedTagError(
                    f"Closing tag </{tag.name}> cannot be self-closing", tag.position
                )
            self._expect_close(tag)
            tag.kind = TagKind.UNIQUE
        elif char.isspace():
            if tag.kind is TagKind.CLOSING:
                stream.skip_whitespace()
                self._expect_close(tag)
            else:
                self._read_attributes(tag)
        else:
            # _read_name only stops on a terminator, whitespace or EOF
            raise UnexpectedEndOfInputError(
                f"Reached end of input while reading tag <{tag.name}>",
                stream.position,
            )

        self.tags_read += 1
        if self.logger.is_enabled_for(logging.DEBUG):
            self.logger.debug(
                "Read tag",
                extra={
                    "tag_name": tag.name,
                    "tag_kind": tag.kind.name,
                    "attribute_count": len(tag.attributes),
                },
            )
        return tag

    def _read_name(self, char: str) -> Tuple[str, str]:
        """Accumulate name characters starting with ``char``.

        Returns:
            The name and the character that terminated it.
        """
        stream = self.stream
        buffer = ScratchBuffer(self.config.buffer_length, "tag name")
        while char not in (TAG_CLOSE, CLOSING_MARKER, EOF) and not char.isspace():
            if char == TAG_OPEN:
                raise MalformedTagError(
                    "Unexpected '<' inside tag name", stream.position
                )
            buffer.append(char, stream.position)
            char = stream.read()

        name = buffer.take()
        if not name and char != EOF:
            raise MalformedTagError("Tag without a name", stream.position)
        return name, char

    def _expect_close(self, tag: Tag) -> None:
        """Consume the ``>`` that must follow."""
        char = self.stream.read()
        if char == TAG_CLOSE:
            return
        if char == EOF:
            raise UnexpectedEndOfInputError(
                f"Reached end of input before end of tag <{tag.name}>",
                self.stream.position,
            )
        raise MalformedTagError(
            f"Expected '>' to end tag <{tag.name}>, found {char!r}",
            self.stream.position,
        )

    def _read_attributes(self, tag: Tag) -> None:
        """Read attributes until ``>`` or ``/>`` finalizes the tag."""
        stream = self.stream
        while True:
            stream.skip_whitespace()
            char = stream.peek()

            if char == TAG_CLOSE:
                stream.read()
                tag.kind = TagKind.OPENING
                return
            if char == CLOSING_MARKER:
                stream.read()
                self._expect_close(tag)
                tag.kind = TagKind.UNIQUE
                return
            if char == EOF:
                raise UnexpectedEndOfInputError(
                    f"Reached end of input inside tag <{tag.name}>", stream.position
                )

            tag.attributes.add(read_attribute(stream, self.config.buffer_length))

            following = stream.peek()
            if following not in (TAG_CLOSE, CLOSING_MARKER, EOF) and not following.isspace():
                raise MalformedTagError(
                    f"Expected whitespace between attributes of <{tag.name}>",
                    stream.position,
                )
