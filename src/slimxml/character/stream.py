"""Forward-only character stream over strings, bytes and file objects.

The stream is the byte-source collaborator of the parser: it decodes input
incrementally, exposes one character of lookahead and reports an explicit
end-of-input sentinel (``EOF``, the empty string) that can never be confused
with a real character. It never opens or closes the resources it reads from.
"""

import codecs
from typing import BinaryIO, Callable, Optional, TextIO, Union

from slimxml.shared.errors import StreamDecodeError, StreamPosition

# Type definitions for input data
InputType = Union[bytes, str, BinaryIO, TextIO]

EOF = ""
DEFAULT_CHUNK_SIZE = 8192


class CharacterStream:
    """Single-pass character reader with one character of lookahead.

    Examples:
        >>> stream = CharacterStream("<a/>")
        >>> stream.peek()
        '<'
        >>> stream.read(), stream.read()
        ('<', 'a')
    """

    def __init__(
        self,
        source: InputType,
        encoding: str = "utf-8",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Initialize the stream.

        Args:
            source: Text, bytes, or a binary/text file-like object
            encoding: Codec used when the source yields bytes
            chunk_size: Number of units requested per read from file objects
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")

        self.encoding = encoding
        try:
            self._decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        except LookupError as e:
            raise StreamDecodeError(f"Unknown encoding: {encoding}") from e

        self._pull = self._make_reader(source, chunk_size)
        self._buffer = ""
        self._index = 0
        self._exhausted = False

        self._line = 1
        self._column = 1
        self._offset = 0

    def _make_reader(
        self, source: InputType, chunk_size: int
    ) -> Callable[[], Union[str, bytes]]:
        if isinstance(source, (str, bytes, bytearray)):
            data = bytes(source) if isinstance(source, bytearray) else source
            pending = [data]

            def read_once() -> Union[str, bytes]:
                # Empty value of the same type so the decoder gets finalized
                return pending.pop() if pending else data[:0]

            return read_once

        if hasattr(source, "read"):
            return lambda: source.read(chunk_size)

        raise TypeError(f"Unsupported input type: {type(source).__name__}")

    def _fill(self) -> bool:
        """Load the next decoded chunk; return False once input is exhausted."""
        while not self._exhausted:
            chunk = self._pull()
            if isinstance(chunk, (bytes, bytearray)):
                final = len(chunk) == 0
                try:
                    text = self._decoder.decode(bytes(chunk), final=final)
                except UnicodeDecodeError as e:
                    raise StreamDecodeError(
                        f"Cannot decode input as {self.encoding}: {e.reason}",
                        self.position,
                    ) from e
            else:
                final = not chunk
                text = chunk

            if final:
                self._exhausted = True
            if text:
                self._buffer = self._buffer[self._index:] + text
                self._index = 0
                return True
        return False

    def peek(self) -> str:
        """Return the next character without consuming it, or ``EOF``."""
        if self._index >= len(self._buffer) and not self._fill():
            return EOF
        return self._buffer[self._index]

    def read(self) -> str:
        """Consume and return the next character, or ``EOF``."""
        char = self.peek()
        if char == EOF:
            return EOF

        self._index += 1
        self._offset += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    def read_line(self) -> str:
        """Consume characters through the next newline (inclusive)."""
        chars = []
        while True:
            char = self.read()
            if char == EOF:
                break
            chars.append(char)
            if char == "\n":
                break
        return "".join(chars)

    def skip_whitespace(self) -> int:
        """Consume whitespace; return how many characters were skipped."""
        skipped = 0
        while self.peek().isspace():
            self.read()
            skipped += 1
        return skipped

    def skip_until(self, stop: str) -> Optional[str]:
        """Consume characters up to (not including) ``stop``.

        Returns:
            The skipped text, or None if the stream ended first.
        """
        chars = []
        while True:
            char = self.peek()
            if char == EOF:
                return None
            if char == stop:
                return "".join(chars)
            chars.append(self.read())

    @property
    def at_eof(self) -> bool:
        """Check whether every character has been consumed."""
        return self.peek() == EOF

    @property
    def position(self) -> StreamPosition:
        """Position of the next character to be read."""
        return StreamPosition(self._line, self._column, self._offset)

    @property
    def characters_read(self) -> int:
        """Number of characters consumed so far."""
        return self._offset
