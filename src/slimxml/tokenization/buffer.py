"""Capacity-checked scratch buffer for names, values and path segments."""

from typing import List, Optional

from slimxml.shared.errors import BufferOverflowError, StreamPosition


class ScratchBuffer:
    """Accumulates characters up to a fixed capacity.

    The capacity is checked before every write; overflowing raises
    ``BufferOverflowError`` instead of truncating the content.
    """

    def __init__(self, capacity: int, label: str = "token") -> None:
        if capacity <= 0:
            raise ValueError("Buffer capacity must be > 0")
        self.capacity = capacity
        self.label = label
        self._chars: List[str] = []

    def append(self, char: str, position: Optional[StreamPosition] = None) -> None:
        """Add one character, failing cleanly when the buffer is full."""
        if len(self._chars) >= self.capacity:
            raise BufferOverflowError(
                f"{self.label} exceeds buffer capacity of {self.capacity} characters",
                position,
            )
        self._chars.append(char)

    def take(self) -> str:
        """Return the accumulated text and empty the buffer."""
        text = "".join(self._chars)
        self._chars.clear()
        return text

    def __len__(self) -> int:
        return len(self._chars)

    def __bool__(self) -> bool:
        return bool(self._chars)
