"""Tests for the capacity-checked scratch buffer."""

import pytest

from slimxml.shared.errors import BufferOverflowError, StreamPosition
from slimxml.tokenization import ScratchBuffer


class TestScratchBuffer:
    """Test ScratchBuffer behaviour."""

    def test_accumulate_and_take(self):
        """Test that take returns and clears the content."""
        buffer = ScratchBuffer(5)
        for char in "abc":
            buffer.append(char)

        assert len(buffer) == 3
        assert buffer.take() == "abc"
        assert not buffer
        assert buffer.take() == ""

    def test_fills_to_capacity(self):
        """Test that exactly capacity characters fit."""
        buffer = ScratchBuffer(3)
        for char in "abc":
            buffer.append(char)

        assert buffer.take() == "abc"

    def test_overflow_raises_instead_of_truncating(self):
        """Test that one character over capacity raises."""
        buffer = ScratchBuffer(2, "tag name")
        buffer.append("a")
        buffer.append("b")

        with pytest.raises(BufferOverflowError, match="tag name exceeds buffer capacity of 2"):
            buffer.append("c", StreamPosition(1, 4, 3))

        assert buffer.take() == "ab"

    def test_invalid_capacity(self):
        """Test capacity validation."""
        with pytest.raises(ValueError, match="Buffer capacity must be > 0"):
            ScratchBuffer(0)
