"""Tests for attributes, attribute lists and the attribute reader."""

import pytest

from slimxml.character import CharacterStream
from slimxml.shared.errors import (
    BufferOverflowError,
    InvalidOperationError,
    MalformedTagError,
    UnexpectedEndOfInputError,
)
from slimxml.tokenization import Attribute, AttributeList, read_attribute


class TestAttribute:
    """Test Attribute accessors."""

    def test_defaults(self):
        """Test a freshly created attribute."""
        attr = Attribute()

        assert attr.name == ""
        assert attr.value == ""

    def test_set_and_copy(self):
        """Test setters and copy_from."""
        source = Attribute("id", "7")
        target = Attribute()

        target.copy_from(source)

        assert target == source
        assert target is not source
        assert hash(target) == hash(source)

    def test_none_rejected(self):
        """Test that None names and values are rejected."""
        attr = Attribute("a", "b")

        with pytest.raises(ValueError, match="name cannot be None"):
            attr.name = None  # type: ignore[assignment]
        with pytest.raises(ValueError, match="value cannot be None"):
            attr.value = None  # type: ignore[assignment]

    def test_non_string_rejected(self):
        """Test that non-string values are rejected."""
        with pytest.raises(TypeError):
            Attribute("a", 5)  # type: ignore[arg-type]


class TestAttributeList:
    """Test AttributeList ordering and lookup."""

    def test_add_prepends(self):
        """Test that traversal order is reverse insertion order."""
        attrs = AttributeList()
        attrs.add(Attribute("x", "1"))
        attrs.add(Attribute("y", "2"))

        assert attrs.to_list() == [("y", "2"), ("x", "1")]
        assert len(attrs) == 2

    def test_transfer_restores_insertion_order(self):
        """Test that moving attributes reverses traversal order."""
        source = AttributeList()
        source.add(Attribute("x", "1"))
        source.add(Attribute("y", "2"))
        target = AttributeList()

        source.transfer_to(target)

        assert target.to_list() == [("x", "1"), ("y", "2")]
        assert not source

    def test_pop_first_on_empty(self):
        """Test detaching from an empty list."""
        with pytest.raises(InvalidOperationError, match="Nothing to detach"):
            AttributeList().pop_first()

    def test_duplicates_first_match(self):
        """Test that duplicate names are kept and lookup returns the first."""
        attrs = AttributeList()
        attrs.add(Attribute("k", "old"))
        attrs.add(Attribute("k", "new"))

        assert len(attrs) == 2
        assert attrs.get("k") == "new"
        assert attrs.matches("k", "old")
        assert attrs.get("missing", "d") == "d"
        assert attrs.find("missing") is None

    def test_add_rejects_non_attribute(self):
        """Test type checking on add."""
        with pytest.raises(TypeError):
            AttributeList().add(("a", "b"))  # type: ignore[arg-type]


class TestReadAttribute:
    """Test reading name="value" pairs from a stream."""

    def test_simple_pair(self):
        """Test reading one attribute and stopping after the quote."""
        stream = CharacterStream('id="42" rest')

        attr = read_attribute(stream, 200)

        assert (attr.name, attr.value) == ("id", "42")
        assert stream.peek() == " "

    def test_value_may_contain_markup_characters(self):
        """Test that values run to the closing quote."""
        stream = CharacterStream('expr="a<b/>c"')

        assert read_attribute(stream, 200).value == "a<b/>c"

    def test_empty_value(self):
        """Test an empty quoted value."""
        assert read_attribute(CharacterStream('x=""'), 200).value == ""

    def test_missing_quote(self):
        """Test that unquoted values are malformed."""
        with pytest.raises(MalformedTagError, match="double quotes"):
            read_attribute(CharacterStream("id=42"), 200)

    def test_missing_equals(self):
        """Test that a name followed by a terminator is malformed."""
        with pytest.raises(MalformedTagError, match="Unexpected character"):
            read_attribute(CharacterStream("checked>"), 200)

    def test_empty_name(self):
        """Test that an attribute needs a name."""
        with pytest.raises(MalformedTagError, match="Attribute without a name"):
            read_attribute(CharacterStream('="v"'), 200)

    def test_eof_inside_value(self):
        """Test end of input inside a quoted value."""
        with pytest.raises(UnexpectedEndOfInputError):
            read_attribute(CharacterStream('id="4'), 200)

    def test_eof_inside_name(self):
        """Test end of input inside the name."""
        with pytest.raises(UnexpectedEndOfInputError):
            read_attribute(CharacterStream("id"), 200)

    def test_value_overflow(self):
        """Test that long values raise instead of truncating."""
        with pytest.raises(BufferOverflowError, match="attribute value"):
            read_attribute(CharacterStream('v="abcdef"'), 4)
