"""Tests for typed value accessors."""

import logging

import pytest

from slimxml.api import load_string
from slimxml.shared.config import ParserConfig
from slimxml.query import (
    convert_bool,
    convert_double,
    convert_int,
    get_bool,
    get_double,
    get_int,
    get_string,
)
from slimxml.shared.errors import InvalidOperationError
from slimxml.tree import Node


@pytest.fixture
def document():
    """Document with values of several types."""
    doc = load_string(
        "<a>"
        "<b>42</b><neg> -7 </neg><word>abc</word>"
        "<yes>true</yes><no>false</no><other>yes</other>"
        "<pi>3.5</pi><exp>1e3</exp>"
        "<grouped>1_000</grouped><arabic>\u0661\u0662</arabic>"
        "</a>",
        ParserConfig.lenient(),
    )
    yield doc
    doc.close()


class TestGetString:
    """Test get_string."""

    def test_found_and_missing(self, document):
        """Test found values and defaults."""
        assert get_string(document, "a/b$") == "42"
        assert get_string(document, "a/zz$", "dflt") == "dflt"
        assert get_string(document, "a/zz$") is None


class TestGetInt:
    """Test get_int."""

    def test_found(self, document):
        """Test integer conversion."""
        assert get_int(document, "a/b$", 0) == 42
        assert get_int(document, "a/neg$", 0) == -7

    def test_missing_returns_default(self, document):
        """Test the default when the path does not resolve."""
        assert get_int(document, "a/zz$", 0) == 0
        assert get_int(document, "a/zz$", 5) == 5

    def test_unconvertible_returns_default_and_warns(self, document, caplog):
        """Test non-numeric values."""
        with caplog.at_level(logging.WARNING, logger="slimxml.query.accessors"):
            assert get_int(document, "a/word$", 9) == 9

        assert "not an integer" in caplog.records[-1].getMessage()
        assert caplog.records[-1].path == "a/word$"


class TestGetBool:
    """Test get_bool."""

    def test_literals(self, document):
        """Test that only exact literals map to booleans."""
        assert get_bool(document, "a/yes$", False) is True
        assert get_bool(document, "a/no$", True) is False

    def test_other_values_return_default(self, document):
        """Test that 'yes' is not a boolean."""
        assert get_bool(document, "a/other$", False) is False
        assert get_bool(document, "a/other$", True) is True
        assert get_bool(document, "a/zz$", True) is True


class TestGetDouble:
    """Test get_double."""

    def test_found(self, document):
        """Test float conversion."""
        assert get_double(document, "a/pi$", 0.0) == 3.5
        assert get_double(document, "a/exp$", 0.0) == 1000.0
        assert get_double(document, "a/b$", 0.0) == 42.0

    def test_unconvertible_returns_default(self, document):
        """Test non-numeric values."""
        assert get_double(document, "a/word$", -1.0) == -1.0
        assert get_double(document, "a/zz$", 2.5) == 2.5


class TestSources:
    """Test accepted query sources."""

    def test_node_source(self):
        """Test querying a subtree through a node."""
        root = Node("a")
        root.add_child(Node("b", "12"))

        assert get_int(root, "a/b$", 0) == 12

    def test_invalid_source(self):
        """Test that other sources are rejected."""
        with pytest.raises(TypeError, match="Expected XMLDocument or Node"):
            get_string("<a/>", "a$")  # type: ignore[arg-type]

    def test_closed_document(self, document):
        """Test that a closed document cannot be queried."""
        document.close()

        with pytest.raises(InvalidOperationError, match="has been closed"):
            get_string(document, "a/b$")


class TestNumberSyntax:
    """Test which spellings count as numbers."""

    def test_python_only_forms_rejected(self, document):
        """Test that digit group underscores and non-ASCII digits are not numbers."""
        assert get_int(document, "a/grouped$", -1) == -1
        assert get_int(document, "a/arabic$", -1) == -1
        assert get_double(document, "a/grouped$", -1.0) == -1.0
        assert get_double(document, "a/arabic$", -1.0) == -1.0

    def test_convert_int(self):
        """Test integer conversion of stored text."""
        assert convert_int(" +12 ") == 12
        assert convert_int("-3") == -3
        assert convert_int("1_000") is None
        assert convert_int("1.5") is None
        assert convert_int("") is None

    def test_convert_double(self):
        """Test float conversion of stored text."""
        assert convert_double("2.5e-1") == 0.25
        assert convert_double("1_0.5") is None
        assert convert_double("abc") is None

    def test_convert_bool(self):
        """Test boolean literal mapping."""
        assert convert_bool("true") is True
        assert convert_bool("false") is False
        assert convert_bool("True") is None
