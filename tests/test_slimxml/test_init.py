"""Test module for slimxml package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import slimxml

    # Assert
    assert slimxml is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import slimxml

    # Assert
    assert isinstance(slimxml.__version__, str)
    assert slimxml.__version__ == "0.1.0"


def test_package_all_exports() -> None:
    """Test that __all__ contains expected exports."""
    # Arrange & Act
    import slimxml

    # Assert
    for name in ("load_file", "load_string", "parse", "SlimXMLParser",
                 "Node", "XMLDocument", "resolve_value", "resolve_node",
                 "ParserConfig", "SlimXMLError"):
        assert name in slimxml.__all__
        assert hasattr(slimxml, name)


def test_top_level_round_trip() -> None:
    """Test loading and querying through the top-level names only."""
    # Arrange
    import slimxml

    # Act
    doc = slimxml.load_string(
        '<?xml version="1.0" encoding="UTF-8"?>\n<a><b>42</b></a>'
    )

    # Assert
    assert slimxml.get_int(doc, "a/b$", 0) == 42
    assert doc.get_value("a/b$") == "42"
