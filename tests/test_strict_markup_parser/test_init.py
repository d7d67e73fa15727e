"""Test module for strict_markup_parser package initialization."""


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import strict_markup_parser

    # Assert
    assert isinstance(strict_markup_parser.__version__, str)
    assert strict_markup_parser.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import strict_markup_parser

    # Assert
    assert strict_markup_parser.__author__ == "Strict Markup Parser Team"


def test_package_all_exports() -> None:
    """Test that every name in __all__ is importable from the package."""
    # Arrange & Act
    import strict_markup_parser

    # Assert
    for name in strict_markup_parser.__all__:
        assert hasattr(strict_markup_parser, name), name
    assert {"tokenize", "build_tree", "parse", "MarkupParser"} <= set(strict_markup_parser.__all__)


def test_top_level_parse() -> None:
    """Test the package-level parse entry point."""
    # Arrange
    from strict_markup_parser import ElementNode, TextNode, parse

    # Act
    nodes = parse('<p class="x">hi</p>')

    # Assert
    assert nodes == [ElementNode("p", {"class": "x"}, [TextNode("hi")])]
