"""
Test Assertions
===============

Custom assertion helpers for testing DSL parsing and HTML generation.
"""

from typing import Any, List, Optional, Type

from braceml.core.dsl.errors import DSLParseError
from braceml.models.schemas import Document, ParseResult, Plain, Tag


def assert_valid_tag(element: Tag) -> None:
    """Assert that a tag and its subtree are well formed."""
    assert isinstance(element, Tag)
    assert element.name
    if element.classes is not None:
        assert all(element.classes)
    for child in element.content:
        assert isinstance(child, (Plain, Tag))
        if isinstance(child, Tag):
            assert_valid_tag(child)


def assert_successful_parse_result(result: ParseResult) -> None:
    """Assert that a parse result is successful."""
    assert isinstance(result, ParseResult)
    assert result.success is True
    assert isinstance(result.document, Document)
    assert len(result.errors) == 0
    assert_valid_tag(result.document.root)


def assert_failed_parse_result(result: ParseResult, expected_errors: Optional[List[str]] = None) -> None:
    """Assert that a parse result failed with expected errors."""
    assert isinstance(result, ParseResult)
    assert result.success is False
    assert result.document is None
    assert len(result.errors) > 0

    if expected_errors:
        for expected_error in expected_errors:
            assert any(expected_error in error for error in result.errors), \
                f"Expected error '{expected_error}' not found in {result.errors}"


def assert_parse_error(
    error: DSLParseError,
    error_class: Type[DSLParseError],
    expected: Optional[str] = None,
    remaining: Optional[str] = None,
) -> None:
    """Assert the class, expected construct and remaining input of a parse error."""
    assert type(error) is error_class, f"Expected {error_class.__name__}, got {type(error).__name__}: {error}"
    if expected is not None:
        assert expected in error.expected, f"Expected '{expected}' in '{error.expected}'"
    if remaining is not None:
        assert error.remaining.startswith(remaining), \
            f"Expected remaining input to start with {remaining!r}, got {error.remaining!r}"


def assert_html_matches_tree(html_element: Any, tag: Tag) -> None:
    """Assert a parsed HTML element mirrors a tree tag: name, id, classes, attributes, children."""
    assert html_element.name == tag.name
    assert html_element.get("id") == tag.id
    expected_classes = " ".join(tag.classes) if tag.classes else None
    assert html_element.get("class") == expected_classes

    expected_attributes = {a.name: a.value for a in tag.attributes or ()}
    actual_attributes = {
        key: value for key, value in html_element.attrs.items() if key not in ("id", "class")
    }
    assert actual_attributes == expected_attributes

    child_tags = [child for child in tag.content if isinstance(child, Tag)]
    child_elements = html_element.find_all(recursive=False)
    assert len(child_elements) == len(child_tags)
    for child_element, child_tag in zip(child_elements, child_tags):
        assert_html_matches_tree(child_element, child_tag)
