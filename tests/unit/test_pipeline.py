"""
Unit Tests for Compile Pipeline
===============================

Unit tests for settings-driven compilation of DSL source to HTML.
"""

from unittest.mock import patch

import pytest

from braceml.core.dsl.errors import ElementSyntaxError
from braceml.core.dsl.parser import parse_document
from braceml.core.pipeline import compile_dsl, format_options_from_settings
from braceml.core.rendering.formatter import FormatterError, PassthroughHTMLFormatter, SoupHTMLFormatter
from braceml.core.rendering.html_generator import document_to_html
from braceml.models.schemas import FormatOptions

from tests.utils.data_generators import DSLDataGenerator


class TestFormatOptionsFromSettings:
    """Test mapping settings onto formatter options."""

    def test_defaults(self, test_settings):
        assert format_options_from_settings(test_settings) == FormatOptions()

    def test_overrides(self, test_settings):
        settings = test_settings.model_copy(
            update={"use_tabs": True, "indent_size": 4, "strip_comments": True}
        )
        options = format_options_from_settings(settings)

        assert options.use_tabs is True
        assert options.indent_size == 4
        assert options.strip_comments is True


class TestCompileDSL:
    """Test the compile pipeline."""

    def test_formats_by_default(self, sample_dsl):
        result = compile_dsl(sample_dsl)

        assert result.formatted is True
        assert result.html.startswith("<!DOCTYPE html>")
        assert "\n  <head>" in result.html

    def test_format_output_disabled(self, sample_dsl, test_settings):
        settings = test_settings.model_copy(update={"format_output": False})
        result = compile_dsl(sample_dsl, settings=settings)

        assert result.formatted is False
        assert result.html == document_to_html(parse_document(sample_dsl))

    def test_none_formatter_setting(self, sample_dsl, test_settings):
        settings = test_settings.model_copy(update={"formatter": "none"})
        result = compile_dsl(sample_dsl, settings=settings)

        assert result.html == document_to_html(parse_document(sample_dsl))

    def test_explicit_formatter_and_options(self, sample_dsl):
        result = compile_dsl(
            sample_dsl, formatter=SoupHTMLFormatter(), options=FormatOptions(use_tabs=True)
        )
        assert "\n\t<head>" in result.html

    def test_explicit_formatter_wins_over_settings(self, sample_dsl, test_settings):
        settings = test_settings.model_copy(update={"format_output": False})
        result = compile_dsl(sample_dsl, formatter=PassthroughHTMLFormatter(), settings=settings)

        assert result.formatted is True

    def test_formatter_failure_falls_back(self, sample_dsl):
        with patch.object(SoupHTMLFormatter, "format", side_effect=FormatterError("boom")):
            result = compile_dsl(sample_dsl)

        assert result.formatted is False
        assert result.formatter_error == "boom"
        assert result.html == document_to_html(parse_document(sample_dsl))

    def test_parse_error_propagates(self):
        with pytest.raises(ElementSyntaxError):
            compile_dsl(DSLDataGenerator.generate_missing_closing_brace())

    def test_formatter_not_consulted_on_parse_error(self):
        with patch.object(SoupHTMLFormatter, "format") as mock_format:
            with pytest.raises(ElementSyntaxError):
                compile_dsl(DSLDataGenerator.generate_missing_closing_brace())

        mock_format.assert_not_called()
