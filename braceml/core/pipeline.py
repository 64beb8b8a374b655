"""
Compile Pipeline
================

Source text to final HTML: parse, serialize, then pretty-print with fallback.
"""

from typing import Optional

from braceml.config.logging import get_logger
from braceml.config.settings import Settings, get_settings
from braceml.core.dsl.parser import parse_document
from braceml.core.rendering.formatter import BaseHTMLFormatter, HTMLFormatterFactory
from braceml.core.rendering.html_generator import generate_html
from braceml.models.schemas import CompileResult, FormatOptions

logger = get_logger(__name__)


def format_options_from_settings(settings: Settings) -> FormatOptions:
    return FormatOptions(
        use_tabs=settings.use_tabs,
        indent_size=settings.indent_size,
        indent_attributes=settings.indent_attributes,
        indent_cdata=settings.indent_cdata,
        strip_comments=settings.strip_comments,
    )


def compile_dsl(
    source: str,
    formatter: Optional[BaseHTMLFormatter] = None,
    options: Optional[FormatOptions] = None,
    settings: Optional[Settings] = None,
) -> CompileResult:
    """
    Compile DSL source to HTML.

    Args:
        source: Whole DSL document
        formatter: Formatter override; by default chosen from settings
        options: Formatting options override; by default built from settings
        settings: Settings override; defaults to the global settings

    Returns:
        CompileResult with the final HTML

    Raises:
        DSLParseError: If the source does not parse; no HTML is produced
    """
    settings = settings or get_settings()
    document = parse_document(source)

    if formatter is None and settings.format_output:
        formatter = HTMLFormatterFactory.create_formatter(settings.formatter)
    if options is None:
        options = format_options_from_settings(settings)

    result = generate_html(document, formatter, options)
    logger.info(
        "Compiled DSL document",
        root=document.root.name,
        formatted=result.formatted,
        html_length=len(result.html),
    )
    return result
