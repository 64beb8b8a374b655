"""
HTML Formatter
==============

Pretty-printing of generated HTML behind a narrow ``format(html, options)``
interface, so the backend can be swapped or stubbed without touching the
serializer.
"""

from typing import Any, Dict, List, Tuple, Type
from abc import ABC, abstractmethod

from bs4 import BeautifulSoup, Comment
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from braceml.config.logging import get_logger
from braceml.models.schemas import FormatOptions

logger = get_logger(__name__)

CDATA_TAGS = frozenset(["script", "style"])
PRESERVE_WHITESPACE_TAGS = frozenset(["pre", "textarea"])


class FormatterError(Exception):
    """Exception raised when the formatter rejects the generated HTML."""

    pass


class BaseHTMLFormatter(ABC):
    """Abstract base class for HTML formatters."""

    @abstractmethod
    def format(self, html: str, options: FormatOptions) -> str:
        """
        Reformat an HTML string.

        Raises:
            FormatterError: If the HTML cannot be formatted
        """
        pass


class PassthroughHTMLFormatter(BaseHTMLFormatter):
    """Formatter that returns its input unchanged."""

    def format(self, html: str, options: FormatOptions) -> str:
        return html


class _SourceOrderFormatter(HTMLFormatter):
    """HTMLFormatter that keeps attributes in the order they were written."""

    def attributes(self, tag: Any) -> List[Tuple[str, Any]]:
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


class SoupHTMLFormatter(BaseHTMLFormatter):
    """BeautifulSoup-based pretty-printer."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(formatter="soup")  # structlog.BoundLoggerBase

    def format(self, html: str, options: FormatOptions) -> str:
        """
        Reindent ``html`` one element per line.

        Args:
            html: Flat HTML string
            options: Formatting options

        Returns:
            Formatted HTML without a trailing newline

        Raises:
            FormatterError: If the options are unsupported or formatting fails
        """
        if options.indent_attributes:
            raise FormatterError("Per-line attribute indentation is not supported")

        try:
            soup = BeautifulSoup(html, "html.parser", **self._builder_options(options))

            if options.strip_comments:
                for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
                    comment.extract()

            formatter = _SourceOrderFormatter(
                entity_substitution=EntitySubstitution.substitute_xml,
                void_element_close_prefix=None,
                indent=self._indent(options),
            )
            formatted = soup.prettify(formatter=formatter)
        except Exception as e:
            error_msg = f"HTML formatting failed: {e}"
            self.logger.error("Formatting failed", error=error_msg)
            raise FormatterError(error_msg) from e

        self.logger.debug("HTML formatted", input_length=len(html), output_length=len(formatted))
        return formatted.rstrip("\n")

    def _builder_options(self, options: FormatOptions) -> Dict[str, Any]:
        preserve = set(PRESERVE_WHITESPACE_TAGS)
        if not options.indent_cdata:
            preserve |= CDATA_TAGS
        return {
            # keep class="a b" as one string
            "multi_valued_attributes": None,
            "preserve_whitespace_tags": preserve,
        }

    def _indent(self, options: FormatOptions) -> str:
        if options.use_tabs:
            return "\t"
        return " " * options.indent_size


class HTMLFormatterFactory:
    """Factory for creating HTML formatters."""

    _formatters: Dict[str, Type[BaseHTMLFormatter]] = {
        "soup": SoupHTMLFormatter,
        "none": PassthroughHTMLFormatter,
    }

    @classmethod
    def create_formatter(cls, formatter_type: str = "soup") -> BaseHTMLFormatter:
        """
        Create HTML formatter instance.

        Args:
            formatter_type: Type of formatter ("soup", "none")

        Returns:
            HTML formatter instance

        Raises:
            ValueError: If formatter type is not supported
        """
        if formatter_type not in cls._formatters:
            raise ValueError(f"Unsupported formatter type: {formatter_type}")

        return cls._formatters[formatter_type]()
