"""
HTML Generator
==============

Convert parsed DSL document trees into HTML markup.

Serialization is a pure depth-first walk: plain text is emitted verbatim
(no entity encoding), elements as open/close pairs. Two tag names are
special-cased by exact, case-sensitive match: ``br`` renders as the void
element ``<br>`` and ``doctype`` renders as ``<!DOCTYPE content>``.
"""

from typing import Any, List, Optional, Sequence, Tuple
import time

from braceml.config.logging import get_logger
from braceml.models.schemas import Attribute, CompileResult, Document, FormatOptions, Plain, Tag

from .formatter import BaseHTMLFormatter, FormatterError

logger = get_logger(__name__)

VOID_TAG = "br"
DOCTYPE_TAG = "doctype"


def to_html(element: Any) -> str:
    """
    Render one tree node and its descendants.

    Args:
        element: A ``Plain`` or ``Tag`` node

    Returns:
        HTML fragment

    Raises:
        TypeError: If ``element`` is not a tree node
    """
    if not isinstance(element, (Plain, Tag)):
        raise TypeError(f"Cannot render {type(element).__name__} as HTML")

    parts: List[str] = []
    # Pending nodes and closing markup, last in first out
    pending: List[Any] = [element]
    while pending:
        node = pending.pop()
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, Plain):
            parts.append(node.text)
        elif node.name == VOID_TAG:
            parts.append("<br>")
        else:
            open_tag, close_tag = _tag_markup(node)
            parts.append(open_tag)
            pending.append(close_tag)
            pending.extend(reversed(node.content))
    return "".join(parts)


def _tag_markup(element: Tag) -> Tuple[str, str]:
    if element.name == DOCTYPE_TAG:
        return "<!DOCTYPE ", ">"

    segments = [
        segment
        for segment in (
            _id_html(element.id),
            _classes_html(element.classes),
            _attributes_html(element.attributes),
        )
        if segment
    ]
    open_tag = " ".join([element.name] + segments)
    return f"<{open_tag}>", f"</{element.name}>"


def _id_html(element_id: Optional[str]) -> str:
    if element_id is None:
        return ""
    return f'id="{element_id}"'


def _classes_html(classes: Optional[Sequence[str]]) -> str:
    if not classes:
        return ""
    return f'class="{" ".join(classes)}"'


def _attributes_html(attributes: Optional[Sequence[Attribute]]) -> str:
    if not attributes:
        return ""
    pairs: List[str] = [f'{attribute.name}="{attribute.value}"' for attribute in attributes]
    return " ".join(pairs)


def document_to_html(document: Document) -> str:
    """Render a whole document: the doctype declaration followed by the root element."""
    return document.doctype + to_html(document.root)


def generate_html(
    document: Document,
    formatter: Optional[BaseHTMLFormatter] = None,
    options: Optional[FormatOptions] = None,
) -> CompileResult:
    """
    Generate HTML from a parsed document and pretty-print it once.

    If the formatter fails, the unformatted HTML is returned instead.

    Args:
        document: Parsed DSL document
        formatter: Optional formatter; without one the flat HTML is returned
        options: Formatting options, defaults to ``FormatOptions()``

    Returns:
        CompileResult with the final HTML
    """
    start_time = time.time()
    html = document_to_html(document)

    if formatter is None:
        return CompileResult(html=html, formatted=False, processing_time=time.time() - start_time)

    try:
        formatted = formatter.format(html, options or FormatOptions())
    except FormatterError as e:
        logger.warning("Formatter failed, using unformatted HTML", error=str(e))
        return CompileResult(
            html=html,
            formatted=False,
            formatter_error=str(e),
            processing_time=time.time() - start_time,
        )

    logger.debug("HTML generation completed", html_length=len(formatted))
    return CompileResult(html=formatted, formatted=True, processing_time=time.time() - start_time)
