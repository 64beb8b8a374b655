"""
DSL Parser
==========

Recursive-descent parser turning DSL source into a :class:`Document` tree.

Grammar (whitespace is insignificant between tokens except inside strings)::

    document     := doctype-decl element
    doctype-decl := ("!doctype" | "!DOCTYPE") WS+ "{" WS* quoted-string WS* "}"
    element      := identifier id? class* WS* attributes? WS* "{" content "}"
    id           := "#" identifier
    class        := "." identifier
    attributes   := "[" (attribute (WS+ attribute)*)? "]"
    attribute    := attr-name "=" quoted-string
    content      := (WS* text-item)*
    text-item    := element | quoted-string
    identifier   := (alphanumeric | "_")+
    attr-name    := (alphanumeric | "_" | "-")+

Every rule below is a function from a :class:`Cursor` to a ``Success`` or
``Failure`` and can be used on its own. Once a rule has seen its leading
token (an identifier, ``#``, ``.``, ``[``, ``"`` or the doctype keyword) the
rest of it is mandatory and failures are committed.
"""

import time
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union

from braceml.config.logging import get_logger
from braceml.models.schemas import Attribute, Document, ParseResult, Plain, Tag

from .combinators import (
    Cursor,
    Failure,
    Result,
    Success,
    alt,
    cut,
    eof,
    escaped_transform,
    literal,
    many0,
    map_value,
    opt,
    preceded,
    run,
    separated0,
    sequence,
    take_while1,
    terminated,
    whitespace0,
    whitespace1,
    with_error,
)
from .errors import DoctypeSyntaxError, DSLParseError, ElementSyntaxError, StringSyntaxError

logger = get_logger(__name__)

ESCAPES = {"\\": "\\", '"': '"', "n": "\n"}


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _is_attribute_name_char(char: str) -> bool:
    return char.isalnum() or char in "_-"


def _is_string_char(char: str) -> bool:
    return char not in '"\\'


_tag_name = take_while1(_is_identifier_char, "tag name")
_identifier = take_while1(_is_identifier_char, "identifier")
_attribute_name = take_while1(_is_attribute_name_char, "attribute name")
_string_body = escaped_transform(_is_string_char, "\\", ESCAPES, StringSyntaxError)
_closing_quote = with_error(literal('"', "closing quote '\"'"), StringSyntaxError)


# Leaf rules

def parse_identifier(cursor: Cursor) -> Result:
    return _identifier(cursor)


def parse_tag_name(cursor: Cursor) -> Result:
    return _tag_name(cursor)


def parse_attribute_name(cursor: Cursor) -> Result:
    return _attribute_name(cursor)


def parse_quoted_string(cursor: Cursor) -> Result:
    """
    Parse a double-quoted string and decode its escapes.

    A missing opening quote is an ordinary failure owned by the caller;
    anything wrong after it is a committed :class:`StringSyntaxError`.
    """
    opening = literal('"', "opening quote '\"'")(cursor)
    if isinstance(opening, Failure):
        return opening
    return cut(terminated(_string_body, _closing_quote))(opening.cursor)


def parse_id(cursor: Cursor) -> Result:
    return preceded(literal("#"), cut(parse_identifier))(cursor)


def parse_class(cursor: Cursor) -> Result:
    return preceded(literal("."), cut(parse_identifier))(cursor)


def parse_classes(cursor: Cursor) -> Result:
    return many0(parse_class)(cursor)


def parse_attribute(cursor: Cursor) -> Result:
    name = parse_attribute_name(cursor)
    if isinstance(name, Failure):
        return name
    value = cut(
        preceded(
            literal("=", "'=' after attribute name"),
            alt(parse_quoted_string, expected="quoted attribute value"),
        )
    )(name.cursor)
    if isinstance(value, Failure):
        return value
    return Success(value.cursor, Attribute(name=name.value, value=value.value))


_attribute_list = sequence(
    whitespace0,
    separated0(parse_attribute, whitespace1()),
    whitespace0,
    literal("]", "attribute or closing bracket ']'"),
)


def parse_attributes(cursor: Cursor) -> Result:
    """attributes := "[" (attribute (WS+ attribute)*)? "]" """
    opening = literal("[")(cursor)
    if isinstance(opening, Failure):
        return opening
    return map_value(cut(_attribute_list), lambda values: tuple(values[1]))(opening.cursor)


# Element rules

_element_head = sequence(
    opt(parse_id),
    parse_classes,
    whitespace0,
    opt(parse_attributes),
    whitespace0,
    literal("{", "opening brace '{'"),
)
_closing_brace = literal("}", "element or closing brace '}'")


@dataclass
class _OpenTag:
    """An element whose opening brace has been read but not its closing one."""

    name: str
    id: Optional[str]
    classes: List[str]
    attributes: Optional[Tuple[Attribute, ...]]
    content: List[Union[Plain, Tag]] = field(default_factory=list)

    def close(self) -> Tag:
        return Tag(
            name=self.name,
            id=self.id,
            classes=tuple(self.classes) or None,
            attributes=self.attributes,
            content=tuple(self.content),
        )


def _open_tag(cursor: Cursor) -> Result:
    name = parse_tag_name(cursor)
    if isinstance(name, Failure):
        return name
    head = with_error(cut(_element_head), ElementSyntaxError)(name.cursor)
    if isinstance(head, Failure):
        return head
    element_id, classes, _, attributes, _, _ = head.value
    return Success(head.cursor, _OpenTag(name.value, element_id, classes, attributes))


def parse_custom_tag(cursor: Cursor) -> Result:
    """
    Parse one element together with everything nested inside it.

    Nesting is tracked with an explicit stack of open elements, so document
    depth is not bounded by the interpreter's recursion limit. Content items
    are tried in order: element, then quoted string, then the closing brace.

    Args:
        cursor: Position of the tag name

    Returns:
        ``Success`` with a :class:`Tag`, or a ``Failure`` that is committed
        whenever the tag name itself was present
    """
    opened = _open_tag(cursor)
    if isinstance(opened, Failure):
        return opened

    stack = [opened.value]
    cursor = opened.cursor
    while True:
        cursor = whitespace0(cursor).cursor

        child = _open_tag(cursor)
        if isinstance(child, Success):
            stack.append(child.value)
            cursor = child.cursor
            continue
        if child.committed:
            return child

        text = parse_quoted_string_element(cursor)
        if isinstance(text, Success):
            stack[-1].content.append(text.value)
            cursor = text.cursor
            continue
        if text.committed:
            return text

        closing = _closing_brace(cursor)
        if isinstance(closing, Failure):
            return replace(closing, error=ElementSyntaxError).commit()
        cursor = closing.cursor
        tag = stack.pop().close()
        if not stack:
            return Success(cursor, tag)
        stack[-1].content.append(tag)


def parse_quoted_string_element(cursor: Cursor) -> Result:
    return map_value(parse_quoted_string, lambda text: Plain(text=text))(cursor)


def parse_text_element(cursor: Cursor) -> Result:
    # An element is tried before a literal; an identifier never falls back to text.
    return preceded(
        whitespace0,
        alt(parse_custom_tag, parse_quoted_string_element, expected="element or quoted string"),
    )(cursor)


def parse_text(cursor: Cursor) -> Result:
    return many0(parse_text_element)(cursor)


# Document rules

_doctype_keyword = alt(literal("!doctype"), literal("!DOCTYPE"), expected="'!doctype' declaration")
_doctype_body = sequence(
    whitespace1("whitespace after '!doctype'"),
    literal("{", "opening brace '{'"),
    whitespace0,
    alt(parse_quoted_string, expected="quoted doctype string"),
    whitespace0,
    literal("}", "closing brace '}'"),
)


def parse_doctype(cursor: Cursor) -> Result:
    """Parse the leading doctype block into a pre-rendered declaration."""
    keyword = with_error(_doctype_keyword, DoctypeSyntaxError)(cursor)
    if isinstance(keyword, Failure):
        return keyword
    body = with_error(cut(_doctype_body), DoctypeSyntaxError)(keyword.cursor)
    if isinstance(body, Failure):
        return body
    return Success(body.cursor, f"<!DOCTYPE {body.value[3]}>\n")


def _parse_root(cursor: Cursor) -> Result:
    return with_error(
        alt(parse_custom_tag, expected="root element"), ElementSyntaxError
    )(cursor)


_document = sequence(
    whitespace0,
    parse_doctype,
    whitespace0,
    _parse_root,
    whitespace0,
    with_error(eof("end of input after the root element"), ElementSyntaxError),
)


def parse_document(source: str) -> Document:
    """
    Parse a complete DSL document.

    Args:
        source: Whole DSL source text

    Returns:
        Parsed document

    Raises:
        DoctypeSyntaxError: If the doctype block is missing or malformed
        ElementSyntaxError: If an element violates the grammar
        StringSyntaxError: If a quoted string is unterminated or badly escaped
    """
    _, values = run(_document, source)
    return Document(doctype=values[1], root=values[3])


def parse_element(source: str) -> Tag:
    """Parse a single element with no doctype, allowing surrounding whitespace."""
    _, values = run(
        sequence(whitespace0, _parse_root, whitespace0, with_error(eof(), ElementSyntaxError)),
        source,
    )
    return values[1]


def parse_dsl(content: str) -> ParseResult:
    """
    Parse DSL content without raising.

    Args:
        content: Raw DSL content

    Returns:
        ParseResult containing parsed document or errors
    """
    if not content or not content.strip():
        return ParseResult(
            success=False, document=None, errors=["Empty DSL content provided"], processing_time=0.0
        )

    start_time = time.time()
    try:
        document = parse_document(content)
    except DSLParseError as e:
        logger.info("DSL parsing failed", error=str(e), error_type=type(e).__name__)
        return ParseResult(
            success=False,
            document=None,
            errors=[str(e)],
            processing_time=time.time() - start_time,
        )

    processing_time = time.time() - start_time
    logger.debug("Parsed DSL document", root=document.root.name, processing_time=processing_time)
    return ParseResult(success=True, document=document, processing_time=processing_time)


def validate_dsl_syntax(content: str) -> bool:
    """Return True if ``content`` is a syntactically valid DSL document."""
    return parse_dsl(content).success
