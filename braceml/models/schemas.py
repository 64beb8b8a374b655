"""
Pydantic Models and Schemas
===========================

Core data models for the document tree produced by the DSL parser and the
result objects returned by the parse and compile pipeline.

The tree models are frozen: a tree is built bottom-up by the parser and only
read afterwards.
"""

from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


# Document Tree Models
class Attribute(BaseModel):
    """A single ``name="value"`` pair from an attribute list."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Attribute name")
    value: str = Field("", description="Decoded attribute value")


class Plain(BaseModel):
    """Literal character data, already escape-decoded."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str = Field("", description="Decoded text")


class Tag(BaseModel):
    """An element with its selector parts, attributes and child nodes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tag"] = "tag"
    name: str = Field(..., min_length=1, description="Tag name")
    id: Optional[str] = Field(None, description="Value of the #id shorthand")
    classes: Optional[Tuple[str, ...]] = Field(None, description="Class names in source order")
    attributes: Optional[Tuple[Attribute, ...]] = Field(
        None, description="Attributes in source order, duplicates allowed"
    )
    content: Tuple["TextElement", ...] = Field(default_factory=tuple, description="Child nodes")


TextElement = Annotated[Union[Plain, Tag], Field(discriminator="kind")]

# Update forward reference
Tag.model_rebuild()


class Document(BaseModel):
    """A parsed DSL document: one doctype declaration and one root element."""

    model_config = ConfigDict(frozen=True)

    doctype: str = Field(..., description="Pre-rendered <!DOCTYPE ...> declaration")
    root: Tag = Field(..., description="Root element")


# Parsing Results
class ParseResult(BaseModel):
    """Result of DSL parsing operation."""

    success: bool = Field(..., description="Whether parsing succeeded")
    document: Optional[Document] = Field(None, description="Parsed document")
    errors: List[str] = Field(default_factory=list, description="Parsing errors")
    processing_time: Optional[float] = Field(None, description="Parsing time in seconds")


# Rendering Models
class FormatOptions(BaseModel):
    """Options handed to the HTML pretty-printer."""

    use_tabs: bool = Field(False, description="Indent with tabs instead of spaces")
    indent_size: int = Field(2, ge=0, le=16, description="Spaces per indentation level")
    indent_attributes: bool = Field(False, description="Put each attribute on its own line")
    indent_cdata: bool = Field(False, description="Reindent script/style contents")
    strip_comments: bool = Field(False, description="Drop HTML comments")


class CompileResult(BaseModel):
    """Result of compiling DSL source to HTML."""

    html: str = Field(..., description="Generated HTML")
    formatted: bool = Field(False, description="Whether the formatter output was used")
    formatter_error: Optional[str] = Field(None, description="Formatter failure, if any")
    processing_time: Optional[float] = Field(None, description="Compile time in seconds")
