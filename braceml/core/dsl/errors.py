"""
DSL Parse Errors
================

Exception hierarchy raised when DSL source violates the grammar.

Every error names the construct the parser expected and the unconsumed
remainder of the input at the failure point.
"""

from typing import Optional

PREVIEW_LENGTH = 40


class DSLParseError(Exception):
    """Exception raised when DSL parsing fails."""

    construct = "document"

    def __init__(
        self,
        expected: str,
        remaining: str = "",
        line: int = 1,
        column: int = 1,
        offset: int = 0,
        message: Optional[str] = None,
    ) -> None:
        self.expected = expected
        self.remaining = remaining
        self.line = line
        self.column = column
        self.offset = offset
        super().__init__(message or self._format_message())

    def _format_message(self) -> str:
        if not self.remaining:
            found = "end of input"
        elif len(self.remaining) > PREVIEW_LENGTH:
            found = repr(self.remaining[:PREVIEW_LENGTH]) + "..."
        else:
            found = repr(self.remaining)
        return (
            f"Invalid {self.construct}: expected {self.expected} "
            f"at line {self.line}, column {self.column}; remaining input: {found}"
        )


class DoctypeSyntaxError(DSLParseError):
    """The leading doctype block is missing or malformed."""

    construct = "doctype declaration"


class ElementSyntaxError(DSLParseError):
    """An element violates the grammar (brace, identifier, attribute list)."""

    construct = "element"


class StringSyntaxError(DSLParseError):
    """A quoted string is unterminated or contains an unrecognized escape."""

    construct = "quoted string"
