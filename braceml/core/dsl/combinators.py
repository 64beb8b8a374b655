"""
Parser Combinators
==================

Small combinator toolkit the DSL grammar is assembled from.

A rule is any callable taking a :class:`Cursor` and returning either a
:class:`Success` (new cursor plus parsed value) or a :class:`Failure`. Failures
are *uncommitted* by default, meaning alternation and repetition may try
something else at the same position. :func:`cut` marks a failure as
committed; committed failures propagate through every combinator and abort
the parse.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from .errors import DSLParseError, ElementSyntaxError


@dataclass(frozen=True)
class Cursor:
    """Immutable view of the unconsumed suffix of the source text."""

    text: str
    offset: int = 0

    @property
    def rest(self) -> str:
        return self.text[self.offset:]

    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def peek(self) -> str:
        """Return the next character, or an empty string at end of input."""
        return self.text[self.offset:self.offset + 1]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.offset)

    def advance(self, count: int) -> "Cursor":
        return Cursor(self.text, min(self.offset + count, len(self.text)))

    @property
    def line(self) -> int:
        return self.text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        return self.offset - (self.text.rfind("\n", 0, self.offset) + 1) + 1


@dataclass(frozen=True)
class Success:
    cursor: Cursor
    value: Any


@dataclass(frozen=True)
class Failure:
    """A rule that did not match, and where."""

    cursor: Cursor
    expected: str
    error: Optional[Type[DSLParseError]] = None
    committed: bool = False

    def commit(self) -> "Failure":
        return self if self.committed else replace(self, committed=True)

    def to_exception(self) -> DSLParseError:
        error_class = self.error or ElementSyntaxError
        return error_class(
            expected=self.expected,
            remaining=self.cursor.rest,
            line=self.cursor.line,
            column=self.cursor.column,
            offset=self.cursor.offset,
        )


Result = Union[Success, Failure]
Rule = Callable[[Cursor], Result]


def literal(text: str, expected: Optional[str] = None) -> Rule:
    """Match ``text`` exactly."""
    label = expected or repr(text)

    def rule(cursor: Cursor) -> Result:
        if cursor.startswith(text):
            return Success(cursor.advance(len(text)), text)
        return Failure(cursor, label)

    return rule


def take_while(predicate: Callable[[str], bool]) -> Rule:
    """Consume zero or more characters matching ``predicate``. Never fails."""

    def rule(cursor: Cursor) -> Result:
        text = cursor.text
        end = cursor.offset
        while end < len(text) and predicate(text[end]):
            end += 1
        return Success(Cursor(text, end), text[cursor.offset:end])

    return rule


def take_while1(predicate: Callable[[str], bool], expected: str) -> Rule:
    """Consume one or more characters matching ``predicate``."""
    inner = take_while(predicate)

    def rule(cursor: Cursor) -> Result:
        result = inner(cursor)
        if not result.value:
            return Failure(cursor, expected)
        return result

    return rule


whitespace0 = take_while(str.isspace)


def whitespace1(expected: str = "whitespace") -> Rule:
    return take_while1(str.isspace, expected)


def eof(expected: str = "end of input") -> Rule:
    def rule(cursor: Cursor) -> Result:
        if cursor.at_end():
            return Success(cursor, None)
        return Failure(cursor, expected)

    return rule


def sequence(*rules: Rule) -> Rule:
    """Run ``rules`` one after another; the value is the tuple of their values."""

    def rule(cursor: Cursor) -> Result:
        values: List[Any] = []
        for inner in rules:
            result = inner(cursor)
            if isinstance(result, Failure):
                return result
            cursor = result.cursor
            values.append(result.value)
        return Success(cursor, tuple(values))

    return rule


def alt(*rules: Rule, expected: Optional[str] = None) -> Rule:
    """
    Ordered alternation.

    Each branch starts from the same cursor; the first success wins. A
    committed failure stops the search. When every branch fails the result is
    a failure at the starting cursor labelled ``expected`` if given, otherwise
    the last branch's failure.
    """

    def rule(cursor: Cursor) -> Result:
        failure: Optional[Failure] = None
        for inner in rules:
            result = inner(cursor)
            if isinstance(result, Success) or result.committed:
                return result
            failure = result
        if expected is not None or failure is None:
            return Failure(cursor, expected or "alternative")
        return failure

    return rule


def opt(inner: Rule) -> Rule:
    """Zero or one ``inner``; absence yields ``None`` and leaves the cursor untouched."""

    def rule(cursor: Cursor) -> Result:
        result = inner(cursor)
        if isinstance(result, Failure) and not result.committed:
            return Success(cursor, None)
        return result

    return rule


def many0(inner: Rule) -> Rule:
    """Zero or more ``inner``, stopping at the first uncommitted failure."""

    def rule(cursor: Cursor) -> Result:
        values: List[Any] = []
        while True:
            result = inner(cursor)
            if isinstance(result, Failure):
                if result.committed:
                    return result
                return Success(cursor, values)
            if result.cursor.offset == cursor.offset:
                # no progress, stop rather than loop forever
                return Success(cursor, values)
            values.append(result.value)
            cursor = result.cursor

    return rule


def separated0(inner: Rule, separator: Rule) -> Rule:
    """Zero or more ``inner`` separated by ``separator``."""

    def rule(cursor: Cursor) -> Result:
        first = inner(cursor)
        if isinstance(first, Failure):
            return first if first.committed else Success(cursor, [])
        values: List[Any] = [first.value]
        cursor = first.cursor
        while True:
            sep = separator(cursor)
            if isinstance(sep, Failure):
                return sep if sep.committed else Success(cursor, values)
            item = inner(sep.cursor)
            if isinstance(item, Failure):
                # a dangling separator belongs to whatever follows the list
                return item if item.committed else Success(cursor, values)
            values.append(item.value)
            cursor = item.cursor

    return rule


def preceded(first: Rule, second: Rule) -> Rule:
    """Run both rules, keep the value of ``second``."""
    return map_value(sequence(first, second), lambda values: values[1])


def terminated(first: Rule, second: Rule) -> Rule:
    """Run both rules, keep the value of ``first``."""
    return map_value(sequence(first, second), lambda values: values[0])


def delimited(opening: Rule, inner: Rule, closing: Rule) -> Rule:
    """Run three rules, keep the value of the middle one."""
    return map_value(sequence(opening, inner, closing), lambda values: values[1])


def map_value(inner: Rule, func: Callable[[Any], Any]) -> Rule:
    def rule(cursor: Cursor) -> Result:
        result = inner(cursor)
        if isinstance(result, Failure):
            return result
        return Success(result.cursor, func(result.value))

    return rule


def cut(inner: Rule) -> Rule:
    """Commit: any failure of ``inner`` becomes fatal for the whole parse."""

    def rule(cursor: Cursor) -> Result:
        result = inner(cursor)
        if isinstance(result, Failure):
            return result.commit()
        return result

    return rule


def with_error(inner: Rule, error: Type[DSLParseError]) -> Rule:
    """Attribute failures of ``inner`` that carry no error class yet to ``error``."""

    def rule(cursor: Cursor) -> Result:
        result = inner(cursor)
        if isinstance(result, Failure) and result.error is None:
            return replace(result, error=error)
        return result

    return rule


def escaped_transform(
    normal: Callable[[str], bool],
    escape_char: str,
    escapes: Dict[str, str],
    error: Type[DSLParseError],
) -> Rule:
    """
    Decode a run of characters containing escape sequences.

    Characters matching ``normal`` pass through; ``escape_char`` followed by a
    key of ``escapes`` is replaced by the mapped text. Any other character
    after ``escape_char`` is a committed failure. Stops (successfully) at the
    first character that is neither, which may leave the value empty.
    """
    expected = "escape sequence (one of " + ", ".join(
        repr(escape_char + key) for key in escapes
    ) + ")"

    def rule(cursor: Cursor) -> Result:
        text = cursor.text
        position = cursor.offset
        parts: List[str] = []
        start = position
        while position < len(text):
            char = text[position]
            if char == escape_char:
                parts.append(text[start:position])
                replacement = escapes.get(text[position + 1:position + 2])
                if replacement is None:
                    return Failure(Cursor(text, position), expected, error, committed=True)
                parts.append(replacement)
                position += 2
                start = position
            elif normal(char):
                position += 1
            else:
                break
        parts.append(text[start:position])
        return Success(Cursor(text, position), "".join(parts))

    return rule


def run(rule: Rule, source: str) -> Tuple[Cursor, Any]:
    """
    Apply ``rule`` to ``source``.

    Returns:
        The remaining cursor and the parsed value

    Raises:
        DSLParseError: If the rule fails
    """
    result = rule(Cursor(source))
    if isinstance(result, Failure):
        raise result.to_exception()
    return result.cursor, result.value
