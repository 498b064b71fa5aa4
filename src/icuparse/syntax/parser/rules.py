"""Grammar rules for the message parser.

This module provides all parsing rules for message grammar constructs:
- Message bodies (text, placeholders and tags in sequence)
- Placeholders ({id}, {id, type}, {id, type, format}, sub-message forms)
- Sub-message lists (selector {body} repetitions)
- Tags (<name>...</name>, <name/>)

All grammar rules are co-located in a single module because they are
mutually recursive: bodies contain placeholders and tags, which contain
bodies again.

Lookahead Patterns:
    The parser dispatches on a single character:
    - `{` starts a placeholder
    - `#` inside a plural-like sub-message is a numeric back-reference
    - `<` followed by a non-blank character starts a (possible) tag
    - `}` ends the current body, or is literal text at the top level
    Tags are parsed speculatively: when the markup turns out not to be a
    tag, the consumed span is returned as literal text and the saved
    cursor position stays valid.

Security:
    Includes configurable nesting depth limit to prevent stack exhaustion
    via deeply nested sub-messages or tags.
"""

import logging
from dataclasses import dataclass

from icuparse.constants import MAX_DEPTH, REQUIRED_SELECTOR
from icuparse.core.depth_guard import DepthLimitExceededError
from icuparse.diagnostics import ErrorTemplate, UnexpectedCharacterError
from icuparse.syntax.ast import Message, Node, NumericReference, SubMessages, Tag, Variable
from icuparse.syntax.cursor import Cursor, ParseResult
from icuparse.syntax.options import ParserOptions
from icuparse.syntax.parser.primitives import (
    expected_token,
    parse_offset,
    parse_text,
    unexpected_character,
)
from icuparse.syntax.parser.whitespace import WHITESPACE, is_whitespace, skip_whitespace

__all__ = [
    "ClosingTag",
    "EnclosingTag",
    "EnclosingVariable",
    "MessageBody",
    "ParseContext",
    "parse_element",
    "parse_message",
    "parse_submessages",
    "parse_tag",
]

logger = logging.getLogger(__name__)

_TRAILING_WHITESPACE: str = "".join(WHITESPACE)


@dataclass(frozen=True, slots=True)
class EnclosingVariable:
    """Placeholder whose sub-message is being parsed."""

    id: str
    type: str


@dataclass(frozen=True, slots=True)
class EnclosingTag:
    """Tag whose body is being parsed."""

    name: str


@dataclass(frozen=True, slots=True)
class ClosingTag:
    """Result of parse_tag when it consumed the enclosing tag's closing tag.

    Not an AST node: parse_message turns it into ``MessageBody.closed``.
    """

    name: str


@dataclass(frozen=True, slots=True)
class MessageBody:
    """Nodes of one message body and how the body ended.

    Attributes:
        nodes: Parsed nodes with adjacent text merged
        closed: True when the body ended on its tag's closing tag
    """

    nodes: Message
    closed: bool = False


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Replaces the "parent node" threaded through the recursion with explicit
    parameter passing for:
    - Thread safety without global state
    - Easier testing (no state reset needed)
    - Clear dependency flow

    Attributes:
        options: Delimiter configuration
        max_nesting_depth: Maximum allowed nesting depth for bodies
        current_depth: Current nesting depth (0 = top level)
        enclosing: Placeholder or tag owning the current body, None at top level
    """

    options: ParserOptions
    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    enclosing: EnclosingVariable | EnclosingTag | None = None

    @property
    def subnumeric(self) -> bool:
        """True inside a plural-like sub-message, where `#` is special."""
        return isinstance(self.enclosing, EnclosingVariable) and self.options.is_subnumeric(
            self.enclosing.type
        )

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter(self, enclosing: EnclosingVariable | EnclosingTag) -> "ParseContext":
        """Create new context for a nested body.

        Raises:
            DepthLimitExceededError: If the body would exceed max_nesting_depth
        """
        if self.is_depth_exceeded():
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(self.max_nesting_depth))
        return ParseContext(
            options=self.options,
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            enclosing=enclosing,
        )


def _append(nodes: Message, node: Node) -> None:
    """Append a node, merging text into a preceding text node."""
    if isinstance(node, str):
        if not node:
            return
        if nodes and isinstance(nodes[-1], str):
            nodes[-1] += node
            return
    nodes.append(node)


# =============================================================================
# Message bodies
# =============================================================================


def parse_message(cursor: Cursor, context: ParseContext) -> ParseResult[MessageBody]:
    """Parse a sequence of text, placeholders and tags.

    Stops at EOF, at a `}` closing the enclosing placeholder body (not
    consumed), or after the closing tag of the enclosing tag (consumed).
    A `}` with nothing to close is literal text.

    Args:
        cursor: Start of the body
        context: Parse context; enclosing is None for the whole message

    Returns:
        ParseResult with the MessageBody and the cursor where it stopped

    Raises:
        MessageSyntaxError: On the first syntax error in the body
    """
    options = context.options
    subnumeric = context.subnumeric
    nodes: Message = []
    closed = False

    while not cursor.is_eof:
        start = cursor
        char = cursor.current

        if char == options.close:
            if context.enclosing is not None:
                break
            _append(nodes, char)
            cursor = cursor.advance()

        elif char == options.open or (subnumeric and char == options.sub_var):
            element = parse_element(cursor, context)
            _append(nodes, element.value)
            cursor = element.cursor

        elif options.allow_tags and char == options.tag_open:
            if is_whitespace(cursor.peek(1)):
                # "a < b": a blank after the opener never starts a tag
                _append(nodes, char)
                cursor = cursor.advance()
                continue

            tag = parse_tag(cursor, context)
            cursor = tag.cursor
            if isinstance(tag.value, ClosingTag):
                closed = True
                break
            _append(nodes, tag.value)

        else:
            text = parse_text(cursor, options, subnumeric=subnumeric)
            _append(nodes, text.value)
            cursor = text.cursor

        if cursor.pos == start.pos:
            diagnostic = ErrorTemplate.no_progress(start.peek(), start.span())
            raise UnexpectedCharacterError(diagnostic, source=start.source)

    return ParseResult(MessageBody(nodes, closed), cursor)


# =============================================================================
# Placeholders
# =============================================================================


def parse_element(
    cursor: Cursor, context: ParseContext
) -> ParseResult[Variable | NumericReference]:
    """Parse a placeholder or a numeric back-reference.

    Grammar (blank = whitespace):
        "{" blank? id blank? "}"
        "{" blank? id blank? "," blank? type blank? "}"
        "{" blank? id blank? "," blank? type blank? "," blank? format blank? "}"
        "{" blank? id blank? "," blank? type blank? "," blank? offset? submessages "}"

    Examples:
        {name}                         -> Variable("name")
        { test,    number, percent }   -> Variable("test", "number", "percent")
        {n, plural, offset:1 other{#}} -> Variable("n", "plural", 1, {"other": [#]})

    Args:
        cursor: At `{`, or at `#` inside a plural-like sub-message
        context: Parse context of the body containing the placeholder

    Returns:
        ParseResult with the node and the cursor after the closing `}`

    Raises:
        ExpectedTokenError: Missing id, type, format, sub-messages, other
            selector, offset digits or closing brace
    """
    options = context.options

    if context.subnumeric and cursor.current == options.sub_var:
        assert isinstance(context.enclosing, EnclosingVariable)  # noqa: S101 - narrowed by subnumeric
        return ParseResult(NumericReference(context.enclosing.id), cursor.advance())

    separator_or_close = f"{options.sep} or {options.close}"

    # ID
    cursor = skip_whitespace(cursor.advance())
    id_result = parse_text(cursor, options, include_separator=False, include_space=False)
    if not id_result.value:
        raise expected_token("placeholder id", cursor)
    placeholder_id = id_result.value
    cursor = skip_whitespace(id_result.cursor)

    if cursor.peek() == options.close:
        return ParseResult(Variable(placeholder_id), cursor.advance())
    if cursor.peek() != options.sep:
        raise expected_token(separator_or_close, cursor)

    # Type
    cursor = skip_whitespace(cursor.advance())
    type_result = parse_text(cursor, options, include_separator=False, include_space=False)
    if not type_result.value:
        raise expected_token("type", cursor)
    type_name = type_result.value
    cursor = skip_whitespace(type_result.cursor)

    if cursor.peek() == options.close:
        if options.is_submessage(type_name):
            raise expected_token("sub-messages", cursor)
        return ParseResult(Variable(placeholder_id, type_name), cursor.advance())
    if cursor.peek() != options.sep:
        raise expected_token(separator_or_close, cursor)

    cursor = skip_whitespace(cursor.advance())

    # Format
    format_value: str | int | None = None
    submessages: SubMessages | None = None

    if options.is_subnumeric(type_name):
        offset = parse_offset(cursor, options)
        if offset.value is not None:
            format_value = offset.value
            cursor = skip_whitespace(offset.cursor)

    if options.is_submessage(type_name):
        owner = context.enter(EnclosingVariable(placeholder_id, type_name))
        parsed = parse_submessages(cursor, owner)
        cursor = parsed.cursor
        if REQUIRED_SELECTOR not in parsed.value:
            raise expected_token(f"{REQUIRED_SELECTOR} sub-message", cursor)
        submessages = parsed.value
    else:
        format_result = parse_text(cursor, options)
        # Spaces are allowed mid-format; trailing ones belong to the layout
        format_text = format_result.value.rstrip(_TRAILING_WHITESPACE)
        if not format_text:
            raise expected_token("format", cursor)
        format_value = format_text
        cursor = format_result.cursor

    cursor = skip_whitespace(cursor)
    if cursor.peek() != options.close:
        raise expected_token(options.close, cursor)

    variable = Variable(placeholder_id, type_name, format_value, submessages)
    return ParseResult(variable, cursor.advance())


def parse_submessages(cursor: Cursor, context: ParseContext) -> ParseResult[SubMessages]:
    """Parse the selector sub-messages of a select/plural-like placeholder.

    Grammar:
        (selector blank? "{" message "}" blank?)*

    Selectors end at whitespace or `{`; separators are ordinary characters
    in a selector. Source order is preserved; a repeated selector replaces
    the earlier body.

    Args:
        cursor: First selector (after the optional offset clause)
        context: Context whose enclosing is the owning placeholder

    Returns:
        ParseResult with selector -> nodes and the cursor at the outer `}`
        (or EOF)

    Raises:
        ExpectedTokenError: Missing selector, `{` or `}`
    """
    options = context.options
    submessages: SubMessages = {}

    while not cursor.is_eof and cursor.current != options.close:
        selector = parse_text(cursor, options, include_space=False)
        if not selector.value:
            raise expected_token("sub-message selector", cursor)

        cursor = skip_whitespace(selector.cursor)
        if cursor.peek() != options.open:
            raise expected_token(options.open, cursor)

        body = parse_message(cursor.advance(), context)
        cursor = body.cursor
        if cursor.peek() != options.close:
            raise expected_token(options.close, cursor)

        submessages[selector.value] = body.value.nodes
        cursor = skip_whitespace(cursor.advance())

    return ParseResult(submessages, cursor)


# =============================================================================
# Tags
# =============================================================================


def parse_tag(cursor: Cursor, context: ParseContext) -> ParseResult[Tag | ClosingTag | str]:
    """Parse an opening, self-closing or closing tag.

    Grammar:
        "<" name blank? "/"? ">"          opening or self-closing tag
        "<" "/" blank? name blank? ">"    closing tag

    When the markup is not a tag (no name, or no `>` after the name) the
    consumed span is returned unchanged as text: ``i <3 you>`` stays text.

    Args:
        cursor: At `<`
        context: Parse context of the body containing the tag

    Returns:
        ParseResult with a Tag, a ClosingTag (the enclosing tag's closing
        tag was consumed) or literal text

    Raises:
        UnexpectedCharacterError: Closing tag outside any tag, or closing
            tag name differs from the enclosing tag
        ExpectedTokenError: Closing tag without `>`, or tag body without
            closing tag
    """
    options = context.options
    start = cursor
    cursor = cursor.advance()

    closing = False
    if cursor.peek() == options.tag_closing:
        if not isinstance(context.enclosing, EnclosingTag):
            raise unexpected_character(options.tag_closing, cursor)
        closing = True
        cursor = skip_whitespace(cursor.advance())

    name_result = parse_text(
        cursor,
        options,
        include_separator=False,
        include_space=False,
        include_tags=True,
    )
    cursor = name_result.cursor
    name = name_result.value
    if not name:
        return ParseResult(start.slice_to(cursor.pos), cursor)

    cursor = skip_whitespace(cursor)

    if closing:
        assert isinstance(context.enclosing, EnclosingTag)  # noqa: S101 - checked above
        if cursor.peek() != options.tag_close:
            raise expected_token(options.tag_close, cursor)
        if name != context.enclosing.name:
            diagnostic = ErrorTemplate.tag_mismatch(context.enclosing.name, name, start.span(cursor.pos))
            raise UnexpectedCharacterError(diagnostic, source=start.source)
        return ParseResult(ClosingTag(name), cursor.advance())

    self_closing = False
    if cursor.peek() == options.tag_closing:
        self_closing = True
        cursor = cursor.advance()

    if cursor.peek() != options.tag_close:
        logger.debug("Markup at position %d is not a tag, keeping it as text", start.pos)
        return ParseResult(start.slice_to(cursor.pos), cursor)

    cursor = cursor.advance()
    if self_closing:
        return ParseResult(Tag(name), cursor)

    body = parse_message(cursor, context.enter(EnclosingTag(name)))
    if not body.value.closed:
        raise expected_token("closing tag", body.cursor)

    return ParseResult(Tag(name, body.value.nodes or None), body.cursor)
