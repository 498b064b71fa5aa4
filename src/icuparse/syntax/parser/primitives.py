"""Primitive parsing utilities for the message parser.

This module provides the low-level scanners shared by the grammar rules:
literal text with quote escaping, the offset number of plural-like
placeholders, and the error factories that attach positions to failures.

Escaping:
    The escape character (``'`` by default) is context-sensitive. Which
    characters are "live" depends on where the scanner runs:

    - ``{`` and ``}`` are always special
    - ``<`` is special when tags are enabled; ``>`` and ``/`` only inside
      tag names
    - ``#`` is special only inside plural-like sub-messages
    - inside placeholder headers, selectors and tag names (where spaces or
      separators end the token) every quote opens a literal run

    ``''`` always produces one literal quote. A quote before a live
    character opens a literal run closed by the next unpaired quote. Any
    other quote is plain text, so ``You've`` needs no escaping.
"""

from functools import lru_cache

from icuparse.diagnostics import (
    ErrorTemplate,
    ExpectedTokenError,
    UnexpectedCharacterError,
)
from icuparse.syntax.cursor import Cursor, ParseResult
from icuparse.syntax.options import ParserOptions
from icuparse.syntax.parser.whitespace import WHITESPACE, skip_whitespace

__all__ = [
    "expected_token",
    "parse_offset",
    "parse_text",
    "unexpected_character",
]

# ASCII digits only: str.isdigit() accepts superscripts and other scripts
# that int() rejects.
_ASCII_DIGITS: str = "0123456789"

_SIGNS: str = "+-"


def expected_token(expected: str, cursor: Cursor) -> ExpectedTokenError:
    """Build an ExpectedTokenError for the character under the cursor."""
    diagnostic = ErrorTemplate.expected_token(expected, cursor.peek(), cursor.span())
    return ExpectedTokenError(diagnostic, source=cursor.source)


def unexpected_character(character: str, cursor: Cursor) -> UnexpectedCharacterError:
    """Build an UnexpectedCharacterError at the cursor position."""
    diagnostic = ErrorTemplate.unexpected_character(character, cursor.span())
    return UnexpectedCharacterError(diagnostic, source=cursor.source)


@lru_cache(maxsize=64)
def _special_chars(
    options: ParserOptions, subnumeric: bool, include_tags: bool
) -> frozenset[str]:
    """Characters that end text and may be quoted in this context."""
    chars = {options.open, options.close}
    if options.allow_tags:
        chars.add(options.tag_open)
        if include_tags:
            chars.add(options.tag_close)
            chars.add(options.tag_closing)
    if subnumeric:
        chars.add(options.sub_var)
    return frozenset(chars)


def parse_text(
    cursor: Cursor,
    options: ParserOptions,
    *,
    subnumeric: bool = False,
    include_separator: bool = True,
    include_space: bool = True,
    include_tags: bool = False,
) -> ParseResult[str]:
    """Scan literal text up to the next stop character.

    Args:
        cursor: Current position in source
        options: Delimiter configuration
        subnumeric: Inside a plural-like sub-message (``#`` is special)
        include_separator: Separators are ordinary text (False inside
            placeholder headers and tag names)
        include_space: Whitespace is ordinary text (False for ids, types,
            selectors and tag names)
        include_tags: Scanning a tag name (``>`` and ``/`` end it)

    Returns:
        ParseResult with the unescaped text (possibly empty) and the cursor
        at the stop character or EOF

    Examples:
        >>> parse_text(Cursor("a '{b}' {c}", 0), ParserOptions()).value
        'a {b} '
        >>> parse_text(Cursor("it''s", 0), ParserOptions()).value
        "it's"
        >>> parse_text(Cursor("a b,c", 0), ParserOptions(), include_space=False).value
        'a'
    """
    source = cursor.source
    length = len(source)
    pos = cursor.pos
    escape = options.escape
    sep = options.sep
    specials = _special_chars(options, subnumeric, include_tags)
    # Where spaces or separators end the token, any quote opens a literal run
    quote_anything = not include_space or not include_separator
    out: list[str] = []

    while pos < length:
        char = source[pos]
        if (
            char in specials
            or (not include_separator and char == sep)
            or (not include_space and char in WHITESPACE)
        ):
            break

        if char != escape:
            out.append(char)
            pos += 1
            continue

        pos += 1
        following = source[pos] if pos < length else None

        if following == escape:
            out.append(escape)
            pos += 1
        elif following is not None and (following in specials or quote_anything):
            out.append(following)
            pos += 1
            while pos < length:
                following = source[pos]
                if following != escape:
                    out.append(following)
                    pos += 1
                elif pos + 1 < length and source[pos + 1] == escape:
                    out.append(escape)
                    pos += 2
                else:
                    pos += 1
                    break
        else:
            out.append(char)

    return ParseResult("".join(out), Cursor(source, pos))


def parse_offset(cursor: Cursor, options: ParserOptions) -> ParseResult[int | None]:
    """Parse the optional offset clause of a plural-like placeholder.

    Syntax: ``offset:`` blank? sign? digits

    Args:
        cursor: Position right after the type separator
        options: Delimiter configuration (supplies the keyword)

    Returns:
        ParseResult with the offset, or None (cursor unchanged) when the
        keyword is absent

    Raises:
        ExpectedTokenError: Keyword present but no digits follow

    Examples:
        >>> parse_offset(Cursor("offset:-2 other{}", 0), ParserOptions()).value
        -2
        >>> parse_offset(Cursor("other{}", 0), ParserOptions()).value is None
        True
    """
    if not cursor.startswith(options.offset):
        return ParseResult(None, cursor)

    start = skip_whitespace(cursor.advance(len(options.offset)))
    number_end = start
    if number_end.peek() is not None and number_end.peek() in _SIGNS:
        number_end = number_end.advance()

    digits_start = number_end
    while not number_end.is_eof and number_end.current in _ASCII_DIGITS:
        number_end = number_end.advance()

    if number_end.pos == digits_start.pos:
        raise expected_token("number", start)

    return ParseResult(int(start.slice_to(number_end.pos)), number_end)
