"""Whitespace handling utilities for the message parser.

Whitespace separates placeholder fields, selectors and tag attributes.
Classification follows the ECMAScript ``\\s`` class, which is what message
authors and translation tools expect: ASCII blanks, no-break spaces, the
Unicode space separators and the line/paragraph separators.
"""

from icuparse.syntax.cursor import Cursor

__all__ = ["WHITESPACE", "is_whitespace", "skip_whitespace"]

WHITESPACE: frozenset[str] = frozenset(
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def is_whitespace(char: str | None) -> bool:
    """Check whether a character is whitespace. None (EOF) is not."""
    return char is not None and char in WHITESPACE


def skip_whitespace(cursor: Cursor) -> Cursor:
    """Skip consecutive whitespace characters.

    Args:
        cursor: Current position in source

    Returns:
        New cursor at first non-whitespace character (or EOF)

    Example:
        >>> skip_whitespace(Cursor("\\u202f  x", 0)).pos
        3
    """
    source = cursor.source
    pos = cursor.pos
    length = len(source)
    while pos < length and source[pos] in WHITESPACE:
        pos += 1
    return cursor if pos == cursor.pos else Cursor(source, pos)
