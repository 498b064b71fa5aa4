"""Position tracking for the message parser.

A ``Cursor`` pairs the message text with an offset and never changes; every
move produces a new one. Grammar rules receive a cursor, return a
``ParseResult`` holding their value and the cursor where they stopped, and
back out of speculative parses simply by going on with the cursor they
started from.

Line and column numbers are only needed for diagnostics, so they are
computed from the offset when an error is built rather than tracked while
scanning.
"""

from dataclasses import dataclass

from icuparse.diagnostics import ErrorTemplate, SourceSpan

__all__ = ["Cursor", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Read position in a message.

    ``current`` raises at the end of input so scanning loops guard with
    ``is_eof``; ``peek`` returns None there instead and suits lookahead.

    Example:
        >>> start = Cursor("{n}", 0)
        >>> start.current, start.advance().current
        ('{', 'n')
        >>> start.pos
        0
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True once every character has been consumed."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            EOFError: At end of input
        """
        if self.pos >= len(self.source):
            raise EOFError(ErrorTemplate.unexpected_eof(self.pos).message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character ``offset`` places ahead, None past the end."""
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else None

    def advance(self, count: int = 1) -> "Cursor":
        """Cursor ``count`` characters further on, stopping at the end.

        Example:
            >>> Cursor("abc", 1).advance(5).pos
            3
        """
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        """Source text between this cursor and ``end_pos``.

        Keep the cursor a scan started from and slice once it is done:

            >>> start = Cursor("<b/> rest", 0)
            >>> start.slice_to(start.advance(4).pos)
            '<b/>'
        """
        return self.source[self.pos : end_pos]

    def startswith(self, text: str) -> bool:
        """Check whether the source continues with text at this position."""
        return self.source.startswith(text, self.pos)

    def compute_line_col(self) -> tuple[int, int]:
        """One-based (line, column) of the cursor.

        Linear in the offset; meant for error reporting only.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return self.source.count("\n", 0, self.pos) + 1, self.pos - line_start + 1

    def span(self, end_pos: int | None = None) -> SourceSpan:
        """Build a diagnostic span starting at this position.

        Args:
            end_pos: End of the span (exclusive); defaults to one character
                past the cursor, or the cursor itself at EOF

        Returns:
            SourceSpan with 1-indexed line and column
        """
        if end_pos is None:
            end_pos = self.pos if self.is_eof else self.pos + 1
        line, column = self.compute_line_col()
        return SourceSpan(start=self.pos, end=max(end_pos, self.pos), line=line, column=column)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Value produced by a grammar rule and the cursor after it.

    Rules share one shape:

        def parse_thing(cursor: Cursor, ...) -> ParseResult[Thing]:
            ...
            return ParseResult(thing, cursor_after_thing)

    Failures raise MessageSyntaxError; there is no partial result.

    Example:
        >>> result = ParseResult("{", Cursor("{n}", 0).advance())
        >>> result.value, result.cursor.pos
        ('{', 1)
    """

    value: T
    cursor: Cursor
