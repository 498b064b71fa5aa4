"""Exception hierarchy with structured diagnostics.

Integrates with diagnostic codes for Rust/Elm-inspired error messages.
All exceptions can carry Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ConfigurationError",
    "ExpectedTokenError",
    "MessageFormatError",
    "MessageSyntaxError",
    "SerializationValidationError",
    "UnexpectedCharacterError",
]


class MessageFormatError(Exception):
    """Base exception for all icuparse errors.

    ``str(error)`` is the plain one-line message; the Rust-style rendering is
    available through ``error.diagnostic.format_error()``.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageFormatError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(MessageFormatError, ValueError):
    """Invalid parser configuration.

    Raised while building ParserOptions, never during a parse call.
    The offending option names are available as ``options``.
    """

    @property
    def options(self) -> tuple[str, ...]:
        """Option names involved in the error."""
        return self.diagnostic.options if self.diagnostic is not None else ()


class MessageSyntaxError(MessageFormatError, SyntaxError):
    """Message text is not parseable.

    Parsing is all-or-nothing: the first syntax error aborts the parse and
    no partial AST is returned. Position information is kept so translator
    tooling can highlight the offending character.

    Attributes:
        source: The message text being parsed (empty if unknown)
    """

    def __init__(self, message: str | Diagnostic, *, source: str = "") -> None:
        """Initialize MessageSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            source: Message text the error refers to
        """
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        """Return the plain message (SyntaxError would append file info)."""
        return str(self.args[0]) if self.args else ""

    @property
    def position(self) -> int | None:
        """Zero-based character offset of the error."""
        span = self.diagnostic.span if self.diagnostic is not None else None
        return span.start if span is not None else None

    @property
    def line(self) -> int | None:
        """One-based line of the error."""
        span = self.diagnostic.span if self.diagnostic is not None else None
        return span.line if span is not None else None

    @property
    def column(self) -> int | None:
        """One-based column of the error."""
        span = self.diagnostic.span if self.diagnostic is not None else None
        return span.column if span is not None else None

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and pointer.

        Shows the problematic line and a caret pointing to the error location.

        Args:
            context_lines: Number of lines to show before/after error

        Returns:
            Multi-line formatted error with context

        Example:
            >>> from icuparse import parse
            >>> try:
            ...     parse("Hello\\n{name, plural}")
            ... except MessageSyntaxError as error:
            ...     print(error.format_with_context())
            2:14: expected sub-messages at position 19 but found }
            <BLANKLINE>
               1 | Hello
               2 | {name, plural}
                                ^
        """
        line, column = self.line, self.column
        if line is None or column is None or not self.source:
            return str(self)

        lines = self.source.split("\n")
        result_lines = [f"{line}:{column}: {self}", ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])
            if i == line:
                pointer = " " * (len(line_num_str) + column - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)


class ExpectedTokenError(MessageSyntaxError):
    """A required token is missing.

    Examples:
        "{}"                 -> expected placeholder id
        "{n,select,x{y}}"    -> expected other sub-message
        "<b>hi"              -> expected closing tag
    """

    @property
    def expected(self) -> str | None:
        """Description of the missing token."""
        return self.diagnostic.expected if self.diagnostic is not None else None

    @property
    def found(self) -> str | None:
        """Character found instead, or "eof"."""
        return self.diagnostic.found if self.diagnostic is not None else None


class UnexpectedCharacterError(MessageSyntaxError):
    """A character or construct is not allowed where it appears.

    Examples:
        "hi</b>"             -> unexpected /
        "<b><i>x</b></i>"    -> unexpected tag mismatch
    """

    @property
    def character(self) -> str | None:
        """The offending character (or construct description)."""
        return self.diagnostic.found if self.diagnostic is not None else None


class SerializationValidationError(MessageFormatError, ValueError):
    """Raised when an AST cannot be written back as message text.

    Common causes:
    - Sub-message placeholder without an ``other`` selector
    - Tag nodes while tags are disabled
    - Empty placeholder id, type or tag name
    """
