"""Factories for every Diagnostic icuparse produces.

Keeping the wording in one place lets tests assert exact messages and keeps
f-strings out of raise statements.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _describe(found: str | None) -> str:
    """Render a found character for messages, using 'eof' past the end."""
    return found if found else "eof"


class ErrorTemplate:
    """One static factory per error case.

    Call sites build the diagnostic here and pass it to the exception, so
    raise statements never format strings themselves.

    Syntax error messages keep the historical wording
    ``expected X at position N but found Y`` and
    ``unexpected X at position N`` so existing tooling that greps them
    keeps working.
    """

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def option_invalid_length(option: str) -> Diagnostic:
        """Delimiter option is not a single character.

        Args:
            option: Historical option name (e.g. "OPEN")

        Returns:
            Diagnostic for OPTION_INVALID_LENGTH
        """
        msg = f"Option {option} must be a 1-length string"
        return Diagnostic(
            code=DiagnosticCode.OPTION_INVALID_LENGTH,
            message=msg,
            hint="Delimiters are compared character by character",
            options=(option,),
        )

    @staticmethod
    def option_conflict(first: str, second: str) -> Diagnostic:
        """Two delimiter roles share the same character.

        Args:
            first: Option declared first
            second: Option reusing the character

        Returns:
            Diagnostic for OPTION_CONFLICT
        """
        msg = f"Option {first} and {second} cannot match"
        return Diagnostic(
            code=DiagnosticCode.OPTION_CONFLICT,
            message=msg,
            hint="Every delimiter role needs its own character",
            options=(first, second),
        )

    @staticmethod
    def option_invalid_value(option: str, reason: str) -> Diagnostic:
        """Non-delimiter option has an unusable value."""
        msg = f"Option {option} {reason}"
        return Diagnostic(
            code=DiagnosticCode.OPTION_INVALID_VALUE,
            message=msg,
            options=(option,),
        )

    # ------------------------------------------------------------------
    # Syntax
    # ------------------------------------------------------------------

    @staticmethod
    def expected_token(expected: str, found: str | None, span: SourceSpan) -> Diagnostic:
        """Parser required a token that is not present.

        Args:
            expected: Description of the missing token ("placeholder id", "}")
            found: Character at the error position, None at end of input
            span: Location of the error

        Returns:
            Diagnostic for EXPECTED_TOKEN
        """
        msg = f"expected {expected} at position {span.start} but found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_TOKEN,
            message=msg,
            span=span,
            expected=expected,
            found=_describe(found),
        )

    @staticmethod
    def unexpected_character(character: str, span: SourceSpan) -> Diagnostic:
        """Character not allowed at this position.

        Args:
            character: The offending character
            span: Location of the error

        Returns:
            Diagnostic for UNEXPECTED_CHARACTER
        """
        msg = f"unexpected {character} at position {span.start}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=msg,
            span=span,
            found=character,
        )

    @staticmethod
    def tag_mismatch(open_name: str, close_name: str, span: SourceSpan) -> Diagnostic:
        """Closing tag name differs from the innermost open tag.

        Args:
            open_name: Name of the innermost open tag
            close_name: Name found in the closing tag
            span: Location of the closing tag

        Returns:
            Diagnostic for TAG_MISMATCH
        """
        msg = f"unexpected tag mismatch at position {span.start}"
        return Diagnostic(
            code=DiagnosticCode.TAG_MISMATCH,
            message=msg,
            span=span,
            hint=f"Close <{open_name}> before closing <{close_name}>",
            expected=open_name,
            found=close_name,
        )

    @staticmethod
    def no_progress(character: str | None, span: SourceSpan) -> Diagnostic:
        """Scanner stopped without consuming input."""
        msg = f"unexpected {_describe(character)} at position {span.start}"
        return Diagnostic(
            code=DiagnosticCode.NO_PROGRESS,
            message=msg,
            span=span,
            hint="This is a parser bug; please report the message that triggered it",
            found=_describe(character),
        )

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Cursor read past the end of input.

        Args:
            position: Cursor position at EOF

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
        )

    # ------------------------------------------------------------------
    # Limits
    # ------------------------------------------------------------------

    @staticmethod
    def depth_exceeded(max_depth: int) -> Diagnostic:
        """Nesting depth limit exceeded.

        Args:
            max_depth: Configured maximum depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Flatten nested placeholders and tags, or raise max_nesting_depth",
        )

    @staticmethod
    def source_too_large(size: int, max_size: int) -> Diagnostic:
        """Message exceeds the configured size limit."""
        msg = (
            f"Source size ({size:,} characters) exceeds maximum "
            f"({max_size:,} characters)"
        )
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Configure max_source_size in the MessageParser constructor to increase limit",
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @staticmethod
    def serialization_invalid(reason: str) -> Diagnostic:
        """AST cannot be written back as message text.

        Args:
            reason: What is wrong with the node

        Returns:
            Diagnostic for SERIALIZATION_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.SERIALIZATION_INVALID,
            message=f"Cannot serialize message: {reason}",
        )
