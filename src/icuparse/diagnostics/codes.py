"""Diagnostic codes, source spans and the Diagnostic record.

Every error icuparse raises can carry a ``Diagnostic``: a stable code, the
message, and for syntax errors the location plus what the parser expected
and what it found. Translation editors use the location to highlight the
broken placeholder.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Stable numeric error codes, grouped by thousands.

    1xxx: parser configuration
    2xxx: size and depth limits
    3xxx: message syntax
    4xxx: serialization of ASTs
    """

    OPTION_INVALID_LENGTH = 1001
    OPTION_CONFLICT = 1002
    OPTION_INVALID_VALUE = 1003

    MAX_DEPTH_EXCEEDED = 2001
    SOURCE_TOO_LARGE = 2002

    UNEXPECTED_EOF = 3001
    EXPECTED_TOKEN = 3002
    UNEXPECTED_CHARACTER = 3003
    TAG_MISMATCH = 3004
    NO_PROGRESS = 3005

    SERIALIZATION_INVALID = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Location of a syntax error in the message text.

    Offsets count code points, so they agree with ``len()`` and slicing of
    the message string.

    Attributes:
        start: Offset of the first character, from 0
        end: Offset past the last character
        line: Line of ``start``, from 1
        column: Column of ``start``, from 1
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Reject spans that cannot point into a message.

        Raises:
            ValueError: Negative start, end before start, or a line or
                column below 1
        """
        problem = None
        if self.start < 0:
            problem = f"SourceSpan.start must be >= 0, got {self.start}"
        elif self.end < self.start:
            problem = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
        elif self.line < 1:
            problem = f"SourceSpan.line must be >= 1, got {self.line}"
        elif self.column < 1:
            problem = f"SourceSpan.column must be >= 1, got {self.column}"
        if problem is not None:
            raise ValueError(problem)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured description of one error.

    Attributes:
        code: Stable error code
        message: One-line description, also the exception text
        span: Where the error is; None outside syntax errors
        hint: How to fix it, when there is something useful to say
        expected: What the parser was looking for
        found: Character found instead, or "eof"
        options: Option names involved in a configuration error
        severity: "error" or "warning"
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: str | None = None
    found: str | None = None
    options: tuple[str, ...] = ()
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return self.message

    def format_error(self, source: str | None = None) -> str:
        """Compiler-style rendering, quoting ``source`` when given.

        Example output:
            error[EXPECTED_TOKEN]: expected } at position 10 but found eof
              --> line 1, column 11
              = expected: }
              = found: eof
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self, source)
