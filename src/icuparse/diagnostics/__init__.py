"""Diagnostic system for message parsing errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ConfigurationError,
    ExpectedTokenError,
    MessageFormatError,
    MessageSyntaxError,
    SerializationValidationError,
    UnexpectedCharacterError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "ExpectedTokenError",
    "MessageFormatError",
    "MessageSyntaxError",
    "OutputFormat",
    "SerializationValidationError",
    "SourceSpan",
    "UnexpectedCharacterError",
]
