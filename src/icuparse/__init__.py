"""icuparse - ICU MessageFormat parser.

Parses ICU MessageFormat strings (placeholders, select/plural sub-messages,
quote escaping and XML-like tags) into a simple AST of strings and frozen
dataclasses. Delimiters are configurable.

Public API:
    parse - Parse a message into a node list
    MessageParser - Reusable parser with options and limits
    ParserOptions - Delimiter and type configuration
    serialize - Write a node list back to message text
    to_plain / from_plain - JSON-ready conversion
    introspect_message - Placeholder, selector and tag extraction

Exceptions:
    MessageFormatError - Base exception class
    ConfigurationError - Invalid parser options
    MessageSyntaxError - Parse errors (a SyntaxError)
    DepthLimitExceededError - Nesting limit exceeded
    SerializationValidationError - AST cannot be written back

Submodules:
    icuparse.syntax.ast - AST node types (Variable, NumericReference, Tag)
    icuparse.diagnostics - Error types, codes and formatting
    icuparse.introspection - Message introspection
"""

from .core import DepthLimitExceededError
from .diagnostics import (
    ConfigurationError,
    ExpectedTokenError,
    MessageFormatError,
    MessageSyntaxError,
    SerializationValidationError,
    UnexpectedCharacterError,
)
from .introspection import MessageIntrospection, introspect_message
from .syntax import (
    MessageParser,
    NumericReference,
    ParserOptions,
    Tag,
    Variable,
    from_plain,
    parse,
    serialize,
    to_plain,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("icuparse")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "DepthLimitExceededError",
    "ExpectedTokenError",
    "MessageFormatError",
    "MessageIntrospection",
    "MessageParser",
    "MessageSyntaxError",
    "NumericReference",
    "ParserOptions",
    "SerializationValidationError",
    "Tag",
    "UnexpectedCharacterError",
    "Variable",
    "__version__",
    "from_plain",
    "introspect_message",
    "parse",
    "serialize",
    "to_plain",
]
