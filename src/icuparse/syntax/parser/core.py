"""Core message parser implementation.

This module provides the MessageParser class that orchestrates parsing of
message strings into the node lists defined in :mod:`icuparse.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~icuparse.syntax.cursor.Cursor`)
    to traverse source text. Each grammar rule (in :mod:`~icuparse.syntax.parser.rules`)
    returns a :class:`~icuparse.syntax.cursor.ParseResult` containing the parsed
    value and updated cursor position, or raises on the first syntax error.

AST Types:
    The parser produces a plain ``list`` of nodes:

    - ``str`` - Literal text (adjacent text merged)
    - :class:`~icuparse.syntax.ast.Variable` - Placeholders, with sub-messages
      for select/plural-like types
    - :class:`~icuparse.syntax.ast.NumericReference` - ``#`` inside plural-like bodies
    - :class:`~icuparse.syntax.ast.Tag` - ``<name>...</name>`` markup

Security:
    Includes configurable input size limit to prevent DoS attacks via
    unbounded memory allocation, and a nesting depth limit against stack
    exhaustion.

See Also:
    - :mod:`icuparse.syntax.ast` - All AST node type definitions
    - :mod:`icuparse.syntax.options` - Delimiter configuration
    - :mod:`icuparse.syntax.parser.rules` - Grammar rules
"""

import logging
from collections.abc import Mapping
from typing import Any

from icuparse.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from icuparse.core.depth_guard import depth_clamp
from icuparse.diagnostics import ErrorTemplate
from icuparse.syntax.ast import Message
from icuparse.syntax.cursor import Cursor
from icuparse.syntax.options import ParserOptions
from icuparse.syntax.parser.rules import ParseContext, parse_message

__all__ = ["MessageParser"]

logger = logging.getLogger(__name__)


class MessageParser:
    """ICU MessageFormat parser using immutable cursor pattern.

    Design:
    - Immutable cursor and options: one parser can be shared freely
    - Fail fast: the first syntax error aborts the parse
    - Error messages carry position, line and column

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Default limit: 10 MiB characters
    - Configurable max_nesting_depth prevents DoS via deeply nested
      sub-messages and tags

    Attributes:
        options: Delimiter configuration
        max_source_size: Maximum allowed source size in characters
        max_nesting_depth: Maximum allowed nesting depth (after clamping)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size", "_options")

    def __init__(
        self,
        options: ParserOptions | Mapping[str, Any] | None = None,
        /,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
        **overrides: Any,
    ) -> None:
        """Initialize parser with delimiter options and limits.

        Args:
            options: ParserOptions, a mapping of option names (``OPEN``,
                ``allowTags``, ``open``, ...) or None for the defaults
            max_source_size: Maximum source size in characters (default: 10 MiB).
                Set to 0 to disable the size limit (not recommended).
            max_nesting_depth: Maximum nesting depth (default: 100). Clamped
                to what the interpreter recursion limit can support.
            **overrides: Option names applied on top of ``options``

        Raises:
            ConfigurationError: If the resulting options are invalid
        """
        if isinstance(options, ParserOptions):
            resolved = options.merged(overrides) if overrides else options
        else:
            resolved = ParserOptions.from_mapping(options, **overrides)

        self._options = resolved
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

        if not resolved.is_default:
            logger.debug("MessageParser created with custom options: %r", resolved)

    @property
    def options(self) -> ParserOptions:
        """Delimiter configuration."""
        return self._options

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed nesting depth."""
        return self._max_nesting_depth

    def parse(self, value: object) -> Message:
        """Parse a message string into a list of nodes.

        Args:
            value: Message text; any other object is converted with str()

        Returns:
            List of text, Variable, NumericReference and Tag nodes

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            MessageSyntaxError: On the first syntax error
            DepthLimitExceededError: If nesting exceeds max_nesting_depth

        Example:
            >>> parser = MessageParser()
            >>> parser.parse("Hello, {name}!")
            ['Hello, ', Variable(id='name', type=None, format=None, options=None), '!']
            >>> parser.parse(12.34)
            ['12.34']
        """
        source = value if isinstance(value, str) else str(value)

        # Validate input size (DoS prevention)
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            diagnostic = ErrorTemplate.source_too_large(len(source), self._max_source_size)
            raise ValueError(diagnostic.message)

        context = ParseContext(self._options, max_nesting_depth=self._max_nesting_depth)
        result = parse_message(Cursor(source, 0), context)
        return result.value.nodes
