"""Message syntax package.

Provides parser, AST definitions, delimiter options, serialization and
plain-data conversion.

Python 3.13+.
"""

from collections.abc import Mapping
from typing import Any

from .ast import Message, Node, NumericReference, SubMessages, Tag, Variable, is_text
from .cursor import Cursor, ParseResult
from .options import ParserOptions
from .parser import MessageParser
from .plain import from_plain, to_plain
from .serializer import MessageSerializer, serialize

__all__ = [
    "Cursor",
    "Message",
    "MessageParser",
    "MessageSerializer",
    "Node",
    "NumericReference",
    "ParseResult",
    "ParserOptions",
    "SubMessages",
    "Tag",
    "Variable",
    "from_plain",
    "is_text",
    "parse",
    "serialize",
    "to_plain",
]


def parse(value: object, options: ParserOptions | Mapping[str, Any] | None = None) -> Message:
    """Parse a message into a list of nodes.

    Convenience function for MessageParser.parse().

    Args:
        value: Message text (other objects are converted with str())
        options: ParserOptions or a mapping of option names

    Returns:
        List of text, Variable, NumericReference and Tag nodes

    Example:
        >>> from icuparse.syntax import parse
        >>> parse("You have {n, plural, one {# item} other {# items}}")[0]
        'You have '
    """
    parser = MessageParser(options)
    return parser.parse(value)
