"""Enumerations for icuparse type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class SymbolRole(StrEnum):
    """Role a single delimiter character plays in message syntax.

    Values are the historical option names, so ``SymbolRole("OPEN")`` maps a
    configuration key to its role and ``str(SymbolRole.OPEN) == "OPEN"``.
    """

    OPEN = "OPEN"
    """Opens a placeholder: {name}"""

    CLOSE = "CLOSE"
    """Closes a placeholder or sub-message body"""

    TAG_OPEN = "TAG_OPEN"
    """Opens a tag: <b>"""

    TAG_CLOSE = "TAG_CLOSE"
    """Closes a tag: <b>"""

    TAG_CLOSING = "TAG_CLOSING"
    """Marks closing or self-closing tags: </b>, <br/>"""

    SEP = "SEP"
    """Separates placeholder id, type and format: {n, number, percent}"""

    SUB_VAR = "SUB_VAR"
    """Numeric back-reference inside plural bodies: {n, plural, other {# items}}"""

    ESCAPE = "ESCAPE"
    """Quotes special characters: '{' or ''"""


class PlaceholderContext(StrEnum):
    """Where a placeholder appears in a message.

    StrEnum provides automatic string conversion: str(PlaceholderContext.MESSAGE) == "message"
    """

    MESSAGE = "message"
    """Placeholder in the top-level message body: Hello {name}"""

    SUBMESSAGE = "submessage"
    """Placeholder inside a selector body: {g, select, other {{name}}}"""

    TAG = "tag"
    """Placeholder inside tag content: <b>{name}</b>"""


__all__ = [
    "PlaceholderContext",
    "SymbolRole",
]
