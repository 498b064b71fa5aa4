"""Message AST (Abstract Syntax Tree) node definitions.

A parsed message is a plain list of nodes. Text is kept as ``str`` so the
common case (mostly text, a few placeholders) stays cheap to build, compare
and serialize; structured constructs are frozen dataclasses.

Includes type guards as static methods (eliminates isinstance chains at
call sites).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from icuparse.constants import NUMERIC_REFERENCE_TYPE, REQUIRED_SELECTOR

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Nodes
    "Variable",
    "NumericReference",
    "Tag",
    # Type aliases
    "Node",
    "Message",
    "SubMessages",
    "is_text",
]


def is_text(node: object) -> TypeIs[str]:
    """Type guard for text nodes."""
    return isinstance(node, str)


@dataclass(frozen=True, slots=True)
class Variable:
    """Placeholder referencing a named value.

    Examples:
        {name}                              -> Variable("name")
        {count, number}                     -> Variable("count", "number")
        {pct, number, percent}              -> Variable("pct", "number", "percent")
        {n, plural, offset:1 other {# x}}   -> Variable("n", "plural", 1, {"other": [...]})

    Attributes:
        id: Placeholder name
        type: Explicit type, None when omitted
        format: Format string for generic types; the offset (int) for
            plural-like types, None when absent
        options: Selector sub-messages for select/plural-like types, in
            source order; always contains "other" when parsed
    """

    id: str
    type: str | None = None
    format: str | int | None = None
    options: "SubMessages | None" = None

    @staticmethod
    def guard(node: object) -> TypeIs["Variable"]:
        """Type guard for Variable."""
        return isinstance(node, Variable)

    @property
    def offset(self) -> int | None:
        """Offset of a plural-like placeholder, None if absent."""
        return self.format if isinstance(self.format, int) else None

    @property
    def has_other(self) -> bool:
        """True when the sub-messages define the mandatory selector."""
        return self.options is not None and REQUIRED_SELECTOR in self.options


@dataclass(frozen=True, slots=True)
class NumericReference:
    """The ``#`` back-reference inside a plural-like sub-message.

    Equivalent to ``{id, number}`` where id is the enclosing placeholder.

    Example:
        {n, plural, other {# items}} -> options["other"][0] == NumericReference("n")
    """

    id: str

    @property
    def type(self) -> str:
        """Implicit type of the reference."""
        return NUMERIC_REFERENCE_TYPE

    @staticmethod
    def guard(node: object) -> TypeIs["NumericReference"]:
        """Type guard for NumericReference."""
        return isinstance(node, NumericReference)


@dataclass(frozen=True, slots=True)
class Tag:
    """Markup tag wrapping nested message content.

    Examples:
        <b>hi</b>   -> Tag("b", ["hi"])
        <br/>       -> Tag("br")
        <b></b>     -> Tag("b")

    Attributes:
        name: Tag name (case-sensitive)
        children: Nested nodes; None for self-closing or empty tags
    """

    name: str
    children: "Message | None" = None

    @staticmethod
    def guard(node: object) -> TypeIs["Tag"]:
        """Type guard for Tag."""
        return isinstance(node, Tag)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Node = str | Variable | NumericReference | Tag
type Message = list[Node]
type SubMessages = dict[str, Message]
