"""Message introspection for placeholder, selector and tag extraction.

This module provides introspection capabilities for analyzing parsed
messages and extracting metadata about placeholder usage, selector keys
and markup tags. Translation tooling compares the results for a source
message and its translation to catch dropped or misspelled placeholders.

Results are frozen dataclasses; the walk is a match statement over node
kinds with a DepthGuard around every nested body.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import assert_never

from icuparse.constants import MAX_DEPTH
from icuparse.core.depth_guard import DepthGuard
from icuparse.enums import PlaceholderContext
from icuparse.syntax.ast import Node, NumericReference, Tag, Variable

__all__ = [
    # Public API
    "MessageIntrospection",
    "SelectorInfo",
    "VariableInfo",
    "extract_variables",
    "introspect_message",
    # Internal (accessible for testing, not re-exported from package)
    "IntrospectionVisitor",
]


# ==============================================================================
# RESULT TYPES
# ==============================================================================


@dataclass(frozen=True, slots=True)
class VariableInfo:
    """Immutable metadata about one placeholder use in a message."""

    name: str
    """Placeholder id."""

    type: str | None
    """Explicit type, None for a bare {name}. ``#`` counts as "number"."""

    context: PlaceholderContext
    """Innermost construct containing the placeholder."""


@dataclass(frozen=True, slots=True)
class SelectorInfo:
    """Immutable metadata about a select/plural-like placeholder.

    Example:
        {n, plural, one {..} other {..}} -> SelectorInfo("n", "plural", ("one", "other"))
    """

    name: str
    """Placeholder id."""

    type: str
    """Selector type (select, plural, selectordinal, ...)."""

    keys: tuple[str, ...]
    """Selector keys in source order."""


@dataclass(frozen=True, slots=True)
class MessageIntrospection:
    """Everything introspect_message() learned about one message."""

    variables: frozenset[VariableInfo]
    """All placeholder uses in the message."""

    selectors: tuple[SelectorInfo, ...]
    """Select/plural-like placeholders in source order."""

    tags: frozenset[str]
    """Names of all tags in the message."""

    has_numeric_references: bool
    """Whether ``#`` occurs in a plural-like sub-message."""

    # Pre-computed name cache for O(1) accessor performance.
    _variable_names: frozenset[str]
    """Placeholder ids, precomputed for the lookup helpers."""

    @property
    def has_selectors(self) -> bool:
        """Whether the message uses select/plural-like placeholders."""
        return bool(self.selectors)

    def get_variable_names(self) -> frozenset[str]:
        """Get set of placeholder ids."""
        return self._variable_names

    def requires_variable(self, name: str) -> bool:
        """Check if message requires a specific value.

        Args:
            name: Placeholder id

        Returns:
            True if the placeholder is used anywhere in the message
        """
        return name in self._variable_names

    def get_variable_types(self, name: str) -> frozenset[str | None]:
        """Get all types a placeholder is used with (None for untyped uses)."""
        return frozenset(v.type for v in self.variables if v.name == name)

    def get_selector_keys(self, name: str) -> frozenset[str]:
        """Get all selector keys used for a placeholder."""
        return frozenset(key for s in self.selectors if s.name == name for key in s.keys)


# ==============================================================================
# AST VISITOR FOR PLACEHOLDER EXTRACTION
# ==============================================================================


class IntrospectionVisitor:
    """AST walker that collects placeholders, selectors and tags.

    Depth Limiting:
        Hand-built ASTs skip the parser's nesting limit, so the walk
        enforces its own through DepthGuard.
    """

    __slots__ = (
        "_context",
        "_depth_guard",
        "has_numeric_references",
        "selectors",
        "tags",
        "variables",
    )

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        """Start with empty results.

        Args:
            max_depth: Maximum nesting depth (default: MAX_DEPTH).
        """
        self._depth_guard = DepthGuard(max_depth=max_depth)
        self._context = PlaceholderContext.MESSAGE
        self.variables: set[VariableInfo] = set()
        self.selectors: list[SelectorInfo] = []
        self.tags: set[str] = set()
        self.has_numeric_references = False

    def visit(self, nodes: Iterable[Node]) -> None:
        """Visit every node of a body."""
        for node in nodes:
            self._visit_node(node)

    def _visit_node(self, node: Node) -> None:
        match node:
            case str():
                pass  # No placeholders in text
            case Variable():
                self._visit_variable(node)
            case NumericReference():
                self.has_numeric_references = True
                self.variables.add(VariableInfo(node.id, node.type, self._context))
            case Tag():
                self.tags.add(node.name)
                if node.children:
                    self._visit_nested(node.children, PlaceholderContext.TAG)
            case _ as unreachable:
                assert_never(unreachable)

    def _visit_variable(self, node: Variable) -> None:
        self.variables.add(VariableInfo(node.id, node.type, self._context))
        if node.options is None:
            return

        self.selectors.append(SelectorInfo(node.id, node.type or "", tuple(node.options)))
        for body in node.options.values():
            self._visit_nested(body, PlaceholderContext.SUBMESSAGE)

    def _visit_nested(self, nodes: Iterable[Node], context: PlaceholderContext) -> None:
        old_context = self._context
        self._context = context
        with self._depth_guard:
            self.visit(nodes)
        self._context = old_context


# ==============================================================================
# PUBLIC API
# ==============================================================================


def introspect_message(message: Iterable[Node]) -> MessageIntrospection:
    """Introspect a parsed message and extract all metadata.

    This is the primary entry point for message introspection.

    Args:
        message: Node list as returned by the parser

    Returns:
        Complete introspection result with placeholders, selectors and tags

    Raises:
        TypeError: If message is a string instead of a parsed node list

    Example:
        >>> from icuparse import parse
        >>> info = introspect_message(parse("{n, plural, one {# item} other {<b>#</b> items}}"))
        >>> sorted(info.get_selector_keys("n"))
        ['one', 'other']
        >>> sorted(info.tags)
        ['b']
    """
    # A str is iterable and would silently introspect as nothing
    if isinstance(message, str):
        msg = "Expected a parsed message, got str; call parse() first"
        raise TypeError(msg)

    visitor = IntrospectionVisitor()
    visitor.visit(message)

    variables_fs = frozenset(visitor.variables)
    return MessageIntrospection(
        variables=variables_fs,
        selectors=tuple(visitor.selectors),
        tags=frozenset(visitor.tags),
        has_numeric_references=visitor.has_numeric_references,
        _variable_names=frozenset(v.name for v in variables_fs),
    )


def extract_variables(message: Iterable[Node]) -> frozenset[str]:
    """Extract placeholder ids from a parsed message (simplified API).

    Example:
        >>> from icuparse import parse
        >>> sorted(extract_variables(parse("{a} and {b, number}")))
        ['a', 'b']
    """
    return introspect_message(message).get_variable_names()
