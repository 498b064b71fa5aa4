"""Introspection capabilities for parsed messages.

Message Introspection (icuparse.introspection.message):
   - Placeholder extraction with types and context
   - Selector keys of select/plural-like placeholders
   - Tag names and ``#`` usage

Python 3.13+.
"""

from .message import (
    MessageIntrospection,
    SelectorInfo,
    VariableInfo,
    extract_variables,
    introspect_message,
)

__all__ = [
    "MessageIntrospection",
    "SelectorInfo",
    "VariableInfo",
    "extract_variables",
    "introspect_message",
]
