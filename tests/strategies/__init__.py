"""Hypothesis strategies for icuparse property-based testing.

Usage:
    from tests.strategies import message_asts, plain_texts
"""

from .messages import (
    FORMATS,
    SELECTORS,
    identifiers,
    message_asts,
    plain_texts,
    simple_variables,
    special_texts,
    submessage_variables,
    tag_names,
)

__all__ = [
    "FORMATS",
    "SELECTORS",
    "identifiers",
    "message_asts",
    "plain_texts",
    "simple_variables",
    "special_texts",
    "submessage_variables",
    "tag_names",
]
